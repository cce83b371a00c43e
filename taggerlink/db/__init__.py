from taggerlink.db.database import get_session, get_store, init_db
from taggerlink.db.operations import get_value, set_value
from taggerlink.db.storage import KeyValueStore, SessionStore

__all__ = [
    "KeyValueStore",
    "SessionStore",
    "get_session",
    "get_store",
    "get_value",
    "init_db",
    "set_value",
]
