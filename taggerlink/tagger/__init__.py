from taggerlink.tagger.client import FETCH_CARD_QUERY, TaggerClient, extract_csrf_token
from taggerlink.tagger.frame import TaggerFrame, close_frames, create_frame, get_frame

__all__ = [
    "FETCH_CARD_QUERY",
    "TaggerClient",
    "TaggerFrame",
    "close_frames",
    "create_frame",
    "extract_csrf_token",
    "get_frame",
]
