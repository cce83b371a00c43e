from taggerlink.api.features import router as features_router
from taggerlink.api.health import router as health_router
from taggerlink.api.tags import router as tags_router

__all__ = [
    "features_router",
    "health_router",
    "tags_router",
]
