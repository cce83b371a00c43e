from taggerlink.constants import FeatureIds, FeatureSections
from taggerlink.db.storage import KeyValueStore
from taggerlink.features.feature import Feature, FeatureMetadata


class FutureFeatureOptIn(Feature):
    """
    Global opt-in for experimental features.

    Its enabled flag is read by every other feature's first settings read.
    """

    metadata = FeatureMetadata(
        id=FeatureIds.FUTURE_FEATURE_OPT_IN.value,
        title="Future Feature Opt-in",
        section=FeatureSections.EXPERIMENTAL.value,
        description="Automatically enable experimental features as they are released.",
        future_feature=False,
    )

    settings_defaults = {
        "enabled": True,
    }

    async def run(self, store: KeyValueStore, page_html: str) -> None:
        # Settings-only feature
        return None
