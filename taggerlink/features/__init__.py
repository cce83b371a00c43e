from taggerlink.features.feature import (
    Feature,
    FeatureMetadata,
    SettingDefinition,
    SettingValue,
    UnknownSettingError,
)
from taggerlink.features.future_opt_in import FutureFeatureOptIn
from taggerlink.features.tagger_link import (
    PreviewTrigger,
    TaggerButton,
    TaggerLink,
    TagPreview,
)

FEATURES: dict[str, type[Feature]] = {
    feature.metadata.id: feature for feature in (FutureFeatureOptIn, TaggerLink)
}

__all__ = [
    "FEATURES",
    "Feature",
    "FeatureMetadata",
    "FutureFeatureOptIn",
    "PreviewTrigger",
    "SettingDefinition",
    "SettingValue",
    "TagPreview",
    "TaggerButton",
    "TaggerLink",
    "UnknownSettingError",
]
