from taggerlink.models.preview import Alignment, Placement, PreviewSummary, TagMenu
from taggerlink.models.tagger import (
    Bucket,
    ClassifiedEntry,
    ClassifiedTags,
    LookupKey,
    Orientation,
    RelationshipType,
    Symbol,
    TaggerPayload,
    TaggerRelationship,
    TaggerTag,
    Tagging,
    TagGroup,
    TagType,
)

__all__ = [
    "Alignment",
    "Bucket",
    "ClassifiedEntry",
    "ClassifiedTags",
    "LookupKey",
    "Orientation",
    "Placement",
    "PreviewSummary",
    "RelationshipType",
    "Symbol",
    "TagGroup",
    "TagMenu",
    "TagType",
    "TaggerPayload",
    "TaggerRelationship",
    "TaggerTag",
    "Tagging",
]
