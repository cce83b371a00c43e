"""
Tagger data model.

Raw payload shapes returned by the tagger service, the enumerations the
classifier dispatches on, and the classified entries handed to the presenter.

The tagger vocabulary is owned by the remote service and grows over time,
so every enum parsed from a payload string has a ``parse()`` that returns
None for values this codebase does not know yet.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TypedDict

# =============================================================================
# RAW PAYLOAD
# =============================================================================


class TaggerTag(TypedDict):
    name: str
    type: str


class Tagging(TypedDict):
    tag: TaggerTag


class TaggerRelationship(TypedDict):
    """A stored edge between two tagged entities."""

    foreignKey: str  # "illustrationId" | "oracleId"
    relatedId: str
    contentName: str
    relatedName: str
    classifier: str
    classifierInverse: str


class TaggerPayload(TypedDict, total=False):
    """Card lookup response from the tagger service."""

    illustrationId: str
    oracleId: str
    taggings: list[Tagging]
    relationships: list[TaggerRelationship]


@dataclass(frozen=True, slots=True)
class LookupKey:
    """
    Identifies a card printing on the tagger service.

    Attributes:
        set_code: Set code as it appears in Scryfall URLs (e.g., "dom")
        number: Collector number (e.g., "123", "45a")
    """

    set_code: str
    number: str

    def as_message(self) -> dict[str, str]:
        """Wire form sent across the bus."""
        return {"set": self.set_code, "number": self.number}


# =============================================================================
# ENUMERATIONS
# =============================================================================


class TagType(str, Enum):
    ILLUSTRATION_TAG = "ILLUSTRATION_TAG"
    ORACLE_CARD_TAG = "ORACLE_CARD_TAG"
    PRINTING_TAG = "PRINTING_TAG"

    @classmethod
    def parse(cls, value: str | None) -> "TagType | None":
        try:
            return cls(value)
        except ValueError:
            return None


class RelationshipType(str, Enum):
    """Relationship classifiers. Most come in inverse pairs."""

    BETTER_THAN = "BETTER_THAN"
    COLORSHIFTED = "COLORSHIFTED"
    COMES_AFTER = "COMES_AFTER"
    COMES_BEFORE = "COMES_BEFORE"
    DEPICTED_IN = "DEPICTED_IN"
    DEPICTS = "DEPICTS"
    MIRRORS = "MIRRORS"
    REFERENCED_BY = "REFERENCED_BY"
    REFERENCES_TO = "REFERENCES_TO"
    RELATED_TO = "RELATED_TO"
    SIMILAR_TO = "SIMILAR_TO"
    WITHOUT_BODY = "WITHOUT_BODY"
    WITH_BODY = "WITH_BODY"
    WORSE_THAN = "WORSE_THAN"

    @classmethod
    def parse(cls, value: str | None) -> "RelationshipType | None":
        try:
            return cls(value)
        except ValueError:
            return None


class TagGroup(str, Enum):
    """Intermediate grouping of taggings before bucket assembly."""

    ART = "art"
    ORACLE = "oracle"
    PRINT = "print"


class Bucket(str, Enum):
    """Output groups shown in the preview."""

    ART = "art"
    ORACLE = "oracle"


class Orientation(str, Enum):
    """Icon adjustment that shows which way a relationship points."""

    NONE = "none"
    FLIPPED = "flipped"  # upside down
    REVERSED = "reversed"  # mirrored horizontally


class Symbol(str, Enum):
    """Icon identifiers. The icon assets themselves live in the frontend."""

    TAGGER = "tagger"
    ILLUSTRATION = "illustration"
    CARD = "card"
    PRINTING = "printing"
    CREATURE_BODY = "creature-body"
    DEPICTS = "depicts"
    SEEN_BEFORE = "seen-before"
    BETTER_THAN = "better-than"
    COLORSHIFTED = "colorshifted"
    MIRRORS = "mirrors"
    RELATED_TO = "related-to"
    SIMILAR_TO = "similar-to"


# =============================================================================
# CLASSIFIED OUTPUT
# =============================================================================

_ORIENTATION_CLASSES: dict[Orientation, str] = {
    Orientation.NONE: "",
    Orientation.FLIPPED: "icon-upside-down",
    Orientation.REVERSED: "icon-flipped",
}


@dataclass(frozen=True, slots=True)
class ClassifiedEntry:
    """
    One line of the preview.

    Attributes:
        name: Display name (tag name or relationship label)
        symbol: Icon identifier, empty string when the type has no icon
        is_tag: True for taggings, False for relationships
        orientation: Icon adjustment for relationship direction
        type: Resolved tag type or relationship classifier
    """

    name: str
    symbol: str
    is_tag: bool
    orientation: Orientation = Orientation.NONE
    type: str = ""

    @property
    def css_class(self) -> str:
        return _ORIENTATION_CLASSES[self.orientation]


@dataclass
class ClassifiedTags:
    """Both buckets produced for a single lookup."""

    art: list[ClassifiedEntry] = field(default_factory=list)
    oracle: list[ClassifiedEntry] = field(default_factory=list)

    def bucket(self, bucket: Bucket) -> list[ClassifiedEntry]:
        if bucket is Bucket.ART:
            return self.art
        return self.oracle

    @property
    def is_empty(self) -> bool:
        return not self.art and not self.oracle
