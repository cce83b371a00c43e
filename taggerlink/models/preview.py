from dataclasses import dataclass, field
from enum import Enum

from taggerlink.models.tagger import Bucket, ClassifiedEntry


class Alignment(str, Enum):
    """Side of the trigger the preview opens on."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class TagMenu:
    """
    Render-ready contents of one bucket.

    Attributes:
        bucket: Which bucket the menu shows
        entries: Visible entries in display order
        overflow_label: "+ N more" when the bucket was truncated
    """

    bucket: Bucket
    entries: list[ClassifiedEntry] = field(default_factory=list)
    overflow_label: str | None = None


@dataclass(frozen=True)
class PreviewSummary:
    """Menus for every non-empty bucket, art before oracle."""

    menus: list[TagMenu]


@dataclass
class Placement:
    """
    Where the preview sits relative to its trigger.

    offset_top stays None until the rendered height is known.
    """

    alignment: Alignment = Alignment.RIGHT
    offset_top: int | None = None
