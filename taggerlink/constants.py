"""
Shared identifiers for the bus, the feature registry and the preview layout.
"""

from enum import Enum


class BusEvents(str, Enum):
    """Events exchanged with the tagger frame."""

    TAGGER_READY = "TAGGER_READY"
    TAGGER_TAGS_REQUEST = "TAGGER_TAGS_REQUEST"


class FeatureIds(str, Enum):
    TAGGER_LINK = "tagger-link"
    FUTURE_FEATURE_OPT_IN = "future-opt-in"


class FeatureSections(str, Enum):
    SEARCH_RESULTS = "search-results"
    EXPERIMENTAL = "experimental"


# =============================================================================
# PREVIEW LAYOUT
# =============================================================================

# Entries rendered per menu before the overflow label takes over
MAX_VISIBLE_ENTRIES = 8

# Pointer past this fraction of the page width opens the preview to the left
LEFT_ALIGN_THRESHOLD = 0.55

# Preview is lifted by a fraction of its own rendered height
VERTICAL_OFFSET_DIVISOR = 3.75

NO_TAGS_MESSAGE = "No tags found. Add some!"

SCRYFALL_CARD_PREFIX = "https://scryfall.com/card/"
