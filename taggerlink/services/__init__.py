"""
TaggerLink services.

Classification, presentation and page scanning for tag previews.
"""

from taggerlink.services.card_links import (
    InvalidCardLinkError,
    find_card_links,
    lookup_key_from_card_url,
    tagger_card_url,
)
from taggerlink.services.classifier import (
    MALFORMED_PAYLOAD_ERRORS,
    classify,
    classify_relationships,
    classify_tags,
)
from taggerlink.services.presenter import (
    assemble,
    horizontal_alignment,
    present,
    render_preview_html,
    render_preview_text,
    sort_entries,
    vertical_offset,
)

__all__ = [
    # Page scanning
    "InvalidCardLinkError",
    "find_card_links",
    "lookup_key_from_card_url",
    "tagger_card_url",
    # Classification
    "MALFORMED_PAYLOAD_ERRORS",
    "classify",
    "classify_relationships",
    "classify_tags",
    # Presentation
    "assemble",
    "horizontal_alignment",
    "present",
    "render_preview_html",
    "render_preview_text",
    "sort_entries",
    "vertical_offset",
]
