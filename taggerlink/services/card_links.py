"""
Scryfall card links.

Extracts lookup keys from card page URLs and finds card links in
search-result page HTML.

Note: HTML is scanned with regular expressions. Only the card grid anchors
are of interest, and they are stable across Scryfall result pages.
"""

import re
from html import unescape

from taggerlink.constants import SCRYFALL_CARD_PREFIX
from taggerlink.models.tagger import LookupKey

CARD_LINK_CLASS = "card-grid-item-card"

_ANCHOR_PATTERN = re.compile(r"<a\b([^>]*)>", re.IGNORECASE)
_ATTRIBUTE_PATTERN = re.compile(r"""([\w-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


class InvalidCardLinkError(ValueError):
    """Raised when a URL is not a Scryfall card page."""

    pass


def lookup_key_from_card_url(url: str) -> LookupKey:
    """
    Get the tagger lookup key from a Scryfall card URL.

    Args:
        url: Card page URL, e.g. https://scryfall.com/card/dom/123/card-name

    Returns:
        LookupKey with the set code and collector number

    Raises:
        InvalidCardLinkError: If the URL is not a card page
    """
    if not url.startswith(SCRYFALL_CARD_PREFIX):
        raise InvalidCardLinkError(f"Not a Scryfall card URL: {url}")

    parts = url[len(SCRYFALL_CARD_PREFIX) :].split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise InvalidCardLinkError(f"Card URL is missing set or number: {url}")

    return LookupKey(set_code=parts[0], number=parts[1])


def tagger_card_url(key: LookupKey, origin: str) -> str:
    """Tagger page for a card printing."""
    return f"{origin.rstrip('/')}/card/{key.set_code}/{key.number}"


def _attributes(tag_body: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for match in _ATTRIBUTE_PATTERN.finditer(tag_body):
        name, double_quoted, single_quoted = match.groups()
        value = double_quoted if double_quoted is not None else single_quoted
        attrs.setdefault(name.lower(), unescape(value))
    return attrs


def find_card_links(html: str) -> list[str]:
    """
    Find card links in a search results page.

    Args:
        html: Raw page HTML

    Returns:
        href of every card grid anchor, in document order
    """
    links: list[str] = []

    for match in _ANCHOR_PATTERN.finditer(html):
        attrs = _attributes(match.group(1))
        classes = attrs.get("class", "").split()
        href = attrs.get("href")
        if CARD_LINK_CLASS in classes and href:
            links.append(href)

    return links
