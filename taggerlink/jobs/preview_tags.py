"""
Print tag previews for Scryfall card URLs.

Usage:
    python -m taggerlink.jobs.preview_tags https://scryfall.com/card/dom/123/name [...]
"""

import argparse
import asyncio
import logging
import sys

from taggerlink.bridge.errors import TaggerBridgeError
from taggerlink.bridge.requests import request_tags
from taggerlink.config import settings
from taggerlink.services.card_links import (
    InvalidCardLinkError,
    lookup_key_from_card_url,
    tagger_card_url,
)
from taggerlink.services.classifier import MALFORMED_PAYLOAD_ERRORS
from taggerlink.services.presenter import assemble, render_preview_text
from taggerlink.tagger.frame import close_frames

logger = logging.getLogger(__name__)


async def preview_card(card_url: str, max_visible: int) -> str:
    """
    Build the text preview for one card.

    A payload that cannot be classified prints the "no tags" placeholder.

    Raises:
        InvalidCardLinkError: If card_url is not a card page
        TaggerBridgeError: If the lookup failed
    """
    key = lookup_key_from_card_url(card_url)
    try:
        tags = await request_tags(key)
        summary = assemble(tags, max_visible)
    except MALFORMED_PAYLOAD_ERRORS as e:
        logger.warning("Malformed tagger payload for %s: %r", card_url, e)
        summary = None

    return f"{tagger_card_url(key, settings.tagger_origin)}\n{render_preview_text(summary)}"


async def run_previews(card_urls: list[str], max_visible: int) -> int:
    """
    Print previews for each card URL.

    URLs that are not card pages are logged and skipped.

    Returns:
        Number of cards whose lookup failed.
    """
    failures = 0

    try:
        for card_url in card_urls:
            try:
                print(await preview_card(card_url, max_visible))
            except InvalidCardLinkError as e:
                logger.warning("Skipping %s: %s", card_url, e)
            except TaggerBridgeError as e:
                logger.error("Lookup failed for %s: %s", card_url, e)
                failures += 1
    finally:
        await close_frames()

    return failures


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Preview tagger tags for Scryfall cards")
    parser.add_argument("card_urls", nargs="+", help="Scryfall card page URLs")
    parser.add_argument(
        "--max-visible",
        type=int,
        default=settings.preview_max_visible,
        help="Entries shown per menu before truncating",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    failures = asyncio.run(run_previews(args.card_urls, args.max_visible))
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
