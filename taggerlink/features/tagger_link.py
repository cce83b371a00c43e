"""
Tagger Link feature.

Adds a tagger button to every card in search results. With tag previews
enabled, hovering the button loads the card's tags through the tagger
channel and shows them in a small menu next to the button.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from html import escape

from taggerlink.bridge.bus import MessageBus
from taggerlink.bridge.channel import ChannelSetup, tagger_channel
from taggerlink.bridge.errors import TaggerBridgeError
from taggerlink.bridge.requests import request_tags
from taggerlink.config import settings
from taggerlink.constants import FeatureIds, FeatureSections
from taggerlink.db.storage import KeyValueStore
from taggerlink.features.feature import Feature, FeatureMetadata, SettingDefinition
from taggerlink.models.preview import Placement, PreviewSummary
from taggerlink.models.tagger import LookupKey, Symbol
from taggerlink.services.card_links import (
    InvalidCardLinkError,
    find_card_links,
    lookup_key_from_card_url,
    tagger_card_url,
)
from taggerlink.services.classifier import MALFORMED_PAYLOAD_ERRORS
from taggerlink.services.presenter import (
    assemble,
    horizontal_alignment,
    render_preview_html,
    vertical_offset,
)

logger = logging.getLogger(__name__)


@dataclass
class TagPreview:
    """
    Result of hovering a tagger button.

    Attributes:
        summary: Menus to show, None for the "no tags" placeholder
        placement: Where the preview opens
        inert: True when the lookup failed and nothing should be shown
    """

    summary: PreviewSummary | None
    placement: Placement
    inert: bool = False

    def render_html(self) -> str:
        if self.inert:
            return ""
        return render_preview_html(self.summary)


class PreviewTrigger:
    """
    Hover handler for one tagger button.

    The first hover starts the lookup; every later hover on the same
    button awaits that same lookup. The result is kept for the lifetime
    of the button.
    """

    def __init__(
        self,
        key: LookupKey,
        bus: MessageBus | None = None,
        channel: ChannelSetup | None = None,
        max_visible: int | None = None,
    ) -> None:
        self.key = key
        self.bus = bus
        self.channel = channel
        if max_visible is None:
            max_visible = settings.preview_max_visible
        if max_visible < 1:
            raise ValueError(f"max_visible must be at least 1, got {max_visible}")
        self.max_visible = max_visible
        self.placement = Placement()
        self._request: asyncio.Future[TagPreview] | None = None

    async def on_pointer_enter(self, pointer_x: float, page_width: float) -> TagPreview:
        """
        Handle a pointer entering the button.

        Args:
            pointer_x: Horizontal pointer position on the page
            page_width: Page width in the same units

        Returns:
            The preview for this button's card
        """
        self.placement.alignment = horizontal_alignment(pointer_x, page_width)

        if self._request is None:
            self._request = asyncio.ensure_future(self._load())

        return await self._request

    def place(self, rendered_height: float) -> Placement:
        """Set the vertical offset once the preview's height is known."""
        self.placement.offset_top = vertical_offset(rendered_height)
        return self.placement

    async def _load(self) -> TagPreview:
        try:
            tags = await request_tags(self.key, bus=self.bus, channel=self.channel)
        except TaggerBridgeError as e:
            logger.warning(
                "No tag preview for %s/%s: %s", self.key.set_code, self.key.number, e
            )
            return TagPreview(summary=None, placement=self.placement, inert=True)
        except MALFORMED_PAYLOAD_ERRORS as e:
            logger.warning(
                "Malformed tagger payload for %s/%s: %r",
                self.key.set_code,
                self.key.number,
                e,
            )
            return TagPreview(summary=None, placement=self.placement)

        return TagPreview(summary=assemble(tags, self.max_visible), placement=self.placement)


@dataclass
class TaggerButton:
    """A tagger button attached to one card in the results grid."""

    card_url: str
    key: LookupKey
    tagger_url: str
    preview: PreviewTrigger | None = field(default=None, repr=False)

    def render_html(self) -> str:
        return (
            f'<a href="{escape(self.tagger_url)}" '
            'class="tagger-link-button button-n primary icon-only subdued" '
            f'alt="Open in Tagger" data-symbol="{Symbol.TAGGER.value}"></a>'
        )


class TaggerLink(Feature):
    metadata = FeatureMetadata(
        id=FeatureIds.TAGGER_LINK.value,
        title="Tagger Link",
        section=FeatureSections.SEARCH_RESULTS.value,
        description="Provide a button to card's tagger page from search results.",
        future_feature=False,
    )

    settings_defaults = {
        "enabled": True,
        "preview_tags": True,
    }

    setting_definitions = [
        SettingDefinition(
            id="preview_tags",
            label="Show preview of tags for card on hover.",
            input="checkbox",
        ),
    ]

    def __init__(
        self,
        bus: MessageBus | None = None,
        channel: ChannelSetup | None = None,
        origin: str | None = None,
    ) -> None:
        self.show_preview = False
        self.bus = bus
        self.channel = channel or tagger_channel
        self.origin = origin or settings.tagger_origin
        self.buttons: list[TaggerButton] = []

    async def run(self, store: KeyValueStore, page_html: str) -> None:
        """
        Attach buttons to every card on the page.

        With previews on, buttons are only attached once the tagger
        channel is ready.
        """
        feature_settings = await self.get_settings(store)
        self.show_preview = bool(feature_settings["preview_tags"])

        if self.show_preview:
            await self.channel.ensure()

        self.setup_buttons(page_html)

    def setup_buttons(self, page_html: str) -> list[TaggerButton]:
        """Make one button per card link found on the page."""
        for card_url in find_card_links(page_html):
            try:
                self.buttons.append(self.make_button(card_url))
            except InvalidCardLinkError as e:
                logger.debug("Skipping card link: %s", e)

        logger.info("Attached %d tagger buttons", len(self.buttons))
        return self.buttons

    def make_button(self, card_url: str) -> TaggerButton:
        """
        Build the button for a card link.

        Raises:
            InvalidCardLinkError: If card_url is not a Scryfall card page
        """
        key = lookup_key_from_card_url(card_url)
        preview = None
        if self.show_preview:
            preview = PreviewTrigger(key, bus=self.bus, channel=self.channel)

        return TaggerButton(
            card_url=card_url,
            key=key,
            tagger_url=tagger_card_url(key, self.origin),
            preview=preview,
        )
