"""
Tag lookups over the tagger channel.

One call sends exactly one TAGGER_TAGS_REQUEST and resolves once, with the
classified buckets built from the frame's reply. Deduplicating repeated
hovers is the caller's job (see PreviewTrigger).
"""

import asyncio
import logging
from typing import Any

from taggerlink.bridge.bus import MessageBus
from taggerlink.bridge.bus import bus as default_bus
from taggerlink.bridge.channel import ChannelSetup, tagger_channel
from taggerlink.bridge.errors import TaggerTimeoutError
from taggerlink.config import settings
from taggerlink.constants import BusEvents
from taggerlink.models.tagger import ClassifiedTags, LookupKey, TaggerPayload
from taggerlink.services.classifier import classify

logger = logging.getLogger(__name__)


async def request_tags(
    key: LookupKey,
    *,
    bus: MessageBus | None = None,
    channel: ChannelSetup | None = None,
) -> ClassifiedTags:
    """
    Look up tags for a card printing through the tagger frame.

    Args:
        key: Card printing to look up
        bus: Bus to send the request on. Defaults to the process-wide bus
        channel: Channel to wait for. Defaults to the process-wide channel

    Returns:
        Classified art and oracle buckets.

    Raises:
        TaggerBridgeError: If channel setup failed
        TaggerTimeoutError: If the frame did not answer within
            settings.tagger_request_timeout seconds
    """
    bus = bus or default_bus
    channel = channel or tagger_channel

    await channel.ensure()

    loop = asyncio.get_running_loop()
    response: asyncio.Future[TaggerPayload] = loop.create_future()

    def reply(payload: Any) -> None:
        if not response.done():
            response.set_result(payload)

    logger.debug("Requesting tags for %s/%s", key.set_code, key.number)
    bus.emit(BusEvents.TAGGER_TAGS_REQUEST, key.as_message(), reply)

    timeout = settings.tagger_request_timeout
    if timeout is None:
        payload = await response
    else:
        try:
            payload = await asyncio.wait_for(response, timeout)
        except asyncio.TimeoutError as e:
            raise TaggerTimeoutError(
                f"Tagger did not answer lookup for {key.set_code}/{key.number} "
                f"within {timeout}s",
                timeout,
            ) from e

    return classify(payload)
