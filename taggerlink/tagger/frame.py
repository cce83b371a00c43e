"""
Tagger frame.

The frame is the far end of the tagger channel: it holds an authenticated
session on the tagger origin, answers TAGGER_TAGS_REQUEST messages from the
bus, and announces itself with TAGGER_READY once it is listening.
"""

import logging
from typing import Any

from taggerlink.bridge.bus import MessageBus, Reply
from taggerlink.bridge.channel import reset_channel
from taggerlink.bridge.errors import TaggerBridgeError
from taggerlink.constants import BusEvents
from taggerlink.tagger.client import TaggerClient

logger = logging.getLogger(__name__)

# Frames created in this process, by frame id
_frames: dict[str, "TaggerFrame"] = {}


class TaggerFrame:
    """Serves tag lookups for the host side of the bus."""

    def __init__(self, frame_id: str, bus: MessageBus, client: TaggerClient) -> None:
        self.frame_id = frame_id
        self.bus = bus
        self.client = client
        self.started = False

    def start(self) -> None:
        """Begin answering lookups and signal readiness. Idempotent."""
        if self.started:
            return

        self.bus.on(BusEvents.TAGGER_TAGS_REQUEST, self.handle_lookup)
        self.started = True
        logger.info("Tagger frame %s ready on %s", self.frame_id, self.client.origin)
        self.announce()

    def announce(self) -> None:
        """Emit TAGGER_READY for whoever is waiting on this frame."""
        self.bus.emit(BusEvents.TAGGER_READY)

    async def stop(self) -> None:
        """Stop answering lookups and close the HTTP session."""
        if self.started:
            self.bus.off(BusEvents.TAGGER_TAGS_REQUEST, self.handle_lookup)
            self.started = False
        await self.client.close()

    async def handle_lookup(self, data: Any, reply: Reply) -> None:
        """
        Answer one lookup request.

        Failed lookups are logged and left unanswered; the requester's
        timeout decides how long it waits.
        """
        set_code = data["set"]
        number = data["number"]

        try:
            payload = await self.client.fetch_card(set_code, number)
        except TaggerBridgeError as e:
            logger.warning("Tagger lookup for %s/%s failed: %s", set_code, number, e)
            return

        reply(payload)


async def create_frame(frame_id: str, src: str, bus: MessageBus) -> TaggerFrame:
    """
    Create, load and start the tagger frame for an origin.

    A frame id that already exists is reused and announces itself again,
    so a channel that was reset still sees TAGGER_READY.

    Args:
        frame_id: Identifier of the frame
        src: Tagger origin URL
        bus: Bus the frame listens and signals on

    Returns:
        The started frame

    Raises:
        FrameLoadError: If the origin cannot be loaded
    """
    existing = _frames.get(frame_id)
    if existing is not None:
        existing.announce()
        return existing

    client = TaggerClient(src)
    try:
        await client.load()
    except TaggerBridgeError:
        await client.close()
        raise

    frame = TaggerFrame(frame_id, bus, client)
    _frames[frame_id] = frame
    frame.start()

    return frame


def get_frame(frame_id: str) -> TaggerFrame | None:
    return _frames.get(frame_id)


async def close_frames() -> None:
    """
    Stop every frame and forget it.

    The process-wide channel is reset too, so the next lookup creates a
    fresh frame instead of waiting on a closed one.
    """
    for frame in list(_frames.values()):
        await frame.stop()
    _frames.clear()
    reset_channel()
