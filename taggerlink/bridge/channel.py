"""
Tagger channel setup.

The tagger frame is created lazily the first time anything needs it and
then lives for the rest of the process. ChannelSetup owns the single setup
task: every caller awaits the same task, so the frame is created and the
ready listener registered exactly once no matter how many callers race.

A failed setup stays failed. There is no retry; reset() exists so tests can
start from a clean slate.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from taggerlink.bridge.bus import MessageBus, Reply
from taggerlink.bridge.bus import bus as default_bus
from taggerlink.config import settings
from taggerlink.constants import BusEvents

logger = logging.getLogger(__name__)

FrameFactory = Callable[[str, str, MessageBus], Awaitable[Any]]


async def _default_frame_factory(frame_id: str, src: str, bus: MessageBus) -> Any:
    # Imported lazily: the frame pulls in the HTTP client stack
    from taggerlink.tagger.frame import create_frame

    return await create_frame(frame_id, src, bus)


class ChannelSetup:
    """Lazily created, memoized connection to the tagger frame."""

    def __init__(
        self,
        bus: MessageBus | None = None,
        frame_factory: FrameFactory | None = None,
        frame_id: str | None = None,
        src: str | None = None,
    ) -> None:
        self.bus = bus or default_bus
        self.frame_factory = frame_factory or _default_frame_factory
        self.frame_id = frame_id or settings.tagger_frame_id
        self.src = src or settings.tagger_origin
        self._setup: asyncio.Future[None] | None = None

    @property
    def started(self) -> bool:
        return self._setup is not None

    def ensure(self) -> asyncio.Future[None]:
        """
        Start channel setup if needed and return the shared setup future.

        Must be called from a running event loop.
        """
        if self._setup is None:
            logger.info("Setting up tagger channel %s -> %s", self.frame_id, self.src)
            self._setup = asyncio.ensure_future(self._connect())
        return self._setup

    def reset(self) -> None:
        """Forget the memoized setup. Test harnesses only."""
        self._setup = None

    async def _connect(self) -> None:
        loop = asyncio.get_running_loop()
        ready: asyncio.Future[None] = loop.create_future()

        def on_ready(_data: Any, _reply: Reply) -> None:
            if not ready.done():
                ready.set_result(None)

        self.bus.on(BusEvents.TAGGER_READY, on_ready)
        try:
            await self.frame_factory(self.frame_id, self.src, self.bus)
            await ready
        finally:
            self.bus.off(BusEvents.TAGGER_READY, on_ready)
        logger.info("Tagger channel %s ready", self.frame_id)


tagger_channel = ChannelSetup()


async def ensure_channel() -> None:
    """Wait until the process-wide tagger channel is ready."""
    await tagger_channel.ensure()


def reset_channel() -> None:
    """Clear the process-wide channel state. Test harnesses only."""
    tagger_channel.reset()
