from taggerlink.bridge.bus import MessageBus, bus
from taggerlink.bridge.channel import (
    ChannelSetup,
    ensure_channel,
    reset_channel,
    tagger_channel,
)
from taggerlink.bridge.errors import (
    FrameLoadError,
    TaggerBridgeError,
    TaggerFetchError,
    TaggerTimeoutError,
)
from taggerlink.bridge.requests import request_tags

__all__ = [
    "ChannelSetup",
    "FrameLoadError",
    "MessageBus",
    "TaggerBridgeError",
    "TaggerFetchError",
    "TaggerTimeoutError",
    "bus",
    "ensure_channel",
    "request_tags",
    "reset_channel",
    "tagger_channel",
]
