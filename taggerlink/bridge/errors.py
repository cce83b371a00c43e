"""Errors raised while talking to the tagger frame."""


class TaggerBridgeError(Exception):
    """Base class for tagger channel and lookup failures."""

    pass


class FrameLoadError(TaggerBridgeError):
    """Raised when the tagger frame cannot load its origin."""

    pass


class TaggerFetchError(TaggerBridgeError):
    """Raised when the tagger service rejects or fails a card lookup."""

    pass


class TaggerTimeoutError(TaggerBridgeError):
    """Raised when the tagger frame does not answer a lookup in time."""

    def __init__(self, message: str, timeout: float) -> None:
        super().__init__(message)
        self.timeout = timeout
