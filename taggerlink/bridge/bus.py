"""
In-process message bus between the host side and the tagger frame.

Handlers are registered per event name and receive ``(data, reply)``.
``reply`` is one-shot: the requester only ever sees its first invocation.
Coroutine handlers run as tasks on the current event loop.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

Reply = Callable[[Any], None]
Handler = Callable[[Any, Reply], Any]


def _event_name(event: str) -> str:
    if isinstance(event, Enum):
        return str(event.value)
    return event


def _noop(_payload: Any = None) -> None:
    pass


def one_shot(reply: Reply | None) -> Reply:
    """Wrap a reply callable so only its first call goes through."""
    if reply is None:
        return _noop

    called = False

    def wrapper(payload: Any = None) -> None:
        nonlocal called
        if called:
            logger.debug("Ignoring repeated reply")
            return
        called = True
        reply(payload)

    return wrapper


class MessageBus:
    """Named-event bus with fire-and-forget delivery."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}
        self._tasks: set[asyncio.Task[Any]] = set()

    def on(self, event: str, handler: Handler) -> None:
        """Register a handler for an event."""
        self._handlers.setdefault(_event_name(event), []).append(handler)

    def off(self, event: str, handler: Handler) -> None:
        """Unregister a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(_event_name(event), [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, data: Any = None, reply: Reply | None = None) -> bool:
        """
        Deliver an event to every registered handler.

        Args:
            event: Event name
            data: Message payload
            reply: Callable the receiving side invokes with its response

        Returns:
            True if at least one handler received the event.
        """
        handlers = list(self._handlers.get(_event_name(event), []))
        if not handlers:
            logger.debug("No handlers for %s", event)
            return False

        respond = one_shot(reply)
        for handler in handlers:
            result = handler(data, respond)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._task_done)

        return True

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return

        error = task.exception()
        if error is not None:
            logger.error("Bus handler failed: %r", error, exc_info=error)

    def clear(self) -> None:
        """Drop all handlers. For test isolation."""
        self._handlers.clear()
        self._tasks.clear()


bus = MessageBus()
