"""Synchronous publish/subscribe event emitter.

Handlers are registered per event name and invoked in registration order
when the event is dispatched. Two meta-events report subscription changes:
`newListener` before a handler is added and `removeListener` after a handler
is taken out of a multi-handler set. An exception raised by a handler is
re-dispatched as an `error` event when somebody listens for it; otherwise it
propagates to the caller of `dispatch`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Set, Union

from .config import get_default_max_handlers

logger = logging.getLogger("event_emitter.emitter")


Handler = Callable[..., Any]
# A single handler is stored bare, two or more as a list.
Handlers = Union[Handler, List[Handler]]

NEW_LISTENER = "newListener"
REMOVE_LISTENER = "removeListener"
ERROR = "error"


class OnceHandler:
    """Handler wrapper registered by `register_once`.

    The wrapper is bound to one emitter and one event. On its first call it
    removes itself from that emitter, then calls `listener`.
    """

    def __init__(self, emitter: "EventEmitter", event: str, listener: Handler) -> None:
        self.emitter = emitter
        self.event = event
        self.listener = listener

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.emitter.deregister(self.event, self)
        return self.listener(*args, **kwargs)

    def bind(self, emitter: "EventEmitter") -> "OnceHandler":
        """Return an equivalent wrapper that removes itself from `emitter`."""
        return type(self)(emitter, self.event, self.listener)

    def __repr__(self) -> str:
        return f"OnceHandler({self.event!r}, {self.listener!r})"


def _matches(candidate: Handler, handler: Handler) -> bool:
    if candidate is handler:
        return True
    return isinstance(candidate, OnceHandler) and candidate.listener is handler


class EventEmitter:
    """Event emitter supporting registration, removal, and dispatch.

    Handlers are called with the positional and keyword arguments given to
    `dispatch`. A warning is logged once per handler-set when more than
    `max_handlers` handlers are registered for the same event, which usually
    points at a forgotten `deregister`.
    """

    def __init__(self) -> None:
        self._events: Dict[str, Handlers] = {}
        self._max_handlers: int = get_default_max_handlers()
        self._warned: Set[str] = set()

    # ===== Registration =====
    def register(self, event: str, handler: Handler) -> "EventEmitter":
        """Append a handler to the end of the handler list of an event.

        `newListener` is dispatched with `(event, handler)` before the
        handler is added.

        Parameters:
            event (str): The event name.
            handler (Handler): Callable invoked on dispatch.

        Returns:
            EventEmitter: This emitter, for chaining.

        Raises:
            TypeError: If `handler` is not callable.
        """
        if not callable(handler):
            raise TypeError("handler must be callable")
        self.dispatch(NEW_LISTENER, event, handler)

        current = self._events.get(event)
        if current is None:
            self._events[event] = handler
            size = 1
        elif isinstance(current, list):
            current.append(handler)
            size = len(current)
        else:
            self._events[event] = [current, handler]
            size = 2

        if self._max_handlers > 0 and size > self._max_handlers and event not in self._warned:
            logger.warning(
                "possible EventEmitter memory leak detected. %d %r handlers added. "
                "Use set_max_handlers() to increase limit.",
                size,
                event,
            )
            self._warned.add(event)
        return self

    on = register
    add_listener = register

    def register_once(self, event: str, handler: Handler) -> "EventEmitter":
        """Register a handler that runs at most once.

        The wrapper removes itself before calling `handler`, so a handler
        dispatching the same event again cannot be invoked twice.

        Parameters:
            event (str): The event name.
            handler (Handler): Callable invoked on the next dispatch only.

        Returns:
            EventEmitter: This emitter, for chaining.

        Raises:
            TypeError: If `handler` is not callable.
        """
        if not callable(handler):
            raise TypeError("handler must be callable")
        return self.register(event, OnceHandler(self, event, handler))

    once = register_once

    # ===== Removal =====
    def deregister(self, event: str, handler: Handler) -> "EventEmitter":
        """Remove the first registration of a handler.

        A handler registered through `register_once` can be removed by passing
        the original handler. `removeListener` is dispatched only when the
        handler was taken out of a multi-handler set.

        Parameters:
            event (str): The event name.
            handler (Handler): The handler to remove.

        Returns:
            EventEmitter: This emitter, for chaining.
        """
        current = self._events.get(event)
        if current is None:
            return self

        if not isinstance(current, list):
            if _matches(current, handler):
                self._drop(event)
            return self

        for i, candidate in enumerate(current):
            if _matches(candidate, handler):
                del current[i]
                if len(current) == 1:
                    self._events[event] = current[0]
                self.dispatch(REMOVE_LISTENER, event, handler)
                break
        return self

    off = deregister
    remove_listener = deregister

    def deregister_all(self, event: Optional[str] = None) -> "EventEmitter":
        """Remove every handler of an event, or of all events.

        No `removeListener` event is dispatched on this path.

        Parameters:
            event (Optional[str]): The event name. When omitted, every event
                is cleared.

        Returns:
            EventEmitter: This emitter, for chaining.
        """
        if event is None:
            names = list(self._events)
            for name in names:
                self.deregister_all(name)
            logger.debug("cleared handlers of %d events", len(names))
            return self
        self._drop(event)
        return self

    remove_all_listeners = deregister_all

    def _drop(self, event: str) -> None:
        self._events.pop(event, None)
        self._warned.discard(event)

    # ===== Threshold =====
    def set_max_handlers(self, n: int) -> None:
        """Set the leak warning threshold; 0 disables the warning."""
        self._max_handlers = n

    set_max_listeners = set_max_handlers

    def get_max_handlers(self) -> int:
        return self._max_handlers

    # ===== Dispatch =====
    def dispatch(self, event: str, /, *args: Any, **kwargs: Any) -> bool:
        """Call every handler of an event in registration order.

        Handlers added or removed while dispatching do not change the set of
        handlers called by this pass. When a handler raises and an `error`
        handler exists, the exception is dispatched as `error` and the pass
        goes on; otherwise the exception propagates and the remaining
        handlers are skipped.

        Parameters:
            event (str): The event name.
            *args (Any): Positional arguments passed to each handler.
            **kwargs (Any): Keyword arguments passed to each handler.

        Returns:
            bool: True if the event had handlers, False otherwise.

        Raises:
            Exception: Whatever a handler raised, when no `error` handler is
                registered.
        """
        if event not in self._events:
            return False
        handlers = self.list_handlers(event)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception as exc:
                if not self.list_handlers(ERROR):
                    raise
                logger.debug("routing %s raised by %r handler to error handlers", type(exc).__name__, event)
                self.dispatch(ERROR, exc)
        return True

    emit = dispatch

    # ===== Introspection =====
    def list_handlers(self, event: str) -> List[Handler]:
        """Return the handlers of an event in dispatch order.

        The list is a copy; an empty list is returned for unknown events.
        """
        current = self._events.get(event)
        if current is None:
            return []
        if isinstance(current, list):
            return list(current)
        return [current]

    listeners = list_handlers

    @staticmethod
    def count_handlers(emitter: "EventEmitter", event: str) -> int:
        """Return the number of handlers an emitter holds for an event."""
        return len(emitter.list_handlers(event))

    listener_count = count_handlers

    def event_names(self) -> List[str]:
        """List event names that currently have handlers."""
        return list(self._events)

    def __repr__(self) -> str:
        counts = ", ".join(f"{name}={len(self.list_handlers(name))}" for name in self._events)
        return f"{type(self).__name__}({counts})"
