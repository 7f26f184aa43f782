"""Event emitter that can duplicate its subscriptions."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .clone import deep_clone
from .emitter import EventEmitter, OnceHandler


class ClonableEventEmitter(EventEmitter):
    """An `EventEmitter` with a `clone` method.

    The clone starts with the same handlers and threshold. Containers are
    copied, handlers are shared, so later registrations on either emitter
    stay local to it. Pending `register_once` wrappers are the exception:
    they remove themselves from their own emitter, so the clone gets fresh
    wrappers bound to it.
    """

    def clone(self) -> "ClonableEventEmitter":
        """Return a new emitter with a copy of this emitter's subscriptions."""
        new_one = type(self)()
        new_one._max_handlers = self._max_handlers
        new_one._events = deep_clone(self._events)
        new_one._warned = deep_clone(self._warned)
        new_one._rebind_once_handlers()
        return new_one

    def _rebind_once_handlers(self) -> None:
        rebound: Dict[int, OnceHandler] = {}

        def rebind(handler: Any) -> Any:
            if not isinstance(handler, OnceHandler) or handler.emitter is self:
                return handler
            key = id(handler)
            if key not in rebound:
                rebound[key] = handler.bind(self)
            return rebound[key]

        for event, current in self._events.items():
            if isinstance(current, list):
                current[:] = [rebind(h) for h in current]
            else:
                self._events[event] = rebind(current)

    def __copy__(self) -> "ClonableEventEmitter":
        return self.clone()

    def __deepcopy__(self, memo: Optional[Dict[int, Any]] = None) -> "ClonableEventEmitter":
        return self.clone()
