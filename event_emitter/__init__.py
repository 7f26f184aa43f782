"""
Event Emitter - synchronous publish/subscribe for Python

This package provides an event emitter with named channels, one-shot
handlers, error routing through an `error` event, leak warnings for
oversized handler lists, and a clonable variant that duplicates its
subscriptions.
"""

from .emitter import EventEmitter
from .clonable import ClonableEventEmitter
from .clone import deep_clone
from .config import (
    DEFAULT_MAX_HANDLERS,
    EmitterConfig,
    configure,
    get_default_max_handlers,
    load_config,
    set_default_max_handlers,
)

__version__ = "0.1.0"

__all__ = [
    "EventEmitter",
    "ClonableEventEmitter",
    "deep_clone",
    "DEFAULT_MAX_HANDLERS",
    "EmitterConfig",
    "configure",
    "get_default_max_handlers",
    "load_config",
    "set_default_max_handlers",
]
