"""Miniflux: a small Flux-style dispatcher and store for Python."""

from importlib.metadata import version as _version

__version__ = _version("miniflux")

from miniflux.errors import (
    MinifluxError,
    ReentrantDispatchError,
    NotDispatchingError,
    CircularDependencyError,
    UnknownListenerError,
    MissingDispatcherError,
    InvalidPayloadError,
)
from miniflux.payload import Action, Payload, as_payload
from miniflux.dispatcher import Dispatcher
from miniflux.store import Store, callback_name, handles
from miniflux.constants import Constants, enum

__all__ = [
    "Dispatcher",
    "Store",
    "Action",
    "Payload",
    "as_payload",
    "callback_name",
    "handles",
    "enum",
    "Constants",
    "MinifluxError",
    "ReentrantDispatchError",
    "NotDispatchingError",
    "CircularDependencyError",
    "UnknownListenerError",
    "MissingDispatcherError",
    "InvalidPayloadError",
]
