"""Errors raised by the dispatcher and stores.

Every error here signals programmer misuse. None of them are caught inside
miniflux; they surface at the call that caused them.
"""

from __future__ import annotations


class MinifluxError(Exception):
    """Base class for all miniflux errors."""


class ReentrantDispatchError(MinifluxError, RuntimeError):
    """dispatch() was called while a dispatch cycle was already running."""

    def __init__(self) -> None:
        super().__init__("Dispatcher.dispatch(...): cannot dispatch in the middle of a dispatch")


class NotDispatchingError(MinifluxError, RuntimeError):
    """wait_for() was called outside of a dispatch cycle."""

    def __init__(self) -> None:
        super().__init__("Dispatcher.wait_for(...): must be invoked while dispatching")


class CircularDependencyError(MinifluxError, RuntimeError):
    """wait_for() targeted a listener that is still running."""

    def __init__(self, listener_id: object) -> None:
        self.listener_id = listener_id
        super().__init__(
            f"Dispatcher.wait_for(...): circular dependency detected while waiting for `{listener_id}`"
        )


class UnknownListenerError(MinifluxError, LookupError):
    """wait_for() targeted an id that no callback was registered under."""

    def __init__(self, listener_id: object) -> None:
        self.listener_id = listener_id
        super().__init__(
            f"Dispatcher.wait_for(...): `{listener_id}` does not map to a registered callback"
        )


class MissingDispatcherError(MinifluxError, TypeError):
    """A Store was constructed without a dispatcher exposing register()."""

    def __init__(self) -> None:
        super().__init__("Store(...): required option `dispatcher` is missing")


class InvalidPayloadError(MinifluxError, ValueError):
    """A payload lacks its source, its action body, or the action name."""
