"""Dispatcher: the central hub every action flows through.

Listeners register a callback and get back an integer id. dispatch() runs
every callback once with the payload, in registration order. A callback can
call wait_for(ids) to force other listeners to run before it continues;
those listeners are then skipped by the outer pass.

Dispatch cycles never nest. The dispatcher is locked from the moment
dispatch() starts until it returns or raises, and it always unlocks, so a
cycle aborted by a listener error leaves the instance ready for the next one.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator

from miniflux.errors import (
    CircularDependencyError,
    NotDispatchingError,
    ReentrantDispatchError,
    UnknownListenerError,
)
from miniflux.payload import Payload

logger = logging.getLogger("miniflux.dispatcher")

Callback = Callable[[Any], None]


class Dispatcher:
    """Distributes payloads to registered callbacks, one cycle at a time.

    Usage:
        dispatcher = Dispatcher()
        first = dispatcher.register(lambda p: log.append("first"))

        def second(payload):
            dispatcher.wait_for([third])  # runs third now
            log.append("second")

        dispatcher.register(second)
        third = dispatcher.register(lambda p: log.append("third"))

        dispatcher.dispatch(Payload.of("VIEW", "ADD_TODO", title="milk"))
        # log == ["first", "third", "second"]
    """

    def __init__(self) -> None:
        self._callbacks: list[Callback] = []
        self._is_pending: list[bool] = []
        self._is_handled: list[bool] = []
        self._pending_payload: Any = None
        self._is_dispatching = False

    def __len__(self) -> int:
        return len(self._callbacks)

    @property
    def is_dispatching(self) -> bool:
        return self._is_dispatching

    @property
    def pending_payload(self) -> Any:
        """Payload of the cycle in flight, or None when idle."""
        return self._pending_payload

    # --- Public API ---

    def register(self, callback: Callback) -> int:
        """Register a callback for every future dispatch. Returns its id.

        Ids start at 0 and are never reused. Other listeners pass them to
        wait_for() to run this callback before themselves.
        """
        self._callbacks.append(callback)
        self._is_pending.append(False)
        self._is_handled.append(False)
        listener_id = len(self._callbacks) - 1
        logger.debug("Registered listener %d", listener_id)
        return listener_id

    def dispatch(self, payload: Any) -> None:
        """Run every registered callback once with payload.

        Raises ReentrantDispatchError if a cycle is already running.
        Errors from callbacks propagate after the dispatcher unlocks;
        callbacks not yet reached in that cycle do not run.
        """
        if self._is_dispatching:
            raise ReentrantDispatchError()

        with self._cycle(payload) as count:
            for listener_id in range(count):
                if self._is_pending[listener_id]:
                    continue
                try:
                    self._invoke(listener_id)
                except Exception:
                    logger.warning("Dispatch aborted while running listener %d", listener_id)
                    raise

    def dispatch_action(self, source: str, name: str, /, **fields: Any) -> None:
        """Build a Payload from its parts and dispatch it.

        Subclasses can layer source-specific helpers on top:

            class AppDispatcher(Dispatcher):
                def handle_view_action(self, name, /, **fields):
                    self.dispatch_action("VIEW", name, **fields)
        """
        self.dispatch(Payload.of(source, name, **fields))

    def wait_for(self, ids: Iterable[int]) -> None:
        """Run the given listeners now, unless they already ran this cycle.

        Only valid from inside a callback during dispatch(). Waiting on a
        listener that is still running (directly or through a chain of
        wait_for calls) is a cycle and raises CircularDependencyError.
        """
        if not self._is_dispatching:
            raise NotDispatchingError()

        for listener_id in ids:
            if not self._is_registered(listener_id):
                raise UnknownListenerError(listener_id)
            if self._is_pending[listener_id]:
                if not self._is_handled[listener_id]:
                    raise CircularDependencyError(listener_id)
                continue
            logger.debug("Listener %d pulled forward by wait_for", listener_id)
            self._invoke(listener_id)

    # --- Private API ---

    def _is_registered(self, listener_id: object) -> bool:
        return (
            isinstance(listener_id, int)
            and not isinstance(listener_id, bool)
            and 0 <= listener_id < len(self._callbacks)
        )

    def _invoke(self, listener_id: int) -> None:
        """Run one callback, tracking it as pending, then handled."""
        self._is_pending[listener_id] = True
        self._callbacks[listener_id](self._pending_payload)
        self._is_handled[listener_id] = True

    @contextmanager
    def _cycle(self, payload: Any) -> Iterator[int]:
        """Lock the dispatcher for one cycle. Yields the listener count."""
        count = len(self._callbacks)
        for listener_id in range(count):
            self._is_pending[listener_id] = False
            self._is_handled[listener_id] = False
        self._pending_payload = payload
        self._is_dispatching = True
        logger.debug("Dispatch started for %d listeners", count)
        try:
            yield count
        finally:
            self._pending_payload = None
            self._is_dispatching = False
            logger.debug("Dispatch finished")
