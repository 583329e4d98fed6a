"""Store: application state that listens to a Dispatcher.

A Store registers itself with one dispatcher when constructed. Every
dispatched payload reaches handle_callback(), which turns the action name
into a handler name ("ADD_TODO" -> "onAddTodo") and calls that handler if
the store defines one. Actions a store has no handler for are ignored.

Handlers are collected into a per-class table when the subclass is defined,
so lookup never goes through getattr on arbitrary strings.
"""

from __future__ import annotations

import logging
import re
from types import FunctionType
from typing import Any, Callable, ClassVar, Iterable, TypeVar

from miniflux.errors import MissingDispatcherError
from miniflux.payload import as_payload

logger = logging.getLogger("miniflux.store")

F = TypeVar("F", bound=Callable[..., Any])

_WORD_START = re.compile(r"(^|_)(.)")
_HANDLER_NAME = re.compile(r"^on[A-Z0-9]")


def callback_name(action_name: str) -> str:
    """Map a SCREAMING_SNAKE action name to its camel-case handler name.

        callback_name("ADD_TODO")          # "onAddTodo"
        callback_name("REMOVE_TODO_ITEM")  # "onRemoveTodoItem"
    """
    return "on" + _WORD_START.sub(lambda m: m.group(2).upper(), action_name.lower())


def handles(*action_names: str) -> Callable[[F], F]:
    """Decorator: file a method as the handler for the given actions.

    Lets a store keep Python method names instead of the onXxx convention:

        class TodoStore(Store):
            @handles("ADD_TODO")
            def add(self, action):
                ...
    """
    if not action_names:
        raise TypeError("handles(...) needs at least one action name")

    def decorator(fn: F) -> F:
        fn.__miniflux_actions__ = tuple(action_names)  # type: ignore[attr-defined]
        return fn

    return decorator


class Store:
    """Base class for stores. Subclass it and add onXxx handlers.

    Usage:
        class TodoStore(Store):
            def initialize(self):
                self.items = []

            def onAddTodo(self, action):
                self.items.append(action.title)

        todos = TodoStore(dispatcher)
        dispatcher.dispatch_action("VIEW", "ADD_TODO", title="milk")
        # todos.items == ["milk"]
    """

    # Only react to payloads from this source. None or "" accepts every source.
    source: ClassVar[str | None] = None

    _handlers: ClassVar[dict[str, Callable[..., Any]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        handlers = dict(cls._handlers)
        for attr, value in vars(cls).items():
            if value is None and _HANDLER_NAME.match(attr):
                # `onXxx = None` switches off an inherited handler.
                handlers.pop(attr, None)
                continue
            if not isinstance(value, (FunctionType, staticmethod, classmethod)):
                continue
            if _HANDLER_NAME.match(attr):
                handlers[attr] = value
            for action_name in getattr(value, "__miniflux_actions__", ()):
                handlers[callback_name(action_name)] = value
        cls._handlers = handlers

    def __init__(self, dispatcher: Any = None, **options: Any) -> None:
        if dispatcher is None or not callable(getattr(dispatcher, "register", None)):
            raise MissingDispatcherError()
        self._dispatcher = dispatcher
        self._dispatch_id: int = dispatcher.register(self.handle_callback)
        self.initialize(**options)

    @property
    def dispatcher(self) -> Any:
        return self._dispatcher

    @property
    def dispatch_id(self) -> int:
        """Id other listeners pass to wait_for() to run this store first."""
        return self._dispatch_id

    def initialize(self, **options: Any) -> None:
        """Hook for subclass setup. Receives the constructor's options."""

    def wait_for(self, ids: Iterable[int]) -> None:
        self._dispatcher.wait_for(ids)

    def handle_callback(self, payload: Any) -> None:
        """The callback registered with the dispatcher.

        Raises InvalidPayloadError for payloads without a source or action.
        """
        payload = as_payload(payload)

        if self.source and self.source != payload.source:
            logger.debug(
                "%s skipped %s from source %r",
                type(self).__name__, payload.action.name, payload.source,
            )
            return

        name = callback_name(payload.action.name)
        handler = self._handlers.get(name)
        if handler is None:
            logger.debug("%s has no handler %s", type(self).__name__, name)
            return
        handler.__get__(self, type(self))(payload.action)

    @classmethod
    def handler_names(cls) -> list[str]:
        """Names of the handlers this store type responds to."""
        return sorted(cls._handlers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dispatch_id={self._dispatch_id})"

