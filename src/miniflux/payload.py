"""Action payloads: what travels through one dispatch cycle.

A Payload pairs the source of an action (e.g. "VIEW" or "SERVER") with the
Action body itself. The Action carries its name under the "action" key plus
arbitrary data fields, and is read-only once built.

The Dispatcher never looks inside a payload. Stores normalise whatever they
receive through as_payload(), which also accepts plain dicts shaped like
{"source": ..., "action": {"action": ..., ...}}.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator

from miniflux.errors import InvalidPayloadError

NAME_KEY = "action"


class Action(Mapping[str, Any]):
    """Immutable action body: a name plus data fields.

    Usage:
        a = Action("ADD_TODO", title="milk")
        a.name       # "ADD_TODO"
        a["action"]  # "ADD_TODO"
        a.title      # "milk"
    """

    __slots__ = ("_name", "_fields")

    def __init__(self, name: str, /, **fields: Any) -> None:
        if NAME_KEY in fields:
            raise TypeError(f"Action(...): `{NAME_KEY}` is reserved for the action name")
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_fields", MappingProxyType(dict(fields)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Action:
        fields = dict(data)
        name = fields.pop(NAME_KEY, None)
        return cls(name, **fields)

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> Mapping[str, Any]:
        return self._fields

    def __getattr__(self, key: str) -> Any:
        # Only reached when normal lookup fails, i.e. for data fields.
        if key.startswith("_"):
            raise AttributeError(key)
        try:
            return self._fields[key]
        except KeyError:
            raise AttributeError(key) from None

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError("Action is immutable")

    def __delattr__(self, key: str) -> None:
        raise AttributeError("Action is immutable")

    # --- Mapping protocol ---

    def __getitem__(self, key: str) -> Any:
        if key == NAME_KEY:
            return self._name
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        yield NAME_KEY
        yield from self._fields

    def __len__(self) -> int:
        return len(self._fields) + 1

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Action):
            return self._name == other._name and self._fields == other._fields
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        data = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        return f"Action({self._name!r}{', ' if data else ''}{data})"


@dataclass(frozen=True)
class Payload:
    """The message handed to Dispatcher.dispatch(): a source and an Action."""

    source: str
    action: Action

    @classmethod
    def of(cls, source: str, name: str, /, **fields: Any) -> Payload:
        return cls(source, Action(name, **fields))


def _field(obj: object, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def as_payload(obj: object) -> Payload:
    """Validate obj and return it as a Payload.

    Accepts a Payload, a mapping, or anything with `source` and `action`
    attributes. Raises InvalidPayloadError if the source is missing, the
    action body is missing, or the body has no string action name.
    """
    source = _field(obj, "source")
    if not source:
        raise InvalidPayloadError("Store.handle_callback(...): payload does not have a valid `source` attribute")

    body = _field(obj, "action")
    if not body:
        raise InvalidPayloadError("Store.handle_callback(...): payload does not have a valid `action` attribute")

    if not isinstance(body, Action):
        if not isinstance(body, Mapping):
            raise InvalidPayloadError(
                f"Store.handle_callback(...): action body must be a mapping, got {type(body).__name__}"
            )
        if not all(isinstance(key, str) for key in body):
            raise InvalidPayloadError("Store.handle_callback(...): action body keys must be strings")
        body = Action.from_mapping(body)

    if not isinstance(body.name, str) or not body.name:
        raise InvalidPayloadError("Store.handle_callback(...): action body does not have a valid `action` name")

    if isinstance(obj, Payload) and body is obj.action:
        return obj
    return Payload(source, body)
