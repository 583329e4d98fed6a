"""enum(): mirrored constants for action names.

    actions = enum("ADD_TODO", "REMOVE_TODO")
    actions.ADD_TODO     # "ADD_TODO"
    actions["REMOVE_TODO"]  # "REMOVE_TODO"
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterator


class Constants(Mapping[str, str]):
    """Read-only name -> name mapping with attribute access."""

    __slots__ = ("_names",)

    def __init__(self, names: dict[str, str]) -> None:
        object.__setattr__(self, "_names", names)

    def __getattr__(self, name: str) -> str:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._names[name]
        except KeyError:
            raise AttributeError(f"no constant named {name!r}") from None

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("constants are read-only")

    def __getitem__(self, name: str) -> str:
        return self._names[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __dir__(self) -> list[str]:
        return [*super().__dir__(), *self._names]

    def __repr__(self) -> str:
        return f"enum({', '.join(repr(n) for n in self._names)})"


def enum(*names: str) -> Constants:
    """Build constants whose values are their own names."""
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"enum(...): constant names must be strings, got {type(name).__name__}")
    return Constants({name: name for name in names})
