"""
Caller capabilities.

Assembly never asks "who is calling"; it only asks whether a named capability is held.
The capability set is built once per request from the token roles and passed explicitly.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class AuthorizationOracle(Protocol):
    def has_capability(self, name: str) -> bool: ...


class CapabilitySet:
    """Immutable set of capability names held by the caller"""

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str] | None = None):
        self._names = frozenset(name for name in (names or ()) if name)

    @classmethod
    def anonymous(cls) -> "CapabilitySet":
        return cls()

    def has_capability(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"CapabilitySet({sorted(self._names)!r})"
