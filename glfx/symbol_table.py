"""Scoped symbol tables used during semantic analysis."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from glfx.tokens import TokenType


class SymbolKind(Enum):
    """What a symbol names."""

    VARIABLE = "variable"


@dataclass(frozen=True)
class SymbolEntry:
    """A named symbol together with its declared type."""

    name: str
    kind: SymbolKind
    declared_type: TokenType


class SymbolTable:
    """A scope of symbols, optionally nested inside an outer scope."""

    def __init__(self, outer: SymbolTable | None = None) -> None:
        self.outer = outer
        self._store: dict[str, SymbolEntry] = {}

    @property
    def symbols(self) -> Mapping[str, SymbolEntry]:
        """The symbols defined directly in this scope."""
        return MappingProxyType(self._store)

    def define(self, name: str, kind: SymbolKind, declared_type: TokenType) -> bool:
        """Define ``name`` in this scope; return False if it already exists here."""
        if name in self._store:
            return False
        self._store[name] = SymbolEntry(name, kind, declared_type)
        return True

    def resolve(self, name: str) -> SymbolEntry | None:
        """Find ``name`` in this scope or the nearest enclosing one."""
        scope: SymbolTable | None = self
        while scope is not None:
            entry = scope._store.get(name)
            if entry is not None:
                return entry
            scope = scope.outer
        return None

    def pop_outer(self) -> SymbolTable | None:
        """Detach and return the enclosing scope."""
        outer, self.outer = self.outer, None
        return outer

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None