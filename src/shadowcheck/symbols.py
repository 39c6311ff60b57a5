"""Resolved symbols, lexical scopes and the predeclared universe scope.

Scopes form a tree rooted at UNIVERSE. Each scope owns its own name table;
the parent link is used for lookup only. Symbols record the scope they were
inserted into so that the shadow check can start its search one level up.
"""

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from shadowcheck.positions import NO_POS
from shadowcheck.syntax.nodes import Ident
from shadowcheck.typesys import Basic, Interface, Named, Signature, Type


class SymbolKind(enum.StrEnum):
    """The kind of entity a symbol denotes."""

    VAR = "var"
    CONST = "const"
    TYPE = "type"
    FUNC = "func"
    PACKAGE = "package"
    BUILTIN = "builtin"
    NIL = "nil"
    LABEL = "label"


@dataclass(eq=False)
class Symbol:
    """A resolved binding.

    Attributes:
        name: Declared name
        kind: What the name denotes
        type: Declared type (None for packages, labels and builtins)
        pos: Position of the defining identifier (NO_POS for predeclared symbols)
        scope_pos: Position from which the binding is visible. None means "from pos";
            NO_POS means the binding is visible throughout its scope.
        scope: Owning scope, set by Scope.insert
    """

    name: str
    kind: SymbolKind
    type: Type | None
    pos: int = NO_POS
    scope_pos: int | None = None
    scope: "Scope | None" = field(default=None, repr=False)

    def visible_from(self) -> int:
        return self.pos if self.scope_pos is None else self.scope_pos

    def is_visible_at(self, pos: int) -> bool:
        """Report whether this symbol is in scope at pos within its own scope."""
        start = self.visible_from()
        return pos == NO_POS or start == NO_POS or start <= pos


@dataclass(eq=False)
class Scope:
    """A lexical nesting region with its own name table.

    Attributes:
        parent: Enclosing scope (lookup-only relation); None for the universe
        pos: Start of the region (NO_POS for universe and package scopes)
        end: End of the region
        comment: Free-form description used in debug output ("package", "function", ...)
    """

    parent: "Scope | None" = field(repr=False)
    pos: int = NO_POS
    end: int = NO_POS
    comment: str = ""
    _elems: dict[str, Symbol] = field(default_factory=dict, init=False, repr=False)

    def __len__(self) -> int:
        return len(self._elems)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._elems.values())

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._elems))

    def lookup(self, name: str) -> Symbol | None:
        """Return the symbol declared with name in this scope only."""
        return self._elems.get(name)

    def insert(self, symbol: Symbol) -> Symbol | None:
        """Insert symbol unless the name is taken.

        Returns:
            The existing symbol if the name was already declared here (symbol is
            not inserted), otherwise None.
        """
        existing = self._elems.get(symbol.name)
        if existing is not None:
            return existing
        self._elems[symbol.name] = symbol
        if symbol.scope is None:
            symbol.scope = self
        return None

    def ancestors(self) -> Iterator["Scope"]:
        """Yield this scope, then each enclosing scope up to the root."""
        scope: Scope | None = self
        while scope is not None:
            yield scope
            scope = scope.parent

    def lookup_parent(self, name: str, pos: int) -> tuple["Scope | None", Symbol | None]:
        """Find the nearest symbol named name visible at pos.

        Searches this scope and then each ancestor in turn. A symbol only counts
        if it is visible at pos, i.e. its declaration precedes pos; NO_POS
        disables the position test.

        Returns:
            (scope, symbol) for the first match, or (None, None)
        """
        for scope in self.ancestors():
            symbol = scope.lookup(name)
            if symbol is not None and symbol.is_visible_at(pos):
                return scope, symbol
        return None, None

    def contains(self, pos: int) -> bool:
        return self.pos <= pos < self.end

    @property
    def is_universe(self) -> bool:
        return self is UNIVERSE


def _build_universe() -> Scope:
    universe = Scope(parent=None, comment="universe")

    for name in (
        "bool",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "float32",
        "float64",
        "complex64",
        "complex128",
        "string",
        "byte",
        "rune",
    ):
        universe.insert(Symbol(name=name, kind=SymbolKind.TYPE, type=Basic(name)))

    error_type = Named("error")
    error_type.underlying = Interface(methods=(("Error", Signature(results=(Basic("string"),))),))
    universe.insert(Symbol(name="error", kind=SymbolKind.TYPE, type=error_type))
    universe.insert(Symbol(name="any", kind=SymbolKind.TYPE, type=Interface()))
    universe.insert(Symbol(name="comparable", kind=SymbolKind.TYPE, type=Named("comparable")))

    universe.insert(Symbol(name="true", kind=SymbolKind.CONST, type=Basic("untyped bool")))
    universe.insert(Symbol(name="false", kind=SymbolKind.CONST, type=Basic("untyped bool")))
    universe.insert(Symbol(name="iota", kind=SymbolKind.CONST, type=Basic("untyped int")))
    universe.insert(Symbol(name="nil", kind=SymbolKind.NIL, type=Basic("untyped nil")))

    for name in (
        "append",
        "cap",
        "clear",
        "close",
        "complex",
        "copy",
        "delete",
        "imag",
        "len",
        "make",
        "max",
        "min",
        "new",
        "panic",
        "print",
        "println",
        "real",
        "recover",
    ):
        universe.insert(Symbol(name=name, kind=SymbolKind.BUILTIN, type=None))

    return universe


UNIVERSE = _build_universe()
"""The root scope holding every predeclared identifier."""


def universe_type(name: str) -> Type:
    """Return the type denoted by a predeclared type name such as "int" or "error"."""
    symbol = UNIVERSE.lookup(name)
    if symbol is None or symbol.kind != SymbolKind.TYPE or symbol.type is None:
        msg = f"{name!r} is not a predeclared type"
        raise KeyError(msg)
    return symbol.type


@dataclass(frozen=True)
class TypesInfo:
    """Name resolution results produced by the front-end.

    Attributes:
        defs: Every defining identifier mapped to the symbol it introduces, or to
            None when a short declaration reuses an already-declared variable
        uses: Every use identifier mapped to the symbol it refers to
    """

    defs: Mapping[Ident, Symbol | None]
    uses: Mapping[Ident, Symbol]
