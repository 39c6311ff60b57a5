"""Single-pass collector of declaration candidates and mutation events.

The scanner walks every file of a package once and records:
    - short variable declarations and var declarations, in traversal order;
      these are the candidates the shadow detector examines
    - every write to a resolved variable (assignment, compound assignment,
      short declaration redeclaring an existing variable, ++/--), grouped by
      symbol; these only feed the liveness heuristics
    - loop-header bindings: the init statement of each counted loop and the
      key/value binder positions of each iteration construct

Collection finishes before detection starts, so detection always sees every
mutation in the package regardless of where a candidate sits.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TypeAlias

from shadowcheck.models import MutationEvent
from shadowcheck.symbols import Symbol, TypesInfo
from shadowcheck.syntax.nodes import (
    DEFINE,
    AssignStmt,
    Expr,
    File,
    ForStmt,
    GenDecl,
    Ident,
    IncDecStmt,
    RangeStmt,
    Stmt,
)
from shadowcheck.syntax.visitor import NodeVisitor

logger = logging.getLogger(__name__)

Declaration: TypeAlias = AssignStmt | GenDecl


@dataclass(frozen=True)
class ScanResult:
    """Everything phase 1 learns about a package's declarations.

    Attributes:
        declarations: Short declarations and var declarations in traversal order
        mutations: Writes to each symbol, in traversal order
        loop_inits: Short declarations that are the init statement of a counted loop
        range_binder_positions: Positions of identifiers bound by an iteration construct
    """

    declarations: tuple[Declaration, ...]
    mutations: Mapping[Symbol, tuple[MutationEvent, ...]]
    loop_inits: frozenset[AssignStmt]
    range_binder_positions: frozenset[int]

    def mutations_of(self, symbol: Symbol) -> tuple[MutationEvent, ...]:
        return self.mutations.get(symbol, ())


class DeclarationScanner(NodeVisitor):
    """Collects declaration candidates, mutation events and loop binders.

    Usage:
        scanner = DeclarationScanner(package.info)
        for file in package.files:
            scanner.visit(file)
        result = scanner.get_result()
    """

    def __init__(self, info: TypesInfo) -> None:
        super().__init__()
        self._info = info
        self._declarations: list[Declaration] = []
        self._mutations: defaultdict[Symbol, list[MutationEvent]] = defaultdict(list)
        self._loop_inits: set[AssignStmt] = set()
        self._range_binder_positions: set[int] = set()

    def get_result(self) -> ScanResult:
        """Return the collected data as an immutable ScanResult."""
        return ScanResult(
            declarations=tuple(self._declarations),
            mutations={symbol: tuple(events) for symbol, events in self._mutations.items()},
            loop_inits=frozenset(self._loop_inits),
            range_binder_positions=frozenset(self._range_binder_positions),
        )

    def _record_mutation(self, target: Expr, stmt: Stmt) -> None:
        """Record a write to target if it is an identifier resolving to a symbol."""
        if not isinstance(target, Ident):
            return
        symbol = self._info.uses.get(target)
        if symbol is None:
            return
        self._mutations[symbol].append(
            MutationEvent(symbol=symbol, pos=target.pos, stmt_pos=stmt.pos, stmt_end=stmt.end)
        )

    def visit_AssignStmt(self, node: AssignStmt) -> None:
        """Record short declarations as candidates and every target as a mutation."""
        if node.is_short_decl:
            self._declarations.append(node)
        for target in node.lhs:
            self._record_mutation(target, node)
        self.generic_visit(node)

    def visit_IncDecStmt(self, node: IncDecStmt) -> None:
        self._record_mutation(node.x, node)
        self.generic_visit(node)

    def visit_GenDecl(self, node: GenDecl) -> None:
        if node.tok == "var":
            self._declarations.append(node)
        self.generic_visit(node)

    def visit_ForStmt(self, node: ForStmt) -> None:
        """Remember the loop's init statement so it is never reported."""
        if isinstance(node.init, AssignStmt) and node.init.is_short_decl:
            self._loop_inits.add(node.init)
        self.generic_visit(node)

    def visit_RangeStmt(self, node: RangeStmt) -> None:
        """Remember the positions of identifiers bound by for k, v := range x."""
        if node.tok == DEFINE:
            for binder in (node.key, node.value):
                if isinstance(binder, Ident):
                    self._range_binder_positions.add(binder.pos)
                elif binder is not None:
                    logger.debug(
                        "Ignoring non-identifier range binder %s at %d", type(binder).__name__, binder.pos
                    )
        self.generic_visit(node)


def scan_declarations(files: Iterable[File], info: TypesInfo) -> ScanResult:
    """Run the scanner over every file of a package."""
    scanner = DeclarationScanner(info)
    for file in files:
        scanner.visit(file)
    result = scanner.get_result()
    logger.debug(
        "Scanned %d declaration candidate(s), %d mutated symbol(s), %d loop binding(s)",
        len(result.declarations),
        len(result.mutations),
        len(result.loop_inits) + len(result.range_binder_positions),
    )
    return result
