"""The shadow decision procedure.

For each declared identifier that survives the idiomatic-pattern filter:

    1. the blank identifier "_" never shadows anything
    2. look for the nearest same-named symbol visible at the declaration,
       starting from the scope enclosing the declaring scope
    3. shadowing a predeclared (universe) identifier is allowed
    4. a different type means the reuse is deliberate
    5. suppress if every later write to the inner variable is read
    6. suppress if the outer variable is never read again on another line
    7. otherwise report

Each candidate is decided independently from the frozen usage index, scope
tree and scan result, so evaluation order never changes the outcome.
"""

import logging

from shadowcheck.declaration_scanner import Declaration, ScanResult
from shadowcheck.errors import MalformedNodeError
from shadowcheck.idioms import (
    NON_IDENT_SHORT_DECL,
    NON_VALUE_SPEC_VAR,
    idiomatic_redecl,
    idiomatic_short_redecl,
    is_loop_variable_decl,
)
from shadowcheck.liveness import all_inner_mutations_used, outer_used_after_inner
from shadowcheck.models import Diagnostic, Package, ShadowConfig
from shadowcheck.reporter import DiagnosticReporter
from shadowcheck.symbols import Symbol
from shadowcheck.syntax.nodes import AssignStmt, GenDecl, Ident, ValueSpec
from shadowcheck.typesys import identical, type_string
from shadowcheck.usage_index import UsageIndex, usages_of

logger = logging.getLogger(__name__)

BLANK = "_"


def find_shadowed(symbol: Symbol) -> Symbol | None:
    """Return the nearest outer symbol with the same name visible at symbol's declaration.

    The search starts at the parent of the scope that declares symbol, so a
    symbol never finds itself.
    """
    if symbol.scope is None or symbol.scope.parent is None:
        return None
    _, shadowed = symbol.scope.parent.lookup_parent(symbol.name, symbol.pos)
    return shadowed


class ShadowDetector:
    """Decides, per declaration candidate, whether to report shadowing."""

    def __init__(
        self,
        package: Package,
        scan: ScanResult,
        usages: UsageIndex,
        reporter: DiagnosticReporter,
        config: ShadowConfig | None = None,
    ) -> None:
        self._package = package
        self._scan = scan
        self._usages = usages
        self._reporter = reporter
        self.config = config or ShadowConfig()

    def _where(self, pos: int) -> str:
        return str(self._package.fset.position(pos))

    def _line_of(self, pos: int) -> int:
        return self._package.fset.position(pos).line

    def check_declaration(self, node: Declaration) -> None:
        """Check one candidate; malformed nodes are reported and skipped."""
        try:
            if isinstance(node, AssignStmt):
                self.check_short_decl(node)
            else:
                self.check_var_decl(node)
        except MalformedNodeError as error:
            logger.debug("Malformed declaration at %s: %s", self._where(error.node.pos), error.message)
            self._reporter.report_malformed(error)

    def check_short_decl(self, stmt: AssignStmt) -> None:
        """Check every identifier declared by a short variable declaration.

        Raises:
            MalformedNodeError: If a left-hand target is not an identifier
        """
        if not stmt.is_short_decl:
            return
        if idiomatic_short_redecl(stmt):
            logger.debug("Idiomatic short redeclaration at %s", self._where(stmt.pos))
            return
        if is_loop_variable_decl(stmt, self._scan):
            logger.debug("Loop variable declaration at %s", self._where(stmt.pos))
            return

        for target in stmt.lhs:
            if not isinstance(target, Ident):
                raise MalformedNodeError(target, NON_IDENT_SHORT_DECL)
            self.check_shadowing(target)

    def check_var_decl(self, decl: GenDecl) -> None:
        """Check every name declared by a var declaration.

        An idiomatic spec (var i = i) ends processing of the whole declaration.

        Raises:
            MalformedNodeError: If a spec is not a ValueSpec
        """
        if decl.tok != "var":
            return
        for spec in decl.specs:
            if not isinstance(spec, ValueSpec):
                raise MalformedNodeError(spec, NON_VALUE_SPEC_VAR)
            if idiomatic_redecl(spec):
                logger.debug("Idiomatic var redeclaration at %s", self._where(spec.pos))
                return
            for name in spec.names:
                self.check_shadowing(name)

    def check_shadowing(self, ident: Ident) -> Diagnostic | None:
        """Report ident if it shadows an outer declaration in a suspicious way.

        Returns:
            The emitted diagnostic, or None if nothing was reported
        """
        if ident.name == BLANK:
            return None

        symbol = self._package.info.defs.get(ident)
        if symbol is None:
            return None

        shadowed = find_shadowed(symbol)
        if shadowed is None:
            return None

        if shadowed.scope is not None and shadowed.scope.is_universe:
            return None

        if not identical(symbol.type, shadowed.type):
            logger.debug(
                "%s: %r has type %s, outer declaration has %s; not a shadow",
                self._where(ident.pos),
                symbol.name,
                type_string(symbol.type),
                type_string(shadowed.type),
            )
            return None

        if self.inner_fully_consumed(symbol, ident.pos):
            logger.debug("%s: every write to inner %r is read; suppressed", self._where(ident.pos), symbol.name)
            return None

        if not self.outer_referenced_again(shadowed, ident.pos):
            logger.debug("%s: outer %r is not used afterwards; suppressed", self._where(ident.pos), symbol.name)
            return None

        return self._reporter.report_shadow(ident, symbol, shadowed)

    def inner_fully_consumed(self, symbol: Symbol, decl_pos: int) -> bool:
        """Liveness check A for the inner symbol declared at decl_pos."""
        return all_inner_mutations_used(
            self._scan.mutations_of(symbol), decl_pos, usages_of(self._usages, symbol)
        )

    def outer_referenced_again(self, shadowed: Symbol, decl_pos: int) -> bool:
        """Liveness check B for the outer symbol."""
        return outer_used_after_inner(usages_of(self._usages, shadowed), decl_pos, self._line_of)
