"""Recognizers for deliberate redeclarations that are exempt from the shadow check.

Two exemptions apply before any scope lookup happens:

    x := x                  short declaration copying the outer variable
    n := n.(T)              short declaration narrowing the outer variable
    var i, j = i, j         var declaration copying outer variables

plus loop-header bindings (for i := 0; ... and for k, v := range ...) which
always create a fresh variable per iteration.

The short-declaration rule is checked per target (every position must match),
while the var rule accepts only bare identifiers; a type assertion in a var
declaration is never idiomatic.
"""

from shadowcheck.declaration_scanner import ScanResult
from shadowcheck.errors import MalformedNodeError
from shadowcheck.syntax.nodes import AssignStmt, Expr, Ident, TypeAssertExpr, ValueSpec

NON_IDENT_SHORT_DECL = "invalid AST: short variable declaration of non-identifier"
NON_VALUE_SPEC_VAR = "invalid AST: var GenDecl not ValueSpec"


def _reuses_name(name: str, rhs: Expr) -> bool:
    """Report whether rhs is `name` or `name.(T)`."""
    match rhs:
        case Ident():
            return rhs.name == name
        case TypeAssertExpr(x=Ident() as operand):
            return operand.name == name
        case _:
            return False


def idiomatic_short_redecl(stmt: AssignStmt) -> bool:
    """Report whether every redeclaration in a short declaration is deliberate.

    Args:
        stmt: A short variable declaration

    Returns:
        True if both sides have equal length and each right-hand expression is
        the same-named identifier or a type assertion on it

    Raises:
        MalformedNodeError: If a left-hand target is not an identifier
    """
    if len(stmt.lhs) != len(stmt.rhs):
        return False

    for lhs, rhs in zip(stmt.lhs, stmt.rhs, strict=True):
        if not isinstance(lhs, Ident):
            raise MalformedNodeError(lhs, NON_IDENT_SHORT_DECL)
        if not _reuses_name(lhs.name, rhs):
            return False
    return True


def idiomatic_redecl(spec: ValueSpec) -> bool:
    """Report whether a var spec is of the form `var a, b = a, b`.

    Declarations like `var i = 3` are not idiomatic, and neither is a spec
    where only some of the names are copied.
    """
    if len(spec.names) != len(spec.values):
        return False
    return all(
        isinstance(value, Ident) and value.name == name.name
        for name, value in zip(spec.names, spec.values, strict=True)
    )


def is_loop_variable_decl(stmt: AssignStmt, scan: ScanResult) -> bool:
    """Report whether stmt declares a loop variable.

    A short declaration is a loop variable declaration if it is the init
    statement of a counted loop, or if any identifier it declares sits at the
    position of a key/value binder of an iteration construct.
    """
    if stmt in scan.loop_inits:
        return True
    return any(isinstance(lhs, Ident) and lhs.pos in scan.range_binder_positions for lhs in stmt.lhs)
