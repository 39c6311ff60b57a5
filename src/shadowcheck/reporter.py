"""Builds diagnostics and collects them for one package."""

import logging
from pathlib import PurePath

from shadowcheck.errors import MalformedNodeError
from shadowcheck.models import Diagnostic, DiagnosticCategory, RelatedInformation
from shadowcheck.positions import FileSet
from shadowcheck.symbols import Symbol
from shadowcheck.syntax.nodes import Ident

logger = logging.getLogger(__name__)


def shadow_message(name: str, shadowed_line: int, shadowed_file: str, current_file: str) -> str:
    """Format the primary message of a shadow finding.

    Examples:
        >>> shadow_message("x", 4, "b.go", "b.go")
        'declaration of "x" shadows declaration at line 4'
        >>> shadow_message("err", 12, "/src/a.go", "/src/b.go")
        'declaration of "err" shadows declaration at line 12 in a.go'
    """
    message = f"declaration of {_quote(name)} shadows declaration at line {shadowed_line}"
    if shadowed_file != current_file:
        message += f" in {PurePath(shadowed_file).name}"
    return message


def _quote(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class DiagnosticReporter:
    """Collects diagnostics, emitting at most one per primary position."""

    def __init__(self, fset: FileSet) -> None:
        self._fset = fset
        self._diagnostics: list[Diagnostic] = []
        self._reported_sites: set[int] = set()

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    def _emit(self, diagnostic: Diagnostic) -> None:
        if diagnostic.pos in self._reported_sites:
            logger.debug("Dropping duplicate diagnostic at %s", self._fset.position(diagnostic.pos))
            return
        self._reported_sites.add(diagnostic.pos)
        self._diagnostics.append(diagnostic)

    def report_shadow(self, ident: Ident, symbol: Symbol, shadowed: Symbol) -> Diagnostic:
        """Report that ident (declaring symbol) shadows an outer declaration."""
        shadowed_position = self._fset.position(shadowed.pos)
        current_position = self._fset.position(ident.pos)
        diagnostic = Diagnostic(
            pos=ident.pos,
            end=ident.end,
            message=shadow_message(
                symbol.name, shadowed_position.line, shadowed_position.filename, current_position.filename
            ),
            category=DiagnosticCategory.SHADOW,
            related=(
                RelatedInformation(
                    pos=shadowed.pos,
                    end=shadowed.pos + len(shadowed.name),
                    message=f"shadowed symbol {_quote(symbol.name)} declared here",
                ),
            ),
        )
        self._emit(diagnostic)
        return diagnostic

    def report_malformed(self, error: MalformedNodeError) -> Diagnostic:
        """Report a structurally invalid node."""
        diagnostic = Diagnostic(
            pos=error.node.pos,
            end=error.node.end,
            message=error.message,
            category=DiagnosticCategory.INVALID_AST,
        )
        self._emit(diagnostic)
        return diagnostic
