"""Core data models for the shadow checker."""

import enum
from dataclasses import dataclass, field

from shadowcheck.positions import FileSet
from shadowcheck.symbols import Symbol, TypesInfo
from shadowcheck.syntax.nodes import File


class DiagnosticCategory(enum.StrEnum):
    SHADOW = "shadow"
    INVALID_AST = "invalid-ast"


@dataclass(frozen=True)
class RelatedInformation:
    """A secondary location attached to a diagnostic."""

    pos: int
    end: int
    message: str


@dataclass(frozen=True)
class Diagnostic:
    """A single finding: a primary span, a message and related locations."""

    pos: int
    end: int
    message: str
    category: DiagnosticCategory = DiagnosticCategory.SHADOW
    related: tuple[RelatedInformation, ...] = ()


@dataclass(frozen=True)
class MutationEvent:
    """A write to a symbol (assignment, compound assignment, short declaration, ++/--).

    Attributes:
        symbol: The variable written
        pos: Position of the written identifier
        stmt_pos: Start of the enclosing statement
        stmt_end: End of the enclosing statement (exclusive)
    """

    symbol: Symbol
    pos: int
    stmt_pos: int
    stmt_end: int

    def encloses(self, pos: int) -> bool:
        return self.stmt_pos <= pos < self.stmt_end


@dataclass(frozen=True)
class ShadowConfig:
    """Analysis settings exposed to the driver.

    Attributes:
        strict: Request stricter shadow reporting. Accepted and passed through to
            the detector; the liveness heuristics currently behave the same either way.
    """

    strict: bool = False


@dataclass(frozen=True)
class Package:
    """Everything the checker consumes for one package: syntax plus resolution results."""

    path: str
    fset: FileSet
    files: tuple[File, ...]
    info: TypesInfo


@dataclass(frozen=True)
class AnalysisResult:
    """Diagnostics produced for one package."""

    package_path: str
    fset: FileSet = field(repr=False)
    diagnostics: tuple[Diagnostic, ...]

    @property
    def shadow_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.category == DiagnosticCategory.SHADOW)
