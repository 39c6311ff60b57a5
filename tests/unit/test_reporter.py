"""Tests for diagnostic construction."""

import pytest

from shadowcheck.errors import MalformedNodeError
from shadowcheck.models import DiagnosticCategory
from shadowcheck.reporter import DiagnosticReporter, shadow_message
from shadowcheck.symbols import Scope, Symbol, SymbolKind, universe_type
from shadowcheck.syntax.nodes import Ident, SelectorExpr
from tests.helpers import PackageBuilder

INT = universe_type("int")


@pytest.mark.parametrize(
    ("shadowed_file", "current_file", "expected"),
    [
        ("b.go", "b.go", 'declaration of "x" shadows declaration at line 7'),
        ("/src/a.go", "/src/b.go", 'declaration of "x" shadows declaration at line 7 in a.go'),
        ("/one/same.go", "/two/same.go", 'declaration of "x" shadows declaration at line 7 in same.go'),
    ],
)
def test_shadow_message(shadowed_file: str, current_file: str, expected: str) -> None:
    assert shadow_message("x", 7, shadowed_file, current_file) == expected


def test_shadow_message_quotes_name() -> None:
    assert shadow_message('we"ird', 1, "f", "f").startswith('declaration of "we\\"ird"')


def make_reporter() -> tuple[PackageBuilder, DiagnosticReporter, Ident, Symbol, Symbol]:
    pb = PackageBuilder()
    src = pb.add_file("/src/b.go")
    fn = pb.scope(pb.package_scope, src, 3, 20, "function")
    outer = pb.var("err", INT, fn, src, 4, 2)
    inner = pb.var("err", INT, Scope(parent=fn), src, 9, 3)
    return pb, DiagnosticReporter(pb.fset), pb.define(inner), inner, outer


def test_report_shadow_builds_primary_and_related_locations() -> None:
    pb, reporter, ident, inner, outer = make_reporter()

    diagnostic = reporter.report_shadow(ident, inner, outer)

    assert diagnostic.category == DiagnosticCategory.SHADOW
    assert (diagnostic.pos, diagnostic.end) == (ident.pos, ident.pos + 3)
    assert diagnostic.message == 'declaration of "err" shadows declaration at line 4'
    (related,) = diagnostic.related
    assert str(pb.fset.position(related.pos)) == "/src/b.go:4:2"
    assert related.end - related.pos == len("err")
    assert related.message == 'shadowed symbol "err" declared here'
    assert reporter.diagnostics == (diagnostic,)


def test_report_shadow_across_files_names_the_other_file() -> None:
    pb = PackageBuilder()
    first = pb.add_file("/src/a.go")
    second = pb.add_file("/src/b.go")
    outer = pb.var("n", INT, pb.package_scope, first, 3, 5)
    inner_scope = pb.scope(pb.package_scope, second, 3, 9, "function")
    inner = pb.var("n", INT, inner_scope, second, 5, 2)
    reporter = DiagnosticReporter(pb.fset)

    diagnostic = reporter.report_shadow(pb.define(inner), inner, outer)

    assert diagnostic.message == 'declaration of "n" shadows declaration at line 3 in a.go'


def test_report_malformed_spans_offending_node() -> None:
    pb = PackageBuilder()
    src = pb.add_file("m.go")
    node = SelectorExpr(Ident("s", src.line_pos(5, 2)), Ident("f", src.line_pos(5, 4)))
    reporter = DiagnosticReporter(pb.fset)

    diagnostic = reporter.report_malformed(MalformedNodeError(node, "invalid AST: bad"))

    assert diagnostic.category == DiagnosticCategory.INVALID_AST
    assert (diagnostic.pos, diagnostic.end) == (node.pos, node.end)
    assert diagnostic.message == "invalid AST: bad"
    assert diagnostic.related == ()


def test_second_report_at_same_site_is_dropped() -> None:
    _, reporter, ident, inner, outer = make_reporter()

    reporter.report_shadow(ident, inner, outer)
    reporter.report_shadow(ident, inner, outer)

    assert len(reporter.diagnostics) == 1


def test_diagnostics_keep_emission_order() -> None:
    pb = PackageBuilder()
    src = pb.add_file("o.go")
    fn = pb.scope(pb.package_scope, src, 3, 20, "function")
    reporter = DiagnosticReporter(pb.fset)
    for line in (12, 6, 9):
        outer = Symbol(name=f"v{line}", kind=SymbolKind.VAR, type=INT, pos=src.line_pos(4, 2))
        inner = pb.var(f"v{line}", INT, fn, src, line, 2)
        reporter.report_shadow(pb.define(inner), inner, outer)

    assert [pb.fset.position(d.pos).line for d in reporter.diagnostics] == [12, 6, 9]
