"""Tests for output module."""

from pathlib import Path

from shadowcheck.models import AnalysisResult, Diagnostic, DiagnosticCategory, RelatedInformation
from shadowcheck.output import display_failures, display_results, format_diagnostic, print_summary_stats
from shadowcheck.positions import FileSet
from tests.helpers.console import assert_console_contains, capture_console_output


def make_fset() -> FileSet:
    fset = FileSet()
    fset.add_file("b.go", 100, (0, 10, 20, 30, 40, 50))
    return fset


def make_shadow(fset: FileSet) -> Diagnostic:
    source = fset.files[0]
    return Diagnostic(
        pos=source.line_pos(6, 3),
        end=source.line_pos(6, 4),
        message='declaration of "x" shadows declaration at line 4',
        related=(
            RelatedInformation(
                pos=source.line_pos(4, 2), end=source.line_pos(4, 3), message='shadowed symbol "x" declared here'
            ),
        ),
    )


def make_result(*diagnostics: Diagnostic, fset: FileSet | None = None) -> AnalysisResult:
    return AnalysisResult(package_path="example.com/b", fset=fset or make_fset(), diagnostics=diagnostics)


def test_format_diagnostic_with_related_location() -> None:
    """Test the primary line and the indented related location."""
    fset = make_fset()

    text = format_diagnostic(fset, make_shadow(fset))

    assert text.plain == (
        'b.go:6:3: declaration of "x" shadows declaration at line 4\n'
        '    b.go:4:2: shadowed symbol "x" declared here'
    )


def test_format_diagnostic_malformed_is_red() -> None:
    """Test that invalid-AST findings use the error style."""
    fset = make_fset()
    diagnostic = Diagnostic(
        pos=fset.files[0].line_pos(2, 1),
        end=fset.files[0].line_pos(2, 4),
        message="invalid AST: var GenDecl not ValueSpec",
        category=DiagnosticCategory.INVALID_AST,
    )

    text = format_diagnostic(fset, diagnostic)

    assert text.plain == "b.go:2:1: invalid AST: var GenDecl not ValueSpec"
    assert any(span.style == "red" for span in text.spans)


def test_print_summary_stats_clean() -> None:
    """Test summary for packages without findings."""
    with capture_console_output() as (console, output):
        print_summary_stats(console, (make_result(), make_result()))

    assert_console_contains(
        output, "Summary:", "Packages analyzed: 2", "Shadowed declarations: 0", "No suspicious shadowing found."
    )
    assert "Malformed" not in output.getvalue()


def test_print_summary_stats_with_findings() -> None:
    """Test summary counts shadows and malformed declarations separately."""
    fset = make_fset()
    malformed = Diagnostic(pos=2, end=3, message="invalid AST: bad", category=DiagnosticCategory.INVALID_AST)
    with capture_console_output() as (console, output):
        print_summary_stats(console, (make_result(make_shadow(fset), malformed, fset=fset),))

    assert_console_contains(output, "Packages analyzed: 1", "Shadowed declarations: 1", "Malformed declarations: 1")
    assert "No suspicious shadowing found." not in output.getvalue()


def test_display_results_empty() -> None:
    """Test display with no packages."""
    with capture_console_output() as (console, output):
        display_results(console, ())

    assert_console_contains(output, "No packages found to analyze.")


def test_display_results_with_findings() -> None:
    """Test that each finding is printed before the summary."""
    fset = make_fset()
    with capture_console_output() as (console, output):
        display_results(console, (make_result(make_shadow(fset), fset=fset),))

    text = output.getvalue()
    assert_console_contains(output, 'b.go:6:3: declaration of "x" shadows declaration at line 4', "Summary:")
    assert text.index("b.go:6:3") < text.index("Summary:")


def test_display_failures_empty() -> None:
    """Test that nothing is printed when every dump loaded."""
    with capture_console_output() as (console, output):
        display_failures(console, ())

    assert output.getvalue() == ""


def test_display_failures_truncates_long_lists() -> None:
    """Test that only the first five failed inputs are listed."""
    failures = tuple(Path(f"dump{i}.json") for i in range(7))
    with capture_console_output() as (console, output):
        display_failures(console, failures)

    assert_console_contains(output, "Error: 7 input(s) could not be analyzed", "dump4.json", "... and 2 more")
    assert "dump5.json" not in output.getvalue()
