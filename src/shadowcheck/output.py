"""Rich formatting and display for shadow findings."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from .models import AnalysisResult, Diagnostic, DiagnosticCategory
from .positions import FileSet


def format_diagnostic(fset: FileSet, diagnostic: Diagnostic) -> Text:
    """Render one finding as `file:line:col: message` plus its related locations."""
    style = "red" if diagnostic.category == DiagnosticCategory.INVALID_AST else "yellow"
    text = Text()
    text.append(str(fset.position(diagnostic.pos)), style="cyan")
    text.append(": ")
    text.append(diagnostic.message, style=style)
    for related in diagnostic.related:
        text.append("\n    ")
        text.append(str(fset.position(related.pos)), style="cyan")
        text.append(f": {related.message}", style="dim")
    return text


def print_summary_stats(console: Console, results: tuple[AnalysisResult, ...]) -> None:
    """Print summary statistics about the analysis."""
    total_findings = sum(len(r.diagnostics) for r in results)
    shadow_findings = sum(r.shadow_count for r in results)

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"Packages analyzed: {len(results)}")
    console.print(f"Shadowed declarations: {shadow_findings}")
    if total_findings > shadow_findings:
        console.print(f"[red]Malformed declarations: {total_findings - shadow_findings}[/red]")

    if total_findings == 0:
        console.print("[green]No suspicious shadowing found.[/green]")


def display_failures(console: Console, failures: tuple[Path, ...]) -> None:
    """Display the dumps that could not be analyzed."""
    if not failures:
        return

    console.print(f"\n[red]Error: {len(failures)} input(s) could not be analyzed[/red]")
    for path in failures[:5]:
        console.print(f"  {escape(str(path))}")
    if len(failures) > 5:
        console.print(f"  ... and {len(failures) - 5} more")


def display_results(console: Console, results: tuple[AnalysisResult, ...]) -> None:
    """Display every finding followed by the summary."""
    if not results:
        console.print("[yellow]No packages found to analyze.[/yellow]")
        return

    for result in results:
        for diagnostic in result.diagnostics:
            console.print(format_diagnostic(result.fset, diagnostic))

    print_summary_stats(console, results)
