"""User interface components - tables, panels, summaries."""

from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pdf_batch_splitter.core.rules import IdentifierRule
from pdf_batch_splitter.core.pipeline import BatchResult

console = Console()


def display_rules_table(rules: list[IdentifierRule], title: str = "Identifier Rules"):
    """Show the active rules in the order they are applied."""
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Label", style="cyan")
    table.add_column("Group", justify="right", style="magenta")
    table.add_column("Pattern", style="green")

    for position, rule in enumerate(rules, 1):
        table.add_row(str(position), Text(rule.label), str(rule.capture_group), Text(rule.pattern))

    console.print(table)


def display_split_table(result: BatchResult, title: str = "Split Pages"):
    """Show which file each page went to."""
    table = Table(title=title)
    table.add_column("Page", justify="right", style="magenta")
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Status", style="yellow")

    for outcome in result.outcomes:
        status = "✓ Identified" if outcome.resolved else "  No identifier"
        if not outcome.written:
            status += " (not written)"
        table.add_row(str(outcome.index + 1), Text(outcome.filename), status)

    console.print(table)


def show_split_summary(result: BatchResult):
    if result.dry_run:
        console.print(f"\n[cyan]Dry run: would write {result.page_count} PDF files "
                        f"to destination: {escape(str(result.destination.resolve()))}[/cyan]")
    else:
        console.print(f"\n[green]Wrote {result.written_count} PDF files "
                        f"to destination: {escape(str(result.destination.resolve()))}[/green]")

    if result.failed_count:
        console.print(f"[yellow]{result.failed_count} page(s) had no identifier and were "
                        f"named AAA_FAILED_TO_READ_<n>[/yellow]")


def show_page_text(pdf_path: Path, page_number: int, page_count: int, text: str):
    """Print a page's extracted text, as the identifier rules will see it."""
    body = Text(text) if text.strip() else "[dim](no extractable text)[/dim]"
    console.print(Panel(body, title=f"{pdf_path.name} - page {page_number} of {page_count}",
                        expand=False))
