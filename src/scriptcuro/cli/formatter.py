# src/scriptcuro/cli/formatter.py
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from scriptcuro.core.models import ConversionReport

# Initialize the Rich console for high-quality terminal output
console = Console()

LEXERS = {"bash": "bash", "perl": "perl"}


class ScriptFormatter:
    """
    ScriptFormatter: the visual heart of the CLI.
    Responsible for rendering side-by-side views, diagnostics and the
    execution report.
    """

    def __init__(self, out: Console = None):
        self.console = out or console

    def display_side_by_side(self, original_text: str, report: ConversionReport, file_name: str):
        """
        Renders the legacy script next to its converted form.
        """
        source_lexer = LEXERS.get(report.source_language.value, "bash")
        old_syntax = Syntax(original_text.rstrip(), source_lexer, theme="ansi_dark", line_numbers=True)
        new_syntax = Syntax(report.converted_code.rstrip(), "python", theme="monokai", line_numbers=True)

        layout_table = Table.grid(expand=True, padding=1)
        layout_table.add_column(ratio=1)
        layout_table.add_column(ratio=1)
        layout_table.add_row(
            Panel(old_syntax, title=f"[bold red]LEGACY: {file_name}[/bold red]", border_style="red"),
            Panel(new_syntax, title=f"[bold green]CONVERTED ({report.target_dialect.value})[/bold green]",
                  border_style="green")
        )
        self.console.print(layout_table)

    def show_diagnostics(self, report: ConversionReport, file_name: str):
        """
        Lists warnings and unsupported constructs in source order.
        """
        if report.is_clean:
            self.console.print(f"[dim]ℹ No manual review needed for {file_name}.[/dim]")
            return

        table = Table(title=f"Diagnostics: {file_name}", show_header=True, header_style="bold magenta")
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Severity")
        table.add_column("Message")

        for d in report.diagnostics:
            color = "red" if d.severity.value == "unsupported" else "yellow"
            table.add_row(str(d.line_no), f"[{color}]{d.severity.value.upper()}[/{color}]", d.message)

        self.console.print(table)

    def print_final_table(self, reports: list):
        """
        Builds the summary table shown at the very end of a run.
        """
        table = Table(title="ScriptCuro Execution Report", show_lines=True, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Warnings", justify="right")
        table.add_column("Unsupported", justify="right")
        table.add_column("Result", justify="center")

        for r in reports:
            status = r.get("status", "FAILED")
            color = {"CONVERTED": "green", "NEEDS_REVIEW": "yellow", "UNSUPPORTED": "yellow"}.get(status, "red")
            result_icon = "✅" if status == "CONVERTED" else "⚠️" if r.get("success") else "❌"
            table.add_row(
                str(r.get("file_path")),
                f"[{color}]{status}[/{color}]",
                str(len(r.get("warnings", []))),
                str(len(r.get("unsupported", []))),
                result_icon
            )

        self.console.print(table)

    def print_summary(self, summary: dict):
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Files:     {summary['total_files']}\n"
            f"Success Rate:    [green]{summary['success_rate']:.1%}[/green]\n"
            f"Warnings:        [yellow]{summary['warnings']}[/yellow]\n"
            f"Unsupported:     [red]{summary['unsupported']}[/red]\n"
            f"Written:         {summary['written_to_disk']}\n"
            f"System Errors:   [red]{summary['system_errors']}[/red]",
            border_style="dim"
        ))
