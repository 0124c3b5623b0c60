#!/usr/bin/env python3
"""
SCRIPTCURO CLI - Side-by-Side UI
--------------------------------
Command line shell around the conversion engine: routes the convert/scan
subcommands, streams scripts through the ConversionEngine and renders the
converted code, per-line diagnostics and a batch summary.

Author: ScriptCuro Team
Date: 2026-10-19
"""

import sys
import argparse
from pathlib import Path
from typing import List, Dict, Any

# Rich library components for high-fidelity terminal UI
from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    BarColumn,
    TaskProgressColumn
)
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from scriptcuro.cli.formatter import ScriptFormatter
from scriptcuro.conversion.exporter import ReportExporter
from scriptcuro.core.engine import ConversionEngine, DEFAULT_EXTENSIONS
from scriptcuro.core.models import SourceLanguage, TargetDialect
from scriptcuro.core.settings import load_settings

VERSION = "scriptcuro v1.0.0"

# Global console for consistent styling across the application
console = Console()


class ScriptCuroCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="scriptcuro",
            description="ScriptCuro - Legacy Shell/Perl to Python & PySpark Converter",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = ScriptFormatter(console)
        self.exporter = ReportExporter()
        self._setup_args()

    def _add_common_args(self, sub: argparse.ArgumentParser):
        sub.add_argument("path", help="Script file, directory, or '-' for stdin")
        sub.add_argument("--to", dest="target", default=TargetDialect.GENERAL_PURPOSE.value,
                         choices=[d.value for d in TargetDialect], help="Target dialect (default: python)")
        sub.add_argument("--source", default=SourceLanguage.AUTO.value,
                         choices=[s.value for s in SourceLanguage], help="Source language hint")
        sub.add_argument("--ext", nargs="+", default=list(DEFAULT_EXTENSIONS),
                         help="Script extensions to pick up in directories")
        sub.add_argument("--format", default="table", choices=["table", "yaml", "json"],
                         help="Report output format")
        sub.add_argument("--config", help="YAML settings file")

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=VERSION)
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        convert_parser = subparsers.add_parser("convert", help="Convert legacy scripts")
        self._add_common_args(convert_parser)
        convert_parser.add_argument("--output", help="Directory for converted files (default: beside source)")
        convert_parser.add_argument("--dry-run", action="store_true", help="Print results without writing")
        convert_parser.add_argument("--diff", action="store_true", help="Display side-by-side comparison")

        scan_parser = subparsers.add_parser("scan", help="Report convertibility without writing")
        self._add_common_args(scan_parser)

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            f"[bold cyan]{VERSION}[/bold cyan]\n"
            "══════════════════════════════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _emit_machine_report(self, reports: List[Dict[str, Any]], fmt: str):
        """YAML/JSON go straight to stdout so they can be piped."""
        for r in reports:
            if "report" not in r:
                continue
            if fmt == "yaml":
                sys.stdout.write(self.exporter.to_yaml(r["report"]))
            else:
                sys.stdout.write(self.exporter.to_json(r["report"]) + "\n")

    def _render_single(self, result: Dict[str, Any], original: str, args: argparse.Namespace):
        report = result["report"]
        if getattr(args, "diff", False):
            self.formatter.display_side_by_side(original, report, result["file_path"])
        elif not result.get("written"):
            console.print(Syntax(report.converted_code, "python", theme="monokai", line_numbers=True))
        else:
            console.print(f"[green]Written:[/green] {result['output_path']}")
        self.formatter.show_diagnostics(report, result["file_path"])

    def _run_stdin(self, args: argparse.Namespace, engine: ConversionEngine):
        result = engine.convert_text("<stdin>", sys.stdin.read(), args.target, args.source)
        if result["status"] == "EMPTY_INPUT":
            console.print("[bold red]No code to convert:[/bold red] please provide some script text.")
            sys.exit(1)

        if args.format != "table":
            self._emit_machine_report([result], args.format)
        else:
            self._render_single(result, "", args)

    def _run_engine(self, args: argparse.Namespace, is_convert_mode: bool):
        """Main processing loop orchestration."""
        try:
            settings = load_settings(args.config)
        except RuntimeError as e:
            console.print(f"[bold red]CONFIG ERROR:[/bold red] {escape(str(e))}")
            sys.exit(1)

        if args.path == "-":
            self._run_stdin(args, ConversionEngine(Path.cwd(), settings))
            return

        input_path = Path(args.path).resolve()
        if not input_path.exists():
            console.print(f"[bold red]Error:[/bold red] Path '{args.path}' not found.")
            sys.exit(1)

        workspace = input_path if input_path.is_dir() else input_path.parent
        engine = ConversionEngine(workspace, settings, getattr(args, "output", None))
        dry_run = not is_convert_mode or args.dry_run

        target_files = [input_path] if input_path.is_file() else engine.discover(args.ext)
        if not target_files:
            console.print("\n[bold yellow]⚠️  No legacy scripts found.[/bold yellow]")
            return

        reports = []
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True
        ) as progress:
            task_id = progress.add_task("Converting scripts...", total=len(target_files))
            for file_path in target_files:
                rel_path = str(file_path.relative_to(workspace))
                reports.append(engine.convert_file(rel_path, args.target, args.source, dry_run=dry_run))
                progress.update(task_id, advance=1, description=f"Converted: {file_path.name}")

        if args.format != "table":
            self._emit_machine_report(reports, args.format)
            return

        for r in reports:
            if r.get("error"):
                console.print(f"[bold red]{r['status']} in {r['file_path']}:[/bold red] {r['error']}")

        if len(reports) == 1 and "report" in reports[0]:
            original = target_files[0].read_text(encoding='utf-8-sig')
            self._render_single(reports[0], original, args)
        else:
            self.formatter.print_final_table(reports)
        self.formatter.print_summary(engine.generate_summary(reports))

    def run(self, argv: List[str] = None):
        """Primary routing entry point."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_header("Legacy Script Converter")
            self.parser.print_help()
            sys.exit(0)

        args = self.parser.parse_args(argv)
        if args.command == "convert":
            if args.format == "table":
                self.print_header("Script Conversion")
            self._run_engine(args, is_convert_mode=True)
        elif args.command == "scan":
            if args.format == "table":
                self.print_header("Convertibility Scan")
            self._run_engine(args, is_convert_mode=False)
        else:
            self.parser.print_help()


def main():
    """Application entry point with interrupt handling."""
    try:
        ScriptCuroCLI().run()
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
