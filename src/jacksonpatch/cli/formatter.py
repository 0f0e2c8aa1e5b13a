# src/jacksonpatch/cli/formatter.py
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Initialize the Rich console for all user-facing output (stdout)
console = Console()


class ReportFormatter:
    """
    ReportFormatter: the visual side of the CLI.
    Renders per-file progress lines, the execution table and the summary.
    """

    def __init__(self, out: Console = console):
        self.console = out

    def print_header(self, subtitle: str):
        self.console.print(Panel.fit(
            "[bold cyan]JacksonPatch v1.0.0[/bold cyan]\n"
            "══════════════════════════════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def line(self, text: str):
        """Plain, unwrapped output line."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def print_file_report(self, report: dict):
        """Lines for one processed file, printed as soon as it is done."""
        path = report.get("file_path")
        self.line(f"Processing file: {path}")

        for f in report.get("fields", []):
            if not f.changed:
                continue
            where = f" (region: {f.region})" if f.region else ""
            self.line(f"    Modified embedded config in: {f.field}{where}")

        if not report.get("success"):
            self.line(f"  Error processing file {path}: {report.get('error')}")
            return
        if report.get("status") == "UNCHANGED":
            self.line("  No modifications needed")
        self.line(f"  Successfully processed: {path}")

    def print_final_table(self, reports: list):
        """
        Builds the summary table shown at the very end of a run.
        """
        table = Table(title="JacksonPatch Execution Report", show_header=True, header_style="bold magenta")
        table.add_column("File Path", style="dim")
        table.add_column("Status")
        table.add_column("Fields Changed", justify="right")
        table.add_column("Result", justify="center")

        for r in reports:
            changed = sum(1 for f in r.get("fields", []) if f.changed)
            result_icon = "✅" if r.get("success") else "❌"
            table.add_row(str(r.get("file_path")), r.get("status"), str(changed), result_icon)

        self.console.print(table)

    def print_summary(self, summary: dict):
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Files:      {summary['total_files']}\n"
            f"Patched:          [green]{summary['patched']}[/green]\n"
            f"Unchanged:        {summary['unchanged']}\n"
            f"Failed:           [red]{summary['failed']}[/red]\n"
            f"Field Warnings:   [yellow]{summary['field_warnings']}[/yellow]\n"
            f"Skipped Dirs:     [yellow]{summary['skipped_dirs']}[/yellow]",
            border_style="dim"
        ))
