from __future__ import annotations

from typing import Dict, Iterable, List

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from relgen.python_libs.common.generation_logger import DatasetGenerationSummary


class ConsoleStyles:
    """
    Centralized styles, message helpers and tables for the relgen console.
    """

    SUCCESS = Style(color="green", bold=True)
    WARNING = Style(color="yellow", bold=True)
    ERROR = Style(color="red", bold=True)
    INFO = Style(color="cyan", italic=True)
    DIM = Style(dim=True)

    @staticmethod
    def print_success(console: Console, message: str) -> None:
        console.print(Text(message, style=ConsoleStyles.SUCCESS))

    @staticmethod
    def print_warning(console: Console, message: str) -> None:
        console.print(Text(message, style=ConsoleStyles.WARNING))

    @staticmethod
    def print_error(console: Console, message: str) -> None:
        console.print(Text(message, style=ConsoleStyles.ERROR))

    @staticmethod
    def print_info(console: Console, message: str) -> None:
        console.print(Text(message, style=ConsoleStyles.INFO))

    @staticmethod
    def summary_table(summary: DatasetGenerationSummary) -> Table:
        """One row per written table, with a totals footer."""
        table = Table(
            title=f"[bold blue]{summary.dataset_id}[/bold blue] "
            f"(scale {summary.scale_factor:g})",
            border_style="blue",
            show_footer=True,
        )
        table.add_column("Table", style="cyan", no_wrap=True, footer="Total")
        table.add_column(
            "Rows", justify="right", style="green", footer=f"{summary.total_rows:,}"
        )
        table.add_column("Batches", justify="right")
        table.add_column(
            "Seconds",
            justify="right",
            footer=f"{summary.total_duration_seconds:.2f}",
        )
        table.add_column("File", style="dim")

        for metrics in summary.table_metrics:
            table.add_row(
                metrics.table_name,
                f"{metrics.rows_written:,}",
                str(metrics.batches_written),
                f"{metrics.total_duration_seconds:.2f}",
                metrics.file_path,
            )
        return table

    @staticmethod
    def plan_table(title: str, rows: Iterable[Dict[str, object]]) -> Table:
        """Configured versus scaled row counts for each table of a dataset."""
        table = Table(title=f"[bold blue]{title}[/bold blue]", border_style="blue")
        table.add_column("Table", style="cyan", no_wrap=True)
        table.add_column("Configured rows", justify="right")
        table.add_column("Rows to generate", justify="right", style="green")
        table.add_column("Columns")

        for row in rows:
            columns: List[str] = row["columns"]  # type: ignore[assignment]
            table.add_row(
                str(row["table"]),
                f"{row['configured_rows']:,}",
                f"{row['scaled_rows']:,}",
                ", ".join(columns),
            )
        return table
