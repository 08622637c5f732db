"""
Dataset Generation CLI Commands

This module contains the command implementations for generating and listing
datasets, keeping CLI logic separate from the typer declarations in cli.py.
"""

import json
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console

from relgen.cli_utils.console_styles import ConsoleStyles
from relgen.python_libs.common.exceptions import RelgenError
from relgen.python_libs.common.generation_config import GenerationConfig
from relgen.python_libs.common.generation_logger import (
    DatasetGenerationSummary,
    GenerationLogger,
    TableWriteMetrics,
)
from relgen.python_libs.python.csv_writer import CsvTableWriter
from relgen.python_libs.python.datasets import Dataset, default_registry
from relgen.python_libs.python.generation_session import GenerationSession
from relgen.python_libs.python.value_providers import ValueProviders

console = Console()
console_styles = ConsoleStyles()


def _parse_parameters(parameters: Optional[str]) -> Dict[str, Any]:
    if not parameters:
        return {}
    try:
        parsed = json.loads(parameters)
    except json.JSONDecodeError as e:
        console_styles.print_error(console, f"Error parsing parameters JSON: {e}")
        raise typer.Exit(code=1)
    if not isinstance(parsed, dict):
        console_styles.print_error(console, "Parameters JSON must be an object")
        raise typer.Exit(code=1)
    return parsed


def _plan(dataset: Dataset, config: GenerationConfig, tables=None) -> List[Dict[str, Any]]:
    return [
        {
            "table": spec.name,
            "configured_rows": spec.num_rows,
            "scaled_rows": config.scaled_rows(spec.num_rows),
            "columns": spec.column_names,
        }
        for spec in dataset.select(tables)
    ]


def generate(
    ctx: typer.Context,
    dataset_id: str,
    tables: Optional[List[str]] = None,
    scale: Optional[str] = None,
    output_dir: Optional[str] = None,
    batch_size: Optional[int] = None,
    parameters: Optional[str] = None,
    summary_file: Optional[str] = None,
    dry_run: bool = False,
):
    """
    Generate a dataset and write each selected table to CSV.

    Referenced tables that are not selected are still generated in memory so
    that foreign keys resolve, but only selected tables are written.
    """
    overrides = _parse_parameters(parameters)
    overrides.update(
        {
            key: value
            for key, value in {
                "scale_factor": scale,
                "output_dir": output_dir,
                "batch_size": batch_size,
            }.items()
            if value is not None
        }
    )

    try:
        config = ctx.obj["config"].with_overrides(overrides)
        dataset = default_registry().get(dataset_id, ValueProviders(config.locale))
        plan = _plan(dataset, config, tables)
    except RelgenError as e:
        console_styles.print_error(console, f"Error: {e}")
        raise typer.Exit(code=1)

    if dry_run:
        console.print(ConsoleStyles.plan_table(f"{dataset.dataset_id} (dry run)", plan))
        console_styles.print_warning(
            console, "This was a dry run - no files were generated"
        )
        return

    gen_logger: GenerationLogger = ctx.obj["logger"]
    session = GenerationSession(config)
    writer = CsvTableWriter(session)
    summary = DatasetGenerationSummary(
        dataset_id=dataset.dataset_id,
        scale_factor=config.scale_factor,
        output_dir=str(config.output_dir),
    )

    try:
        for spec in dataset.select(tables):
            gen_logger.log_table_start(
                spec.name, session.target_rows(spec), spec.num_rows
            )
            with console.status(f"Generating {spec.name}..."):
                result = writer.write(spec)
            metrics = TableWriteMetrics(
                table_name=result.table_name,
                file_path=result.file_path,
                rows_written=result.rows_written,
                configured_rows=spec.num_rows,
                batches_written=result.batches_written,
                column_count=result.column_count,
                generation_duration_seconds=result.generation_seconds,
                write_duration_seconds=result.write_seconds,
            )
            gen_logger.log_table_complete(metrics)
            summary.table_metrics.append(metrics)
    except RelgenError as e:
        console_styles.print_error(console, f"Generation failed: {e}")
        console_styles.print_warning(
            console, "Output files written during this run may be incomplete."
        )
        raise typer.Exit(code=1)

    gen_logger.log_dataset_summary(summary)
    console.print(ConsoleStyles.summary_table(summary))

    if summary_file:
        path = gen_logger.export_summary(summary, summary_file)
        console_styles.print_info(console, f"Summary written to {path}")

    console_styles.print_success(
        console,
        f"Generated {summary.total_tables} tables ({summary.total_rows:,} rows) "
        f"in {config.output_dir}",
    )


def list_datasets(ctx: typer.Context, output_format: str = "table"):
    """List registered datasets with configured and scaled row counts."""
    if output_format not in ("table", "json"):
        console_styles.print_error(
            console,
            f"Error: Invalid format '{output_format}'. Must be one of: table, json",
        )
        raise typer.Exit(code=1)

    config: GenerationConfig = ctx.obj["config"]
    registry = default_registry()

    items = {}
    try:
        providers = ValueProviders(config.locale)
        for dataset_id, description in registry.describe().items():
            dataset = registry.get(dataset_id, providers)
            items[dataset_id] = {
                "description": description,
                "scale_factor": config.scale_factor,
                "tables": _plan(dataset, config),
            }
    except RelgenError as e:
        console_styles.print_error(console, f"Error: {e}")
        raise typer.Exit(code=1)

    if output_format == "json":
        console.print_json(json.dumps(items))
        return

    for dataset_id, item in items.items():
        console.print(
            ConsoleStyles.plan_table(
                f"{dataset_id}: {item['description']}", item["tables"]
            )
        )
