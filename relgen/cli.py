from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from typing_extensions import Annotated

from relgen.cli_utils.console_styles import ConsoleStyles
from relgen.python_libs.common.exceptions import ConfigurationError
from relgen.python_libs.common.generation_config import GenerationConfig
from relgen.python_libs.common.generation_logger import GenerationLogger

console = Console()
console_styles = ConsoleStyles()

app = typer.Typer(no_args_is_help=True, pretty_exceptions_show_locals=False)


@app.callback()
def main(
    ctx: typer.Context,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the generated CSV files. Defaults to RELGEN_OUTPUT_DIR or the current directory.",
        ),
    ] = None,
    scale: Annotated[
        Optional[str],
        typer.Option(
            "--scale",
            "-s",
            help="Multiplier applied to every table's row count, e.g. 0.1 or 1/10. Defaults to RELGEN_SCALE_FACTOR or 1.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log generation progress to stderr."),
    ] = False,
):
    """Generate relational synthetic datasets as CSV files."""
    try:
        config = GenerationConfig.from_env().with_overrides(
            {"output_dir": output_dir, "scale_factor": scale}
        )
    except ConfigurationError as e:
        console_styles.print_error(console, f"Error: {e}")
        raise typer.Exit(code=1)

    gen_logger = GenerationLogger(
        log_level=logging.DEBUG if verbose else logging.WARNING,
    )

    ctx.obj = {"config": config, "logger": gen_logger}


@app.command("generate")
def generate(
    ctx: typer.Context,
    dataset: Annotated[
        str,
        typer.Argument(help="Dataset ID (see 'relgen list')"),
    ] = "business",
    table: Annotated[
        Optional[List[str]],
        typer.Option(
            "--table",
            "-t",
            help="Only write this table. Repeat to select several. Referenced tables are still generated in memory.",
        ),
    ] = None,
    scale: Annotated[
        Optional[str],
        typer.Option("--scale", "-s", help="Override the scale factor for this run"),
    ] = None,
    output_dir: Annotated[
        Optional[str],
        typer.Option("--output-dir", "-o", help="Override the output directory"),
    ] = None,
    batch_size: Annotated[
        Optional[int],
        typer.Option("--batch-size", help="Rows appended to the CSV file per batch"),
    ] = None,
    parameters: Annotated[
        Optional[str],
        typer.Option(
            "--parameters",
            "-p",
            help='JSON object of configuration overrides (e.g. \'{"scale_factor": 0.01, "locale": "en_GB"}\')',
        ),
    ] = None,
    summary_file: Annotated[
        Optional[str],
        typer.Option("--summary-file", help="Write a JSON generation summary to this path"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the planned row counts without generating files"),
    ] = False,
):
    """
    Generate a dataset and write one CSV file per table.

    Examples:
      # Full-size business dataset in the current directory
      relgen generate

      # A tenth of the rows, into ./out
      relgen generate business --scale 1/10 --output-dir out

      # Only companies and people
      relgen generate business -t companies -t people --scale 0.01
    """
    # Deferred so that pandas and faker load only when a command runs
    from relgen.cli_utils import generate_commands

    generate_commands.generate(
        ctx=ctx,
        dataset_id=dataset,
        tables=table,
        scale=scale,
        output_dir=output_dir,
        batch_size=batch_size,
        parameters=parameters,
        summary_file=summary_file,
        dry_run=dry_run,
    )


@app.command("list")
def list_datasets(
    ctx: typer.Context,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format: 'table' (formatted) or 'json' (machine-readable)",
        ),
    ] = "table",
):
    """
    List available datasets and their tables.

    Row counts are shown both as configured and after the scale factor.
    """
    from relgen.cli_utils import generate_commands

    generate_commands.list_datasets(ctx=ctx, output_format=output_format)


if __name__ == "__main__":
    app()
