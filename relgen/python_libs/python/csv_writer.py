"""CsvTableWriter for exporting generated tables to CSV files."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

import pandas as pd

from relgen.python_libs.common.exceptions import FileWriteError
from relgen.python_libs.common.generation_config import GenerationConfig
from relgen.python_libs.common.table_spec import TableSpec
from relgen.python_libs.python.generation_session import GenerationSession
from relgen.python_libs.python.row_builder import Row

logger = logging.getLogger(__name__)

CSV_OPTIONS = {
    "index": False,
    "lineterminator": "\n",
    "encoding": "utf-8",
}


@dataclass
class WriteResult:
    """Result of writing one table."""

    table_name: str
    file_path: str
    rows_written: int
    batches_written: int
    column_count: int
    generation_seconds: float = 0.0
    write_seconds: float = 0.0


def chunked(rows: Sequence[Row], size: int) -> Iterator[Sequence[Row]]:
    """Yield consecutive slices of at most ``size`` rows."""
    for start in range(0, len(rows), size):
        yield rows[start : start + size]


class CsvTableWriter:
    """Writes a session's tables to ``<output_dir>/<table name>.csv``."""

    def __init__(
        self,
        session: GenerationSession,
        config: Optional[GenerationConfig] = None,
    ):
        self.session = session
        self.config = config or session.config
        self.logger = logger

    def output_path(self, spec: TableSpec) -> Path:
        return Path(self.config.output_dir) / f"{spec.name}.csv"

    def write(self, spec: TableSpec) -> WriteResult:
        """
        Generate (if needed) and write one table.

        The header is written first, truncating any existing file. Rows are
        then appended in batches of ``config.batch_size``. A failure part way
        through leaves a partial file that must not be used.
        """
        started = time.perf_counter()
        rows = self.session.rows_of(spec)
        generated = time.perf_counter()

        path = self.output_path(spec)
        columns: List[str] = spec.column_names
        batches = 0

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            pd.DataFrame(columns=columns).to_csv(path, mode="w", **CSV_OPTIONS)

            for batch in chunked(rows, self.config.batch_size):
                # object dtype: a value's text must not depend on its batch
                frame = pd.DataFrame(
                    [tuple(row[c] for c in columns) for row in batch],
                    columns=columns,
                    dtype=object,
                )
                frame.to_csv(path, mode="a", header=False, **CSV_OPTIONS)
                batches += 1
                self.logger.debug(
                    f"Appended batch {batches} ({len(batch):,} rows) to {path}"
                )
        except OSError as e:
            raise FileWriteError(
                f"Failed writing table '{spec.name}' to {path}: {e}"
            ) from e

        finished = time.perf_counter()
        self.logger.info(
            f"Exported {spec.name} with {len(rows):,} rows to {path}"
        )
        return WriteResult(
            table_name=spec.name,
            file_path=str(path),
            rows_written=len(rows),
            batches_written=batches,
            column_count=len(columns),
            generation_seconds=generated - started,
            write_seconds=finished - generated,
        )

    def write_all(self, specs: Sequence[TableSpec]) -> List[WriteResult]:
        """Write each table in the given order."""
        return [self.write(spec) for spec in specs]
