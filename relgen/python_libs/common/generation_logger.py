"""
Generation Logging

This module provides logging for relational data generation: per-table write
metrics, a dataset-level summary and a logger wrapper that reports both and can
export the summary as JSON.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class TableWriteMetrics:
    """Metrics for one generated and written table."""

    table_name: str
    file_path: str
    rows_written: int
    configured_rows: int
    batches_written: int
    column_count: int
    generation_duration_seconds: float
    write_duration_seconds: float

    @property
    def total_duration_seconds(self) -> float:
        return self.generation_duration_seconds + self.write_duration_seconds

    @property
    def rows_per_second(self) -> float:
        """Calculate generation and write rate in rows per second."""
        if self.total_duration_seconds <= 0:
            return 0.0
        return self.rows_written / self.total_duration_seconds

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["rows_per_second"] = round(self.rows_per_second, 2)
        return data


@dataclass
class DatasetGenerationSummary:
    """Summary of an entire dataset run."""

    dataset_id: str
    scale_factor: float
    output_dir: str
    generation_timestamp: str = field(
        default_factory=lambda: datetime.now().isoformat(timespec="seconds")
    )
    table_metrics: List[TableWriteMetrics] = field(default_factory=list)

    @property
    def total_tables(self) -> int:
        return len(self.table_metrics)

    @property
    def total_rows(self) -> int:
        return sum(m.rows_written for m in self.table_metrics)

    @property
    def total_duration_seconds(self) -> float:
        return sum(m.total_duration_seconds for m in self.table_metrics)

    def get_table_by_name(self, table_name: str) -> Optional[TableWriteMetrics]:
        """Get metrics for a specific table."""
        return next(
            (m for m in self.table_metrics if m.table_name == table_name), None
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dataset_id": self.dataset_id,
            "scale_factor": self.scale_factor,
            "output_dir": self.output_dir,
            "generation_timestamp": self.generation_timestamp,
            "total_tables": self.total_tables,
            "total_rows": self.total_rows,
            "total_duration_seconds": round(self.total_duration_seconds, 3),
            "tables": [m.to_dict() for m in self.table_metrics],
        }


class GenerationLogger:
    """Logger for dataset generation with table and dataset level reporting."""

    def __init__(
        self,
        logger_name: str = "relgen",
        log_level: int = logging.INFO,
        enable_console_output: bool = True,
        log_file_path: Optional[Union[str, Path]] = None,
    ):
        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(log_level)

        # Clear existing handlers to avoid duplicates
        self.logger.handlers.clear()

        formatter = logging.Formatter(LOG_FORMAT)

        if enable_console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file_path:
            file_handler = logging.FileHandler(log_file_path)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def log_table_start(self, table_name: str, target_rows: int, configured_rows: int):
        """Log the start of table generation."""
        self.logger.info(f"Starting generation for {table_name}")
        self.logger.info(
            f"   Target rows: {target_rows:,} (configured {configured_rows:,})"
        )

    def log_table_complete(self, metrics: TableWriteMetrics):
        """Log the completion of a table with its metrics."""
        self.logger.info(f"Completed {metrics.table_name}")
        self.logger.info(f"   Rows written: {metrics.rows_written:,}")
        self.logger.info(f"   Batches: {metrics.batches_written}")
        self.logger.info(
            f"   Duration: {metrics.total_duration_seconds:.2f} seconds "
            f"({metrics.rows_per_second:.0f} rows/second)"
        )
        self.logger.info(f"   File: {metrics.file_path}")

    def log_dataset_summary(self, summary: DatasetGenerationSummary):
        """Log a complete dataset generation summary."""
        self.logger.info(f"Dataset generation complete: {summary.dataset_id}")
        self.logger.info(f"   Scale factor: {summary.scale_factor:g}")
        self.logger.info(f"   Total tables: {summary.total_tables}")
        self.logger.info(f"   Total rows: {summary.total_rows:,}")
        self.logger.info(
            f"   Total duration: {summary.total_duration_seconds:.2f} seconds"
        )
        for metrics in summary.table_metrics:
            self.logger.info(
                f"     - {metrics.table_name}: {metrics.rows_written:,} rows"
            )

    def export_summary(
        self, summary: DatasetGenerationSummary, output_path: Union[str, Path]
    ) -> Path:
        """Write the summary as JSON."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(summary.to_dict(), f, indent=2)
        self.logger.info(f"Exported generation summary to {path}")
        return path
