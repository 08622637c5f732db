"""Pure-Python generation engine: sessions, samplers, CSV writer and datasets."""
# ruff: noqa: I001

from __future__ import annotations

from relgen.python_libs.python.generation_session import GenerationSession
from relgen.python_libs.python.row_builder import RowBuilder, RowView, materialize_row
from relgen.python_libs.python.samplers import (
    DEFAULT_KEY,
    BiasedSampler,
    ColumnReference,
    biased,
    from_column,
    keyed_by,
)
from relgen.python_libs.python.csv_writer import CsvTableWriter, WriteResult

__all__ = [
    "DEFAULT_KEY",
    "BiasedSampler",
    "ColumnReference",
    "CsvTableWriter",
    "GenerationSession",
    "RowBuilder",
    "RowView",
    "WriteResult",
    "biased",
    "from_column",
    "keyed_by",
    "materialize_row",
]
