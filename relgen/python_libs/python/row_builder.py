"""
Row materialization.

Rows are built column by column in declared order. Each column generator sees
a read-only ``RowView`` over the columns populated so far, so a column may be
derived from earlier ones (a price from a category, a salary from a title).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator

from relgen.python_libs.common.exceptions import (
    ColumnOrderError,
    ConfigurationError,
    GenerationError,
)
from relgen.python_libs.common.table_spec import TableSpec
from relgen.python_libs.interfaces.column_generator_interface import (
    IGenerationSession,
)

logger = logging.getLogger(__name__)

Row = Mapping  # finalized rows are read-only mappings


class RowView(Mapping):
    """Read-only view of an in-progress row."""

    __slots__ = ("_builder",)

    def __init__(self, builder: "RowBuilder"):
        self._builder = builder

    def __getitem__(self, column_name: str) -> Any:
        values = self._builder._values
        if column_name in values:
            return values[column_name]
        raise self._builder._missing_column(column_name)

    def __contains__(self, column_name: object) -> bool:
        if column_name in self._builder._values:
            return True
        if self._builder.spec.has_column(column_name):
            raise self._builder._missing_column(column_name)
        return False

    def get(self, column_name: str, default: Any = None) -> Any:
        """Value of an earlier column, or ``default`` for undeclared names."""
        if column_name in self:
            return self._builder._values[column_name]
        return default

    def __iter__(self) -> Iterator[str]:
        return iter(self._builder._values)

    def __len__(self) -> int:
        return len(self._builder._values)

    def __repr__(self) -> str:
        return f"RowView({dict(self._builder._values)!r})"


class RowBuilder:
    """Collects the values of one row while its columns are evaluated."""

    def __init__(self, spec: TableSpec):
        self.spec = spec
        self._values: Dict[str, Any] = {}
        self._current_column = None
        self._finalized = False
        self.view = RowView(self)

    def set(self, column_name: str, value: Any) -> None:
        if self._finalized:
            raise RuntimeError(
                f"Row for table '{self.spec.name}' is already finalized"
            )
        self._values[column_name] = value

    def finalize(self) -> Row:
        """Freeze the row; the builder cannot be written afterwards."""
        self._finalized = True
        return MappingProxyType(self._values)

    def _missing_column(self, column_name: str) -> ConfigurationError:
        requester = self._current_column or "<unknown>"
        if column_name == requester:
            return ColumnOrderError(
                f"Table '{self.spec.name}': column '{requester}' reads its own value"
            )
        if self.spec.has_column(column_name):
            return ColumnOrderError(
                f"Table '{self.spec.name}': column '{requester}' reads column "
                f"'{column_name}', which is declared after it. Reorder the "
                f"columns so '{column_name}' comes first."
            )
        return ColumnOrderError(
            f"Table '{self.spec.name}': column '{requester}' reads unknown "
            f"column '{column_name}'. Declared columns: {self.spec.column_names}"
        )


def materialize_row(
    spec: TableSpec, session: IGenerationSession, row_index: int = 0
) -> Row:
    """Build one row of ``spec`` by evaluating its columns in order."""
    builder = RowBuilder(spec)
    for column_name, generator in spec.columns.items():
        builder._current_column = column_name
        try:
            value = generator.generate(builder.view, session)
        except (ConfigurationError, GenerationError):
            raise
        except Exception as e:
            raise GenerationError(
                f"Table '{spec.name}', row {row_index}, column '{column_name}': "
                f"{type(e).__name__}: {e}"
            ) from e
        builder.set(column_name, value)
    return builder.finalize()
