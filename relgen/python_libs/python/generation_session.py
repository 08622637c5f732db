"""
Lazy, memoized table generation.

A ``GenerationSession`` owns every cache produced while generating a dataset:
the row set of each table, the distinct-value index of each referenced column
and the pools of every biased sampler. Tables are generated on first request,
and a column that references another table triggers that table's generation
first. Caches live as long as the session; independent sessions share nothing.
A table whose generation fails is not cached, and the values its biased
columns pooled for the discarded rows are dropped.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Dict, Hashable, List, Optional, Tuple

from relgen.python_libs.common.exceptions import (
    DependencyCycleError,
    EmptyReferenceError,
    UnknownColumnError,
)
from relgen.python_libs.common.generation_config import GenerationConfig
from relgen.python_libs.common.table_spec import TableSpec
from relgen.python_libs.interfaces.column_generator_interface import (
    IColumnGenerator,
    IGenerationSession,
)
from relgen.python_libs.python.row_builder import Row, materialize_row

logger = logging.getLogger(__name__)


class GenerationSession(IGenerationSession):
    """Owns generated rows, column indexes and sampler pools for one run."""

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.config = config or GenerationConfig()
        self._rows: Dict[TableSpec, Tuple[Row, ...]] = {}
        self._indexes: Dict[TableSpec, Dict[str, Tuple[Any, ...]]] = {}
        self._pools: Dict[IColumnGenerator, Dict[Hashable, List[Any]]] = {}
        self._generating: List[TableSpec] = []

    def target_rows(self, spec: TableSpec) -> int:
        """Number of rows ``spec`` produces under this session's scale factor."""
        return self.config.scaled_rows(spec.num_rows)

    def is_generated(self, spec: TableSpec) -> bool:
        return spec in self._rows

    def rows_of(self, spec: TableSpec) -> Tuple[Row, ...]:
        """Return the rows of ``spec``, generating them on first request."""
        rows = self._rows.get(spec)
        if rows is not None:
            logger.debug(f"Row cache hit for {spec.name}")
            return rows

        if spec in self._generating:
            start = self._generating.index(spec)
            chain = [s.name for s in self._generating[start:]] + [spec.name]
            raise DependencyCycleError(chain)

        num_rows = self.target_rows(spec)
        logger.debug(f"Generating {spec.name}: {num_rows:,} rows")
        started = time.perf_counter()

        marks = self._pool_marks(spec)
        self._generating.append(spec)
        try:
            generated = tuple(
                materialize_row(spec, self, row_index)
                for row_index in range(num_rows)
            )
        except Exception:
            self._rollback_pools(marks)
            raise
        finally:
            self._generating.pop()

        self._rows[spec] = generated
        logger.info(
            f"Generated {spec.name}: {len(generated):,} rows in "
            f"{time.perf_counter() - started:.2f} seconds"
        )
        return generated

    def distinct_values_of(self, spec: TableSpec, column: str) -> Tuple[Any, ...]:
        """Return the distinct values of ``column`` across ``spec``'s rows."""
        if not spec.has_column(column):
            raise UnknownColumnError(
                f"Table '{spec.name}' has no column '{column}'. "
                f"Declared columns: {spec.column_names}"
            )

        columns = self._indexes.setdefault(spec, {})
        values = columns.get(column)
        if values is None:
            values = tuple({row[column] for row in self.rows_of(spec)})
            columns[column] = values
            logger.debug(
                f"Indexed {spec.name}.{column}: {len(values):,} distinct values"
            )
        return values

    def sample_from(self, spec: TableSpec, column: str) -> Any:
        """Draw one value uniformly from the distinct values of ``column``."""
        values = self.distinct_values_of(spec, column)
        if not values:
            raise EmptyReferenceError(
                f"Cannot reference {spec.name}.{column}: table '{spec.name}' "
                f"has no rows (configured {spec.num_rows}, scale factor "
                f"{self.config.scale_factor})"
            )
        return random.choice(values)

    def pool_for(self, owner: IColumnGenerator, key: Hashable) -> List[Any]:
        """Return the live pool kept for ``owner`` under ``key``."""
        return self._pools.setdefault(owner, {}).setdefault(key, [])

    def pool_snapshot(self, owner: IColumnGenerator) -> Dict[Hashable, List[Any]]:
        """Copy of every pool kept for ``owner``, keyed by clustering key."""
        return {key: list(pool) for key, pool in self._pools.get(owner, {}).items()}

    def _pool_marks(self, spec: TableSpec) -> Dict[IColumnGenerator, Dict[Hashable, int]]:
        """Pool lengths of ``spec``'s column generators before generation."""
        return {
            owner: {key: len(pool) for key, pool in self._pools.get(owner, {}).items()}
            for owner in spec.columns.values()
        }

    def _rollback_pools(self, marks: Dict[IColumnGenerator, Dict[Hashable, int]]) -> None:
        """Drop values pooled for rows of a table whose generation failed."""
        for owner, lengths in marks.items():
            pools = self._pools.get(owner)
            if pools is None:
                continue
            for key in list(pools):
                if key in lengths:
                    del pools[key][lengths[key] :]
                else:
                    del pools[key]
            if not pools:
                del self._pools[owner]
        logger.debug(f"Rolled back sampler pools of {len(marks)} columns")

    def cached_tables(self) -> List[str]:
        """Names of the tables generated so far, in generation order."""
        return [spec.name for spec in self._rows]
