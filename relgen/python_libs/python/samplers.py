"""
Column samplers.

``ColumnReference`` fills a foreign-key-like column with values that occur in
another table. ``BiasedSampler`` wraps a value generator so that values are
reused from a growing per-key pool, which yields a skewed, clustered
distribution instead of uniform noise.
"""

from __future__ import annotations

import random
from typing import Any, Callable, Hashable, Mapping, Optional

from relgen.python_libs.common.exceptions import ConfigurationError
from relgen.python_libs.common.table_spec import (
    ColumnSource,
    TableSpec,
    as_column_generator,
)
from relgen.python_libs.interfaces.column_generator_interface import (
    IColumnGenerator,
    IGenerationSession,
)

DEFAULT_SKIP_PROBABILITY = 0.1


class _DefaultKey:
    """Pool key shared by every row of an unkeyed sampler."""

    def __repr__(self) -> str:
        return "DEFAULT_KEY"


DEFAULT_KEY = _DefaultKey()


class ColumnReference(IColumnGenerator):
    """Draws a value uniformly from another table's distinct column values."""

    def __init__(self, spec: TableSpec, column: str):
        if not isinstance(spec, TableSpec):
            raise ConfigurationError(
                f"ColumnReference target must be a TableSpec, got {spec!r}"
            )
        if not spec.has_column(column):
            raise ConfigurationError(
                f"ColumnReference target table '{spec.name}' has no column "
                f"'{column}'. Declared columns: {spec.column_names}"
            )
        self.spec = spec
        self.column = column

    def generate(self, row: Mapping[str, Any], session: IGenerationSession) -> Any:
        return session.sample_from(self.spec, self.column)

    def describe(self) -> str:
        return f"reference to {self.spec.name}.{self.column}"


def from_column(spec: TableSpec, column: str) -> ColumnReference:
    """Shorthand for declaring a cross-table reference column."""
    return ColumnReference(spec, column)


class BiasedSampler(IColumnGenerator):
    """
    Reuses previously emitted values to produce a clustered distribution.

    For each row the clustering key is computed with ``key_of`` (or the
    default key). When the pool for that key is empty, or a uniform draw falls
    below ``skip_probability``, a fresh value comes from ``base``; otherwise a
    value is picked uniformly from the pool. The emitted value is always
    appended to the pool, so frequently emitted values become ever more likely.

    Pools are kept by the generation session, not by the sampler, so the same
    sampler can be used by independent sessions.
    """

    def __init__(
        self,
        base: ColumnSource,
        key_of: Optional[Callable[[Mapping[str, Any]], Hashable]] = None,
        skip_probability: float = DEFAULT_SKIP_PROBABILITY,
    ):
        if isinstance(skip_probability, bool) or not isinstance(
            skip_probability, (int, float)
        ):
            raise ConfigurationError(
                f"skip_probability must be a number, got {skip_probability!r}"
            )
        if not 0.0 <= skip_probability <= 1.0:
            raise ConfigurationError(
                f"skip_probability must be between 0 and 1, got {skip_probability}"
            )
        if key_of is not None and not callable(key_of):
            raise ConfigurationError(f"key_of {key_of!r} is not callable")

        self.base = as_column_generator(base)
        self.key_of = key_of
        self.skip_probability = float(skip_probability)

    def key_for(self, row: Mapping[str, Any]) -> Hashable:
        if self.key_of is None:
            return DEFAULT_KEY
        return self.key_of(row)

    def generate(self, row: Mapping[str, Any], session: IGenerationSession) -> Any:
        pool = session.pool_for(self, self.key_for(row))
        if not pool or random.random() < self.skip_probability:
            value = self.base.generate(row, session)
        else:
            value = random.choice(pool)
        pool.append(value)
        return value

    def describe(self) -> str:
        keyed = " keyed" if self.key_of is not None else ""
        return f"biased{keyed} {self.base.describe()} (p={self.skip_probability:g})"


def biased(
    base: ColumnSource,
    key_of: Optional[Callable[[Mapping[str, Any]], Hashable]] = None,
    skip_probability: float = DEFAULT_SKIP_PROBABILITY,
) -> BiasedSampler:
    """Shorthand for wrapping a value generator in a ``BiasedSampler``."""
    return BiasedSampler(base, key_of=key_of, skip_probability=skip_probability)


def keyed_by(column: str) -> Callable[[Mapping[str, Any]], Hashable]:
    """Clustering key function reading an earlier column of the same row."""

    def key_of(row: Mapping[str, Any]) -> Hashable:
        return row[column]

    key_of.__qualname__ = f"keyed_by({column!r})"
    return key_of
