"""
Abstract interfaces for column generators and generation sessions.

A column generator produces one value for one column of an in-progress row. It
receives a read-only view of the columns already populated in that row and the
session that owns every cache, so that it can reach other tables' rows.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Hashable, List, Mapping, Sequence

if TYPE_CHECKING:
    from relgen.python_libs.common.table_spec import TableSpec


class IColumnGenerator(ABC):
    """Abstract interface for anything that fills one column of a row."""

    @abstractmethod
    def generate(self, row: Mapping[str, Any], session: "IGenerationSession") -> Any:
        """Produce the value for this column of ``row``."""
        pass

    def describe(self) -> str:
        """Short human-readable description used in listings."""
        return type(self).__name__


class IGenerationSession(ABC):
    """Abstract interface for the owner of generated rows and derived caches."""

    @abstractmethod
    def rows_of(self, spec: "TableSpec") -> Sequence[Mapping[str, Any]]:
        """Return the full, cached row set of ``spec``."""
        pass

    @abstractmethod
    def distinct_values_of(self, spec: "TableSpec", column: str) -> Sequence[Any]:
        """Return the distinct values of ``column`` in ``spec``'s rows."""
        pass

    @abstractmethod
    def sample_from(self, spec: "TableSpec", column: str) -> Any:
        """Draw one value uniformly from ``column``'s distinct values."""
        pass

    @abstractmethod
    def pool_for(self, owner: IColumnGenerator, key: Hashable) -> List[Any]:
        """Return the mutable value pool kept for ``owner`` under ``key``."""
        pass
