"""Configuration, errors, table specifications and logging shared by the engine."""

from relgen.python_libs.common.exceptions import (
    ColumnOrderError,
    ConfigurationError,
    DependencyCycleError,
    EmptyReferenceError,
    FileWriteError,
    GenerationError,
    RelgenError,
    UnknownColumnError,
    UnknownDatasetError,
)
from relgen.python_libs.common.generation_config import GenerationConfig
from relgen.python_libs.common.table_spec import TableSpec

__all__ = [
    "ColumnOrderError",
    "ConfigurationError",
    "DependencyCycleError",
    "EmptyReferenceError",
    "FileWriteError",
    "GenerationConfig",
    "GenerationError",
    "RelgenError",
    "TableSpec",
    "UnknownColumnError",
    "UnknownDatasetError",
]
