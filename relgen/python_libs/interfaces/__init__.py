"""Abstract interfaces shared by the generation engine."""

from relgen.python_libs.interfaces.column_generator_interface import (
    IColumnGenerator,
    IGenerationSession,
)

__all__ = ["IColumnGenerator", "IGenerationSession"]
