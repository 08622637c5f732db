"""Custom exceptions for relational data generation."""


class RelgenError(Exception):
    """Base exception for generation operations."""

    pass


class ConfigurationError(RelgenError):
    """Error in a table specification, sampler or generation config."""

    pass


class ColumnOrderError(ConfigurationError):
    """A column read another column that is not populated yet in row order."""

    pass


class UnknownColumnError(ConfigurationError):
    """A column name was requested that the table does not declare."""

    pass


class DependencyCycleError(ConfigurationError):
    """A table depends, directly or transitively, on its own rows."""

    def __init__(self, chain):
        self.chain = list(chain)
        super().__init__(
            "Cyclic table dependency: " + " -> ".join(self.chain)
        )


class UnknownDatasetError(ConfigurationError):
    """Requested dataset or table is not registered."""

    pass


class GenerationError(RelgenError):
    """A column generator failed while materializing a row."""

    pass


class EmptyReferenceError(GenerationError):
    """A cross-table reference points at a table with no rows."""

    pass


class FileWriteError(RelgenError):
    """Error writing a table to its output file."""

    pass
