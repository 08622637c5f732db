"""
Predefined dataset definitions.

A dataset is an ordered group of related ``TableSpec`` objects. The tables
reference each other through ``ColumnReference`` columns, so writing them in
any order yields consistent foreign keys: a referenced table is generated the
first time another table needs it and reused afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from relgen.python_libs.common.exceptions import (
    ConfigurationError,
    UnknownDatasetError,
)
from relgen.python_libs.common.table_spec import TableSpec
from relgen.python_libs.python.samplers import biased, from_column, keyed_by
from relgen.python_libs.python.value_providers import ValueProviders

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    """A named, ordered collection of related table specifications."""

    dataset_id: str
    description: str
    tables: Tuple[TableSpec, ...]

    def __post_init__(self):
        names = [spec.name for spec in self.tables]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Dataset '{self.dataset_id}' has duplicate table names: "
                f"{', '.join(duplicates)}"
            )

    @property
    def table_names(self) -> List[str]:
        return [spec.name for spec in self.tables]

    def table(self, name: str) -> TableSpec:
        for spec in self.tables:
            if spec.name == name:
                return spec
        raise UnknownDatasetError(
            f"Dataset '{self.dataset_id}' has no table '{name}'. "
            f"Available tables: {', '.join(self.table_names)}"
        )

    def select(self, names: Optional[Sequence[str]] = None) -> List[TableSpec]:
        """Tables to write: all of them in order, or the named ones."""
        if not names:
            return list(self.tables)
        return [self.table(name) for name in names]


def build_business_dataset(providers: ValueProviders) -> Dataset:
    """Companies, their people and products, and orders of those products."""
    v = providers

    companies = TableSpec(
        name="companies",
        num_rows=50_000,
        description="Companies with a mission statement and headquarters",
        columns={
            "Name": v.company_name,
            "Mission": v.mission,
            "Address": v.address,
            "Image": v.business_image,
            "URL": v.url,
            "ID": v.company_id,
        },
    )

    people = TableSpec(
        name="people",
        num_rows=200_000,
        description="Employees of the companies, titles and salaries clustered",
        columns={
            "Name": v.full_name,
            "Title": biased(v.job_title),
            "Salary": biased(v.salary, key_of=keyed_by("Title")),
            "Email": v.email,
            "Phone": v.phone,
            "Photo": v.avatar,
            "CompanyID": from_column(companies, "ID"),
        },
    )

    products = TableSpec(
        name="products",
        num_rows=1_000_000,
        description="Products made by the companies, prices clustered by category",
        columns={
            "Name": v.product_name,
            "Material": v.material,
            "Category": biased(v.department),
            "Image": v.product_image,
            "Price": biased(v.price, key_of=keyed_by("Category")),
            "ID": v.product_id,
            "CompanyID": from_column(companies, "ID"),
        },
    )

    orders = TableSpec(
        name="orders",
        num_rows=10_000_000,
        description="Orders of products over the past three years",
        columns={
            "ID": v.order_id,
            "ProductID": from_column(products, "ID"),
            "Quantity": v.quantity,
            "Date": v.past_timestamp,
        },
    )

    return Dataset(
        dataset_id="business",
        description="Companies, people, products and orders with foreign keys",
        tables=(companies, people, products, orders),
    )


DatasetBuilder = Callable[[ValueProviders], Dataset]


class DatasetRegistry:
    """Registry of dataset builders keyed by dataset id."""

    def __init__(self):
        self._builders: Dict[str, Tuple[DatasetBuilder, str]] = {}

    def register(self, dataset_id: str, builder: DatasetBuilder, description: str = ""):
        if dataset_id in self._builders:
            raise ConfigurationError(f"Dataset '{dataset_id}' is already registered")
        self._builders[dataset_id] = (builder, description)

    def get(self, dataset_id: str, providers: ValueProviders) -> Dataset:
        """Build a fresh dataset; every call returns new table specifications."""
        try:
            builder, _ = self._builders[dataset_id]
        except KeyError:
            raise UnknownDatasetError(
                f"Unknown dataset '{dataset_id}'. "
                f"Available datasets: {', '.join(self.available()) or 'none'}"
            ) from None
        logger.debug(f"Building dataset {dataset_id}")
        return builder(providers)

    def available(self) -> List[str]:
        return sorted(self._builders)

    def describe(self) -> Dict[str, str]:
        return {
            dataset_id: description
            for dataset_id, (_, description) in sorted(self._builders.items())
        }


def default_registry() -> DatasetRegistry:
    registry = DatasetRegistry()
    registry.register(
        "business",
        build_business_dataset,
        "Companies, people, products and orders with foreign keys",
    )
    return registry
