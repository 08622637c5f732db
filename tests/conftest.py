"""Shared fixtures for relgen tests."""

import itertools

import pytest

from relgen.python_libs.common.generation_config import GenerationConfig
from relgen.python_libs.common.table_spec import TableSpec
from relgen.python_libs.python.generation_session import GenerationSession
from relgen.python_libs.python.samplers import from_column


def counter(prefix: str):
    """Value generator producing unique strings: prefix-0, prefix-1, ..."""
    numbers = itertools.count()
    return lambda: f"{prefix}-{next(numbers)}"


@pytest.fixture
def config(tmp_path):
    return GenerationConfig(output_dir=tmp_path / "out")


@pytest.fixture
def session(config):
    return GenerationSession(config)


@pytest.fixture
def company_spec():
    return TableSpec(
        name="companies",
        num_rows=3,
        columns={
            "Name": counter("Company"),
            "ID": counter("cmp"),
        },
    )


@pytest.fixture
def person_spec(company_spec):
    return TableSpec(
        name="people",
        num_rows=5,
        columns={
            "Name": counter("Person"),
            "CompanyID": from_column(company_spec, "ID"),
        },
    )


@pytest.fixture
def make_counter():
    return counter
