"""Tests for lazy, memoized table generation."""

import pytest

from relgen.python_libs.common.exceptions import (
    DependencyCycleError,
    EmptyReferenceError,
    GenerationError,
    UnknownColumnError,
)
from relgen.python_libs.common.generation_config import GenerationConfig
from relgen.python_libs.common.table_spec import TableSpec
from relgen.python_libs.interfaces.column_generator_interface import IColumnGenerator
from relgen.python_libs.python.generation_session import GenerationSession
from relgen.python_libs.python.samplers import DEFAULT_KEY, biased, from_column


class LateReference(IColumnGenerator):
    """Reference resolved by name at generation time, for building cycles."""

    def __init__(self, specs, name, column):
        self.specs = specs
        self.name = name
        self.column = column

    def generate(self, row, session):
        return session.sample_from(self.specs[self.name], self.column)


class TestRowsOf:
    """Tests for row generation and caching."""

    def test_row_count_is_configured_count(self, session, company_spec):
        rows = session.rows_of(company_spec)
        assert len(rows) == 3
        assert [row["ID"] for row in rows] == ["cmp-0", "cmp-1", "cmp-2"]

    @pytest.mark.parametrize("scale, expected", [(1.0, 7), (0.5, 3), (0.1, 0), (2.0, 14)])
    def test_row_count_is_floored_after_scaling(self, make_counter, scale, expected):
        spec = TableSpec(name="t", num_rows=7, columns={"A": make_counter("a")})
        session = GenerationSession(GenerationConfig(scale_factor=scale))
        assert session.target_rows(spec) == expected
        assert len(session.rows_of(spec)) == expected

    def test_repeated_calls_return_identical_rows(self, session, company_spec):
        first = session.rows_of(company_spec)
        second = session.rows_of(company_spec)
        assert first is second
        assert [row["ID"] for row in session.rows_of(company_spec)] == [
            "cmp-0",
            "cmp-1",
            "cmp-2",
        ]

    def test_rows_have_all_columns_in_order(self, session, person_spec):
        for row in session.rows_of(person_spec):
            assert list(row) == ["Name", "CompanyID"]

    def test_independent_sessions_share_nothing(self, config, company_spec):
        first = GenerationSession(config).rows_of(company_spec)
        second = GenerationSession(config).rows_of(company_spec)
        assert first is not second
        assert {row["ID"] for row in first}.isdisjoint(row["ID"] for row in second)

    def test_generation_order_is_recorded(self, session, person_spec):
        session.rows_of(person_spec)
        assert session.cached_tables() == ["companies", "people"]


class TestReferences:
    """Tests for cross-table references."""

    def test_references_resolve_to_existing_values(self, session, company_spec, person_spec):
        people = session.rows_of(person_spec)
        company_ids = {row["ID"] for row in session.rows_of(company_spec)}
        assert len(people) == 5
        assert all(row["CompanyID"] in company_ids for row in people)

    def test_referenced_table_generated_once(self, session):
        calls = []

        def tracked():
            calls.append(1)
            return len(calls)

        source = TableSpec(name="source", num_rows=4, columns={"V": tracked})
        first = TableSpec(name="first", num_rows=10, columns={"V": from_column(source, "V")})
        second = TableSpec(name="second", num_rows=10, columns={"V": from_column(source, "V")})

        session.rows_of(first)
        session.rows_of(second)
        assert len(calls) == 4

    def test_distinct_values_are_deduplicated(self, session):
        values = iter(["a", "b", "a", "c", "b"])
        spec = TableSpec(name="letters", num_rows=5, columns={"L": lambda: next(values)})
        assert sorted(session.distinct_values_of(spec, "L")) == ["a", "b", "c"]

    def test_index_is_stable_across_other_generation(self, session, company_spec, person_spec):
        before = session.distinct_values_of(company_spec, "ID")
        session.rows_of(person_spec)
        assert session.distinct_values_of(company_spec, "ID") is before

    def test_unknown_column_rejected(self, session, company_spec):
        with pytest.raises(UnknownColumnError, match="no column 'Missing'"):
            session.distinct_values_of(company_spec, "Missing")

    def test_reference_to_empty_table_fails(self, make_counter):
        source = TableSpec(name="source", num_rows=1, columns={"ID": make_counter("s")})
        target = TableSpec(name="target", num_rows=10, columns={"Ref": from_column(source, "ID")})
        session = GenerationSession(GenerationConfig(scale_factor=0.5))
        with pytest.raises(EmptyReferenceError, match="source.ID"):
            session.rows_of(target)

    def test_empty_referencing_table_does_not_need_source_rows(self, make_counter):
        source = TableSpec(name="source", num_rows=1, columns={"ID": make_counter("s")})
        target = TableSpec(name="target", num_rows=1, columns={"Ref": from_column(source, "ID")})
        session = GenerationSession(GenerationConfig(scale_factor=0.0))
        assert session.rows_of(target) == ()
        assert not session.is_generated(source)


class TestDependencyCycles:
    """Tests for detecting tables that depend on themselves."""

    def test_self_reference_detected(self, session):
        specs = {}
        specs["loop"] = TableSpec(
            name="loop", num_rows=2, columns={"ID": LateReference(specs, "loop", "ID")}
        )
        with pytest.raises(DependencyCycleError, match="loop -> loop") as exc_info:
            session.rows_of(specs["loop"])
        assert exc_info.value.chain == ["loop", "loop"]

    def test_mutual_reference_detected(self, session):
        specs = {}
        specs["a"] = TableSpec(name="a", num_rows=2, columns={"B": LateReference(specs, "b", "A")})
        specs["b"] = TableSpec(name="b", num_rows=2, columns={"A": LateReference(specs, "a", "B")})
        with pytest.raises(DependencyCycleError, match="a -> b -> a"):
            session.rows_of(specs["a"])

    def test_failed_generation_leaves_nothing_cached(self, session):
        specs = {}
        specs["loop"] = TableSpec(
            name="loop", num_rows=2, columns={"ID": LateReference(specs, "loop", "ID")}
        )
        with pytest.raises(DependencyCycleError):
            session.rows_of(specs["loop"])
        assert not session.is_generated(specs["loop"])
        assert session._generating == []


class TestFailedGeneration:
    """Tests for the state a failed table leaves behind."""

    @staticmethod
    def failing_after(count):
        calls = []

        def value():
            calls.append(1)
            if len(calls) > count:
                raise ValueError("provider exploded")
            return len(calls)

        return value

    def test_pooled_values_of_discarded_rows_are_dropped(self, session, make_counter):
        sampler = biased(make_counter("v"), skip_probability=1.0)
        spec = TableSpec(
            name="broken",
            num_rows=5,
            columns={"V": sampler, "B": self.failing_after(3)},
        )
        with pytest.raises(GenerationError, match="row 3, column 'B'"):
            session.rows_of(spec)
        assert session.pool_snapshot(sampler) == {}

    def test_pools_from_earlier_tables_survive(self, session, make_counter):
        sampler = biased(make_counter("v"), skip_probability=1.0)
        first = TableSpec(name="first", num_rows=2, columns={"V": sampler})
        kept = [row["V"] for row in session.rows_of(first)]

        broken = TableSpec(
            name="broken",
            num_rows=5,
            columns={"V": sampler, "B": self.failing_after(2)},
        )
        with pytest.raises(GenerationError):
            session.rows_of(broken)
        assert session.pool_snapshot(sampler) == {DEFAULT_KEY: kept}
        assert session.is_generated(first)
