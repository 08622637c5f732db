"""Tests for Faker-backed value providers."""

import re
from datetime import datetime, timedelta

import pytest
from faker import Faker

from relgen.python_libs.common.exceptions import ConfigurationError
from relgen.python_libs.common.table_spec import accepts_row
from relgen.python_libs.python.value_providers import (
    DEPARTMENTS,
    MATERIALS,
    ValueProviders,
)


@pytest.fixture
def providers():
    fake = Faker("en_US")
    fake.seed_instance(1234)
    return ValueProviders(faker=fake)


class TestValueProviders:
    """Tests for the scalar value generators used by the business dataset."""

    @pytest.mark.parametrize(
        "method, prefix",
        [("company_id", "cmp-"), ("product_id", "prd-"), ("order_id", "ord-")],
    )
    def test_prefixed_ids(self, providers, method, prefix):
        value = getattr(providers, method)()
        assert re.fullmatch(re.escape(prefix) + r"[a-z]{10}", value)

    def test_address_ends_with_state_and_zip(self, providers):
        assert re.search(r", [A-Z]{2} \d{5}$", providers.address())

    def test_salary_is_whole_thousands(self, providers):
        for _ in range(50):
            salary = providers.salary()
            assert 30_000 <= salary <= 250_000
            assert salary % 1_000 == 0

    def test_price_has_two_decimals(self, providers):
        assert re.fullmatch(r"\d+\.\d{2}", providers.price())

    def test_product_values_from_word_lists(self, providers):
        assert providers.department() in DEPARTMENTS
        assert providers.material() in MATERIALS
        assert len(providers.product_name().split()) == 3

    def test_past_timestamp_within_three_years(self, providers):
        moment = datetime.fromisoformat(providers.past_timestamp())
        assert datetime.now() - timedelta(days=3 * 366) <= moment <= datetime.now()

    def test_providers_are_zero_argument_generators(self, providers):
        for name in ["company_name", "mission", "address", "salary", "past_timestamp"]:
            assert accepts_row(getattr(providers, name)) is False

    def test_ids_are_lowercase_across_draws(self, providers):
        for _ in range(50):
            assert providers.order_id()[4:].islower()

    def test_unknown_locale_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Unknown Faker locale 'xx_YY'"):
            ValueProviders("xx_YY")
