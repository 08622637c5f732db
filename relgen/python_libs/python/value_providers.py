"""
Value providers backed by Faker.

Each public method produces one independent scalar draw and takes no
arguments, so it can be used directly as a column generator.
"""

import logging
import string
from datetime import datetime

from faker import Faker

from relgen.python_libs.common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEPARTMENTS = [
    "Automotive",
    "Baby",
    "Beauty",
    "Books",
    "Clothing",
    "Computers",
    "Electronics",
    "Games",
    "Garden",
    "Grocery",
    "Health",
    "Home",
    "Industrial",
    "Jewelery",
    "Kids",
    "Movies",
    "Music",
    "Outdoors",
    "Shoes",
    "Sports",
    "Tools",
    "Toys",
]

MATERIALS = [
    "Bamboo",
    "Bronze",
    "Ceramic",
    "Concrete",
    "Cotton",
    "Fresh",
    "Frozen",
    "Granite",
    "Metal",
    "Plastic",
    "Rubber",
    "Soft",
    "Steel",
    "Wooden",
]

PRODUCT_ADJECTIVES = [
    "Awesome",
    "Ergonomic",
    "Fantastic",
    "Generic",
    "Gorgeous",
    "Handcrafted",
    "Handmade",
    "Incredible",
    "Intelligent",
    "Licensed",
    "Practical",
    "Refined",
    "Rustic",
    "Sleek",
    "Small",
    "Tasty",
    "Unbranded",
]

PRODUCT_NOUNS = [
    "Bacon",
    "Ball",
    "Bike",
    "Car",
    "Chair",
    "Cheese",
    "Chicken",
    "Chips",
    "Computer",
    "Fish",
    "Gloves",
    "Hat",
    "Keyboard",
    "Mouse",
    "Pants",
    "Pizza",
    "Salad",
    "Sausages",
    "Shirt",
    "Shoes",
    "Soap",
    "Table",
    "Towels",
    "Tuna",
]


class ValueProviders:
    """Realistic scalar values drawn from a single Faker instance."""

    def __init__(self, locale: str = "en_US", faker: Faker = None):
        if faker is None:
            try:
                faker = Faker(locale)
            except (AttributeError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Unknown Faker locale {locale!r}: {e}") from e
        self.fake = faker
        self.locale = locale

    # Identifiers

    def prefixed_id(self, prefix: str, length: int = 10) -> str:
        """``prefix`` joined to ``length`` random lowercase letters."""
        letters = self.fake.lexify("?" * length, letters=string.ascii_lowercase)
        return f"{prefix}-{letters}"

    def company_id(self) -> str:
        return self.prefixed_id("cmp")

    def product_id(self) -> str:
        return self.prefixed_id("prd")

    def order_id(self) -> str:
        return self.prefixed_id("ord")

    # Companies

    def company_name(self) -> str:
        return self.fake.company()

    def mission(self) -> str:
        return self.fake.catch_phrase()

    def address(self) -> str:
        """Street address followed by a state abbreviation and matching zip."""
        fake = self.fake
        try:
            state = fake.state_abbr(
                include_territories=False, include_freely_associated_states=False
            )
            zipcode = fake.zipcode_in_state(state_abbr=state)
        except (AttributeError, TypeError):
            # Locales without US states fall back to a one-line full address.
            return fake.address().replace("\n", ", ")
        return f"{fake.street_address()}, {state} {zipcode}"

    def business_image(self) -> str:
        return self.fake.image_url(width=640, height=480)

    def url(self) -> str:
        return self.fake.url()

    # People

    def full_name(self) -> str:
        return self.fake.name()

    def job_title(self) -> str:
        return self.fake.job()

    def salary(self) -> int:
        return self.fake.random_int(min=30_000, max=250_000, step=1_000)

    def email(self) -> str:
        return self.fake.email()

    def phone(self) -> str:
        return self.fake.phone_number()

    def avatar(self) -> str:
        return self.fake.image_url(width=256, height=256)

    # Products

    def product_name(self) -> str:
        fake = self.fake
        return " ".join(
            [
                fake.random_element(PRODUCT_ADJECTIVES),
                fake.random_element(MATERIALS),
                fake.random_element(PRODUCT_NOUNS),
            ]
        )

    def material(self) -> str:
        return self.fake.random_element(MATERIALS)

    def department(self) -> str:
        return self.fake.random_element(DEPARTMENTS)

    def product_image(self) -> str:
        return self.fake.image_url(width=640, height=480)

    def price(self) -> str:
        """Price with two decimals, formatted the way storefronts show it."""
        cents = self.fake.random_int(min=100, max=100_000)
        return f"{cents / 100:.2f}"

    # Orders

    def quantity(self) -> int:
        return self.fake.random_int(min=1, max=99)

    def past_timestamp(self, years: int = 3) -> str:
        moment: datetime = self.fake.date_time_between(
            start_date=f"-{years}y", end_date="now"
        )
        return moment.isoformat(timespec="milliseconds")
