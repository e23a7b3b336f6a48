"""
Mock Data Selector
==================

Produce concrete Python mock values for a field from its semantic type and
Prisma type, backed by the Faker library.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Optional

from faker import Faker

from prisma_zod_mock.config.logging import get_logger
from .field_name_analyzer import SemanticType, semantic_fits_type

logger = get_logger(__name__)

# Prisma locale names are short ("en", "ja"); Faker wants a region
LOCALE_ALIASES = {
    "en": "en_US",
    "ja": "ja_JP",
    "de": "de_DE",
    "fr": "fr_FR",
    "es": "es_ES",
    "it": "it_IT",
    "ko": "ko_KR",
    "zh": "zh_CN",
    "pt": "pt_BR",
    "nl": "nl_NL",
}


# Prisma scalar types generate_by_field_type can produce
SUPPORTED_FIELD_TYPES = frozenset(
    {"String", "Int", "Float", "Decimal", "Boolean", "DateTime", "BigInt", "Json", "Bytes"}
)


class UnsupportedFieldTypeError(ValueError):
    """Raised when no value can be produced for a Prisma type."""

    pass


@dataclass
class MockOptions:
    """Bounds and seed for generated values."""
    min: Optional[float] = None
    max: Optional[float] = None
    seed: Optional[int] = None


def resolve_locale(locale: str) -> str:
    """Map a Prisma-style locale to a Faker locale."""
    normalized = locale.replace("-", "_")
    return LOCALE_ALIASES.get(normalized.lower(), normalized)


class MockDataSelector:
    """Select Faker-generated values by semantic type and field type."""

    def __init__(
        self,
        locale: str = "en",
        seed: Optional[int] = None,
        faker: Optional[Faker] = None,
        date_range_days: int = 30,
    ) -> None:
        self.logger: Any = logger.bind(component="mock_data_selector")
        self.faker = faker if faker is not None else Faker(resolve_locale(locale))
        self.date_range_days = date_range_days
        if seed is not None:
            self.faker.seed_instance(seed)

    def select(
        self,
        semantic_type: SemanticType,
        field_type: str,
        field_name: Optional[str] = None,
        options: Optional[MockOptions] = None,
    ) -> Any:
        """
        Produce a mock value.

        Args:
            semantic_type: Classification of the field name
            field_type: Prisma scalar type
            field_name: Field name, used to refine some semantic types
            options: Optional numeric bounds and seed

        Returns:
            A Python value suitable for the field type

        Raises:
            UnsupportedFieldTypeError: If the type has no generator
        """
        if options and options.seed is not None:
            self.faker.seed_instance(options.seed)

        if semantic_fits_type(semantic_type, field_type):
            return self._select_semantic(semantic_type, field_type, (field_name or "").lower())
        return self.generate_by_field_type(field_type, options)

    def _select_semantic(self, semantic_type: SemanticType, field_type: str, name: str) -> Any:
        fake = self.faker

        if semantic_type == SemanticType.EMAIL:
            return fake.email()
        if semantic_type == SemanticType.NAME:
            if "first" in name:
                return fake.first_name()
            if "last" in name:
                return fake.last_name()
            return fake.name()
        if semantic_type == SemanticType.PHONE:
            return fake.phone_number()
        if semantic_type == SemanticType.ADDRESS:
            if "city" in name:
                return fake.city()
            if "zip" in name or "postal" in name:
                return fake.postcode()
            return fake.street_address()
        if semantic_type == SemanticType.URL:
            return fake.url()
        if semantic_type == SemanticType.DESCRIPTION:
            return fake.paragraph()
        if semantic_type == SemanticType.TITLE:
            return fake.sentence()
        if semantic_type == SemanticType.DATE:
            if "birth" in name:
                return fake.date_time_between(
                    start_date="-80y", end_date="-18y", tzinfo=timezone.utc
                )
            return self._recent_datetime()
        if semantic_type == SemanticType.IMAGE:
            if "avatar" in name:
                return fake.image_url(width=128, height=128)
            return fake.image_url()
        if semantic_type == SemanticType.PRICE:
            price = fake.pydecimal(right_digits=2, min_value=1, max_value=9999)
            if field_type == "Decimal":
                return price
            if field_type == "Float":
                return float(price)
            return int(price)
        if semantic_type == SemanticType.COUNTRY:
            return fake.country()
        if semantic_type == SemanticType.COMPANY:
            return fake.company()

        return self.generate_by_field_type(field_type)

    def _recent_datetime(self) -> datetime:
        return self.faker.date_time_between(
            start_date=timedelta(days=-self.date_range_days), end_date="now", tzinfo=timezone.utc
        )

    def generate_by_field_type(self, field_type: str, options: Optional[MockOptions] = None) -> Any:
        """Fallback value for a bare Prisma type."""
        fake = self.faker
        low = options.min if options and options.min is not None else None
        high = options.max if options and options.max is not None else None

        if field_type == "String":
            return fake.pystr(min_chars=10, max_chars=10)
        if field_type == "Int":
            return fake.random_int(
                min=int(low) if low is not None else 1, max=int(high) if high is not None else 1000
            )
        if field_type in ("Float", "Decimal"):
            value = round(
                fake.pyfloat(
                    min_value=low if low is not None else 0,
                    max_value=high if high is not None else 1000,
                ),
                2,
            )
            return Decimal(str(value)) if field_type == "Decimal" else value
        if field_type == "Boolean":
            return fake.pybool()
        if field_type == "DateTime":
            return self._recent_datetime()
        if field_type == "BigInt":
            return fake.random_int(min=1, max=1000000)
        if field_type == "Json":
            return {
                "key": fake.pystr(min_chars=5, max_chars=5),
                "value": fake.random_int(min=1, max=100),
            }
        if field_type == "Bytes":
            return fake.pystr(min_chars=32, max_chars=32).encode("ascii")

        raise UnsupportedFieldTypeError(f"Unsupported field type: {field_type}")


_default_selector: Optional[MockDataSelector] = None


def select_mock_data(
    semantic_type: SemanticType,
    field_type: str,
    field_name: Optional[str] = None,
    options: Optional[MockOptions] = None,
) -> Any:
    """Select a mock value using a shared default selector."""
    global _default_selector
    if _default_selector is None:
        _default_selector = MockDataSelector()
    return _default_selector.select(semantic_type, field_type, field_name, options)
