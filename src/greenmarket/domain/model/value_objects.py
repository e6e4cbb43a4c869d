"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from greenmarket.domain.exceptions import ValidationError

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def to_decimal(value: str | int | Decimal, what: str = "amount") -> Decimal:
    """Convenient coercion to a finite Decimal."""
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid {what}: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {what}: {value!r}")
    return result


@dataclass(frozen=True)
class Quantity:
    """A non-negative amount of product in a unit of measure.

    The unit is normalised to lowercase so ``"KG"`` and ``"kg"`` compare
    equal.
    """

    value: Decimal
    unit: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Quantity value must be a Decimal, got {type(self.value).__name__}"
            )
        if self.value < Decimal("0"):
            raise ValidationError("Quantity cannot be negative")
        if not self.unit or not self.unit.strip():
            raise ValidationError("Unit of measure cannot be empty")
        object.__setattr__(self, "unit", self.unit.strip().lower())

    def reduce(self, amount: Decimal) -> Quantity:
        return Quantity(self.value - amount, self.unit)

    def increase(self, amount: Decimal) -> Quantity:
        return Quantity(self.value + amount, self.unit)

    def __str__(self) -> str:
        return f"{self.value} {self.unit}"

    @staticmethod
    def of(value: str | int | Decimal, unit: str) -> Quantity:
        return Quantity(to_decimal(value, "quantity"), unit)


@dataclass(frozen=True)
class Price:
    """Monetary price per unit.

    Uses Decimal to avoid floating-point rounding errors. The currency is
    normalised to uppercase; no conversion between currencies exists.
    """

    value: Decimal
    currency: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Price value must be a Decimal, got {type(self.value).__name__}"
            )
        if self.value < Decimal("0"):
            raise ValidationError("Price cannot be negative")
        if not self.currency or not self.currency.strip():
            raise ValidationError("Currency cannot be empty")
        object.__setattr__(self, "currency", self.currency.strip().upper())

    def __str__(self) -> str:
        return f"{self.value:.2f} {self.currency}"

    @staticmethod
    def of(value: str | int | Decimal, currency: str) -> Price:
        return Price(to_decimal(value, "price"), currency)


@dataclass(frozen=True)
class Location:
    address: str
    city: str
    country: str

    def __post_init__(self) -> None:
        for label, text in (
            ("Address", self.address),
            ("City", self.city),
            ("Country", self.country),
        ):
            if not text or not text.strip():
                raise ValidationError(f"{label} cannot be empty")

    def __str__(self) -> str:
        return f"{self.address}, {self.city}, {self.country}"


@dataclass(frozen=True)
class Email:
    """An email address, stored lowercase."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationError("Email cannot be empty")
        if not _EMAIL_PATTERN.match(self.value.strip()):
            raise ValidationError(f"Invalid email format: '{self.value}'")
        object.__setattr__(self, "value", self.value.strip().lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PasswordHash:
    """An opaque password hash. Plain-text passwords never reach the domain."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationError("Password hash cannot be empty")

    def __repr__(self) -> str:
        return "PasswordHash('***')"

    __str__ = __repr__
