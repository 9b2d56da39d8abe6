"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    @property
    def plain(self) -> str:
        """The amount without a currency sign, e.g. ``"15.00"``."""
        return f"{self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VariantDescriptor:
    """What a client says about a variant: its id plus size and color.

    Two descriptors are equal only when all three fields are equal, which
    is exactly the cart-line identity rule.
    """

    variant_id: str
    size: str
    color: str

    @staticmethod
    def from_raw(raw: dict | None) -> VariantDescriptor | None:
        """Build a descriptor from client input, or None if it is unusable."""
        if not isinstance(raw, dict) or not raw.get("variant_id"):
            return None
        return VariantDescriptor(
            variant_id=str(raw["variant_id"]),
            size=str(raw.get("size") or ""),
            color=str(raw.get("color") or ""),
        )

    def to_raw(self) -> dict:
        return {"variant_id": self.variant_id, "size": self.size, "color": self.color}


@dataclass(frozen=True)
class ShippingAddress:
    street: str
    city: str
    state: str | None
    postal_code: str

    def __post_init__(self) -> None:
        if not (self.street and self.city and self.postal_code):
            raise ValidationError("Shipping address requires street, city and postal code")

    @staticmethod
    def from_raw(raw: dict) -> ShippingAddress:
        return ShippingAddress(
            street=raw.get("street") or "",
            city=raw.get("city") or "",
            state=raw.get("state"),
            postal_code=raw.get("postal_code") or "",
        )

    def to_raw(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
        }


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def new_id() -> str:
    """Generate a fresh entity identifier (UUID4, hex form)."""
    return uuid.uuid4().hex


def is_valid_id(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def ensure_valid_id(value: object, kind: str) -> str:
    """Return *value* unchanged, or raise ValidationError for a malformed id."""
    if not is_valid_id(value):
        raise ValidationError(f"Invalid {kind} ID")
    return value  # type: ignore[return-value]
