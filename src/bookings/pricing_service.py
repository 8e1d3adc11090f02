from typing import NamedTuple, Optional, Union
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
import math
import re

from src.bookings.schemas import PricingBreakdown, PricingOverrides
from src.config import settings
from src.exceptions import InvalidInputError, MissingPriceError

MINOR_UNITS_PER_MAJOR = 100
# Largest value a signed 64-bit INTEGER column holds
MAX_STORED_INTEGER = 2 ** 63 - 1

Number = Union[int, float]

class NormalizedPrice(NamedTuple):
    price_nu: int
    price_cents: int


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero"""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def safe_number(value) -> Optional[Number]:
    """Return value as a number, or None when it is absent or not numeric"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return int(number) if number == number.to_integral_value() else float(number)


def normalize_submitted_price(price_nu=None, price_cents=None) -> NormalizedPrice:
    """Resolve both price representations from whichever the caller supplied.

    When both are given they are accepted as-is (after rounding); they are
    not checked against each other, so callers can store a pair that
    disagrees.
    """
    nu = safe_number(price_nu)
    cents = safe_number(price_cents)

    if nu is None and cents is None:
        raise MissingPriceError()
    if nu is None:
        price = NormalizedPrice(
            price_nu=round_half_up(cents / MINOR_UNITS_PER_MAJOR),
            price_cents=round_half_up(cents)
        )
    elif cents is None:
        price = NormalizedPrice(
            price_nu=round_half_up(nu),
            price_cents=round_half_up(nu * MINOR_UNITS_PER_MAJOR)
        )
    else:
        price = NormalizedPrice(price_nu=round_half_up(nu), price_cents=round_half_up(cents))

    if abs(price.price_cents) > MAX_STORED_INTEGER or abs(price.price_nu) > MAX_STORED_INTEGER:
        raise InvalidInputError("Price is too large")
    return price


def package_base_price_cents(package) -> int:
    """Per-traveler price of a package in minor units"""
    if package.price_cents is not None:
        return package.price_cents
    if package.price_nu is not None:
        return package.price_nu * MINOR_UNITS_PER_MAJOR
    return 0


def _resolve_override(value, default: int, field_name: str) -> int:
    number = safe_number(value)
    if number is None:
        return default
    if number < 0:
        raise InvalidInputError(f"{field_name} must not be negative")
    if number > MAX_STORED_INTEGER:
        raise InvalidInputError(f"{field_name} is too large")
    return round_half_up(number)


def derive_booking_pricing(
    package,
    travelers: int,
    overrides: Optional[PricingOverrides] = None
) -> PricingBreakdown:
    """Compute the stored price breakdown for a booking"""
    overrides = overrides or PricingOverrides()
    fallback_total = travelers * package_base_price_cents(package)
    if fallback_total > MAX_STORED_INTEGER:
        raise InvalidInputError("Booking total is too large")

    currency = overrides.currency or package.currency or settings.FALLBACK_CURRENCY

    return PricingBreakdown(
        currency=currency,
        package_price_cents=_resolve_override(
            overrides.package_price_cents, fallback_total, "packagePriceCents"
        ),
        sdf_fee_cents=_resolve_override(overrides.sdf_fee_cents, 0, "sdfFeeCents"),
        total_per_person_cents=_resolve_override(
            overrides.total_per_person_cents,
            round_half_up(fallback_total / travelers),
            "totalPerPersonCents"
        ),
        total_group_cents=_resolve_override(
            overrides.total_group_cents, fallback_total, "totalGroupCents"
        )
    )


def parse_duration_days(duration_text: Optional[str]) -> Optional[int]:
    """Extract the day count from text like '7D/6N'"""
    if not duration_text:
        return None
    match = re.search(r"(\d+)\s*[dD]", str(duration_text))
    return int(match.group(1)) if match else None
