"""Discount codes honoured by the store.

The cart looks codes up here, and order placement checks every discount it
is sent against the same table.
"""

PERCENTAGE = "percentage"
FIXED = "fixed"

DISCOUNT_CODES = {
    "SAVE10": (10.0, PERCENTAGE),
    "SAVE50": (50.0, FIXED),
    "WELCOME20": (20.0, PERCENTAGE),
}

# Slack for per-line rounding when one cart discount is split across orders
ROUNDING_TOLERANCE = 0.05


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


def resolve(code: str | None) -> tuple[float, str] | None:
    """``(amount, kind)`` for a known code, None otherwise."""
    return DISCOUNT_CODES.get(normalize_code(code))


def max_discount(code: str | None, subtotal: float) -> float | None:
    """The most ``code`` can take off ``subtotal``, or None for an unknown code."""
    entry = resolve(code)
    if entry is None:
        return None

    amount, kind = entry
    if kind == PERCENTAGE:
        return round(subtotal * amount / 100, 2)
    return round(min(amount, subtotal), 2)
