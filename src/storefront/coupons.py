"""Discount code lookup.

The code table is fixed and shared with the order service. Lookup is
asynchronous so callers can treat it like the remote call it stands in for.
"""

import asyncio

from shared.discounts import normalize_code, resolve
from storefront.models import Discount, DiscountType


async def lookup_discount(code: str, latency: float = 0.0) -> Discount | None:
    """Resolve ``code`` (case-insensitive) to a Discount, or None if unknown."""
    if latency:
        await asyncio.sleep(latency)

    entry = resolve(code)
    if entry is None:
        return None

    amount, kind = entry
    return Discount(code=normalize_code(code), amount=amount, type=DiscountType(kind))
