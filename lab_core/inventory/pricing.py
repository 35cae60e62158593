# lab_core/inventory/pricing.py
from __future__ import annotations

from decimal import Decimal

ZERO = Decimal("0.00")


def _positive(value) -> Decimal | None:
    if value is None:
        return None
    d = Decimal(str(value))
    return d if d > 0 else None


def resolve_unit_price(item) -> Decimal:
    """
    1) explicit per-unit sale price, if positive
    2) pack price / items per pack, if both positive
    3) zero
    """
    per_unit = _positive(item.sale_price_per_unit)
    if per_unit is not None:
        return per_unit

    pack_price = _positive(item.sale_price_per_pack)
    per_pack = _positive(item.items_per_pack)
    if pack_price is not None and per_pack is not None:
        return pack_price / per_pack

    return ZERO


def line_profit(*, unit_price: Decimal, unit_cost: Decimal, quantity: int) -> Decimal:
    """max(0, unit_price - unit_cost) * quantity; never negative."""
    margin = Decimal(str(unit_price)) - Decimal(str(unit_cost or 0))
    if margin <= 0:
        return ZERO
    return margin * quantity
