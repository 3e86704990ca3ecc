# eventa/utils/pricing.py
from typing import Iterable, Union
from datetime import datetime, timezone

from eventa.models.promo import DiscountKind


def ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def calculate_total(tickets: Iterable, event) -> float:
    """
    Sum of quantity * unit price over the requested ticket lines.
    Ticket types the event has no price for count as free.
    """
    return float(sum(line.quantity * event.price_of(line.ticket_id) for line in tickets))


def apply_discount(total: float, discount_type: Union[DiscountKind, str], discount_value: float) -> float:
    """
    Adjusted total after a promo code.

    percentage: total * (1 - value / 100); fixed: total - value.
    Never below zero, always rounded to 2 places so the same inputs
    give the same displayed total on every call.
    """
    discount_type = DiscountKind(discount_type)
    discount_value = max(0.0, float(discount_value))

    if discount_type == DiscountKind.PERCENTAGE:
        discount = (discount_value / 100.0) * total
    else:
        discount = discount_value
    discount = min(discount, total)  # Avoid over-discounting

    return round(max(0.0, total - discount), 2)
