"""
Stay pricing: nights, totals and the checkout quote.
"""
import math
from datetime import date, datetime, time
from typing import Union

from ..utils.exceptions import ValidationError
from ..utils.models import PriceQuote

DateLike = Union[date, datetime, str]

SECONDS_PER_DAY = 24 * 60 * 60


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                value = date.fromisoformat(text)
            else:
                value = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError("Invalid date", {"value": value})
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise ValidationError("Invalid date", {"value": repr(value)})


def count_nights(check_in: DateLike, check_out: DateLike) -> int:
    """Number of nights between two dates, rounding partial days up."""
    start = _as_datetime(check_in)
    end = _as_datetime(check_out)
    if start >= end:
        raise ValidationError(
            "Check-out must be after check-in",
            {"check_in": start.isoformat(), "check_out": end.isoformat()},
        )
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def total_price(nightly_price: int, check_in: DateLike, check_out: DateLike) -> int:
    return count_nights(check_in, check_out) * nightly_price


def quote(nightly_price: int, check_in: DateLike, check_out: DateLike, service_fee_rate: float = 0.14) -> PriceQuote:
    """Price breakdown shown at checkout, service fee rounded to whole units."""
    nights = count_nights(check_in, check_out)
    subtotal = nights * nightly_price
    service_fee = round(subtotal * service_fee_rate)
    return PriceQuote(
        nightly_price=nightly_price,
        nights=nights,
        subtotal=subtotal,
        service_fee=service_fee,
        total=subtotal + service_fee,
    )
