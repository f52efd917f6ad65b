"""Display helpers for invoices and notification text."""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from estatemls.core.settings import settings

_CENTS = Decimal("0.01")


def to_money(value: object) -> Optional[Decimal]:
    """Coerce ints/floats/strings into a 2-dp :class:`Decimal`; ``None`` for blanks.

    - commas allowed: "1,250.5" -> Decimal("1250.50")
    - floats go through ``str`` first to avoid binary noise
    """
    if value in (None, ""):
        return None
    if isinstance(value, Decimal):
        d = value
    else:
        s = str(value).strip().replace(",", "")
        if s == "":
            return None
        try:
            d = Decimal(s)
        except (InvalidOperation, ValueError, TypeError):
            return None
    return d.quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: object, currency: str | None = None) -> str:
    """``ZMW 1,234.56`` style; negative amounts keep the sign after the code."""
    code = currency or settings.CURRENCY_CODE
    d = to_money(amount)
    if d is None:
        d = Decimal("0.00")
    return f"{code} {d:,.2f}"


def format_long_date(value: date | datetime | None) -> str:
    """Long-form date, e.g. ``October 19, 2026``."""
    if value is None:
        return ""
    return f"{value:%B} {value.day}, {value.year}"


def humanize_token(value: object) -> str:
    """``bank_transfer`` -> ``Bank Transfer``; enum members use their value."""
    raw = getattr(value, "value", value)
    if not raw:
        return ""
    return " ".join(w[:1].upper() + w[1:] for w in str(raw).split("_") if w)
