# campaign/filters.py
"""Jinja filters shared by the static pages and the API fragments."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any


def commafy(value: Any, *, decimals: int = 2, blank_for_none: bool = False) -> str:
    """
    Format a number with thousands separators and a fixed number of decimals.
    - Accepts: int/float/Decimal or strings like "$1,234.50", "1_234"
    - Rounds HALF_UP (money rounding, not banker's rounding)
    - Returns the original text unchanged if it cannot be parsed
    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        if blank_for_none:
            return ""
        value = 0

    cleaned = str(value).strip().replace(",", "").replace("_", "").replace("$", "").strip()
    try:
        d = Decimal(cleaned)
    except InvalidOperation:
        return str(value)
    if not d.is_finite():
        return str(value)

    # quantize() needs a digit for every integer place plus the decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() + decimals + 2)
        try:
            if decimals > 0:
                d = d.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
                out = f"{d:,.{decimals}f}"
            else:
                out = f"{int(d.to_integral_value(rounding=ROUND_HALF_UP)):,}"
        except InvalidOperation:
            return str(value)

    # negative zero after rounding
    if out.lstrip("-").strip("0.,") == "":
        out = out.lstrip("-")
    return out


def usd(value: Any) -> str:
    out = commafy(value)
    if out.startswith("-"):
        return f"-${out[1:]}"
    return f"${out}"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def rfc3339(value: Any) -> str:
    if not isinstance(value, datetime):
        return str(value or "")
    return _as_utc(value).isoformat(timespec="seconds").replace("+00:00", "Z")


def human_time(value: Any) -> str:
    if not isinstance(value, datetime):
        return str(value or "")
    return _as_utc(value).strftime("%b %d, %I:%M %p UTC")


FILTERS = {
    "commafy": commafy,
    "usd": usd,
    "rfc3339": rfc3339,
    "human_time": human_time,
}
