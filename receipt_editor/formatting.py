"""Currency and date formatting for the receipt."""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from receipt_editor.config import CURRENCY_GROUP_SEPARATOR

_LOCAL_INPUT_FORMAT = "%Y-%m-%dT%H:%M"
_DISPLAY_FORMAT = "%d/%m/%Y %H:%M"
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def round_amount(amount: float) -> int:
    """Round half away from zero to whole currency units."""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(amount: float, separator: str = CURRENCY_GROUP_SEPARATOR) -> str:
    """Group thousands with ``separator`` and drop fractional digits."""
    return f"{round_amount(amount):,}".replace(",", separator)


def parse_amount(text: str) -> int:
    """Read the leading integer of a numeric input field, 0 when there is none."""
    match = _LEADING_INT_RE.match(text or "")
    if match is None:
        return 0
    return int(match.group(1))


def parse_instant(value: str, tz: tzinfo | None = None) -> datetime:
    """
    Parse an ISO-8601 string into an aware datetime.

    A trailing ``Z`` is UTC. Strings without an offset are wall-clock time in
    ``tz`` (the local zone when ``tz`` is None).
    """
    raw = (value or "").strip()
    if not raw:
        raise ValueError("empty date")
    if raw[-1] in "zZ":
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"unparsable date: {value!r}") from exc
    if parsed.tzinfo is None:
        if tz is None:
            return parsed.astimezone()
        return parsed.replace(tzinfo=tz)
    return parsed


def _to_zone(moment: datetime, tz: tzinfo | None) -> datetime:
    return moment.astimezone(tz) if tz is not None else moment.astimezone()


def format_display_date(value: str, tz: tzinfo | None = None) -> str:
    """Render ``DD/MM/YYYY HH:MM`` in local time, or return ``value`` unchanged."""
    try:
        moment = parse_instant(value, tz)
    except ValueError:
        return value
    return _to_zone(moment, tz).strftime(_DISPLAY_FORMAT)


def to_local_input(value: str, tz: tzinfo | None = None) -> str:
    """Stored instant -> ``YYYY-MM-DDTHH:MM`` local edit value."""
    try:
        moment = parse_instant(value, tz)
    except ValueError:
        return ""
    return _to_zone(moment, tz).strftime(_LOCAL_INPUT_FORMAT)


def from_local_input(value: str, tz: tzinfo | None = None) -> str:
    """Local edit value -> UTC instant such as ``2025-09-04T12:30:00.000Z``."""
    moment = parse_instant(value, tz)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
