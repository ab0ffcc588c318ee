"""Format dates with date-fns style patterns such as ``MM/dd/yyyy``."""

import logging
import re
from datetime import date, datetime
from typing import Optional, Union

logger = logging.getLogger(__name__)

FALLBACK_PATTERN = "d MMMM yyyy"

# Longest tokens first so "MMMM" is not read as two "MM".
_TOKEN_RE = re.compile(r"'[^']*'|yyyy|yy|MMMM|MMM|MM|M|dd|d|EEEE|EEE")


def _render_token(token: str, value: date) -> str:
    if token == "yyyy":
        return f"{value.year:04d}"
    if token == "yy":
        return f"{value.year % 100:02d}"
    if token == "MMMM":
        return value.strftime("%B")
    if token == "MMM":
        return value.strftime("%b")
    if token == "MM":
        return f"{value.month:02d}"
    if token == "M":
        return str(value.month)
    if token == "dd":
        return f"{value.day:02d}"
    if token == "d":
        return str(value.day)
    if token == "EEEE":
        return value.strftime("%A")
    if token == "EEE":
        return value.strftime("%a")
    # quoted literal
    return token[1:-1]


def _coerce(value) -> Optional[date]:
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning("Unparseable date value %r", value)
    return None


def format_date(value: Union[date, datetime, str, None], pattern: Optional[str]) -> str:
    parsed = _coerce(value)
    if parsed is None:
        return ""
    if not pattern or not any(not m.group(0).startswith("'") for m in _TOKEN_RE.finditer(pattern)):
        pattern = FALLBACK_PATTERN
    return _TOKEN_RE.sub(lambda match: _render_token(match.group(0), parsed), pattern)
