"""Numeric parsing for form input and stored records."""

import logging
import math
from typing import Any, Optional

from tradejournal.errors import ParseError

logger = logging.getLogger(__name__)


def parse_number(value: Any, field: str = "value") -> float:
    """Parse a form or record value as a finite float.

    Args:
        value: Raw value (str, int, float).
        field: Field name used in the error.

    Returns:
        The parsed number.

    Raises:
        ParseError: If the value is missing, blank, boolean or not finite.
    """
    if value is None or isinstance(value, bool):
        raise ParseError(field, value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ParseError(field, value)
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(field, value) from e
    if not math.isfinite(number):
        raise ParseError(field, value)
    return number


def to_number(value: Any, field: str = "value") -> Optional[float]:
    """Lenient parse_number(): None instead of ParseError."""
    try:
        return parse_number(value, field)
    except ParseError as e:
        if value not in (None, ""):
            logger.debug("Skipping unparseable value: %s", e)
        return None
