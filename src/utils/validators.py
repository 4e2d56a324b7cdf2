import logging
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger(__name__)

# Largest amount the employees table can hold, Numeric(12, 2)
MAX_AMOUNT = Decimal('9999999999.99')

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def normalize_amount(value: Any) -> Decimal:
    """Coerce a raw monetary value to a finite, non-negative Decimal (invalid -> 0)"""
    if value is None or isinstance(value, bool):
        return Decimal('0')
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            logger.debug("Non-finite amount %r normalized to 0", value)
            return Decimal('0')
        amount = Decimal(str(value))
    else:
        text = str(value).strip()
        if not text:
            return Decimal('0')
        try:
            amount = Decimal(text)
        except InvalidOperation:
            logger.debug("Invalid amount %r normalized to 0", value)
            return Decimal('0')
    if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
        logger.debug("Out of range amount %r normalized to 0", value)
        return Decimal('0')
    return amount


def normalize_count(value: Any) -> int:
    """Coerce a raw day counter to a non-negative int (invalid -> 0)"""
    if value is None or isinstance(value, bool):
        return 0
    try:
        count = int(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError, OverflowError):
        logger.debug("Invalid day count %r normalized to 0", value)
        return 0
    return max(count, 0)


def validate_month_name(month: str) -> bool:
    """Check month is one of the twelve English month names"""
    return month in MONTHS


def validate_year(year: Any) -> bool:
    """Check year is a 4-digit number"""
    return bool(re.match(r'^\d{4}$', str(year).strip()))
