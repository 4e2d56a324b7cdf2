import re
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from dateutil import parser as date_parser

EMPTY_DISPLAY = "-"


def format_amount(amount: Union[Decimal, int, float, None]) -> str:
    """Format monetary amount with exactly two decimals"""
    value = Decimal(str(amount or 0))
    return str(value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def format_currency(amount: Decimal, symbol: str = "Rs.") -> str:
    """Format currency amount"""
    return f"{symbol} {format_amount(amount)}"


def format_date_dmy(value: Optional[Union[str, date]]) -> str:
    """Format ISO or free-form date as DD-MM-YYYY, '-' when empty"""
    if value is None or value == "":
        return EMPTY_DISPLAY
    if isinstance(value, date):
        return value.strftime("%d-%m-%Y")

    match = re.match(r'^(\d{4})-(\d{2})-(\d{2})', value)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            date(year, month, day)
        except ValueError:
            return value
        return f"{match.group(3)}-{match.group(2)}-{match.group(1)}"

    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        return value
    return parsed.strftime("%d-%m-%Y")


def format_days_label(days: Union[Decimal, int, float]) -> str:
    """Format payable days, one decimal only when fractional"""
    value = Decimal(str(days))
    if value == value.to_integral_value():
        return str(int(value))
    return str(value.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def display_value(value: Optional[str]) -> str:
    """Identity field for display, '-' when missing"""
    return value if value else EMPTY_DISPLAY


def format_export_date(d: Optional[datetime] = None) -> str:
    """Compact date stamp used in export filenames"""
    return (d or datetime.now()).strftime("%Y%m%d")
