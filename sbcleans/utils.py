"""
sbcleans.utils - Shared utility functions.

Contains common functions used across multiple modules to avoid duplication.
"""

from __future__ import annotations

from datetime import date


def pad_number(num: int) -> str:
    """Zero-pad a number to at least two digits.

    Args:
        num: Non-negative integer

    Returns:
        String like "02" or "12"; numbers above 99 are left as is
    """
    return f"{num:02d}"


def date_stamp(today: date | None = None) -> str:
    """Format a date as MMDDYY.

    Args:
        today: Date to format (default: today)

    Returns:
        Six-digit date string, e.g. "050824" for 2024-05-08
    """
    today = today or date.today()
    return f"{pad_number(today.month)}{pad_number(today.day)}{pad_number(today.year % 100)}"
