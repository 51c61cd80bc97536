"""Utility functions for the loan planner.

Helpers for turning user input into ``Decimal`` values and integers. Amounts
may carry thousands separators and ``k``/``m`` shorthand suffixes.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, getcontext
from typing import Optional

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

_SUFFIXES = {"k": Decimal(1_000), "m": Decimal(1_000_000)}


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and handles both integer and float-like
    strings. It raises ``ValueError`` if conversion fails.
    """
    try:
        cleaned = str(value).replace(",", "").strip()
        result = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def parse_amount(value: str) -> Decimal:
    """Parse an amount with optional ``k``/``m`` suffix ("500k" is 500000)."""
    text = str(value).strip().lower().replace(",", "")
    factor = Decimal(1)
    if text and text[-1] in _SUFFIXES:
        factor = _SUFFIXES[text[-1]]
        text = text[:-1]
    return decimal_from_str(text) * factor


def optional_int(value: Optional[object]) -> Optional[int]:
    """Parse an optional whole number; blank strings and ``None`` give ``None``."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError as exc:
        raise ValueError(f"Invalid whole number: {value}") from exc
