"""Locale-independent number formatting for request URLs and labels."""

from decimal import Decimal


def format_decimal(value: float) -> str:
    """Render a float as a plain decimal string.

    Uses the shortest representation that round-trips, always with ``.`` as
    the separator and never in exponent notation, e.g. ``47.5``, ``-10.25``
    or ``0.0000001``. The host locale is never consulted.
    """
    return format(Decimal(repr(float(value))), "f")


def format_elevation(value: float) -> str:
    """Render an elevation for display, dropping a redundant ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return format_decimal(value)
