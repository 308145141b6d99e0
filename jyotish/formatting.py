"""Degree and time formatting for report cells."""

from typing import Tuple

from .angles import normalize, split_sign


def to_dms(deg: float) -> Tuple[int, int, int]:
    """
    Split a degree value into whole (degrees, minutes, seconds).

    Rounds to the nearest arc-second and carries 60" / 60' upward, so
    29.99999 becomes (30, 0, 0) rather than (29, 59, 60).
    """
    total = int(round(normalize(deg) * 3600.0))
    d, rest = divmod(total, 3600)
    m, s = divmod(rest, 60)
    return d % 360, m, s


def format_dms(deg: float) -> str:
    d, m, s = to_dms(deg)
    return f"{d}° {m}′ {s}″"


def format_sign_degree(deg: float) -> str:
    """e.g. 'Leo 12°05′09″'."""
    sign, within = split_sign(deg)
    d, m, s = to_dms(within)
    return f"{sign.label} {d}°{m:02d}′{s:02d}″"


def format_hours(hours: float) -> str:
    """Decimal hours as HH:MM:SS (used for local sidereal time)."""
    h = int(hours // 1)
    m_float = (hours - h) * 60.0
    m = int(m_float // 1)
    s = int(round((m_float - m) * 60.0))
    if s == 60:
        s = 0
        m += 1
    if m == 60:
        m = 0
        h += 1
    return f"{h:02d}:{m:02d}:{s:02d}"
