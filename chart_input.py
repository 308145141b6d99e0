"""
Input contract for the chart engine.

Everything here arrives from the ephemeris side: longitudes, the ascendant,
the reference instant and the timezone name. This module only validates and
converts; it never computes positions.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union

import pytz
import swisseph as swe

from jyotish.angles import Body
from jyotish.aspects import AspectRecord
from jyotish.errors import InvalidInstantError, UnresolvableTimezoneError

logger = logging.getLogger(__name__)

# A reference instant: aware datetime (naive is read as UTC) or a UT Julian day
Instant = Union[datetime, float]

# Common misspellings seen in saved forms
TIMEZONE_ALIASES: Dict[str, str] = {
    "Chicago/America": "America/Chicago",
    "Kolkata/Asia": "Asia/Kolkata",
    "Calcutta/Asia": "Asia/Kolkata",
    "Bombay/Asia": "Asia/Kolkata",
    "Madras/Asia": "Asia/Kolkata",
}


@dataclass(frozen=True)
class DashaPeriod:
    """One Vimshottari period, produced elsewhere and passed through."""

    lord: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class ChartInput:
    ascendant: Optional[float]
    longitudes: Mapping[str, Optional[float]]
    reference_instant: Instant
    timezone: str = "UTC"
    name: str = "Unknown"
    lst_hours: Optional[float] = None
    dashas: Sequence[DashaPeriod] = field(default_factory=tuple)
    aspects: Optional[Sequence[AspectRecord]] = None


def parse_longitudes(longitudes: Mapping[str, Optional[float]]) -> Dict[Body, Optional[float]]:
    """
    Key a name -> longitude mapping by Body.

    Unknown names are logged and dropped. An "Ascendant" entry is ignored
    here; the ascendant always comes from its own field.
    """
    parsed: Dict[Body, Optional[float]] = {}
    for name, lon in longitudes.items():
        try:
            body = Body(name)
        except ValueError:
            logger.warning("Ignoring unknown body %r", name)
            continue
        if body is Body.ASCENDANT:
            logger.debug("Ascendant in body mapping ignored; use ChartInput.ascendant")
            continue
        parsed[body] = lon
    return parsed


def _try_timezone(name: str) -> Optional[pytz.BaseTzInfo]:
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        return None


def resolve_timezone(name: str) -> Tuple[pytz.BaseTzInfo, Optional[str]]:
    """
    Resolve an IANA timezone name, correcting common mistakes.

    Returns (tzinfo, corrected_name); corrected_name is None when `name` was
    already valid. Tries the name as given, then with the two halves of
    'City/Region' swapped, then the alias table.

    Raises:
        UnresolvableTimezoneError: nothing matched.
    """
    tz_name = (name or "").strip()
    if not tz_name:
        raise UnresolvableTimezoneError("empty timezone")

    tz = _try_timezone(tz_name)
    if tz is not None:
        return tz, None

    if "/" in tz_name:
        parts = tz_name.split("/")
        candidate = f"{parts[1]}/{parts[0]}".replace(" ", "_")
        tz = _try_timezone(candidate)
        if tz is not None:
            logger.warning("Timezone %r corrected to %r", tz_name, candidate)
            return tz, candidate

    alias = TIMEZONE_ALIASES.get(tz_name)
    if alias is not None:
        logger.warning("Timezone %r corrected to %r", tz_name, alias)
        return pytz.timezone(alias), alias

    raise UnresolvableTimezoneError(f"unknown timezone {name!r}")


def datetime_to_julian(dt: datetime) -> float:
    # Ensure UTC
    if dt.tzinfo is None:
        dt_utc = dt.replace(tzinfo=pytz.utc)
    else:
        dt_utc = dt.astimezone(pytz.utc)
    # Decimal hour (UT)
    ut = (
        dt_utc.hour
        + dt_utc.minute / 60.0
        + (dt_utc.second + dt_utc.microsecond / 1e6) / 3600.0
    )
    return swe.julday(dt_utc.year, dt_utc.month, dt_utc.day, ut)


def julian_to_datetime(jd_utc: float) -> datetime:
    """UT Julian day -> aware UTC datetime, rounded to the millisecond."""
    if not math.isfinite(jd_utc):
        raise InvalidInstantError(f"Julian day must be finite, got {jd_utc!r}")
    year, month, day, hour = swe.revjul(jd_utc, swe.GREG_CAL)
    ms = int(round(hour * 3600.0 * 1000.0))
    try:
        return datetime(year, month, day, tzinfo=pytz.utc) + timedelta(milliseconds=ms)
    except (OverflowError, ValueError) as exc:
        raise InvalidInstantError(f"Julian day {jd_utc!r} is outside the calendar range") from exc


def instant_to_utc(instant: Instant) -> datetime:
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant.replace(tzinfo=pytz.utc)
        return instant.astimezone(pytz.utc)
    return julian_to_datetime(float(instant))


def instant_to_julian(instant: Instant) -> float:
    """UT Julian day for a reference instant."""
    if isinstance(instant, datetime):
        return datetime_to_julian(instant)
    jd = float(instant)
    if not math.isfinite(jd):
        raise InvalidInstantError(f"Julian day must be finite, got {jd!r}")
    return jd
