"""
Angle normalization and the fixed zodiac enumerations.

Every classifier in the engine goes through `normalize` / `split_sign`, so a
longitude is canonicalized exactly once and in exactly one way.
"""

import math
import numbers
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidLongitudeError


class Sign(IntEnum):
    ARIES = 0
    TAURUS = 1
    GEMINI = 2
    CANCER = 3
    LEO = 4
    VIRGO = 5
    LIBRA = 6
    SCORPIO = 7
    SAGITTARIUS = 8
    CAPRICORN = 9
    AQUARIUS = 10
    PISCES = 11

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def abbr(self) -> str:
        return SIGN_ABBR[self]


SIGN_ABBR = ["Ar", "Ta", "Ge", "Cn", "Le", "Vi", "Li", "Sc", "Sg", "Cp", "Aq", "Pi"]


class SignQuality(Enum):
    MOVABLE = "movable"
    FIXED = "fixed"
    DUAL = "dual"


_QUALITY_CYCLE = (SignQuality.MOVABLE, SignQuality.FIXED, SignQuality.DUAL)


class Body(str, Enum):
    """Bodies the engine classifies. Ascendant is a pseudo-body."""

    ASCENDANT = "Ascendant"
    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    RAHU = "Rahu"
    KETU = "Ketu"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"

    @property
    def abbr(self) -> str:
        return BODY_ABBR[self]


# Three-letter labels used inside chart boxes
BODY_ABBR = {
    Body.ASCENDANT: "ASC",
    Body.SUN: "Sun",
    Body.MOON: "Moo",
    Body.MERCURY: "Mer",
    Body.VENUS: "Ven",
    Body.MARS: "Mar",
    Body.JUPITER: "Jup",
    Body.SATURN: "Sat",
    Body.RAHU: "Rah",
    Body.KETU: "Ket",
    Body.URANUS: "Ura",
    Body.NEPTUNE: "Nep",
    Body.PLUTO: "Plu",
}


def require_finite(value: float, what: str = "longitude") -> float:
    """Reject NaN / Infinity; return the value as float."""
    value = float(value)
    if not math.isfinite(value):
        raise InvalidLongitudeError(f"{what} must be finite, got {value!r}")
    return value


def is_finite_number(value: Optional[float]) -> bool:
    """True for a real, finite number. None and non-numbers are False."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def normalize(lon: float) -> float:
    """Normalize any longitude to [0, 360)."""
    lon_n = require_finite(lon) % 360.0
    # tiny negative inputs round up to exactly 360.0
    if lon_n >= 360.0:
        return 0.0
    return lon_n


def normalize_batch(lons: np.ndarray) -> np.ndarray:
    """Vectorized `normalize` for a numpy array of finite longitudes."""
    arr = np.asarray(lons, dtype=float)
    if not np.all(np.isfinite(arr)):
        raise InvalidLongitudeError("longitudes must be finite")
    out = np.mod(arr, 360.0)
    out[out >= 360.0] = 0.0
    return out


def split_sign(lon: float) -> Tuple[Sign, float]:
    """Return (sign, degree_in_sign) from absolute longitude."""
    sign_idx, within = divmod(normalize(lon), 30.0)
    return Sign(int(sign_idx)), within


def sign_of(lon: float) -> Sign:
    return split_sign(lon)[0]


def sign_quality(sign: int) -> SignQuality:
    """Movable / fixed / dual repeat every three signs starting at Aries."""
    return _QUALITY_CYCLE[int(sign) % 3]


def is_odd_sign(sign: int) -> bool:
    """
    Traditional odd/even sign parity.

    Signs are counted from 1 (Aries is the 1st sign), so a zero-based index
    that is even is an *odd* sign: Aries, Gemini, Leo, ... are odd.
    """
    return int(sign) % 2 == 0


def angular_distance(a: float, b: float) -> float:
    """Shorter-arc separation of two longitudes, in [0, 180]."""
    d = abs(normalize(a) - normalize(b))
    return min(d, 360.0 - d)
