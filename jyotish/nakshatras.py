from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

from .angles import Body, Sign, is_finite_number, normalize, normalize_batch, sign_of
from .formatting import format_sign_degree

# Constants
NAKSHATRA_NAMES = [
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni", "Uttara Phalguni",
    "Hasta", "Chitra", "Swati", "Vishakha", "Anuradha", "Jyeshtha",
    "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana", "Dhanishta", "Shatabhisha",
    "Purva Bhadrapada", "Uttara Bhadrapada", "Revati"
]

# Ruling lords repeat every 9 nakshatras, starting from Ashwini (Ketu)
LORD_SEQUENCE = [
    Body.KETU, Body.VENUS, Body.SUN, Body.MOON, Body.MARS,
    Body.RAHU, Body.JUPITER, Body.SATURN, Body.MERCURY,
]

# Each Nakshatra is 13 degrees 20 minutes = 13.3333... degrees
NAKSHATRA_EXTENT = 360.0 / 27.0  # ~13.333333
PADA_EXTENT = NAKSHATRA_EXTENT / 4.0  # 3°20'


@dataclass(frozen=True)
class NakshatraInfo:
    index: int  # 0..26
    name: str
    pada: int  # 1..4
    lord: Body


def resolve_nakshatra(longitude: float) -> NakshatraInfo:
    """
    Convert a single longitude to Nakshatra info.

    Args:
        longitude: any finite degree value; normalized to [0, 360).

    Returns:
        NakshatraInfo with pada and lord derived from the index.
    """
    lon = normalize(longitude)

    # Plain division, not //: floor-div by the inexact span puts 120.0 in Ashlesha
    raw_idx = lon / NAKSHATRA_EXTENT
    idx = min(int(raw_idx), 26)

    # Fraction of the nakshatra * 4 -> 0..3.99 -> floor -> +1 -> 1..4
    fraction = raw_idx - idx
    pada = min(int(fraction * 4), 3) + 1

    return NakshatraInfo(
        index=idx,
        name=NAKSHATRA_NAMES[idx],
        pada=pada,
        lord=LORD_SEQUENCE[idx % 9],
    )


def get_nakshatra_scalar(longitude: float) -> Tuple[int, str, int]:
    """(index_0_26, name, pada_1_4) for one longitude."""
    info = resolve_nakshatra(longitude)
    return info.index, info.name, info.pada


def get_nakshatra_batch(longitudes: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorized mapping of longitudes to Nakshatra indices and Padas.

    Args:
        longitudes: NumPy array of longitudes.

    Returns:
        (indices, padas) as integer arrays.
    """
    lons = normalize_batch(longitudes)

    raw_idxs = lons / NAKSHATRA_EXTENT
    indices = np.minimum(np.floor(raw_idxs).astype(int), 26)

    # Pad calculation
    fractions = raw_idxs - indices
    padas = (np.minimum(np.floor(fractions * 4), 3) + 1).astype(int)

    return indices, padas


@dataclass(frozen=True)
class NakshatraRow:
    body: Body
    sign: Sign
    longitude: float
    nakshatra: NakshatraInfo

    def as_dict(self) -> Dict[str, object]:
        return {
            "body": self.body.value,
            "sign": self.sign.label,
            "longitude": round(self.longitude, 4),
            "sign_longitude": format_sign_degree(self.longitude),
            "nakshatra": self.nakshatra.name,
            "pada": self.nakshatra.pada,
            "lord": self.nakshatra.lord.value,
        }


def calculate_nakshatra_table(
    longitudes: Mapping[Body, Optional[float]],
) -> List[NakshatraRow]:
    """One row per body with a finite longitude, in Body order."""
    rows: List[NakshatraRow] = []
    for body in Body:
        lon = longitudes.get(body)
        if not is_finite_number(lon):
            continue
        lon_n = normalize(lon)
        rows.append(
            NakshatraRow(
                body=body,
                sign=sign_of(lon_n),
                longitude=lon_n,
                nakshatra=resolve_nakshatra(lon_n),
            )
        )
    return rows
