"""
Panchanga engine.

Derives the five limbs of the day (Vara, Tithi + Paksha, Nakshatra + Pada,
Yoga, Karana) from Sun and Moon longitudes taken at one reference instant.
Sunrise anchoring and end-times belong to the ephemeris side; this module
only classifies the angles it is given.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import pytz

from chart_input import Instant, instant_to_utc, resolve_timezone
from jyotish.angles import is_finite_number, normalize
from jyotish.errors import UnresolvableTimezoneError
from jyotish.nakshatras import NAKSHATRA_EXTENT, resolve_nakshatra

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1. Name Tables
# ---------------------------------------------------------------------------

VARA_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

TITHI_NAMES = [
    "Pratipada", "Dvitiya", "Tritiya", "Chaturthi", "Panchami",
    "Shashthi", "Saptami", "Ashtami", "Navami", "Dashami",
    "Ekadashi", "Dwadashi", "Trayodashi", "Chaturdashi", "Purnima",
]
# The 15th tithi of the waning fortnight is the new moon, not Purnima
KRISHNA_LAST_TITHI = "Amavasya"

YOGA_NAMES = [
    "Vishkumbha", "Preeti", "Ayushman", "Saubhagya", "Shobhana", "Atiganda",
    "Sukarma", "Dhriti", "Shoola", "Ganda", "Vriddhi", "Dhruva",
    "Vyaghata", "Harshana", "Vajra", "Siddhi", "Vyatipata", "Variyan",
    "Parigha", "Shiva", "Siddha", "Sadhya", "Shubha", "Shukla",
    "Brahma", "Indra", "Vaidhriti",
]

KARANA_FIRST = "Kimstughna"
KARANA_ROTATING = ["Bava", "Balava", "Kaulava", "Taitila", "Garaja", "Vanija", "Vishti"]
KARANA_ENDING = ["Shakuni", "Chatushpada", "Naga"]

TITHI_EXTENT = 12.0
KARANA_EXTENT = 6.0


# ---------------------------------------------------------------------------
# 2. Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PanchangaResult:
    vara: str           # 'Sunday', 'Monday', ...
    vara_index: int     # 0=Sunday, ... 6=Saturday
    paksha: str         # 'Shukla' or 'Krishna'
    tithi_number: int   # 1..30
    tithi_name: str
    nakshatra: str
    pada: int           # 1..4
    yoga: str
    karana: str
    yoga_index: int     # 0..26
    karana_index: int   # 0..59

    def as_dict(self) -> dict:
        return {
            "vara": self.vara,
            "paksha": self.paksha,
            "tithi_number": self.tithi_number,
            "tithi_name": self.tithi_name,
            "nakshatra": self.nakshatra,
            "pada": self.pada,
            "yoga": self.yoga,
            "karana": self.karana,
        }


# ---------------------------------------------------------------------------
# 3. Limb Helpers
# ---------------------------------------------------------------------------


def _get_vara(instant: Instant, tz: pytz.BaseTzInfo) -> Tuple[int, str]:
    """
    Returns (index, name) of the weekday at `instant` in `tz`. 0=Sunday.
    """
    local = instant_to_utc(instant).astimezone(tz)
    # datetime.weekday(): Monday=0 .. Sunday=6
    idx = (local.weekday() + 1) % 7
    return idx, VARA_NAMES[idx]


def _get_paksha(tithi_number: int) -> str:
    """
    1..15 = Shukla (waxing), 16..30 = Krishna (waning).
    """
    return "Shukla" if tithi_number <= 15 else "Krishna"


def tithi_from_elongation(diff: float) -> Tuple[int, str, str]:
    """
    (tithi_number 1..30, paksha, tithi_name) for Moon - Sun in degrees.
    """
    diff = normalize(diff)
    number = min(int(diff // TITHI_EXTENT), 29) + 1
    paksha = _get_paksha(number)
    idx15 = (number - 1) % 15
    if paksha == "Krishna" and idx15 == 14:
        name = KRISHNA_LAST_TITHI
    else:
        name = TITHI_NAMES[idx15]
    return number, paksha, name


def yoga_from_sum(total: float) -> Tuple[int, str]:
    """(yoga_index 0..26, name) for Moon + Sun in degrees."""
    idx = min(int(normalize(total) / NAKSHATRA_EXTENT), 26)
    return idx, YOGA_NAMES[idx]


def karana_from_elongation(diff: float) -> Tuple[int, str]:
    """
    (karana_index 0..59, name) for Moon - Sun in degrees.

    Index 0 is the fixed Kimstughna, 57..59 the three fixed closing karanas,
    and 1..56 cycle through the seven movable ones.
    """
    idx = min(int(normalize(diff) // KARANA_EXTENT), 59)
    if idx == 0:
        return idx, KARANA_FIRST
    if idx >= 57:
        return idx, KARANA_ENDING[idx - 57]
    return idx, KARANA_ROTATING[(idx - 1) % 7]


# ---------------------------------------------------------------------------
# 4. Main Function
# ---------------------------------------------------------------------------


def compute_panchanga(
    sun_longitude: Optional[float],
    moon_longitude: Optional[float],
    reference_instant: Instant,
    timezone: str,
) -> Optional[PanchangaResult]:
    """
    Compute the panchanga for one instant.

    The five limbs are presented as a unit: if either longitude is missing
    or non-finite, or the timezone cannot be resolved, the result is None
    rather than a partial record.
    """
    if not (is_finite_number(sun_longitude) and is_finite_number(moon_longitude)):
        logger.debug("Panchanga unavailable: Sun or Moon longitude missing")
        return None

    try:
        tz, _ = resolve_timezone(timezone)
    except UnresolvableTimezoneError as exc:
        logger.warning("Panchanga unavailable: %s", exc)
        return None

    sun = normalize(sun_longitude)
    moon = normalize(moon_longitude)
    diff = normalize(moon - sun)

    vara_idx, vara_name = _get_vara(reference_instant, tz)
    tithi_number, paksha, tithi_name = tithi_from_elongation(diff)
    yoga_idx, yoga_name = yoga_from_sum(moon + sun)
    karana_idx, karana_name = karana_from_elongation(diff)
    nak = resolve_nakshatra(moon)

    return PanchangaResult(
        vara=vara_name,
        vara_index=vara_idx,
        paksha=paksha,
        tithi_number=tithi_number,
        tithi_name=tithi_name,
        nakshatra=nak.name,
        pada=nak.pada,
        yoga=yoga_name,
        karana=karana_name,
        yoga_index=yoga_idx,
        karana_index=karana_idx,
    )
