"""
Whole-sign houses and the twelve-box chart layout.

The boxes are plain data; drawing them is the renderer's job.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .angles import Body, Sign, is_finite_number, sign_of

RASI = "rasi"
BHAVA = "bhava"

# (sign, row, col) positions in the fixed-sign South Indian 4x4 grid
SOUTH_INDIAN_LAYOUT = [
    (Sign.PISCES, 0, 0),
    (Sign.ARIES, 0, 1),
    (Sign.TAURUS, 0, 2),
    (Sign.GEMINI, 0, 3),
    (Sign.AQUARIUS, 1, 0),
    (Sign.CANCER, 1, 3),
    (Sign.CAPRICORN, 2, 0),
    (Sign.LEO, 2, 3),
    (Sign.SAGITTARIUS, 3, 0),
    (Sign.SCORPIO, 3, 1),
    (Sign.LIBRA, 3, 2),
    (Sign.VIRGO, 3, 3),
]


def whole_sign_house(ascendant_sign: int, sign: int) -> int:
    """House 1..12 counted from the ascendant's sign."""
    return (int(sign) - int(ascendant_sign)) % 12 + 1


def house_positions(
    ascendant: float,
    longitudes: Mapping[Body, Optional[float]],
) -> Dict[Body, int]:
    asc_sign = sign_of(ascendant)
    houses: Dict[Body, int] = {}
    for body in Body:
        if body is Body.ASCENDANT:
            houses[body] = 1
            continue
        lon = longitudes.get(body)
        if is_finite_number(lon):
            houses[body] = whole_sign_house(asc_sign, sign_of(lon))
    return houses


@dataclass
class ChartBox:
    sign: Sign
    label: str
    bodies: List[str] = field(default_factory=list)


def chart_boxes(
    longitudes: Mapping[Body, Optional[float]],
    ascendant: Optional[float],
    mode: str = RASI,
) -> List[ChartBox]:
    """
    Twelve boxes indexed by sign, holding body abbreviations.

    In `rasi` mode boxes are labelled with sign abbreviations; in `bhava`
    mode with H1..H12 counted from the ascendant sign. ASC is listed first
    in its box.
    """
    if mode not in (RASI, BHAVA):
        raise ValueError(f"Unknown chart mode {mode!r}")
    has_asc = is_finite_number(ascendant)
    if mode == BHAVA and not has_asc:
        raise ValueError("bhava boxes need a finite ascendant")

    asc_sign = sign_of(ascendant) if has_asc else Sign.ARIES
    boxes = []
    for sign in Sign:
        if mode == RASI:
            label = sign.abbr
        else:
            label = f"H{whole_sign_house(asc_sign, sign)}"
        boxes.append(ChartBox(sign=sign, label=label))

    for body in Body:
        if body is Body.ASCENDANT:
            continue
        lon = longitudes.get(body)
        if is_finite_number(lon):
            boxes[sign_of(lon)].bodies.append(body.abbr)
    if has_asc:
        boxes[asc_sign].bodies.insert(0, Body.ASCENDANT.abbr)
    return boxes


def south_indian_grid(boxes: List[ChartBox]) -> List[List[Optional[ChartBox]]]:
    """Place sign-indexed boxes on the 4x4 grid; the four centre cells stay None."""
    grid: List[List[Optional[ChartBox]]] = [[None] * 4 for _ in range(4)]
    for sign, row, col in SOUTH_INDIAN_LAYOUT:
        grid[row][col] = boxes[sign]
    return grid
