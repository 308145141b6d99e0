"""
Pure logic Varga (Divisional Chart) engine.

This module operates only on longitudes and never touches an ephemeris.
It implements the eight Parashara-style divisional charts shown in the
report: D1, D2, D3, D7, D9, D10, D12 and D30.

Each rule takes the D1 sign and the degree inside that sign and returns the
sign the body occupies in the divisional chart:

    varga_sign(VargaSystem.D9, Sign.ARIES, 29.0) -> Sign.SAGITTARIUS

Table output:
    calculate_varga_table({Body.SUN: 10.0, ...})
        -> [VargaRow(body=Body.SUN, placements={VargaSystem.D1: Sign.ARIES, ...}), ...]
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional

from .angles import (
    Body,
    Sign,
    SignQuality,
    is_finite_number,
    is_odd_sign,
    require_finite,
    sign_quality,
    split_sign,
)
from .errors import InvalidLongitudeError


class VargaSystem(Enum):
    D1 = 1
    D2 = 2
    D3 = 3
    D7 = 7
    D9 = 9
    D10 = 10
    D12 = 12
    D30 = 30


def _part(within: float, divisions: int) -> int:
    """0-based index of the equal part of a 30° sign that `within` falls in."""
    p = int((within * divisions) // 30.0)
    # float guard for values a hair below 30
    return min(p, divisions - 1)


def _d1_rasi(sign: int, within: float) -> int:
    return sign


def _d2_hora(sign: int, within: float) -> int:
    """
    D2 – Hora, Traditional Parashara:
        Odd signs:
            0-15° -> Leo (4)
            15-30° -> Cancer (3)
        Even signs:
            0-15° -> Cancer (3)
            15-30° -> Leo (4)
    """
    first_half = _part(within, 2) == 0
    if is_odd_sign(sign):
        return Sign.LEO if first_half else Sign.CANCER
    return Sign.CANCER if first_half else Sign.LEO


def _d3_drekkana(sign: int, within: float) -> int:
    """
    D3 – Drekkana, Parashara:
        0-10°  -> same sign
        10-20° -> 5th from sign
        20-30° -> 9th from sign
    """
    offset = (0, 4, 8)[_part(within, 3)]
    return (sign + offset) % 12


def _d7_saptamsa(sign: int, within: float) -> int:
    """D7 – odd signs count from the sign itself, even signs from the 7th."""
    base = sign if is_odd_sign(sign) else (sign + 6) % 12
    return (base + _part(within, 7)) % 12


def _d9_navamsa(sign: int, within: float) -> int:
    """
    D9 – Navamsa by sign quality.

    Movable signs start from the sign itself, fixed signs from the 9th,
    dual signs from the 5th. Each part spans 3°20'.
    """
    quality = sign_quality(sign)
    if quality is SignQuality.MOVABLE:
        base = sign
    elif quality is SignQuality.FIXED:
        base = (sign + 8) % 12
    else:
        base = (sign + 4) % 12
    return (base + _part(within, 9)) % 12


def _d10_dasamsa(sign: int, within: float) -> int:
    """D10 – odd signs count from the sign itself, even signs from the 9th."""
    base = sign if is_odd_sign(sign) else (sign + 8) % 12
    return (base + _part(within, 10)) % 12


def _d12_dwadasamsa(sign: int, within: float) -> int:
    return (sign + _part(within, 12)) % 12


# Upper edges of the five irregular trimsamsa bands (5, 5, 8, 7, 5 degrees).
_D30_EDGES = (5.0, 10.0, 18.0, 25.0, 30.0)
_D30_ODD = (Sign.ARIES, Sign.AQUARIUS, Sign.SAGITTARIUS, Sign.GEMINI, Sign.LIBRA)
_D30_EVEN = (Sign.SCORPIO, Sign.CAPRICORN, Sign.PISCES, Sign.VIRGO, Sign.TAURUS)


def _d30_trimsamsa(sign: int, within: float) -> int:
    """
    D30 – Trimsamsa, Parashara piecewise mapping.

    Odd signs:
        0-5   -> Aries
        5-10  -> Aquarius
        10-18 -> Sagittarius
        18-25 -> Gemini
        25-30 -> Libra
    Even signs:
        0-5   -> Scorpio
        5-10  -> Capricorn
        10-18 -> Pisces
        18-25 -> Virgo
        25-30 -> Taurus
    """
    sequence = _D30_ODD if is_odd_sign(sign) else _D30_EVEN
    for edge, target in zip(_D30_EDGES, sequence):
        if within < edge:
            return target
    return sequence[-1]


# Mapping from varga system to its computation function.
_VARGA_FUNCTIONS: Dict[VargaSystem, Callable[[int, float], int]] = {
    VargaSystem.D1: _d1_rasi,
    VargaSystem.D2: _d2_hora,
    VargaSystem.D3: _d3_drekkana,
    VargaSystem.D7: _d7_saptamsa,
    VargaSystem.D9: _d9_navamsa,
    VargaSystem.D10: _d10_dasamsa,
    VargaSystem.D12: _d12_dwadasamsa,
    VargaSystem.D30: _d30_trimsamsa,
}


def varga_sign(system: VargaSystem, sign: int, within: float) -> Sign:
    """
    Sign occupied in `system` by a body at `within` degrees of `sign`.

    `within` must already be reduced to [0, 30); a full longitude is not
    re-normalized here. Use `varga_row` for absolute longitudes.
    """
    within = require_finite(within, "degree in sign")
    if not 0.0 <= within < 30.0:
        raise InvalidLongitudeError(f"degree in sign must be in [0, 30), got {within!r}")
    if not 0 <= int(sign) <= 11:
        raise InvalidLongitudeError(f"sign index must be in 0..11, got {sign!r}")
    return Sign(_VARGA_FUNCTIONS[system](int(sign), within))


def varga_row(lon: float) -> Dict[VargaSystem, Sign]:
    """All eight varga signs for one absolute longitude."""
    sign, within = split_sign(lon)
    return {system: varga_sign(system, sign, within) for system in VargaSystem}


@dataclass(frozen=True)
class VargaRow:
    body: Body
    placements: Dict[VargaSystem, Sign]

    def as_dict(self) -> Dict[str, str]:
        row = {"body": self.body.value}
        for system in VargaSystem:
            row[system.name] = self.placements[system].label
        return row


def calculate_varga_table(
    longitudes: Mapping[Body, Optional[float]],
) -> List[VargaRow]:
    """
    Build the varga table, one row per body in Body order.

    Bodies whose longitude is absent or non-finite are left out; they never
    fail the whole table.
    """
    rows: List[VargaRow] = []
    for body in Body:
        lon = longitudes.get(body)
        if not is_finite_number(lon):
            continue
        rows.append(VargaRow(body=body, placements=varga_row(lon)))
    return rows
