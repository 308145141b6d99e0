from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from .angles import Body, angular_distance, is_finite_number


class AspectType(str, Enum):
    CONJUNCTION = "Conjunction"
    OPPOSITION = "Opposition"
    TRINE = "Trine"
    SQUARE = "Square"
    SEXTILE = "Sextile"


@dataclass(frozen=True)
class AspectDefinition:
    aspect_type: AspectType
    angle: float
    orb: float


# Checked in this order; the first definition whose orb matches wins.
DEFAULT_ASPECTS: Tuple[AspectDefinition, ...] = (
    AspectDefinition(AspectType.CONJUNCTION, 0.0, 6.0),
    AspectDefinition(AspectType.OPPOSITION, 180.0, 6.0),
    AspectDefinition(AspectType.TRINE, 120.0, 5.0),
    AspectDefinition(AspectType.SQUARE, 90.0, 5.0),
    AspectDefinition(AspectType.SEXTILE, 60.0, 4.0),
)


@dataclass(frozen=True)
class AspectRecord:
    body_a: Body
    body_b: Body
    aspect_type: AspectType
    delta: float  # signed deviation from the exact angle, 2 decimals

    @property
    def key(self) -> Tuple[FrozenSet[Body], AspectType]:
        """Unordered merge key: A-trine-B and B-trine-A are the same aspect."""
        return frozenset((self.body_a, self.body_b)), self.aspect_type

    def as_dict(self) -> Dict[str, object]:
        return {
            "body_a": self.body_a.value,
            "body_b": self.body_b.value,
            "type": self.aspect_type.value,
            "delta": self.delta,
        }


def _round_delta(deviation: float) -> float:
    # exact binary ties (x.125, x.625) round away from zero
    return float(Decimal(deviation).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def match_aspect(
    a: float,
    b: float,
    aspects: Sequence[AspectDefinition] = DEFAULT_ASPECTS,
) -> Optional[Tuple[AspectType, float]]:
    """
    First aspect whose orb contains the separation of `a` and `b`.

    Returns (aspect_type, delta) with delta = separation - exact angle,
    rounded to 2 decimals, or None when nothing matches.
    """
    dist = angular_distance(a, b)
    for definition in aspects:
        deviation = dist - definition.angle
        if abs(deviation) <= definition.orb:
            return definition.aspect_type, _round_delta(deviation)
    return None


def detect_aspects(
    ascendant: float,
    longitudes: Mapping[Body, Optional[float]],
    aspects: Sequence[AspectDefinition] = DEFAULT_ASPECTS,
) -> List[AspectRecord]:
    """
    Aspects from the ascendant to every body with a finite longitude.

    At most one aspect per body. Bodies are visited in mapping order.
    """
    records: List[AspectRecord] = []
    for body, lon in longitudes.items():
        if body is Body.ASCENDANT or not is_finite_number(lon):
            continue
        hit = match_aspect(ascendant, lon, aspects)
        if hit is None:
            continue
        aspect_type, delta = hit
        records.append(AspectRecord(Body.ASCENDANT, body, aspect_type, delta))
    return records


def detect_body_aspects(
    longitudes: Mapping[Body, Optional[float]],
    aspects: Sequence[AspectDefinition] = DEFAULT_ASPECTS,
) -> List[AspectRecord]:
    """
    Aspects between every unordered pair of bodies (ascendant excluded).

    Pairs follow Body order; body_a always precedes body_b.
    """
    bodies = [
        body
        for body in Body
        if body is not Body.ASCENDANT and is_finite_number(longitudes.get(body))
    ]
    records: List[AspectRecord] = []
    for i, a in enumerate(bodies):
        for b in bodies[i + 1:]:
            hit = match_aspect(longitudes[a], longitudes[b], aspects)
            if hit is None:
                continue
            aspect_type, delta = hit
            records.append(AspectRecord(a, b, aspect_type, delta))
    return records


def merge_aspects(
    existing: Iterable[AspectRecord],
    derived: Iterable[AspectRecord],
) -> List[AspectRecord]:
    """
    Merge two aspect lists, deduplicating on the unordered key.

    Later records overwrite earlier ones on a key collision, and the merged
    record keeps the position where its key was first seen.
    """
    merged: Dict[Tuple[FrozenSet[Body], AspectType], AspectRecord] = {}
    for record in existing:
        merged[record.key] = record
    for record in derived:
        merged[record.key] = record
    return list(merged.values())
