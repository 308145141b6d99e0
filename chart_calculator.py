import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from chart_input import (
    ChartInput,
    DashaPeriod,
    instant_to_julian,
    parse_longitudes,
    resolve_timezone,
)
from jyotish.angles import Body, is_finite_number, normalize
from jyotish.aspects import (
    DEFAULT_ASPECTS,
    AspectDefinition,
    AspectRecord,
    detect_aspects,
    detect_body_aspects,
    merge_aspects,
)
from jyotish.errors import UnresolvableTimezoneError
from jyotish.formatting import format_dms, format_hours, format_sign_degree
from jyotish.houses import house_positions
from jyotish.nakshatras import NakshatraRow, calculate_nakshatra_table
from jyotish.varga_engine import VargaRow, calculate_varga_table
from panchanga_engine import PanchangaResult, compute_panchanga

logger = logging.getLogger(__name__)


@dataclass
class ChartConfig:
    aspects: Sequence[AspectDefinition] = DEFAULT_ASPECTS
    # Only used when the input carries no aspect list of its own
    include_body_aspects: bool = True
    json_indent: Optional[int] = 2


@dataclass(frozen=True)
class ChartReport:
    name: str
    timezone: str
    timezone_corrected: Optional[str]
    lst: Optional[str]
    julian_day: float
    varga_table: List[VargaRow]
    nakshatra_table: List[NakshatraRow]
    longitude_table: List[Dict[str, str]]
    panchanga: Optional[PanchangaResult]
    aspects: List[AspectRecord]
    houses: Optional[Dict[Body, int]]
    dashas: List[DashaPeriod] = field(default_factory=list)


class ChartCalculator:
    def __init__(self, config: Optional[ChartConfig] = None):
        self.config = config or ChartConfig()

    def _json_default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        raise TypeError(f"Type {type(obj)} not serializable")

    def calculate_json(self, chart_input: ChartInput) -> str:
        data = self.calculate_dict(chart_input)
        return json.dumps(data, default=self._json_default, indent=self.config.json_indent)

    def calculate_dict(self, chart_input: ChartInput) -> Dict[str, Any]:
        report = self.calculate(chart_input)
        return {
            "meta": {
                "name": report.name,
                "timezone": report.timezone,
                "timezone_corrected": report.timezone_corrected,
                "lst": report.lst,
                "julian_day": report.julian_day,
            },
            "longitudes": report.longitude_table,
            "vargas": [row.as_dict() for row in report.varga_table],
            "nakshatras": [row.as_dict() for row in report.nakshatra_table],
            "panchanga": report.panchanga.as_dict() if report.panchanga else None,
            "aspects": [rec.as_dict() for rec in report.aspects],
            "houses": (
                {body.value: house for body, house in report.houses.items()}
                if report.houses is not None
                else None
            ),
            "dashas": [
                {"lord": d.lord, "start": d.start, "end": d.end}
                for d in report.dashas
            ],
        }

    def calculate(self, chart_input: ChartInput) -> ChartReport:
        # 1) Longitudes keyed by Body; the ascendant joins as a pseudo-body
        bodies = parse_longitudes(chart_input.longitudes)
        asc = chart_input.ascendant
        has_asc = is_finite_number(asc)
        all_lons: Dict[Body, Optional[float]] = {Body.ASCENDANT: asc if has_asc else None}
        all_lons.update(bodies)

        for body in Body:
            if not is_finite_number(all_lons.get(body)):
                logger.debug("No usable longitude for %s; row skipped", body.value)

        # 2) Varga + nakshatra tables (independent per body)
        varga_table = calculate_varga_table(all_lons)
        nakshatra_table = calculate_nakshatra_table(all_lons)
        longitude_table = [
            {
                "body": body.value,
                "sign_longitude": format_sign_degree(all_lons[body]),
                "dms": format_dms(all_lons[body]),
            }
            for body in Body
            if is_finite_number(all_lons.get(body))
        ]

        # 3) Panchanga (Sun/Moon/instant only)
        julian_day = instant_to_julian(chart_input.reference_instant)
        try:
            _, tz_corrected = resolve_timezone(chart_input.timezone)
        except UnresolvableTimezoneError:
            # compute_panchanga reports this one
            tz_corrected = None
        panchanga = compute_panchanga(
            bodies.get(Body.SUN),
            bodies.get(Body.MOON),
            chart_input.reference_instant,
            tz_corrected or chart_input.timezone,
        )

        # 4) Aspects: external (or body-pair) list, then ascendant aspects on top
        if chart_input.aspects is not None:
            existing = list(chart_input.aspects)
        elif self.config.include_body_aspects:
            existing = detect_body_aspects(bodies, self.config.aspects)
        else:
            existing = []
        asc_aspects = (
            detect_aspects(asc, bodies, self.config.aspects) if has_asc else []
        )
        aspects = merge_aspects(existing, asc_aspects)

        # 5) Whole-sign houses need the ascendant
        houses = house_positions(normalize(asc), bodies) if has_asc else None

        return ChartReport(
            name=chart_input.name,
            timezone=chart_input.timezone,
            timezone_corrected=tz_corrected,
            lst=(
                format_hours(chart_input.lst_hours)
                if is_finite_number(chart_input.lst_hours)
                else None
            ),
            julian_day=julian_day,
            varga_table=varga_table,
            nakshatra_table=nakshatra_table,
            longitude_table=longitude_table,
            panchanga=panchanga,
            aspects=aspects,
            houses=houses,
            dashas=list(chart_input.dashas),
        )
