import json
import logging
from datetime import datetime

import pytest
import pytz

from chart_calculator import ChartCalculator, ChartConfig
from chart_input import ChartInput, DashaPeriod
from jyotish.angles import Body
from jyotish.aspects import AspectRecord, AspectType
from jyotish.errors import InvalidInstantError

TEN_BODIES = {
    "Sun": 256.42,
    "Moon": 41.07,
    "Mercury": 240.88,
    "Venus": 301.15,
    "Mars": 190.63,
    "Jupiter": 1.92,
    "Saturn": 299.75,
    "Rahu": 94.31,
    "Ketu": 274.31,
    "Pluto": 226.4,
}


def _chart(**overrides) -> ChartInput:
    params = dict(
        ascendant=337.6,
        longitudes=TEN_BODIES,
        reference_instant=2451545.0,
        timezone="Asia/Kolkata",
        name="Sample",
    )
    params.update(overrides)
    return ChartInput(**params)


def test_tables_have_one_row_per_available_body():
    data = ChartCalculator().calculate_dict(_chart())
    bodies = [row["body"] for row in data["vargas"]]
    assert bodies == [
        "Ascendant", "Sun", "Moon", "Mercury", "Venus", "Mars",
        "Jupiter", "Saturn", "Rahu", "Ketu", "Pluto",
    ]
    assert [row["body"] for row in data["nakshatras"]] == bodies
    assert [row["body"] for row in data["longitudes"]] == bodies

    asc = data["vargas"][0]
    assert asc["D1"] == "Pisces"
    # Pisces 7.6°: dual sign, navamsa from Cancer, part 2 -> Virgo
    assert asc["D9"] == "Virgo"

    moon = data["nakshatras"][2]
    assert moon == {
        "body": "Moon",
        "sign": "Taurus",
        "longitude": 41.07,
        "sign_longitude": "Taurus 11°04′12″",
        "nakshatra": "Rohini",
        "pada": 1,
        "lord": "Moon",
    }


def test_panchanga_and_houses():
    data = ChartCalculator().calculate_dict(_chart())
    assert data["panchanga"] == {
        "vara": "Saturday",
        "paksha": "Shukla",
        "tithi_number": 13,
        "tithi_name": "Trayodashi",
        "nakshatra": "Rohini",
        "pada": 1,
        "yoga": "Shubha",
        "karana": "Kaulava",
    }
    assert data["houses"]["Ascendant"] == 1
    assert data["houses"]["Sun"] == 10
    assert data["houses"]["Jupiter"] == 2


def test_missing_bodies_do_not_fail_the_chart():
    lons = dict(TEN_BODIES, Mars=None, Venus=float("nan"), Uranus=None)
    data = ChartCalculator().calculate_dict(_chart(longitudes=lons))
    bodies = {row["body"] for row in data["vargas"]}
    assert "Mars" not in bodies and "Venus" not in bodies and "Uranus" not in bodies
    assert "Sun" in bodies
    assert data["panchanga"] is not None


def test_missing_ascendant_drops_ascendant_outputs():
    data = ChartCalculator().calculate_dict(_chart(ascendant=None))
    assert data["vargas"][0]["body"] == "Sun"
    assert data["houses"] is None
    assert all(a["body_a"] != "Ascendant" for a in data["aspects"])


def test_missing_moon_makes_panchanga_unavailable():
    lons = {k: v for k, v in TEN_BODIES.items() if k != "Moon"}
    data = ChartCalculator().calculate_dict(_chart(longitudes=lons))
    assert data["panchanga"] is None
    assert len(data["vargas"]) == 10


def test_unresolvable_timezone_only_affects_panchanga(caplog):
    with caplog.at_level(logging.WARNING):
        report = ChartCalculator().calculate(_chart(timezone="Nowhere/Atlantis"))
    assert report.panchanga is None
    assert report.timezone_corrected is None
    assert len(report.varga_table) == 11
    assert "Panchanga unavailable" in caplog.text


def test_corrected_timezone_is_reported():
    report = ChartCalculator().calculate(_chart(timezone="Kolkata/Asia"))
    assert report.timezone_corrected == "Asia/Kolkata"
    assert report.panchanga.vara == "Saturday"


def test_external_aspects_are_merged_with_ascendant_aspects():
    # Ascendant 337.6 and Jupiter 1.92 -> 24.32 apart: no aspect.
    # Ascendant and Mercury 240.88 -> 96.72: no aspect; Saturn 299.75 -> 37.85: none.
    # Ascendant and Ketu 274.31 -> 63.29: Sextile +3.29
    external = [
        AspectRecord(Body.KETU, Body.ASCENDANT, AspectType.SEXTILE, 9.99),
        AspectRecord(Body.SUN, Body.MERCURY, AspectType.CONJUNCTION, 15.54),
    ]
    report = ChartCalculator().calculate(_chart(aspects=external))
    assert report.aspects[0] == AspectRecord(
        Body.ASCENDANT, Body.KETU, AspectType.SEXTILE, 3.29
    )
    assert report.aspects[1] == external[1]


def test_body_aspects_can_be_switched_off():
    calc = ChartCalculator(ChartConfig(include_body_aspects=False))
    report = calc.calculate(_chart())
    assert all(rec.body_a is Body.ASCENDANT for rec in report.aspects)


def test_dashas_pass_through_and_serialize():
    start = datetime(2000, 1, 1, tzinfo=pytz.utc)
    end = datetime(2007, 1, 1, tzinfo=pytz.utc)
    out = ChartCalculator().calculate_json(
        _chart(dashas=(DashaPeriod("Moon", start, end),), lst_hours=18.4361)
    )
    data = json.loads(out)
    assert data["dashas"] == [
        {"lord": "Moon", "start": start.isoformat(), "end": end.isoformat()}
    ]
    assert data["meta"]["lst"] == "18:26:10"


def test_julian_day_is_reported_for_datetime_instants():
    instant = datetime(2000, 1, 1, 12, 0, tzinfo=pytz.utc)
    data = ChartCalculator().calculate_dict(_chart(reference_instant=instant))
    assert data["meta"]["julian_day"] == pytest.approx(2451545.0)
    assert data["panchanga"]["vara"] == "Saturday"


def test_non_finite_instant_is_rejected():
    with pytest.raises(InvalidInstantError):
        ChartCalculator().calculate(_chart(reference_instant=float("nan")))


def test_repeated_runs_are_identical():
    calc = ChartCalculator()
    first = calc.calculate_json(_chart())
    for _ in range(3):
        assert calc.calculate_json(_chart()) == first
    assert ChartCalculator().calculate_json(_chart()) == first
