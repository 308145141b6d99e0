from datetime import datetime

import pytest
import pytz

from chart_input import (
    datetime_to_julian,
    instant_to_julian,
    instant_to_utc,
    julian_to_datetime,
    parse_longitudes,
    resolve_timezone,
)
from jyotish.angles import Body
from jyotish.errors import InvalidInstantError, JyotishError, UnresolvableTimezoneError


def test_valid_timezone_is_not_corrected():
    tz, corrected = resolve_timezone("Asia/Kolkata")
    assert tz.zone == "Asia/Kolkata"
    assert corrected is None


def test_swapped_timezone_is_corrected():
    tz, corrected = resolve_timezone("New York/America")
    assert corrected == "America/New_York"
    assert tz.zone == "America/New_York"


def test_alias_timezone_is_corrected():
    tz, corrected = resolve_timezone("Calcutta/Asia")
    assert corrected in ("Asia/Calcutta", "Asia/Kolkata")
    assert tz is not None


@pytest.mark.parametrize("name", ["", "   ", "Nowhere/Atlantis", "Mars"])
def test_unresolvable_timezone_raises(name):
    with pytest.raises(UnresolvableTimezoneError):
        resolve_timezone(name)


def test_julian_round_trip_at_j2000():
    dt = julian_to_datetime(2451545.0)
    assert dt == datetime(2000, 1, 1, 12, 0, tzinfo=pytz.utc)
    assert datetime_to_julian(dt) == pytest.approx(2451545.0)


def test_instant_to_utc():
    tz = pytz.timezone("Asia/Kolkata")
    local = tz.localize(datetime(2000, 1, 1, 17, 30))
    assert instant_to_utc(local) == datetime(2000, 1, 1, 12, 0, tzinfo=pytz.utc)
    assert instant_to_utc(datetime(2000, 1, 1, 12, 0)).tzinfo is not None
    assert instant_to_utc(2451545.0) == datetime(2000, 1, 1, 12, 0, tzinfo=pytz.utc)


def test_instant_to_julian_accepts_datetime_or_julian_day():
    kolkata = pytz.timezone("Asia/Kolkata")
    local = kolkata.localize(datetime(2000, 1, 1, 17, 30))
    assert instant_to_julian(local) == pytest.approx(2451545.0)
    assert instant_to_julian(2451545.0) == 2451545.0


@pytest.mark.parametrize("jd", [float("nan"), float("inf"), 0.0, 1e8])
def test_unusable_julian_day_raises(jd):
    with pytest.raises(InvalidInstantError):
        instant_to_utc(jd)


def test_non_finite_julian_day_is_an_engine_error():
    with pytest.raises(JyotishError):
        instant_to_julian(float("-inf"))


def test_parse_longitudes_drops_unknown_names():
    parsed = parse_longitudes({"Sun": 10.0, "Chiron": 5.0, "Moon": None, "Ascendant": 3.0})
    assert parsed == {Body.SUN: 10.0, Body.MOON: None}
