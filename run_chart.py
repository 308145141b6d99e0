import logging
from datetime import datetime

import pytz

from chart_calculator import ChartCalculator
from chart_input import ChartInput, parse_longitudes
from jyotish.houses import RASI, chart_boxes, south_indian_grid
from jyotish.varga_engine import VargaSystem

# Sample sidereal longitudes as an ephemeris would hand them over
SAMPLE_LONGITUDES = {
    "Sun": 256.42,
    "Moon": 41.07,
    "Mercury": 240.88,
    "Venus": 301.15,
    "Mars": 190.63,
    "Jupiter": 1.92,
    "Saturn": 299.75,
    "Rahu": 94.31,
    "Ketu": 274.31,
    "Uranus": 283.2,
    "Neptune": 279.9,
    "Pluto": 226.4,
}


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    tz = pytz.timezone("Asia/Kolkata")
    local_dt = tz.localize(datetime(2000, 1, 1, 12, 0))

    chart_input = ChartInput(
        ascendant=337.6,
        longitudes=SAMPLE_LONGITUDES,
        reference_instant=local_dt,
        timezone="Kolkata/Asia",
        name="Sample",
        lst_hours=18.4361,
    )

    calc = ChartCalculator()
    report = calc.calculate(chart_input)

    print(f"--- Chart for {local_dt} ({report.timezone_corrected or report.timezone}) ---")
    print(f"{'Body':<10} " + " ".join(f"{s.name:<12}" for s in VargaSystem))
    for row in report.varga_table:
        cells = " ".join(f"{row.placements[s].label:<12}" for s in VargaSystem)
        print(f"{row.body.value:<10} {cells}")

    print("-" * 60)
    for row in report.nakshatra_table:
        d = row.as_dict()
        print(f"{d['body']:<10} {d['sign_longitude']:<22} {d['nakshatra']:<18} {d['pada']} {d['lord']}")

    print("-" * 60)
    if report.panchanga is None:
        print("Panchanga unavailable")
    else:
        p = report.panchanga
        print(f"{p.vara} | {p.paksha} {p.tithi_name} (#{p.tithi_number}) | "
              f"{p.nakshatra} pada {p.pada} | {p.yoga} | {p.karana}")

    print("-" * 60)
    for rec in report.aspects:
        print(f"{rec.body_a.value} {rec.aspect_type.value} {rec.body_b.value} ({rec.delta:+.2f})")

    print("-" * 60)
    grid = south_indian_grid(chart_boxes(parse_longitudes(chart_input.longitudes), chart_input.ascendant, RASI))
    for grid_row in grid:
        print(" | ".join(
            f"{(box.label + ' ' + ','.join(box.bodies)) if box else '':<16}" for box in grid_row
        ))


if __name__ == "__main__":
    main()
