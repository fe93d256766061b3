"""Demo: print sunrise, sunset and day length along a meridian for one date."""

from __future__ import annotations

from datetime import date

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from solarcalc.orchestrate.batch import GridSpec, sun_times_grid  # noqa: E402


def _fmt_hours(value: float | None) -> str:
    if value is None:
        return "  --  "
    minutes = round(value * 60.0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def main() -> int:
    """Evaluate a latitude sweep at the Greenwich meridian and print a table."""
    on_date = date.today()
    grid = GridSpec(
        lat_min=-80.0,
        lat_max=80.0,
        lon_min=0.0,
        lon_max=0.0,
        step_deg=10.0,
    )
    rows = sun_times_grid(on_date, grid)

    print("=== solarcalc sun times demo ===")
    print(f"date: {on_date.isoformat()} (UTC clock)\n")
    print("   lat | sunrise | sunset | day length | condition")
    print("-------+---------+--------+------------+-----------")
    for row in rows:
        condition = row["polar_condition"] or ""
        print(
            f"{row['lat']:>6.1f} | {_fmt_hours(row['sunrise_hours']):>7} | "
            f"{_fmt_hours(row['sunset_hours']):>6} | {row['day_length_hours']:>10.2f} | {condition}"
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
