"""CLI entry point for star map generation.

Edit the where/when variables at the top, then run:
    uv run python src/stargazer/starchart.py
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from stargazer.compute import run  # noqa: E402
from stargazer.config import load_settings  # noqa: E402

where = "New York"
when = "2000-01-21"

settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

star_map = run({"date": when, "location": where}, settings=settings)

results = Path(__file__).parent.parent.parent / "results"
results.mkdir(parents=True, exist_ok=True)
stem = f"{where}__{when}".replace(" ", "_").replace("-", "_")
(results / f"{stem}__starmap.svg").write_text(star_map["starMapSvg"], encoding="utf-8")
(results / f"{stem}__moon.svg").write_text(star_map["moonPhase"]["svgPath"], encoding="utf-8")

moon = star_map["moonPhase"]
print(f"{star_map['formattedDate']}: {moon['emoji']} {moon['name']} ({moon['illumination']}%)")
print("Constellations:", ", ".join(star_map["constellations"]))
print("Planets:", ", ".join(p["name"] for p in star_map["planets"]))
print(f"Saved: {results}")
