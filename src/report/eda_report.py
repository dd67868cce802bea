"""Chemical-usage EDA report: four charts plus GHS hazard lookups.

build_report() does the work and returns an EDAReport; save_report() writes
each chart as a Plotly JSON spec and a standalone HTML page, plus the hazard
mapping as hazards.json.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Sequence

import pandas as pd
import plotly.io as pio

from src.analysis.toxicity import TOXICITY_SEED, toxicity_by_state_year
from src.analysis.usage import top_chemicals, type_proportions, usage_by_year
from src.charts.chart_generator import create_bar_chart, create_line_chart, create_pie_chart
from src.hazards.pubchem import lookup_hazards

REPORT_OUTPUT_DIR = Path(os.getenv("REPORT_OUTPUT_DIR", "output"))

ABSENT = "NA"


@dataclass
class EDAReport:
    charts: dict[str, dict[str, Any]]
    hazards: Mapping[str, list[str] | None] = field(default_factory=lambda: MappingProxyType({}))
    row_count: int = 0
    missing_values: int = 0


def _records(df: pd.DataFrame) -> str:
    return df.to_json(orient="records")


def build_charts(df: pd.DataFrame, top_n: int = 10, seed: int = TOXICITY_SEED) -> dict[str, dict[str, Any]]:
    """Aggregate the data and build the four chart specs, keyed by file name."""
    top = top_chemicals(df, top_n)
    types = type_proportions(df)
    yearly = usage_by_year(df)
    toxicity = toxicity_by_state_year(df, seed)

    return {
        "top_chemicals": create_bar_chart.invoke({
            "title": f"Top {top_n} Chemicals by Total Usage",
            "data_json": _records(top),
            "x_col": "chem_name", "y_col": "total_usage", "horizontal": True,
        }),
        "type_proportions": create_pie_chart.invoke({
            "title": "Share of Records by Chemical Type",
            "data_json": _records(types),
            "names_col": "type", "values_col": "count",
        }),
        "usage_by_year": create_bar_chart.invoke({
            "title": "Total Chemical Usage by Year",
            "data_json": _records(yearly),
            "x_col": "Year", "y_col": "total_usage",
        }),
        "toxicity_trend": create_line_chart.invoke({
            "title": "Average Simulated Toxicity Score by State",
            "data_json": _records(toxicity),
            "x_col": "Year", "y_cols": "avg_toxicity", "group_col": "State",
        }),
    }


def build_report(
    df: pd.DataFrame,
    chemicals: Sequence[str] | None = None,
    top_n: int = 10,
    lookup_count: int = 5,
    seed: int = TOXICITY_SEED,
    lookup: bool = True,
) -> EDAReport:
    """Build the charts and, unless ``lookup`` is off, the hazard mapping.

    Without explicit ``chemicals`` the ``lookup_count`` highest-usage
    chemicals are looked up.
    """
    charts = build_charts(df, top_n, seed)
    for name, chart in charts.items():
        if "error" in chart:
            print(f"  [FAIL] {name}: {chart['error']}")
        else:
            print(f"  [PASS] {name}")

    hazards: Mapping[str, list[str] | None] = MappingProxyType({})
    if lookup:
        if chemicals is None:
            chemicals = top_chemicals(df, lookup_count)["chem_name"].tolist()
        print(f"\nLooking up GHS hazards for {len(chemicals)} chemical(s) ...")
        hazards = lookup_hazards(chemicals)

    return EDAReport(
        charts=charts,
        hazards=hazards,
        row_count=len(df),
        missing_values=int(df["Value"].isna().sum()),
    )


def format_hazards(hazards: Mapping[str, list[str] | None]) -> str:
    """One line per chemical: its statements joined by '; ', or NA."""
    lines = []
    for chemical, statements in hazards.items():
        if statements is None:
            lines.append(f"{chemical}: {ABSENT}")
        elif not statements:
            lines.append(f"{chemical}: (no hazard statements)")
        else:
            lines.append(f"{chemical}: {'; '.join(statements)}")
    return "\n".join(lines)


def save_report(report: EDAReport, output_dir: str | Path = REPORT_OUTPUT_DIR) -> list[Path]:
    """Write chart specs/pages and hazards.json. Returns the written paths."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []

    for name, chart in report.charts.items():
        if "error" in chart:
            continue
        spec_path = output_dir / f"{name}.json"
        with open(spec_path, "w", encoding="utf-8") as f:
            json.dump(chart, f, indent=2)
        html_path = output_dir / f"{name}.html"
        pio.write_html(chart["plotly_spec"], file=str(html_path), include_plotlyjs="cdn")
        written.extend([spec_path, html_path])

    hazards_path = output_dir / "hazards.json"
    with open(hazards_path, "w", encoding="utf-8") as f:
        json.dump(dict(report.hazards), f, indent=2, ensure_ascii=False)
    written.append(hazards_path)
    return written
