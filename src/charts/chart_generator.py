"""Chart generation tools.

Return Plotly JSON specs; the report renders them with plotly.io and the MCP
server hands them to clients as-is. All chart logic is here (single source of
truth).
"""

from __future__ import annotations

import json
import uuid
from typing import Any

from langchain_core.tools import tool

_DARK_LAYOUT: dict[str, Any] = {
    "template": "plotly_dark",
    "paper_bgcolor": "rgba(11,15,26,0.95)",
    "plot_bgcolor": "rgba(11,15,26,0.7)",
    "font": {"color": "#e2e8f0", "family": "Inter, system-ui, sans-serif"},
    "margin": {"l": 60, "r": 30, "t": 50, "b": 50},
}

_PALETTE = ["#3b82f6", "#ef4444", "#10b981", "#f59e0b", "#8b5cf6",
            "#ec4899", "#14b8a6", "#f97316", "#6366f1", "#84cc16"]

_COLUMN_LABELS = {
    "chem_name": "Chemical",
    "value": "Usage",
    "total_usage": "Total Usage",
    "type": "Chemical Type",
    "count": "Records",
    "share": "Share",
    "year": "Year",
    "state": "State",
    "avg_toxicity": "Average Toxicity Score",
    "toxicity_score": "Toxicity Score",
    "hazard_code": "Hazard Code",
}


def _humanize(col_name: str) -> str:
    """Convert raw column name to human-readable axis label."""
    if not col_name:
        return col_name
    lower = col_name.lower().strip()
    if lower in _COLUMN_LABELS:
        return _COLUMN_LABELS[lower]
    return " ".join(w.upper() if len(w) <= 2 else w.capitalize()
                    for w in col_name.replace("_", " ").split())


def _parse(data_json: str) -> list[dict]:
    if isinstance(data_json, list):
        return data_json
    try:
        return json.loads(data_json)
    except (json.JSONDecodeError, TypeError):
        return []


def _check_cols(rows: list[dict], *cols: str) -> str | None:
    """Return error message if any required column is missing from data."""
    if not rows:
        return "No data rows provided. Aggregate data before creating charts."
    sample = rows[0]
    missing = [c for c in cols if c and c not in sample]
    if missing:
        available = list(sample.keys())
        return f"Column(s) {missing} not found in data. Available: {available}"
    return None


def _is_numeric(val: Any) -> bool:
    """Check if a value is numeric (int, float, or numeric string)."""
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return True
    if isinstance(val, str):
        try:
            float(val)
            return True
        except (ValueError, TypeError):
            return False
    return False


def _check_numeric(rows: list[dict], *cols: str) -> str | None:
    """Validate that columns contain numeric data. Returns error or None.

    Samples up to 5 rows and requires at least 60% numeric values to pass.
    Skips empty/None values in the count.
    """
    if not rows:
        return None
    sample = rows[:5]
    bad_cols = []
    for col in cols:
        if not col:
            continue
        vals = [r.get(col) for r in sample if r.get(col) is not None]
        if not vals:
            continue
        numeric_count = sum(1 for v in vals if _is_numeric(v))
        if numeric_count / len(vals) < 0.6:
            examples = [repr(v) for v in vals[:3]]
            bad_cols.append(f"'{col}' (sample values: {', '.join(examples)})")
    if bad_cols:
        return (f"Expected numeric data in column(s) {', '.join(bad_cols)} "
                f"but found non-numeric values. Check that the correct "
                f"column is assigned to the value/y axis.")
    return None


def _cid() -> str:
    return f"chart_{uuid.uuid4().hex[:8]}"


@tool
def create_bar_chart(
    title: str,
    data_json: str,
    x_col: str,
    y_col: str,
    horizontal: bool = False,
) -> dict[str, Any]:
    """Create a Plotly bar chart.

    Use for rankings (top chemicals by usage) and totals per category or year.

    Args:
        title: Chart title.
        data_json: JSON array of row objects, e.g. '[{"chem_name":"Atrazine","total_usage":1200}]'.
        x_col: Column for categories.
        y_col: Column for values.
        horizontal: If true, horizontal bars (good for ranked lists).
    """
    rows = _parse(data_json)
    err = _check_cols(rows, x_col, y_col)
    if err:
        return {"error": err}

    num_err = _check_numeric(rows, y_col)
    if num_err:
        return {"error": num_err}

    x_vals = [r.get(x_col) for r in rows]
    y_vals = [r.get(y_col) for r in rows]

    trace: dict[str, Any] = {"type": "bar", "name": _humanize(y_col),
                             "marker": {"color": _PALETTE[0]}}
    if horizontal:
        # Plotly draws the first category at the bottom
        trace.update({"x": y_vals[::-1], "y": x_vals[::-1], "orientation": "h"})
    else:
        trace.update({"x": x_vals, "y": y_vals})

    layout = {**_DARK_LAYOUT, "title": {"text": title},
              "xaxis": {"title": _humanize(y_col) if horizontal else _humanize(x_col)},
              "yaxis": {"title": _humanize(x_col) if horizontal else _humanize(y_col)}}
    if not horizontal:
        layout["xaxis"]["type"] = "category"

    return {"chart_id": _cid(), "chart_type": "bar", "title": title,
            "plotly_spec": {"data": [trace], "layout": layout}}


@tool
def create_pie_chart(
    title: str,
    data_json: str,
    names_col: str,
    values_col: str,
    hole: float = 0.4,
) -> dict[str, Any]:
    """Create a Plotly pie or donut chart of proportions.

    Args:
        title: Chart title.
        data_json: JSON array of row objects.
        names_col: Column for category names.
        values_col: Column for numeric values (counts, totals or shares).
        hole: Donut hole size from 0 (pie) to 0.9.
    """
    rows = _parse(data_json)
    err = _check_cols(rows, names_col, values_col)
    if err:
        return {"error": err}
    num_err = _check_numeric(rows, values_col)
    if num_err:
        return {"error": num_err}

    trace = {
        "type": "pie",
        "labels": [r.get(names_col) for r in rows],
        "values": [r.get(values_col) for r in rows],
        "marker": {"colors": [_PALETTE[i % len(_PALETTE)] for i in range(len(rows))]},
        "textinfo": "label+percent",
        "hole": max(0.0, min(hole, 0.9)),
    }
    layout = {**_DARK_LAYOUT, "title": {"text": title}}
    return {"chart_id": _cid(), "chart_type": "pie", "title": title,
            "plotly_spec": {"data": [trace], "layout": layout}}


@tool
def create_line_chart(
    title: str,
    data_json: str,
    x_col: str,
    y_cols: str,
    group_col: str = "",
) -> dict[str, Any]:
    """Create a Plotly line chart for trends over time.

    Either pass several comma-separated y columns, or one y column plus a
    group_col to draw one line per group (e.g. one line per State).

    Args:
        title: Chart title.
        data_json: JSON array of row objects.
        x_col: Column for x-axis (years, dates).
        y_cols: Comma-separated column names for y-axis lines.
        group_col: Optional column to split a single y column into lines.
    """
    rows = _parse(data_json)
    cols = [c.strip() for c in y_cols.split(",") if c.strip()]
    if not cols:
        return {"error": "No y column given."}
    err = _check_cols(rows, x_col, group_col, *cols)
    if err:
        return {"error": err}
    num_err = _check_numeric(rows, *cols)
    if num_err:
        return {"error": num_err}

    if group_col:
        series = []
        for group in dict.fromkeys(r.get(group_col) for r in rows):
            members = [r for r in rows if r.get(group_col) == group]
            series.append((str(group), members, cols[0]))
    else:
        series = [(_humanize(col), rows, col) for col in cols]

    traces = []
    for i, (name, members, col) in enumerate(series):
        traces.append({
            "type": "scatter", "mode": "lines+markers", "name": name,
            "x": [r.get(x_col) for r in members],
            "y": [r.get(col) for r in members],
            "line": {"color": _PALETTE[i % len(_PALETTE)], "width": 2},
            "marker": {"size": 6},
        })

    layout = {**_DARK_LAYOUT, "title": {"text": title},
              "xaxis": {"title": _humanize(x_col)},
              "yaxis": {"title": _humanize(cols[0]) if len(cols) == 1 else ""},
              "legend": {"orientation": "h", "y": -0.15}}

    return {"chart_id": _cid(), "chart_type": "line", "title": title,
            "plotly_spec": {"data": traces, "layout": layout}}
