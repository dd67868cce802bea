"""Chemical Hazards MCP Server - thin wrapper around hazards/pubchem.py and charts/chart_generator.py.

Run standalone:  python -m src.mcp_servers.hazard_server
External use:    Claude Desktop, Cursor, or any MCP client via stdio

Core logic lives in the tool modules (single source of truth).
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from src.charts.chart_generator import (
    create_bar_chart as _bar,
    create_line_chart as _line,
    create_pie_chart as _pie,
)
from src.hazards.pubchem import lookup_ghs_hazards as _hazards

mcp = FastMCP("Chemical Hazards")


@mcp.tool()
def lookup_ghs_hazards(chemical: str):
    """Look up GHS hazard statements for a chemical on PubChem."""
    return _hazards.invoke({"chemical": chemical})


@mcp.tool()
def create_bar_chart(title: str, data_json: str, x_col: str, y_col: str,
                     horizontal: bool = False):
    """Create a Plotly bar chart specification."""
    return _bar.invoke({"title": title, "data_json": data_json, "x_col": x_col,
                        "y_col": y_col, "horizontal": horizontal})


@mcp.tool()
def create_pie_chart(title: str, data_json: str, names_col: str, values_col: str,
                     hole: float = 0.4):
    """Create a Plotly pie/donut chart specification."""
    return _pie.invoke({"title": title, "data_json": data_json, "names_col": names_col,
                        "values_col": values_col, "hole": hole})


@mcp.tool()
def create_line_chart(title: str, data_json: str, x_col: str, y_cols: str,
                      group_col: str = ""):
    """Create a Plotly line chart for trends over time."""
    return _line.invoke({"title": title, "data_json": data_json, "x_col": x_col,
                         "y_cols": y_cols, "group_col": group_col})


if __name__ == "__main__":
    mcp.run(transport="stdio")
