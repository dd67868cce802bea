"""Usage aggregations behind the report's bar and donut charts.

All sums ignore missing Value entries.
"""

from __future__ import annotations

import pandas as pd


def total_usage_by_chemical(df: pd.DataFrame) -> pd.Series:
    """Total Value per chem_name."""
    return df.groupby("chem_name")["Value"].sum().rename("total_usage")


def top_chemicals(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """The ``n`` chemicals with the highest total usage, highest first.

    Ties are broken by name. With fewer than ``n`` chemicals all are returned.
    """
    totals = total_usage_by_chemical(df).reset_index()
    ranked = totals.sort_values(["total_usage", "chem_name"], ascending=[False, True])
    return ranked.head(n).reset_index(drop=True)


def type_proportions(df: pd.DataFrame, weighted: bool = False) -> pd.DataFrame:
    """Share of each chemical type.

    By default the share of records; with ``weighted=True`` the share of
    total usage.
    """
    if weighted:
        grouped = df.groupby("type")["Value"].sum().rename("total_usage")
    else:
        grouped = df.groupby("type").size().rename("count")
    out = grouped.reset_index()
    col = grouped.name
    total = out[col].sum()
    out["share"] = out[col] / total if total else 0.0
    return out.sort_values(col, ascending=False).reset_index(drop=True)


def usage_by_year(df: pd.DataFrame) -> pd.DataFrame:
    """Total usage per Year, ascending."""
    out = df.dropna(subset=["Year"]).groupby("Year")["Value"].sum().rename("total_usage")
    out = out.reset_index().sort_values("Year").reset_index(drop=True)
    out["Year"] = out["Year"].astype(int)
    return out
