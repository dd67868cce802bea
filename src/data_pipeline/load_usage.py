"""Load the agricultural chemical-usage CSV into a clean DataFrame.

Usage:
    python -m src.data_pipeline.load_usage [path/to/chemical_usage.csv]

Expects columns: chem_name, Value, Year, State, type.
Value holds USDA-style placeholders such as "(D)" (withheld) and "(NA)",
and thousands separators ("5,000"); those are stripped before parsing.
Rows with a blank chem_name are dropped; a blank State or type becomes
"Unknown".
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pandas as pd

CHEM_DATA_CSV = Path(os.getenv("CHEM_DATA_CSV", "data/raw/chemical_usage.csv"))

REQUIRED_COLUMNS = ("chem_name", "Value", "Year", "State", "type")

# Stands in for a blank State or type
UNKNOWN = "Unknown"


def clean_value(values: pd.Series) -> pd.Series:
    """Strip everything but digits, '.' and '-' and parse as float.

    Entries left empty or unparseable become NaN.
    """
    stripped = values.astype(str).str.replace(r"[^0-9.\-]", "", regex=True)
    return pd.to_numeric(stripped, errors="coerce")


def clean_usage(df: pd.DataFrame) -> pd.DataFrame:
    """Validate columns and normalize dtypes. Returns a new DataFrame."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s) {missing}. Available: {list(df.columns)}")

    df = df.copy()
    for col in ("chem_name", "State", "type"):
        df[col] = df[col].fillna("").astype(str).str.strip()
    # A record without a chemical name cannot be charted or looked up
    df = df[df["chem_name"] != ""].reset_index(drop=True)
    df[["State", "type"]] = df[["State", "type"]].replace("", UNKNOWN)
    df["Value"] = clean_value(df["Value"])
    df["Year"] = pd.to_numeric(df["Year"], errors="coerce").astype("Int64")
    return df


def load_chemical_usage(path: str | Path = CHEM_DATA_CSV) -> pd.DataFrame:
    """Read and clean the chemical-usage CSV."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")

    print(f"Loading {path} ...")
    df = pd.read_csv(path, dtype={"Value": str}, low_memory=False)
    print(f"  Read {len(df):,} rows x {len(df.columns)} columns")

    n_read = len(df)
    df = clean_usage(df)
    if len(df) < n_read:
        print(f"  Dropped {n_read - len(df):,} rows with no chem_name")
    n_missing = int(df["Value"].isna().sum())
    print(f"  {n_missing:,} Value entries not numeric after cleaning (treated as missing)")
    return df


def print_summary(df: pd.DataFrame) -> None:
    """Print a summary of the loaded data."""
    print("\nData Summary:")
    print(f"  Rows:      {len(df):,}")
    print(f"  Chemicals: {df['chem_name'].nunique():,}")
    print(f"  States:    {df['State'].nunique():,}")
    print(f"  Types:     {', '.join(sorted(df['type'].unique()))}")
    years = df["Year"].dropna()
    if len(years):
        print(f"  Years:     {int(years.min())}-{int(years.max())}")
    print(f"  Total Value (missing ignored): {df['Value'].sum():,.0f}")


def main() -> None:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else CHEM_DATA_CSV
    df = load_chemical_usage(path)
    print_summary(df)


if __name__ == "__main__":
    main()
