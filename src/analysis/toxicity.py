"""Simulated toxicity scores for the state-by-year trend chart.

Each chemical gets a GHS hazard code drawn uniformly at random (fixed seed)
and the code's score from HAZARD_SCORES. This is an illustration of how a
toxicity trend would be charted, not a toxicity model.
"""

from __future__ import annotations

import os
from typing import Iterable

import numpy as np
import pandas as pd

TOXICITY_SEED = int(os.getenv("TOXICITY_SEED", "42"))

# Severity 1 (least) to 5 (most)
HAZARD_SCORES: dict[str, int] = {
    "H300": 5,  # Fatal if swallowed
    "H301": 4,  # Toxic if swallowed
    "H302": 3,  # Harmful if swallowed
    "H304": 4,  # May be fatal if swallowed and enters airways
    "H310": 5,  # Fatal in contact with skin
    "H311": 4,  # Toxic in contact with skin
    "H312": 3,  # Harmful in contact with skin
    "H315": 2,  # Causes skin irritation
    "H317": 2,  # May cause an allergic skin reaction
    "H318": 3,  # Causes serious eye damage
    "H319": 2,  # Causes serious eye irritation
    "H330": 5,  # Fatal if inhaled
    "H331": 4,  # Toxic if inhaled
    "H332": 3,  # Harmful if inhaled
    "H335": 1,  # May cause respiratory irritation
    "H351": 4,  # Suspected of causing cancer
    "H361": 4,  # Suspected of damaging fertility or the unborn child
    "H373": 3,  # May cause damage to organs through prolonged exposure
    "H400": 3,  # Very toxic to aquatic life
    "H410": 4,  # Very toxic to aquatic life with long lasting effects
    "H411": 3,  # Toxic to aquatic life with long lasting effects
    "H412": 2,  # Harmful to aquatic life with long lasting effects
}


def assign_hazard_codes(chemicals: Iterable[str], seed: int = TOXICITY_SEED) -> pd.DataFrame:
    """Draw one hazard code per distinct chemical and attach its score."""
    names = sorted(set(chemicals))
    rng = np.random.default_rng(seed)
    codes = [str(c) for c in rng.choice(list(HAZARD_SCORES), size=len(names))] if names else []
    return pd.DataFrame({
        "chem_name": pd.Series(names, dtype=object),
        "hazard_code": pd.Series(codes, dtype=object),
        "toxicity_score": pd.Series([HAZARD_SCORES[c] for c in codes], dtype="int64"),
    })


def toxicity_by_state_year(df: pd.DataFrame, seed: int = TOXICITY_SEED) -> pd.DataFrame:
    """Mean simulated toxicity score of the records in each State and Year."""
    dated = df.dropna(subset=["Year"])
    if dated.empty:
        return pd.DataFrame(columns=["State", "Year", "avg_toxicity"])

    scores = assign_hazard_codes(df["chem_name"], seed).set_index("chem_name")["toxicity_score"]
    dated = dated.assign(toxicity_score=dated["chem_name"].map(scores))
    out = (
        dated.groupby(["State", "Year"])["toxicity_score"]
        .mean()
        .rename("avg_toxicity")
        .reset_index()
        .sort_values(["State", "Year"])
        .reset_index(drop=True)
    )
    out["Year"] = out["Year"].astype(int)
    return out
