"""Tool for looking up GHS hazard statements on PubChem - free, no API key."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Any, Iterable, Mapping
from urllib.parse import quote

import httpx
from langchain_core.tools import tool

from src.hazards.classification import GHS_SOURCE_NAME, hazards_from_response

PUBCHEM_BASE_URL = os.getenv("PUBCHEM_BASE_URL", "https://pubchem.ncbi.nlm.nih.gov/rest/pug")
PUBCHEM_TIMEOUT = float(os.getenv("PUBCHEM_TIMEOUT", "30"))


@dataclass(frozen=True)
class LookupResult:
    """Outcome of one classification request: data on success, reason on failure."""

    chemical: str
    data: dict[str, Any] | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def classification_url(chemical: str) -> str:
    return f"{PUBCHEM_BASE_URL}/compound/name/{quote(chemical, safe='')}/classification/JSON"


def fetch_classification(chemical: str) -> LookupResult:
    """Request the PubChem classification tree for a compound name."""
    try:
        resp = httpx.get(classification_url(chemical), timeout=PUBCHEM_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPStatusError as e:
        return LookupResult(chemical, reason=f"PubChem API error: {e.response.status_code}")
    except httpx.HTTPError as e:
        return LookupResult(chemical, reason=f"Request failed: {e}")
    except ValueError as e:
        return LookupResult(chemical, reason=f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        return LookupResult(chemical, reason="Invalid JSON: expected an object")
    return LookupResult(chemical, data=data)


def hazards_for(chemical: str, source_name: str = GHS_SOURCE_NAME) -> list[str] | None:
    """Hazard statements for one chemical, or None if the lookup failed."""
    result = fetch_classification(chemical)
    if not result.ok:
        print(f"  [SKIP] {chemical}: {result.reason}")
        return None
    return hazards_from_response(result.data, source_name)


def lookup_hazards(
    chemicals: Iterable[str],
    source_name: str = GHS_SOURCE_NAME,
) -> Mapping[str, list[str] | None]:
    """Look up each distinct chemical once, in first-seen order.

    Returns a read-only mapping of chemical name to hazard statements, with
    None for chemicals that failed or have no GHS classification.
    """
    names = list(dict.fromkeys(chemicals))
    results = reduce(
        lambda acc, name: {**acc, name: hazards_for(name, source_name)},
        names,
        {},
    )
    return MappingProxyType(results)


@tool
def lookup_ghs_hazards(chemical: str) -> dict[str, Any]:
    """Look up GHS hazard statements for a chemical by name on PubChem.

    Returns the hazard statements listed under the UNECE GHS classification
    (e.g. "H300: Fatal if swallowed"). Chemicals with no GHS classification
    or that PubChem does not know come back with hazards = null.

    Args:
        chemical: Chemical or active-ingredient name (e.g. "Atrazine").
    """
    result = fetch_classification(chemical)
    if not result.ok:
        return {"chemical": chemical, "hazards": None, "error": result.reason}
    hazards = hazards_from_response(result.data)
    if hazards is None:
        return {"chemical": chemical, "hazards": None,
                "info": f"No '{GHS_SOURCE_NAME}' classification found"}
    return {"chemical": chemical, "hazards": hazards}
