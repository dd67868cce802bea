# conftest.py - shared fixtures for the chemical usage report tests
import pandas as pd
import pytest
from unittest.mock import MagicMock

import httpx

GHS = "GHS Classification (UNECE)"

SAMPLE_CSV = """chem_name,Value,Year,State,type
Atrazine,"1,200",2018,IOWA,HERBICIDE
Atrazine,800,2019,IOWA,HERBICIDE
Glyphosate,"5,000",2018,ILLINOIS,HERBICIDE
Glyphosate,(D),2019,ILLINOIS,HERBICIDE
Chlorpyrifos,300,2018,IOWA,INSECTICIDE
Chlorpyrifos,(NA),2019,ILLINOIS,INSECTICIDE
Azoxystrobin,150,2019,IOWA,FUNGICIDE
"""


def make_response(*hierarchies):
    """Build a PubChem classification payload from (source_name, [node names]) pairs."""
    return {
        "Hierarchies": {
            "Hierarchy": [
                {
                    "SourceName": source,
                    "SourceID": f"source-{i}",
                    "Node": [
                        {"NodeID": f"node-{j}", "Information": {"Name": name}}
                        for j, name in enumerate(names)
                    ],
                }
                for i, (source, names) in enumerate(hierarchies)
            ]
        }
    }


def mock_http_response(payload=None, status_code=200, json_error=False):
    """A stand-in for httpx.Response as returned by httpx.get."""
    request = httpx.Request("GET", "https://pubchem.example/test")
    resp = MagicMock()
    resp.status_code = status_code
    if status_code >= 400:
        real = httpx.Response(status_code, request=request)
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"{status_code}", request=request, response=real)
    if json_error:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def ghs_response():
    """Classification payload with a non-matching hierarchy ahead of the GHS one."""
    return make_response(
        ("MeSH Tree", ["Herbicides", "Triazines"]),
        (GHS, ["H300: Fatal if swallowed", "Irritant category",
               "H410: Very toxic to aquatic life"]),
        ("ChEBI Ontology", ["H-bond donor"]),
    )


@pytest.fixture
def usage_csv(tmp_path):
    path = tmp_path / "chemical_usage.csv"
    path.write_text(SAMPLE_CSV)
    return path


@pytest.fixture
def usage_df():
    """Already-cleaned usage records."""
    return pd.DataFrame({
        "chem_name": ["Atrazine", "Atrazine", "Glyphosate", "Glyphosate",
                      "Chlorpyrifos", "Chlorpyrifos", "Azoxystrobin"],
        "Value": [1200.0, 800.0, 5000.0, float("nan"), 300.0, float("nan"), 150.0],
        "Year": pd.array([2018, 2019, 2018, 2019, 2018, 2019, 2019], dtype="Int64"),
        "State": ["IOWA", "IOWA", "ILLINOIS", "ILLINOIS", "IOWA", "ILLINOIS", "IOWA"],
        "type": ["HERBICIDE", "HERBICIDE", "HERBICIDE", "HERBICIDE",
                 "INSECTICIDE", "INSECTICIDE", "FUNGICIDE"],
    })
