import json
from types import MappingProxyType
from unittest.mock import patch

import pytest

from src.data_pipeline.load_usage import load_chemical_usage
from src.report.eda_report import build_report, format_hazards, save_report

import run_report
from conftest import mock_http_response


class TestBuildReport:

    @pytest.mark.integration
    def test_charts_without_lookup(self, usage_df):
        with patch("src.hazards.pubchem.httpx.get") as get:
            report = build_report(usage_df, lookup=False)
        get.assert_not_called()
        assert set(report.charts) == {"top_chemicals", "type_proportions",
                                      "usage_by_year", "toxicity_trend"}
        assert all("error" not in c for c in report.charts.values())
        assert report.row_count == 7
        assert report.missing_values == 2
        assert dict(report.hazards) == {}

        top = report.charts["top_chemicals"]["plotly_spec"]["data"][0]
        assert top["y"][-1] == "Glyphosate"

    @pytest.mark.integration
    def test_default_lookup_uses_top_chemicals(self, usage_df, ghs_response):
        with patch("src.hazards.pubchem.httpx.get", return_value=mock_http_response(ghs_response)) as get:
            report = build_report(usage_df, lookup_count=2)
        assert get.call_count == 2
        assert list(report.hazards) == ["Glyphosate", "Atrazine"]

    @pytest.mark.integration
    def test_header_only_csv_fails_each_chart(self, tmp_path, capsys):
        path = tmp_path / "empty.csv"
        path.write_text("chem_name,Value,Year,State,type\n")
        df = load_chemical_usage(path)
        with patch("src.hazards.pubchem.httpx.get") as get:
            report = build_report(df)
        get.assert_not_called()
        assert report.row_count == 0
        assert all("error" in c for c in report.charts.values())
        assert dict(report.hazards) == {}
        assert "[FAIL] toxicity_trend" in capsys.readouterr().out

    @pytest.mark.integration
    def test_explicit_chemicals(self, usage_df):
        with patch("src.hazards.pubchem.httpx.get", return_value=mock_http_response(status_code=404)):
            report = build_report(usage_df, chemicals=["Dicamba"])
        assert dict(report.hazards) == {"Dicamba": None}


class TestFormatAndSave:

    @pytest.mark.unit
    def test_format_hazards(self):
        text = format_hazards(MappingProxyType({
            "Atrazine": ["H300: Fatal if swallowed", "H410: Very toxic"],
            "Glyphosate": None,
            "Dicamba": [],
        }))
        assert text.splitlines() == [
            "Atrazine: H300: Fatal if swallowed; H410: Very toxic",
            "Glyphosate: NA",
            "Dicamba: (no hazard statements)",
        ]

    @pytest.mark.integration
    def test_save_report(self, usage_df, tmp_path):
        report = build_report(usage_df, lookup=False)
        report.hazards = MappingProxyType({"Atrazine": ["H300"], "Glyphosate": None})
        written = save_report(report, tmp_path / "out")

        names = {p.name for p in written}
        for chart in ("top_chemicals", "type_proportions", "usage_by_year", "toxicity_trend"):
            assert f"{chart}.json" in names
            assert f"{chart}.html" in names
        assert all(p.exists() for p in written)

        hazards = json.loads((tmp_path / "out" / "hazards.json").read_text())
        assert hazards == {"Atrazine": ["H300"], "Glyphosate": None}

    @pytest.mark.integration
    def test_failed_chart_is_not_written(self, usage_df, tmp_path):
        report = build_report(usage_df, lookup=False)
        report.charts["usage_by_year"] = {"error": "No data rows provided."}
        written = save_report(report, tmp_path)
        assert "usage_by_year.json" not in {p.name for p in written}


class TestCommandLine:

    @pytest.mark.integration
    def test_end_to_end_without_lookup(self, usage_csv, tmp_path, capsys):
        out_dir = tmp_path / "report"
        code = run_report.main([str(usage_csv), "--output", str(out_dir), "--no-lookup"])
        assert code == 0
        assert (out_dir / "top_chemicals.html").exists()
        assert "[PASS] toxicity_trend" in capsys.readouterr().out

    @pytest.mark.integration
    def test_missing_csv(self, tmp_path, capsys):
        code = run_report.main([str(tmp_path / "missing.csv"), "--no-lookup"])
        assert code == 1
        assert "Source file not found" in capsys.readouterr().out
