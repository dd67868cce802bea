import json
from unittest.mock import patch

import pytest

from src.mcp_servers import hazard_server

from conftest import mock_http_response


@pytest.mark.integration
def test_hazard_tool_delegates(ghs_response):
    with patch("src.hazards.pubchem.httpx.get", return_value=mock_http_response(ghs_response)):
        out = hazard_server.lookup_ghs_hazards("Atrazine")
    assert out["hazards"] == ["H300: Fatal if swallowed", "H410: Very toxic to aquatic life"]


@pytest.mark.integration
def test_chart_tool_delegates():
    rows = json.dumps([{"type": "HERBICIDE", "count": 3}])
    out = hazard_server.create_pie_chart("Types", rows, "type", "count")
    assert out["chart_type"] == "pie"
