import pytest

from scrapernba.config import Endpoint
from scrapernba.core.adapters import ADAPTERS
from scrapernba.core.envelopes import (
    ROUTES,
    AdapterEnvelope,
    StandardEnvelope,
    dispatch,
    route_for,
)


def test_every_endpoint_has_a_route():
    endpoints = [value for key, value in vars(Endpoint).items() if key.isupper()]
    assert sorted(endpoints) == sorted(ROUTES)


def test_live_endpoints_are_flagged_live():
    for endpoint, route in ROUTES.items():
        assert route.live == endpoint.endswith(".json")


def test_adapter_routes_name_real_adapters():
    for route in ROUTES.values():
        if isinstance(route, AdapterEnvelope):
            assert route.adapter in ADAPTERS


def test_unknown_adapter_rejected():
    with pytest.raises(ValueError):
        AdapterEnvelope("noSuchAdapter")


def test_route_for_unknown_endpoint():
    with pytest.raises(ValueError, match="No route"):
        route_for("notanendpoint")


def test_dispatch_standard_camel_cases():
    raw = {"resultSets": [{"name": "X", "headers": ["A_B"], "rowSet": [[1]]}]}
    assert dispatch(StandardEnvelope(), raw) == {"X": [{"aB": 1}]}


def test_dispatch_standard_ignores_nested_payload():
    assert dispatch(StandardEnvelope(), {"scoreboard": {"games": []}}) == {}


def test_dispatch_follows_declared_adapter(box_score_payload):
    tables = dispatch(route_for(Endpoint.BOX_SCORE_TRADITIONAL), box_score_payload)
    assert set(tables) == {"PlayerStats", "TeamStats", "Game"}
    assert len(tables["PlayerStats"]) == 2


def test_dispatch_adapter_on_standard_payload_gives_empty_tables():
    raw = {"resultSets": [{"name": "X", "headers": ["A"], "rowSet": [[1]]}]}
    tables = dispatch(AdapterEnvelope("boxScoreTraditional"), raw)
    assert tables == {"PlayerStats": [], "TeamStats": [], "Game": []}
