from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from impact_engine.main import app, engine, repository
from impact_engine.models.funding import FundingState
from impact_engine.repositories.in_memory import InMemoryEntityRepository


ENTITY = {
    "entity_id": "ocean-labs",
    "funding": {"amount_raised": 50000, "view_count": 500, "investor_count": 25},
    "deal_terms": {
        "raise_goal": 500000,
        "equity_offered": 10,
        "valuation": 5000000,
        "min_investment": 1000,
        "max_investment": 50000,
    },
    "snapshots": [],
}


@pytest.fixture()
def client():
    repository.store.clear()
    with TestClient(app) as test_client:
        yield test_client
    repository.store.clear()


def test_health_endpoint(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_score_endpoint_uses_fallbacks(client):
    assert client.post("/entities", json=ENTITY).status_code == 200

    body = client.get("/entities/ocean-labs/score").json()

    assert body["score"]["consolidated"] == 58.75
    assert body["score"]["technology"] == 85
    assert body["band"] == "Fair"


def test_snapshot_endpoint_overrides_score(client):
    client.post("/entities", json=ENTITY)
    snapshot = {
        "entity_id": "ocean-labs",
        "captured_at": "2025-11-01T00:00:00Z",
        "consolidated_impact": 83.1,
    }

    assert client.post("/entities/ocean-labs/snapshots", json=snapshot).status_code == 200
    body = client.get("/entities/ocean-labs/score").json()

    assert body["score"]["consolidated"] == 83.1
    assert body["band"] == "Excellent"


def test_snapshot_for_other_entity_is_rejected(client):
    client.post("/entities", json=ENTITY)
    snapshot = {"entity_id": "someone-else", "captured_at": "2025-11-01T00:00:00Z"}

    assert client.post("/entities/ocean-labs/snapshots", json=snapshot).status_code == 400


def test_projection_endpoint(client):
    client.post("/entities", json=ENTITY)

    response = client.post("/entities/ocean-labs/projection", json={"investment_amount": 10000})
    body = response.json()

    assert response.status_code == 200
    assert body["projection"]["equity_percentage"] == pytest.approx(0.2)
    assert body["projection"]["expected"]["multiple"] == pytest.approx(2.0)
    assert body["within_bounds"] is True
    assert body["funding_progress"] == pytest.approx(10)


def test_projection_flags_out_of_range_amount(client):
    client.post("/entities", json=ENTITY)

    body = client.post("/entities/ocean-labs/projection", json={"investment_amount": 75000}).json()

    assert body["within_bounds"] is False
    assert body["projection"]["optimistic"]["return_amount"] > 0


def test_projection_rejects_non_positive_amount(client):
    client.post("/entities", json=ENTITY)

    response = client.post("/entities/ocean-labs/projection", json={"investment_amount": 0})

    assert response.status_code == 422
    assert response.json()["error"] == "invalid_input"
    assert response.json()["detail"] == {"field": "investment_amount"}


def test_negative_counters_rejected_at_boundary(client):
    payload = dict(ENTITY, funding={"amount_raised": 0, "view_count": -1, "investor_count": 0})

    assert client.post("/entities", json=payload).status_code == 422


def test_unknown_entity_returns_404(client):
    response = client.get("/entities/nope/score")

    assert response.status_code == 404
    assert response.json()["error"] == "entity_not_found"


def test_rollup_endpoint(client):
    client.post("/entities", json=ENTITY)
    client.post("/entities", json={"entity_id": "idle"})

    result = client.post("/portfolio/rollup", json={"entity_ids": ["ocean-labs", "idle"]}).json()["result"]

    assert result["entity_count"] == 2
    assert result["total_raised"] == 50000
    assert result["average_consolidated_score"] == pytest.approx(40.0)
    assert len(result["per_entity"]) == 2


def test_empty_rollup_endpoint(client):
    result = client.post("/portfolio/rollup", json={"entity_ids": []}).json()["result"]

    assert result["entity_count"] == 0
    assert result["average_consolidated_score"] == 0


def test_holdings_endpoint(client):
    client.post("/entities", json=ENTITY)
    payload = {"holdings": [{"entity_id": "ocean-labs", "amount": 2500}]}

    result = client.post("/portfolio/holdings", json=payload).json()["result"]

    assert result["total_invested"] == 2500
    assert result["active_positions"] == 1
    assert result["average_consolidated_score"] == 58.75


@pytest.mark.parametrize("equity_offered", [-10, 0, 150])
def test_out_of_range_equity_rejected_at_boundary(client, equity_offered):
    payload = dict(ENTITY, deal_terms=dict(ENTITY["deal_terms"], equity_offered=equity_offered))

    assert client.post("/entities", json=payload).status_code == 422
    assert client.get("/entities/ocean-labs/score").status_code == 404


def test_inverted_investment_bounds_rejected_at_boundary(client):
    payload = dict(ENTITY, deal_terms=dict(ENTITY["deal_terms"], min_investment=60000))

    assert client.post("/entities", json=payload).status_code == 422


def test_list_entities_shows_display_values(client):
    client.post("/entities", json=ENTITY)
    client.post("/entities", json={"entity_id": "idle"})

    entities = client.get("/entities").json()["entities"]

    assert [entity["entity_id"] for entity in entities] == ["ocean-labs", "idle"]
    assert entities[0]["consolidated"] == 58.75
    assert entities[0]["amount_raised"] == "$50K"
    assert entities[1]["consolidated"] == 21.25
    assert entities[1]["band"] == "Fair"


def test_projection_follows_engine_lookups(client, monkeypatch):
    client.post("/entities", json=ENTITY)
    replacement = InMemoryEntityRepository()
    replacement.save(
        "ocean-labs",
        FundingState(amount_raised=250000),
        repository.get_deal_terms("ocean-labs"),
    )
    monkeypatch.setattr(engine, "funding", replacement)
    monkeypatch.setattr(engine, "deal_terms", replacement)

    body = client.post("/entities/ocean-labs/projection", json={"investment_amount": 10000}).json()

    assert body["funding_progress"] == pytest.approx(50)
