"""
Tests for ledger API endpoints.

These test the HTTP layer: status codes, response format
and error mapping. Ledger logic is tested in
test_ledger_service.py.
"""

from datetime import date
from decimal import Decimal

import pytest

from investment_ledger.config import LedgerMode
from investment_ledger.services import ledger_service as ledger_service_module


def setup_investment(client):
    """Helper: investment with 1000 from January 2024."""
    response = client.post("/investments", json={
        "name": "Index fund",
        "starting_balance": 1000,
        "starting_month": "2024-01",
    })
    return response.json()["id"]


def post_entry(client, investment_id, **fields):
    return client.post(f"/investments/{investment_id}/entries", json=fields)


def scenario_a(client, investment_id):
    first = post_entry(client, investment_id, actual_return_rate=1).json()
    second = post_entry(
        client, investment_id, actual_return_rate=2, contribution=100
    ).json()
    return first, second


class TestCreateEntry:

    def test_create_returns_201(self, client):
        investment_id = setup_investment(client)
        response = post_entry(client, investment_id, actual_return_rate=1)
        assert response.status_code == 201

    def test_server_assigns_month_and_balance(self, client):
        investment_id = setup_investment(client)
        first, second = scenario_a(client, investment_id)

        assert first["month"] == "2024-01-01"
        assert Decimal(first["closing_balance"]) == Decimal("1010.00")
        assert second["month"] == "2024-02-01"
        assert Decimal(second["closing_balance"]) == Decimal("1132.20")

    def test_client_cannot_choose_month(self, client):
        investment_id = setup_investment(client)
        data = post_entry(
            client, investment_id, actual_return_rate=1, month="2030-01-01"
        ).json()
        assert data["month"] == "2024-01-01"

    def test_missing_return_rate_returns_422(self, client):
        investment_id = setup_investment(client)
        response = post_entry(client, investment_id, contribution=100)
        assert response.status_code == 422

    def test_return_below_total_loss_returns_422(self, client):
        investment_id = setup_investment(client)
        response = post_entry(client, investment_id, actual_return_rate=-150)
        assert response.status_code == 422

    def test_rate_too_large_for_column_returns_422(self, client):
        investment_id = setup_investment(client)
        response = post_entry(
            client, investment_id, actual_return_rate="123456.5"
        )
        assert response.status_code == 422

    def test_contribution_too_large_for_column_returns_422(self, client):
        investment_id = setup_investment(client)
        response = post_entry(
            client, investment_id, actual_return_rate=1, contribution="1e16"
        )
        assert response.status_code == 422
        assert client.get(f"/investments/{investment_id}/entries").json()["entries"] == []

    def test_balance_out_of_range_returns_400(self, client):
        investment_id = setup_investment(client)
        response = post_entry(
            client, investment_id,
            actual_return_rate=100, contribution="999999999999999",
        )
        assert response.status_code == 400
        assert "out of range" in response.json()["detail"]
        assert client.get(f"/investments/{investment_id}/entries").json()["entries"] == []

    def test_nonexistent_investment_returns_404(self, client):
        response = post_entry(client, 999, actual_return_rate=1)
        assert response.status_code == 404

    def test_month_conflict_returns_409(self, client, monkeypatch):
        investment_id = setup_investment(client)
        post_entry(client, investment_id, actual_return_rate=1)

        monkeypatch.setattr(
            ledger_service_module, "next_month",
            lambda starting_month, latest_month=None: date(2024, 1, 1),
        )

        response = post_entry(client, investment_id, actual_return_rate=2)
        assert response.status_code == 409
        assert "2024-01" in response.json()["detail"]


class TestListEntries:

    def test_list_returns_derived_fields(self, client):
        investment_id = setup_investment(client)
        post_entry(client, investment_id, actual_return_rate=1, inflation_rate=1)
        post_entry(
            client, investment_id,
            actual_return_rate=2, contribution=100, inflation_rate=1,
        )

        response = client.get(f"/investments/{investment_id}/entries")
        assert response.status_code == 200
        data = response.json()

        assert data["ledger_mode"] == "strict_historical"
        assert [e["month"] for e in data["entries"]] == [
            "2024-01-01", "2024-02-01",
        ]
        last = data["entries"][1]
        assert Decimal(last["cumulative_contribution"]) == Decimal("100")
        assert Decimal(last["cumulative_contribution_pv"]) == Decimal("100")
        assert Decimal(last["cumulative_inflation"]) == Decimal("0.0201")
        assert Decimal(last["present_value"]) == Decimal("1109.8912")

    def test_sorted_list_keeps_chronological_totals(self, client):
        investment_id = setup_investment(client)
        scenario_a(client, investment_id)

        data = client.get(
            f"/investments/{investment_id}/entries",
            params={"sort_by": "balance", "direction": "desc"},
        ).json()

        assert data["sort_by"] == "balance"
        assert data["direction"] == "desc"
        assert [e["month"] for e in data["entries"]] == [
            "2024-02-01", "2024-01-01",
        ]
        assert Decimal(data["entries"][0]["cumulative_contribution"]) == Decimal("100")
        assert Decimal(data["entries"][1]["cumulative_contribution"]) == Decimal("0")

    def test_unknown_sort_field_returns_422(self, client):
        investment_id = setup_investment(client)
        response = client.get(
            f"/investments/{investment_id}/entries",
            params={"sort_by": "notes"},
        )
        assert response.status_code == 422

    def test_empty_series(self, client):
        investment_id = setup_investment(client)
        data = client.get(f"/investments/{investment_id}/entries").json()
        assert data["entries"] == []

    def test_nonexistent_investment_returns_404(self, client):
        response = client.get("/investments/999/entries")
        assert response.status_code == 404


class TestUpdateEntry:

    def test_scenario_b_strict(self, client):
        investment_id = setup_investment(client)
        first, _ = scenario_a(client, investment_id)

        response = client.patch(
            f"/entries/{first['id']}", json={"contribution": 50}
        )
        assert response.status_code == 200
        assert Decimal(response.json()["closing_balance"]) == Decimal("1060.50")

        entries = client.get(f"/investments/{investment_id}/entries").json()["entries"]
        assert Decimal(entries[1]["closing_balance"]) == Decimal("1132.20")

    def test_empty_update_returns_400(self, client):
        investment_id = setup_investment(client)
        first, _ = scenario_a(client, investment_id)

        response = client.patch(f"/entries/{first['id']}", json={})
        assert response.status_code == 400

    def test_null_rate_returns_422(self, client):
        investment_id = setup_investment(client)
        first, _ = scenario_a(client, investment_id)

        response = client.patch(
            f"/entries/{first['id']}", json={"actual_return_rate": None}
        )
        assert response.status_code == 422

    def test_rate_too_large_for_column_returns_422(self, client):
        investment_id = setup_investment(client)
        first, _ = scenario_a(client, investment_id)

        response = client.patch(
            f"/entries/{first['id']}", json={"inflation_rate": "123456.5"}
        )
        assert response.status_code == 422

    def test_nonexistent_entry_returns_404(self, client):
        response = client.patch("/entries/999", json={"contribution": 1})
        assert response.status_code == 404


class TestDeleteEntry:

    def test_scenario_c_strict(self, client):
        investment_id = setup_investment(client)
        first, second = scenario_a(client, investment_id)

        response = client.delete(f"/entries/{first['id']}")
        assert response.status_code == 204

        entries = client.get(f"/investments/{investment_id}/entries").json()["entries"]
        assert len(entries) == 1
        assert entries[0]["id"] == second["id"]
        assert entries[0]["month"] == "2024-02-01"
        assert Decimal(entries[0]["closing_balance"]) == Decimal("1132.20")

    def test_nonexistent_entry_returns_404(self, client):
        response = client.delete("/entries/999")
        assert response.status_code == 404


class TestConsistentLedgerMode:

    @pytest.fixture
    def ledger_mode(self):
        return LedgerMode.CONSISTENT_LEDGER

    def test_mode_is_reported(self, client):
        investment_id = setup_investment(client)
        data = client.get(f"/investments/{investment_id}/entries").json()
        assert data["ledger_mode"] == "consistent_ledger"

    def test_edit_cascades_forward(self, client):
        investment_id = setup_investment(client)
        first, _ = scenario_a(client, investment_id)

        client.patch(f"/entries/{first['id']}", json={"contribution": 50})

        entries = client.get(f"/investments/{investment_id}/entries").json()["entries"]
        assert Decimal(entries[0]["closing_balance"]) == Decimal("1060.50")
        assert Decimal(entries[1]["closing_balance"]) == Decimal("1183.71")

    def test_delete_cascades_forward(self, client):
        investment_id = setup_investment(client)
        first, _ = scenario_a(client, investment_id)

        client.delete(f"/entries/{first['id']}")

        entries = client.get(f"/investments/{investment_id}/entries").json()["entries"]
        assert Decimal(entries[0]["closing_balance"]) == Decimal("1122.00")
