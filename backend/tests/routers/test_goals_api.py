# tests/routers/test_goals_api.py
"""
Integration tests for Goal API endpoints and goal progress.
"""

from decimal import Decimal

from fastapi.testclient import TestClient


def create_asset(client: TestClient, name: str, category: str, price: str) -> int:
    response = client.post("/assets/", json={"name": name, "category": category, "current_price": price})
    assert response.status_code == 201, response.text
    return response.json()["id"]


def buy(client: TestClient, asset_id: int, quantity: str, price: str) -> None:
    response = client.post("/transactions/", json={
        "asset_id": asset_id,
        "transaction_type": "BUY",
        "date": "2024-01-01",
        "quantity": quantity,
        "price": price,
    })
    assert response.status_code == 201, response.text


def create_goal(client: TestClient, name: str = "House deposit", target: str = "50000", linked=None):
    body = {"name": name, "target_amount": target}
    if linked is not None:
        body["linked_asset_ids"] = linked
    return client.post("/goals/", json=body)


class TestGoalCrud:

    def test_create_goal(self, client: TestClient):
        response = create_goal(client)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "House deposit"
        assert Decimal(data["target_amount"]) == Decimal("50000")
        assert data["linked_asset_ids"] == []

    def test_duplicate_links_collapsed(self, client: TestClient):
        asset_id = create_asset(client, "Savings", "CASH", "1")

        response = create_goal(client, linked=[asset_id, asset_id])

        assert response.json()["linked_asset_ids"] == [asset_id]

    def test_link_to_missing_asset(self, client: TestClient):
        response = create_goal(client, linked=[77])

        assert response.status_code == 404
        assert client.get("/goals/").json() == []

    def test_zero_target_rejected(self, client: TestClient):
        response = create_goal(client, target="0")

        assert response.status_code == 422

    def test_list_and_get(self, client: TestClient):
        first = create_goal(client, "A").json()
        create_goal(client, "B")

        assert [g["name"] for g in client.get("/goals/").json()] == ["A", "B"]
        assert client.get(f"/goals/{first['id']}").json()["name"] == "A"

    def test_get_not_found(self, client: TestClient):
        response = client.get("/goals/3")

        assert response.status_code == 404
        assert response.json()["error"] == "GoalNotFoundError"

    def test_update(self, client: TestClient):
        goal = create_goal(client).json()

        response = client.patch(f"/goals/{goal['id']}", json={"target_amount": "60000"})

        assert response.status_code == 200
        assert Decimal(response.json()["target_amount"]) == Decimal("60000")
        assert response.json()["name"] == "House deposit"

    def test_delete(self, client: TestClient):
        goal = create_goal(client).json()

        response = client.delete(f"/goals/{goal['id']}")

        assert response.status_code == 204
        assert client.get(f"/goals/{goal['id']}").status_code == 404

    def test_deleting_asset_unlinks_goal(self, client: TestClient):
        asset_id = create_asset(client, "Savings", "CASH", "1")
        goal = create_goal(client, linked=[asset_id]).json()

        client.delete(f"/assets/{asset_id}")

        assert client.get(f"/goals/{goal['id']}").json()["linked_asset_ids"] == []


class TestGoalProgress:

    def test_progress(self, client: TestClient):
        savings = create_asset(client, "Savings", "CASH", "1")
        fund = create_asset(client, "Fund", "ETF", "150")
        buy(client, savings, "2500", "1")
        buy(client, fund, "10", "100")
        create_goal(client, "Buffer", "5000", linked=[savings])
        create_goal(client, "Net worth", "2000")

        response = client.get("/analytics/goals")

        assert response.status_code == 200
        buffer, net_worth = response.json()
        assert Decimal(buffer["current_amount"]) == Decimal("2500")
        assert Decimal(buffer["progress_pct"]) == Decimal("50")
        assert Decimal(buffer["remaining_amount"]) == Decimal("2500")
        assert buffer["is_complete"] is False
        assert Decimal(net_worth["current_amount"]) == Decimal("4000")
        assert Decimal(net_worth["progress_pct"]) == Decimal("100")
        assert net_worth["is_complete"] is True
