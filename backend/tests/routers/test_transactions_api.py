# tests/routers/test_transactions_api.py
"""
Integration tests for Transaction API endpoints.

These tests verify:
- POST /transactions/ (BUY / SELL / DIVIDEND, oversell rejection)
- GET /transactions/ (newest first, asset filter, "Unknown" asset names)
- GET /transactions/{id}
- DELETE /transactions/{id}
"""

from decimal import Decimal

from fastapi.testclient import TestClient


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

def create_asset(client: TestClient, name: str = "Index Fund", category: str = "ETF") -> int:
    response = client.post("/assets/", json={"name": name, "category": category, "current_price": "100"})
    assert response.status_code == 201, response.text
    return response.json()["id"]


def post_transaction(
        client: TestClient,
        asset_id: int,
        transaction_type: str = "BUY",
        quantity: str = "10",
        price: str = "100",
        on: str = "2024-01-15",
        **fields,
):
    return client.post("/transactions/", json={
        "asset_id": asset_id,
        "transaction_type": transaction_type,
        "date": on,
        "quantity": quantity,
        "price": price,
        **fields,
    })


# =============================================================================
# CREATE
# =============================================================================

class TestCreateTransaction:

    def test_create_buy(self, client: TestClient):
        asset_id = create_asset(client)

        response = post_transaction(client, asset_id, fees="4.95")

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["asset_name"] == "Index Fund"
        assert data["transaction_type"] == "BUY"
        assert data["date"] == "2024-01-15"
        assert Decimal(data["quantity"]) == Decimal("10")
        assert Decimal(data["fees"]) == Decimal("4.95")

    def test_fees_default_to_zero(self, client: TestClient):
        asset_id = create_asset(client)

        data = post_transaction(client, asset_id).json()

        assert Decimal(data["fees"]) == Decimal("0")

    def test_dividend(self, client: TestClient):
        asset_id = create_asset(client)

        response = post_transaction(client, asset_id, "DIVIDEND", quantity="1", price="12.50")

        assert response.status_code == 201

    def test_unknown_asset(self, client: TestClient):
        response = post_transaction(client, 999)

        assert response.status_code == 404
        assert response.json()["error"] == "AssetNotFoundError"

    def test_sell_within_holdings(self, client: TestClient):
        asset_id = create_asset(client)
        post_transaction(client, asset_id, quantity="10")

        response = post_transaction(client, asset_id, "SELL", quantity="4", on="2024-02-01")

        assert response.status_code == 201

    def test_oversell_rejected(self, client: TestClient):
        asset_id = create_asset(client)
        post_transaction(client, asset_id, quantity="10")

        response = post_transaction(client, asset_id, "SELL", quantity="15", on="2024-02-01")

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "OversellError"
        assert data["details"]["field"] == "quantity"
        assert Decimal(data["details"]["requested"]) == Decimal("15")
        assert Decimal(data["details"]["available"]) == Decimal("10")
        assert data["details"]["date"] == "2024-02-01"
        assert len(client.get("/transactions/").json()) == 1

    def test_zero_quantity_rejected(self, client: TestClient):
        asset_id = create_asset(client)

        response = post_transaction(client, asset_id, quantity="0")

        assert response.status_code == 422

    def test_negative_fees_rejected(self, client: TestClient):
        asset_id = create_asset(client)

        response = post_transaction(client, asset_id, fees="-1")

        assert response.status_code == 422

    def test_infinite_price_rejected(self, client: TestClient):
        asset_id = create_asset(client)

        response = post_transaction(client, asset_id, price="Infinity")

        assert response.status_code == 422

    def test_ancient_date_rejected(self, client: TestClient):
        asset_id = create_asset(client)

        response = post_transaction(client, asset_id, on="1899-12-31")

        assert response.status_code == 422

    def test_unknown_type_rejected(self, client: TestClient):
        asset_id = create_asset(client)

        response = post_transaction(client, asset_id, "TRANSFER")

        assert response.status_code == 422


# =============================================================================
# READ
# =============================================================================

class TestListTransactions:

    def test_newest_first(self, client: TestClient):
        asset_id = create_asset(client)
        post_transaction(client, asset_id, on="2024-01-01")
        post_transaction(client, asset_id, on="2024-03-01")
        post_transaction(client, asset_id, on="2024-02-01")

        dates = [t["date"] for t in client.get("/transactions/").json()]

        assert dates == ["2024-03-01", "2024-02-01", "2024-01-01"]

    def test_filter_by_asset(self, client: TestClient):
        fund = create_asset(client, "Fund")
        gold = create_asset(client, "Gold", "GOLD")
        post_transaction(client, fund)
        post_transaction(client, gold)

        response = client.get("/transactions/", params={"asset_id": gold})

        assert [t["asset_name"] for t in response.json()] == ["Gold"]

    def test_get_transaction(self, client: TestClient):
        asset_id = create_asset(client)
        created = post_transaction(client, asset_id).json()

        response = client.get(f"/transactions/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_transaction_not_found(self, client: TestClient):
        response = client.get("/transactions/12345")

        assert response.status_code == 404
        assert response.json()["details"]["resource_type"] == "Transaction"


# =============================================================================
# DELETE
# =============================================================================

class TestDeleteTransaction:

    def test_delete(self, client: TestClient):
        asset_id = create_asset(client)
        created = post_transaction(client, asset_id).json()

        response = client.delete(f"/transactions/{created['id']}")

        assert response.status_code == 204
        assert client.get("/transactions/").json() == []

    def test_delete_buy_needed_by_sell(self, client: TestClient):
        asset_id = create_asset(client)
        bought = post_transaction(client, asset_id, quantity="10").json()
        post_transaction(client, asset_id, "SELL", quantity="5", on="2024-06-01")

        response = client.delete(f"/transactions/{bought['id']}")

        assert response.status_code == 400
        assert response.json()["error"] == "OversellError"

    def test_delete_not_found(self, client: TestClient):
        response = client.delete("/transactions/404")

        assert response.status_code == 404
