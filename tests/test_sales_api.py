"""
Tests for the sales endpoints.

Exercises POST /api/sales end to end against the seeded catalog
(Coffee 50 x 2.99, Sandwich 25 x 5.99, Cake 15 x 3.99) and the read side
(GET /api/sales, GET /api/sales/{id}).
"""

from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session


def coffee_and_sandwich(coffee_qty=2, sandwich_qty=1):
    return [
        {"productId": "1", "name": "Coffee", "price": 2.99, "quantity": coffee_qty},
        {"productId": "2", "name": "Sandwich", "price": 5.99, "quantity": sandwich_qty},
    ]


def stock(client, product_id):
    return client.get(f"/api/products/{product_id}").json()["quantity"]


def parse_date(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestRecordSale:
    """POST /api/sales"""

    def test_coffee_and_sandwich_scenario(self, client):
        """2 Coffee + 1 Sandwich: 201, total 11.97, stock decremented."""
        response = client.post("/api/sales", json={"items": coffee_and_sandwich()})

        assert response.status_code == 201
        sale = response.json()
        assert sale["total"] == pytest.approx(11.97)
        assert sale["id"]
        assert sale["date"]
        assert len(sale["items"]) == 2

        assert stock(client, "1") == 48
        assert stock(client, "2") == 24

    def test_items_keep_request_order_and_snapshot(self, client):
        sale = client.post("/api/sales", json={"items": coffee_and_sandwich()}).json()

        items = sale["items"]
        assert [i["product_id"] for i in items] == ["1", "2"]
        assert items[0]["name"] == "Coffee"
        assert items[0]["price"] == 2.99
        assert items[0]["quantity"] == 2
        assert all(i["sale_id"] == sale["id"] for i in items)

    def test_total_matches_item_sum(self, client):
        sale = client.post(
            "/api/sales",
            json={"items": coffee_and_sandwich(coffee_qty=3, sandwich_qty=4)},
        ).json()

        expected = sum(i["price"] * i["quantity"] for i in sale["items"])
        assert sale["total"] == pytest.approx(expected)

    def test_default_customer(self, client):
        sale = client.post("/api/sales", json={"items": coffee_and_sandwich()}).json()

        assert sale["customer"] == "Walk-in Customer"

    def test_blank_customer_uses_default(self, client):
        sale = client.post(
            "/api/sales", json={"customer": "  ", "items": coffee_and_sandwich()}
        ).json()

        assert sale["customer"] == "Walk-in Customer"

    def test_named_customer(self, client):
        sale = client.post(
            "/api/sales", json={"customer": "Ada", "items": coffee_and_sandwich()}
        ).json()

        assert sale["customer"] == "Ada"

    @pytest.mark.parametrize("key", ["productId", "product_id", "id"])
    def test_product_reference_aliases(self, client, key):
        response = client.post(
            "/api/sales",
            json={"items": [{key: "3", "name": "Cake", "price": 3.99, "quantity": 1}]},
        )

        assert response.status_code == 201
        assert stock(client, "3") == 14

    def test_numeric_product_id(self, client):
        response = client.post(
            "/api/sales",
            json={"items": [{"productId": 1, "name": "Coffee", "price": 2.99, "quantity": 1}]},
        )

        assert response.status_code == 201
        assert response.json()["items"][0]["product_id"] == "1"

    def test_missing_name_and_price_snapshot_current_product(self, client):
        sale = client.post(
            "/api/sales", json={"items": [{"productId": "3", "quantity": 2}]}
        ).json()

        item = sale["items"][0]
        assert item["name"] == "Cake"
        assert item["price"] == 3.99
        assert sale["total"] == pytest.approx(7.98)


class TestRecordSaleFailures:
    """Failures are reported with context and leave no trace."""

    def test_insufficient_stock(self, client):
        response = client.post(
            "/api/sales",
            json={"items": [{"productId": "1", "name": "Coffee", "price": 2.99, "quantity": 999}]},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "InsufficientStock"
        assert body["details"] == {"product_id": "1", "requested": 999, "available": 50}
        assert stock(client, "1") == 50
        assert client.get("/api/sales").json() == []

    def test_empty_item_list(self, client):
        response = client.post("/api/sales", json={"items": []})

        assert response.status_code == 400
        assert response.json()["error_code"] == "EmptyItemList"
        assert client.get("/api/sales").json() == []

    def test_missing_item_list(self, client):
        response = client.post("/api/sales", json={"customer": "Ada"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "EmptyItemList"

    def test_unknown_product(self, client):
        response = client.post(
            "/api/sales",
            json={"items": [
                {"productId": "1", "name": "Coffee", "price": 2.99, "quantity": 1},
                {"productId": "ghost", "name": "Ghost", "price": 1.0, "quantity": 1},
            ]},
        )

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "ProductNotFound"
        assert body["details"]["product_id"] == "ghost"
        assert stock(client, "1") == 50
        assert client.get("/api/sales").json() == []

    def test_third_item_short_leaves_everything_untouched(self, client):
        response = client.post(
            "/api/sales",
            json={"items": [
                {"productId": "1", "name": "Coffee", "price": 2.99, "quantity": 5},
                {"productId": "2", "name": "Sandwich", "price": 5.99, "quantity": 5},
                {"productId": "3", "name": "Cake", "price": 3.99, "quantity": 16},
            ]},
        )

        assert response.status_code == 400
        assert response.json()["details"]["product_id"] == "3"
        assert stock(client, "1") == 50
        assert stock(client, "2") == 25
        assert stock(client, "3") == 15
        assert client.get("/api/sales").json() == []

    def test_zero_quantity_is_a_validation_error(self, client):
        response = client.post(
            "/api/sales",
            json={"items": [{"productId": "1", "name": "Coffee", "price": 2.99, "quantity": 0}]},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "ValidationError"
        assert stock(client, "1") == 50

    def test_missing_product_reference(self, client):
        response = client.post(
            "/api/sales",
            json={"items": [{"name": "Coffee", "price": 2.99, "quantity": 1}]},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "ValidationError"


class TestListSales:
    """GET /api/sales and GET /api/sales/{id}"""

    def test_no_sales(self, client):
        response = client.get("/api/sales")

        assert response.status_code == 200
        assert response.json() == []

    def test_sales_are_newest_first(self, client):
        first = client.post("/api/sales", json={"customer": "first", "items": coffee_and_sandwich()}).json()
        second = client.post("/api/sales", json={"customer": "second", "items": coffee_and_sandwich()}).json()
        third = client.post("/api/sales", json={"customer": "third", "items": coffee_and_sandwich()}).json()

        sales = client.get("/api/sales").json()

        assert [s["id"] for s in sales] == [third["id"], second["id"], first["id"]]
        dates = [parse_date(s["date"]) for s in sales]
        assert dates == sorted(dates, reverse=True)

    def test_listed_sales_embed_items(self, client):
        created = client.post("/api/sales", json={"items": coffee_and_sandwich()}).json()

        listed = client.get("/api/sales").json()[0]

        assert listed["items"] == created["items"]
        assert listed["total"] == pytest.approx(created["total"])

    def test_get_sale(self, client):
        created = client.post("/api/sales", json={"items": coffee_and_sandwich()}).json()

        response = client.get(f"/api/sales/{created['id']}")

        assert response.status_code == 200
        assert response.json()["items"] == created["items"]

    def test_get_unknown_sale_returns_404(self, client):
        response = client.get("/api/sales/nope")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SaleNotFound"

    def test_history_survives_repricing_and_deletion(self, client):
        """Sale items are snapshots, not live references."""
        created = client.post(
            "/api/sales",
            json={"items": [{"productId": "1", "name": "Coffee", "price": 2.50, "quantity": 2}]},
        ).json()

        client.put("/api/products/1", json={"name": "Premium Coffee", "price": 9.99})
        client.delete("/api/products/1")

        sale = client.get(f"/api/sales/{created['id']}").json()
        assert sale["items"][0]["name"] == "Coffee"
        assert sale["items"][0]["price"] == 2.5
        assert sale["total"] == pytest.approx(5.0)


class TestRecordSaleLimits:
    """Out-of-range numbers are rejected before they reach storage."""

    def test_price_above_column_limit(self, client):
        response = client.post(
            "/api/sales",
            json={"items": [{"productId": "1", "name": "Coffee", "price": 1e30, "quantity": 1}]},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "ValidationError"
        assert "items.0.price" in response.json()["details"]["fields"]
        assert stock(client, "1") == 50

    def test_quantity_above_integer_range(self, client):
        response = client.post(
            "/api/sales",
            json={"items": [{"productId": "1", "name": "Coffee", "price": 2.99, "quantity": 10**20}]},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "ValidationError"
        assert stock(client, "1") == 50


class TestRecordSaleStorageFailure:

    def test_failed_commit_returns_structured_500(self, client, monkeypatch):
        """A database error is reported as StorageFailure and nothing is kept."""
        def failing_commit(self):
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        with monkeypatch.context() as patch:
            patch.setattr(Session, "commit", failing_commit)
            response = client.post("/api/sales", json={"items": coffee_and_sandwich()})

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "StorageFailure"
        assert "error" in body
        assert stock(client, "1") == 50
        assert stock(client, "2") == 25
        assert client.get("/api/sales").json() == []
