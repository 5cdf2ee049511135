"""
Tests for the auction HTTP API.

Verifies routes, status codes, error mapping, health and metrics endpoints.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from marketplace.api import create_app
from marketplace.config import ServiceConfig


@pytest.fixture
def client():
    """Client over a fresh in-memory service"""
    return TestClient(create_app())


def create_item(client, name="Test Item"):
    response = client.post("/items", json={"name": name})
    assert response.status_code == 200
    return response.json()


def submit_bid(client, item_id, bidder, initial, maximum, increment):
    return client.post(
        f"/items/{item_id}/bids",
        json={
            "bidder_name": bidder,
            "initial_bid": initial,
            "max_bid": maximum,
            "bid_increment": increment,
        },
    )


class TestItemEndpoints:
    """Test /items"""

    def test_create_item(self, client):
        response = client.post("/items", json={"name": "Test Item"})

        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "Test Item"}

    def test_create_items_sequential(self, client):
        assert create_item(client, "a")["id"] == 1
        assert create_item(client, "b")["id"] == 2

    @pytest.mark.parametrize("body", [{"name": ""}, {}, {"name": 5}])
    def test_create_item_invalid_body(self, client, body):
        response = client.post("/items", json=body)

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid request body"}

    def test_create_item_malformed_json(self, client):
        response = client.post(
            "/items", content=b"invalid", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400

    def test_list_items(self, client):
        create_item(client, "a")
        create_item(client, "b")

        response = client.get("/items")

        assert response.status_code == 200
        assert sorted(response.json(), key=lambda i: i["id"]) == [
            {"id": 1, "name": "a"},
            {"id": 2, "name": "b"},
        ]

    def test_list_items_empty(self, client):
        response = client.get("/items")

        assert response.status_code == 200
        assert response.json() == []


class TestBidEndpoints:
    """Test /items/{id}/bids"""

    def test_create_bid(self, client):
        item = create_item(client)

        response = submit_bid(client, item["id"], "Test Bidder", 100, 200, 10)

        assert response.status_code == 200
        assert response.json() == {
            "bidder_name": "Test Bidder",
            "initial_bid": 100,
            "max_bid": 200,
            "bid_increment": 10,
            "current_bid": 100,
            "item_id": 1,
        }

    def test_create_bid_invalid_id(self, client):
        response = submit_bid(client, "invalid", "Bidder", 100, 200, 10)

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid Item ID"}

    def test_create_bid_item_not_found(self, client):
        response = submit_bid(client, 1, "Bidder", 100, 200, 10)

        assert response.status_code == 404
        assert response.json() == {"detail": "Item not found"}

    def test_create_bid_invalid_body(self, client):
        item = create_item(client)

        response = client.post(
            f"/items/{item['id']}/bids",
            content=b"invalid",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid request body"}

    def test_malformed_body_to_unknown_item(self, client):
        """The item lookup runs before the body is read"""
        response = client.post(
            "/items/99/bids",
            content=b"invalid",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Item not found"}

    def test_malformed_body_to_invalid_id(self, client):
        response = client.post(
            "/items/invalid/bids",
            content=b"invalid",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid Item ID"}

    def test_incomplete_body_to_unknown_item(self, client):
        response = client.post("/items/99/bids", json={"bidder_name": "Pat"})

        assert response.status_code == 404
        assert response.json() == {"detail": "Item not found"}

    def test_incomplete_body_to_existing_item(self, client):
        item = create_item(client)

        response = client.post(f"/items/{item['id']}/bids", json={"bidder_name": "Pat"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid request body"}

    @pytest.mark.parametrize("initial,maximum,increment", [
        (-1, 200, 10),
        (300, 200, 10),
        (100, 200, -5),
        (10.5, 200, 10),
        ("100", 200, 10),
    ])
    def test_create_bid_rejected_amounts(self, client, initial, maximum, increment):
        item = create_item(client)

        response = submit_bid(client, item["id"], "Bidder", initial, maximum, increment)

        assert response.status_code == 400
        assert client.get(f"/items/{item['id']}/bids").json() == []

    def test_get_bids(self, client):
        item = create_item(client)
        submit_bid(client, item["id"], "Test Bidder 1", 100, 200, 10)
        submit_bid(client, item["id"], "Test Bidder 2", 150, 250, 20)

        response = client.get(f"/items/{item['id']}/bids")

        assert response.status_code == 200
        assert response.json() == [
            {
                "bidder_name": "Test Bidder 1",
                "initial_bid": 100,
                "max_bid": 200,
                "bid_increment": 10,
                "current_bid": 100,
                "item_id": 1,
            },
            {
                "bidder_name": "Test Bidder 2",
                "initial_bid": 150,
                "max_bid": 250,
                "bid_increment": 20,
                "current_bid": 150,
                "item_id": 1,
            },
        ]

    def test_get_bids_invalid_id(self, client):
        assert client.get("/items/invalid/bids").status_code == 400

    def test_get_bids_item_not_found(self, client):
        assert client.get("/items/1/bids").status_code == 404


class TestWinnerEndpoint:
    """Test /items/{id}/winner"""

    def test_get_winner(self, client):
        item = create_item(client)
        submit_bid(client, item["id"], "Sasha", 5000, 8000, 300)
        submit_bid(client, item["id"], "John", 6000, 8200, 200)
        submit_bid(client, item["id"], "Pat", 5500, 8500, 500)

        response = client.get(f"/items/{item['id']}/winner")

        assert response.status_code == 200
        assert response.json() == {
            "bidder_name": "Pat",
            "initial_bid": 5500,
            "max_bid": 8500,
            "bid_increment": 500,
            "current_bid": 8500,
            "item_id": 1,
        }

    def test_get_winner_ten_identical_bidders(self, client):
        item = create_item(client)
        for i in range(1, 11):
            submit_bid(client, item["id"], f"Bidder{i}", 5000, 8000, 300)

        winner = client.get(f"/items/{item['id']}/winner").json()

        assert winner["bidder_name"] == "Bidder1"
        assert winner["current_bid"] == 8000

    def test_bids_show_resolved_amounts(self, client):
        item = create_item(client)
        submit_bid(client, item["id"], "Sasha", 5000, 8000, 300)
        submit_bid(client, item["id"], "Pat", 5500, 8500, 500)
        client.get(f"/items/{item['id']}/winner")

        bids = client.get(f"/items/{item['id']}/bids").json()

        assert [b["current_bid"] for b in bids] == [8000, 8500]

    def test_get_winner_no_bids(self, client):
        item = create_item(client)

        response = client.get(f"/items/{item['id']}/winner")

        assert response.status_code == 404
        assert response.json() == {"detail": "No winner found"}

    def test_get_winner_invalid_id(self, client):
        response = client.get("/items/invalid/winner")

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid Item ID"}

    def test_get_winner_item_not_found(self, client):
        response = client.get("/items/1/winner")

        assert response.status_code == 404
        assert response.json() == {"detail": "Item not found"}


class TestOperationalEndpoints:
    """Test /health and /metrics"""

    def test_health(self):
        client = TestClient(create_app(config=ServiceConfig(service_name="auction-test")))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "auction-test"}

    def test_metrics_exposition(self, client):
        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "proxy_auction_bids_submitted_total" in response.text
        assert "proxy_auction_resolution_passes" in response.text

    def test_metrics_count_requests(self, client):
        def sample(name, labels=None):
            return REGISTRY.get_sample_value(name, labels or {}) or 0.0

        bids_before = sample("proxy_auction_bids_submitted_total")
        winners_before = sample("proxy_auction_resolutions_total", {"outcome": "winner"})
        empty_before = sample("proxy_auction_resolutions_total", {"outcome": "no_bids"})
        missing_before = sample("proxy_auction_request_errors_total", {"error_type": "ItemNotFound"})

        item = create_item(client)
        client.get(f"/items/{item['id']}/winner")
        submit_bid(client, item["id"], "Pat", 5500, 8500, 500)
        client.get(f"/items/{item['id']}/winner")
        client.get("/items/999/winner")

        assert sample("proxy_auction_bids_submitted_total") == bids_before + 1
        assert sample("proxy_auction_resolutions_total", {"outcome": "winner"}) == winners_before + 1
        assert sample("proxy_auction_resolutions_total", {"outcome": "no_bids"}) == empty_before + 1
        assert (
            sample("proxy_auction_request_errors_total", {"error_type": "ItemNotFound"})
            == missing_before + 1
        )
