"""
Rate tier API tests, including the batch priority endpoint
"""
import pytest
from decimal import Decimal


@pytest.fixture
def tiers(client, manager_auth_headers, sample_rate_plan):
    ids = []
    for min_nights, max_nights, priority in ((1, 2, 0), (3, 6, 1)):
        response = client.post("/rate-tiers", json={
            "rate_plan_id": sample_rate_plan.id,
            "min_nights": min_nights,
            "max_nights": max_nights,
            "adjustment_type": "PERCENTAGE",
            "adjustment_value": "-10",
            "priority": priority,
        }, headers=manager_auth_headers)
        assert response.status_code == 201
        ids.append(response.json()["id"])
    return ids


class TestRateTierApi:

    def test_list_by_plan(self, client, manager_auth_headers, sample_rate_plan, tiers):
        response = client.get("/rate-tiers", params={"rate_plan_id": sample_rate_plan.id},
                              headers=manager_auth_headers)
        body = response.json()
        assert body["total_elements"] == 2
        assert body["content"][0]["rate_plan_code"] == "BAR"

    def test_max_below_min(self, client, manager_auth_headers, sample_rate_plan):
        response = client.post("/rate-tiers", json={
            "rate_plan_id": sample_rate_plan.id, "min_nights": 5, "max_nights": 2,
            "adjustment_type": "FIXED", "adjustment_value": "10",
        }, headers=manager_auth_headers)
        assert response.status_code == 422

    def test_update(self, client, manager_auth_headers, tiers):
        response = client.put(f"/rate-tiers/{tiers[0]}", json={"adjustment_value": "-5"},
                              headers=manager_auth_headers)
        assert response.status_code == 200
        assert Decimal(response.json()["adjustment_value"]) == Decimal("-5")

    def test_null_required_field(self, client, manager_auth_headers, tiers):
        response = client.put(f"/rate-tiers/{tiers[0]}", json={"priority": None},
                              headers=manager_auth_headers)
        assert response.status_code == 400
        assert "priority" in response.json()["detail"]
        assert client.get(f"/rate-tiers/{tiers[0]}", headers=manager_auth_headers).json()["priority"] == 0

    def test_delete(self, client, manager_auth_headers, tiers):
        assert client.delete(f"/rate-tiers/{tiers[0]}", headers=manager_auth_headers).status_code == 200
        assert client.get(f"/rate-tiers/{tiers[0]}", headers=manager_auth_headers).status_code == 404


class TestTierPriorities:

    def test_swap(self, client, manager_auth_headers, tiers):
        response = client.put("/rate-tiers/priorities", json=[
            {"id": tiers[0], "priority": 1},
            {"id": tiers[1], "priority": 0},
        ], headers=manager_auth_headers)
        assert response.status_code == 200
        assert [(t["id"], t["priority"]) for t in response.json()] == [(tiers[0], 1), (tiers[1], 0)]

    def test_unknown_tier(self, client, manager_auth_headers, tiers):
        response = client.put("/rate-tiers/priorities", json=[
            {"id": tiers[0], "priority": 5},
            {"id": 999, "priority": 0},
        ], headers=manager_auth_headers)
        assert response.status_code == 404
        tier = client.get(f"/rate-tiers/{tiers[0]}", headers=manager_auth_headers).json()
        assert tier["priority"] == 0

    def test_duplicate_ids(self, client, manager_auth_headers, tiers):
        response = client.put("/rate-tiers/priorities", json=[
            {"id": tiers[0], "priority": 5},
            {"id": tiers[0], "priority": 6},
        ], headers=manager_auth_headers)
        assert response.status_code == 400

    def test_front_desk_forbidden(self, client, front_desk_auth_headers, tiers):
        response = client.put("/rate-tiers/priorities", json=[{"id": tiers[0], "priority": 1}],
                              headers=front_desk_auth_headers)
        assert response.status_code == 403
