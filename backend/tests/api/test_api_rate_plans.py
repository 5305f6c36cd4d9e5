"""
Rate plan API tests
"""


def _payload(**kwargs):
    data = {"code": "BAR", "name": "Best Available Rate", "currency": "usd"}
    data.update(kwargs)
    return data


class TestRatePlanApi:

    def test_create(self, client, manager_auth_headers):
        response = client.post("/rate-plans", json=_payload(), headers=manager_auth_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["code"] == "BAR"
        assert body["currency"] == "USD"
        assert body["status"] == "ACTIVE"
        assert body["is_package"] is False

    def test_duplicate_code(self, client, manager_auth_headers):
        client.post("/rate-plans", json=_payload(), headers=manager_auth_headers)
        response = client.post("/rate-plans", json=_payload(), headers=manager_auth_headers)
        assert response.status_code == 400

    def test_invalid_window(self, client, manager_auth_headers):
        response = client.post(
            "/rate-plans",
            json=_payload(valid_from="2025-06-01", valid_to="2025-05-01"),
            headers=manager_auth_headers,
        )
        assert response.status_code == 422

    def test_list_paginated(self, client, manager_auth_headers):
        for code in ("A1", "A2", "A3"):
            client.post("/rate-plans", json=_payload(code=code), headers=manager_auth_headers)
        response = client.get("/rate-plans", params={"page": 0, "size": 2}, headers=manager_auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["total_elements"] == 3
        assert body["total_pages"] == 2
        assert len(body["content"]) == 2

    def test_update_and_soft_delete(self, client, manager_auth_headers):
        plan_id = client.post("/rate-plans", json=_payload(), headers=manager_auth_headers).json()["id"]

        response = client.put(f"/rate-plans/{plan_id}", json={"name": "Flexible"}, headers=manager_auth_headers)
        assert response.json()["name"] == "Flexible"

        response = client.delete(f"/rate-plans/{plan_id}", headers=manager_auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "INACTIVE"
        assert client.get(f"/rate-plans/{plan_id}", headers=manager_auth_headers).status_code == 200

    def test_missing(self, client, manager_auth_headers):
        assert client.get("/rate-plans/999", headers=manager_auth_headers).status_code == 404

    def test_front_desk_read_only(self, client, front_desk_auth_headers, sample_rate_plan):
        assert client.get("/rate-plans", headers=front_desk_auth_headers).status_code == 200
        response = client.post("/rate-plans", json=_payload(code="X"), headers=front_desk_auth_headers)
        assert response.status_code == 403

    def test_requires_token(self, client):
        assert client.get("/rate-plans").status_code in (401, 403)
