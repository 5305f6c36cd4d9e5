"""
Rate matrix API tests
"""
from decimal import Decimal


class TestRateMatrixApi:

    def test_matrix(self, client, manager_auth_headers, sample_rate_plan, sample_room_type,
                    sample_room_type_deluxe):
        response = client.post("/rate-matrix", json={
            "start_date": "2025-06-01", "end_date": "2025-06-07",
            "room_type_ids": [sample_room_type.id, sample_room_type_deluxe.id],
            "rate_plan_ids": [sample_rate_plan.id],
        }, headers=manager_auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert len(body["cells"]) == 14
        assert body["summary"]["total_days"] == 7
        assert Decimal(body["summary"]["min_rate"]) == Decimal("100.00")
        assert Decimal(body["summary"]["max_rate"]) == Decimal("200.00")
        assert Decimal(body["summary"]["average_rate"]) == Decimal("150.00")

    def test_range_too_long(self, client, manager_auth_headers, sample_rate_plan, sample_room_type):
        response = client.post("/rate-matrix", json={
            "start_date": "2025-01-01", "end_date": "2025-06-01",
            "room_type_ids": [sample_room_type.id], "rate_plan_ids": [sample_rate_plan.id],
        }, headers=manager_auth_headers)
        assert response.status_code == 422

    def test_unknown_plan(self, client, manager_auth_headers, sample_room_type):
        response = client.post("/rate-matrix", json={
            "start_date": "2025-06-01", "end_date": "2025-06-01",
            "room_type_ids": [sample_room_type.id], "rate_plan_ids": [404],
        }, headers=manager_auth_headers)
        assert response.status_code == 404

    def test_requires_rate_read(self, client, housekeeping_auth_headers, sample_rate_plan, sample_room_type):
        response = client.post("/rate-matrix", json={
            "start_date": "2025-06-01", "end_date": "2025-06-01",
            "room_type_ids": [sample_room_type.id], "rate_plan_ids": [sample_rate_plan.id],
        }, headers=housekeeping_auth_headers)
        assert response.status_code == 403
