"""
Root and health endpoints
"""


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client):
        body = client.get("/").json()
        assert body["version"] == "1.0.0"
        assert body["name"]
