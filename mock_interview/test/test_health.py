"""
Test Health Route
"""

from sqlalchemy.exc import OperationalError


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}

    def test_database_down_is_degraded(self, client, db_session, monkeypatch):
        def failing_execute(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr(db_session, "execute", failing_execute)

        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "degraded", "database": "unavailable"}

    def test_unknown_route(self, client):
        assert client.get("/api/does-not-exist").status_code == 404
