from unittest.mock import patch


class TestApp:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_home_anonymous(self, client):
        assert client.get("/").json() == {"app": "dormkeep", "user": None}

    def test_home_logged_in(self, admin_client):
        assert admin_client.get("/").json()["user"] == "admin"

    def test_unhandled_error_returns_json_500(self, admin_client):
        from starlette.testclient import TestClient

        from web.app import app

        crashing = TestClient(app, raise_server_exceptions=False)
        crashing.cookies = admin_client.cookies
        with patch("web.routes.rooms.get_room_service", side_effect=RuntimeError("boom")):
            response = crashing.get("/rooms/")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal Server Error"}

    def test_domain_error_maps_to_400(self, admin_client):
        admin_client.post("/rooms/", json={"room_number": "101"})
        response = admin_client.post("/rooms/", json={"room_number": "101"})
        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]
