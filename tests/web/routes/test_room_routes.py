from dormkeep.models.audit_log import AuditEventType
from tests.web.conftest import get_audit_logs


def _create(client, number="101", **extra):
    return client.post("/rooms/", json={"room_number": number, **extra})


class TestRoomRoutes:
    def test_create(self, admin_client, test_engine):
        response = _create(admin_client, capacity=2, room_type="standard")

        assert response.status_code == 201
        data = response.json()
        assert data["room_number"] == "101"
        assert data["status"] == "vacant"
        assert data["latest_meter_reading"] == 0
        assert data["occupant_count"] == 0
        assert len(get_audit_logs(test_engine, AuditEventType.ROOM_CREATE)) == 1

    def test_create_invalid_capacity(self, admin_client):
        assert _create(admin_client, capacity=0).status_code == 422

    def test_list(self, staff_client):
        _create(staff_client, "201", floor=2)
        _create(staff_client, "101")
        numbers = [r["room_number"] for r in staff_client.get("/rooms/").json()]
        assert numbers == ["101", "201"]

    def test_list_by_status(self, admin_client):
        uuid = _create(admin_client, "101").json()["uuid"]
        _create(admin_client, "102")
        admin_client.post(f"/rooms/{uuid}/status", json={"status": "maintenance"})

        rooms = admin_client.get("/rooms/?status=maintenance").json()
        assert [r["room_number"] for r in rooms] == ["101"]

    def test_detail_and_update(self, admin_client):
        uuid = _create(admin_client).json()["uuid"]
        response = admin_client.patch(f"/rooms/{uuid}", json={"capacity": 3, "room_type": "deluxe"})

        assert response.status_code == 200
        assert response.json()["capacity"] == 3
        assert admin_client.get(f"/rooms/{uuid}").json()["room_type"] == "deluxe"

    def test_update_to_taken_number(self, admin_client):
        uuid = _create(admin_client, "101").json()["uuid"]
        _create(admin_client, "102")
        assert admin_client.patch(f"/rooms/{uuid}", json={"room_number": "102"}).status_code == 400

    def test_change_status(self, admin_client, test_engine):
        uuid = _create(admin_client).json()["uuid"]
        response = admin_client.post(f"/rooms/{uuid}/status", json={"status": "maintenance"})

        assert response.status_code == 200
        assert response.json()["status"] == "maintenance"
        logs = get_audit_logs(test_engine, AuditEventType.ROOM_CHANGE_STATUS)
        assert logs[0].previous_state["status"] == "vacant"

    def test_invalid_status(self, admin_client):
        uuid = _create(admin_client).json()["uuid"]
        assert admin_client.post(f"/rooms/{uuid}/status", json={"status": "haunted"}).status_code == 422

    def test_not_found(self, admin_client):
        assert admin_client.get("/rooms/nonexistent").status_code == 404

    def test_tenant_forbidden(self, tenant_client):
        assert tenant_client.get("/rooms/").status_code == 403
