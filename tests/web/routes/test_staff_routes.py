class TestStaffRoutes:
    def test_create_and_list(self, admin_client):
        response = admin_client.post("/staff/", json={"first_name": "Malee", "position": "Caretaker"})
        assert response.status_code == 201
        assert response.json()["is_active"] is True

        staff = admin_client.get("/staff/").json()
        assert [s["first_name"] for s in staff] == ["Malee"]

    def test_update(self, admin_client):
        uuid = admin_client.post("/staff/", json={"first_name": "Malee"}).json()["uuid"]
        response = admin_client.patch(f"/staff/{uuid}", json={"phone": "0811111111"})
        assert response.status_code == 200
        assert response.json()["phone"] == "0811111111"

    def test_deactivate(self, admin_client):
        uuid = admin_client.post("/staff/", json={"first_name": "Malee"}).json()["uuid"]

        assert admin_client.post(f"/staff/{uuid}/deactivate").status_code == 200
        assert admin_client.get("/staff/").json() == []
        assert len(admin_client.get("/staff/?include_inactive=true").json()) == 1
        assert admin_client.post(f"/staff/{uuid}/deactivate").status_code == 400

    def test_not_found(self, admin_client):
        assert admin_client.patch("/staff/nonexistent", json={"phone": "1"}).status_code == 404

    def test_staff_role_forbidden(self, staff_client):
        assert staff_client.get("/staff/").status_code == 403
