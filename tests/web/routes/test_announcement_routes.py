class TestAnnouncementRoutes:
    def test_create_and_list(self, staff_client, tenant_client):
        response = staff_client.post(
            "/announcements/", json={"title": "Water shut-off", "content": "Saturday", "important": True}
        )
        assert response.status_code == 201
        assert response.json()["publish_date"] is not None

        announcements = tenant_client.get("/announcements/").json()
        assert [a["title"] for a in announcements] == ["Water shut-off"]

    def test_old_announcements_hidden(self, staff_client):
        staff_client.post("/announcements/", json={"title": "Ancient", "publish_date": "2000-01-01"})
        assert staff_client.get("/announcements/").json() == []

    def test_tenant_cannot_create(self, tenant_client):
        assert tenant_client.post("/announcements/", json={"title": "Party"}).status_code == 403

    def test_delete(self, staff_client):
        uuid = staff_client.post("/announcements/", json={"title": "Gone"}).json()["uuid"]
        assert staff_client.delete(f"/announcements/{uuid}").status_code == 200
        assert staff_client.get("/announcements/").json() == []
        assert staff_client.delete(f"/announcements/{uuid}").status_code == 404

    def test_requires_login(self, client):
        assert client.get("/announcements/").status_code == 401
