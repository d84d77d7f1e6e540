from storefront.models.location import KenyaArea, KenyaCounty, KenyaSubCounty

from conftest import bearer


class TestNews:
    def test_crud_and_filters(self, client, admin):
        headers = bearer(admin)
        client.post("/api/news", json={"title": "Clinic opening", "content": "Open Monday"}, headers=headers)
        offer = client.post(
            "/api/news",
            json={"title": "20% off", "content": "This week", "type": "offer", "is_urgent": True},
            headers=headers,
        )
        assert offer.status_code == 201
        offer_id = offer.json()["id"]

        assert len(client.get("/api/news").json()) == 2
        assert [n["id"] for n in client.get("/api/news", params={"type": "offer"}).json()] == [offer_id]
        assert [n["id"] for n in client.get("/api/news", params={"urgent": "true"}).json()] == [offer_id]

        updated = client.put(f"/api/news/{offer_id}", json={"is_urgent": False}, headers=headers)
        assert updated.json()["is_urgent"] is False

        assert client.delete(f"/api/news/{offer_id}", headers=headers).status_code == 200
        assert client.get(f"/api/news/{offer_id}").status_code == 404

    def test_writes_require_admin(self, client, user):
        response = client.post("/api/news", json={"title": "x", "content": "y"}, headers=bearer(user))
        assert response.status_code == 403


class TestPages:
    def test_slug_generated_and_unique(self, client, admin):
        headers = bearer(admin)
        first = client.post("/api/pages", json={"title": "About Us!", "content": "Hi"}, headers=headers)
        second = client.post("/api/pages", json={"title": "About us"}, headers=headers)
        assert first.json()["slug"] == "about-us"
        assert second.json()["slug"] == "about-us-2"

        page = client.get("/api/pages/about-us")
        assert page.status_code == 200
        assert page.json()["content"] == "Hi"

    def test_update_slug(self, client, admin):
        headers = bearer(admin)
        page_id = client.post("/api/pages", json={"title": "Terms"}, headers=headers).json()["id"]
        updated = client.put(f"/api/pages/{page_id}", json={"slug": "Terms of Service"}, headers=headers)
        assert updated.json()["slug"] == "terms-of-service"
        assert client.get("/api/pages/terms").status_code == 404

    def test_unknown_slug_is_404(self, client):
        assert client.get("/api/pages/nothing-here").status_code == 404


class TestSiteSettings:
    def test_defaults_created_on_first_read(self, client):
        response = client.get("/api/settings")
        assert response.status_code == 200
        assert response.json()["default_whatsapp_number"] == "+254700000000"
        assert response.json()["show_urgent_banner"] is True

    def test_admin_update(self, client, admin, user):
        payload = {"default_whatsapp_number": "+254711111111"}
        assert client.put("/api/settings", json=payload, headers=bearer(user)).status_code == 403
        response = client.put("/api/settings", json=payload, headers=bearer(admin))
        assert response.json()["default_whatsapp_number"] == "+254711111111"
        assert client.get("/api/settings").json()["default_whatsapp_number"] == "+254711111111"


class TestNewsletter:
    def test_subscribe_is_idempotent(self, client):
        for _ in range(2):
            response = client.post("/api/newsletter/subscribe", json={"email": "Reader@Example.com"})
            assert response.status_code == 200

    def test_invalid_email_is_400(self, client):
        assert client.post("/api/newsletter/subscribe", json={"email": "nope"}).status_code == 400


class TestLocations:
    def test_hierarchy(self, client, session):
        county = KenyaCounty(name="Nairobi", code="047")
        session.add(county)
        session.commit()
        sub_county = KenyaSubCounty(county_id=county.id, name="Westlands")
        session.add(sub_county)
        session.commit()
        session.add(KenyaArea(sub_county_id=sub_county.id, name="Parklands"))
        session.commit()

        counties = client.get("/api/locations/counties").json()
        assert [c["name"] for c in counties] == ["Nairobi"]

        subs = client.get(f"/api/locations/sub-counties/{county.id}").json()
        assert [s["name"] for s in subs] == ["Westlands"]

        areas = client.get(f"/api/locations/areas/{sub_county.id}").json()
        assert [a["name"] for a in areas] == ["Parklands"]
