from sqlmodel import select

from storefront.models.favorite import Favorite

from conftest import bearer


class TestFavorites:
    def test_requires_auth(self, client, product):
        assert client.get("/api/favorites").status_code == 401
        assert client.post("/api/favorites", json={"product_id": str(product.id)}).status_code == 401

    def test_add_then_list(self, client, user, product):
        response = client.post("/api/favorites", json={"product_id": str(product.id)}, headers=bearer(user))
        assert response.status_code == 201
        assert response.json()["product_id"] == str(product.id)

        listed = client.get("/api/favorites", headers=bearer(user))
        assert listed.headers["cache-control"].startswith("no-store")
        assert [f["product_id"] for f in listed.json()] == [str(product.id)]

    def test_add_twice_is_idempotent(self, client, session, user, product):
        first = client.post("/api/favorites", json={"product_id": str(product.id)}, headers=bearer(user))
        second = client.post("/api/favorites", json={"product_id": str(product.id)}, headers=bearer(user))
        assert first.status_code == 201
        assert second.status_code == 200
        assert first.json()["id"] == second.json()["id"]
        assert len(session.exec(select(Favorite)).all()) == 1

    def test_favorites_are_per_account(self, client, user, make_user, product):
        other = make_user("dave")
        client.post("/api/favorites", json={"product_id": str(product.id)}, headers=bearer(user))
        assert client.get("/api/favorites", headers=bearer(other)).json() == []

    def test_service_favorite(self, client, user, service):
        response = client.post("/api/favorites", json={"service_id": str(service.id)}, headers=bearer(user))
        assert response.status_code == 201
        assert response.json()["service_id"] == str(service.id)
        assert response.json()["product_id"] is None

    def test_needs_exactly_one_target(self, client, user, product, service):
        assert client.post("/api/favorites", json={}, headers=bearer(user)).status_code == 400
        both = {"product_id": str(product.id), "service_id": str(service.id)}
        assert client.post("/api/favorites", json=both, headers=bearer(user)).status_code == 400

    def test_unknown_product_is_404(self, client, user):
        response = client.post(
            "/api/favorites",
            json={"product_id": "00000000-0000-0000-0000-000000000000"},
            headers=bearer(user),
        )
        assert response.status_code == 404

    def test_remove(self, client, user, product):
        client.post("/api/favorites", json={"product_id": str(product.id)}, headers=bearer(user))
        response = client.delete(f"/api/favorites/{product.id}", headers=bearer(user))
        assert response.status_code == 200
        assert response.json()["deleted_count"] == 1
        assert client.get("/api/favorites", headers=bearer(user)).json() == []

    def test_remove_missing_is_404(self, client, user, product):
        response = client.delete(f"/api/favorites/{product.id}", headers=bearer(user))
        assert response.status_code == 404
