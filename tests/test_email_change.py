from conftest import PASSWORD, bearer


def request_change(client, user, new_email="alice.new@example.com"):
    return client.post(
        "/api/email-change/request",
        json={"new_email": new_email},
        headers=bearer(user),
    )


class TestRequest:
    def test_requires_auth(self, client):
        response = client.post("/api/email-change/request", json={"new_email": "x@example.com"})
        assert response.status_code == 401

    def test_creates_pending_request(self, client, user):
        response = request_change(client, user, "  Alice.New@Example.com ")
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["new_email"] == "alice.new@example.com"
        assert body["user_id"] == str(user.id)
        assert body["reviewed_at"] is None

    def test_same_email_is_400(self, client, user):
        assert request_change(client, user, user.email).status_code == 400

    def test_taken_email_is_400(self, client, user, make_user):
        other = make_user("carol")
        response = request_change(client, user, other.email)
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    def test_one_pending_request_at_a_time(self, client, user):
        assert request_change(client, user).status_code == 201
        response = request_change(client, user, "alice.other@example.com")
        assert response.status_code == 400

    def test_invalid_email_is_400(self, client, user):
        assert request_change(client, user, "not-an-email").status_code == 400


class TestReview:
    def test_list_requires_admin(self, client, user):
        assert client.get("/api/email-change", headers=bearer(user)).status_code == 403

    def test_admin_lists_all_newest_first(self, client, admin, user, make_user):
        first = request_change(client, user).json()
        second = request_change(client, make_user("carol"), "carol.new@example.com").json()
        listed = client.get("/api/email-change", headers=bearer(admin)).json()
        assert {r["id"] for r in listed} == {first["id"], second["id"]}
        stamps = [r["created_at"] for r in listed]
        assert stamps == sorted(stamps, reverse=True)

    def test_approval_moves_login_email(self, client, admin, user):
        created = request_change(client, user).json()
        response = client.post(
            f"/api/email-change/{created['id']}/review",
            json={"status": "approved"},
            headers=bearer(admin),
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert response.json()["reviewed_at"] is not None

        assert client.get("/api/users/profile", headers=bearer(user)).json()["email"] == "alice.new@example.com"
        old = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        assert old.status_code == 401
        new = client.post("/api/auth/login", json={"email": "alice.new@example.com", "password": PASSWORD})
        assert new.status_code == 200

    def test_rejection_keeps_email(self, client, admin, user):
        created = request_change(client, user).json()
        response = client.post(
            f"/api/email-change/{created['id']}/review",
            json={"status": "rejected"},
            headers=bearer(admin),
        )
        assert response.json()["status"] == "rejected"
        assert client.get("/api/users/profile", headers=bearer(user)).json()["email"] == user.email

    def test_review_only_once(self, client, admin, user):
        created = request_change(client, user).json()
        url = f"/api/email-change/{created['id']}/review"
        assert client.post(url, json={"status": "rejected"}, headers=bearer(admin)).status_code == 200
        assert client.post(url, json={"status": "approved"}, headers=bearer(admin)).status_code == 400

    def test_approval_rechecks_availability(self, client, admin, user, make_user):
        created = request_change(client, user, "taker@example.com").json()
        make_user("taker")
        response = client.post(
            f"/api/email-change/{created['id']}/review",
            json={"status": "approved"},
            headers=bearer(admin),
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    def test_unknown_status_is_400(self, client, admin, user):
        created = request_change(client, user).json()
        response = client.post(
            f"/api/email-change/{created['id']}/review",
            json={"status": "pending"},
            headers=bearer(admin),
        )
        assert response.status_code == 400

    def test_unknown_request_is_404(self, client, admin):
        for request_id in ("00000000-0000-0000-0000-000000000000", "nope"):
            response = client.post(
                f"/api/email-change/{request_id}/review",
                json={"status": "approved"},
                headers=bearer(admin),
            )
            assert response.status_code == 404
