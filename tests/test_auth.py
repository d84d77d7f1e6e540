from datetime import timedelta

from storefront.core.security import issue_token

from conftest import PASSWORD, bearer


def register(client, username="bob", email="bob@example.com", password="hunter22"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


class TestRegisterLogin:
    def test_register_returns_token_and_user(self, client):
        response = register(client)
        assert response.status_code == 201
        data = response.json()
        assert data["token"]
        assert data["user"]["username"] == "bob"
        assert data["user"]["role"] == "user"
        assert "password_hash" not in data["user"]

    def test_register_cannot_choose_role(self, client):
        response = client.post(
            "/api/auth/register",
            json={"username": "eve", "email": "eve@example.com", "password": "hunter22", "role": "admin"},
        )
        assert response.status_code == 400

    def test_duplicate_email_is_400(self, client, user):
        response = register(client, username="someone", email=user.email)
        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"

    def test_duplicate_username_is_400(self, client, user):
        response = register(client, username=user.username, email="new@example.com")
        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"

    def test_missing_fields_are_400_with_message(self, client):
        response = client.post("/api/auth/register", json={"username": "bob"})
        assert response.status_code == 400
        message = response.json()["message"]
        assert "email" in message
        assert "password" in message

    def test_short_password_is_400(self, client):
        response = register(client, password="123")
        assert response.status_code == 400
        assert "password" in response.json()["message"]

    def test_login(self, client, user):
        response = client.post(
            "/api/auth/login",
            json={"email": user.email.upper(), "password": PASSWORD},
        )
        assert response.status_code == 200
        assert response.json()["user"]["id"] == str(user.id)

    def test_login_wrong_password(self, client, user):
        response = client.post("/api/auth/login", json={"email": user.email, "password": "nope-nope"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_missing_fields_is_400(self, client):
        response = client.post("/api/auth/login", json={})
        assert response.status_code == 400


class TestSessionAndBearer:
    def test_login_opens_cookie_session(self, client, user):
        client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        response = client.get("/api/users/profile")
        assert response.status_code == 200
        assert response.json()["username"] == user.username

    def test_logout_clears_session(self, client, user):
        client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        response = client.post("/api/logout")
        assert response.status_code == 200
        assert response.json() == {"message": "Logged out"}
        assert client.get("/api/users/profile").status_code == 401

    def test_auth_logout_alias(self, client):
        assert client.post("/api/auth/logout").status_code == 200

    def test_bearer_token_authenticates(self, client, user):
        response = client.get("/api/users/profile", headers=bearer(user))
        assert response.status_code == 200
        assert response.json()["id"] == str(user.id)

    def test_session_wins_over_bearer(self, client, user, make_user):
        other = make_user("carol")
        client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        response = client.get("/api/users/profile", headers=bearer(other))
        assert response.json()["username"] == user.username

    def test_invalid_bearer_is_anonymous(self, client):
        response = client.get("/api/users/profile", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_expired_bearer_is_anonymous(self, client, settings, user):
        token = issue_token(
            user.id, user.role, expires_delta=timedelta(seconds=-1), settings=settings
        )
        response = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_for_unknown_account_is_anonymous(self, client, settings):
        token = issue_token("00000000-0000-0000-0000-000000000000", "admin", settings=settings)
        response = client.get("/api/admin/users", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_invalid_bearer_on_public_route_is_ignored(self, client):
        response = client.get("/api/products", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 200


class TestRoleGuards:
    def test_anonymous_gets_401(self, client):
        assert client.get("/api/admin/users").status_code == 401

    def test_user_gets_403(self, client, user):
        response = client.get("/api/admin/users", headers=bearer(user))
        assert response.status_code == 403
        assert response.json()["message"] == "Admin access required"

    def test_admin_succeeds(self, client, admin):
        assert client.get("/api/admin/users", headers=bearer(admin)).status_code == 200

    def test_role_claim_in_token_is_not_trusted(self, client, settings, user):
        token = issue_token(user.id, "admin", settings=settings)
        response = client.get("/api/admin/users", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_demoted_admin_loses_access_with_old_token(self, client, session, admin):
        headers = bearer(admin)
        admin.role = "user"
        session.add(admin)
        session.commit()
        assert client.get("/api/admin/users", headers=headers).status_code == 403

    def test_admin_cannot_change_roles(self, client, admin, user):
        response = client.put(
            f"/api/admin/users/{user.id}/role",
            json={"role": "admin"},
            headers=bearer(admin),
        )
        assert response.status_code == 403
