"""
Tests for the accounts API endpoints.

Uses the fake user store, identity provider and password hasher.
"""

from tests.fakes import make_event

AUTH_URL = "/api/v1/auth"

NEW_USER = {"username": "carol", "email": "carol@example.com", "password": "Password123!"}


class TestRegister:
    """Tests for POST /api/v1/auth/register."""

    def test_register_returns_token(self, client, user_repo, identity) -> None:
        response = client.post(f"{AUTH_URL}/register", json=NEW_USER)

        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "carol"
        assert body["email"] == "carol@example.com"
        assert body["token"] in identity.tokens
        stored = next(iter(user_repo.users.values()))
        assert stored.password_hash != NEW_USER["password"]

    def test_duplicate_username_conflicts(self, client, alice) -> None:
        response = client.post(
            f"{AUTH_URL}/register", json={**NEW_USER, "username": "alice"}
        )
        assert response.status_code == 409
        assert response.json() == {"message": "User with this username or email already exists"}

    def test_invalid_payload(self, client) -> None:
        response = client.post(
            f"{AUTH_URL}/register",
            json={"username": "ab", "email": "not-an-email", "password": "short"},
        )
        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"username", "email", "password"}

    def test_multibyte_password_over_72_bytes(self, client, user_repo) -> None:
        response = client.post(f"{AUTH_URL}/register", json={**NEW_USER, "password": "é" * 40})

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "password": ["Password must be at most 72 bytes when UTF-8 encoded"]
        }
        assert user_repo.users == {}

    def test_multibyte_password_within_72_bytes(self, client) -> None:
        response = client.post(f"{AUTH_URL}/register", json={**NEW_USER, "password": "é" * 36})
        assert response.status_code == 201


class TestLogin:
    """Tests for POST /api/v1/auth/login."""

    def test_login_with_username(self, client, alice) -> None:
        response = client.post(
            f"{AUTH_URL}/login", json={"identifier": "alice", "password": "Password123!"}
        )
        assert response.status_code == 200
        assert response.json()["id"] == str(alice.id)

    def test_login_with_email(self, client, alice) -> None:
        response = client.post(
            f"{AUTH_URL}/login",
            json={"identifier": "alice@example.com", "password": "Password123!"},
        )
        assert response.status_code == 200

    def test_wrong_password(self, client, alice) -> None:
        response = client.post(
            f"{AUTH_URL}/login", json={"identifier": "alice", "password": "wrong-password"}
        )
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}

    def test_unknown_user(self, client) -> None:
        response = client.post(
            f"{AUTH_URL}/login", json={"identifier": "nobody", "password": "Password123!"}
        )
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}


class TestSession:
    """Tests for logout and the current account."""

    def test_me(self, client, alice, alice_headers) -> None:
        response = client.get(f"{AUTH_URL}/me", headers=alice_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "alice"
        assert "passwordHash" not in body
        assert "createdAt" in body

    def test_me_without_token(self, client) -> None:
        response = client.get(f"{AUTH_URL}/me")
        assert response.status_code == 401

    def test_logout_revokes_token(self, client, alice_headers) -> None:
        response = client.post(f"{AUTH_URL}/logout", headers=alice_headers)
        assert response.status_code == 204
        assert client.get(f"{AUTH_URL}/me", headers=alice_headers).status_code == 401


class TestProfile:
    """Tests for PATCH /api/v1/auth/me and POST /api/v1/auth/me/password."""

    def test_update_username(self, client, alice_headers) -> None:
        response = client.patch(f"{AUTH_URL}/me", json={"username": "alice2"}, headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["username"] == "alice2"

    def test_update_to_taken_email(self, client, alice_headers, bob) -> None:
        response = client.patch(
            f"{AUTH_URL}/me", json={"email": "bob@example.com"}, headers=alice_headers
        )
        assert response.status_code == 409
        assert response.json() == {"message": "User with this email already exists."}

    def test_update_requires_a_field(self, client, alice_headers) -> None:
        response = client.patch(f"{AUTH_URL}/me", json={}, headers=alice_headers)
        assert response.status_code == 400
        assert "_general" in response.json()["errors"]

    def test_change_password(self, client, alice, alice_headers, user_repo) -> None:
        response = client.post(
            f"{AUTH_URL}/me/password",
            json={"currentPassword": "Password123!", "newPassword": "NewPassword456!"},
            headers=alice_headers,
        )
        assert response.status_code == 200
        assert user_repo.users[alice.id].password_hash == "hashed:NewPassword456!"

    def test_change_password_wrong_current(self, client, alice_headers) -> None:
        response = client.post(
            f"{AUTH_URL}/me/password",
            json={"currentPassword": "nope", "newPassword": "NewPassword456!"},
            headers=alice_headers,
        )
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid current password."}

    def test_change_password_rejects_over_72_bytes(
        self, client, alice, alice_headers, user_repo
    ) -> None:
        response = client.post(
            f"{AUTH_URL}/me/password",
            json={"currentPassword": "Password123!", "newPassword": "é" * 40},
            headers=alice_headers,
        )
        assert response.status_code == 400
        assert "newPassword" in response.json()["errors"]
        assert user_repo.users[alice.id].password_hash == "hashed:Password123!"


class TestSavedEvents:
    """Tests for GET /api/v1/auth/me/saved-events."""

    def test_newest_save_first(self, client, alice_headers, event_repo) -> None:
        older = event_repo.add(make_event(title="Older"))
        newer = event_repo.add(make_event(title="Newer"))
        client.post(f"/api/v1/events/{older.id}/save", headers=alice_headers)
        client.post(f"/api/v1/events/{newer.id}/save", headers=alice_headers)

        response = client.get(f"{AUTH_URL}/me/saved-events", headers=alice_headers)

        assert response.status_code == 200
        assert [event["title"] for event in response.json()["events"]] == ["Newer", "Older"]

    def test_only_own_saves(self, client, alice_headers, bob_headers, event_repo) -> None:
        event = event_repo.add(make_event())
        client.post(f"/api/v1/events/{event.id}/save", headers=bob_headers)

        response = client.get(f"{AUTH_URL}/me/saved-events", headers=alice_headers)

        assert response.json() == {"events": []}
