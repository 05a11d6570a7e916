"""
Tests for user profile, search and account deletion endpoints.
"""
import uuid

import pytest

from surf_club.models import Message, SessionComment, SessionLike, SurfSession, User
from surf_club.services import user_service as user_service_module

from conftest import DEFAULT_PASSWORD


class TestProfile:
    """Test own and public profiles."""

    def test_profile_with_session_count(self, client, make_user, auth_headers_for, create_session):
        user = make_user(username="kelly")
        create_session(user)
        create_session(user)

        response = client.get("/api/users/profile", headers=auth_headers_for(user))
        assert response.status_code == 200
        profile = response.json()["user"]
        assert profile["username"] == "kelly"
        assert profile["email"] == "kelly@example.com"
        assert profile["session_count"] == 2

    def test_public_profile(self, client, make_user, auth_headers_for, create_session):
        owner = make_user(username="owner")
        viewer = make_user(username="viewer")
        session = create_session(owner)
        client.post(f"/api/likes/session/{session['id']}", headers=auth_headers_for(viewer))

        response = client.get(f"/api/users/{owner.id}", headers=auth_headers_for(viewer))
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["username"] == "owner"
        assert data["user"]["session_count"] == 1
        assert "email" not in data["user"]
        assert data["sessions"][0]["id"] == session["id"]
        assert data["sessions"][0]["user_liked"] is True

    def test_public_profile_not_found(self, client, make_user, auth_headers_for):
        viewer = make_user()
        response = client.get(f"/api/users/{uuid.uuid4()}", headers=auth_headers_for(viewer))
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestAvatar:
    """Test PUT /api/users/avatar."""

    def test_update_avatar(self, client, make_user, auth_headers_for, upload_dir):
        user = make_user()
        response = client.put(
            "/api/users/avatar",
            files={"avatar": ("me.png", b"\x89PNG fake", "image/png")},
            headers=auth_headers_for(user),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Avatar updated successfully"
        avatar_url = data["user"]["avatar_url"]
        assert avatar_url.startswith("/uploads/")
        first_file = upload_dir / avatar_url.rsplit("/", 1)[-1]
        assert first_file.exists()

        # A new avatar replaces the old file
        response = client.put(
            "/api/users/avatar",
            files={"avatar": ("me2.png", b"\x89PNG other", "image/png")},
            headers=auth_headers_for(user),
        )
        assert response.status_code == 200
        assert not first_file.exists()

    def test_update_avatar_without_file(self, client, make_user, auth_headers_for):
        user = make_user()
        response = client.put("/api/users/avatar", headers=auth_headers_for(user))
        assert response.status_code == 400
        assert response.json()["message"] == "No avatar file provided"

    def test_update_avatar_bad_type(self, client, make_user, auth_headers_for):
        user = make_user()
        response = client.put(
            "/api/users/avatar",
            files={"avatar": ("me.gif.exe", b"MZ", "application/octet-stream")},
            headers=auth_headers_for(user),
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "avatar"


class TestSearch:
    """Test GET /api/users/search."""

    def test_search_case_insensitive(self, client, make_user, auth_headers_for):
        viewer = make_user(username="viewer")
        make_user(username="KellySlater")
        make_user(username="kellyanne")
        make_user(username="john")

        response = client.get("/api/users/search?q=KELLY", headers=auth_headers_for(viewer))
        assert response.status_code == 200
        usernames = [u["username"] for u in response.json()["users"]]
        assert sorted(usernames, key=str.lower) == ["kellyanne", "KellySlater"]
        assert "email" not in response.json()["users"][0]

    def test_search_limit(self, client, make_user, auth_headers_for):
        viewer = make_user(username="viewer")
        for i in range(12):
            make_user(username=f"surfer{i:02d}")

        response = client.get("/api/users/search?q=surfer", headers=auth_headers_for(viewer))
        assert len(response.json()["users"]) == 10

    def test_search_wildcards_are_literal(self, client, make_user, auth_headers_for):
        viewer = make_user(username="viewer")
        make_user(username="big_wave")
        make_user(username="bigxwave")

        response = client.get("/api/users/search?q=g_w", headers=auth_headers_for(viewer))
        assert [u["username"] for u in response.json()["users"]] == ["big_wave"]

    @pytest.mark.parametrize("query", ["", "k", "%20k%20"])
    def test_search_too_short(self, client, make_user, auth_headers_for, query):
        viewer = make_user(username="viewer")
        response = client.get(f"/api/users/search?q={query}", headers=auth_headers_for(viewer))
        assert response.status_code == 400

    def test_search_missing_query(self, client, make_user, auth_headers_for):
        viewer = make_user(username="viewer")
        response = client.get("/api/users/search", headers=auth_headers_for(viewer))
        assert response.status_code == 400


@pytest.fixture
def populated_account(client, make_user, auth_headers_for, create_session):
    """A user with sessions, likes, comments and messages in both directions."""
    doomed = make_user(username="doomed")
    other = make_user(username="other")

    own_session = create_session(doomed)
    other_session = create_session(other)

    # Doomed user's activity on someone else's session
    client.post(f"/api/likes/session/{other_session['id']}", headers=auth_headers_for(doomed))
    client.post(
        f"/api/comments/session/{other_session['id']}",
        json={"content": "From doomed"},
        headers=auth_headers_for(doomed),
    )
    # Someone else's activity on the doomed user's session
    client.post(f"/api/likes/session/{own_session['id']}", headers=auth_headers_for(other))
    client.post(
        f"/api/comments/session/{own_session['id']}",
        json={"content": "From other"},
        headers=auth_headers_for(other),
    )
    for sender, receiver in ((doomed, other), (other, doomed)):
        client.post(
            "/api/messages/send",
            json={"receiver_id": str(receiver.id), "content": "hey"},
            headers=auth_headers_for(sender),
        )

    return doomed, other, other_session


class TestDeleteAccount:
    """Test DELETE /api/users/delete-account."""

    def test_delete_account(self, client, db, auth_headers_for, populated_account):
        doomed, other, other_session = populated_account
        doomed_id, other_id = doomed.id, other.id
        headers = auth_headers_for(doomed)

        response = client.request(
            "DELETE", "/api/users/delete-account", json={"password": DEFAULT_PASSWORD}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Account deleted successfully"

        db.expire_all()
        assert db.query(User).filter(User.id == doomed_id).count() == 0
        assert db.query(SurfSession).filter(SurfSession.user_id == doomed_id).count() == 0
        assert db.query(SessionLike).count() == 0
        assert db.query(SessionComment).count() == 0
        assert db.query(Message).count() == 0

        # The other user and their session survive
        assert db.query(User).filter(User.id == other_id).count() == 1
        assert db.query(SurfSession).filter(SurfSession.id == uuid.UUID(other_session["id"])).count() == 1

        # The token no longer resolves to a user
        assert client.get("/api/users/profile", headers=headers).status_code == 401

    def test_delete_account_requires_password(self, client, make_user, auth_headers_for):
        user = make_user()
        response = client.request("DELETE", "/api/users/delete-account", json={}, headers=auth_headers_for(user))
        assert response.status_code == 400
        assert response.json()["message"] == "Password is required"

    def test_delete_account_wrong_password(self, client, db, make_user, auth_headers_for):
        user = make_user()
        response = client.request(
            "DELETE", "/api/users/delete-account", json={"password": "nope"}, headers=auth_headers_for(user)
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid password"
        assert db.query(User).count() == 1

    def test_delete_account_rolls_back_on_failure(self, client, db, auth_headers_for, populated_account, monkeypatch):
        doomed, _, _ = populated_account
        doomed_id = doomed.id

        def fail(db, user_id):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(user_service_module, "_delete_sessions", fail)

        response = client.request(
            "DELETE", "/api/users/delete-account", json={"password": DEFAULT_PASSWORD}, headers=auth_headers_for(doomed)
        )
        assert response.status_code == 500
        assert response.json()["message"] == "Server error during account deletion"

        # Steps that ran before the failure were undone too
        db.expire_all()
        assert db.query(User).filter(User.id == doomed_id).count() == 1
        assert db.query(SurfSession).count() == 2
        assert db.query(SessionLike).count() == 2
        assert db.query(SessionComment).count() == 2
        assert db.query(Message).count() == 2
