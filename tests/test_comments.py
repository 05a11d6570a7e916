"""
Tests for comment endpoints.
"""
import uuid
from datetime import datetime, timedelta

from surf_club.models import SessionComment


class TestComments:
    """Test /api/comments endpoints."""

    def test_add_comment(self, client, make_user, auth_headers_for, create_session):
        author = make_user(username="author")
        fan = make_user(username="fan")
        session = create_session(author)

        response = client.post(
            f"/api/comments/session/{session['id']}",
            json={"content": "  Firing out there  "},
            headers=auth_headers_for(fan),
        )
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Comment added successfully"
        assert data["comment"]["content"] == "Firing out there"
        assert data["comment"]["username"] == "fan"
        assert data["comment"]["session_id"] == session["id"]

    def test_add_comment_validation(self, client, make_user, auth_headers_for, create_session):
        user = make_user()
        session = create_session(user)
        url = f"/api/comments/session/{session['id']}"

        assert client.post(url, json={"content": "   "}, headers=auth_headers_for(user)).status_code == 400
        assert client.post(url, json={"content": "x" * 501}, headers=auth_headers_for(user)).status_code == 400
        assert client.post(url, json={"content": "x" * 500}, headers=auth_headers_for(user)).status_code == 201

    def test_add_comment_missing_session(self, client, make_user, auth_headers_for):
        user = make_user()
        response = client.post(
            f"/api/comments/session/{uuid.uuid4()}",
            json={"content": "Hello?"},
            headers=auth_headers_for(user),
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Session not found"

    def test_list_comments_newest_first(self, client, db, make_user, auth_headers_for, create_session):
        user = make_user()
        session = create_session(user)
        url = f"/api/comments/session/{session['id']}"
        for text in ("first", "second", "third"):
            client.post(url, json={"content": text}, headers=auth_headers_for(user))

        now = datetime.utcnow()
        for offset, comment in enumerate(db.query(SessionComment).order_by(SessionComment.content).all()):
            # first < second < third alphabetically
            comment.created_at = now - timedelta(minutes=10 - offset)
        db.commit()

        response = client.get(f"{url}?limit=2", headers=auth_headers_for(user))
        assert response.status_code == 200
        data = response.json()
        assert [c["content"] for c in data["comments"]] == ["third", "second"]
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "hasNext": True,
            "hasPrev": False,
            "totalComments": 3,
        }

    def test_update_comment(self, client, make_user, auth_headers_for, create_session):
        user = make_user()
        session = create_session(user)
        comment = client.post(
            f"/api/comments/session/{session['id']}",
            json={"content": "Typo"},
            headers=auth_headers_for(user),
        ).json()["comment"]

        response = client.put(
            f"/api/comments/{comment['id']}",
            json={"content": "Fixed"},
            headers=auth_headers_for(user),
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Comment updated successfully"
        assert response.json()["comment"]["content"] == "Fixed"

    def test_update_comment_not_owner(self, client, make_user, auth_headers_for, create_session):
        author = make_user(username="author")
        other = make_user(username="other")
        session = create_session(author)
        comment = client.post(
            f"/api/comments/session/{session['id']}",
            json={"content": "Mine"},
            headers=auth_headers_for(author),
        ).json()["comment"]

        response = client.put(
            f"/api/comments/{comment['id']}",
            json={"content": "Hijacked"},
            headers=auth_headers_for(other),
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Comment not found or unauthorized"

    def test_delete_comment(self, client, db, make_user, auth_headers_for, create_session):
        user = make_user()
        other = make_user(username="other")
        session = create_session(user)
        comment = client.post(
            f"/api/comments/session/{session['id']}",
            json={"content": "Bye"},
            headers=auth_headers_for(user),
        ).json()["comment"]

        assert client.delete(f"/api/comments/{comment['id']}", headers=auth_headers_for(other)).status_code == 404

        response = client.delete(f"/api/comments/{comment['id']}", headers=auth_headers_for(user))
        assert response.status_code == 200
        assert response.json()["message"] == "Comment deleted successfully"
        assert db.query(SessionComment).count() == 0
