import base64

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def register(client, username: str, profile_pic: bytes | None = None) -> dict:
    files = {"profilePic": ("avatar.png", profile_pic, "image/png")} if profile_pic else None
    response = client.post(
        "/auth/register",
        data={"username": username, "email": f"{username}@example.com", "password": "pw-123"},
        files=files,
    )
    assert response.status_code == 201, response.text
    login = client.post("/auth/login", json={"email": f"{username}@example.com", "password": "pw-123"})
    assert login.status_code == 200, login.text
    body = login.json()
    return {"id": body["userId"], "headers": {"Authorization": f"Bearer {body['token']}"}, "login": body}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_register_login_and_profile(client):
    alice = register(client, "alice", profile_pic=b"\x89PNG")

    assert alice["login"]["username"] == "alice"
    assert alice["login"]["profilePic"] == base64.b64encode(b"\x89PNG").decode()

    profile = client.get("/profile", headers=alice["headers"]).json()
    assert profile["email"] == "alice@example.com"
    assert profile["counts"] == {"posts": 0, "followers": 0, "following": 0}
    assert "passwordHash" not in profile


def test_duplicate_registration_is_rejected(client):
    register(client, "alice")

    response = client.post(
        "/auth/register", data={"username": "alice2", "email": "alice@example.com", "password": "pw"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Email is already registered"}


def test_login_failures(client):
    register(client, "alice")

    wrong = client.post("/auth/login", json={"email": "alice@example.com", "password": "nope"})
    unknown = client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})

    assert wrong.status_code == 401
    assert unknown.status_code == 404


def test_protected_routes_require_a_valid_token(client):
    missing = client.get("/profile")
    garbage = client.get("/profile", headers={"Authorization": "Bearer garbage"})

    assert missing.status_code == 401
    assert missing.json() == {"error": "Please authenticate"}
    assert garbage.status_code == 401


def test_request_validation_errors_are_bad_requests(client):
    response = client.post("/auth/login", json={"email": "alice@example.com"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert response.json()["details"]


def test_post_lifecycle(client):
    alice = register(client, "alice")
    bob = register(client, "bob")
    category = client.post("/categories", json={"name": "Travel"}, headers=alice["headers"])
    assert category.status_code == 201
    category_id = category.json()["id"]

    created = client.post(
        "/posts",
        data={"description": "Lake view", "categoryId": str(category_id)},
        files={"content": ("lake.jpg", b"jpeg-bytes", "image/jpeg")},
        headers=alice["headers"],
    )
    assert created.status_code == 201, created.text
    post = created.json()
    assert post["content"] == base64.b64encode(b"jpeg-bytes").decode()
    assert post["user"]["username"] == "alice"
    assert post["category"]["name"] == "Travel"

    like = client.post(f"/posts/{post['id']}/like", headers=bob["headers"])
    comment = client.post(f"/posts/{post['id']}/comments", json={"content": "Wow"}, headers=bob["headers"])
    assert like.json()["likeCount"] == 1
    assert comment.status_code == 201

    recent = client.get("/posts/recent", headers=bob["headers"]).json()
    assert recent["pagination"] == {"total": 1, "page": 1, "limit": 10, "pages": 1}
    assert recent["data"][0]["likeCount"] == 1
    assert recent["data"][0]["commentCount"] == 1
    assert recent["data"][0]["hasLiked"] is True

    detail = client.get(f"/posts/{post['id']}", headers=alice["headers"]).json()
    assert [c["content"] for c in detail["comments"]] == ["Wow"]

    forbidden = client.delete(f"/posts/{post['id']}", headers=bob["headers"])
    assert forbidden.status_code == 403
    assert client.delete(f"/posts/{post['id']}", headers=alice["headers"]).status_code == 200
    missing = client.get(f"/posts/{post['id']}", headers=alice["headers"])
    assert missing.status_code == 404
    assert missing.json() == {"error": "Post not found"}


def test_post_requires_a_description(client):
    alice = register(client, "alice")

    response = client.post("/posts", data={"categoryId": "1"}, headers=alice["headers"])

    assert response.status_code == 400
    assert response.json() == {"error": "Description is required"}


def test_follow_endpoints(client):
    alice = register(client, "alice")
    bob = register(client, "bob")

    followed = client.post(f"/users/{bob['id']}/follow", headers=alice["headers"])
    self_follow = client.post(f"/users/{alice['id']}/follow", headers=alice["headers"])
    followers = client.get(f"/users/{bob['id']}/followers", headers=bob["headers"]).json()

    assert followed.json()["followerCount"] == 1
    assert self_follow.status_code == 400
    assert followers["data"][0]["user"]["username"] == "alice"
    assert followers["data"][0]["isFollowing"] is False
    assert followers["pagination"]["limit"] == 20


def test_messages_over_http(client):
    alice = register(client, "alice")
    bob = register(client, "bob")

    sent = client.post("/messages", json={"receiverId": bob["id"], "content": "hi"}, headers=alice["headers"])
    assert sent.status_code == 201
    assert sent.json()["senderId"] == alice["id"]
    assert sent.json()["isRead"] is False
    assert sent.json()["receiver"]["username"] == "bob"

    to_self = client.post("/messages", json={"receiverId": alice["id"], "content": "hi"}, headers=alice["headers"])
    assert to_self.status_code == 400

    assert client.get("/messages/unread-count", headers=bob["headers"]).json() == {"unreadCount": 1}
    conversations = client.get("/conversations", headers=bob["headers"]).json()
    assert conversations[0]["user"]["username"] == "alice"
    assert conversations[0]["unreadCount"] == 1

    edit = client.put(f"/messages/{sent.json()['id']}", json={"content": "hacked"}, headers=bob["headers"])
    assert edit.status_code == 403

    read = client.put(f"/conversations/{alice['id']}/read", headers=bob["headers"])
    assert read.json()["count"] == 1
    assert client.get("/messages/unread-count", headers=bob["headers"]).json() == {"unreadCount": 0}

    history = client.get(f"/conversations/{alice['id']}/messages", headers=bob["headers"]).json()
    assert [m["content"] for m in history["data"]] == ["hi"]


def test_notification_endpoints(client, toolkit):
    alice = register(client, "alice")
    bob = register(client, "bob")
    client.post(f"/users/{alice['id']}/follow", headers=bob["headers"])
    client.portal.call(toolkit.fanout.drain)

    assert client.get("/notifications/unread-count", headers=alice["headers"]).json() == {"unreadCount": 1}
    page = client.get("/notifications", headers=alice["headers"]).json()
    [notification] = page["data"]
    assert notification["type"] == "follow"
    assert notification["fromUser"]["username"] == "bob"

    assert client.put(f"/notifications/{notification['id']}/read", headers=bob["headers"]).status_code == 403
    marked = client.put(f"/notifications/{notification['id']}/read", headers=alice["headers"])
    assert marked.json()["isRead"] is True
    assert client.delete("/notifications", headers=alice["headers"]).json()["count"] == 1
