from app.models.notification import Notification


def _unread(client, headers) -> int:
    response = client.get("/api/notifications/unread-count", headers=headers)
    assert response.status_code == 200
    return response.json()["count"]


def test_unread_count_requires_session(client):
    response = client.get("/api/notifications/unread-count")

    assert response.status_code == 401
    assert response.json() == {"detail": "Missing session"}


def test_unread_count_tracks_new_notifications(client, login_as, create_policy):
    headers = login_as("agent@example.com")
    before = _unread(client, headers)

    for days in (1, 2, 3):
        create_policy(expires_in_days=days)
    client.get("/api/send-policy-notifications")

    assert _unread(client, headers) == before + 3


def test_viewing_feed_marks_everything_read(client, login_as, create_policy, db):
    headers = login_as("agent@example.com")
    create_policy(expires_in_days=2)
    create_policy(expires_in_days=4)
    client.get("/api/send-policy-notifications")

    feed = client.get("/notifications", headers=headers)

    assert feed.status_code == 200
    body = feed.json()
    assert body["unread_count"] == 2
    assert [n["read"] for n in body["notifications"]] == [False, False]
    assert _unread(client, headers) == 0

    db.expire_all()
    assert all(n.read == 1 and n.read_at for n in db.query(Notification).all())

    again = client.get("/notifications", headers=headers).json()
    assert again["unread_count"] == 0
    assert all(n["read"] for n in again["notifications"])


def test_feed_requires_session(client):
    response = client.get("/notifications", follow_redirects=False)

    assert response.status_code == 401
    assert "Access Denied" in response.text
