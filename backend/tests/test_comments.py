"""Comment endpoints."""
API = "/api/v1"


def test_add_and_list_comments(client, auth, make_user, make_video):
    owner = make_user()
    viewer = make_user()
    video = make_video(owner)

    r = client.post(f"{API}/comments/video/{video}", json={"content": "  first!  "}, headers=auth(viewer))
    assert r.status_code == 201
    created = r.json()["data"]
    assert created["content"] == "first!"
    assert created["owner"]["id"] == viewer
    assert created["videoId"] == video

    client.post(f"{API}/comments/video/{video}", json={"content": "second"}, headers=auth(owner))

    r = client.get(f"{API}/comments/video/{video}")
    data = r.json()["data"]
    assert data["totalCount"] == 2
    assert {c["content"] for c in data["comments"]} == {"first!", "second"}
    assert all(c["isLiked"] is False for c in data["items"])


def test_comment_validation(client, auth, make_user, make_video):
    owner = make_user()
    video = make_video(owner)

    r = client.post(f"{API}/comments/video/{video}", json={"content": "   "}, headers=auth(owner))
    assert r.status_code == 400
    assert r.json()["message"] == "Comment content is required"

    r = client.post(f"{API}/comments/video/{video}", json={"content": "x" * 1001}, headers=auth(owner))
    assert r.status_code == 400

    r = client.post(f"{API}/comments/video/3f2b8a5e-9c1d-4e7f-a6b5-0c9d8e7f6a5b",
                    json={"content": "hi"}, headers=auth(owner))
    assert r.status_code == 404

    r = client.get(f"{API}/comments/video/bogus")
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid Video ID"


def test_only_owner_can_edit_or_delete(client, auth, make_user, make_video, make_comment):
    owner = make_user()
    other = make_user()
    video = make_video(owner)
    comment = make_comment(video, owner, "original")

    r = client.patch(f"{API}/comments/{comment}", json={"content": "hijacked"}, headers=auth(other))
    assert r.status_code == 403
    assert r.json()["message"] == "You are not authorized to update this comment"

    r = client.delete(f"{API}/comments/{comment}", headers=auth(other))
    assert r.status_code == 403

    r = client.patch(f"{API}/comments/{comment}", json={"content": "edited"}, headers=auth(owner))
    assert r.status_code == 200
    assert r.json()["data"]["content"] == "edited"

    r = client.patch(f"{API}/comments/{comment}", json={"content": ""}, headers=auth(owner))
    assert r.status_code == 400


def test_delete_comment_removes_its_likes(client, auth, make_user, make_video, make_comment, db_session):
    from vidtube.models import Comment, Like

    owner = make_user()
    fan = make_user()
    video = make_video(owner)
    comment = make_comment(video, owner)
    client.post(f"{API}/likes/toggle/comment/{comment}", headers=auth(fan))

    r = client.delete(f"{API}/comments/{comment}", headers=auth(owner))
    assert r.status_code == 200
    assert r.json()["data"] == {"commentId": comment}

    assert db_session.get(Comment, comment) is None
    assert db_session.query(Like).filter(Like.comment_id == comment).count() == 0

    r = client.delete(f"{API}/comments/{comment}", headers=auth(owner))
    assert r.status_code == 404
