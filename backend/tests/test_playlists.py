"""Playlist endpoints."""
API = "/api/v1"


def _create(client, headers, **body):
    body.setdefault("name", "Favourites")
    return client.post(f"{API}/playlists", json=body, headers=headers)


def test_create_requires_name(client, auth, make_user):
    user = make_user()
    r = _create(client, auth(user), name="   ")
    assert r.status_code == 400
    assert r.json()["message"] == "Playlist name is required"

    r = _create(client, auth(user), name="ab")
    assert r.status_code == 400

    r = _create(client, auth(user), description="Best of")
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["name"] == "Favourites"
    assert data["description"] == "Best of"
    assert data["videoCount"] == 0
    assert data["videos"] == []


def test_add_and_remove_videos(client, auth, make_user, make_video):
    user = make_user()
    first = make_video(user, title="one", thumbnail="https://cdn.example.com/one.jpg")
    second = make_video(user, title="two")
    playlist = _create(client, auth(user)).json()["data"]["id"]

    r = client.patch(f"{API}/playlists/{playlist}/add", json={"videoId": first}, headers=auth(user))
    assert r.status_code == 200
    client.patch(f"{API}/playlists/{playlist}/add", json={"video_id": second}, headers=auth(user))

    r = client.get(f"{API}/playlists/{playlist}")
    data = r.json()["data"]
    assert [v["id"] for v in data["videos"]] == [first, second]
    assert data["videoCount"] == 2
    assert data["thumbnail"] == "https://cdn.example.com/one.jpg"

    r = client.patch(f"{API}/playlists/{playlist}/add", json={"videoId": first}, headers=auth(user))
    assert r.status_code == 400
    assert r.json()["message"] == "Video already in playlist"

    r = client.patch(f"{API}/playlists/{playlist}/remove", json={"videoId": first}, headers=auth(user))
    assert [v["id"] for v in r.json()["data"]["videos"]] == [second]

    r = client.patch(f"{API}/playlists/{playlist}/remove", json={"videoId": first}, headers=auth(user))
    assert r.status_code == 400
    assert r.json()["message"] == "Video not found in playlist"

    r = client.patch(f"{API}/playlists/{playlist}/add", json={"videoId": "nope"}, headers=auth(user))
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid Video ID"


def test_update_is_partial_and_can_clear_description(client, auth, make_user):
    user = make_user()
    playlist = _create(client, auth(user), description="old").json()["data"]["id"]

    r = client.patch(f"{API}/playlists/{playlist}", json={"name": "Renamed"}, headers=auth(user))
    assert r.json()["data"]["name"] == "Renamed"
    assert r.json()["data"]["description"] == "old"

    r = client.patch(f"{API}/playlists/{playlist}", json={"description": ""}, headers=auth(user))
    assert r.json()["data"]["name"] == "Renamed"
    assert r.json()["data"]["description"] == ""

    r = client.patch(f"{API}/playlists/{playlist}", json={"name": ""}, headers=auth(user))
    assert r.status_code == 400


def test_non_owner_cannot_modify(client, auth, make_user, make_video):
    owner = make_user()
    other = make_user()
    video = make_video(other)
    playlist = _create(client, auth(owner)).json()["data"]["id"]

    r = client.patch(f"{API}/playlists/{playlist}/add", json={"videoId": video}, headers=auth(other))
    assert r.status_code == 403
    r = client.patch(f"{API}/playlists/{playlist}", json={"name": "Mine now"}, headers=auth(other))
    assert r.status_code == 403
    r = client.delete(f"{API}/playlists/{playlist}", headers=auth(other))
    assert r.status_code == 403

    r = client.delete(f"{API}/playlists/{playlist}", headers=auth(owner))
    assert r.status_code == 200
    assert r.json()["data"] == {"playlistId": playlist}
    assert client.get(f"{API}/playlists/{playlist}").status_code == 404


def test_private_playlists_hidden_from_others(client, auth, make_user):
    owner = make_user()
    other = make_user()
    _create(client, auth(owner), name="Public list")
    private = _create(client, auth(owner), name="Secret list", isPublic=False).json()["data"]["id"]

    r = client.get(f"{API}/playlists/user/{owner}", headers=auth(other))
    assert [p["name"] for p in r.json()["data"]] == ["Public list"]

    r = client.get(f"{API}/playlists/user/{owner}", headers=auth(owner))
    assert len(r.json()["data"]) == 2

    assert client.get(f"{API}/playlists/{private}", headers=auth(other)).status_code == 404
    assert client.get(f"{API}/playlists/{private}", headers=auth(owner)).status_code == 200
