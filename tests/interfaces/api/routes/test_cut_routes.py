import pytest

from app.domain.entities import Role


@pytest.fixture()
def studio(client, make_user, auth_headers):
    """A project with two vibes, a cut in the first one and a second project."""

    make_user("Admin", role=Role.ADMIN, email="admin@example.com")
    headers = auth_headers("admin@example.com")

    project = client.post("/api/projects/", json={"name": "First Album"}, headers=headers).json()
    other = client.post("/api/projects/", json={"name": "Side Project"}, headers=headers).json()
    ballads = client.post(
        f"/api/vibes/project/{project['id']}", json={"name": "Ballads"}, headers=headers
    ).json()
    rockers = client.post(
        f"/api/vibes/project/{project['id']}", json={"name": "Rockers"}, headers=headers
    ).json()
    elsewhere = client.post(
        f"/api/vibes/project/{other['id']}", json={"name": "Elsewhere"}, headers=headers
    ).json()
    cut = client.post(
        f"/api/cuts/vibe/{ballads['id']}", json={"name": "Take 1"}, headers=headers
    ).json()
    return {
        "headers": headers,
        "project": project,
        "ballads": ballads,
        "rockers": rockers,
        "elsewhere": elsewhere,
        "cut": cut,
    }


def _latest(client, headers, activity_type):
    feed = client.get("/api/activities/", params={"type": activity_type}, headers=headers)
    return feed.json()["activities"][0]


def test_cut_creation_is_recorded(client, studio):
    activity = _latest(client, studio["headers"], "cut_created")

    assert activity["metadata"] == {
        "cutName": "Take 1",
        "vibeName": "Ballads",
        "projectName": "First Album",
    }
    project_id, vibe_id, cut_id = studio["project"]["id"], studio["ballads"]["id"], studio["cut"]["id"]
    assert activity["resourceLink"] == f"/projects/{project_id}/vibes/{vibe_id}/cuts/{cut_id}"


def test_move_cut_to_another_vibe(client, studio):
    response = client.patch(
        f"/api/cuts/{studio['cut']['id']}/move",
        json={"targetVibeId": studio["rockers"]["id"]},
        headers=studio["headers"],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["vibeId"] == studio["rockers"]["id"]
    assert body["vibe"] == {"id": studio["rockers"]["id"], "name": "Rockers"}

    activity = _latest(client, studio["headers"], "cut_moved")
    assert activity["metadata"] == {
        "cutName": "Take 1",
        "fromVibeName": "Ballads",
        "toVibeName": "Rockers",
        "projectName": "First Album",
    }
    detail = client.get(f"/api/vibes/{studio['rockers']['id']}", headers=studio["headers"])
    assert [cut["name"] for cut in detail.json()["cuts"]] == ["Take 1"]


@pytest.mark.parametrize(
    ("target", "message"),
    [
        (None, "Target vibe ID is required"),
        ("ballads", "Cut is already in this vibe"),
        ("elsewhere", "Cannot move cuts between different projects"),
    ],
)
def test_invalid_moves_are_rejected(client, studio, target, message):
    payload = {"targetVibeId": studio[target]["id"]} if target else {}

    response = client.patch(
        f"/api/cuts/{studio['cut']['id']}/move", json=payload, headers=studio["headers"]
    )

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == message


def test_reply_inherits_the_audio_file(client, studio):
    url = f"/api/cuts/{studio['cut']['id']}/comments"
    parent = client.post(
        url,
        json={"content": "Love the bridge", "timestamp": 42.5, "audioFileId": "mix-1"},
        headers=studio["headers"],
    ).json()

    reply = client.post(
        url,
        json={"content": "Agreed", "parentId": parent["id"], "timestamp": 3},
        headers=studio["headers"],
    )

    assert reply.status_code == 201
    body = reply.json()
    assert body["isReply"] is True
    assert body["audioFileId"] == "mix-1"
    assert body["timestamp"] is None
    assert parent["isReply"] is False

    activity = _latest(client, studio["headers"], "comment_added")
    assert activity["metadata"]["isReply"] is True
    assert activity["metadata"]["commentId"] == body["id"]

    comments = client.get(url, headers=studio["headers"]).json()
    assert [c["id"] for c in comments] == [parent["id"], body["id"]]


def test_reply_to_missing_parent_is_not_found(client, studio):
    response = client.post(
        f"/api/cuts/{studio['cut']['id']}/comments",
        json={"content": "Hello?", "parentId": 9999},
        headers=studio["headers"],
    )

    assert response.status_code == 404


def test_lyrics_are_replaced_and_recorded(client, studio):
    url = f"/api/cuts/{studio['cut']['id']}/lyrics"
    lyrics = [
        {
            "audioFileId": "mix-1",
            "lines": [{"timestamp": 0, "text": "First line"}, {"timestamp": 4.5, "text": "Second"}],
        }
    ]

    response = client.put(url, json={"lyrics": lyrics}, headers=studio["headers"])

    assert response.status_code == 200
    assert response.json() == [
        {
            "audioFileId": "mix-1",
            "lines": [
                {"timestamp": 0.0, "text": "First line"},
                {"timestamp": 4.5, "text": "Second"},
            ],
        }
    ]
    assert client.get(url, headers=studio["headers"]).json() == response.json()
    assert _latest(client, studio["headers"], "lyrics_updated")["metadata"]["cutName"] == "Take 1"


@pytest.mark.parametrize(
    "line",
    [
        {"timestamp": "0", "text": "quoted timestamp"},
        {"timestamp": -1, "text": "negative"},
        {"timestamp": 1, "text": 5},
        {"text": "missing timestamp"},
    ],
)
def test_malformed_lyrics_are_rejected(client, studio, line):
    response = client.put(
        f"/api/cuts/{studio['cut']['id']}/lyrics",
        json={"lyrics": [{"audioFileId": "mix-1", "lines": [line]}]},
        headers=studio["headers"],
    )

    assert response.status_code == 422
