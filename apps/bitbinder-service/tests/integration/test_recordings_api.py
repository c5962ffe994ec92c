import re
import uuid
from datetime import datetime, timezone

from bitbinder.db import models


def _set_list(client, headers, name="Club Set"):
    joke_id = client.post("/jokes/", json={"title": "Bit"}, headers=headers).json()["id"]
    r = client.post("/set-lists/", json={"name": name, "joke_order": [joke_id]}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["id"]


def _upload(client, headers, set_list_id, data=b"audio-bytes", mime="audio/ogg", duration=None):
    params = {"set_list_id": set_list_id}
    if duration is not None:
        params["duration_sec"] = duration
    return client.post(
        "/recordings/",
        params=params,
        content=data,
        headers={**headers, "Content-Type": mime},
    )


def test_save_and_download(client, auth_headers):
    h = auth_headers()
    sid = _set_list(client, h)
    r = _upload(client, h, sid, duration=65.7)
    assert r.status_code == 201, r.text
    rec = r.json()
    assert rec["duration_sec"] == 65
    assert rec["duration_display"] == "1:05"
    assert rec["set_list_name"] == "Club Set"
    assert rec["size_bytes"] == len(b"audio-bytes")
    assert re.fullmatch(r"Club Set - \d{4}-\d{2}-\d{2} \d{2}-\d{2}\.ogg", rec["file_name"])

    r = client.get(f"/recordings/{rec['id']}/audio", headers=h)
    assert r.status_code == 200
    assert r.content == b"audio-bytes"
    assert r.headers["content-type"].startswith("audio/ogg")

    # saving marks the set list performed
    assert client.get(f"/set-lists/{sid}", headers=h).json()["last_performed_at"] is not None


def test_empty_upload_rejected(client, auth_headers):
    h = auth_headers()
    sid = _set_list(client, h)
    r = _upload(client, h, sid, data=b"")
    assert r.status_code == 422
    assert r.json()["detail"] == "Recording is empty."


def test_unknown_set_list(client, auth_headers):
    h = auth_headers()
    r = _upload(client, h, "00000000-0000-0000-0000-000000000009")
    assert r.status_code == 404


def test_list_grouped_notes_delete(client, auth_headers):
    h = auth_headers()
    sid = _set_list(client, h)
    first = _upload(client, h, sid, duration=10).json()
    second = _upload(client, h, sid, duration=20).json()

    r = client.get("/recordings/", params={"set_list_id": sid}, headers=h)
    assert {x["id"] for x in r.json()} == {first["id"], second["id"]}

    groups = client.get("/recordings/grouped", headers=h).json()
    assert len(groups) == 1
    assert len(groups[0]["recordings"]) == 2

    r = client.patch(f"/recordings/{first['id']}", json={"notes": "crowd was cold"}, headers=h)
    assert r.json()["notes"] == "crowd was cold"

    assert client.delete(f"/recordings/{first['id']}", headers=h).status_code == 204
    assert client.get(f"/recordings/{first['id']}", headers=h).status_code == 404
    assert client.get(f"/recordings/{first['id']}/audio", headers=h).status_code == 404
    assert len(client.get("/recordings/", headers=h).json()) == 1


def test_recording_survives_set_list_delete(client, auth_headers):
    h = auth_headers()
    sid = _set_list(client, h, name="Old Set")
    rec = _upload(client, h, sid, duration=5).json()
    client.delete(f"/set-lists/{sid}", headers=h)
    r = client.get(f"/recordings/{rec['id']}", headers=h)
    assert r.status_code == 200
    assert r.json()["set_list_name"] == "Old Set"


def test_recordings_scoped_per_user(client, auth_headers):
    alice = auth_headers("alice")
    bob = auth_headers("bob")
    rec = _upload(client, alice, _set_list(client, alice), duration=5).json()
    assert client.get(f"/recordings/{rec['id']}", headers=bob).status_code == 404
    assert client.get(f"/recordings/{rec['id']}/audio", headers=bob).status_code == 404
    assert client.delete(f"/recordings/{rec['id']}", headers=bob).status_code == 404


def test_live_session_flow(client, auth_headers):
    h = auth_headers()
    sid = _set_list(client, h)
    assert client.get("/recordings/sessions/current", headers=h).status_code == 404

    r = client.post("/recordings/sessions", json={"set_list_id": sid}, headers=h)
    assert r.status_code == 201, r.text
    assert r.json()["is_recording"] is True
    assert r.json()["elapsed_display"] == "00:00"

    r = client.post("/recordings/sessions", json={"set_list_id": sid}, headers=h)
    assert r.status_code == 409
    assert r.json()["detail"] == "A recording is already in progress."

    r = client.post("/recordings/sessions/current/pause", headers=h)
    assert r.json()["is_paused"] is True
    r = client.post("/recordings/sessions/current/resume", headers=h)
    assert r.json()["is_paused"] is False

    # stopping by upload clears the session
    r = _upload(client, h, sid)
    assert r.status_code == 201, r.text
    assert r.json()["duration_sec"] >= 0
    assert client.get("/recordings/sessions/current", headers=h).status_code == 404


def test_cancel_session(client, auth_headers):
    h = auth_headers()
    sid = _set_list(client, h)
    client.post("/recordings/sessions", json={"set_list_id": sid}, headers=h)
    assert client.delete("/recordings/sessions/current", headers=h).status_code == 204
    assert client.delete("/recordings/sessions/current", headers=h).status_code == 404


def test_non_finite_duration_rejected_and_session_kept(client, auth_headers):
    h = auth_headers()
    sid = _set_list(client, h)
    client.post("/recordings/sessions", json={"set_list_id": sid}, headers=h)

    for bad in ("nan", "inf", "-1"):
        r = _upload(client, h, sid, duration=bad)
        assert r.status_code == 422, bad

    assert client.get("/recordings/sessions/current", headers=h).status_code == 200
    assert client.get("/recordings/", headers=h).json() == []


def _set_created_at(db, recording_id, when):
    db.query(models.Recording).filter(models.Recording.id == uuid.UUID(recording_id)).update(
        {models.Recording.created_at: when}
    )
    db.commit()


def test_grouped_by_date_newest_first(client, auth_headers, db_session):
    h = auth_headers()
    sid = _set_list(client, h)
    early = _upload(client, h, sid, duration=1).json()
    late = _upload(client, h, sid, duration=2).json()
    newest = _upload(client, h, sid, duration=3).json()
    _set_created_at(db_session, early["id"], datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc))
    _set_created_at(db_session, late["id"], datetime(2026, 1, 5, 20, 0, tzinfo=timezone.utc))
    _set_created_at(db_session, newest["id"], datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))

    listed = client.get("/recordings/", headers=h).json()
    assert [r["id"] for r in listed] == [newest["id"], late["id"], early["id"]]

    groups = client.get("/recordings/grouped", headers=h).json()
    assert [g["date"] for g in groups] == ["2026-03-01", "2026-01-05"]
    assert [r["id"] for r in groups[1]["recordings"]] == [late["id"], early["id"]]
