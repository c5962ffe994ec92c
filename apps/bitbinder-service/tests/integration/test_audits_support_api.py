def test_health_and_build_info(client, monkeypatch):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "bitbinder-service"}

    monkeypatch.setenv("BUILD_SHA", "abc123")
    r = client.get("/build-info")
    assert r.json()["build_sha"] == "abc123"
    assert r.json()["service_name"] == "bitbinder-service"


def test_deletes_and_logins_are_audited(client, auth_headers):
    h = auth_headers()
    joke = client.post("/jokes/", json={"title": "Doomed"}, headers=h).json()
    client.delete(f"/jokes/{joke['id']}", headers=h)

    r = client.get("/audits/", headers=h)
    assert r.status_code == 200, r.text
    actions = [a["action_type"] for a in r.json()]
    assert actions[0] == "joke_delete"
    assert "user_login" in actions
    assert "user_register" in actions

    r = client.get("/audits/", params={"action_type": "joke_delete"}, headers=h)
    logs = r.json()
    assert len(logs) == 1
    assert logs[0]["target_id"] == joke["id"]
    assert logs[0]["metadata"] == {"name": "Doomed"}


def test_audits_scoped_to_user(client, auth_headers):
    auth_headers("alice")
    bob = auth_headers("bob")
    actions = [a["action_type"] for a in client.get("/audits/", headers=bob).json()]
    assert sorted(actions) == ["user_login", "user_register"]
