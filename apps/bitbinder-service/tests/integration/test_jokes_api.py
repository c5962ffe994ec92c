def test_joke_crud_flow(client, auth_headers):
    h = auth_headers()
    r = client.post("/jokes/", json={"title": "  Airport  ", "text": "Security line bit"}, headers=h)
    assert r.status_code == 201, r.text
    joke = r.json()
    assert joke["title"] == "Airport"
    assert joke["folder_id"] is None
    assert joke["created_at"] == joke["updated_at"]

    r = client.put(f"/jokes/{joke['id']}", json={"text": "New text"}, headers=h)
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "Airport"
    assert r.json()["text"] == "New text"

    r = client.get(f"/jokes/{joke['id']}", headers=h)
    assert r.status_code == 200

    r = client.delete(f"/jokes/{joke['id']}", headers=h)
    assert r.status_code == 204
    assert client.get(f"/jokes/{joke['id']}", headers=h).status_code == 404
    assert client.put(f"/jokes/{joke['id']}", json={"text": "x"}, headers=h).status_code == 404


def test_joke_title_validation(client, auth_headers):
    h = auth_headers()
    for title in ("", "   ", "x" * 31):
        r = client.post("/jokes/", json={"title": title}, headers=h)
        assert r.status_code == 422, title
        assert "Title must be 1-30 characters" in r.text
    assert client.post("/jokes/", json={"title": "x" * 30}, headers=h).status_code == 201


def test_list_search_folder_and_sort(client, auth_headers):
    h = auth_headers()
    folder = client.post("/folders/", json={"name": "Work"}, headers=h).json()
    client.post("/jokes/", json={"title": "Boss", "text": "meeting", "folder_id": folder["id"]}, headers=h)
    client.post("/jokes/", json={"title": "apple", "text": "fruit"}, headers=h)

    r = client.get("/jokes/", params={"search": "MEET"}, headers=h)
    assert [j["title"] for j in r.json()] == ["Boss"]
    r = client.get("/jokes/", params={"folder_id": folder["id"]}, headers=h)
    assert [j["title"] for j in r.json()] == ["Boss"]
    r = client.get("/jokes/", params={"sort": "title"}, headers=h)
    assert [j["title"] for j in r.json()] == ["apple", "Boss"]
    assert client.get("/jokes/", params={"sort": "random"}, headers=h).status_code == 422


def test_jokes_are_scoped_per_user(client, auth_headers):
    alice = auth_headers("alice")
    bob = auth_headers("bob")
    joke = client.post("/jokes/", json={"title": "Mine"}, headers=alice).json()
    assert client.get(f"/jokes/{joke['id']}", headers=bob).status_code == 404
    assert client.delete(f"/jokes/{joke['id']}", headers=bob).status_code == 404
    assert client.get("/jokes/", headers=bob).json() == []


def test_unknown_folder_rejected(client, auth_headers):
    h = auth_headers()
    r = client.post("/jokes/", json={"title": "x", "folder_id": "00000000-0000-0000-0000-000000000001"}, headers=h)
    assert r.status_code == 404


def test_folders_flow(client, auth_headers):
    h = auth_headers()
    r = client.post("/folders/", json={"name": "  Travel "}, headers=h)
    assert r.status_code == 201
    folder = r.json()
    assert folder["name"] == "Travel"

    r = client.post("/folders/", json={"name": "travel"}, headers=h)
    assert r.status_code == 409
    assert r.json()["detail"] == "Enter a unique folder name."
    r = client.post("/folders/", json={"name": "  "}, headers=h)
    assert r.status_code == 422

    joke = client.post("/jokes/", json={"title": "Hotel", "folder_id": folder["id"]}, headers=h).json()
    r = client.get("/folders/", headers=h)
    assert r.json()[0]["joke_count"] == 1

    assert client.delete(f"/folders/{folder['id']}", headers=h).status_code == 204
    assert client.get(f"/jokes/{joke['id']}", headers=h).json()["folder_id"] is None
    assert client.get("/folders/", headers=h).json() == []


def test_search_treats_wildcards_literally(client, auth_headers):
    h = auth_headers()
    client.post("/jokes/", json={"title": "Sale", "text": "50% off everything"}, headers=h)
    client.post("/jokes/", json={"title": "Plain", "text": "nothing special here"}, headers=h)

    def titles(term):
        r = client.get("/jokes/", params={"search": term}, headers=h)
        assert r.status_code == 200, r.text
        return sorted(j["title"] for j in r.json())

    assert titles("_") == []
    assert titles("%") == ["Sale"]
    assert titles("50%") == ["Sale"]
    assert titles("\\") == []
