def test_notebook_crud_and_search(client, auth_headers):
    h = auth_headers()
    r = client.post("/notebook/", json={"title": "  Ideas ", "content": "pigeons"}, headers=h)
    assert r.status_code == 201, r.text
    entry = r.json()
    assert entry["title"] == "Ideas"
    client.post("/notebook/", json={"title": "Travel", "content": "airports"}, headers=h)

    r = client.get("/notebook/", params={"search": "PIGEON"}, headers=h)
    assert [e["title"] for e in r.json()] == ["Ideas"]

    r = client.put(f"/notebook/{entry['id']}", json={"content": "more pigeons"}, headers=h)
    assert r.json()["content"] == "more pigeons"
    assert r.json()["title"] == "Ideas"
    # most recently updated comes first
    assert client.get("/notebook/", headers=h).json()[0]["id"] == entry["id"]

    assert client.delete(f"/notebook/{entry['id']}", headers=h).status_code == 204
    assert client.get(f"/notebook/{entry['id']}", headers=h).status_code == 404


def test_notebook_requires_title(client, auth_headers):
    h = auth_headers()
    r = client.post("/notebook/", json={"title": "   "}, headers=h)
    assert r.status_code == 422
    assert "Please enter a title." in r.text


def test_notepad_save_append_clear(client, auth_headers):
    h = auth_headers()
    r = client.get("/notepad/", headers=h)
    assert r.status_code == 200
    assert r.json()["text"] == ""

    client.put("/notepad/", json={"text": "first line"}, headers=h)
    r = client.post("/notepad/append", json={"text": "second line"}, headers=h)
    assert r.json()["text"] == "first line\nsecond line"

    r = client.delete("/notepad/", headers=h)
    assert r.json()["text"] == ""
    r = client.post("/notepad/append", json={"text": "fresh"}, headers=h)
    assert r.json()["text"] == "fresh"


def test_notepad_export(client, auth_headers):
    h = auth_headers()
    r = client.post("/notepad/export", json={}, headers=h)
    assert r.status_code == 422
    assert r.json()["detail"] == "Write something first before exporting to a joke."

    client.put("/notepad/", json={"text": "  a tight five  "}, headers=h)
    r = client.post("/notepad/export", json={}, headers=h)
    assert r.status_code == 200
    assert r.json() == {"title": "", "text": "a tight five", "joke_id": None}

    r = client.post("/notepad/export", json={"title": "Tight Five"}, headers=h)
    assert r.status_code == 200
    joke_id = r.json()["joke_id"]
    joke = client.get(f"/jokes/{joke_id}", headers=h).json()
    assert joke["title"] == "Tight Five"
    assert joke["text"] == "a tight five"


def test_user_files(client, auth_headers):
    h = auth_headers()
    r = client.post("/files/", json={"file_name": "  ", "file_content": "x"}, headers=h)
    assert r.status_code == 422
    assert r.json()["detail"] == "File name is required."

    r = client.post("/files/", json={"file_name": "draft.txt", "file_content": "hello"}, headers=h)
    assert r.status_code == 201, r.text
    fid = r.json()["id"]

    r = client.put(f"/files/{fid}", json={"file_content": "hello again"}, headers=h)
    assert r.json()["file_content"] == "hello again"
    r = client.post(f"/files/{fid}/rename", json={"file_name": "final.txt"}, headers=h)
    assert r.json()["file_name"] == "final.txt"
    assert [f["file_name"] for f in client.get("/files/", headers=h).json()] == ["final.txt"]

    bob = auth_headers("bob")
    r = client.get(f"/files/{fid}", headers=bob)
    assert r.status_code == 404
    assert r.json()["detail"] == "File not found."
    r = client.delete(f"/files/{fid}", headers=bob)
    assert r.json()["detail"] == "File not found or access denied."

    assert client.delete(f"/files/{fid}", headers=h).status_code == 204
    assert client.get("/files/", headers=h).json() == []


def test_notebook_search_treats_wildcards_literally(client, auth_headers):
    h = auth_headers()
    client.post("/notebook/", json={"title": "Note", "content": "xyz"}, headers=h)
    client.post("/notebook/", json={"title": "Discount", "content": "100% real"}, headers=h)

    r = client.get("/notebook/", params={"search": "_"}, headers=h)
    assert r.json() == []
    r = client.get("/notebook/", params={"search": "%"}, headers=h)
    assert [e["title"] for e in r.json()] == ["Discount"]
