def test_add_list_and_folders(client, auth_headers):
    h = auth_headers()
    r = client.post("/jokebook/", json={"text": "  pun  "}, headers=h)
    assert r.status_code == 201, r.text
    assert r.json()["folder"] == "bitbuddy"
    assert r.json()["text"] == "pun"
    client.post("/jokebook/", json={"text": "flight bit", "folder": "Travel"}, headers=h)

    r = client.post("/jokebook/", json={"text": "   "}, headers=h)
    assert r.status_code == 422
    assert r.json()["detail"] == "Write a joke first!"

    assert client.get("/jokebook/folders", headers=h).json() == ["Travel", "bitbuddy"]
    r = client.get("/jokebook/", params={"folder": "Travel"}, headers=h)
    assert [e["text"] for e in r.json()] == ["flight bit"]
    assert len(client.get("/jokebook/", headers=h).json()) == 2


def test_folders_always_include_default(client, auth_headers):
    h = auth_headers()
    assert client.get("/jokebook/folders", headers=h).json() == ["bitbuddy"]


def test_edit_move_delete(client, auth_headers):
    h = auth_headers()
    entry = client.post("/jokebook/", json={"text": "draft"}, headers=h).json()

    r = client.put(f"/jokebook/{entry['id']}", json={"text": "final"}, headers=h)
    assert r.json()["text"] == "final"
    r = client.put(f"/jokebook/{entry['id']}", json={"text": " "}, headers=h)
    assert r.status_code == 422

    r = client.post(f"/jokebook/{entry['id']}/move", json={"folder": "Work"}, headers=h)
    assert r.json()["folder"] == "Work"

    bob = auth_headers("bob")
    r = client.delete(f"/jokebook/{entry['id']}", headers=bob)
    assert r.status_code == 404
    assert r.json()["detail"] == "Joke not found or access denied."
    assert client.delete(f"/jokebook/{entry['id']}", headers=h).status_code == 204


def test_parse_command(client, auth_headers):
    h = auth_headers()
    r = client.post("/jokebook/parse-command", json={"utterance": "Save that to the work folder in my jokebook"}, headers=h)
    assert r.json() == {"matched": True, "folder": "work"}
    r = client.post("/jokebook/parse-command", json={"utterance": "save this to my joke book"}, headers=h)
    assert r.json() == {"matched": True, "folder": "bitbuddy"}
    r = client.post("/jokebook/parse-command", json={"utterance": "what's the weather"}, headers=h)
    assert r.json() == {"matched": False, "folder": None}


def test_save_to_folder(client, auth_headers):
    h = auth_headers()
    r = client.post("/jokebook/save-to-folder", json={"text": "zinger", "folder": "  "}, headers=h)
    assert r.json() == {"success": True, "message": 'Joke saved to "bitbuddy" folder!', "folder": "bitbuddy"}
    r = client.post("/jokebook/save-to-folder", json={"text": ""}, headers=h)
    assert r.json()["success"] is False
    assert r.json()["message"] == "Write a joke first!"
