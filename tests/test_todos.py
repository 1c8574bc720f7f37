def make_project(client, caller) -> int:
    r = client.post("/api/projects", json={"name": "p"}, headers=caller.headers)
    assert r.status_code == 201
    return r.json()["id"]

def test_create_defaults_and_listing_order(client, make_user):
    a = make_user("a")
    pid = make_project(client, a)

    r = client.post(f"/api/projects/{pid}/todos", json={"title": "first"}, headers=a.headers)
    assert r.status_code == 201
    body = r.json()
    assert (body["status"], body["priority"], body["deadline"]) == ("pending", "medium", None)
    assert body["project_id"] == pid

    client.post(f"/api/projects/{pid}/todos", json={"title": "second", "priority": "high"}, headers=a.headers)

    r = client.get(f"/api/projects/{pid}/todos", headers=a.headers)
    assert [t["title"] for t in r.json()] == ["second", "first"]

def test_create_validation(client, make_user):
    a = make_user("a")
    pid = make_project(client, a)

    r = client.post(f"/api/projects/{pid}/todos", json={"title": ""}, headers=a.headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "title is required"

    r = client.post(f"/api/projects/{pid}/todos", json={"title": "x", "status": "done"}, headers=a.headers)
    assert r.status_code == 422

    r = client.post(f"/api/projects/{pid}/todos", json={"title": "x", "priority": "urgent"}, headers=a.headers)
    assert r.status_code == 422

    r = client.post(f"/api/projects/{pid}/todos", json={"title": "x", "deadline": "tomorrow"}, headers=a.headers)
    assert r.status_code == 400

def test_partial_update_and_deadline_clear(client, make_user):
    a = make_user("a")
    pid = make_project(client, a)
    created = client.post(
        f"/api/projects/{pid}/todos",
        json={"title": "t", "description": "d", "deadline": "2026-12-01T10:00:00Z"},
        headers=a.headers,
    ).json()
    tid = created["id"]
    assert created["deadline"] == "2026-12-01T10:00:00Z"

    r = client.get(f"/api/todos/{tid}", headers=a.headers)
    assert r.json()["deadline"] == "2026-12-01T10:00:00Z"

    r = client.put(f"/api/todos/{tid}", json={"status": "completed"}, headers=a.headers)
    assert r.status_code == 200
    body = r.json()
    assert (body["title"], body["description"], body["status"]) == ("t", "d", "completed")
    assert body["deadline"] is not None

    r = client.put(f"/api/todos/{tid}", json={"deadline": ""}, headers=a.headers)
    assert r.json()["deadline"] is None

def test_delete_todo(client, make_user):
    a = make_user("a")
    pid = make_project(client, a)
    tid = client.post(f"/api/projects/{pid}/todos", json={"title": "t"}, headers=a.headers).json()["id"]

    assert client.delete(f"/api/todos/{tid}", headers=a.headers).status_code == 204
    assert client.get(f"/api/todos/{tid}", headers=a.headers).status_code == 404
    assert client.get(f"/api/projects/{pid}/todos", headers=a.headers).json() == []

def test_deadline_offsets_are_returned_in_utc(client, make_user):
    a = make_user("a")
    pid = make_project(client, a)

    r = client.post(
        f"/api/projects/{pid}/todos",
        json={"title": "t", "deadline": "2026-12-01T12:00:00+02:00"},
        headers=a.headers,
    )
    assert r.status_code == 201
    assert r.json()["deadline"] == "2026-12-01T10:00:00Z"

    # naive input is taken as UTC
    r = client.put(f"/api/todos/{r.json()['id']}", json={"deadline": "2026-12-02T08:30:00"}, headers=a.headers)
    assert r.json()["deadline"] == "2026-12-02T08:30:00Z"
