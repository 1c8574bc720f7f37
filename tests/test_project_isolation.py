def test_projects_list_shows_owned_and_shared_only(client, make_user):
    a = make_user("a")
    b = make_user("b")

    r = client.post("/api/projects", json={"name": "a-private"}, headers=a.headers)
    assert r.status_code == 201
    r = client.post("/api/projects", json={"name": "a-shared", "description": "hi"}, headers=a.headers)
    shared = r.json()
    assert shared["owner_name"] == a.username

    r = client.post(f"/api/projects/{shared['id']}/members", json={"username": b.username}, headers=a.headers)
    assert r.status_code == 201

    r = client.get("/api/projects", headers=b.headers)
    assert [p["name"] for p in r.json()] == ["a-shared"]
    assert r.json()[0]["owner_name"] == a.username

    r = client.get("/api/projects", headers=a.headers)
    assert [p["name"] for p in r.json()] == ["a-shared", "a-private"]

def test_outsider_cannot_touch_project(client, make_user):
    a = make_user("a")
    b = make_user("b")
    pid = client.post("/api/projects", json={"name": "p1"}, headers=a.headers).json()["id"]

    assert client.get("/api/projects", headers=b.headers).json() == []
    assert client.get(f"/api/projects/{pid}/todos", headers=b.headers).status_code == 403

    r = client.put(f"/api/projects/{pid}", json={"name": "hacked"}, headers=b.headers)
    assert r.status_code == 403

    r = client.get(f"/api/projects/{pid}", headers=a.headers)
    assert r.json()["name"] == "p1"

def test_project_validation_and_update(client, make_user):
    a = make_user("a")
    assert client.post("/api/projects", json={"name": "  "}, headers=a.headers).status_code == 400

    pid = client.post("/api/projects", json={"name": "keep", "description": "old"}, headers=a.headers).json()["id"]

    # empty name keeps the old one
    r = client.put(f"/api/projects/{pid}", json={"name": "", "description": "new"}, headers=a.headers)
    assert r.status_code == 200
    assert (r.json()["name"], r.json()["description"]) == ("keep", "new")

def test_project_timestamps_carry_utc_offset(client, make_user):
    a = make_user("a")
    created = client.post("/api/projects", json={"name": "p"}, headers=a.headers).json()
    assert created["created_at"].endswith("Z")
    assert created["updated_at"].endswith("Z")

    fetched = client.get(f"/api/projects/{created['id']}", headers=a.headers).json()
    assert fetched["created_at"] == created["created_at"]
    assert fetched["updated_at"].endswith("Z")
