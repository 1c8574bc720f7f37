def create_project(client, caller, name: str = "p") -> int:
    r = client.post("/api/projects", json={"name": name}, headers=caller.headers)
    assert r.status_code == 201, r.text
    return r.json()["id"]

def add_member(client, caller, project_id: int, username: str, role: str | None = None):
    payload = {"username": username}
    if role is not None:
        payload["role"] = role
    return client.post(f"/api/projects/{project_id}/members", json=payload, headers=caller.headers)

def role_of(client, caller, project_id: int):
    return client.get(f"/api/projects/{project_id}/role", headers=caller.headers)

def test_editor_grant_lets_bob_edit_todos_but_not_delete_project(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    pid = create_project(client, alice)

    r = client.put(f"/api/projects/{pid}", json={"name": "x"}, headers=bob.headers)
    assert r.status_code == 403

    r = add_member(client, alice, pid, bob.username, "editor")
    assert r.status_code == 201, r.text
    assert r.json() == {"project_id": pid, "user_id": bob.id, "username": bob.username, "role": "editor"}

    r = client.post(f"/api/projects/{pid}/todos", json={"title": "t"}, headers=alice.headers)
    tid = r.json()["id"]

    # bob has no direct relation to the todo; access flows from the project
    r = client.put(f"/api/todos/{tid}", json={"title": "t2"}, headers=bob.headers)
    assert r.status_code == 200
    assert r.json()["title"] == "t2"

    r = client.delete(f"/api/projects/{pid}", headers=bob.headers)
    assert r.status_code == 403

def test_member_role_defaults_to_viewer_and_re_add_updates(client, make_user):
    alice = make_user("alice")
    carol = make_user("carol")
    pid = create_project(client, alice)

    r = add_member(client, alice, pid, carol.username)
    assert r.status_code == 201
    assert r.json()["role"] == "viewer"

    r = client.post(f"/api/projects/{pid}/todos", json={"title": "nope"}, headers=carol.headers)
    assert r.status_code == 403

    r = add_member(client, alice, pid, carol.username, "editor")
    assert r.status_code == 201
    assert role_of(client, carol, pid).json() == {"role": "editor"}

    r = client.get(f"/api/projects/{pid}/members", headers=alice.headers)
    assert [m["role"] for m in r.json()] == ["editor"]

def test_null_or_empty_role_means_viewer(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    pid = create_project(client, alice)

    r = client.post(
        f"/api/projects/{pid}/members", json={"username": bob.username, "role": None}, headers=alice.headers
    )
    assert r.status_code == 201, r.text
    assert r.json()["role"] == "viewer"

    r = add_member(client, alice, pid, carol.username, "")
    assert r.status_code == 201, r.text
    assert role_of(client, carol, pid).json() == {"role": "viewer"}

def test_owner_cannot_add_themselves(client, make_user):
    alice = make_user("alice")
    pid = create_project(client, alice)

    r = add_member(client, alice, pid, alice.username, "editor")
    assert r.status_code == 400
    assert r.json()["detail"] == "you are already the owner"
    assert client.get(f"/api/projects/{pid}/members", headers=alice.headers).json() == []

def test_owner_role_is_not_assignable(client, make_user):
    alice = make_user("alice")
    dave = make_user("dave")
    pid = create_project(client, alice)

    for bad in ("owner", "admin", "none"):
        r = add_member(client, alice, pid, dave.username, bad)
        assert r.status_code == 400, r.text
        assert r.json()["detail"] == "role must be 'viewer' or 'editor'"

    assert role_of(client, dave, pid).status_code == 403

def test_add_unknown_user(client, make_user):
    alice = make_user("alice")
    pid = create_project(client, alice)

    r = add_member(client, alice, pid, "ghost_nobody", "viewer")
    assert r.status_code == 404
    assert r.json()["detail"] == "user not found"

    # the role is checked before the username lookup
    r = add_member(client, alice, pid, "ghost_nobody", "owner")
    assert r.status_code == 400
    assert r.json()["detail"] == "role must be 'viewer' or 'editor'"

def test_remove_member_is_idempotent(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    pid = create_project(client, alice)
    add_member(client, alice, pid, bob.username, "viewer")

    for _ in range(2):
        r = client.delete(f"/api/projects/{pid}/members/{bob.id}", headers=alice.headers)
        assert r.status_code == 204

    assert role_of(client, bob, pid).status_code == 403

def test_not_found_before_forbidden(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    pid = create_project(client, alice)

    # existing project, no access
    assert client.get(f"/api/projects/{pid}", headers=bob.headers).status_code == 403
    # missing project
    r = client.get(f"/api/projects/{pid + 1000}", headers=bob.headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "project not found"

    r = client.put("/api/todos/424242", json={"title": "x"}, headers=alice.headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "todo not found"

    r = client.post(f"/api/projects/{pid + 1000}/members", json={"username": bob.username}, headers=alice.headers)
    assert r.status_code == 404

def test_deleting_project_removes_todos_and_memberships(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    pid = create_project(client, alice)
    add_member(client, alice, pid, bob.username, "editor")
    tid = client.post(f"/api/projects/{pid}/todos", json={"title": "t"}, headers=bob.headers).json()["id"]

    assert client.delete(f"/api/projects/{pid}", headers=alice.headers).status_code == 204

    assert client.get(f"/api/projects/{pid}", headers=alice.headers).status_code == 404
    assert client.get(f"/api/todos/{tid}", headers=bob.headers).status_code == 404
    assert client.get("/api/projects", headers=bob.headers).json() == []
