from __future__ import annotations


def _team(client, register, create_project):
    owner_id, owner_headers = register("owner@example.com", name="Owner")
    dev_id, dev_headers = register("dev@example.com", name="Dev")
    _, outsider_headers = register("outsider@example.com", name="Outsider")
    pid = create_project(owner_headers, title="Team")["id"]
    r = client.post(f"/api/projects/{pid}/join", headers=dev_headers)
    assert r.status_code == 201
    return pid, (owner_id, owner_headers), (dev_id, dev_headers), outsider_headers


def test_task_lifecycle(client, register, create_project) -> None:
    pid, (owner_id, owner_headers), (dev_id, dev_headers), outsider_headers = _team(client, register, create_project)

    r = client.post(f"/api/projects/{pid}/tasks", json={"title": "Nope"}, headers=outsider_headers)
    assert r.status_code == 403

    r = client.post(f"/api/projects/{pid}/tasks", json={"title": ""}, headers=dev_headers)
    assert r.status_code == 422

    r = client.post(
        f"/api/projects/{pid}/tasks",
        json={"title": "Write scorer", "assigned_to_id": owner_id},
        headers=dev_headers,
    )
    assert r.status_code == 201
    task = r.json()
    assert task["status"] == "todo"
    assert task["created_by"]["id"] == dev_id
    assert task["assigned_to"]["id"] == owner_id

    r = client.patch(
        f"/api/projects/{pid}/tasks/{task['id']}",
        json={"status": "review", "assigned_to_id": None},
        headers=owner_headers,
    )
    assert r.status_code == 200
    assert r.json()["status"] == "review"
    assert r.json()["assigned_to"] is None

    r = client.patch(f"/api/projects/{pid}/tasks/{task['id']}", json={"status": "done"}, headers=owner_headers)
    assert r.status_code == 422

    r = client.get(f"/api/projects/{pid}/tasks")
    assert [t["title"] for t in r.json()] == ["Write scorer"]

    r = client.get(f"/api/projects/{pid}/tasks/9999")
    assert r.status_code == 404

    owner_task = client.post(f"/api/projects/{pid}/tasks", json={"title": "Owner task"}, headers=owner_headers).json()
    r = client.delete(f"/api/projects/{pid}/tasks/{owner_task['id']}", headers=dev_headers)
    assert r.status_code == 403

    # Task creators may delete their own tasks.
    r = client.delete(f"/api/projects/{pid}/tasks/{task['id']}", headers=dev_headers)
    assert r.status_code == 200
    r = client.delete(f"/api/projects/{pid}/tasks/{owner_task['id']}", headers=owner_headers)
    assert r.status_code == 200
    assert client.get(f"/api/projects/{pid}/tasks").json() == []


def test_messages_are_member_only_and_marked_read(client, register, create_project) -> None:
    pid, (owner_id, owner_headers), (dev_id, dev_headers), outsider_headers = _team(client, register, create_project)

    r = client.post(f"/api/projects/{pid}/messages", json={"content": "hi"}, headers=outsider_headers)
    assert r.status_code == 403
    r = client.post(f"/api/projects/{pid}/messages", json={"content": "   "}, headers=owner_headers)
    assert r.status_code == 400

    r = client.post(f"/api/projects/{pid}/messages", json={"content": "Hello team"}, headers=owner_headers)
    assert r.status_code == 201
    assert r.json()["read_by"] == [owner_id]

    r = client.get(f"/api/projects/{pid}/messages", headers=dev_headers)
    assert r.status_code == 200
    body = r.json()
    assert [m["content"] for m in body["messages"]] == ["Hello team"]
    assert sorted(body["messages"][0]["read_by"]) == sorted([owner_id, dev_id])
    assert body["has_more"] is False

    r = client.get(f"/api/projects/{pid}/messages", headers=outsider_headers)
    assert r.status_code == 403


def test_messages_pagination_with_before(client, register, create_project) -> None:
    pid, (_, owner_headers), (_, dev_headers), _ = _team(client, register, create_project)
    ids = []
    for i in range(5):
        r = client.post(f"/api/projects/{pid}/messages", json={"content": f"m{i}"}, headers=owner_headers)
        ids.append(r.json()["id"])

    r = client.get(f"/api/projects/{pid}/messages", params={"limit": 2}, headers=dev_headers)
    body = r.json()
    assert [m["content"] for m in body["messages"]] == ["m3", "m4"]
    assert body["has_more"] is True

    r = client.get(
        f"/api/projects/{pid}/messages",
        params={"limit": 2, "before": body["messages"][0]["id"]},
        headers=dev_headers,
    )
    assert [m["content"] for m in r.json()["messages"]] == ["m1", "m2"]
