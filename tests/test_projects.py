from __future__ import annotations

import pytest
from fastapi import HTTPException

from devmatch.database import SessionLocal
from devmatch.models.project import Project, ProjectMember
from devmatch.models.task import Task
from devmatch.services import project_service


def test_create_project_makes_owner_a_member(client, register, create_project) -> None:
    owner_id, headers = register("owner@example.com", name="Owner")
    project = create_project(headers, title="DevMatch", required_skills=["Python", " FastAPI ", "Python"])

    assert project["owner"]["id"] == owner_id
    assert project["status"] == "planning"
    assert project["required_skills"] == ["Python", "FastAPI"]
    assert [(m["user"]["id"], m["role"]) for m in project["members"]] == [(owner_id, "owner")]

    r = client.get(f"/api/projects/{project['id']}")
    assert r.status_code == 200
    assert r.json()["title"] == "DevMatch"


def test_create_project_requires_auth_and_fields(client, register) -> None:
    r = client.post("/api/projects", json={"title": "x", "description": "y"})
    assert r.status_code == 401

    _, headers = register("owner@example.com")
    r = client.post("/api/projects", json={"title": "  ", "description": "y"}, headers=headers)
    assert r.status_code == 422
    r = client.post("/api/projects", json={"title": "x", "description": "y", "status": "archived"}, headers=headers)
    assert r.status_code == 422


def test_list_projects_filters_and_paginates(client, register, create_project) -> None:
    _, headers = register("owner@example.com")
    create_project(headers, title="Python API", required_skills=["Python"])
    create_project(headers, title="React app", required_skills=["React"], status="in-progress")
    create_project(headers, title="Data pipeline", required_skills=["Python", "SQL"])

    r = client.get("/api/projects")
    assert r.status_code == 200
    body = r.json()
    assert body["pagination"] == {"total": 3, "page": 1, "limit": 10, "pages": 1}
    assert [p["title"] for p in body["projects"]] == ["Data pipeline", "React app", "Python API"]

    r = client.get("/api/projects", params={"skills": "Python,Go"})
    assert [p["title"] for p in r.json()["projects"]] == ["Data pipeline", "Python API"]

    r = client.get("/api/projects", params={"status": "in-progress"})
    assert [p["title"] for p in r.json()["projects"]] == ["React app"]

    r = client.get("/api/projects", params={"q": "PIPELINE"})
    assert [p["title"] for p in r.json()["projects"]] == ["Data pipeline"]

    r = client.get("/api/projects", params={"limit": 2, "page": 2})
    body = r.json()
    assert body["pagination"]["pages"] == 2
    assert [p["title"] for p in body["projects"]] == ["Python API"]


def test_update_project_permissions(client, register, create_project) -> None:
    owner_id, owner_headers = register("owner@example.com")
    admin_id, admin_headers = register("admin@example.com")
    _, other_headers = register("other@example.com")
    project = create_project(owner_headers, title="Original")
    pid = project["id"]

    r = client.patch(f"/api/projects/{pid}", json={"title": "Hijacked"}, headers=other_headers)
    assert r.status_code == 403

    r = client.post(f"/api/projects/{pid}/members", json={"user_id": admin_id, "role": "admin"}, headers=owner_headers)
    assert r.status_code == 201

    r = client.patch(
        f"/api/projects/{pid}",
        json={"title": "Renamed", "required_skills": ["Go"], "status": "on-hold"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["title"] == "Renamed"
    assert body["required_skills"] == ["Go"]
    assert body["status"] == "on-hold"

    r = client.patch("/api/projects/9999", json={"title": "x"}, headers=owner_headers)
    assert r.status_code == 404


def test_delete_project_owner_only_and_cascades(client, register, create_project) -> None:
    _, owner_headers = register("owner@example.com")
    admin_id, admin_headers = register("admin@example.com")
    project = create_project(owner_headers, title="Doomed")
    pid = project["id"]
    client.post(f"/api/projects/{pid}/members", json={"user_id": admin_id, "role": "admin"}, headers=owner_headers)
    client.post(f"/api/projects/{pid}/tasks", json={"title": "Task"}, headers=owner_headers)

    r = client.delete(f"/api/projects/{pid}", headers=admin_headers)
    assert r.status_code == 403

    r = client.delete(f"/api/projects/{pid}", headers=owner_headers)
    assert r.status_code == 200
    assert client.get(f"/api/projects/{pid}").status_code == 404

    db = SessionLocal()
    try:
        assert db.query(Project).count() == 0
        assert db.query(ProjectMember).count() == 0
        assert db.query(Task).count() == 0
    finally:
        db.close()


def test_member_management(client, register, create_project) -> None:
    owner_id, owner_headers = register("owner@example.com")
    dev_id, dev_headers = register("dev@example.com")
    other_id, other_headers = register("other@example.com")
    pid = create_project(owner_headers, title="Team")["id"]

    r = client.post(f"/api/projects/{pid}/members", json={"user_id": dev_id}, headers=other_headers)
    assert r.status_code == 403

    r = client.post(f"/api/projects/{pid}/members", json={"user_id": 9999}, headers=owner_headers)
    assert r.status_code == 404

    r = client.post(f"/api/projects/{pid}/members", json={"user_id": dev_id}, headers=owner_headers)
    assert r.status_code == 201
    assert r.json()["role"] == "member"
    assert r.json()["user"]["id"] == dev_id

    r = client.post(f"/api/projects/{pid}/members", json={"user_id": dev_id}, headers=owner_headers)
    assert r.status_code == 400

    r = client.patch(f"/api/projects/{pid}/members/{dev_id}", json={"role": "admin"}, headers=owner_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "admin"

    r = client.patch(f"/api/projects/{pid}/members/{owner_id}", json={"role": "member"}, headers=owner_headers)
    assert r.status_code == 400

    r = client.patch(f"/api/projects/{pid}/members/{dev_id}", json={"role": "owner"}, headers=owner_headers)
    assert r.status_code == 422

    r = client.patch(f"/api/projects/{pid}/members/{other_id}", json={"role": "admin"}, headers=owner_headers)
    assert r.status_code == 404

    r = client.delete(f"/api/projects/{pid}/members/{owner_id}", headers=dev_headers)
    assert r.status_code == 400

    members = client.get(f"/api/projects/{pid}/members").json()
    assert {m["user"]["id"] for m in members} == {owner_id, dev_id}

    r = client.delete(f"/api/projects/{pid}/members/{dev_id}", headers=dev_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "You have left the project"

    members = client.get(f"/api/projects/{pid}/members").json()
    assert [m["user"]["id"] for m in members] == [owner_id]


def test_join_project(client, register, create_project) -> None:
    _, owner_headers = register("owner@example.com")
    dev_id, dev_headers = register("dev@example.com")
    pid = create_project(owner_headers, title="Open")["id"]

    r = client.post(f"/api/projects/{pid}/join", headers=dev_headers)
    assert r.status_code == 201
    assert r.json()["role"] == "member"

    r = client.post(f"/api/projects/{pid}/join", headers=dev_headers)
    assert r.status_code == 400

    r = client.post(f"/api/projects/{pid}/join", headers=owner_headers)
    assert r.status_code == 400


def test_members_carry_profile_skills(client, register, create_project) -> None:
    owner_id, owner_headers = register("owner@example.com", name="Owner", skills=["Python"])
    dev_id, dev_headers = register("dev@example.com", name="Dev", skills=["React", "CSS"])
    client.patch(f"/api/users/{dev_id}", json={"title": "Frontend developer"}, headers=dev_headers)
    pid = create_project(owner_headers, title="Team")["id"]

    r = client.post(f"/api/projects/{pid}/join", headers=dev_headers)
    assert r.status_code == 201
    assert r.json()["user"]["skills"] == ["React", "CSS"]

    members = {m["user"]["id"]: m["user"] for m in client.get(f"/api/projects/{pid}/members").json()}
    assert members[owner_id]["skills"] == ["Python"]
    assert members[dev_id]["email"] == "dev@example.com"
    assert members[dev_id]["title"] == "Frontend developer"
    assert "password" not in members[dev_id]


def test_add_member_on_stale_project_is_bad_request(client, register, create_project) -> None:
    _, owner_headers = register("owner@example.com")
    dev_id, dev_headers = register("dev@example.com")
    pid = create_project(owner_headers, title="Busy")["id"]

    stale_db = SessionLocal()
    try:
        # Loaded before the join below, so its member list misses the new member.
        stale_project = project_service.get_project_or_404(stale_db, pid)
        assert client.post(f"/api/projects/{pid}/join", headers=dev_headers).status_code == 201

        with pytest.raises(HTTPException) as exc_info:
            project_service.add_member(stale_db, stale_project, dev_id)
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "User is already a member of this project"
    finally:
        stale_db.close()

    members = client.get(f"/api/projects/{pid}/members").json()
    assert [m["user"]["id"] for m in members].count(dev_id) == 1
