"""
Tests for lists, tasks and their positions.
"""

import pytest


@pytest.fixture
def board(project, auth_headers, create_list):
    return create_list(auth_headers, project["project_uid"])


# ========== Lists ==========
def test_list_positions_start_at_one(project, auth_headers, create_list):
    uid = project["project_uid"]
    positions = [create_list(auth_headers, uid, name=f"L{i}")["position"] for i in range(3)]
    assert positions == [1, 2, 3]


def test_list_position_follows_max(project, auth_headers, create_list):
    uid = project["project_uid"]
    create_list(auth_headers, uid, position=7)
    assert create_list(auth_headers, uid)["position"] == 8


def test_explicit_zero_position_is_kept(project, auth_headers, create_list):
    created = create_list(auth_headers, project["project_uid"], position=0)
    assert created["position"] == 0


def test_negative_position_rejected(client, project, auth_headers):
    response = client.post(
        "/api/lists",
        json={"project_uid": project["project_uid"], "name": "x", "position": -1},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_create_list_requires_membership(client, project, other_headers):
    response = client.post(
        "/api/lists",
        json={"project_uid": project["project_uid"], "name": "Sneaky"},
        headers=other_headers,
    )
    assert response.status_code == 403


def test_put_list(client, board, auth_headers):
    response = client.put(
        f"/api/lists/{board['list_uid']}",
        json={"name": "Doing", "color": "#00FF00"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Doing"
    assert data["color"] == "#00FF00"
    assert data["position"] == board["position"]


def test_patch_list_empty_body_leaves_row(client, board, project, auth_headers):
    response = client.patch(f"/api/lists/{board['list_uid']}", json={}, headers=auth_headers)
    assert response.status_code == 400

    data = client.get(f"/api/projects/{project['project_uid']}", headers=auth_headers).json()
    assert data["lists"][0]["updated_at"] is None
    assert data["lists"][0]["name"] == board["name"]


def test_patch_list_null_position_rejected(client, board, auth_headers):
    response = client.patch(
        f"/api/lists/{board['list_uid']}", json={"position": None}, headers=auth_headers
    )
    assert response.status_code == 400


def test_update_list_position_reorders(client, project, auth_headers, create_list):
    uid = project["project_uid"]
    first = create_list(auth_headers, uid, name="First")
    create_list(auth_headers, uid, name="Second")

    response = client.put(
        f"/api/lists/{first['list_uid']}/position",
        json={"position": 5},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["position"] == 5

    data = client.get(f"/api/projects/{uid}", headers=auth_headers).json()
    assert [lst["name"] for lst in data["lists"]] == ["Second", "First"]


def test_list_non_member_forbidden(client, board, other_headers):
    response = client.patch(
        f"/api/lists/{board['list_uid']}", json={"name": "x"}, headers=other_headers
    )
    assert response.status_code == 403


def test_delete_list(client, board, project, auth_headers):
    response = client.delete(f"/api/lists/{board['list_uid']}", headers=auth_headers)
    assert response.status_code == 200

    data = client.get(f"/api/projects/{project['project_uid']}", headers=auth_headers).json()
    assert data["lists"] == []
    missing = client.patch(
        f"/api/lists/{board['list_uid']}", json={"name": "x"}, headers=auth_headers
    )
    assert missing.status_code == 404


# ========== Tasks ==========
def test_task_positions_start_at_one(board, auth_headers, create_task):
    positions = [create_task(auth_headers, board["list_uid"])["position"] for _ in range(3)]
    assert positions == [1, 2, 3]


def test_task_defaults(board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"])
    assert task["status"] == "todo"
    assert task["is_completed"] is False
    assert task["completed_at"] is None
    assert task["color"] == "#FFFFFF"
    assert task["priority"] is None


def test_create_task_in_unknown_list(client, auth_headers):
    response = client.post(
        "/api/tasks",
        json={"list_uid": "00000000-0000-0000-0000-000000000000", "title": "x"},
        headers=auth_headers,
    )
    assert response.status_code == 404


def test_is_completed_toggles_completed_at(client, board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"])
    url = f"/api/tasks/{task['task_uid']}"

    done = client.patch(url, json={"is_completed": True}, headers=auth_headers).json()
    assert done["is_completed"] is True
    assert done["completed_at"] is not None

    undone = client.patch(url, json={"is_completed": False}, headers=auth_headers).json()
    assert undone["is_completed"] is False
    assert undone["completed_at"] is None


def test_status_toggles_completed_at(client, board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"])
    url = f"/api/tasks/{task['task_uid']}"

    done = client.patch(url, json={"status": "completed"}, headers=auth_headers).json()
    assert done["completed_at"] is not None
    assert done["is_completed"] is False

    reopened = client.patch(url, json={"status": "in_progress"}, headers=auth_headers).json()
    assert reopened["completed_at"] is None


def test_is_completed_wins_over_status(client, board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"])
    response = client.patch(
        f"/api/tasks/{task['task_uid']}",
        json={"status": "completed", "is_completed": False},
        headers=auth_headers,
    )
    assert response.json()["completed_at"] is None


def test_unrelated_patch_keeps_completed_at(client, board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"], is_completed=True)
    assert task["completed_at"] is not None

    response = client.patch(
        f"/api/tasks/{task['task_uid']}", json={"title": "Renamed"}, headers=auth_headers
    )
    assert response.json()["completed_at"] == task["completed_at"]


def test_task_explicit_null_clears_description(client, board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"], description="details")
    response = client.patch(
        f"/api/tasks/{task['task_uid']}", json={"description": None}, headers=auth_headers
    )
    assert response.json()["description"] is None


def test_task_empty_patch(client, board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"])
    response = client.patch(f"/api/tasks/{task['task_uid']}", json={}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NO_FIELDS_TO_UPDATE"


def test_put_task(client, board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"], description="old", priority="high")
    response = client.put(
        f"/api/tasks/{task['task_uid']}",
        json={"title": "Replaced", "is_completed": True},
        headers=auth_headers,
    )
    data = response.json()
    assert data["title"] == "Replaced"
    assert data["description"] is None
    assert data["priority"] is None
    assert data["is_completed"] is True
    assert data["completed_at"] is not None


def test_move_task_keeps_position(
    client, project, auth_headers, create_list, create_task
):
    source = create_list(auth_headers, project["project_uid"], name="Source")
    target = create_list(auth_headers, project["project_uid"], name="Target")
    create_task(auth_headers, target["list_uid"])
    create_task(auth_headers, source["list_uid"])
    moving = create_task(auth_headers, source["list_uid"])
    assert moving["position"] == 2

    response = client.post(
        f"/api/tasks/{moving['task_uid']}/move",
        json={"list_uid": target["list_uid"]},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["position"] == 2

    data = client.get(f"/api/projects/{project['project_uid']}", headers=auth_headers).json()
    target_tasks = [t["task_uid"] for t in data["lists"][1]["tasks"]]
    assert moving["task_uid"] in target_tasks


def test_move_task_into_foreign_project_forbidden(
    client, board, auth_headers, other_headers, create_project, create_list, create_task
):
    foreign_project = create_project(other_headers, name="Foreign")
    foreign_list = create_list(other_headers, foreign_project["project_uid"])
    task = create_task(auth_headers, board["list_uid"])

    response = client.post(
        f"/api/tasks/{task['task_uid']}/move",
        json={"list_uid": foreign_list["list_uid"]},
        headers=auth_headers,
    )
    assert response.status_code == 403


def test_delete_task(client, board, auth_headers, create_task):
    task = create_task(auth_headers, board["list_uid"])
    url = f"/api/tasks/{task['task_uid']}"

    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.patch(url, json={"title": "x"}, headers=auth_headers).status_code == 404
    assert client.delete(url, headers=auth_headers).status_code == 404


def test_task_non_member_forbidden(client, board, auth_headers, other_headers, create_task):
    task = create_task(auth_headers, board["list_uid"])
    response = client.delete(f"/api/tasks/{task['task_uid']}", headers=other_headers)
    assert response.status_code == 403
