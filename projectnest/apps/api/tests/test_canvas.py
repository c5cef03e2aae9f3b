"""
Tests for the project canvas.
"""

import json

import pytest


@pytest.fixture
def canvas_url(project):
    return f"/api/projects/{project['project_uid']}/canvas"


def test_canvas_created_on_first_read(client, canvas_url, project, auth_headers):
    response = client.get(canvas_url, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["project_uid"] == project["project_uid"]
    assert json.loads(data["state_json"]) == {
        "nodes": [],
        "edges": [],
        "viewport": {"x": 0, "y": 0, "zoom": 1},
    }

    again = client.get(canvas_url, headers=auth_headers).json()
    assert again["canvas_uid"] == data["canvas_uid"]


def test_save_canvas(client, canvas_url, auth_headers):
    state = json.dumps({"nodes": [{"id": "n1"}], "edges": [], "viewport": {"x": 1, "y": 2, "zoom": 1.5}})
    response = client.put(canvas_url, json={"state_json": state}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["state_json"] == state

    fetched = client.get(canvas_url, headers=auth_headers).json()
    assert fetched["state_json"] == state


def test_save_canvas_twice_updates(client, canvas_url, auth_headers):
    first = client.post(canvas_url, json={"state_json": "{}"}, headers=auth_headers).json()
    second = client.post(
        canvas_url, json={"state_json": '{"nodes": []}'}, headers=auth_headers
    ).json()
    assert first["canvas_uid"] == second["canvas_uid"]
    assert second["state_json"] == '{"nodes": []}'
    assert second["updated_at"] is not None


def test_invalid_canvas_json(client, canvas_url, auth_headers):
    response = client.put(canvas_url, json={"state_json": "{oops"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid JSON in state_json"


def test_delete_canvas(client, canvas_url, auth_headers):
    client.get(canvas_url, headers=auth_headers)
    assert client.delete(canvas_url, headers=auth_headers).status_code == 200
    assert client.delete(canvas_url, headers=auth_headers).status_code == 404


def test_canvas_non_member_forbidden(client, canvas_url, other_headers):
    assert client.get(canvas_url, headers=other_headers).status_code == 403
