"""
Tests for project conversations and messages.
"""

import pytest


@pytest.fixture
def conversations_url(project):
    return f"/api/projects/{project['project_uid']}/chat/conversations"


@pytest.fixture
def create_conversation(client, conversations_url, auth_headers):
    def _create(name="Kickoff"):
        response = client.post(conversations_url, json={"name": name}, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def test_create_and_list(client, conversations_url, create_conversation, auth_headers, project):
    created = create_conversation()
    assert created["project_uid"] == project["project_uid"]

    listed = client.get(conversations_url, headers=auth_headers).json()
    assert [c["conversation_uid"] for c in listed] == [created["conversation_uid"]]


def test_oldest_conversation_evicted(client, conversations_url, create_conversation, auth_headers):
    created = [create_conversation(name=f"C{i}") for i in range(11)]

    listed = client.get(conversations_url, headers=auth_headers).json()
    assert len(listed) == 10
    uids = {c["conversation_uid"] for c in listed}
    assert created[0]["conversation_uid"] not in uids
    assert created[-1]["conversation_uid"] in uids

    evicted = client.get(
        f"/api/chat/conversations/{created[0]['conversation_uid']}", headers=auth_headers
    )
    assert evicted.status_code == 404


def test_recently_used_conversation_survives(client, create_conversation, conversations_url, auth_headers):
    first = create_conversation(name="Keep me")
    for i in range(9):
        create_conversation(name=f"C{i}")

    client.post(
        "/api/chat/messages",
        json={
            "conversation_uid": first["conversation_uid"],
            "content": "still here",
            "message_type": "user",
        },
        headers=auth_headers,
    )
    create_conversation(name="Newest")

    listed = client.get(conversations_url, headers=auth_headers).json()
    uids = [c["conversation_uid"] for c in listed]
    assert len(uids) == 10
    assert first["conversation_uid"] in uids
    # Touched last, so listed first
    assert listed[0]["conversation_uid"] == first["conversation_uid"]


def test_messages_in_order(client, create_conversation, auth_headers):
    conversation = create_conversation()
    for message_type, content in [("user", "Hi"), ("ai", "Hello!"), ("user", "Plan?")]:
        response = client.post(
            "/api/chat/messages",
            json={
                "conversation_uid": conversation["conversation_uid"],
                "content": content,
                "message_type": message_type,
            },
            headers=auth_headers,
        )
        assert response.status_code == 201

    data = client.get(
        f"/api/chat/conversations/{conversation['conversation_uid']}", headers=auth_headers
    ).json()
    assert [m["content"] for m in data["messages"]] == ["Hi", "Hello!", "Plan?"]
    assert [m["message_type"] for m in data["messages"]] == ["user", "ai", "user"]


def test_invalid_message_type(client, create_conversation, auth_headers):
    conversation = create_conversation()
    response = client.post(
        "/api/chat/messages",
        json={
            "conversation_uid": conversation["conversation_uid"],
            "content": "x",
            "message_type": "system",
        },
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_delete_conversation(client, conversations_url, create_conversation, auth_headers):
    conversation = create_conversation()
    url = f"/api/chat/conversations/{conversation['conversation_uid']}"
    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.get(url, headers=auth_headers).status_code == 404
    assert client.get(conversations_url, headers=auth_headers).json() == []


def test_chat_non_member_forbidden(client, create_conversation, other_headers):
    conversation = create_conversation()
    response = client.post(
        "/api/chat/messages",
        json={
            "conversation_uid": conversation["conversation_uid"],
            "content": "intrusion",
            "message_type": "user",
        },
        headers=other_headers,
    )
    assert response.status_code == 403
