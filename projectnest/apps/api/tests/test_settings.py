"""
Tests for user settings.
"""


def test_defaults_created_on_first_read(client, auth_headers):
    response = client.get("/api/settings", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["theme"] == "projectnest-default"
    assert data["language"] == "en"
    assert data["timezone"] == "UTC"
    assert data["auto_save_interval"] == 30
    assert data["compact_mode"] is False


def test_partial_update_keeps_other_fields(client, auth_headers):
    client.put("/api/settings", json={"language": "de"}, headers=auth_headers)
    response = client.patch("/api/settings", json={"compact_mode": True}, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["compact_mode"] is True
    assert data["language"] == "de"


def test_update_without_prior_read(client, auth_headers):
    response = client.put("/api/settings", json={"theme": "projectnest-dark"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["theme"] == "projectnest-dark"


def test_unknown_theme_rejected(client, auth_headers):
    response = client.put("/api/settings", json={"theme": "neon"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"]["details"]["field"] == "theme"


def test_unknown_language_rejected(client, auth_headers):
    response = client.put("/api/settings", json={"language": "xx"}, headers=auth_headers)
    assert response.status_code == 400


def test_auto_save_interval_bounds(client, auth_headers):
    too_small = client.put("/api/settings", json={"auto_save_interval": 5}, headers=auth_headers)
    too_large = client.put("/api/settings", json={"auto_save_interval": 601}, headers=auth_headers)
    assert too_small.status_code == 400
    assert too_large.status_code == 400


def test_null_on_setting_rejected(client, auth_headers):
    response = client.put("/api/settings", json={"timezone": None}, headers=auth_headers)
    assert response.status_code == 400


def test_empty_update_rejected(client, auth_headers):
    response = client.put("/api/settings", json={}, headers=auth_headers)
    assert response.status_code == 400


def test_reset(client, auth_headers):
    client.put("/api/settings", json={"language": "fr", "sound_enabled": False}, headers=auth_headers)
    response = client.post("/api/settings/reset", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["language"] == "en"
    assert data["sound_enabled"] is True


def test_settings_are_per_user(client, auth_headers, other_headers):
    client.put("/api/settings", json={"language": "ja"}, headers=auth_headers)
    other = client.get("/api/settings", headers=other_headers).json()
    assert other["language"] == "en"
