"""
Tests for the structlog processors and request context binding.
"""

import structlog

from config import get_settings
from core.logging import (
    add_service_context,
    bind_request_context,
    bind_user_context,
    redact_credentials,
)


def test_credentials_are_redacted():
    event = redact_credentials(
        None, "info", {"event": "login", "password": "hunter22", "email": "a@b.c"}
    )
    assert event["password"] == "***"
    assert event["email"] == "a@b.c"


def test_service_context_added():
    event = add_service_context(None, "info", {"event": "boot"})
    assert event["service"] == get_settings().app_name
    assert event["environment"] == get_settings().environment


def test_request_context_replaces_previous_request():
    bind_request_context("first", "GET", "/api/projects", "127.0.0.1")
    bind_user_context("user-1")
    bind_request_context("second", "POST", "/api/lists", None)

    context = structlog.contextvars.get_contextvars()
    assert context["request_id"] == "second"
    assert context["method"] == "POST"
    assert "user_uid" not in context
    structlog.contextvars.clear_contextvars()


def test_user_context_bound():
    bind_request_context("req", "GET", "/api/auth/me", None)
    bind_user_context("abc")
    assert structlog.contextvars.get_contextvars()["user_uid"] == "abc"
    structlog.contextvars.clear_contextvars()
