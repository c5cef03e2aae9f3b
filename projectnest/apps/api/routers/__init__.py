"""API routers."""

from . import auth, chat, health, lists, notes, projects, settings, tasks

__all__ = [
    "health",
    "auth",
    "projects",
    "lists",
    "tasks",
    "notes",
    "chat",
    "settings",
]
