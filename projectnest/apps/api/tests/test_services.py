"""
Service-level tests running directly against an async session.
"""

import uuid

import pytest

from core.access import ProjectAccess
from core.auth import hash_password
from core.exceptions import (
    BadRequestError,
    DuplicateResourceError,
    NotProjectMemberError,
    ProjectNotFoundError,
    TaskNotFoundError,
    UserNotFoundError,
)
from domain.board.schemas import ListCreate, TaskCreate, TaskPatch
from domain.chat.schemas import ConversationCreate
from domain.project.repository import ProjectRepository
from domain.project.schemas import ProjectCreate
from domain.user.models import User
from domain.user.repository import UserRepository
from services.auth_service import AuthService
from services.chat_service import ChatService
from services.list_service import ListService
from services.project_service import ProjectService, build_progress
from services.task_service import TaskService


async def _project(session, user, name="Service project"):
    return await ProjectService(session).create_project(ProjectCreate(name=name), user)


@pytest.mark.asyncio
async def test_project_and_owner_created_together(session, make_user):
    user = await make_user()
    project = await _project(session, user)

    stored = await ProjectRepository(session).get_by_uid(project.project_uid)
    assert await ProjectRepository(session).is_member(stored.id, user.id)
    members = await ProjectRepository(session).get_members(stored.id)
    assert [member.role for member, _ in members] == ["owner"]


@pytest.mark.asyncio
async def test_require_member(session, make_user):
    owner = await make_user(name="Owner")
    stranger = await make_user(name="Stranger")
    project = await _project(session, owner)
    access = ProjectAccess(session)

    found = await access.require_member(project.project_uid, owner)
    assert found.project_uid == project.project_uid

    with pytest.raises(NotProjectMemberError):
        await access.require_member(project.project_uid, stranger)


@pytest.mark.asyncio
async def test_deleted_project_not_found(session, make_user):
    owner = await make_user()
    project = await _project(session, owner)
    await ProjectService(session).delete_project(project.project_uid, owner)

    with pytest.raises(ProjectNotFoundError):
        await ProjectAccess(session).require_member(project.project_uid, owner)

    stored = await ProjectRepository(session).get_by_uid(
        project.project_uid, include_inactive=True
    )
    assert stored is not None
    assert stored.is_active is False


@pytest.mark.asyncio
async def test_task_completion_cycle(session, make_user):
    user = await make_user()
    project = await _project(session, user)
    board = await ListService(session).create_list(
        ListCreate(project_uid=project.project_uid, name="Board"), user
    )
    tasks = TaskService(session)
    task = await tasks.create_task(TaskCreate(list_uid=board.list_uid, title="Ship"), user)

    done = await tasks.partial_update_task(
        task.task_uid, TaskPatch.model_validate({"is_completed": True}), user
    )
    assert done.completed_at is not None

    progress = await ProjectService(session).get_project_progress(project.project_uid, user)
    assert (progress.total_tasks, progress.completed_tasks, progress.progress) == (1, 1, 1.0)

    undone = await tasks.partial_update_task(
        task.task_uid, TaskPatch.model_validate({"is_completed": False}), user
    )
    assert undone.completed_at is None


@pytest.mark.asyncio
async def test_deleted_task_not_found(session, make_user):
    user = await make_user()
    project = await _project(session, user)
    board = await ListService(session).create_list(
        ListCreate(project_uid=project.project_uid, name="Board"), user
    )
    tasks = TaskService(session)
    task = await tasks.create_task(TaskCreate(list_uid=board.list_uid, title="Ship"), user)
    await tasks.delete_task(task.task_uid, user)

    with pytest.raises(TaskNotFoundError):
        await tasks.delete_task(task.task_uid, user)


@pytest.mark.asyncio
async def test_conversation_cap_is_configurable(session, make_user):
    user = await make_user()
    project = await _project(session, user)
    chat = ChatService(session)
    chat.max_conversations = 2

    for name in ["a", "b", "c"]:
        await chat.create_conversation(project.project_uid, ConversationCreate(name=name), user)

    listed = await chat.get_conversations(project.project_uid, user)
    assert sorted(c.name for c in listed) == ["b", "c"]


def test_build_progress():
    progress = build_progress(total=8, completed=2)
    assert progress.todo_tasks == 6
    assert progress.progress == 0.25
    assert build_progress(0, 0).progress == 0.0


@pytest.mark.asyncio
async def test_get_user_by_uid(session, make_user):
    user = await make_user(name="Lookup")
    found = await AuthService(session).get_user_by_uid(user.user_uid)
    assert found.name == "Lookup"

    with pytest.raises(UserNotFoundError):
        await AuthService(session).get_user_by_uid(uuid.uuid4())


@pytest.mark.asyncio
async def test_lists_with_tasks_skip_deleted(session, make_user):
    user = await make_user()
    project = await _project(session, user)
    lists = ListService(session)
    keep = await lists.create_list(ListCreate(project_uid=project.project_uid, name="Keep"), user)
    drop = await lists.create_list(ListCreate(project_uid=project.project_uid, name="Drop"), user)
    await TaskService(session).create_task(TaskCreate(list_uid=keep.list_uid, title="t"), user)
    await lists.delete_list(drop.list_uid, user)

    stored = await ProjectRepository(session).get_by_uid(project.project_uid)
    result = await lists.get_lists_with_tasks(stored)
    assert [lst.name for lst in result] == ["Keep"]
    assert [t.title for t in result[0].tasks] == ["t"]


@pytest.mark.asyncio
async def test_duplicate_email_insert_is_conflict(session, make_user):
    await make_user(email="taken@example.com")

    with pytest.raises(DuplicateResourceError):
        await UserRepository(session).create(
            User(
                name="Late Racer",
                email="taken@example.com",
                password_hash=hash_password("password123"),
            )
        )


@pytest.mark.asyncio
async def test_duplicate_member_insert_is_bad_request(session, make_user):
    owner = await make_user(name="Owner")
    project = await _project(session, owner)
    repository = ProjectRepository(session)
    stored = await repository.get_by_uid(project.project_uid)
    project_id, owner_id = stored.id, owner.id

    with pytest.raises(BadRequestError):
        await repository.add_member(project_id, owner_id, "member")
    assert await repository.is_member(project_id, owner_id)
