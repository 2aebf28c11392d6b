from datetime import datetime, timezone

import pytest
from sqlmodel import select

from taskboard.core.errors import NotFoundError
from taskboard.models.subtask import Subtask
from taskboard.schemas.subtask import SubtaskInput
from taskboard.schemas.task import TaskCreate, TaskFilters, TaskUpdate
from taskboard.schemas.workspace import WorkspaceCreate
from taskboard.services import subtask_service, task_service, workspace_service


def _task(db, owner, title="Task", **kw):
    return task_service.create_task(db, owner.id, TaskCreate(title=title, **kw))


def _titles(tasks):
    return [t.title for t in tasks]


def test_create_task_defaults_and_owner(db, alice):
    task = _task(db, alice, "Ship release")

    assert task.id
    assert task.user_id == alice.id
    assert task.status == "todo"
    assert task.priority == "medium"
    assert task.created_at == task.updated_at


def test_get_task_hides_other_owners_tasks(db, alice, bob):
    task = _task(db, bob, "Bob's")

    with pytest.raises(NotFoundError):
        task_service.get_task(db, alice.id, task.id)
    with pytest.raises(NotFoundError):
        task_service.get_task(db, alice.id, "does-not-exist")
    assert task_service.get_task(db, bob.id, task.id).title == "Bob's"


def test_list_tasks_is_owner_scoped(db, alice, bob):
    _task(db, alice, "a1")
    _task(db, alice, "a2")
    _task(db, bob, "b1")

    assert sorted(_titles(task_service.list_tasks(db, alice.id))) == ["a1", "a2"]
    assert _titles(task_service.list_tasks(db, bob.id)) == ["b1"]


def test_list_tasks_filters_are_anded(db, alice):
    _task(db, alice, "one", status="done", priority="high")
    _task(db, alice, "two", status="done", priority="low")
    _task(db, alice, "three", status="todo", priority="high")

    result = task_service.list_tasks(db, alice.id, TaskFilters(status="done", priority="high"))

    assert _titles(result) == ["one"]


def test_search_matches_title_or_description_case_insensitive(db, alice):
    _task(db, alice, "Quarterly REPORT")
    _task(db, alice, "Other", description="draft the report outline")
    _task(db, alice, "Unrelated")

    result = task_service.list_tasks(db, alice.id, TaskFilters(search="report"))

    assert sorted(_titles(result)) == ["Other", "Quarterly REPORT"]


def test_search_treats_wildcards_literally(db, alice):
    _task(db, alice, "100% done")
    _task(db, alice, "plain")
    _task(db, alice, "snake_case")

    assert _titles(task_service.list_tasks(db, alice.id, TaskFilters(search="%"))) == ["100% done"]
    assert _titles(task_service.list_tasks(db, alice.id, TaskFilters(search="_"))) == ["snake_case"]


def test_priority_sort_uses_rank(db, alice):
    for p in ("medium", "high", "low"):
        _task(db, alice, p, priority=p)

    asc = task_service.list_tasks(db, alice.id, TaskFilters(sort_by="priority", sort_order="asc"))
    desc = task_service.list_tasks(db, alice.id, TaskFilters(sort_by="priority", sort_order="desc"))

    assert _titles(asc) == ["low", "medium", "high"]
    assert _titles(desc) == ["high", "medium", "low"]


def test_due_date_sort_puts_missing_dates_last(db, alice):
    _task(db, alice, "none")
    _task(db, alice, "later", due_date=datetime(2026, 3, 1))
    _task(db, alice, "sooner", due_date=datetime(2026, 1, 1))

    asc = task_service.list_tasks(db, alice.id, TaskFilters(sort_by="dueDate", sort_order="asc"))
    desc = task_service.list_tasks(db, alice.id, TaskFilters(sort_by="dueDate", sort_order="desc"))

    assert _titles(asc) == ["sooner", "later", "none"]
    assert _titles(desc) == ["later", "sooner", "none"]


def test_default_order_is_newest_first(db, alice):
    old = _task(db, alice, "old")
    new = _task(db, alice, "new")
    old.created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    new.created_at = datetime(2025, 6, 1, tzinfo=timezone.utc)
    db.add(old)
    db.add(new)
    db.commit()

    assert _titles(task_service.list_tasks(db, alice.id)) == ["new", "old"]


def test_update_changes_only_supplied_fields(db, alice):
    task = _task(db, alice, "Original", description="keep me", priority="high")
    before = task.updated_at

    updated = task_service.update_task(db, alice.id, task.id, TaskUpdate(title="X"))
    fetched = task_service.get_task(db, alice.id, task.id)

    assert fetched.title == "X"
    assert fetched.description == "keep me"
    assert fetched.priority == "high"
    assert fetched.status == "todo"
    assert updated.updated_at > before


def test_update_with_explicit_null_clears_optional_field(db, alice):
    task = _task(db, alice, "t", description="gone soon", due_date=datetime(2026, 1, 1))

    updated = task_service.update_task(
        db, alice.id, task.id, TaskUpdate.model_validate({"description": None, "dueDate": None})
    )

    assert updated.description is None
    assert updated.due_date is None


def test_empty_update_still_refreshes_timestamp(db, alice):
    task = _task(db, alice)
    before = task.updated_at

    updated = task_service.update_task(db, alice.id, task.id, TaskUpdate())

    assert updated.updated_at > before


def test_update_of_foreign_task_is_not_found(db, alice, bob):
    task = _task(db, bob)

    with pytest.raises(NotFoundError):
        task_service.update_task(db, alice.id, task.id, TaskUpdate(title="hijack"))
    assert task_service.get_task(db, bob.id, task.id).title == "Task"


def test_update_returns_fresh_subtasks(db, alice):
    task = _task(db, alice)
    subtask_service.create_subtask(db, alice.id, task.id, SubtaskInput(title="step"))

    updated = task_service.update_task(db, alice.id, task.id, TaskUpdate(status="in_progress"))

    assert [s.title for s in updated.subtasks] == ["step"]


def test_task_workspace_must_belong_to_owner(db, alice, bob):
    bobs = workspace_service.create_workspace(db, bob.id, WorkspaceCreate(name="Bob's"))
    mine = workspace_service.create_workspace(db, alice.id, WorkspaceCreate(name="Mine"))

    with pytest.raises(NotFoundError):
        _task(db, alice, "t", workspace_id=bobs.id)

    task = _task(db, alice, "t", workspace_id=mine.id)
    assert task.workspace_id == mine.id

    filtered = task_service.list_tasks(db, alice.id, TaskFilters(workspace_id=mine.id))
    assert _titles(filtered) == ["t"]

    detached = task_service.update_task(
        db, alice.id, task.id, TaskUpdate.model_validate({"workspaceId": None})
    )
    assert detached.workspace_id is None


def test_delete_task_cascades_to_subtasks(db, alice):
    task = _task(db, alice)
    subtask_service.create_subtask(db, alice.id, task.id, SubtaskInput(title="a"))
    subtask_service.create_subtask(db, alice.id, task.id, SubtaskInput(title="b"))
    task_id = task.id

    assert task_service.delete_task(db, alice.id, task_id) is True
    assert task_service.find_task(db, alice.id, task_id) is None
    assert task not in db
    assert subtask_service.list_subtasks_for_task(db, alice.id, task_id) == []
    assert db.exec(select(Subtask)).all() == []


def test_delete_task_reports_missing_or_foreign(db, alice, bob):
    task = _task(db, bob)

    assert task_service.delete_task(db, alice.id, task.id) is False
    assert task_service.delete_task(db, alice.id, "nope") is False
    assert task_service.find_task(db, bob.id, task.id) is not None
