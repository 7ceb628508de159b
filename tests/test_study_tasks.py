"""Tests for planner study tasks."""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from studytrack.crud import (
    create_task, get_task, get_tasks, set_task_completed, delete_task, carry_over_tasks
)
from studytrack.schemas import StudyTaskCreate

TODAY = date(2026, 3, 10)


def schedule(db, title, days_from_today=0):
    return create_task(db, StudyTaskCreate(title=title, scheduled_date=TODAY + timedelta(days=days_from_today)))


def test_create_and_list_tasks_by_date(db):
    later = schedule(db, "Past papers", 2)
    today = schedule(db, "  Revise algebra  ")

    assert today.title == "Revise algebra"
    assert today.is_completed is False
    assert [t.id for t in get_tasks(db)] == [today.id, later.id]
    assert [t.id for t in get_tasks(db, TODAY)] == [today.id]


def test_blank_task_title_rejected():
    with pytest.raises(ValidationError):
        StudyTaskCreate(title="   ", scheduled_date=TODAY)


def test_carry_over_moves_unfinished_tasks(db):
    unfinished = schedule(db, "Flashcards", -2)
    finished = schedule(db, "Essay", -1)
    upcoming = schedule(db, "Mock exam", 3)
    set_task_completed(db, finished.id)

    moved = carry_over_tasks(db, today=TODAY)

    assert [t.id for t in moved] == [unfinished.id]
    assert get_task(db, unfinished.id).scheduled_date == TODAY
    assert get_task(db, unfinished.id).carried_over_from == TODAY - timedelta(days=2)
    assert get_task(db, finished.id).scheduled_date == TODAY - timedelta(days=1)
    assert get_task(db, upcoming.id).scheduled_date == TODAY + timedelta(days=3)


def test_carry_over_keeps_first_original_date(db):
    task = schedule(db, "Flashcards", -3)
    carry_over_tasks(db, today=TODAY - timedelta(days=1))
    carry_over_tasks(db, today=TODAY)

    stored = get_task(db, task.id)
    assert stored.scheduled_date == TODAY
    assert stored.carried_over_from == TODAY - timedelta(days=3)
    assert carry_over_tasks(db, today=TODAY) == []


def test_complete_and_delete_task(db):
    task = schedule(db, "Flashcards")
    assert set_task_completed(db, task.id).is_completed is True
    assert set_task_completed(db, task.id, completed=False).is_completed is False
    assert set_task_completed(db, 999) is None

    assert delete_task(db, task.id) is True
    assert delete_task(db, task.id) is False
