from datetime import date

import pytest

from taskboard.errors import AuthorizationDenied
from taskboard.guards import OwnershipGuard

FIELDS = {"text": "Pay rent", "date": date(2024, 5, 1), "priority": "high", "folder": "home"}


@pytest.fixture()
def guard(tasks):
    return OwnershipGuard(tasks)


@pytest.fixture()
def owners(users):
    return users.insert("Ana", "a@x.com", "digest"), users.insert("Bea", "b@x.com", "digest")


def test_owner_gets_the_task(guard, tasks, owners):
    ana, _ = owners
    task = tasks.create(FIELDS, owner_id=ana)

    assert guard.authorize(ana, task.id).id == task.id


def test_missing_and_foreign_tasks_are_denied_alike(guard, tasks, owners):
    ana, bea = owners
    task = tasks.create(FIELDS, owner_id=ana)

    with pytest.raises(AuthorizationDenied) as missing:
        guard.authorize(bea, 999)
    with pytest.raises(AuthorizationDenied) as foreign:
        guard.authorize(bea, task.id)

    assert missing.value.status_code == foreign.value.status_code == 404
    assert missing.value.detail == foreign.value.detail


def test_tasks_without_owner_are_denied(guard, tasks, owners):
    ana, _ = owners
    task = tasks.create(FIELDS)

    with pytest.raises(AuthorizationDenied):
        guard.authorize(ana, task.id)
