from datetime import date, timedelta

import pytest
from sqlmodel import select

from taskboard.errors import DuplicateEmail
from taskboard.models import Task, User

DAY = date(2024, 5, 15)


def _fields(**overrides):
    fields = {"text": "Buy milk", "date": DAY, "priority": "high"}
    fields.update(overrides)
    return fields


class TestCredentialStore:
    def test_insert_and_find_by_email(self, users):
        user_id = users.insert("Ana", "a@x.com", "$2b$04$digest")

        user = users.find_by_email("a@x.com")
        assert user.id == user_id
        assert user.name == "Ana"
        assert user.password_hash == "$2b$04$digest"
        assert users.get(user_id).email == "a@x.com"

    def test_unknown_email(self, users):
        assert users.find_by_email("nobody@x.com") is None

    def test_lookup_is_case_sensitive(self, users):
        users.insert("Ana", "a@x.com", "digest")
        assert users.find_by_email("A@X.com") is None

    def test_duplicate_email_is_a_conflict(self, users, session):
        users.insert("Ana", "a@x.com", "digest")

        with pytest.raises(DuplicateEmail):
            users.insert("Other Ana", "a@x.com", "digest2")

        assert len(session.exec(select(User)).all()) == 1
        # The session is still usable after the rollback
        assert users.insert("Bea", "b@x.com", "digest3")


class TestTaskRepository:
    def test_create_defaults(self, tasks):
        task = tasks.create(_fields())

        assert task.id is not None
        assert task.folder == "default"
        assert task.completed is False
        assert task.owner_id is None

    def test_create_for_owner(self, tasks, users):
        owner = users.insert("Ana", "a@x.com", "digest")
        task = tasks.create(_fields(folder="work"), owner_id=owner)

        assert task.owner_id == owner
        assert task.folder == "work"

    def test_list_all_and_by_owner(self, tasks, users):
        ana = users.insert("Ana", "a@x.com", "digest")
        bea = users.insert("Bea", "b@x.com", "digest")
        mine = tasks.create(_fields(text="mine"), owner_id=ana)
        tasks.create(_fields(text="hers"), owner_id=bea)
        tasks.create(_fields(text="global"))

        assert [t.text for t in tasks.list_all()] == ["mine", "hers", "global"]
        assert [t.id for t in tasks.list_by_owner(ana)] == [mine.id]
        assert tasks.list_by_owner(999) == []

    def test_get_missing(self, tasks):
        assert tasks.get(42) is None

    def test_date_range_is_inclusive(self, tasks):
        start, end = DAY, DAY + timedelta(days=6)
        for offset, text in ((-1, "before"), (0, "first"), (3, "middle"), (6, "last"), (7, "after")):
            tasks.create(_fields(text=text, date=DAY + timedelta(days=offset)))

        found = [t.text for t in tasks.list_by_date_range(start, end)]
        assert found == ["first", "middle", "last"]

    def test_update(self, tasks, session):
        task = tasks.create(_fields())

        assert tasks.update(task.id, {"text": "Buy bread", "folder": "home", "completed": True})
        session.expire_all()
        updated = tasks.get(task.id)
        assert (updated.text, updated.folder, updated.completed) == ("Buy bread", "home", True)

    def test_update_missing_task(self, tasks):
        assert tasks.update(42, {"text": "nothing"}) is False

    def test_update_scoped_to_owner(self, tasks, users, session):
        ana = users.insert("Ana", "a@x.com", "digest")
        bea = users.insert("Bea", "b@x.com", "digest")
        task = tasks.create(_fields(), owner_id=ana)

        assert tasks.update(task.id, {"text": "hijacked"}, owner_id=bea) is False
        session.expire_all()
        assert tasks.get(task.id).text == "Buy milk"

    def test_set_completed(self, tasks, session):
        task = tasks.create(_fields())

        assert tasks.set_completed(task.id, True)
        session.expire_all()
        assert tasks.get(task.id).completed is True

    def test_delete(self, tasks):
        task = tasks.create(_fields())

        assert tasks.delete(task.id) is True
        assert tasks.get(task.id) is None
        # Second delete affects zero rows
        assert tasks.delete(task.id) is False

    def test_delete_scoped_to_owner(self, tasks, users):
        ana = users.insert("Ana", "a@x.com", "digest")
        bea = users.insert("Bea", "b@x.com", "digest")
        task = tasks.create(_fields(), owner_id=ana)

        assert tasks.delete(task.id, owner_id=bea) is False
        assert tasks.delete(task.id, owner_id=ana) is True


def test_timestamps_are_timezone_aware():
    task = Task(text="Buy milk", date=DAY, priority="high")
    user = User(name="Ana", email="a@x.com", password_hash="digest")

    assert task.created_at.tzinfo is not None
    assert task.updated_at.tzinfo is not None
    assert user.created_at.tzinfo is not None


def test_update_of_a_single_field(tasks, session):
    task = tasks.create(_fields())

    assert tasks.update(task.id, {"text": "Buy bread"})
    session.expire_all()
    assert tasks.get(task.id).text == "Buy bread"


class TestOutOfRangeIds:
    HUGE = 99999999999999999999

    def test_task_lookups_treat_huge_ids_as_absent(self, tasks):
        assert tasks.get(self.HUGE) is None
        assert tasks.update(self.HUGE, {"text": "nothing"}) is False
        assert tasks.set_completed(self.HUGE, True) is False
        assert tasks.delete(self.HUGE) is False
        assert tasks.list_by_owner(self.HUGE) == []

    def test_user_lookup_treats_huge_ids_as_absent(self, users):
        assert users.get(self.HUGE) is None
