from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from todo_service.errors import ConflictError, IdentityNotFoundError, NotFoundError
from todo_service.repositories import InMemoryRepository, Repository, get_repository
from todo_service.schemas import TodoCreate, TodoUpdate, UserCreate


def new_todo(title="Task", deadline="2024-01-01"):
    return TodoCreate(title=title, deadline=deadline)


@pytest.fixture()
def store():
    s = InMemoryRepository()
    s.create_user(UserCreate(name="Ana", username="ana"))
    return s


class TestUserStore:
    def test_factory_returns_empty_store(self):
        repo = get_repository()
        assert isinstance(repo, Repository)
        assert repo.count_users() == 0

    def test_create_and_find(self):
        repo = InMemoryRepository()
        created = repo.create_user(UserCreate(name="Ana", username="ana"))
        assert created["todos"] == []
        assert repo.find_by_username("ana") == created
        assert repo.find_by_username("bob") is None

    def test_exists(self):
        repo = InMemoryRepository()
        assert repo.exists("ana") is False
        repo.create_user(UserCreate(name="Ana", username="ana"))
        assert repo.exists("ana") is True
        assert repo.exists("Ana") is False

    def test_duplicate_username_keeps_single_user(self):
        repo = InMemoryRepository()
        repo.create_user(UserCreate(name="Ana", username="ana"))
        with pytest.raises(ConflictError):
            repo.create_user(UserCreate(name="Ana 2", username="ana"))
        assert repo.count_users() == 1

    def test_returned_user_is_a_copy(self, store):
        user = store.find_by_username("ana")
        user["todos"].append({"id": "x"})
        user["name"] = "Mallory"
        assert store.find_by_username("ana")["todos"] == []
        assert store.find_by_username("ana")["name"] == "Ana"


class TestTodoOperations:
    def test_create_defaults(self, store):
        todo = store.create_todo("ana", new_todo("buy milk"))
        assert todo["done"] is False
        assert todo["title"] == "buy milk"
        assert todo["deadline"] == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert todo["created_at"].tzinfo is not None

    def test_list_in_creation_order(self, store):
        ids = [store.create_todo("ana", new_todo(f"T{i}"))["id"] for i in range(5)]
        assert [t["id"] for t in store.list_todos("ana")] == ids

    def test_update_replaces_title_and_deadline(self, store):
        todo = store.create_todo("ana", new_todo("old"))
        store.complete_todo("ana", todo["id"])
        updated = store.update_todo("ana", todo["id"], TodoUpdate(title="new", deadline="2025-06-01T08:00:00"))
        assert updated["title"] == "new"
        assert updated["deadline"] == datetime(2025, 6, 1, 8, tzinfo=timezone.utc)
        assert updated["done"] is True
        assert updated["created_at"] == todo["created_at"]
        assert store.list_todos("ana") == [updated]

    def test_complete_twice(self, store):
        todo = store.create_todo("ana", new_todo())
        assert store.complete_todo("ana", todo["id"])["done"] is True
        assert store.complete_todo("ana", todo["id"])["done"] is True

    def test_delete_removes_exactly_one(self, store):
        ids = [store.create_todo("ana", new_todo(f"T{i}"))["id"] for i in range(3)]
        store.delete_todo("ana", ids[0])
        assert [t["id"] for t in store.list_todos("ana")] == ids[1:]

    @pytest.mark.parametrize("operation", ["update", "complete", "delete"])
    def test_unknown_id_leaves_list_unchanged(self, store, operation):
        store.create_todo("ana", new_todo())
        before = store.list_todos("ana")
        with pytest.raises(NotFoundError):
            if operation == "update":
                store.update_todo("ana", "missing", TodoUpdate(title="x", deadline="2024-01-01"))
            elif operation == "complete":
                store.complete_todo("ana", "missing")
            else:
                store.delete_todo("ana", "missing")
        assert store.list_todos("ana") == before

    def test_unknown_owner(self, store):
        with pytest.raises(IdentityNotFoundError):
            store.list_todos("bob")
        with pytest.raises(IdentityNotFoundError):
            store.create_todo("bob", new_todo())

    def test_listing_is_a_snapshot(self, store):
        todo = store.create_todo("ana", new_todo())
        listed = store.list_todos("ana")
        listed[0]["done"] = True
        listed.clear()
        assert store.list_todos("ana")[0]["id"] == todo["id"]
        assert store.list_todos("ana")[0]["done"] is False


class TestConcurrency:
    def test_concurrent_creates_are_not_lost(self, store):
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: store.create_todo("ana", new_todo(f"T{i}")), range(200)))
        todos = store.list_todos("ana")
        assert len(todos) == 200
        assert len({t["id"] for t in todos}) == 200

    def test_concurrent_registration_of_same_username(self):
        repo = InMemoryRepository()

        def attempt(_):
            try:
                repo.create_user(UserCreate(name="Ana", username="ana"))
                return True
            except ConflictError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(50)))
        assert results.count(True) == 1
        assert repo.count_users() == 1
