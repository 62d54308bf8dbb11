from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from datetime import datetime, timezone
from threading import RLock
from typing import List, Optional
from uuid import uuid4

from .errors import ConflictError, IdentityNotFoundError, NotFoundError
from .models import TodoEntity, UserEntity
from .schemas import TodoCreate, TodoUpdate, UserCreate

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for the user store and the todos each user owns."""

    @abstractmethod
    def create_user(self, data: UserCreate) -> UserEntity:
        """Create and return a new user. Raise ConflictError if the username is taken."""

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[UserEntity]:
        """Return the user with this username, or None if not found."""

    @abstractmethod
    def exists(self, username: str) -> bool:
        """Return True if a user with this username is registered."""

    @abstractmethod
    def count_users(self) -> int:
        """Return the number of registered users."""

    @abstractmethod
    def list_todos(self, username: str) -> List[TodoEntity]:
        """Return the user's todos in creation order."""

    @abstractmethod
    def create_todo(self, username: str, data: TodoCreate) -> TodoEntity:
        """Append a new todo to the user's list and return it."""

    @abstractmethod
    def update_todo(self, username: str, todo_id: str, data: TodoUpdate) -> TodoEntity:
        """Replace title and deadline of a todo. Raise NotFoundError if absent."""

    @abstractmethod
    def complete_todo(self, username: str, todo_id: str) -> TodoEntity:
        """Mark a todo as done. Raise NotFoundError if absent."""

    @abstractmethod
    def delete_todo(self, username: str, todo_id: str) -> None:
        """Remove a todo from the user's list. Raise NotFoundError if absent."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository. State lives for the lifetime of the
    instance; nothing is persisted.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._users: List[UserEntity] = []

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _user(self, username: str) -> UserEntity:
        # Callers hold the lock
        for user in self._users:
            if user["username"] == username:
                return user
        raise IdentityNotFoundError()

    def _todo_index(self, user: UserEntity, todo_id: str) -> int:
        for i, todo in enumerate(user["todos"]):
            if todo["id"] == todo_id:
                return i
        logger.info("Todo not found", extra={"username": user["username"], "todo_id": todo_id})
        raise NotFoundError()

    def create_user(self, data: UserCreate) -> UserEntity:
        with self._lock:
            if any(u["username"] == data.username for u in self._users):
                logger.warning("Username already exists", extra={"username": data.username})
                raise ConflictError()
            user: UserEntity = {
                "id": str(uuid4()),
                "name": data.name,
                "username": data.username,
                "todos": [],
            }
            self._users.append(user)
            logger.info("User registered", extra={"username": user["username"], "user_id": user["id"]})
            return deepcopy(user)

    def find_by_username(self, username: str) -> Optional[UserEntity]:
        with self._lock:
            for user in self._users:
                if user["username"] == username:
                    return deepcopy(user)
            return None

    def exists(self, username: str) -> bool:
        with self._lock:
            return any(u["username"] == username for u in self._users)

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    def list_todos(self, username: str) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in self._user(username)["todos"]]

    def create_todo(self, username: str, data: TodoCreate) -> TodoEntity:
        todo: TodoEntity = {
            "id": str(uuid4()),
            "title": data.title,
            "done": False,
            "deadline": data.deadline,
            "created_at": self._now(),
        }
        with self._lock:
            self._user(username)["todos"].append(todo)
        logger.info("Todo created", extra={"username": username, "todo_id": todo["id"]})
        return todo.copy()

    def update_todo(self, username: str, todo_id: str, data: TodoUpdate) -> TodoEntity:
        with self._lock:
            user = self._user(username)
            todo = user["todos"][self._todo_index(user, todo_id)]
            todo["title"] = data.title
            todo["deadline"] = data.deadline
            logger.info("Todo updated", extra={"username": username, "todo_id": todo_id})
            return todo.copy()

    def complete_todo(self, username: str, todo_id: str) -> TodoEntity:
        with self._lock:
            user = self._user(username)
            todo = user["todos"][self._todo_index(user, todo_id)]
            todo["done"] = True
            logger.info("Todo completed", extra={"username": username, "todo_id": todo_id})
            return todo.copy()

    def delete_todo(self, username: str, todo_id: str) -> None:
        with self._lock:
            user = self._user(username)
            del user["todos"][self._todo_index(user, todo_id)]
        logger.info("Todo deleted", extra={"username": username, "todo_id": todo_id})


# PUBLIC_INTERFACE
def get_repository() -> Repository:
    """Factory returning a fresh, empty in-memory repository."""
    return InMemoryRepository()
