from __future__ import annotations

from datetime import datetime
from typing import List, TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A single task record owned by exactly one user.

    Fields:
    - id: Unique identifier (uuid4 string)
    - title: Task title
    - done: Completion flag; only ever flipped to True
    - deadline: Due datetime (UTC, timezone-aware)
    - created_at: Creation timestamp (UTC, timezone-aware)
    """

    id: str
    title: str
    done: bool
    deadline: datetime
    created_at: datetime


# PUBLIC_INTERFACE
class UserEntity(TypedDict):
    """
    A registered identity owning a private, ordered list of todos.

    Fields:
    - id: Unique identifier (uuid4 string)
    - name: Display name
    - username: Unique external identity key
    - todos: Owned todos in insertion order
    """

    id: str
    name: str
    username: str
    todos: List[TodoEntity]
