from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Incoming deadline can be a date, datetime, or ISO8601 string
DeadlineInput = Union[date, datetime, str]


def _to_utc(value: datetime) -> datetime:
    # Naive values are taken to already be in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        # Offsets can push year 1 / year 9999 values outside datetime's range
        raise ValueError("Deadline out of range once converted to UTC.") from e


def parse_deadline(value: DeadlineInput) -> datetime:
    """
    Normalize deadline input into a timezone-aware UTC datetime.
    - A string is parsed as an ISO8601 datetime first, then as a date (midnight UTC).
    - A date (not datetime) is promoted to midnight UTC.
    - A datetime is converted to UTC; naive datetimes are assumed to be UTC.
    """
    if isinstance(value, datetime):
        return _to_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, str):
        s = value.strip()
        # fromisoformat only learned the 'Z' suffix in 3.11
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            return _to_utc(datetime.fromisoformat(s))
        except ValueError:
            try:
                d = date.fromisoformat(s)
            except ValueError as e:
                raise ValueError(
                    "Invalid deadline format. Use ISO8601 date or datetime string "
                    "(e.g., '2024-01-01' or '2024-01-01T13:45:00Z')."
                ) from e
            return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)

    raise ValueError("Invalid type for deadline; expected date, datetime, or ISO8601 string.")


# PUBLIC_INTERFACE
class UserCreate(BaseModel):
    """
    Schema for registering a new user.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Ana", "username": "ana"}}
    )

    name: str = Field(..., description="Display name")
    username: str = Field(..., description="Unique username, sent back in the identity header", min_length=1)


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "buy milk", "deadline": "2024-01-01"}}
    )

    title: str = Field(..., description="Short title for the todo item")
    deadline: datetime = Field(
        ...,
        description="Deadline of the todo item. Accepts ISO8601 date or datetime; dates are set to 00:00 UTC",
    )

    @field_validator("deadline", mode="before")
    @classmethod
    def normalize_deadline(cls, v: DeadlineInput) -> datetime:
        """
        Normalize deadline from str/date/datetime to a UTC datetime.
        """
        return parse_deadline(v)


# PUBLIC_INTERFACE
class TodoUpdate(TodoCreate):
    """
    Schema for updating an existing Todo item.
    Both fields are required; title and deadline are replaced as a whole.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "buy oat milk", "deadline": "2024-01-02T09:30:00Z"}}
    )


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "5b7c1b8e-4f7a-4bb4-9a57-3c4f3b0f2a11",
                "title": "buy milk",
                "done": False,
                "deadline": "2024-01-01T00:00:00Z",
                "created_at": "2023-12-30T10:15:30.123456Z",
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    done: bool = Field(..., description="Completion status flag")
    deadline: datetime = Field(..., description="Deadline as an ISO8601 UTC datetime")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")


# PUBLIC_INTERFACE
class UserOut(BaseModel):
    """
    Schema returned by the API for a user.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0c6e8b3e-2d1f-4c34-8f2e-1e7b5c9d4a20",
                "name": "Ana",
                "username": "ana",
                "todos": [],
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the user")
    name: str = Field(..., description="Display name")
    username: str = Field(..., description="Unique username")
    todos: List[TodoOut] = Field(default_factory=list, description="Todos owned by the user, in creation order")


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """
    Error payload returned for every client-facing failure.
    """

    error: str = Field(..., description="Error category, e.g. NotFoundError")
    message: str = Field(..., description="Human-readable error message")
