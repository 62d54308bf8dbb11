from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..identity import get_identity_dependency, get_repository_from_app
from ..repositories import Repository
from ..schemas import ErrorResponse, TodoCreate, TodoOut, TodoUpdate

current_user = get_identity_dependency()

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={404: {"model": ErrorResponse, "description": "User or todo not found"}},
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List the acting user's todos in creation order.",
    responses={200: {"description": "List retrieved successfully"}},
)
def list_todos(
    username: str = Depends(current_user),
    repo: Repository = Depends(get_repository_from_app),
) -> List[TodoOut]:
    """
    List the acting user's todos.
    """
    return [TodoOut(**t) for t in repo.list_todos(username)]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item for the acting user and return it.",
    responses={
        201: {"description": "Todo created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_todo(
    payload: TodoCreate,
    username: str = Depends(current_user),
    repo: Repository = Depends(get_repository_from_app),
) -> TodoOut:
    """
    Create a new Todo.
    """
    created = repo.create_todo(username, payload)
    return TodoOut(**created)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description="Replace the title and deadline of a Todo item. Completion state is left as is.",
    responses={200: {"description": "Todo updated"}},
)
def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    username: str = Depends(current_user),
    repo: Repository = Depends(get_repository_from_app),
) -> TodoOut:
    """
    Replace title and deadline of a Todo.
    """
    updated = repo.update_todo(username, todo_id, payload)
    return TodoOut(**updated)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}/done",
    response_model=TodoOut,
    summary="Complete Todo",
    description="Mark a Todo item as done. Completing an already-done item succeeds and changes nothing.",
    responses={200: {"description": "Todo marked as done"}},
)
def complete_todo(
    todo_id: str,
    username: str = Depends(current_user),
    repo: Repository = Depends(get_repository_from_app),
) -> TodoOut:
    """
    Mark a Todo as done.
    """
    completed = repo.complete_todo(username, todo_id)
    return TodoOut(**completed)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={204: {"description": "Todo deleted"}},
)
def delete_todo(
    todo_id: str,
    username: str = Depends(current_user),
    repo: Repository = Depends(get_repository_from_app),
) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    repo.delete_todo(username, todo_id)
    return None
