from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..identity import get_repository_from_app
from ..repositories import Repository
from ..schemas import ErrorResponse, UserCreate, UserOut

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register User",
    description="Register a new user. The username is then sent in the identity header of every todo request.",
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorResponse, "description": "Username already exists"},
        422: {"description": "Validation error"},
    },
)
def create_user(payload: UserCreate, repo: Repository = Depends(get_repository_from_app)) -> UserOut:
    """
    Register a new user with an empty todo list.
    """
    created = repo.create_user(payload)
    return UserOut(**created)  # type: ignore[arg-type]
