"""
FastAPI router for the users resource.

All routes delegate to the UserService. No business logic here.
Input validation is handled by Pydantic schemas and path parameter
types; error mapping is handled by centralized error handlers.

Errors map by kind on every route: UserNotFoundError is 404 and any
other StorageError is 500, so GET /users/{user_id} reports a broken
database as 500 rather than as a missing user.
"""

from fastapi import APIRouter, Depends, Path, status

from usersapi.application.users.user_service import UserService
from usersapi.interfaces.users.dependencies import get_user_service
from usersapi.interfaces.users.schemas import (
    ErrorResponse,
    UserCreateRequest,
    UserResponse,
)

# Range of the INTEGER users.id column.
MIN_USER_ID = -(2**31)
MAX_USER_ID = 2**31 - 1

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Create a user",
)
def create_user(
    request: UserCreateRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Store a new user and return it with its assigned id."""
    user = service.create_user(request.to_entity())
    return UserResponse.from_entity(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a user by id",
)
def get_user(
    user_id: int = Path(..., ge=MIN_USER_ID, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the user with the given id."""
    return UserResponse.from_entity(service.get_user_by_id(user_id))


@router.get(
    "",
    response_model=list[UserResponse],
    responses={500: {"model": ErrorResponse}},
    summary="List users",
)
def list_users(
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """Return every stored user; an empty list when there are none."""
    return [UserResponse.from_entity(user) for user in service.get_all_users()]
