# =============================================================================
# app/routers/users.py - User CRUD Endpoints
# =============================================================================
# Handles listing, creating and deleting users.
# Handlers are plain functions: FastAPI runs them on its thread pool, so the
# blocking Supabase calls never stall the event loop.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.dependencies import UserServiceDep
from core.models.user import DeleteUserResponse, UserCreate, UserResponse

router = APIRouter()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=list[UserResponse])
def list_users(service: UserServiceDep):
    """
    List all users.

    Returns every stored user, newest first.
    """
    return service.list_users()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(request: UserCreate, service: UserServiceDep):
    """
    Create a new user.

    - name, email and role are required; blank values count as missing
    - role must be one of developer, designer, manager, admin
    - email is stored lower-cased and must not already exist
    """
    return service.create_user(request)


@router.delete("/{user_id}", response_model=DeleteUserResponse)
def delete_user(
    user_id: Annotated[str, Path(description="User id")],
    service: UserServiceDep,
):
    """
    Delete a user.

    Returns 404 if no user has this id.
    """
    service.delete_user(user_id)
    return DeleteUserResponse()
