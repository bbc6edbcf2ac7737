"""
User endpoints for API v1.

CRUD routes over the in‑memory user directory.  Each handler catches
unexpected failures itself (including an unparsable body) and answers
with a generic 500 message for that operation, so internal details
never reach the client.  Errors use the ``{"error": ...}`` envelope.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from user_directory_api.app.schemas.user import (
    ErrorResponse,
    MessageResponse,
    User,
    UserCreate,
    UserUpdate,
)
from user_directory_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS_MESSAGE = "Name, email, and role are required"
NOT_FOUND_MESSAGE = "User not found"

_error_responses = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}
_not_found_responses = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    **_error_responses,
}


def get_user_service(request: Request) -> UserService:
    """Return the service instance attached to the running application."""
    return request.app.state.user_service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _internal_error(message: str) -> JSONResponse:
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


@router.get("", response_model=List[User], responses=_error_responses)
async def list_users(service: UserService = Depends(get_user_service)):
    """Return all users in the order they were created."""
    try:
        return service.list_all()
    except Exception:
        logger.exception("Failed to list users")
        return _internal_error("Failed to fetch users")


@router.get("/{user_id}", response_model=User, responses=_not_found_responses)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Return a single user, or 404 if the id is unknown."""
    try:
        user = service.get_by_id(user_id)
    except Exception:
        logger.exception("Failed to fetch user %s", user_id)
        return _internal_error("Failed to fetch user")
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return user


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}, **_error_responses},
)
async def create_user(request: Request, service: UserService = Depends(get_user_service)):
    """Create a user from ``name``, ``email`` and ``role``.

    All three must be present and non‑empty; otherwise the request is
    rejected with 400 before the service is touched.
    """
    try:
        payload = UserCreate.model_validate(await request.json())
        missing = payload.missing_fields()
        if missing:
            logger.info("Rejected user creation, missing: %s", ", ".join(missing))
            return _error(status.HTTP_400_BAD_REQUEST, REQUIRED_FIELDS_MESSAGE)
        return service.create(payload.name, payload.email, payload.role)
    except Exception:
        logger.exception("Failed to create user")
        return _internal_error("Failed to create user")


@router.put("/{user_id}", response_model=User, responses=_not_found_responses)
async def update_user(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    """Update any subset of ``name``, ``email`` and ``role``.

    An empty object is accepted and leaves the user unchanged.
    """
    try:
        payload = UserUpdate.model_validate(await request.json())
        user = service.update(user_id, payload.changes())
    except Exception:
        logger.exception("Failed to update user %s", user_id)
        return _internal_error("Failed to update user")
    if user is None:
        logger.info("Update of unknown user %s", user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return user


@router.delete("/{user_id}", response_model=MessageResponse, responses=_not_found_responses)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Delete a user by ID."""
    try:
        deleted = service.delete(user_id)
    except Exception:
        logger.exception("Failed to delete user %s", user_id)
        return _internal_error("Failed to delete user")
    if not deleted:
        logger.info("Delete of unknown user %s", user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return MessageResponse(message="User deleted successfully")
