"""
User API - account CRUD keyed by id, username or email
- Single-segment paths: 24-char hex is an id, anything else a username
  (or an email on /details)
- /users/user takes optional query keys resolved by the lookup rules
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from app.api.deps import get_job_data_repository, get_user_repository
from app.core.exceptions import DuplicateUserError
from app.schemas.job_data import JobDataResponse
from app.schemas.user import UserCreate, UserReplace, UserResponse, UserUpdate
from app.services.job_data_repository import JobDataRepository
from app.services.lookup import (
    LookupKey,
    LookupKind,
    is_object_id,
    key_from_identifier,
    resolve_lookup_key,
)
from app.services.user_repository import UserRepository

logger = structlog.get_logger(__name__)
router = APIRouter()


def _not_found(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User not found: {what}")


# ==================== Read ====================

@router.get("", response_model=List[UserResponse])
async def get_all_users(users: UserRepository = Depends(get_user_repository)):
    """List every registered user account."""
    return [UserResponse.from_model(user) for user in await users.get_all()]


@router.get("/user", response_model=UserResponse)
async def get_user_by_query(
    username: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    users: UserRepository = Depends(get_user_repository),
):
    """
    Look up a user by username, email, or both.

    Both given means both must match the same account. Neither given is a 400.
    """
    key = resolve_lookup_key(username=username, email=email)
    user = await users.find(key)
    if user is None:
        raise _not_found(" / ".join(v for v in (username, email) if v))
    return UserResponse.from_model(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
):
    """Get a user by id; a segment that is not an ObjectId matches nobody."""
    user = await users.get_by_id(user_id) if is_object_id(user_id) else None
    if user is None:
        raise _not_found(user_id)
    return UserResponse.from_model(user)


@router.get("/{identifier}/details", response_model=UserResponse)
async def get_user_details(
    identifier: str,
    users: UserRepository = Depends(get_user_repository),
):
    """Get a user by username, or by email when the segment contains '@'."""
    key = key_from_identifier(identifier)
    if key.kind == LookupKind.BY_ID:
        # ids are served by /users/{id}; here a hex segment is a username
        key = LookupKey.by_username(identifier)

    user = await users.find(key)
    if user is None:
        raise _not_found(identifier)
    return UserResponse.from_model(user)


@router.get("/{username}/jobapps", response_model=List[JobDataResponse])
async def get_user_job_applications(
    username: str,
    job_data: JobDataRepository = Depends(get_job_data_repository),
):
    """List the job applications referenced by a user's JobIDs."""
    applications = await job_data.get_by_owner_username(username)
    if not applications:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No job applications found for user: {username}",
        )
    return [JobDataResponse.from_model(item) for item in applications]


# ==================== Create ====================

@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    request: Request,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
):
    """
    Register a new account.

    The username/email check runs before the insert; it is not atomic with it,
    so two concurrent requests can still both succeed.
    """
    new_user = user_in.to_model()
    if await users.exists(new_user.username, new_user.email):
        logger.info("user_create_rejected", username=new_user.username, reason="duplicate")
        raise DuplicateUserError(
            f"Username '{new_user.username}' or email '{new_user.email}' is already registered"
        )

    created = await users.create(new_user)
    response.headers["Location"] = str(request.url_for("get_user_by_id", user_id=created.id))
    return UserResponse.from_model(created)


# ==================== Update ====================

@router.put("/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def replace_user(
    identifier: str,
    user_in: UserReplace,
    users: UserRepository = Depends(get_user_repository),
):
    """Replace a whole account found by id or username; the id never changes."""
    key = key_from_identifier(identifier, allow_email=False)
    existing = await users.find(key)
    if existing is None:
        raise _not_found(identifier)

    replacement = user_in.to_replacement(existing)
    if key.kind == LookupKind.BY_ID:
        replaced = await users.replace_by_id(identifier, replacement)
    else:
        replaced = await users.replace_by_username(identifier, replacement)

    if not replaced:
        raise _not_found(identifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    identifier: str,
    user_in: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
):
    """Merge the supplied fields into an account found by id or username."""
    key = key_from_identifier(identifier, allow_email=False)
    fields = user_in.model_dump(exclude_unset=True)

    if not await users.update_fields(key, fields):
        raise _not_found(identifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==================== Delete ====================

@router.delete("/user", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_by_query(
    id: Optional[str] = Query(None),
    username: Optional[str] = Query(None),
    users: UserRepository = Depends(get_user_repository),
):
    """Delete by id, username, or both. Matching nothing is not an error."""
    key = resolve_lookup_key(id=id, username=username)
    await users.delete(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    identifier: str,
    users: UserRepository = Depends(get_user_repository),
):
    key = key_from_identifier(identifier, allow_email=False)
    if await users.find(key) is None:
        raise _not_found(identifier)

    await users.delete(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
