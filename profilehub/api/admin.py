"""Admin endpoints: list users and delete a user. Admin role required."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from profilehub.api.auth import AuthenticatedUser, authorize, get_current_user
from profilehub.api.deps import Users
from profilehub.core.roles import Role
from profilehub.schemas.admin import DashboardResponse
from profilehub.schemas.auth import MessageResponse
from profilehub.schemas.user import UserOut

logger = logging.getLogger(__name__)

# Upper bound of the users.id INTEGER column.
MAX_USER_ID = 2**31 - 1

router = APIRouter(dependencies=[Depends(get_current_user), Depends(authorize(Role.ADMIN))])


def _parse_user_id(raw: str) -> int:
    if not (raw.isascii() and raw.isdigit()) or not 1 <= int(raw) <= MAX_USER_ID:
        logger.error("Invalid user id: %s", raw)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user id")
    return int(raw)


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(users: Users) -> DashboardResponse:
    """All users with role 'user' (admins excluded); passwords are never included."""
    try:
        records = await users.list_by_role(Role.USER)
    except Exception:
        logger.exception("Error fetching users")
        raise HTTPException(status_code=500, detail="Server error while fetching user details.")
    return DashboardResponse(
        message="All user details fetched successfully.",
        total_users=len(records),
        users=[UserOut.model_validate(u) for u in records],
    )


@router.delete("/deleteUser/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, admin: AuthenticatedUser, users: Users) -> MessageResponse:
    """Delete a user by id. 404 if no such user."""
    target_id = _parse_user_id(user_id)
    try:
        deleted = await users.delete_by_id(target_id)
    except Exception:
        logger.exception("Error deleting user id=%s", target_id)
        raise HTTPException(status_code=500, detail="Server error while deleting user")
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    logger.info("Admin id=%s deleted user id=%s", admin.id, target_id)
    return MessageResponse(message="User successfully deleted")
