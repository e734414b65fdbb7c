"""Response schemas for admin endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from profilehub.schemas.user import UserOut


class DashboardResponse(BaseModel):
    """Response for GET /admin/dashboard: every non-admin user, without passwords."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    total_users: int = Field(..., ge=0, alias="totalUsers")
    users: list[UserOut]
