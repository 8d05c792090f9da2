"""LeaveGroupRequest model."""

from pydantic import BaseModel


class LeaveGroupRequest(BaseModel):
    userId: int | None = None
