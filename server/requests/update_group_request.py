"""UpdateGroupRequest model."""

from pydantic import BaseModel


class UpdateGroupRequest(BaseModel):
    name: str | None = None
