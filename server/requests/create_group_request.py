"""CreateGroupRequest model."""

from pydantic import BaseModel, Field


class CreateGroupRequest(BaseModel):
    name: str = Field(min_length=1)
    userId: int | None = Field(
        default=None,
        description="User creating the group; taken from the token when omitted",
    )
    userIds: list[int] = Field(
        default_factory=list,
        description="Friends to add to the group",
    )
