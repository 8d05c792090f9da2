"""Group model."""

from pydantic import BaseModel, Field


class Group(BaseModel):
    id: int
    name: str
    ownerId: int = Field(description="User who created the group")
    userIds: list[int] = Field(
        default_factory=list,
        description="Members of the group, creator first",
    )
    createdAt: float
