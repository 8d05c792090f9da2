"""Arguments a client supplies when opening a subscription."""

from pydantic import BaseModel, Field


class MessageAddedArgs(BaseModel):
    userId: int | None = None
    groupIds: list[int] | None = Field(
        default=None,
        description="Groups to receive messages for",
    )


class GroupAddedArgs(BaseModel):
    userId: int | None = None
