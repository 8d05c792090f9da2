"""CreateMessageRequest model."""

from pydantic import BaseModel, Field


class CreateMessageRequest(BaseModel):
    text: str = Field(min_length=1)
    groupId: int
    userId: int | None = Field(default=None, description="Author; taken from the token when omitted")
