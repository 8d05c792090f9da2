"""Message model."""

from pydantic import BaseModel


class Message(BaseModel):
    id: int
    userId: int
    groupId: int
    text: str
    createdAt: float
