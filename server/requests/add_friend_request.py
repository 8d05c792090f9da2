"""AddFriendRequest model."""

from pydantic import BaseModel


class AddFriendRequest(BaseModel):
    friendID: int
