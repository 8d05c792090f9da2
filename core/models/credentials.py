"""Credentials model."""

from pydantic import BaseModel


class Credentials(BaseModel):
    """A user's stored password hash. Never sent over the wire."""

    password_hash: str
    salt: str
    version: int = 1
