"""Cursor-paginated message list."""

from pydantic import BaseModel, Field

from .message import Message


class PageInfo(BaseModel):
    hasNextPage: bool
    hasPreviousPage: bool


class MessageEdge(BaseModel):
    cursor: str
    node: Message


class MessageConnection(BaseModel):
    edges: list[MessageEdge] = Field(default_factory=list)
    pageInfo: PageInfo
