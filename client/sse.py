"""Minimal server-sent events parsing for streamed HTTP responses."""

from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass


@dataclass
class ServerSentEvent:
    event: str = "message"
    data: str = ""
    id: str | None = None


async def iter_sse(lines: AsyncIterable[str]) -> AsyncIterator[ServerSentEvent]:
    """
    Group response lines into events.

    Comment lines (keep-alive pings) are skipped; an event is emitted at each
    blank line that follows at least one data field.
    """
    event = ServerSentEvent()
    data: list[str] = []

    async for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            if data:
                event.data = "\n".join(data)
                yield event
            event = ServerSentEvent()
            data = []
            continue
        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if field == "event":
            event.event = value
        elif field == "data":
            data.append(value)
        elif field == "id":
            event.id = value

    if data:
        event.data = "\n".join(data)
        yield event
