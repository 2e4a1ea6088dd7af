from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from noteboard.core.resources import Collection
from noteboard.dependencies import get_change_bus, get_current_user

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from noteboard.core.events import ChangeBus
    from noteboard.core.schemas.auth import SessionUser

router = APIRouter()

KEEPALIVE_SECONDS = 15.0


async def stream_events(
    bus: ChangeBus,
    resource: Collection,
    request: Request,
    user_id: str,
    keepalive: float = KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    """Yield server-sent events on `resource` until the client disconnects.

    The subscription only exists while the stream is being consumed.
    """
    with bus.subscribe(resource, user_id) as sub:
        while not await request.is_disconnected():
            try:
                event = await asyncio.wait_for(sub.get(), timeout=keepalive)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield f"event: {event.action}\ndata: {event.model_dump_json(by_alias=True)}\n\n"


@router.get("/{resource}")
async def subscribe_to_changes(
    resource: Collection,
    request: Request,
    current_user: SessionUser = Depends(get_current_user),
    bus: ChangeBus = Depends(get_change_bus),
):
    """Stream change notifications for one collection as text/event-stream.

    Views reload the collection when an event arrives.
    """
    return StreamingResponse(
        stream_events(bus, resource, request, current_user.id),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
