from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Literal

from pydantic import Field

from noteboard.core.models.base import AppBaseModel
from noteboard.utils.logging import get_logger

if TYPE_CHECKING:
    from noteboard.core.resources import Collection

logger = get_logger(__name__)

ChangeAction = Literal["created", "updated", "deleted"]


class ChangeEvent(AppBaseModel):
    """Notification that a record in `resource` changed."""

    resource: str
    action: ChangeAction
    record_id: str | None = None
    audience: list[str] | None = Field(default=None, exclude=True)

    def is_visible_to(self, user_id: str) -> bool:
        """Events without an audience concern shared records."""
        return self.audience is None or user_id in self.audience


class Subscription:
    """One subscriber's queue on a resource channel.

    With a `user_id`, only events visible to that user are queued. Use as a
    context manager or call `close()` to stop receiving events.
    """

    def __init__(
        self, bus: ChangeBus, resource: str, maxsize: int, user_id: str | None = None
    ) -> None:
        self.resource = resource
        self.user_id = user_id
        self._bus = bus
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(maxsize=maxsize)
        self.closed = False

    async def get(self) -> ChangeEvent:
        return await self._queue.get()

    def get_nowait(self) -> ChangeEvent | None:
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def pending(self) -> int:
        return self._queue.qsize()

    def offer(self, event: ChangeEvent) -> bool:
        if self.user_id is not None and not event.is_visible_to(self.user_id):
            return False
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning(
                "Dropping change event for slow subscriber",
                extra={"resource": self.resource, "action": event.action},
            )
            return False
        return True

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._bus._remove(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __aiter__(self) -> Subscription:
        return self

    async def __anext__(self) -> ChangeEvent:
        return await self.get()


class ChangeBus:
    """Per-resource change channels with one bounded queue per subscriber.

    An event reaches every subscriber registered on its resource at publish
    time whose user is in the event's audience. Publishing never blocks; a
    full queue drops that subscriber's copy.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._max_queue_size = max_queue_size
        self._subscribers: dict[str, list[Subscription]] = {}

    def subscribe(self, resource: Collection | str, user_id: str | None = None) -> Subscription:
        key = _key(resource)
        sub = Subscription(self, key, self._max_queue_size, user_id)
        self._subscribers.setdefault(key, []).append(sub)
        return sub

    def publish(
        self,
        resource: Collection | str,
        action: ChangeAction,
        record_id: str | None = None,
        audience: list[str] | None = None,
    ) -> int:
        """Deliver an event; returns the number of subscribers that received it.

        `audience` lists the user ids allowed to see the event (None: everyone).
        """
        key = _key(resource)
        event = ChangeEvent(resource=key, action=action, record_id=record_id, audience=audience)
        delivered = sum(1 for sub in list(self._subscribers.get(key, [])) if sub.offer(event))
        logger.debug("Published change event", extra={"resource": key, "action": action, "delivered": delivered})
        return delivered

    def subscriber_count(self, resource: Collection | str) -> int:
        return len(self._subscribers.get(_key(resource), []))

    def _remove(self, sub: Subscription) -> None:
        subs = self._subscribers.get(sub.resource, [])
        if sub in subs:
            subs.remove(sub)
        if not subs:
            self._subscribers.pop(sub.resource, None)


def _key(resource: Collection | str) -> str:
    return getattr(resource, "value", resource)
