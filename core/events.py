# core/events.py
"""
In-process change feed.

Writers publish a resource name after a successful commit; subscribers get a
payload-less "changed" event and are expected to re-fetch. Events carry no
diff, so a subscriber whose queue is full simply misses duplicates.
"""
import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from db_models.pending_task import PendingBoard

logger = logging.getLogger(__name__)

EQUIPMENT = "equipment"
IT_CHECKLIST = "it_checklist"
TICKETS = "tickets"
INSURED_COMPUTERS = "insured_computers"


def pending_tasks_resource(board: str) -> str:
    return f"pending_tasks:{board}"


RESOURCES: frozenset[str] = frozenset(
    [EQUIPMENT, IT_CHECKLIST, TICKETS, INSURED_COMPUTERS]
    + [pending_tasks_resource(board.value) for board in PendingBoard]
)


class UnknownResourceError(Exception):
    """Raised when subscribing to a resource that is never published."""
    pass


class ChangeFeed:
    def __init__(self, max_pending: int = 16):
        self._max_pending = max_pending
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)

    def publish(self, resource: str) -> int:
        """Notify every subscriber of `resource`. Returns how many were reached."""
        delivered = 0
        for queue in list(self._subscribers.get(resource, ())):
            try:
                queue.put_nowait(resource)
                delivered += 1
            except asyncio.QueueFull:
                # Subscriber already has unread events for this resource
                pass
        logger.debug("Published change on %s to %d subscriber(s)", resource, delivered)
        return delivered

    @asynccontextmanager
    async def subscribe(self, resource: str) -> AsyncIterator[asyncio.Queue]:
        if resource not in RESOURCES:
            raise UnknownResourceError(f"Unknown resource '{resource}'")
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._max_pending)
        self._subscribers[resource].add(queue)
        try:
            yield queue
        finally:
            self._subscribers[resource].discard(queue)
            if not self._subscribers[resource]:
                del self._subscribers[resource]

    def subscriber_count(self, resource: str) -> int:
        return len(self._subscribers.get(resource, ()))


change_feed = ChangeFeed()
