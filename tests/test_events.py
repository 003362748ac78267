import pytest

from core import events
from core.events import ChangeFeed, UnknownResourceError, pending_tasks_resource


@pytest.mark.anyio
async def test_publish_reaches_subscriber():
    feed = ChangeFeed()
    async with feed.subscribe(events.TICKETS) as queue:
        assert feed.publish(events.TICKETS) == 1
        assert queue.get_nowait() == events.TICKETS


@pytest.mark.anyio
async def test_publish_is_scoped_by_resource():
    feed = ChangeFeed()
    async with feed.subscribe(events.EQUIPMENT) as queue:
        assert feed.publish(events.TICKETS) == 0
        assert queue.empty()


@pytest.mark.anyio
async def test_full_queue_drops_events():
    feed = ChangeFeed(max_pending=2)
    async with feed.subscribe(events.IT_CHECKLIST) as queue:
        for _ in range(5):
            feed.publish(events.IT_CHECKLIST)
        assert queue.qsize() == 2


@pytest.mark.anyio
async def test_unsubscribe_on_exit():
    feed = ChangeFeed()
    async with feed.subscribe(pending_tasks_resource("dani")):
        assert feed.subscriber_count("pending_tasks:dani") == 1
    assert feed.subscriber_count("pending_tasks:dani") == 0
    assert feed.publish("pending_tasks:dani") == 0


@pytest.mark.anyio
async def test_unknown_resource():
    feed = ChangeFeed()
    with pytest.raises(UnknownResourceError):
        async with feed.subscribe("payroll"):
            pass


@pytest.mark.anyio
async def test_writes_publish_changes(async_client, auth_headers):
    async with events.change_feed.subscribe(events.TICKETS) as queue:
        resp = await async_client.post(
            "/api/v1/tickets",
            json={"title": "Printer jam", "area": "Printer"},
            headers=auth_headers,
        )
        assert resp.status_code == 201
        assert queue.get_nowait() == events.TICKETS


@pytest.mark.anyio
async def test_task_writes_publish_board_resource(async_client, auth_headers):
    async with events.change_feed.subscribe("pending_tasks:paco") as queue:
        resp = await async_client.post("/api/v1/tasks/paco", json={"title": "Order chargers"}, headers=auth_headers)
        assert resp.status_code == 201
        assert queue.get_nowait() == "pending_tasks:paco"


@pytest.mark.anyio
async def test_change_stream_unknown_resource(async_client, auth_headers):
    resp = await async_client.get("/api/v1/changes/payroll", headers=auth_headers)
    assert resp.status_code == 404
