import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from ableton_inspector.websocket.broadcaster import MessageBroadcaster


async def _drain():
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_broadcast_reaches_every_client_in_order():
    broadcaster = MessageBroadcaster()
    first, second = AsyncMock(), AsyncMock()
    await broadcaster.register(first)
    await broadcaster.register(second)

    await broadcaster.broadcast({"type": "ACK", "payload": {"n": 1}})
    await broadcaster.broadcast({"type": "ACK", "payload": {"n": 2}})
    await _drain()

    for ws in (first, second):
        sent = [json.loads(call.args[0])["payload"]["n"] for call in ws.send.await_args_list]
        assert sent == [1, 2]

    await broadcaster.close_all()


@pytest.mark.asyncio
async def test_register_is_idempotent():
    broadcaster = MessageBroadcaster()
    ws = AsyncMock()

    await broadcaster.register(ws)
    await broadcaster.register(ws)

    assert broadcaster.get_client_count() == 1
    await broadcaster.close_all()


@pytest.mark.asyncio
async def test_send_to_client_targets_one_client():
    broadcaster = MessageBroadcaster()
    target, other = AsyncMock(), AsyncMock()
    await broadcaster.register(target)
    await broadcaster.register(other)

    await broadcaster.send_to_client(target, {"type": "ACK", "payload": {}})
    await _drain()

    target.send.assert_awaited_once()
    other.send.assert_not_awaited()
    await broadcaster.close_all()


@pytest.mark.asyncio
async def test_send_to_unregistered_client_is_dropped():
    broadcaster = MessageBroadcaster()
    ws = AsyncMock()

    await broadcaster.send_to_client(ws, {"type": "ACK", "payload": {}})
    await _drain()

    ws.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_send_unregisters_client():
    broadcaster = MessageBroadcaster()
    ws = AsyncMock()
    ws.send.side_effect = ConnectionError("gone")
    await broadcaster.register(ws)

    await broadcaster.broadcast({"type": "ACK", "payload": {}})
    await _drain()

    assert broadcaster.get_client_count() == 0


@pytest.mark.asyncio
async def test_full_queue_drops_messages():
    broadcaster = MessageBroadcaster(max_queue_size=1)
    ws = AsyncMock()
    await broadcaster.register(ws)

    # Nothing drains until the event loop runs the sender task
    await broadcaster.broadcast({"type": "ACK", "payload": {"n": 1}})
    await broadcaster.broadcast({"type": "ACK", "payload": {"n": 2}})
    await _drain()

    assert ws.send.await_count == 1
    await broadcaster.close_all()


@pytest.mark.asyncio
async def test_close_all_closes_connections():
    broadcaster = MessageBroadcaster()
    ws = AsyncMock()
    await broadcaster.register(ws)

    await broadcaster.close_all()

    ws.close.assert_awaited_once()
    assert broadcaster.get_client_count() == 0
