import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from compression_worker.errors import MessageSerializationError
from compression_worker.transport.redis_transport import RedisTransport


@pytest.fixture
def transport(mock_redis_client):
    return RedisTransport(mock_redis_client, request_queue="compression_requests", reply_channel="compression_replies")


@pytest.mark.asyncio
async def test_receive_pops_and_decodes(transport, mock_redis_client):
    mock_redis_client.blpop.return_value = ("compression_requests", json.dumps({"id": "r1", "type": "compressImage"}))

    message = await transport.receive(timeout=1)

    assert message == {"id": "r1", "type": "compressImage"}
    mock_redis_client.blpop.assert_awaited_once_with(["compression_requests"], timeout=1)


@pytest.mark.asyncio
async def test_receive_returns_none_on_timeout(transport):
    assert await transport.receive(timeout=1) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["{not json", "[1, 2]"])
async def test_receive_rejects_bad_payloads(transport, mock_redis_client, raw):
    mock_redis_client.blpop.return_value = ("compression_requests", raw)

    with pytest.raises(MessageSerializationError):
        await transport.receive(timeout=1)


@pytest.mark.asyncio
async def test_send_publishes_json(transport, mock_redis_client):
    await transport.send({"id": "r1", "success": True, "result": {"width": 1}})

    channel, payload = mock_redis_client.publish.await_args.args
    assert channel == "compression_replies"
    assert json.loads(payload) == {"id": "r1", "success": True, "result": {"width": 1}}


@pytest.mark.asyncio
async def test_send_rejects_unserializable(transport):
    with pytest.raises(MessageSerializationError):
        await transport.send({"id": "r1", "success": True, "result": b"raw bytes"})


@pytest.mark.asyncio
async def test_submit_pushes_to_queue(transport, mock_redis_client):
    await transport.submit({"id": "r2", "type": "compressAudio"})

    key, payload = mock_redis_client.rpush.await_args.args
    assert key == "compression_requests"
    assert json.loads(payload)["id"] == "r2"


@pytest.mark.asyncio
async def test_subscribe_yields_decoded_messages(transport, mock_redis_client):
    async def listen():
        yield {"type": "subscribe", "data": 1}
        yield {"type": "message", "data": "garbage"}
        yield {"type": "message", "data": json.dumps({"id": "r1", "success": True, "result": {}})}

    pubsub = MagicMock()
    pubsub.subscribe = AsyncMock()
    pubsub.unsubscribe = AsyncMock()
    pubsub.aclose = AsyncMock()
    pubsub.listen = listen
    mock_redis_client.pubsub.return_value = pubsub

    replies = await transport.subscribe()
    received = [message async for message in replies]

    pubsub.subscribe.assert_awaited_once_with("compression_replies")
    assert received == [{"id": "r1", "success": True, "result": {}}]
    pubsub.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_closes_client(transport, mock_redis_client):
    await transport.close()

    mock_redis_client.close.assert_awaited_once()
