from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Dict, Optional

from ..errors import MessageSerializationError
from ..settings import RedisSettings, WorkerSettings
from ..utils.redis_client import RedisClient
from .base import Transport


class RedisTransport(Transport):
    """Requests on a Redis list (RPUSH/BLPOP), replies on a pub/sub channel."""

    def __init__(self, client: RedisClient, *, request_queue: str, reply_channel: str) -> None:
        self.client = client
        self.request_queue = request_queue
        self.reply_channel = reply_channel
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, redis_settings: RedisSettings, worker_settings: WorkerSettings) -> "RedisTransport":
        return cls(
            RedisClient(redis_settings),
            request_queue=worker_settings.request_queue,
            reply_channel=worker_settings.reply_channel,
        )

    async def receive(self, timeout: float) -> Optional[Dict[str, Any]]:
        item = await self.client.blpop([self.request_queue], timeout=timeout)
        if not item:
            return None
        _, raw = item
        return self._loads(raw, "request")

    async def send(self, message: Dict[str, Any]) -> None:
        await self.client.publish(self.reply_channel, self._dumps(message))

    async def submit(self, message: Dict[str, Any]) -> None:
        await self.client.rpush(self.request_queue, self._dumps(message))

    async def subscribe(self) -> AsyncIterator[Dict[str, Any]]:
        pubsub = self.client.pubsub()
        await pubsub.subscribe(self.reply_channel)
        self.logger.info(f"Subscribed to reply channel: {self.reply_channel}")
        return self._iter_replies(pubsub)

    async def _iter_replies(self, pubsub) -> AsyncIterator[Dict[str, Any]]:
        try:
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                try:
                    yield self._loads(message.get("data"), "reply")
                except MessageSerializationError as e:
                    self.logger.warning(f"Skipping undecodable reply: {e}")
        finally:
            await pubsub.unsubscribe(self.reply_channel)
            await pubsub.aclose()

    async def close(self) -> None:
        await self.client.close()

    @staticmethod
    def _loads(raw: Any, what: str) -> Dict[str, Any]:
        try:
            data = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            raise MessageSerializationError(f"Invalid JSON in {what}: {e}") from e
        if not isinstance(data, dict):
            raise MessageSerializationError(f"Expected a JSON object in {what}, got {type(data).__name__}")
        return data

    @staticmethod
    def _dumps(message: Dict[str, Any]) -> str:
        try:
            return json.dumps(message)
        except (TypeError, ValueError) as e:
            raise MessageSerializationError(f"Cannot serialize message: {e}") from e
