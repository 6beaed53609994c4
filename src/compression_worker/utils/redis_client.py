import redis.asyncio as redis

from ..settings import RedisSettings


class RedisClient:
    """
    An asynchronous Redis client with connection pooling.
    """

    def __init__(self, config: RedisSettings):
        self.pool = redis.ConnectionPool(
            host=config.host,
            port=config.port,
            db=config.db,
            password=config.password,
            decode_responses=True
        )
        self.client = redis.Redis(connection_pool=self.pool)

    async def publish(self, channel: str, message: str):
        """
        Publishes a message to a Redis channel.
        """
        await self.client.publish(channel, message)

    async def rpush(self, key: str, message: str):
        """
        Appends a message to a Redis list.
        """
        await self.client.rpush(key, message)

    async def blpop(self, keys: list, timeout: float):
        """
        Blocking list pop from one or more lists.
        """
        return await self.client.blpop(keys, timeout)

    def pubsub(self):
        """
        Returns a pub/sub handle bound to the pooled client.
        """
        return self.client.pubsub()

    async def close(self):
        """
        Closes the Redis connection.
        """
        await self.client.aclose()
        await self.pool.disconnect()
