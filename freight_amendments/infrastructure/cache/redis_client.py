# freight_amendments/infrastructure/cache/redis_client.py

import redis.asyncio as redis

from freight_amendments.config.settings import settings


class RedisClient:
    def __init__(self):
        self.client = redis.from_url(
            settings.redis_url,
            decode_responses=True,
        )

    async def set_cache(self, key: str, value: str, ttl: int = 300):
        await self.client.set(key, value, ex=ttl)

    async def get_cache(self, key: str):
        return await self.client.get(key)
