import logging
from datetime import datetime, timezone
import redis.asyncio as aioredis
from redis.exceptions import WatchError
from app.config import REDIS_URL

logger = logging.getLogger(__name__)

def _utc_timestamp() -> str:
    # UTC with milliseconds and a Z suffix: 2024-01-01T12:00:00.000Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

class FavoritesRepository:
    """
    Favorite Pokemon stored in Redis.

    favorites:next_id        counter handing out favorite ids
    favorites:index          sorted set of pokemon ids, scored by favorite id
    favorites:<pokemon_id>   hash with id, pokemon_id, name, created_at
    """
    KEY_PREFIX = "favorites"
    INDEX_KEY = f"{KEY_PREFIX}:index"
    COUNTER_KEY = f"{KEY_PREFIX}:next_id"

    def __init__(self, redis_url: str = None):
        # Use environment variable if redis_url not provided
        if redis_url is None:
            redis_url = REDIS_URL
        self.redis = aioredis.from_url(redis_url, decode_responses=True)

    def _entry_key(self, pokemon_id: int) -> str:
        return f"{self.KEY_PREFIX}:{pokemon_id}"

    async def add_favorite(self, pokemon_id: int, name: str) -> None:
        """Adds a Pokemon to favorites if not already present (existing entries are kept as is)."""
        entry_key = self._entry_key(pokemon_id)

        async with self.redis.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(entry_key)
                if await pipe.exists(entry_key):
                    logger.info(f"Pokemon {pokemon_id} is already a favorite")
                    return

                favorite_id = await pipe.incr(self.COUNTER_KEY)

                # Index entry and hash are written together or not at all
                pipe.multi()
                pipe.zadd(self.INDEX_KEY, {str(pokemon_id): favorite_id})
                pipe.hset(
                    entry_key,
                    mapping={
                        "id": favorite_id,
                        "pokemon_id": pokemon_id,
                        "name": name,
                        "created_at": _utc_timestamp(),
                    },
                )
                await pipe.execute()
            except WatchError:
                # A concurrent add of the same Pokemon won
                logger.info(f"Pokemon {pokemon_id} was added concurrently")
                return

        logger.info(f"Added favorite {pokemon_id} ({name})")

    async def remove_favorite(self, pokemon_id: int) -> None:
        """Removes a Pokemon from favorites. Removing a missing one is a no-op."""
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.zrem(self.INDEX_KEY, str(pokemon_id))
            pipe.delete(self._entry_key(pokemon_id))
            await pipe.execute()
        logger.info(f"Removed favorite {pokemon_id}")

    async def get_favorites(self) -> list[dict]:
        """Retrieves all favorites, newest first."""
        pokemon_ids = await self.redis.zrevrange(self.INDEX_KEY, 0, -1)

        favorites = []
        for pokemon_id in pokemon_ids:
            entry = await self.redis.hgetall(self._entry_key(pokemon_id))
            if not entry:
                # Removed between the index read and this lookup
                continue
            favorites.append({
                "id": int(entry["id"]),
                "pokemon_id": int(entry["pokemon_id"]),
                "name": entry["name"],
                "created_at": entry["created_at"],
            })
        return favorites

    async def is_favorite(self, pokemon_id: int) -> bool:
        return await self.redis.zscore(self.INDEX_KEY, str(pokemon_id)) is not None

    async def clear(self):
        """Remove every favorite. Useful for testing."""
        keys = await self.redis.keys(f"{self.KEY_PREFIX}:*")
        if keys:
            await self.redis.delete(*keys)

    async def close(self):
        """Close Redis connection (call on app shutdown)."""
        await self.redis.aclose()
