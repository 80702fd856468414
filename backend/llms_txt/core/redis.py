import redis.asyncio as redis
from redis.exceptions import RedisError
from llms_txt.core.config import settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# A failing cache store must never fail document generation: every method
# below logs the error and reports a miss (or a failed write) instead.
STORE_ERRORS = (RedisError, RuntimeError, OSError)


class RedisConnection:
    def __init__(self, host=None, port=None, db=None, password=None, client: Optional[redis.Redis] = None):
        self.host = host or settings.REDIS_HOST
        self.port = port or settings.REDIS_PORT
        self.db = db or settings.REDIS_DB
        self.password = password or settings.REDIS_PASSWORD
        self._pool: Optional[redis.ConnectionPool] = None
        # An externally created client (e.g. a test double) bypasses the pool.
        self._client = client
        logger.info(f"Redis config initialized with host={self.host}, port={self.port}")

    async def connect(self):
        """Initializes the Redis connection pool."""
        if self._pool or self._client:
            return # Already connected
        try:
            logger.info(f"Connecting to Redis at {self.host}:{self.port}...")
            conn_kwargs = {
                "host": self.host,
                "port": self.port,
                "db": self.db,
                "decode_responses": True,
                "max_connections": 10
            }

            # Only add password if it's set
            if self.password:
                conn_kwargs["password"] = self.password
                logger.info("Using password authentication for Redis")

            self._pool = redis.ConnectionPool(**conn_kwargs)

            # Test connection by getting a client and pinging
            client = self.get_client()
            await client.ping()
            logger.info("Successfully connected to Redis.")
        except STORE_ERRORS as e:
            logger.error(f"Error connecting to Redis: {e}")
            self._pool = None
            raise

    async def close(self):
        """Closes the Redis connection pool."""
        if self._pool:
            await self._pool.disconnect()
            self._pool = None # Ensure pool is marked as None after closing
            logger.info("Redis connection pool closed.")

    def get_client(self) -> redis.Redis:
        """Gets a Redis client instance connected to the pool."""
        if self._client is not None:
            return self._client
        if not self._pool:
            raise RuntimeError("Redis connection pool not initialized. Call connect() first or use lifespan.")
        return redis.Redis(connection_pool=self._pool)

    async def get(self, key: str) -> Optional[str]:
        """Gets a value from Redis by key. Store errors are reported as a miss."""
        try:
            client = self.get_client()
            return await client.get(key) # Returns None if key doesn't exist
        except STORE_ERRORS as e:
            logger.error(f"Error getting Redis key '{key}': {e}")
            return None

    async def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None # TTL in seconds
    ) -> bool:
        """Sets a key-value pair in Redis, optionally with a TTL (in seconds)."""
        try:
            client = self.get_client()
            result = await client.set(key, value, ex=ttl)
            return result == True # SET command returns True on success
        except STORE_ERRORS as e:
            logger.error(f"Error setting Redis key '{key}': {e}")
            return False

    async def remove(self, *keys: str) -> int:
        """Removes keys from Redis in a single DEL. Returns the number of keys removed."""
        try:
            client = self.get_client()
            return await client.delete(*keys)
        except STORE_ERRORS as e:
            logger.error(f"Error removing Redis keys {list(keys)}: {e}")
            return 0


# --- Singleton Instance ---
# Only the API dependency layer and the worker tasks reach for this; services
# receive the connection explicitly.
redis_conn = RedisConnection()
