import logging
import asyncio
import uuid # Import uuid for unique key generation
from redis.exceptions import RedisError
from sqlmodel import Session
from llms_txt.core.db import engine, init_db
from llms_txt.core.redis import redis_conn # Import redis connection
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Check the forum database is reachable
def init_sql() -> None:
    with Session(engine) as session:
        init_db(session)
        logger.info("SQL connection test successful")


# Initialize and test Redis, the llms.txt cache store
async def init_redis() -> bool:
    logger.info("Testing Redis connection...")
    test_key = f"initial_data_test_{uuid.uuid4()}"
    test_value = "redis_ok"
    try:
        await redis_conn.connect() # Connect explicitly for the test

        if not await redis_conn.set(test_key, test_value, ttl=60):
            logger.error("Failed to set test key in Redis")
            return False
        logger.info(f"Redis SET test successful (key: {test_key})")

        retrieved_value = await redis_conn.get(test_key)
        if retrieved_value != test_value:
            logger.error(f"Redis GET test failed. Expected '{test_value}', got '{retrieved_value}'")
            return False
        logger.info("Redis GET test successful")

        deleted_count = await redis_conn.remove(test_key)
        if deleted_count != 1:
            logger.error(f"Redis DELETE test failed. Expected 1 key deleted, got {deleted_count}")
            return False
        logger.info("Redis connection tested successfully")
        return True
    finally:
        # Ensure connection is closed after test, even if connect wasn't called in lifespan
        await redis_conn.close()


async def main() -> None:
    logger.info("Starting connectivity checks for SQL and Redis")

    logger.info("Checking SQL database...")
    init_sql()
    logger.info("SQL database reachable")

    # llms.txt still works without Redis, only uncached
    try:
        redis_ok = await init_redis()
    except (RedisError, OSError) as e:
        logger.error(f"Redis connection test failed: {e}")
        redis_ok = False
    if not redis_ok:
        logger.warning("Redis check failed; llms.txt documents will be served uncached")


if __name__ == "__main__":
    asyncio.run(main())
