import asyncio
import logging

from sqlmodel import Session

from llms_txt.core.clock import Clock, utc_now
from llms_txt.core.config import LlmsTxtConfig, settings
from llms_txt.core.db import engine
from llms_txt.core.redis import RedisConnection
from llms_txt.services.cache import LlmsTxtCache
from llms_txt.services.selection import ContentSelector
from llms_txt.worker import celery

logger = logging.getLogger(__name__)


async def refresh_cache(session: Session, store: RedisConnection, config: LlmsTxtConfig, clock: Clock = utc_now) -> bool:
  """Regenerate the cached documents if forum content changed since the last check."""
  cache = LlmsTxtCache(store, config, clock=clock)
  selector = ContentSelector(session, clock=clock, solved_enabled=config.solved_enabled)
  return await cache.refresh_if_stale(selector)


@celery.task
def refresh_llms_cache():
  """Hourly freshness check for llms.txt and sitemaps.txt."""
  config = LlmsTxtConfig.from_settings(settings)
  if not config.enabled:
    return "llms.txt generation disabled"

  async def async_refresh():
    # Create a fresh connection for this task
    task_redis = RedisConnection()
    await task_redis.connect()
    try:
      with Session(engine) as session:
        return await refresh_cache(session, task_redis, config)
    finally:
      await task_redis.close()

  # Run the async function in a new event loop
  loop = asyncio.new_event_loop()
  asyncio.set_event_loop(loop)
  try:
    refreshed = loop.run_until_complete(async_refresh())
  finally:
    loop.close()

  logger.info(f"llms.txt refresh finished (regenerated={refreshed})")
  return "Regenerated llms.txt cache" if refreshed else "llms.txt cache is fresh"
