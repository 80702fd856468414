"""Cached llms.txt documents and the content-freshness checkpoint.

Only the two global documents (navigation and sitemap) are cached. Concurrent
misses are not serialized: every caller that misses regenerates and writes the
same bytes, since generation is a pure function of content and clock.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from fastapi.concurrency import run_in_threadpool

from llms_txt.core.clock import Clock, utc_now
from llms_txt.core.config import LlmsTxtConfig
from llms_txt.core.redis import RedisConnection
from llms_txt.services.documents import build_navigation
from llms_txt.services.selection import ContentSelector
from llms_txt.services.sitemap import build_sitemap

logger = logging.getLogger(__name__)

CACHE_KEY_NAV = "llms_txt_navigation"
# Written by earlier releases that cached llms-full.txt; still cleared on invalidation.
CACHE_KEY_FULL = "llms_txt_full_content"
CACHE_KEY_SITEMAPS = "llms_txt_sitemaps"
CACHE_KEY_LAST_CHECK = "llms_txt_last_content_check"
CACHE_KEY_LAST_UPDATE = "llms_txt_last_update_timestamp"

STALE_AFTER = timedelta(hours=1)
LAST_CHECK_TTL = 2 * 60 * 60  # 2 hours in seconds
LAST_UPDATE_TTL = 30 * 24 * 60 * 60  # 30 days in seconds


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning(f"Ignoring unreadable cache timestamp '{value}'")
        return None


class LlmsTxtCache:
    def __init__(self, store: RedisConnection, config: LlmsTxtConfig, clock: Clock = utc_now):
        self.store = store
        self.config = config
        self.clock = clock

    async def fetch(self, key: str, build: Callable[[], str]) -> str:
        """Return the cached value for ``key``, building and storing it on a miss."""
        cached = await self.store.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for '{key}'")
            return cached

        logger.info(f"Cache miss for '{key}', regenerating")
        # Generation runs blocking SQL queries, keep it off the event loop.
        value = await run_in_threadpool(build)
        if not await self.store.set(key, value, ttl=self.config.cache_ttl_seconds):
            logger.warning(f"Could not cache '{key}', serving uncached")
        return value

    async def get_navigation(self, selector: ContentSelector) -> str:
        return await self.fetch(CACHE_KEY_NAV, lambda: build_navigation(selector, self.config).render())

    async def get_sitemap(self, selector: ContentSelector) -> str:
        return await self.fetch(CACHE_KEY_SITEMAPS, lambda: build_sitemap(selector, self.config))

    async def invalidate(self) -> None:
        # One DEL for all keys, so callers never observe a half-cleared cache.
        removed = await self.store.remove(CACHE_KEY_NAV, CACHE_KEY_FULL, CACHE_KEY_SITEMAPS, CACHE_KEY_LAST_CHECK)
        logger.info(f"Cleared llms.txt cache ({removed} keys removed)")

    async def last_checked(self) -> Optional[datetime]:
        return _parse_timestamp(await self.store.get(CACHE_KEY_LAST_CHECK))

    async def is_stale(self, selector: ContentSelector) -> bool:
        """Whether the cached documents may be out of date.

        Stale when no check was ever recorded, when the last check is older than
        an hour, or when a topic was created or a category updated since then.
        """
        last_check = await self.last_checked()
        if last_check is None or self.clock() - last_check > STALE_AFTER:
            return True

        last_topic, last_category = selector.latest_content_change()
        if last_topic is not None and last_topic > last_check:
            return True
        if last_category is not None and last_category > last_check:
            return True
        return False

    async def record_check(self) -> None:
        now = self.clock().isoformat()
        await self.store.set(CACHE_KEY_LAST_CHECK, now, ttl=LAST_CHECK_TTL)
        await self.store.set(CACHE_KEY_LAST_UPDATE, now, ttl=LAST_UPDATE_TTL)

    async def check_freshness(self, selector: ContentSelector) -> bool:
        """Evaluate staleness, then record this check. Returns True when stale."""
        stale = await self.is_stale(selector)
        await self.record_check()
        return stale

    async def last_update_time(self) -> datetime:
        recorded = _parse_timestamp(await self.store.get(CACHE_KEY_LAST_UPDATE))
        return recorded or self.clock()

    async def refresh_if_stale(self, selector: ContentSelector) -> bool:
        """Regenerate the cached documents when content changed. Returns True if it did."""
        if not await self.check_freshness(selector):
            logger.debug("llms.txt cache is fresh")
            return False

        logger.info("llms.txt content changed, regenerating cached documents")
        await self.invalidate()
        await self.get_navigation(selector)
        await self.get_sitemap(selector)
        # invalidate() dropped the checkpoint; record it again for the next run.
        await self.record_check()
        return True
