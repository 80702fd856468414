"""Tests for the periodic llms.txt refresh task."""

from datetime import timedelta

from llms_txt.services.cache import CACHE_KEY_NAV, CACHE_KEY_SITEMAPS
from llms_txt.tasks.llms import refresh_cache
from llms_txt.worker import celery
from tests.factories import NOW, make_category, make_topic


def test_refresh_is_scheduled_hourly():
    entry = celery.conf.beat_schedule["refresh-llms-txt-cache"]
    assert entry["task"] == "llms_txt.tasks.llms.refresh_llms_cache"
    assert entry["schedule"] == 3600.0


def test_refresh_is_routed_to_the_default_queue():
    assert celery.conf.task_routes["llms_txt.tasks.*"]["queue"] == "main-queue"
    assert celery.conf.task_default_queue == "main-queue"


async def test_refresh_cache_regenerates_then_skips(db, store, config, clock):
    make_topic(db, "How do I reset my password?", make_category(db, "General"), posts_count=2, views=1200)

    assert await refresh_cache(db, store, config, clock=clock) is True
    assert "How do I reset my password?" in await store.get(CACHE_KEY_NAV)
    assert await store.get(CACHE_KEY_SITEMAPS) is not None

    assert await refresh_cache(db, store, config, clock=clock) is False


async def test_refresh_cache_picks_up_new_topics(db, store, config, clock):
    category = make_category(db, "General")
    await refresh_cache(db, store, config, clock=clock)

    make_topic(db, "Fresh question?", category, posts_count=2, views=5000, created_at=NOW + timedelta(minutes=1))
    assert await refresh_cache(db, store, config, clock=lambda: NOW + timedelta(minutes=2)) is True
    assert "Fresh question?" in await store.get(CACHE_KEY_NAV)
