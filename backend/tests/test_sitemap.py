"""Tests for the flat sitemaps.txt URL list."""

from datetime import timedelta

from llms_txt.services.sitemap import build_sitemap, sitemap_urls
from tests.factories import NOW, make_category, make_tag, make_topic

BASE = "https://forum.example.com"


def test_empty_forum_lists_global_documents(selector, config):
    assert build_sitemap(selector, config) == f"{BASE}/llms.txt\n{BASE}/llms-full.txt"


def test_order_and_paths(db, selector, config):
    parent = make_category(db, "Dev Talk", position=1)
    child = make_category(db, "Python & Co", parent_category_id=parent.id, position=2)
    make_category(db, "Staff", read_restricted=True)
    older = make_topic(db, "Older", child, created_at=NOW - timedelta(days=5))
    newer = make_topic(db, "Newer", parent, created_at=NOW - timedelta(days=1))
    make_tag(db, "c++")
    make_tag(db, "async")

    assert sitemap_urls(selector, config) == [
        f"{BASE}/llms.txt",
        f"{BASE}/llms-full.txt",
        f"{BASE}/c/dev-talk/{parent.id}/llms.txt",
        f"{BASE}/c/dev-talk/python-%26-co/{child.id}/llms.txt",
        f"{BASE}/t/newer/{newer.id}/llms.txt",
        f"{BASE}/t/older/{older.id}/llms.txt",
        f"{BASE}/tag/async/llms.txt",
        f"{BASE}/tag/c%2B%2B/llms.txt",
    ]


def test_public_child_of_restricted_parent_keeps_parent_slug(db, selector, config):
    staff = make_category(db, "Staff", read_restricted=True)
    announcements = make_category(db, "Announcements", parent_category_id=staff.id)

    assert f"{BASE}/c/staff/announcements/{announcements.id}/llms.txt" in sitemap_urls(selector, config)


def test_topics_filtered_by_min_views(db, selector, config):
    category = make_category(db, "General")
    popular = make_topic(db, "Popular", category, views=100)
    make_topic(db, "Quiet", category, views=10)

    urls = sitemap_urls(selector, config.model_copy(update={"min_views": 50}))
    topic_urls = [url for url in urls if "/t/" in url]
    assert topic_urls == [f"{BASE}/t/popular/{popular.id}/llms.txt"]


def test_topic_count_follows_posts_limit(db, selector, config, monkeypatch):
    category = make_category(db, "General")
    for i in range(4):
        make_topic(db, f"Topic {i}", category)

    monkeypatch.setattr("llms_txt.services.sitemap.SITEMAP_TOPIC_CAP", 3)
    unbounded = config.model_copy(update={"posts_limit_tier": "all"})
    assert len([url for url in sitemap_urls(selector, unbounded) if "/t/" in url]) == 3


def test_tags_only_when_tagging_enabled(db, selector, config):
    make_tag(db, "howto")
    urls = sitemap_urls(selector, config.model_copy(update={"tagging_enabled": False}))
    assert not any("/tag/" in url for url in urls)
