"""HTTP tests for the llms.txt routes."""

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from llms_txt.api.deps import get_config, get_db
from llms_txt.main import app
from tests.factories import make_category, make_post, make_tag, make_topic, make_user


@pytest.fixture()
def forum(db):
    general = make_category(db, "General", description="Everything else", topic_count=1)
    staff = make_category(db, "Staff", read_restricted=True)
    author = make_user(db, "alice")
    topic = make_topic(db, "How do I reset my password?", general, user_id=author.id, posts_count=2, views=1200)
    make_post(db, topic, 1, raw="I forgot it.", user_id=author.id)
    make_post(db, topic, 2, raw="Use the reset link.", user_id=author.id)
    secret = make_topic(db, "Staff notes", staff, views=9000)
    make_tag(db, "accounts", topics=(topic,))
    return {"general": general, "staff": staff, "topic": topic, "secret": secret}


def test_navigation_is_plain_text(client, forum):
    response = client.get("/llms.txt")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.startswith("# Example Forum\n")
    assert "How do I reset my password?" in response.text
    assert "Staff notes" not in response.text


def test_navigation_served_from_cache(client, db, forum):
    first = client.get("/llms.txt").text
    make_topic(db, "Another question?", forum["general"], posts_count=3, views=4000)
    assert client.get("/llms.txt").text == first

    client.post("/llms/cache/clear")
    assert "Another question?" in client.get("/llms.txt").text


def test_full_content(client, forum):
    response = client.get("/llms-full.txt")
    assert response.status_code == 200
    assert response.text.startswith("# Example Forum - Full Content\n")
    assert "Staff notes" not in response.text


def test_sitemaps(client, forum):
    lines = client.get("/sitemaps.txt").text.split("\n")
    assert lines[:2] == ["https://forum.example.com/llms.txt", "https://forum.example.com/llms-full.txt"]
    topic = forum["topic"]
    assert f"https://forum.example.com/t/{topic.slug}/{topic.id}/llms.txt" in lines
    assert not any("staff" in line for line in lines)


def test_category_document(client, forum):
    general = forum["general"]
    response = client.get(f"/c/general/{general.id}/llms.txt")
    assert response.status_code == 200
    assert response.text.startswith("# General\n> Category: Example Forum\n\nEverything else")


def test_subcategory_route(client, db, forum):
    child = make_category(db, "Billing", parent_category_id=forum["general"].id)
    response = client.get(f"/c/general/billing/{child.id}/llms.txt")
    assert response.status_code == 200
    assert response.text.startswith("# Billing\n")


def test_topic_document(client, forum):
    topic = forum["topic"]
    response = client.get(f"/t/{topic.slug}/{topic.id}/llms.txt")
    assert response.status_code == 200
    assert "## Post #1 by @alice" in response.text
    assert "Use the reset link." in response.text


def test_tag_document(client, forum):
    response = client.get("/tag/accounts/llms.txt")
    assert response.status_code == 200
    assert response.text.startswith("# Tag: accounts\n")


@pytest.mark.parametrize("path", [
    "/c/staff/{staff}/llms.txt",
    "/c/missing/999999/llms.txt",
    "/t/staff-notes/{secret}/llms.txt",
    "/t/missing/999999/llms.txt",
    "/tag/unknown/llms.txt",
])
def test_non_public_or_missing_is_not_found(client, forum, path):
    response = client.get(path.format(staff=forum["staff"].id, secret=forum["secret"].id))
    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/plain")


def test_tag_route_disabled_with_tagging(client, config, forum):
    app.dependency_overrides[get_config] = lambda: config.model_copy(update={"tagging_enabled": False})
    assert client.get("/tag/accounts/llms.txt").status_code == 404


def test_every_route_disabled_with_feature_flag(client, config, forum):
    app.dependency_overrides[get_config] = lambda: config.model_copy(update={"enabled": False})
    topic = forum["topic"]
    for path in ["/llms.txt", "/llms-full.txt", "/sitemaps.txt", f"/t/{topic.slug}/{topic.id}/llms.txt"]:
        response = client.get(path)
        assert response.status_code == 404
        assert response.text == "llms.txt generation is disabled"


def test_status_and_clear(client, forum):
    status = client.get("/llms/status")
    assert status.status_code == 200
    assert status.json() == {"last_update": "2026-10-01T12:00:00", "stale": True}

    response = client.post("/llms/cache/clear")
    assert response.status_code == 200
    assert response.json() == {"message": "llms.txt cache cleared"}


def test_database_failure_is_service_unavailable(client):
    # No tables were created on this engine, so every query fails.
    empty = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)

    def _broken_db():
        with Session(empty) as session:
            yield session

    app.dependency_overrides[get_db] = _broken_db
    response = client.get("/llms-full.txt")
    assert response.status_code == 503
    assert response.text == "Document generation failed"
    empty.dispose()
