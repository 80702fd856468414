"""Builders for forum rows used across the test suite."""
from datetime import datetime, timedelta

from sqlmodel import Session

from llms_txt.models.category import Category
from llms_txt.models.post import Post
from llms_txt.models.tag import Tag, TopicTag
from llms_txt.models.topic import ACCEPTED_ANSWER_FIELD, Topic, TopicCustomField
from llms_txt.models.user import User

NOW = datetime(2026, 10, 1, 12, 0, 0)
LONG_AGO = NOW - timedelta(days=90)


def _save(db: Session, row):
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def make_user(db: Session, username: str = "alice", **overrides) -> User:
    values = {"post_count": 20, "likes_received": 5, "created_at": LONG_AGO, "updated_at": LONG_AGO}
    values.update(overrides)
    return _save(db, User(username=username, **values))


def make_category(db: Session, name: str = "General", **overrides) -> Category:
    values = {
        "slug": name.lower().replace(" ", "-"),
        "description_excerpt": f"All about {name.lower()}",
        "created_at": LONG_AGO,
        "updated_at": LONG_AGO,
    }
    values.update(overrides)
    return _save(db, Category(name=name, **values))


def make_topic(db: Session, title: str = "Welcome", category: Category | None = None, **overrides) -> Topic:
    values = {
        "slug": title.lower().replace(" ", "-").replace("?", ""),
        "posts_count": 1,
        "created_at": NOW - timedelta(days=30),
        "updated_at": NOW - timedelta(days=30),
    }
    values.update(overrides)
    if category is not None:
        values["category_id"] = category.id
    return _save(db, Topic(title=title, **values))


def make_post(db: Session, topic: Topic, post_number: int = 1, raw: str = "Hello there", **overrides) -> Post:
    values = {"created_at": topic.created_at, "updated_at": topic.created_at}
    values.update(overrides)
    return _save(db, Post(topic_id=topic.id, post_number=post_number, raw=raw, **values))


def make_tag(db: Session, name: str = "howto", topics: tuple[Topic, ...] = (), **overrides) -> Tag:
    tag = _save(db, Tag(name=name, **overrides))
    for topic in topics:
        db.add(TopicTag(topic_id=topic.id, tag_id=tag.id))
    db.commit()
    return tag


def mark_solved(db: Session, topic: Topic, post_id: int = 1) -> TopicCustomField:
    return _save(db, TopicCustomField(topic_id=topic.id, name=ACCEPTED_ANSWER_FIELD, value=str(post_id)))
