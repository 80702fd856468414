from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import func, inspect, or_
from sqlmodel import Session, select

from llms_txt.models.category import Category
from llms_txt.models.tag import Tag, TopicTag
from llms_txt.models.topic import (
    ACCEPTED_ANSWER_FIELD,
    REGULAR_ARCHETYPE,
    TOPIC_CUSTOM_FIELDS_TABLE,
    Topic,
    TopicCustomField,
)


@dataclass(frozen=True)
class TopicQuery:
    """Filter for topic listings. The defaults describe public discussion content."""

    visible_only: bool = True
    archetype: Optional[str] = REGULAR_ARCHETYPE
    # Drops topics in read-restricted categories and topics without a category.
    public_categories_only: bool = True
    title_contains: Optional[str] = None
    created_after: Optional[datetime] = None
    # more_likes_than / more_views_than are OR-ed together when both are given.
    more_likes_than: Optional[int] = None
    more_views_than: Optional[int] = None
    min_views: Optional[int] = None
    more_posts_than: Optional[int] = None
    category_id: Optional[int] = None
    tag_name: Optional[str] = None
    accepted_answer_only: bool = False


class TopicOrder(str, Enum):
    POPULAR = "popular"  # likes, then views
    TRENDING = "trending"  # views, then likes
    MOST_VIEWED = "most_viewed"
    NEWEST = "newest"


# Every ordering ends on the primary key so equal rows always come back in the same order.
_ORDER_BY = {
    TopicOrder.POPULAR: (Topic.like_count.desc(), Topic.views.desc(), Topic.id.asc()),
    TopicOrder.TRENDING: (Topic.views.desc(), Topic.like_count.desc(), Topic.id.asc()),
    TopicOrder.MOST_VIEWED: (Topic.views.desc(), Topic.id.asc()),
    TopicOrder.NEWEST: (Topic.created_at.desc(), Topic.id.desc()),
}


def _filtered(statement, query: TopicQuery):
    if query.visible_only:
        statement = statement.where(Topic.visible == True)  # noqa: E712
    if query.archetype is not None:
        statement = statement.where(Topic.archetype == query.archetype)
    if query.public_categories_only:
        statement = statement.join(Category, Category.id == Topic.category_id).where(
            Category.read_restricted == False  # noqa: E712
        )
    if query.title_contains is not None:
        statement = statement.where(Topic.title.contains(query.title_contains, autoescape=True))
    if query.created_after is not None:
        statement = statement.where(Topic.created_at > query.created_after)

    thresholds = []
    if query.more_likes_than is not None:
        thresholds.append(Topic.like_count > query.more_likes_than)
    if query.more_views_than is not None:
        thresholds.append(Topic.views > query.more_views_than)
    if thresholds:
        statement = statement.where(or_(*thresholds))

    if query.min_views is not None:
        statement = statement.where(Topic.views >= query.min_views)
    if query.more_posts_than is not None:
        statement = statement.where(Topic.posts_count > query.more_posts_than)
    if query.category_id is not None:
        statement = statement.where(Topic.category_id == query.category_id)
    if query.tag_name is not None:
        tagged = select(TopicTag.topic_id).join(Tag, Tag.id == TopicTag.tag_id).where(Tag.name == query.tag_name)
        statement = statement.where(Topic.id.in_(tagged))
    if query.accepted_answer_only:
        solved = select(TopicCustomField.topic_id).where(TopicCustomField.name == ACCEPTED_ANSWER_FIELD)
        statement = statement.where(Topic.id.in_(solved))
    return statement


def list_topics(
    db: Session,
    query: TopicQuery,
    order: TopicOrder = TopicOrder.NEWEST,
    limit: Optional[int] = None,
) -> list[Topic]:
    statement = _filtered(select(Topic), query).order_by(*_ORDER_BY[order])
    if limit is not None:
        statement = statement.limit(limit)
    return list(db.exec(statement).all())


def count_topics(db: Session, query: TopicQuery) -> int:
    statement = _filtered(select(func.count(Topic.id)), query)
    return db.exec(statement).one()


def topic_ids(query: TopicQuery):
    """Select of the ids matching ``query``, for use as an IN subquery."""
    return _filtered(select(Topic.id), query)


def get_topic(db: Session, topic_id: int, query: Optional[TopicQuery] = None) -> Topic | None:
    """Fetch one topic; with ``query`` it must also pass that filter."""
    statement = select(Topic).where(Topic.id == topic_id)
    if query is not None:
        statement = _filtered(statement, query)
    return db.exec(statement).first()


def max_topic_created_at(db: Session) -> datetime | None:
    return db.exec(select(func.max(Topic.created_at))).one()


def solved_marker_available(db: Session) -> bool:
    """The accepted-answer table only exists when the solved feature is installed."""
    return inspect(db.get_bind()).has_table(TOPIC_CUSTOM_FIELDS_TABLE)
