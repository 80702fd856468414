from typing import Iterable

from sqlalchemy import func
from sqlmodel import Session, select

from llms_txt.models.post import Post


def _public(statement):
    return statement.where(Post.hidden == False, Post.deleted_at == None)  # noqa: E711, E712


def list_posts(db: Session, topic_id: int, include_hidden: bool = False) -> list[Post]:
    statement = select(Post).where(Post.topic_id == topic_id)
    if not include_hidden:
        statement = _public(statement)
    return list(db.exec(statement.order_by(Post.post_number.asc(), Post.id.asc())).all())


def count_posts(db: Session, topic_ids=None) -> int:
    """Public posts, optionally only those in the topics selected by ``topic_ids``."""
    statement = _public(select(func.count(Post.id)))
    if topic_ids is not None:
        statement = statement.where(Post.topic_id.in_(topic_ids))
    return db.exec(statement).one()


def get_first_posts(db: Session, topic_ids: Iterable[int]) -> dict[int, Post]:
    """Opening post of each topic, skipping hidden and deleted ones."""
    ids = set(topic_ids)
    if not ids:
        return {}
    statement = _public(select(Post).where(Post.topic_id.in_(ids), Post.post_number == 1))
    return {post.topic_id: post for post in db.exec(statement).all()}
