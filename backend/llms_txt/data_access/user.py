from typing import Iterable, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from llms_txt.models.user import User


def _community_members(statement):
    return statement.where(User.active == True, User.is_bot == False)  # noqa: E712


def list_users(db: Session, more_posts_than: int = 0, limit: Optional[int] = None) -> list[User]:
    """Active, real users ranked by likes received."""
    statement = (
        _community_members(select(User))
        .where(User.post_count > more_posts_than)
        .order_by(User.likes_received.desc(), User.id.asc())
    )
    if limit is not None:
        statement = statement.limit(limit)
    return list(db.exec(statement).all())


def count_users(db: Session) -> int:
    return db.exec(_community_members(select(func.count(User.id)))).one()


def get_users_by_ids(db: Session, user_ids: Iterable[int]) -> dict[int, User]:
    ids = {user_id for user_id in user_ids if user_id is not None}
    if not ids:
        return {}
    return {user.id: user for user in db.exec(select(User).where(User.id.in_(ids))).all()}
