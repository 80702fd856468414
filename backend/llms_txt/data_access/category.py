from datetime import datetime
from typing import Iterable

from sqlalchemy import func
from sqlmodel import Session, select

from llms_txt.models.category import Category

# Sentinel meaning "any parent", so that parent_id=None can mean "top level".
ANY_PARENT = object()


def list_categories(db: Session, parent_id=ANY_PARENT, include_restricted: bool = False) -> list[Category]:
    """Categories in display order (position, then id).

    ``parent_id=None`` returns top-level categories only; an integer returns the
    subcategories of that parent.
    """
    statement = select(Category)
    if not include_restricted:
        statement = statement.where(Category.read_restricted == False)  # noqa: E712
    if parent_id is None:
        statement = statement.where(Category.parent_category_id == None)  # noqa: E711
    elif parent_id is not ANY_PARENT:
        statement = statement.where(Category.parent_category_id == parent_id)
    statement = statement.order_by(Category.position.asc(), Category.id.asc())
    return list(db.exec(statement).all())


def get_category(db: Session, category_id: int) -> Category | None:
    return db.exec(select(Category).where(Category.id == category_id)).first()


def get_categories_by_ids(db: Session, category_ids: Iterable[int]) -> dict[int, Category]:
    ids = {category_id for category_id in category_ids if category_id is not None}
    if not ids:
        return {}
    categories = db.exec(select(Category).where(Category.id.in_(ids))).all()
    return {category.id: category for category in categories}


def max_category_updated_at(db: Session) -> datetime | None:
    return db.exec(select(func.max(Category.updated_at))).one()
