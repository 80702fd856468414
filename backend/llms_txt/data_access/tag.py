from sqlmodel import Session, select

from llms_txt.models.tag import Tag


def list_tags(db: Session) -> list[Tag]:
    return list(db.exec(select(Tag).order_by(Tag.name.asc())).all())


def get_tag_by_name(db: Session, name: str) -> Tag | None:
    return db.exec(select(Tag).where(Tag.name == name)).first()
