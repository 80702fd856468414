from sqlalchemy import text
from sqlmodel import Session, create_engine

from llms_txt.core.config import settings

# make sure all SQLModel models are imported (llms_txt.models) before using the engine
# otherwise, SQLModel might fail to resolve foreign keys between tables
from llms_txt.models import category, post, tag, topic, user  # noqa: F401

engine = create_engine(str(settings.SQLALCHEMY_DATABASE_URI), pool_pre_ping=True)


def init_db(session: Session) -> None:
    # Tables are owned by the forum platform; this service only reads them.
    # Checking connectivity here surfaces a bad SQLALCHEMY_DATABASE_URI at startup.
    session.execute(text("SELECT 1"))
