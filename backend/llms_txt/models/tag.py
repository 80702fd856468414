from sqlmodel import Field, SQLModel
from datetime import datetime
from sqlalchemy import BigInteger, Column

from llms_txt.models.types import BigIntId


class Tag(SQLModel, table=True):
    id: int = Field(default=None, sa_column=Column(BigIntId, primary_key=True, autoincrement=True))
    name: str = Field(index=True, unique=True)
    description: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class TopicTag(SQLModel, table=True):
    topic_id: int = Field(foreign_key="topic.id", sa_type=BigInteger, primary_key=True)
    tag_id: int = Field(foreign_key="tag.id", sa_type=BigInteger, primary_key=True)
