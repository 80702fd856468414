from sqlmodel import Field, SQLModel
from datetime import datetime
from sqlalchemy import BigInteger, Column

from llms_txt.models.types import BigIntId


class Post(SQLModel, table=True):
    id: int = Field(default=None, sa_column=Column(BigIntId, primary_key=True, autoincrement=True))
    topic_id: int = Field(foreign_key="topic.id", sa_type=BigInteger, index=True)
    # 1-based position within the topic; post 1 opens the topic.
    post_number: int
    user_id: int | None = Field(default=None, foreign_key="user.id", sa_type=BigInteger)

    # Original markdown as typed by the author, not the rendered HTML.
    raw: str = ""
    like_count: int = Field(default=0)

    hidden: bool = Field(default=False)
    deleted_at: datetime | None = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
