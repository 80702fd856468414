from sqlmodel import Field, SQLModel
from datetime import datetime
from sqlalchemy import BigInteger, Column

from llms_txt.models.types import BigIntId

REGULAR_ARCHETYPE = "regular"
PRIVATE_MESSAGE_ARCHETYPE = "private_message"

# Custom field written by the solved-answers feature when an answer is accepted.
ACCEPTED_ANSWER_FIELD = "accepted_answer_post_id"
TOPIC_CUSTOM_FIELDS_TABLE = "topic_custom_fields"


class Topic(SQLModel, table=True):
    id: int = Field(default=None, sa_column=Column(BigIntId, primary_key=True, autoincrement=True))
    title: str
    slug: str

    archetype: str = Field(default=REGULAR_ARCHETYPE, index=True)
    visible: bool = Field(default=True, index=True)

    views: int = Field(default=0)
    like_count: int = Field(default=0)
    # Includes the first post, so replies are posts_count - 1.
    posts_count: int = Field(default=0)

    category_id: int | None = Field(default=None, foreign_key="category.id", sa_type=BigInteger, index=True)
    user_id: int | None = Field(default=None, foreign_key="user.id", sa_type=BigInteger)

    created_at: datetime = Field(default_factory=datetime.now, index=True)
    last_posted_at: datetime | None = None
    updated_at: datetime = Field(default_factory=datetime.now)


class TopicCustomField(SQLModel, table=True):
    __tablename__ = TOPIC_CUSTOM_FIELDS_TABLE
    id: int = Field(default=None, sa_column=Column(BigIntId, primary_key=True, autoincrement=True))
    topic_id: int = Field(foreign_key="topic.id", sa_type=BigInteger, index=True)
    name: str = Field(index=True)
    value: str | None = None
