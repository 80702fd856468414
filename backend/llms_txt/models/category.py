from sqlmodel import Field, SQLModel
from datetime import datetime
from sqlalchemy import BigInteger, Column

from llms_txt.models.types import BigIntId


class Category(SQLModel, table=True):
    id: int = Field(default=None, sa_column=Column(BigIntId, primary_key=True, autoincrement=True))
    name: str
    slug: str = Field(index=True)
    description: str | None = None
    # Plain-text first paragraph of the description, maintained by the forum.
    description_excerpt: str | None = None

    # Categories nest at most one level deep.
    parent_category_id: int | None = Field(default=None, foreign_key="category.id", sa_type=BigInteger, index=True)
    read_restricted: bool = Field(default=False, index=True)

    topic_count: int = Field(default=0)
    position: int = Field(default=0)

    updated_at: datetime = Field(default_factory=datetime.now, index=True)
    created_at: datetime = Field(default_factory=datetime.now)
