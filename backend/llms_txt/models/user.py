from datetime import datetime

from sqlmodel import Field, SQLModel
from sqlalchemy import Column

from llms_txt.models.types import BigIntId


# Database model, database table inferred from class name
class User(SQLModel, table=True):
    id: int = Field(default=None, sa_column=Column(BigIntId, primary_key=True, autoincrement=True))
    username: str = Field(unique=True, index=True, max_length=255)
    # Display name; optional, username is used when it's missing.
    name: str | None = Field(default=None, max_length=255)

    post_count: int = Field(default=0)
    likes_received: int = Field(default=0)

    active: bool = Field(default=True)
    # System and bot accounts are not counted as community members.
    is_bot: bool = Field(default=False)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
