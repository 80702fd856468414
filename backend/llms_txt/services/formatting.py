from datetime import datetime
from urllib.parse import quote_plus

from llms_txt.models.category import Category
from llms_txt.models.topic import Topic


def number_with_delimiter(number: int) -> str:
    return f"{number:,}"


def truncate(text: str, length: int, omission: str = "...") -> str:
    """Cut ``text`` to at most ``length`` characters on a word boundary."""
    if len(text) <= length:
        return text
    stop = max(length - len(omission), 0)
    boundary = text.rfind(" ", 0, stop + 1)
    if boundary == -1:
        boundary = stop
    return text[:boundary] + omission


def format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC")


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def pluralize(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def topic_url(base_url: str, topic: Topic) -> str:
    return f"{base_url}/t/{quote_plus(topic.slug)}/{topic.id}"


def category_url(base_url: str, category: Category) -> str:
    return f"{base_url}/c/{quote_plus(category.slug)}/{category.id}"


def tag_url(base_url: str, tag_name: str) -> str:
    return f"{base_url}/tag/{quote_plus(tag_name)}"


def user_url(base_url: str, username: str) -> str:
    return f"{base_url}/u/{quote_plus(username)}"
