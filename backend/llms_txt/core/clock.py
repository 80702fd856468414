from datetime import datetime, timezone
from typing import Callable

# Every timestamp in this service is naive UTC, matching the forum's timestamp columns.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
