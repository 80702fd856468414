import logging

from celery import Celery
from llms_txt.core.config import settings

logging.basicConfig(level=settings.LOG_LEVEL)

_redis_auth = f":{settings.REDIS_PASSWORD}@" if settings.REDIS_PASSWORD else ""
_redis_url = f"redis://{_redis_auth}{settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}"

# Configure Celery
celery = Celery(
    "worker",
    broker=_redis_url,
    backend=_redis_url,
    include=["llms_txt.tasks.llms"],
)

celery.conf.task_routes = {"llms_txt.tasks.*": {"queue": "main-queue"}}
# A worker started without -Q consumes the default queue, which is the same one.
celery.conf.task_default_queue = "main-queue"
celery.conf.beat_schedule = {
    'refresh-llms-txt-cache': {
        'task': 'llms_txt.tasks.llms.refresh_llms_cache',
        'schedule': 3600.0,  # Check for new content every hour
    },
}

celery.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
)
