from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from llms_txt.core.clock import Clock, utc_now
from llms_txt.core.config import LlmsTxtConfig, settings
from llms_txt.core.db import engine
from llms_txt.core.redis import RedisConnection, redis_conn
from llms_txt.exceptions import FeatureDisabledError
from llms_txt.services.cache import LlmsTxtCache
from llms_txt.services.selection import ContentSelector


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def get_config() -> LlmsTxtConfig:
    return LlmsTxtConfig.from_settings(settings)


def get_clock() -> Clock:
    return utc_now


def get_cache_store() -> RedisConnection:
    return redis_conn


SessionDep = Annotated[Session, Depends(get_db)]
ClockDep = Annotated[Clock, Depends(get_clock)]
CacheStoreDep = Annotated[RedisConnection, Depends(get_cache_store)]


def get_enabled_config(config: Annotated[LlmsTxtConfig, Depends(get_config)]) -> LlmsTxtConfig:
    if not config.enabled:
        raise FeatureDisabledError("llms.txt generation is disabled")
    return config


ConfigDep = Annotated[LlmsTxtConfig, Depends(get_enabled_config)]


def get_selector(session: SessionDep, config: ConfigDep, clock: ClockDep) -> ContentSelector:
    return ContentSelector(session, clock=clock, solved_enabled=config.solved_enabled)


def get_llms_cache(store: CacheStoreDep, config: ConfigDep, clock: ClockDep) -> LlmsTxtCache:
    return LlmsTxtCache(store, config, clock=clock)


SelectorDep = Annotated[ContentSelector, Depends(get_selector)]
LlmsCacheDep = Annotated[LlmsTxtCache, Depends(get_llms_cache)]
