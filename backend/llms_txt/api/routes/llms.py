import logging
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from llms_txt.api.deps import ConfigDep, LlmsCacheDep, SelectorDep
from llms_txt.exceptions import DocumentNotFoundError
from llms_txt.services import documents

logger = logging.getLogger(__name__)

router = APIRouter(tags=["llms"], default_response_class=PlainTextResponse)


class CacheStatus(BaseModel):
    last_update: datetime
    stale: bool


@router.get("/llms.txt")
async def get_navigation(selector: SelectorDep, cache: LlmsCacheDep):
    return await cache.get_navigation(selector)


@router.get("/llms-full.txt")
def get_full_content(selector: SelectorDep, config: ConfigDep):
    # Not cached: it is large and depends on the excerpt and limit settings.
    return documents.build_full_content(selector, config).render()


@router.get("/sitemaps.txt")
async def get_sitemaps(selector: SelectorDep, cache: LlmsCacheDep):
    return await cache.get_sitemap(selector)


def _category_document(selector: SelectorDep, config: ConfigDep, category_id: int) -> str:
    category = selector.public_category(category_id)
    if category is None:
        raise DocumentNotFoundError(f"Category {category_id} not found")
    return documents.build_category(selector, config, category).render()


@router.get("/c/{slug}/{category_id}/llms.txt")
def get_category(slug: str, category_id: int, selector: SelectorDep, config: ConfigDep):
    return _category_document(selector, config, category_id)


@router.get("/c/{parent_slug}/{slug}/{category_id}/llms.txt")
def get_subcategory(parent_slug: str, slug: str, category_id: int, selector: SelectorDep, config: ConfigDep):
    return _category_document(selector, config, category_id)


@router.get("/t/{slug}/{topic_id}/llms.txt")
def get_topic(slug: str, topic_id: int, selector: SelectorDep, config: ConfigDep):
    topic = selector.public_topic(topic_id)
    if topic is None:
        raise DocumentNotFoundError(f"Topic {topic_id} not found")
    return documents.build_topic(selector, config, topic).render()


@router.get("/tag/{tag_name}/llms.txt")
def get_tag(tag_name: str, selector: SelectorDep, config: ConfigDep):
    tag = selector.tag_by_name(tag_name) if config.tagging_enabled else None
    if tag is None:
        raise DocumentNotFoundError(f"Tag '{tag_name}' not found")
    return documents.build_tag(selector, config, tag).render()


@router.get("/llms/status", response_class=JSONResponse, response_model=CacheStatus)
async def get_cache_status(selector: SelectorDep, cache: LlmsCacheDep):
    return CacheStatus(last_update=await cache.last_update_time(), stale=await cache.is_stale(selector))


@router.post("/llms/cache/clear", response_class=JSONResponse)
async def clear_cache(cache: LlmsCacheDep):
    logger.info("llms.txt cache clear requested")
    await cache.invalidate()
    return {"message": "llms.txt cache cleared"}
