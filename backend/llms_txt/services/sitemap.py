from urllib.parse import quote_plus

from llms_txt.core.config import LlmsTxtConfig
from llms_txt.models.category import Category
from llms_txt.services.selection import ContentSelector

# Topic cap when the posts limit tier is "all", to keep the file a manageable size.
SITEMAP_TOPIC_CAP = 5000


def category_path(category: Category, parent: Category | None) -> str:
    """``parent-slug/slug/id`` for subcategories, ``slug/id`` otherwise."""
    if parent is not None:
        return f"{quote_plus(parent.slug)}/{quote_plus(category.slug)}/{category.id}"
    return f"{quote_plus(category.slug)}/{category.id}"


def sitemap_urls(selector: ContentSelector, config: LlmsTxtConfig) -> list[str]:
    base = config.base_url
    urls = [f"{base}/llms.txt", f"{base}/llms-full.txt"]

    # Parents are looked up among all categories so a public child of a
    # restricted parent still gets its full path.
    categories = selector.public_categories()
    parents = {category.id: category for category in categories}
    for category in categories:
        parent = None
        if category.parent_category_id is not None:
            parent = parents.get(category.parent_category_id) or selector.category_by_id(category.parent_category_id)
        urls.append(f"{base}/c/{category_path(category, parent)}/llms.txt")

    topic_limit = config.posts_limit or SITEMAP_TOPIC_CAP
    for entry in selector.all_topics(config.min_views, topic_limit):
        urls.append(f"{base}/t/{quote_plus(entry.topic.slug)}/{entry.topic.id}/llms.txt")

    if config.tagging_enabled:
        for tag in selector.tags():
            urls.append(f"{base}/tag/{quote_plus(tag.name)}/llms.txt")
    return urls


def build_sitemap(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    return "\n".join(sitemap_urls(selector, config))
