"""Assemblers for the llms.txt document family.

Each ``build_*`` function is a pure composition of a ``ContentSelector`` (the
repository snapshot plus clock) and an ``LlmsTxtConfig``; it returns a
``Document`` whose sections can be inspected before rendering.
"""
from llms_txt.core.config import LlmsTxtConfig
from llms_txt.models.category import Category
from llms_txt.models.tag import Tag
from llms_txt.models.topic import Topic
from llms_txt.services.document_builder import Document
from llms_txt.services.formatting import (
    category_url,
    format_date,
    format_timestamp,
    number_with_delimiter,
    pluralize,
    tag_url,
    topic_url,
    truncate,
    user_url,
)
from llms_txt.services.selection import (
    CategoryNode,
    ContentSelector,
    RankedTopic,
    SolvedStatus,
)

# Selection thresholds: (more likes than, more views than, limit)
POPULAR_THRESHOLDS = (5, 1000, 15)
POPULAR_DETAILED_THRESHOLDS = (3, 500, 25)
FAQ_LIMIT = 10
TRENDING_WINDOW_DAYS = 7
TRENDING_LIMIT = 10
SOLVED_LIMIT = 20
CONTRIBUTORS_MIN_POSTS = 10
CONTRIBUTORS_LIMIT = 10
POPULAR_EXCERPT_LENGTH = 300
ENTITY_POPULAR_LIMIT = 10
ENTITY_TOPICS_LIMIT = 100

UNCATEGORIZED = "Uncategorized"
NO_DESCRIPTION = "No description"

NAVIGATION_SECTIONS = [
    "quick_facts",
    "popular",
    "faq",
    "categories",
    "trending",
    "latest",
    "top_contributors",
    "resources",
]


def _ai_instructions(config: LlmsTxtConfig) -> str:
    return "\n".join([
        "- **Citation**: When referencing content, link to the original topic URL",
        "- **Attribution**: Credit the author username when quoting",
        "- **Freshness**: Content is updated in real-time; check dates for time-sensitive info",
        "- **Verification**: Community-upvoted answers indicate reliability",
        f"- **Context**: This is the {config.site_title} community forum; posts are community discussion",
    ])


def _category_name(entry: RankedTopic) -> str:
    return entry.category.name if entry.category else UNCATEGORIZED


def _topic_link(config: LlmsTxtConfig, topic: Topic) -> str:
    return f"[{topic.title}]({topic_url(config.base_url, topic)})"


def _category_link(config: LlmsTxtConfig, category: Category) -> str:
    return f"[{category.name}]({category_url(config.base_url, category)})"


def _replies(topic: Topic) -> int:
    return max(topic.posts_count - 1, 0)


def _canonical_footer(url: str) -> str:
    # Both lines point at the same URL, matching the rest of the document family.
    return f"**Canonical:** {url}\n**Original content:** {url}"


# --- Shared sections ---

def quick_facts_body(selector: ContentSelector) -> str:
    facts = selector.quick_facts()
    return "\n".join([
        f"- **Total Discussions**: {number_with_delimiter(facts.total_topics)}",
        f"- **Total Posts**: {number_with_delimiter(facts.total_posts)}",
        f"- **Community Members**: {number_with_delimiter(facts.total_users)}",
        f"- **Solved Problems**: {number_with_delimiter(facts.total_solved)}",
        f"- **Last Updated**: {format_timestamp(facts.generated_at)}",
    ])


def popular_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    entries = selector.popular(*POPULAR_THRESHOLDS)
    if not entries:
        return "Building community content..."
    lines = []
    for entry in entries:
        topic = entry.topic
        stats = [f"{topic.like_count} likes"] if topic.like_count > 0 else []
        stats.append(f"{number_with_delimiter(topic.views)} views")
        lines.append(f"- {_topic_link(config, topic)} ({', '.join(stats)})")
    return "\n".join(lines)


def popular_detailed_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    entries = selector.popular_detailed(*POPULAR_DETAILED_THRESHOLDS)
    if not entries:
        return "Building community content..."
    lines = []
    for entry in entries:
        topic = entry.topic
        lines.append(f"### {_topic_link(config, topic)}")
        lines.append(
            f"**Category**: {_category_name(entry)} | **Views**: {number_with_delimiter(topic.views)}"
            f" | **Likes**: {topic.like_count}"
        )
        if entry.first_post_raw:
            lines.append(f"> {truncate(entry.first_post_raw, POPULAR_EXCERPT_LENGTH)}")
        lines.append("")
    return "\n".join(lines)


def faq_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    entries = selector.faq_candidates(FAQ_LIMIT)
    if not entries:
        return "Check our discussions for common questions."
    return "\n".join(
        f"- **Q: {entry.topic.title}**\n"
        f"  [See {pluralize(_replies(entry.topic), 'answer')}]({topic_url(config.base_url, entry.topic)})"
        for entry in entries
    )


def trending_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    entries = selector.trending(TRENDING_WINDOW_DAYS, TRENDING_LIMIT)
    if not entries:
        return "Check back for trending discussions."
    return "\n".join(
        f"- {_topic_link(config, entry.topic)} - {_category_name(entry)}"
        f" ({number_with_delimiter(entry.topic.views)} views)"
        for entry in entries
    )


def latest_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    entries = selector.latest(config.latest_limit)
    if not entries:
        return "No topics yet"
    return "\n".join(
        f"- {_topic_link(config, entry.topic)} - {_category_name(entry)} ({format_date(entry.topic.created_at)})"
        for entry in entries
    )


def solved_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    result = selector.solved(SOLVED_LIMIT)
    if result.status == SolvedStatus.UNAVAILABLE:
        return "Solved topics feature not available."
    if result.status == SolvedStatus.EMPTY:
        return "No solved topics yet."
    return "\n".join(
        f"- ✓ {_topic_link(config, entry.topic)} (Solved, {number_with_delimiter(entry.topic.views)} views)"
        for entry in result.topics
    )


def top_contributors_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    users = selector.top_contributors(CONTRIBUTORS_MIN_POSTS, CONTRIBUTORS_LIMIT)
    if not users:
        return "Building contributor list..."
    lines = []
    for user in users:
        label = f"[@{user.username}]({user_url(config.base_url, user.username)})"
        if user.name:
            label = f"{label} ({user.name})"
        lines.append(
            f"- {label} - {number_with_delimiter(user.post_count)} posts,"
            f" {number_with_delimiter(user.likes_received)} likes received"
        )
    return "\n".join(lines)


def categories_summary_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    tree = selector.category_tree()
    if not tree:
        return "No public categories available"
    lines = []
    for node in tree:
        category = node.category
        lines.append(
            f"### {_category_link(config, category)} ({number_with_delimiter(category.topic_count)} topics)"
        )
        lines.append(category.description_excerpt or NO_DESCRIPTION)
        if node.subcategories:
            lines.append("")
            for subcategory in node.subcategories:
                lines.append(
                    f"- {_category_link(config, subcategory)}: {subcategory.description_excerpt or NO_DESCRIPTION}"
                )
        lines.append("")
    return "\n".join(lines)


def _categories_detailed_entry(node: CategoryNode, config: LlmsTxtConfig) -> list[str]:
    category = node.category
    lines = [f"### {_category_link(config, category)}"]
    if category.description:
        lines.extend(["", category.description, ""])
    if node.subcategories:
        lines.extend(["**Subcategories:**", ""])
        for subcategory in node.subcategories:
            lines.append(
                f"- **{_category_link(config, subcategory)}**: {subcategory.description_excerpt or NO_DESCRIPTION}"
            )
        lines.append("")
    return lines


def categories_detailed_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    tree = selector.category_tree()
    if not tree:
        return "No public categories available"
    lines = []
    for node in tree:
        lines.extend(_categories_detailed_entry(node, config))
    return "\n".join(lines)


def all_topics_body(selector: ContentSelector, config: LlmsTxtConfig) -> str:
    entries = selector.all_topics(config.min_views, config.posts_limit, with_first_post=config.include_excerpts)
    if not entries:
        return "No topics available"
    lines = []
    for entry in entries:
        link = _topic_link(config, entry.topic)
        if entry.category:
            lines.append(f"**{_category_link(config, entry.category)}** - {link}")
        else:
            lines.append(f"**{UNCATEGORIZED}** - {link}")
        if config.include_excerpts and entry.first_post_raw:
            lines.append(f"  > {truncate(entry.first_post_raw, config.post_excerpt_length)}")
            lines.append("")
    return "\n".join(lines)


def resources_body(config: LlmsTxtConfig) -> str:
    links = [
        f"- [Full Documentation (llms-full.txt)]({config.base_url}/llms-full.txt): Complete forum content",
        f"- [Sitemap Index (sitemaps.txt)]({config.base_url}/sitemaps.txt): All LLM-readable URLs",
    ]
    optional = [
        ("About", config.about_page_url, "About this community"),
        ("FAQ", config.faq_url, "Frequently asked questions"),
        ("Terms of Service", config.tos_url, "Community guidelines"),
        ("Privacy Policy", config.privacy_policy_url, "Privacy information"),
    ]
    for label, url, summary in optional:
        if url and url.strip():
            links.append(f"- [{label}]({url.strip()}): {summary}")
    return "\n".join(links)


# --- Documents ---

def build_navigation(selector: ContentSelector, config: LlmsTxtConfig) -> Document:
    doc = Document()
    doc.add("title", f"> {config.site_description}" if config.site_description else "", heading=config.site_title, level=1)
    doc.add("intro", config.intro_text)
    doc.add("ai_instructions", _ai_instructions(config), heading="For AI Assistants")
    doc.add("quick_facts", quick_facts_body(selector), heading="Quick Facts")
    doc.add("popular", popular_body(selector, config), heading="Popular Content (Most Helpful)")
    doc.add("faq", faq_body(selector, config), heading="Frequently Asked Questions")
    doc.add("categories", categories_summary_body(selector, config), heading="Categories and Subcategories")
    doc.add("trending", trending_body(selector, config), heading=f"Trending Now (Last {TRENDING_WINDOW_DAYS} Days)")
    doc.add("latest", latest_body(selector, config), heading="Latest Topics")
    doc.add("top_contributors", top_contributors_body(selector, config), heading="Top Contributors")
    doc.add("resources", resources_body(config), heading="Additional Resources")
    return doc


def build_full_content(selector: ContentSelector, config: LlmsTxtConfig) -> Document:
    doc = Document()
    doc.add("title", "", heading=f"{config.site_title} - Full Content", level=1)
    if config.site_description:
        doc.add("description", f"> {config.site_description}")
    if config.full_description.strip():
        doc.add("about", config.full_description, heading="About This Forum")
    doc.add("ai_instructions", _ai_instructions(config), heading="For AI Assistants")
    doc.add("navigation_link", f"[← Back to Navigation (llms.txt)]({config.base_url}/llms.txt)")
    doc.add("quick_facts", quick_facts_body(selector), heading="Quick Stats", rule_before=True)
    doc.add("popular", popular_detailed_body(selector, config), heading="Most Valuable Content (Highly Rated)", rule_before=True)
    doc.add("solved", solved_body(selector, config), heading="Solved Problems & Verified Answers", rule_before=True)
    doc.add("categories", categories_detailed_body(selector, config), heading="Categories and Subcategories", rule_before=True)
    doc.add("all_topics", all_topics_body(selector, config), heading="All Topics", rule_before=True)
    return doc


def _topic_list(entries: list[RankedTopic], config: LlmsTxtConfig, describe) -> str:
    return "\n".join(f"- {_topic_link(config, entry.topic)} ({describe(entry.topic)})" for entry in entries)


def build_category(selector: ContentSelector, config: LlmsTxtConfig, category: Category) -> Document:
    url = category_url(config.base_url, category)
    doc = Document()
    doc.add("title", f"> Category: {config.site_title}", heading=category.name, level=1)
    doc.add("description", category.description or NO_DESCRIPTION)
    doc.add("metadata", "\n".join([
        f"**Category URL:** {url}",
        f"**Topics in this category:** {number_with_delimiter(category.topic_count)}",
    ]))

    subcategories = selector.subcategories(category.id)
    doc.add("subcategories", "\n".join(
        f"- {_category_link(config, subcategory)}: {subcategory.description_excerpt or NO_DESCRIPTION}"
        for subcategory in subcategories
    ) or "No subcategories.", heading="Subcategories")

    popular = selector.popular_by_category(category.id, ENTITY_POPULAR_LIMIT)
    doc.add("popular", _topic_list(
        popular, config, lambda topic: f"{number_with_delimiter(topic.views)} views, {topic.like_count} likes",
    ) or "No topics yet.", heading="Most Popular Topics")

    recent = selector.recent_by_category(category.id, ENTITY_TOPICS_LIMIT)
    doc.add("recent", _topic_list(
        recent, config, lambda topic: f"{number_with_delimiter(topic.views)} views, {_replies(topic)} replies",
    ) or "No topics yet.", heading="Recent Topics")

    doc.add("canonical", _canonical_footer(url))
    return doc


def build_topic(selector: ContentSelector, config: LlmsTxtConfig, topic: Topic) -> Document:
    """Full transcript of a topic, using each post's raw markup rather than its rendered HTML."""
    url = topic_url(config.base_url, topic)
    category = selector.category_for(topic)
    posts, authors = selector.transcript(topic)

    category_line = _category_link(config, category) if category else UNCATEGORIZED
    author = authors.get(topic.user_id)
    last_activity = format_timestamp(topic.last_posted_at) if topic.last_posted_at else "N/A"

    doc = Document()
    doc.add("title", "", heading=topic.title, level=1)
    doc.add("metadata", "\n".join([
        f"**Category:** {category_line}",
        f"**Author:** @{author.username if author else 'unknown'}",
        f"**Created:** {format_timestamp(topic.created_at)}",
        f"**Last Activity:** {last_activity}",
        f"**Views:** {number_with_delimiter(topic.views)}",
        f"**Likes:** {topic.like_count}",
        f"**Replies:** {_replies(topic)}",
        f"**URL:** {url}",
        "",
        "---",
    ]))
    for post in posts:
        poster = authors.get(post.user_id)
        likes = f" ({post.like_count} likes)" if post.like_count > 0 else ""
        doc.add(
            f"post_{post.post_number}",
            f"\n{post.raw}\n\n---",
            heading=f"Post #{post.post_number} by @{poster.username if poster else 'deleted'}{likes}",
        )
    doc.add("canonical", _canonical_footer(url))
    return doc


def build_tag(selector: ContentSelector, config: LlmsTxtConfig, tag: Tag) -> Document:
    url = tag_url(config.base_url, tag.name)
    doc = Document()
    doc.add("title", f"> {config.site_title}", heading=f"Tag: {tag.name}", level=1)
    doc.add("metadata", "\n".join([
        f"**Tag URL:** {url}",
        f"**Description:** {tag.description or NO_DESCRIPTION}",
    ]))
    entries = selector.tagged_topics(tag.name, ENTITY_TOPICS_LIMIT)
    body = "\n".join(
        f"- {_topic_link(config, entry.topic)} - {_category_name(entry)}"
        f" ({number_with_delimiter(entry.topic.views)} views)"
        for entry in entries
    )
    doc.add("topics", body or "No topics found with this tag.", heading="Topics with this tag")
    doc.add("canonical", _canonical_footer(url))
    return doc
