"""Content selection and ranking for the llms.txt documents.

Every listing here is restricted to public discussion content: visible topics
of the regular archetype whose category is not read-restricted. Thresholds and
limits are always passed in by the caller.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from sqlmodel import Session

from llms_txt.core.clock import Clock, utc_now
from llms_txt.data_access import category as category_data
from llms_txt.data_access import post as post_data
from llms_txt.data_access import tag as tag_data
from llms_txt.data_access import topic as topic_data
from llms_txt.data_access import user as user_data
from llms_txt.data_access.topic import TopicOrder, TopicQuery
from llms_txt.models.category import Category
from llms_txt.models.post import Post
from llms_txt.models.tag import Tag
from llms_txt.models.topic import Topic
from llms_txt.models.user import User

logger = logging.getLogger(__name__)

PUBLIC_TOPICS = TopicQuery()


@dataclass(frozen=True)
class RankedTopic:
    topic: Topic
    category: Optional[Category]
    # Raw body of the opening post, only loaded for listings that show excerpts.
    first_post_raw: Optional[str] = None


class SolvedStatus(str, Enum):
    AVAILABLE = "available"
    EMPTY = "empty"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class SolvedResult:
    status: SolvedStatus
    topics: list[RankedTopic] = field(default_factory=list)


@dataclass(frozen=True)
class QuickFacts:
    total_topics: int
    total_posts: int
    total_users: int
    total_solved: int
    generated_at: datetime


@dataclass(frozen=True)
class CategoryNode:
    category: Category
    subcategories: list[Category]


class ContentSelector:
    def __init__(self, db: Session, clock: Clock = utc_now, solved_enabled: bool = True):
        self.db = db
        self.clock = clock
        self.solved_enabled = solved_enabled

    def _rank(self, query: TopicQuery, order: TopicOrder, limit: Optional[int], with_first_post: bool = False) -> list[RankedTopic]:
        topics = topic_data.list_topics(self.db, query, order, limit)
        categories = category_data.get_categories_by_ids(self.db, (topic.category_id for topic in topics))
        first_posts = post_data.get_first_posts(self.db, (topic.id for topic in topics)) if with_first_post else {}
        ranked = []
        for topic in topics:
            first_post = first_posts.get(topic.id)
            ranked.append(RankedTopic(
                topic=topic,
                category=categories.get(topic.category_id),
                first_post_raw=first_post.raw if first_post else None,
            ))
        return ranked

    def popular(self, min_likes: int, min_views: int, limit: int) -> list[RankedTopic]:
        query = TopicQuery(more_likes_than=min_likes, more_views_than=min_views)
        return self._rank(query, TopicOrder.POPULAR, limit)

    def popular_detailed(self, min_likes: int, min_views: int, limit: int) -> list[RankedTopic]:
        query = TopicQuery(more_likes_than=min_likes, more_views_than=min_views)
        return self._rank(query, TopicOrder.POPULAR, limit, with_first_post=True)

    def faq_candidates(self, limit: int) -> list[RankedTopic]:
        # A question with at least one reply.
        query = TopicQuery(title_contains="?", more_posts_than=1)
        return self._rank(query, TopicOrder.POPULAR, limit)

    def trending(self, window_days: int, limit: int) -> list[RankedTopic]:
        since = self.clock() - timedelta(days=window_days)
        return self._rank(TopicQuery(created_after=since), TopicOrder.TRENDING, limit)

    def solved(self, limit: int) -> SolvedResult:
        if not self.solved_marker_available():
            logger.debug("Accepted-answer marker unavailable, skipping solved topics")
            return SolvedResult(SolvedStatus.UNAVAILABLE)
        topics = self._rank(TopicQuery(accepted_answer_only=True), TopicOrder.MOST_VIEWED, limit)
        if not topics:
            return SolvedResult(SolvedStatus.EMPTY)
        return SolvedResult(SolvedStatus.AVAILABLE, topics)

    def solved_marker_available(self) -> bool:
        return self.solved_enabled and topic_data.solved_marker_available(self.db)

    def top_contributors(self, min_posts: int, limit: int) -> list[User]:
        return user_data.list_users(self.db, more_posts_than=min_posts, limit=limit)

    def latest(self, limit: int) -> list[RankedTopic]:
        return self._rank(PUBLIC_TOPICS, TopicOrder.NEWEST, limit)

    def recent_by_category(self, category_id: int, limit: int) -> list[RankedTopic]:
        return self._rank(TopicQuery(category_id=category_id), TopicOrder.NEWEST, limit)

    def popular_by_category(self, category_id: int, limit: int) -> list[RankedTopic]:
        return self._rank(TopicQuery(category_id=category_id), TopicOrder.POPULAR, limit)

    def tagged_topics(self, tag_name: str, limit: int) -> list[RankedTopic]:
        return self._rank(TopicQuery(tag_name=tag_name), TopicOrder.POPULAR, limit)

    def all_topics(self, min_views: int, limit: Optional[int], with_first_post: bool = False) -> list[RankedTopic]:
        """Most recent first; ``limit=None`` lists every qualifying topic."""
        return self._rank(TopicQuery(min_views=min_views), TopicOrder.NEWEST, limit, with_first_post)

    def quick_facts(self) -> QuickFacts:
        if self.solved_marker_available():
            total_solved = topic_data.count_topics(self.db, TopicQuery(accepted_answer_only=True))
        else:
            total_solved = 0
        return QuickFacts(
            total_topics=topic_data.count_topics(self.db, PUBLIC_TOPICS),
            total_posts=post_data.count_posts(self.db, topic_data.topic_ids(PUBLIC_TOPICS)),
            total_users=user_data.count_users(self.db),
            total_solved=total_solved,
            generated_at=self.clock(),
        )

    def category_tree(self) -> list[CategoryNode]:
        return [
            CategoryNode(category=parent, subcategories=self.subcategories(parent.id))
            for parent in category_data.list_categories(self.db, parent_id=None)
        ]

    def subcategories(self, parent_id: int) -> list[Category]:
        return category_data.list_categories(self.db, parent_id=parent_id)

    def public_categories(self) -> list[Category]:
        return category_data.list_categories(self.db)

    def latest_content_change(self) -> tuple[Optional[datetime], Optional[datetime]]:
        """Newest topic creation and category update, used to detect stale caches."""
        return topic_data.max_topic_created_at(self.db), category_data.max_category_updated_at(self.db)

    def category_by_id(self, category_id: int) -> Optional[Category]:
        return category_data.get_category(self.db, category_id)

    def category_for(self, topic: Topic) -> Optional[Category]:
        if topic.category_id is None:
            return None
        return self.category_by_id(topic.category_id)

    def tags(self) -> list[Tag]:
        return tag_data.list_tags(self.db)

    def transcript(self, topic: Topic) -> tuple[list[Post], dict[int, User]]:
        """Public posts of a topic in order, with their authors keyed by user id."""
        posts = post_data.list_posts(self.db, topic.id)
        authors = user_data.get_users_by_ids(self.db, [topic.user_id, *(post.user_id for post in posts)])
        return posts, authors

    def public_category(self, category_id: int) -> Optional[Category]:
        category = self.category_by_id(category_id)
        if category is None or category.read_restricted:
            return None
        return category

    def public_topic(self, topic_id: int) -> Optional[Topic]:
        return topic_data.get_topic(self.db, topic_id, PUBLIC_TOPICS)

    def tag_by_name(self, name: str) -> Optional[Tag]:
        return tag_data.get_tag_by_name(self.db, name)
