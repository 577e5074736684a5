import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from models import Post

logger = logging.getLogger(__name__)


ORIGINAL_POST_NUMBER = 1


@dataclass(frozen=True)
class ConversationTree:
    post_map: Dict[int, Post] = field(default_factory=dict)
    children_map: Dict[int, List[Post]] = field(default_factory=dict)
    top_level_posts: List[Post] = field(default_factory=list)


def _by_post_number(post: Post) -> int:
    return post.post_number


def build_conversation_tree(posts: Sequence[Post]) -> ConversationTree:
    """Rebuild the reply hierarchy from a flat, unordered list of posts.

    Post #1 is left out of both the children lists and the top-level list;
    it is rendered on its own as the lead content.
    """
    post_map = {post.post_number: post for post in posts}
    children_map: Dict[int, List[Post]] = {}
    top_level_posts: List[Post] = []

    for post in posts:
        if post.reply_to_post_number:
            children_map.setdefault(post.reply_to_post_number, []).append(post)
        elif post.post_number != ORIGINAL_POST_NUMBER:
            top_level_posts.append(post)

    for children in children_map.values():
        children.sort(key=_by_post_number)
    top_level_posts.sort(key=_by_post_number)

    for parent_number, children in children_map.items():
        if parent_number not in post_map:
            # Reply target missing (e.g. a chunk failed to download); these stay unrendered
            logger.debug(f"Post #{parent_number} is missing, {len(children)} replies to it will not be rendered")

    return ConversationTree(post_map=post_map, children_map=children_map, top_level_posts=top_level_posts)
