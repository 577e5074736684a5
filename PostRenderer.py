import logging
import re
from typing import Dict, List, Sequence, Set, Tuple

from Frontmatter import format_date_iso
from ImageGallery import process_image_galleries
from JsonToMarkdown import MarkdownConverter
from Sanitizer import sanitize
from models import Post

logger = logging.getLogger(__name__)


IMAGE_URL_PATTERN = re.compile(r"\.(jpeg|jpg|png|gif|webp)(\?.*)?$", re.IGNORECASE)


def render_post_body(post: Post, converter: MarkdownConverter) -> str:
    """Sanitize, convert and gallery-group one post's cooked HTML."""
    markdown = converter.convert(sanitize(post.cooked))
    return process_image_galleries(markdown)


def render_external_links(post: Post) -> str:
    """Markdown block listing a post's outbound, non-image links ('' if none)."""
    link_lines = [
        f"- [{link.title or link.url}]({link.url})"
        for link in post.link_counts or []
        if not link.internal and not IMAGE_URL_PATTERN.search(link.url)
    ]
    if not link_lines:
        return ""
    return "\n".join(["", "**External Links:**", *link_lines])


def render_post_tree(
    posts: Sequence[Post],
    children_map: Dict[int, List[Post]],
    base_url: str,
    topic_id: str,
    converter: MarkdownConverter,
) -> List[str]:
    """Render posts and all their replies as nested blockquotes.

    Walks depth-first with an explicit stack; each reply level adds one
    "> " to the prefix. A post already rendered is not rendered again.
    """
    output_lines: List[str] = []
    visited: Set[int] = set()
    stack: List[Tuple[int, Post]] = [(1, post) for post in reversed(posts)]

    while stack:
        depth, post = stack.pop()
        if post.post_number in visited:
            logger.debug(f"Skipping post #{post.post_number}, already rendered")
            continue
        visited.add(post.post_number)

        prefix = "> " * depth
        post_link = f"{base_url}/t/{topic_id}/{post.post_number}"
        output_lines.append(
            f"{prefix}**{post.username}** • [Post #{post.post_number}]({post_link}) • {format_date_iso(post.created_at)}"
        )
        output_lines.append(prefix)

        for line in render_post_body(post, converter).split("\n"):
            output_lines.append(f"{prefix}{line}")

        external_links = render_external_links(post)
        if external_links:
            for line in external_links.split("\n"):
                output_lines.append(f"{prefix}{line}")

        output_lines.append("")

        children = children_map.get(post.post_number, [])
        stack.extend((depth + 1, child) for child in reversed(children))

    return output_lines
