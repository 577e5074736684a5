import logging
from typing import Optional, Sequence

from ConversationTree import ORIGINAL_POST_NUMBER, build_conversation_tree
from Frontmatter import generate_yaml_frontmatter
from JsonToMarkdown import MarkdownConverter
from PostRenderer import render_external_links, render_post_body, render_post_tree
from errors import MissingOriginalPostError
from models import Post, TopicData

logger = logging.getLogger(__name__)


def generate_markdown_content(
    topic: TopicData,
    all_posts: Sequence[Post],
    source_url: str,
    base_url: str,
    topic_id: str,
    converter: Optional[MarkdownConverter] = None,
) -> str:
    """Assemble the archived thread: frontmatter, original post, then comments."""
    converter = converter or MarkdownConverter()
    tree = build_conversation_tree(all_posts)

    original_post = tree.post_map.get(ORIGINAL_POST_NUMBER)
    if original_post is None:
        raise MissingOriginalPostError()

    original_post_markdown = render_post_body(original_post, converter)
    original_post_links = render_external_links(original_post)

    frontmatter = generate_yaml_frontmatter(topic, original_post, source_url, original_post_markdown)
    comments = render_post_tree(tree.top_level_posts, tree.children_map, base_url, topic_id, converter)
    logger.debug(f"Rendered {len(comments)} comment lines from {len(all_posts)} posts")

    output_lines = [*frontmatter, "", original_post_markdown]
    if original_post_links:
        output_lines.append(original_post_links)
    output_lines.extend(["", "---", "", "## Comments", "", *comments])

    return "\n".join(output_lines)
