import re
from datetime import date, datetime, timezone
from typing import List, Optional, Union

from models import Post, TopicData


DESCRIPTION_LENGTH = 150
FALLBACK_TAG = "discourse-clipping"
INVALID_DATE = "Invalid Date"


def format_date_iso(value: Union[str, date, datetime, None]) -> str:
    """Format a timestamp as YYYY-MM-DD (UTC), or 'Invalid Date'."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value.isoformat()
    else:
        try:
            parsed = datetime.fromisoformat((value or "").strip().replace("Z", "+00:00"))
        except ValueError:
            return INVALID_DATE

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def escape_yaml_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_description(text: str) -> str:
    return re.sub(r"\s+", " ", text[:DESCRIPTION_LENGTH])


def generate_yaml_frontmatter(
    topic: TopicData,
    original_post: Post,
    source_url: str,
    original_post_markdown: str,
    today: Optional[date] = None,
) -> List[str]:
    """Build the Obsidian-style YAML block for the archived thread."""
    created = today or datetime.now(timezone.utc).date()

    output_lines = [
        "---",
        f'title: "{escape_yaml_string(topic.title)}"',
        f'source: "{source_url}"',
        "author:",
        f'  - "[[{original_post.username}]]"',
        f"published: {format_date_iso(original_post.created_at)}",
        f"created: {format_date_iso(created)}",
        f'description: "{escape_yaml_string(build_description(original_post_markdown))}..."',
        "tags:",
    ]

    if topic.tags:
        output_lines.extend(f'  - "{escape_yaml_string(tag)}"' for tag in topic.tags)
    else:
        output_lines.append(f'  - "{FALLBACK_TAG}"')

    output_lines.append("---")
    return output_lines
