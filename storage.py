import logging
import os
import re

from errors import InvalidFilenameError, UnsafePathError

logger = logging.getLogger(__name__)


MAX_SLUG_LENGTH = 200


def sanitize_slug(slug: str) -> str:
    slug = re.sub(r"[^a-zA-Z0-9\-_]", "_", slug or "")
    slug = re.sub(r"\.{2,}", "_", slug)
    slug = re.sub(r"^\.+|\.+$", "", slug)
    return slug[:MAX_SLUG_LENGTH]


def _is_within(path: str, directory: str) -> bool:
    relative = os.path.relpath(path, directory)
    return not (relative == ".." or relative.startswith(".." + os.sep) or os.path.isabs(relative))


def get_safe_output_path(target_dir: str, topic_id: str, slug: str) -> str:
    """Return the output file path for a thread, refusing anything outside the target directory."""
    base_dir = os.path.abspath(target_dir)

    if os.path.isabs(target_dir) and not _is_within(base_dir, os.getcwd()):
        raise UnsafePathError()

    filename = f"{topic_id}-{sanitize_slug(slug)}.md"
    full_path = os.path.normpath(os.path.join(base_dir, filename))

    if not _is_within(full_path, base_dir):
        raise InvalidFilenameError()

    return full_path


def save_markdown_file(content: str, target_dir: str, topic_id: str, slug: str) -> str:
    """Write the document and return its path relative to the working directory."""
    output_path = get_safe_output_path(target_dir, topic_id, slug)
    logger.info(f"Saving to {output_path}")

    os.makedirs(os.path.dirname(output_path), exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)

    return os.path.relpath(output_path, os.getcwd())
