#!/usr/bin/env python3
"""Archive a Discourse thread into a single Obsidian-ready markdown file."""
import argparse
import logging
import sys
from typing import List, Optional
from urllib.parse import urlparse

import requests

from DiscourceHome import parse_discourse_url
from DocGen import generate_markdown_content
from ExtractPosts import create_session, fetch_all_posts, fetch_topic
from config import load_config
from errors import ClipperError, UnsupportedSourceUrlError
from storage import save_markdown_file

logger = logging.getLogger(__name__)


DEFAULT_TARGET_DIR = "./archive"


def archive_thread(source_url: str, target_dir: str = DEFAULT_TARGET_DIR, config=None) -> str:
    """Fetch, render and save one thread; returns the saved path relative to the cwd."""
    url_info = parse_discourse_url(source_url)
    if url_info is None:
        raise UnsupportedSourceUrlError(source_url)

    base_url, topic_id = url_info
    config = config or load_config()
    session = create_session(config)

    try:
        logger.info(f"Fetching thread from {urlparse(base_url).hostname}")
        topic = fetch_topic(session, base_url, topic_id, config)
        logger.info(f'Retrieved "{topic.title}" ({len(topic.post_stream.stream)} posts)')

        all_posts = fetch_all_posts(session, base_url, topic_id, topic, config)
    finally:
        session.close()

    markdown_content = generate_markdown_content(topic, all_posts, source_url, base_url, topic_id)
    relative_path = save_markdown_file(markdown_content, target_dir, topic_id, topic.slug)
    logger.info(f"Saved {len(all_posts)} posts to {relative_path}")
    return relative_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Archive a Discourse thread as a markdown file.")
    parser.add_argument(
        "--url", "-u",
        required=True,
        help="The full URL to any post within the Discourse thread.",
    )
    parser.add_argument(
        "--target-dir", "-t",
        default=DEFAULT_TARGET_DIR,
        help="The directory where the output file will be saved.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        archive_thread(args.url, args.target_dir)
    except ClipperError as e:
        logger.error(str(e))
        return 1
    except (requests.RequestException, OSError) as e:
        logger.error(f"An unexpected error occurred: {e}")
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
