import logging
import time
from typing import List

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from tqdm import tqdm
from urllib3.util.retry import Retry

from DiscourceHome import posts_json_url, topic_json_url
from config import FetchConfig
from models import Post, PostsResponse, TopicData

logger = logging.getLogger(__name__)


def create_session(config: FetchConfig) -> requests.Session:
    """Build a requests session carrying the retry policy and headers from `config`."""
    retry = Retry(
        total=config.retries,
        status_forcelist=config.retry_statuses,
        allowed_methods=frozenset(["GET"]),
        backoff_factor=config.backoff_factor,
        backoff_max=config.backoff_max,
        respect_retry_after_header=True,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)

    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": config.user_agent,
        "Accept": "application/json, text/plain, */*",
    })
    if config.cookie:
        session.headers["Cookie"] = config.cookie
    return session


def get_json(session: requests.Session, url: str, config: FetchConfig) -> dict:
    response = session.get(url, timeout=config.timeout)
    response.raise_for_status()
    return response.json()


def fetch_topic(session: requests.Session, base_url: str, topic_id: str, config: FetchConfig) -> TopicData:
    """Fetch the thread document (metadata plus the first page of posts)."""
    data = get_json(session, topic_json_url(base_url, topic_id), config)
    return TopicData.model_validate(data)


def fetch_all_posts(
    session: requests.Session,
    base_url: str,
    topic_id: str,
    topic: TopicData,
    config: FetchConfig,
) -> List[Post]:
    """Fetch every post in the thread's stream that the first page did not include.

    Chunks that fail are logged and skipped; whatever was retrieved is returned.
    """
    all_posts = list(topic.post_stream.posts)
    fetched_ids = {post.id for post in all_posts}
    remaining_ids = [post_id for post_id in topic.post_stream.stream if post_id not in fetched_ids]

    if not remaining_ids:
        return all_posts

    chunk_size = max(1, config.chunk_size)
    chunks = [remaining_ids[i:i + chunk_size] for i in range(0, len(remaining_ids), chunk_size)]

    with tqdm(total=len(chunks), desc="Fetching additional posts", unit="chunk") as pbar:
        for chunk in chunks:
            url = posts_json_url(base_url, topic_id, chunk)
            try:
                data = get_json(session, url, config)
                posts = PostsResponse.model_validate(data).post_stream.posts
                all_posts.extend(posts)
                pbar.set_postfix({"posts": len(all_posts)})
            except (requests.RequestException, ValueError, ValidationError) as e:
                logger.warning(f"Failed to fetch a chunk of {len(chunk)} posts, some posts may be missing: {e}")
            pbar.update(1)

            time.sleep(config.chunk_delay)  # polite delay between requests

    return all_posts
