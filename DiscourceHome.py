from typing import Iterable, Optional, Tuple
from urllib.parse import urlencode, urlparse


DEFAULT_PORTS = {"http": 80, "https": 443}


def parse_discourse_url(full_url: str) -> Optional[Tuple[str, str]]:
    """Extract (base_url, topic_id) from any URL inside a Discourse thread.

    Returns None when the URL has no /t/.../<number> segment.
    """
    try:
        url = urlparse(full_url)
        port = url.port
    except ValueError:
        return None
    if url.scheme not in ("http", "https") or not url.hostname:
        return None

    path_parts = [part for part in url.path.split("/") if part]
    if "t" not in path_parts:
        return None

    if port == DEFAULT_PORTS[url.scheme]:
        port = None
    base_url = f"{url.scheme}://{url.hostname}" + (f":{port}" if port else "")
    for part in path_parts[path_parts.index("t") + 1:]:
        if part.isdigit() and part.isascii():
            return base_url, part
    return None


def topic_json_url(base_url: str, topic_id: str) -> str:
    return f"{base_url}/t/{topic_id}.json"


def posts_json_url(base_url: str, topic_id: str, post_ids: Iterable[int]) -> str:
    query = urlencode([("post_ids[]", post_id) for post_id in post_ids])
    return f"{base_url}/t/{topic_id}/posts.json?{query}"
