import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


DEFAULT_COOKIE_FILE = "cookie.txt"


@dataclass(frozen=True)
class FetchConfig:
    """Settings handed to the HTTP session and the paginated post fetch."""
    timeout: float = 30.0
    retries: int = 3
    retry_statuses: Tuple[int, ...] = (408, 413, 429, 500, 502, 503, 504)
    backoff_factor: float = 0.5
    backoff_max: float = 3.0
    chunk_size: int = 50
    chunk_delay: float = 0.5
    user_agent: str = "Discourse-Scraper/1.0"
    cookie: Optional[str] = None


def _read_cookie(path: Path) -> Optional[str]:
    if not path.is_file():
        return None
    with open(path, "r", encoding="utf-8") as file:
        cookie_string = file.read().strip()
    return cookie_string or None


def load_config(base: Optional[FetchConfig] = None) -> FetchConfig:
    """Build a FetchConfig from the environment (and .env), on top of `base`."""
    load_dotenv()
    config = base or FetchConfig()
    overrides = {}

    if os.getenv("DISCOURSE_TIMEOUT"):
        overrides["timeout"] = float(os.environ["DISCOURSE_TIMEOUT"])
    if os.getenv("DISCOURSE_RETRIES"):
        overrides["retries"] = int(os.environ["DISCOURSE_RETRIES"])
    if os.getenv("DISCOURSE_CHUNK_SIZE"):
        overrides["chunk_size"] = int(os.environ["DISCOURSE_CHUNK_SIZE"])
    if os.getenv("DISCOURSE_CHUNK_DELAY"):
        overrides["chunk_delay"] = float(os.environ["DISCOURSE_CHUNK_DELAY"])
    if os.getenv("DISCOURSE_USER_AGENT"):
        overrides["user_agent"] = os.environ["DISCOURSE_USER_AGENT"]

    cookie = os.getenv("DISCOURSE_COOKIE") or _read_cookie(
        Path(os.getenv("DISCOURSE_COOKIE_FILE", DEFAULT_COOKIE_FILE))
    )
    if cookie:
        overrides["cookie"] = cookie

    return replace(config, **overrides)
