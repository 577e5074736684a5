"""
Shared fixtures for building Discourse posts and topics.
"""
import pytest

from models import Post, TopicData


@pytest.fixture
def make_post():
    """Factory for Post objects with sensible defaults."""
    def _make_post(post_number: int, reply_to=None, **overrides) -> Post:
        data = {
            "id": post_number * 10,
            "username": f"user{post_number}",
            "cooked": f"<p>Content of post {post_number}</p>",
            "created_at": "2023-01-01T10:00:00Z",
            "post_number": post_number,
            "reply_to_post_number": reply_to,
        }
        data.update(overrides)
        return Post(**data)
    return _make_post


@pytest.fixture
def topic():
    return TopicData(title="Test Topic", slug="test-topic", tags=["test"])
