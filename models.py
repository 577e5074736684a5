from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LinkCount(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str
    internal: bool = False
    reflection: bool = False
    title: Optional[str] = ""
    clicks: int = 0


class Post(BaseModel):
    """One forum message as returned by the Discourse JSON API."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    username: str = ""
    cooked: str = ""
    created_at: str = ""
    post_number: int
    reply_to_post_number: Optional[int] = None
    link_counts: Optional[List[LinkCount]] = None


class PostStream(BaseModel):
    model_config = ConfigDict(extra="ignore")

    posts: List[Post] = []
    stream: List[int] = []


class TopicData(BaseModel):
    """Thread-level metadata plus the first page of posts."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    title: str = "Untitled Topic"
    slug: str = ""
    tags: List[str] = []
    post_stream: PostStream = Field(default_factory=PostStream)

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, value: Optional[List[Union[str, dict]]]) -> List[str]:
        # Newer Discourse versions send {"id", "name", "slug"} objects instead of plain names
        names: List[str] = []
        for tag in value or []:
            name = tag.get("name", "") if isinstance(tag, dict) else str(tag)
            if name and name not in names:
                names.append(name)
        return names


class PostsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    post_stream: PostStream = Field(default_factory=PostStream)
