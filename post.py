from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime

@dataclass
class Post:
    id: str
    title: str
    description: str
    pub_datetime: datetime | None
    author: str = ""
    tags: list[str] = field(default_factory=list)
    mod_datetime: datetime | None = None
    featured: bool | None = None
    draft: bool | None = None
    canonical_url: str | None = None
    og_image: str | None = None
    body: str = ""

@dataclass
class RelatedPost:
    post: Post
    relevance_score: float

@dataclass
class ReadingTime:
    minutes: int
    text: str
    words: int

@dataclass
class TocItem:
    depth: int
    text: str
    slug: str
    children: list[TocItem] = field(default_factory=list)

@dataclass
class EnhancedPost:
    post: Post
    reading_time: ReadingTime
    related_posts: list[RelatedPost] = field(default_factory=list)
