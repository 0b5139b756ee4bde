from __future__ import annotations
import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from post import Post

class MissingFieldError(ValueError):
    """build() was called before a required field was set."""

@dataclass
class SeoMetadata:
    title: str
    description: str
    canonical: str | None = None
    open_graph: dict = field(default_factory=dict)
    twitter: dict = field(default_factory=dict)
    schema: dict = field(default_factory=dict)

def _iso(dt: datetime) -> str:
    # naive timestamps are taken as UTC
    dt = dt.astimezone(timezone.utc) if dt.tzinfo else dt
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"

class SEOMetadataBuilder:
    def __init__(self):
        self._metadata: dict = {}

    def set_basic_metadata(self, title: str, description: str) -> SEOMetadataBuilder:
        self._metadata["title"] = title
        self._metadata["description"] = description
        return self

    def set_canonical(self, url: str) -> SEOMetadataBuilder:
        self._metadata["canonical"] = url
        return self

    def set_open_graph(self, og: dict) -> SEOMetadataBuilder:
        self._metadata["open_graph"] = og
        return self

    def set_twitter(self, twitter: dict) -> SEOMetadataBuilder:
        self._metadata["twitter"] = twitter
        return self

    def set_schema(self, schema: dict) -> SEOMetadataBuilder:
        self._metadata["schema"] = schema
        return self

    @classmethod
    def from_post(cls, post: Post, base_url: str, site: dict | None = None) -> SEOMetadataBuilder:
        """Builder pre-filled with canonical, social card and BlogPosting data for a post."""
        if site is None:
            from config import load_config
            site = load_config()["site"]
        url = f"{base_url}/posts/{post.id}"
        image_url = f"{base_url}{post.og_image or site.get('og_image', '/og.png')}"

        schema = {
            "@context": "https://schema.org",
            "@type": "BlogPosting",
            "headline": post.title,
            "description": post.description,
            "image": image_url,
            "datePublished": _iso(post.pub_datetime) if post.pub_datetime else None,
        }
        if post.mod_datetime:
            schema["dateModified"] = _iso(post.mod_datetime)
        schema["author"] = {"@type": "Person", "name": post.author}
        schema["publisher"] = {
            "@type": "Organization",
            "name": site.get("title"),
            "logo": {
                "@type": "ImageObject",
                "url": f"{base_url}{site.get('favicon', '/favicon.svg')}",
            },
        }

        return (
            cls()
            .set_basic_metadata(post.title, post.description)
            .set_canonical(post.canonical_url or url)
            .set_open_graph({
                "title": post.title,
                "description": post.description,
                "image": image_url,
                "type": "article",
            })
            .set_twitter({
                "card": "summary_large_image",
                "site": site.get("website"),
                "creator": post.author,
            })
            .set_schema(schema)
        )

    def build(self) -> SeoMetadata:
        if not self._metadata.get("title") or not self._metadata.get("description"):
            raise MissingFieldError("Title and description are required")
        return SeoMetadata(**copy.deepcopy(self._metadata))

    def get_partial(self) -> dict:
        """Accumulated fields so far, unvalidated."""
        return copy.deepcopy(self._metadata)

    def reset(self) -> SEOMetadataBuilder:
        self._metadata.clear()
        return self

    def clone(self) -> SEOMetadataBuilder:
        other = SEOMetadataBuilder()
        other._metadata = copy.deepcopy(self._metadata)
        return other
