from __future__ import annotations
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from post import Post

TITLE_MAX = 100
DESCRIPTION_MAX = 200
DESCRIPTION_MIN = 50
TAGS_MAX = 10

@dataclass
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

def validate_post(post: Post, now: datetime | None = None) -> ValidationResult:
    """Check one post. Errors block publishing, warnings are advisory."""
    errors, warnings = [], []
    title = post.title or ""
    description = post.description or ""
    tags = post.tags or []

    if not title.strip():
        errors.append("Title is required and cannot be empty")
    if not description.strip():
        errors.append("Description is required and cannot be empty")
    if post.pub_datetime is None:
        errors.append("Publication date is required")

    if len(title) > TITLE_MAX:
        warnings.append(f"Title is longer than recommended ({TITLE_MAX} characters)")
    if len(description) > DESCRIPTION_MAX:
        warnings.append(f"Description is longer than recommended ({DESCRIPTION_MAX} characters)")
    if description and len(description) < DESCRIPTION_MIN:
        warnings.append(f"Description is shorter than recommended ({DESCRIPTION_MIN} characters)")

    if not tags:
        warnings.append("Post should have at least one tag")
    if len(tags) > TAGS_MAX:
        warnings.append("Too many tags (recommended: 3-5 tags)")

    if post.pub_datetime is not None:
        now = now or datetime.now(post.pub_datetime.tzinfo)
        if post.pub_datetime > now and not post.draft:
            warnings.append("Publication date is in the future for a non-draft post")
        if post.mod_datetime is not None and post.mod_datetime < post.pub_datetime:
            errors.append("Modified date cannot be before publication date")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

def validate_posts(posts: Iterable[Post], now: datetime | None = None) -> dict[str, ValidationResult]:
    return {p.id: validate_post(p, now) for p in posts}

def find_duplicate_titles(posts: Iterable[Post]) -> dict[str, list[Post]]:
    by_title: dict[str, list[Post]] = {}
    for p in posts:
        by_title.setdefault((p.title or "").lower().strip(), []).append(p)
    return {t: group for t, group in by_title.items() if len(group) > 1}

def sanitize_tag(tag: str) -> str:
    s = tag.lower().strip()
    s = re.sub(r"[^a-z0-9\s-]", "", s)
    s = re.sub(r"\s+", "-", s)
    return re.sub(r"-+", "-", s)

def sanitize_tags(tags: Iterable[str]) -> list[str]:
    return [t for t in (sanitize_tag(x) for x in tags) if t]
