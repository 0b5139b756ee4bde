from __future__ import annotations
import math, re
from collections.abc import Iterable
from datetime import datetime, timedelta
from manipulation import strip_markup, slugify
from post import Post, RelatedPost, ReadingTime, TocItem, EnhancedPost

_HEADING_RE = re.compile(r'^(#{1,6})\s+(.+?)\s*#*\s*$')
_FENCE_RE = re.compile(r'^\s*(```|~~~)')

def calculate_reading_time(content: str, words_per_minute: int = 200) -> ReadingTime:
    words = len(strip_markup(content or "").split())
    minutes = max(1, math.ceil(words / words_per_minute))
    return ReadingTime(minutes=minutes, text=f"{minutes} min read", words=words)

def table_of_contents(content: str, min_depth: int = 2, max_depth: int = 3) -> list[TocItem]:
    """Nest the Markdown headings of a post body into a TOC tree."""
    root, stack, used = [], [], {}
    in_fence = False
    for line in (content or "").splitlines():
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            continue
        m = None if in_fence else _HEADING_RE.match(line)
        if not m:
            continue
        depth = len(m.group(1))
        if depth < min_depth or depth > max_depth:
            continue
        text = m.group(2).strip()
        slug = slugify(text)
        # github-style de-duplication: intro, intro-1, intro-2
        n = used.get(slug, 0)
        used[slug] = n + 1
        if n:
            slug = f"{slug}-{n}"
        item = TocItem(depth=depth, text=text, slug=slug)
        while stack and stack[-1].depth >= depth:
            stack.pop()
        (stack[-1].children if stack else root).append(item)
        stack.append(item)
    return root

def post_filter(post: Post, now: datetime | None = None, margin_minutes: int = 15) -> bool:
    """True when a post is neither a draft nor scheduled past the margin."""
    if post.draft or post.pub_datetime is None:
        return False
    now = now or datetime.now(post.pub_datetime.tzinfo)
    return now > post.pub_datetime - timedelta(minutes=margin_minutes)

def get_unique_tags(posts: Iterable[Post], now: datetime | None = None, margin_minutes: int = 15) -> list[dict]:
    seen, out = set(), []
    for p in posts:
        if not post_filter(p, now, margin_minutes):
            continue
        for t in p.tags:
            slug = slugify(t)
            if not slug or slug in seen:
                continue
            seen.add(slug)
            out.append({"tag": slug, "tag_name": t})
    return sorted(out, key=lambda d: d["tag"])

def _sort_key(p: Post):
    # undated posts sort after everything else
    return (p.pub_datetime is not None, p.pub_datetime or datetime.min)

class PostCollection:
    """Read-only queries over posts, newest first."""

    def __init__(self, posts: Iterable[Post]):
        # sorted() is stable, so equal timestamps keep their input order
        self._posts = sorted(posts, key=_sort_key, reverse=True)

    def __len__(self) -> int:
        return len(self._posts)

    def count(self) -> int:
        return len(self._posts)

    def all_posts(self) -> list[Post]:
        return list(self._posts)

    def by_tag(self, tag: str) -> list[Post]:
        return [p for p in self._posts if tag in p.tags]

    def by_author(self, author: str) -> list[Post]:
        return [p for p in self._posts if p.author == author]

    def featured(self) -> list[Post]:
        return [p for p in self._posts if p.featured is True]

    def recent(self, n: int = 5) -> list[Post]:
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        return self._posts[:n]

    def by_id(self, post_id: str) -> Post | None:
        return next((p for p in self._posts if p.id == post_id), None)

    def search(self, keyword: str) -> list[Post]:
        kw = keyword.lower()
        return [
            p for p in self._posts
            if kw in (p.title or "").lower()
            or kw in (p.description or "").lower()
            or any(kw in t.lower() for t in p.tags)
        ]

    def group_by_year(self) -> dict[int, list[Post]]:
        groups: dict[int, list[Post]] = {}
        for p in self._posts:
            if p.pub_datetime is None:
                continue
            groups.setdefault(p.pub_datetime.year, []).append(p)
        return groups

    def find_related_posts(self, post: Post, limit: int = 3) -> list[RelatedPost]:
        """Rank other posts by the share of `post`'s tags they carry.

        The score divides by the reference post's tag count only, so a
        candidate holding every reference tag scores 1.0 however many
        other tags it has. A reference with no tags has no related posts.
        """
        ref_tags = set(post.tags)
        if not ref_tags:
            return []
        scored = []
        for cand in self._posts:
            if cand.id == post.id:
                continue
            score = len(ref_tags.intersection(cand.tags)) / len(ref_tags)
            if score > 0:
                scored.append(RelatedPost(post=cand, relevance_score=score))
        scored.sort(key=lambda r: r.relevance_score, reverse=True)
        return scored[:limit]

    def unique_tags(self, now: datetime | None = None, margin_minutes: int = 15) -> list[dict]:
        return get_unique_tags(self._posts, now, margin_minutes)

    def enhance(self, post: Post, limit: int = 3, words_per_minute: int = 200) -> EnhancedPost:
        return EnhancedPost(
            post=post,
            reading_time=calculate_reading_time(post.body, words_per_minute),
            related_posts=self.find_related_posts(post, limit),
        )
