from __future__ import annotations
import re, yaml
from datetime import date, datetime, timezone
from pathlib import Path
from manipulation import slugify
from post import Post

_FM_RE = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*$\n?", re.S | re.M)
_JEKYLL_DT = "%Y-%m-%d %H:%M:%S %z"

# front-matter key -> Post field; Astro camelCase and Jekyll names both accepted
_ALIASES = {
    "title": "title",
    "description": "description",
    "summary": "description",
    "excerpt": "description",
    "date": "pub_datetime",
    "pub_datetime": "pub_datetime",
    "pubDatetime": "pub_datetime",
    "last_modified_at": "mod_datetime",
    "mod_datetime": "mod_datetime",
    "modDatetime": "mod_datetime",
    "author": "author",
    "tags": "tags",
    "featured": "featured",
    "draft": "draft",
    "canonical_url": "canonical_url",
    "canonicalURL": "canonical_url",
    "og_image": "og_image",
    "ogImage": "og_image",
    "image": "og_image",
    "header_image": "og_image",
}

def _jekyll_dt(dt: datetime) -> str:
    return dt.strftime(_JEKYLL_DT).strip()  # Jekyll-friendly

def _utc(dt: datetime) -> datetime:
    # naive timestamps are taken as UTC
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)

def _parse_dt(value) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _utc(value)
    if isinstance(value, date):
        return _utc(datetime.combine(value, datetime.min.time()))
    s = str(value).strip()
    try:
        return _utc(datetime.fromisoformat(s.replace("Z", "+00:00")))
    except ValueError:
        pass
    try:
        return _utc(datetime.strptime(s, _JEKYLL_DT))
    except ValueError as exc:
        raise ValueError(f"Unrecognised date: {value!r}") from exc

def _normalize_tags(t) -> list[str]:
    if t is None:
        return []
    if isinstance(t, str):
        return [p.strip() for p in t.split(",") if p.strip()]
    return [str(x).strip() for x in t if str(x).strip()]

def build_front_matter_dict(post: Post, *, layout: str = "post", permalink: str | None = None) -> dict:
    fm = {
        "layout": layout,
        "title": post.title,
        "description": post.description,
        "author": post.author,
        "tags": list(post.tags),
        "permalink": permalink or f"/posts/{post.id or slugify(post.title)}/",
    }
    if post.pub_datetime:
        fm["date"] = _jekyll_dt(post.pub_datetime)
    if post.mod_datetime:
        fm["last_modified_at"] = _jekyll_dt(post.mod_datetime)
    if post.featured is not None:
        fm["featured"] = post.featured
    if post.draft is not None:
        fm["draft"] = post.draft
    if post.canonical_url:
        fm["canonical_url"] = post.canonical_url
    if post.og_image:
        fm["image"] = post.og_image
    return fm

def front_matter_text(fm_dict: dict) -> str:
    yaml_txt = yaml.safe_dump(
        fm_dict, allow_unicode=True, sort_keys=False, default_flow_style=False, width=1000
    )
    return f"---\n{yaml_txt}---\n\n"

def split_front_matter(text: str) -> tuple[dict, str]:
    """Split a Markdown document into (front matter dict, body)."""
    if not re.match(r"---[ \t]*\n", text):
        return {}, text
    m = _FM_RE.match(text)
    if not m:
        raise ValueError("Front matter block is not terminated by '---'")
    meta = yaml.safe_load(m.group(1)) or {}
    if not isinstance(meta, dict):
        raise ValueError("Front matter must be a YAML mapping")
    return meta, text[m.end():].lstrip("\n")

def post_from_markdown(text: str, post_id: str) -> Post:
    meta, body = split_front_matter(text)
    fields = {}
    for k, v in meta.items():
        name = _ALIASES.get(k)
        if name and name not in fields:
            fields[name] = v
    return Post(
        id=post_id,
        title=str(fields.get("title") or ""),
        description=str(fields.get("description") or ""),
        pub_datetime=_parse_dt(fields.get("pub_datetime")),
        mod_datetime=_parse_dt(fields.get("mod_datetime")),
        author=str(fields.get("author") or ""),
        tags=_normalize_tags(fields.get("tags")),
        featured=fields.get("featured"),
        draft=fields.get("draft"),
        canonical_url=fields.get("canonical_url"),
        og_image=fields.get("og_image"),
        body=body,
    )

def load_posts(directory: str | Path) -> list[Post]:
    d = Path(directory)
    if not d.is_dir():
        raise ValueError(f"Posts directory not found: {d}")
    return [post_from_markdown(p.read_text(encoding="utf-8"), p.stem) for p in sorted(d.glob("*.md"))]
