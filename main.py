import argparse, json, sys
from dataclasses import asdict, replace
from pathlib import Path
from config import BASE, load_config
from manipulation import token_trim
from posts import PostCollection, calculate_reading_time, post_filter
from publisher.front_matter import build_front_matter_dict, front_matter_text, load_posts
from seo import SEOMetadataBuilder
from validator import validate_posts, find_duplicate_titles, sanitize_tags

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Audit and query a directory of Markdown blog posts.")
    ap.add_argument("--config", help="path to config.yaml")
    ap.add_argument("--posts-dir", help="override posts_dir from the config")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("validate", help="report errors, warnings and duplicate titles")
    rel = sub.add_parser("related", help="posts sharing tags with a post")
    rel.add_argument("post_id")
    rel.add_argument("--limit", type=int)
    seo = sub.add_parser("seo", help="SEO metadata for a post as JSON")
    seo.add_argument("post_id")
    rt = sub.add_parser("reading-time", help="word count and reading time for a post")
    rt.add_argument("post_id")
    sub.add_parser("tags", help="unique tags across published posts")
    sub.add_parser("archive", help="published posts grouped by year")
    fm = sub.add_parser("front-matter", help="Jekyll front matter for a post with sanitized tags")
    fm.add_argument("post_id")
    return ap

def cmd_validate(collection: PostCollection, cfg: dict) -> int:
    results = validate_posts(collection.all_posts())
    failed = 0
    for post_id, res in results.items():
        if res.is_valid and not res.warnings:
            continue
        print(f"   [{'ok' if res.is_valid else 'FAIL'}] {post_id}", flush=True)
        for e in res.errors:
            print(f"      error: {e}", flush=True)
        for w in res.warnings:
            print(f"      warning: {w}", flush=True)
        failed += not res.is_valid

    dups = find_duplicate_titles(collection.all_posts())
    for title, group in dups.items():
        print(f"   duplicate title '{title}': {', '.join(p.id for p in group)}", flush=True)

    print(f">> Validated {len(results)} post(s): {failed} with errors, {len(dups)} duplicate title(s)", flush=True)
    return 1 if failed else 0

def _lookup(collection: PostCollection, post_id: str):
    post = collection.by_id(post_id)
    if post is None:
        print(f">> Post not found: {post_id}", flush=True)
    return post

def cmd_related(collection: PostCollection, cfg: dict, post_id: str, limit: int | None) -> int:
    post = _lookup(collection, post_id)
    if post is None:
        return 1
    related = collection.find_related_posts(post, limit or cfg["related_posts"]["limit"])
    print(f">> {len(related)} related post(s) for {post_id}", flush=True)
    for r in related:
        print(f"   {r.relevance_score:.2f}  {r.post.id} :: {token_trim(r.post.title, 70)}", flush=True)
    return 0

def cmd_seo(collection: PostCollection, cfg: dict, post_id: str) -> int:
    post = _lookup(collection, post_id)
    if post is None:
        return 1
    site = cfg["site"]
    meta = SEOMetadataBuilder.from_post(post, site["website"], site).build()
    print(json.dumps(asdict(meta), indent=2, ensure_ascii=False))
    return 0

def cmd_reading_time(collection: PostCollection, cfg: dict, post_id: str) -> int:
    post = _lookup(collection, post_id)
    if post is None:
        return 1
    rt = calculate_reading_time(post.body, cfg["reading"]["words_per_minute"])
    print(f">> {post_id}: {rt.words} words, {rt.text}", flush=True)
    return 0

def _published(collection: PostCollection, cfg: dict) -> PostCollection:
    margin = cfg["site"]["scheduled_post_margin_minutes"]
    return PostCollection(p for p in collection.all_posts() if post_filter(p, margin_minutes=margin))

def cmd_tags(collection: PostCollection, cfg: dict) -> int:
    published = _published(collection, cfg)
    tags = published.unique_tags(margin_minutes=cfg["site"]["scheduled_post_margin_minutes"])
    print(f">> {len(tags)} tag(s)", flush=True)
    for t in tags:
        print(f"   {t['tag']} ({len(published.by_tag(t['tag_name']))})", flush=True)
    return 0

def cmd_archive(collection: PostCollection, cfg: dict) -> int:
    for year, posts in _published(collection, cfg).group_by_year().items():
        print(f">> {year} ({len(posts)})", flush=True)
        for p in posts:
            print(f"   {p.pub_datetime:%Y-%m-%d}  {token_trim(p.title, 70)}", flush=True)
    return 0

def cmd_front_matter(collection: PostCollection, cfg: dict, post_id: str) -> int:
    post = _lookup(collection, post_id)
    if post is None:
        return 1
    fm_dict = build_front_matter_dict(replace(post, tags=sanitize_tags(post.tags)))
    print(front_matter_text(fm_dict) + post.body, end="")
    return 0

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)

    if args.posts_dir:
        posts_dir = Path(args.posts_dir)
    else:
        # relative to the config file that named it
        posts_dir = Path(cfg["posts_dir"])
        if not posts_dir.is_absolute():
            posts_dir = (Path(args.config).resolve().parent if args.config else BASE) / posts_dir
    print(f">> Loading posts from {posts_dir} …", flush=True)
    collection = PostCollection(load_posts(posts_dir))
    print(f">> Posts: {collection.count()}", flush=True)

    if args.command == "validate":
        return cmd_validate(collection, cfg)
    if args.command == "related":
        return cmd_related(collection, cfg, args.post_id, args.limit)
    if args.command == "seo":
        return cmd_seo(collection, cfg, args.post_id)
    if args.command == "reading-time":
        return cmd_reading_time(collection, cfg, args.post_id)
    if args.command == "tags":
        return cmd_tags(collection, cfg)
    if args.command == "front-matter":
        return cmd_front_matter(collection, cfg, args.post_id)
    return cmd_archive(collection, cfg)

if __name__ == "__main__":
    sys.exit(main())
