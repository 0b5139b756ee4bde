from __future__ import annotations
import copy, os, yaml
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE = Path(__file__).resolve().parent
CONFIG_PATH = BASE / "config.yaml"

DEFAULTS = {
    "site": {
        "website": "https://example.com",
        "title": "Blog",
        "author": "",
        "og_image": "/og.png",
        "favicon": "/favicon.svg",
        "scheduled_post_margin_minutes": 15,
    },
    "reading": {"words_per_minute": 200},
    "related_posts": {"limit": 3},
    "posts_dir": "content",
}

def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out

def load_config(path: str | Path | None = None) -> dict:
    """config.yaml over the defaults, then SITE_* environment overrides."""
    path = Path(path) if path else CONFIG_PATH
    raw = {}
    if path.exists():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"{path} must contain a YAML mapping, got {type(raw).__name__}")
    cfg = _merge(DEFAULTS, raw)

    site = cfg["site"]
    site["website"] = os.getenv("SITE_BASE_URL", site["website"]).rstrip("/")
    site["title"] = os.getenv("SITE_TITLE", site["title"])
    return cfg
