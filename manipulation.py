import re, warnings
from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

def clean_text(txt: str) -> str:
    return re.sub(r"\s+", " ", txt).strip()

def strip_markup(txt: str) -> str:
    """Visible text of an HTML/Markdown body, whitespace collapsed."""
    if not txt or not txt.strip():
        return ""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(txt, "lxml")
    for tag in soup(["script","style","noscript"]):
        tag.decompose()
    return clean_text(soup.get_text(" ", strip=True))

def token_trim(s: str, max_chars: int) -> str:
    s = s.strip()
    return s if len(s) <= max_chars else s[:max_chars-1].rstrip() + "…"

def slugify(title: str) -> str:
    s = title.lower()
    s = re.sub(r"[^a-z0-9\s-]", "", s)
    s = re.sub(r"\s+", "-", s).strip("-")
    return s[:80]
