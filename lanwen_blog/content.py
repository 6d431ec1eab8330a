import logging
import math
import pathlib
import re
from dataclasses import dataclass, field
from typing import List, Optional

import yaml
from markdown import Markdown

from .errors import ContentError
from .markdown_ext import CodeTitleExtension
from .routes import Route, route_for

log = logging.getLogger(__name__)

fm_re = re.compile(r"^---\n(.*?)\n---\n?(.*)$", re.S)
tag_re = re.compile(r"<[^>]+>")
ws_re = re.compile(r"\s+")

WORDS_PER_MINUTE = 265


@dataclass
class Post:
    source: pathlib.Path
    route: Route
    title: str
    html: str
    tags: List[str] = field(default_factory=list)
    draft: bool = False
    description: str = ""
    time_to_read: int = 1
    previous: Optional["Post"] = field(default=None, repr=False, compare=False)
    next: Optional["Post"] = field(default=None, repr=False, compare=False)

    @property
    def slug(self):
        return self.route.slug

    @property
    def published(self):
        return self.route.published

    @property
    def date(self):
        return self.route.published.strftime("%Y-%m-%d")

    @property
    def is_bundle(self):
        return self.source.name == "index.md"


def split_front_matter(text, source="<string>"):
    text = text.lstrip("\ufeff").replace("\r\n", "\n")
    m = fm_re.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ContentError(f"{source}: invalid front matter: {e}") from e
    if not isinstance(fm, dict):
        raise ContentError(f"{source}: front matter must be a mapping")
    return fm, m.group(2)


def parse_tags(value, source="<string>"):
    if value is None or value == "":
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        raise ContentError(f"{source}: tags must be a list or a comma-separated string")
    return [str(t).strip() for t in value if str(t).strip()]


def render_markdown(body):
    md = Markdown(
        extensions=[
            CodeTitleExtension(),
            "fenced_code",
            "tables",
            "toc",
            "codehilite",
        ],
        extension_configs={
            "codehilite": {
                "guess_lang": False,
                "css_class": "highlight",
            },
            "toc": {"anchorlink": False, "permalink": "§", "permalink_class": "anchor"},
        },
    )
    return md.convert(body)


def strip_html_text(text):
    return ws_re.sub(" ", tag_re.sub("", text)).strip()


def excerpt(text, max_len=140):
    s = strip_html_text(text)
    return (s[:max_len].rstrip() + "…") if len(s) > max_len else s


def time_to_read(text):
    words = len(strip_html_text(text).split())
    return max(1, int(math.floor(words / WORDS_PER_MINUTE + 0.5)))


def load_post(path, content_root):
    path = pathlib.Path(path)
    rel = path.relative_to(content_root)
    route = route_for(rel)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise ContentError(f"{rel}: not valid UTF-8") from None
    fm, body = split_front_matter(text, rel)
    body_html = render_markdown(body)

    draft = fm.get("draft") or False
    if not isinstance(draft, bool):
        raise ContentError(f"{rel}: draft must be true or false, got {draft!r}")

    post = Post(
        source=rel,
        route=route,
        title=str(fm.get("title") or route.name),
        html=body_html,
        tags=parse_tags(fm.get("tags"), rel),
        draft=draft,
        description=str(fm.get("description") or excerpt(body_html)),
        time_to_read=time_to_read(body_html),
    )
    log.debug("parsed %s -> %s", rel, post.slug)
    return post
