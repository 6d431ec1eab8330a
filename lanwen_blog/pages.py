"""The site's page graph: every page the build renders, with its context."""
import logging
import os
import pathlib
from dataclasses import dataclass, field
from typing import Dict, List

from .content import Post, load_post
from .errors import DuplicateSlugError
from .routes import check_unique, link_adjacent, slugify, sort_posts

log = logging.getLogger(__name__)


@dataclass
class Tag:
    name: str
    slug: str
    posts: List[Post] = field(default_factory=list)

    @property
    def path(self):
        return f"/tags/{self.slug}/"


@dataclass
class Page:
    path: str
    template: str
    title: str
    description: str = ""
    keywords: List[str] = field(default_factory=list)
    context: Dict = field(default_factory=dict)

    @property
    def output(self):
        """File the page is written to, relative to the output directory."""
        rel = self.path.lstrip("/")
        if not rel or rel.endswith("/"):
            rel += "index.html"
        return pathlib.PurePosixPath(rel)


def collect_posts(content_root, include_drafts=False):
    content_root = pathlib.Path(content_root)
    posts = []
    for root, dirs, files in os.walk(content_root):
        dirs.sort()
        for name in sorted(files):
            if not name.endswith(".md"):
                continue
            post = load_post(pathlib.Path(root) / name, content_root)
            if post.draft and not include_drafts:
                log.info("skipping draft %s", post.source)
                continue
            posts.append(post)

    check_unique(posts)
    return link_adjacent(sort_posts(posts))


def collect_tags(posts):
    tags = {}
    for post in posts:
        seen = set()
        for name in post.tags:
            slug = slugify(name)
            # "Java" and "java" are the same tag
            if slug in seen:
                continue
            seen.add(slug)
            tags.setdefault(slug, Tag(name=name, slug=slug)).posts.append(post)
    return [tags[slug] for slug in sorted(tags)]


def check_paths(pages):
    """Every page needs its own output path; static assets own ``/static/``."""
    seen = {}
    for page in pages:
        post = page.context.get("post")
        origin = post.source if post else f"the {page.template} page"
        if page.path.startswith("/static/"):
            raise DuplicateSlugError(page.path, "static assets", origin)
        if page.path in seen:
            raise DuplicateSlugError(page.path, seen[page.path], origin)
        seen[page.path] = origin


def build_pages(posts, tags, site):
    pages = [
        Page(
            path="/",
            template="index.html",
            title=site["index_title"],
            description=site["description"],
            keywords=list(site.get("keywords") or []),
            context={"posts": posts},
        )
    ]

    for post in posts:
        pages.append(
            Page(
                path=post.slug,
                template="post.html",
                title=post.title,
                description=post.description,
                keywords=post.tags,
                context={
                    "post": post,
                    "previous": post.previous,
                    "next": post.next,
                    "tag_slugs": {t: slugify(t) for t in post.tags},
                },
            )
        )

    if tags:
        pages.append(
            Page(
                path="/tags/",
                template="tags.html",
                title="Tags",
                description=f"All tags of {site['title']}",
                context={"tags": tags},
            )
        )
    for tag in tags:
        pages.append(
            Page(
                path=tag.path,
                template="tag.html",
                title=f'Posts in tag "{tag.name}"',
                description=f"{len(tag.posts)} posts tagged #{tag.name}",
                keywords=[tag.name],
                context={"tag": tag},
            )
        )

    pages.append(Page(path="/404.html", template="404.html", title="404: Not found"))
    check_paths(pages)
    return pages
