"""Mapping of content files to output routes.

Posts follow a ``<date>_<name>`` naming convention, either as a plain file::

    content/posts/2019-03-10_jenkins-pipelines.md

or as a bundle folder holding ``index.md`` plus its assets::

    content/posts/2019-03-10_jenkins-pipelines/index.md

Both resolve to ``/posts/jenkins-pipelines/`` published on 2019-03-10. The
first directory segment is the category and becomes the slug prefix.
"""
import datetime
import pathlib
import re
from dataclasses import dataclass

from .errors import DuplicateSlugError, MalformedFilenameError

DEFAULT_CATEGORY = "posts"

date_re = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class Route:
    published: datetime.date
    name: str
    category: str
    slug: str


def slugify(name: str) -> str:
    s = re.sub(r"[^a-zA-Z0-9\-]+", "-", name.strip().lower()).strip("-")
    return s or "untitled"


def parts_of(relative_path):
    """Split the date and name tokens out of a content-relative path."""
    rel = pathlib.PurePosixPath(pathlib.Path(relative_path).as_posix())
    dirs = rel.parent.parts
    token = dirs[1] if len(dirs) > 1 else rel.stem

    date, sep, name = token.partition("_")
    if not sep:
        raise MalformedFilenameError(relative_path, f"'{token}' has no '_' between date and name")
    if not date or not name:
        raise MalformedFilenameError(relative_path, f"'{token}' is missing a date or a name")
    return date, name


def parse_date(token, relative_path=None):
    try:
        if not date_re.match(token):
            raise ValueError(token)
        return datetime.date.fromisoformat(token)
    except ValueError:
        raise MalformedFilenameError(
            relative_path or token, f"'{token}' is not a YYYY-MM-DD date"
        ) from None


def category_of(relative_path):
    dirs = pathlib.PurePosixPath(pathlib.Path(relative_path).as_posix()).parent.parts
    return dirs[0] if dirs else DEFAULT_CATEGORY


def make_slug(category, name):
    return f"/{slugify(category)}/{slugify(name)}/"


def route_for(relative_path):
    date, name = parts_of(relative_path)
    category = category_of(relative_path)
    return Route(
        published=parse_date(date, relative_path),
        name=name,
        category=category,
        slug=make_slug(category, name),
    )


def check_unique(posts):
    seen = {}
    for post in posts:
        if post.slug in seen:
            raise DuplicateSlugError(post.slug, seen[post.slug].source, post.source)
        seen[post.slug] = post


def sort_posts(posts):
    """Newest first; posts published the same day keep slug order."""
    by_slug = sorted(posts, key=lambda p: p.slug)
    return sorted(by_slug, key=lambda p: p.published, reverse=True)


def link_adjacent(posts):
    # posts must already be newest-first: previous is older, next is newer
    for index, post in enumerate(posts):
        post.previous = posts[index + 1] if index + 1 < len(posts) else None
        post.next = posts[index - 1] if index > 0 else None
    return posts
