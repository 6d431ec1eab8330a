import datetime
from types import SimpleNamespace

import pytest

from lanwen_blog.errors import DuplicateSlugError, MalformedFilenameError
from lanwen_blog.routes import (
    category_of,
    check_unique,
    link_adjacent,
    make_slug,
    parse_date,
    parts_of,
    route_for,
    slugify,
    sort_posts,
)


def test_parts_of_plain_file():
    assert parts_of("posts/2019-03-10_jenkins.md") == ("2019-03-10", "jenkins")


def test_parts_of_bundle_uses_folder_name():
    assert parts_of("posts/2019-03-10_jenkins/index.md") == ("2019-03-10", "jenkins")


def test_parts_of_splits_on_first_underscore_only():
    assert parts_of("posts/2019-03-10_my_long_name.md") == ("2019-03-10", "my_long_name")


@pytest.mark.parametrize("path", ["posts/jenkins.md", "posts/2019-03-10_.md", "posts/_jenkins.md"])
def test_parts_of_rejects_malformed_names(path):
    with pytest.raises(MalformedFilenameError) as exc:
        parts_of(path)
    assert exc.value.path == path


def test_parse_date():
    assert parse_date("2019-03-10") == datetime.date(2019, 3, 10)
    with pytest.raises(MalformedFilenameError):
        parse_date("10.03.2019", "posts/10.03.2019_x.md")


@pytest.mark.parametrize("token", ["20190310", "2019-W10-1", "2019-3-10", "2019-02-30"])
def test_parse_date_accepts_only_dashed_iso(token):
    with pytest.raises(MalformedFilenameError):
        parse_date(token)


def test_category_of():
    assert category_of("2019-03-10_x.md") == "posts"
    assert category_of("notes/2019-03-10_x.md") == "notes"
    assert category_of("notes/2019-03-10_x/index.md") == "notes"


def test_slugs():
    assert slugify("Go Lang!") == "go-lang"
    assert slugify("???") == "untitled"
    assert make_slug("posts", "my_post") == "/posts/my-post/"


def test_route_for_bundle():
    route = route_for("posts/2020-07-01_bundled/index.md")
    assert route.published == datetime.date(2020, 7, 1)
    assert route.name == "bundled"
    assert route.category == "posts"
    assert route.slug == "/posts/bundled/"


def test_route_for_file_in_content_root():
    assert route_for("2020-07-01_loose.md").slug == "/posts/loose/"


def _post(day, slug):
    return SimpleNamespace(published=datetime.date(2020, 1, day), slug=slug, source=slug)


def test_sort_posts_newest_first_with_slug_tiebreak():
    a, b, c = _post(1, "/posts/a/"), _post(5, "/posts/c/"), _post(5, "/posts/b/")
    assert sort_posts([a, b, c]) == [c, b, a]


def test_link_adjacent():
    newest, middle, oldest = _post(3, "/n/"), _post(2, "/m/"), _post(1, "/o/")
    link_adjacent([newest, middle, oldest])

    assert newest.next is None
    assert newest.previous is middle
    assert middle.next is newest
    assert middle.previous is oldest
    assert oldest.previous is None
    assert oldest.next is middle


def test_link_adjacent_single_post():
    only = _post(1, "/only/")
    link_adjacent([only])
    assert only.previous is None and only.next is None


def test_check_unique():
    with pytest.raises(DuplicateSlugError) as exc:
        check_unique([_post(1, "/posts/x/"), _post(2, "/posts/x/")])
    assert exc.value.slug == "/posts/x/"


def test_bundle_directly_in_content_root_is_malformed():
    with pytest.raises(MalformedFilenameError):
        route_for("2020-07-01_loose/index.md")
