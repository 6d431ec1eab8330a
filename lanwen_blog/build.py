import logging
import pathlib
import shutil
from dataclasses import dataclass

from . import feeds
from .config import load_config
from .errors import BlogError
from .pages import build_pages, collect_posts, collect_tags
from .render import make_env, render_page

log = logging.getLogger(__name__)

PACKAGE_STATIC = pathlib.Path(__file__).parent / "static"


@dataclass
class BuildResult:
    output: pathlib.Path
    pages: int
    posts: int
    tags: int


def copy_static(src, dist):
    if src.is_dir():
        shutil.copytree(src, dist / "static", dirs_exist_ok=True)


def copy_bundle_assets(post, content_root, dist):
    """Copy the files living next to a bundle post's ``index.md``."""
    if not post.is_bundle:
        return
    src_dir = content_root / post.source.parent
    dest_dir = dist / post.slug.strip("/")
    for item in src_dir.iterdir():
        if item.suffix == ".md":
            continue
        if item.is_dir():
            shutil.copytree(item, dest_dir / item.name, dirs_exist_ok=True)
        else:
            dest_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, dest_dir / item.name)


def build(project_root=".", output_dir=None, include_drafts=False):
    root = pathlib.Path(project_root).resolve()
    content = root / "content"
    dist = pathlib.Path(output_dir).resolve() if output_dir else root / "dist"

    if dist == root or dist in root.parents or dist == content or content in dist.parents:
        raise BlogError(f"refusing to use {dist} as output: it would wipe the project or its content")

    cfg = load_config(root / "config.yaml")

    # clean dist
    if dist.exists():
        shutil.rmtree(dist)
    dist.mkdir(parents=True)

    copy_static(PACKAGE_STATIC, dist)
    copy_static(root / "static", dist)
    feeds.write_code_css(dist, cfg["markdown"]["code_style"])

    if content.is_dir():
        posts = collect_posts(content, include_drafts=include_drafts)
    else:
        log.warning("no content directory at %s", content)
        posts = []
    tags = collect_tags(posts)
    log.info("%d posts, %d tags", len(posts), len(tags))

    env = make_env(cfg, root / "templates")
    pages = build_pages(posts, tags, cfg["site"])
    for page in pages:
        out_path = dist / page.output
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(render_page(env, page, cfg["site"]), encoding="utf-8")
        log.debug("wrote %s", page.output)

    for post in posts:
        copy_bundle_assets(post, content, dist)

    feeds.write_rss(dist, posts, cfg)
    feeds.write_sitemap(dist, cfg)
    feeds.write_manifest(dist, cfg, root)
    feeds.write_cname(dist, cfg)

    return BuildResult(output=dist, pages=len(pages), posts=len(posts), tags=len(tags))
