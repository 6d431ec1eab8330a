import argparse
import datetime
import logging
import pathlib
import sys

import yaml

from .build import build
from .errors import BlogError
from .routes import DEFAULT_CATEGORY, slugify

log = logging.getLogger("lanwen_blog")


def setup_logging(verbose=False):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    log.propagate = False


def cmd_build(args):
    result = build(args.root, output_dir=args.output, include_drafts=args.drafts)
    log.info("✅ Build complete → %s (%d pages)", result.output, result.pages)


def cmd_new(args):
    date = args.date or datetime.date.today().isoformat()
    try:
        datetime.date.fromisoformat(date)
    except ValueError:
        raise BlogError(f"--date must be YYYY-MM-DD, got {date!r}") from None

    folder = pathlib.Path(args.root) / "content" / args.category / f"{date}_{slugify(args.title)}"
    index = folder / "index.md"
    if index.exists():
        raise BlogError(f"{index} already exists")

    tags = [t.strip() for t in (args.tags or "").split(",") if t.strip()]
    front = yaml.safe_dump({"title": args.title, "tags": tags, "draft": True}, sort_keys=False, allow_unicode=True)
    folder.mkdir(parents=True, exist_ok=True)
    index.write_text(f"---\n{front}---\n\n", encoding="utf-8")
    log.info("created %s", index)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="lanwen-blog", description="Build the blog into static HTML.")
    parser.add_argument("--root", default=".", help="project directory holding config.yaml and content/")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_build = sub.add_parser("build", help="render the whole site")
    p_build.add_argument("-o", "--output", help="output directory (default: <root>/dist)")
    p_build.add_argument("--drafts", action="store_true", help="include posts marked draft")
    p_build.set_defaults(func=cmd_build)

    p_new = sub.add_parser("new", help="scaffold a post in the date_name layout")
    p_new.add_argument("title")
    p_new.add_argument("--date", help="publish date, YYYY-MM-DD (default: today)")
    p_new.add_argument("--tags", help="comma-separated tags")
    p_new.add_argument("--category", default=DEFAULT_CATEGORY)
    p_new.set_defaults(func=cmd_new)

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except (BlogError, OSError) as e:
        log.error("❌ %s failed: %s", args.command.capitalize(), e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
