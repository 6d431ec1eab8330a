import html
import json
import logging
import os
import pathlib
import shutil
from datetime import date, datetime, time, timezone

from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from .content import excerpt

log = logging.getLogger(__name__)


def rfc822(value):
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.strftime("%a, %d %b %Y %H:%M:%S %z")


def write_rss(dist, posts, cfg, now=None):
    site = cfg["site"]
    site_url = site["site_url"] + site["base_url"]
    feed = cfg["feed"]
    items_xml = []
    for p in posts[: feed["limit"]]:
        abs_link = f"{site_url}{p.slug}"
        items_xml.append(
            "  <item>\n"
            f"    <title>{html.escape(p.title)}</title>\n"
            f"    <link>{abs_link}</link>\n"
            f"    <guid isPermaLink='true'>{abs_link}</guid>\n"
            f"    <pubDate>{rfc822(p.published)}</pubDate>\n"
            + "".join(f"    <category>{html.escape(t)}</category>\n" for t in p.tags)
            + f"    <description>{html.escape(excerpt(p.html, 400))}</description>\n"
            "  </item>\n"
        )

    last_build = rfc822(now or datetime.now(timezone.utc))
    rss_xml = (
        "<?xml version='1.0' encoding='UTF-8'?>\n"
        "<rss version='2.0'>\n"
        " <channel>\n"
        f"  <title>{html.escape(site['title'])}</title>\n"
        f"  <link>{site_url}/</link>\n"
        f"  <description>{html.escape(site['description'])}</description>\n"
        f"  <language>{site['lang']}</language>\n"
        f"  <lastBuildDate>{last_build}</lastBuildDate>\n"
        + "".join(items_xml)
        + " </channel>\n"
        "</rss>\n"
    )
    out = dist / feed["path"].lstrip("/")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(rss_xml, encoding="utf-8")
    return out


def sitemap_urls(dist):
    urls = []
    for root, _, files in os.walk(dist):
        for f in files:
            if f.endswith(".html") and f != "404.html":
                rel = (pathlib.Path(root) / f).relative_to(dist)
                url = "/" + rel.as_posix()
                if url.endswith("index.html"):
                    url = url[: -len("index.html")]
                urls.append(url)
    return sorted(urls)


def write_sitemap(dist, cfg):
    site_url = cfg["site"]["site_url"] + cfg["site"]["base_url"]
    sitemap_xml = (
        "<?xml version='1.0' encoding='UTF-8'?>\n"
        "<urlset xmlns='http://www.sitemaps.org/schemas/sitemap/0.9'>\n"
        + "".join(f"  <url><loc>{site_url}{u}</loc></url>\n" for u in sitemap_urls(dist))
        + "</urlset>\n"
    )
    (dist / "sitemap.xml").write_text(sitemap_xml, encoding="utf-8")

    (dist / "robots.txt").write_text(
        f"User-agent: *\nAllow: /\nSitemap: {site_url}/sitemap.xml\n",
        encoding="utf-8",
    )


def write_manifest(dist, cfg, project_root):
    m = dict(cfg["manifest"])
    icon = m.pop("icon", None)
    if icon:
        src = pathlib.Path(project_root) / icon
        if src.is_file():
            shutil.copyfile(src, dist / src.name)
            m["icons"] = [{"src": f"{cfg['site']['base_url']}/{src.name}"}]
        else:
            log.warning("manifest icon %s not found, skipping", src)
    (dist / "manifest.webmanifest").write_text(json.dumps(m, indent=2) + "\n", encoding="utf-8")


def write_code_css(dist, style):
    try:
        formatter = HtmlFormatter(style=style)
    except ClassNotFound:
        log.warning("pygments style '%s' not found, using 'default'", style)
        formatter = HtmlFormatter(style="default")
    out = dist / "static" / "code.css"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(formatter.get_style_defs(".highlight") + "\n", encoding="utf-8")


def write_cname(dist, cfg):
    if cfg.get("cname"):
        (dist / "CNAME").write_text(str(cfg["cname"]).strip(), encoding="utf-8")
