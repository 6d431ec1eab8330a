import pathlib

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape


def make_env(cfg, project_templates=None):
    """Jinja environment over the packaged templates.

    A ``templates/`` directory in the project takes precedence, so single
    templates can be overridden without copying the rest.
    """
    loaders = []
    if project_templates and pathlib.Path(project_templates).is_dir():
        loaders.append(FileSystemLoader(str(project_templates)))
    loaders.append(PackageLoader("lanwen_blog", "templates"))

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(["html"]),
    )
    site = cfg["site"]
    base = site.get("base_url", "")

    def url_for(path):
        return f"{base}{path}"

    def absolute_url(path):
        return f"{site.get('site_url', '')}{base}{path}"

    env.filters["url_for"] = url_for
    env.filters["absolute_url"] = absolute_url
    env.globals.update(site=site, social=cfg["social"], feed_path=cfg["feed"]["path"])
    return env


def seo_meta(page, site):
    """Head metadata for *page*, as ``(attr, key, content)`` triples."""
    description = page.description or site.get("description", "")
    meta = [
        ("name", "description", description),
        ("property", "og:title", page.title),
        ("property", "og:description", description),
        ("property", "og:type", "article" if page.template == "post.html" else "website"),
        ("name", "twitter:card", "summary"),
        ("name", "twitter:creator", site.get("author", "")),
        ("name", "twitter:title", page.title),
        ("name", "twitter:description", description),
    ]
    if site.get("site_url"):
        meta.append(("property", "og:url", f"{site['site_url']}{site.get('base_url', '')}{page.path}"))
    if page.keywords:
        meta.append(("name", "keywords", ", ".join(page.keywords)))
    return meta


def render_page(env, page, site):
    return env.get_template(page.template).render(
        page=page,
        title=page.title,
        meta=seo_meta(page, site),
        **page.context,
    )
