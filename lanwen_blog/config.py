import copy
import pathlib

import yaml

from .errors import ConfigError

DEFAULTS = {
    "site": {
        "title": "Kirill Merkushev's personal blog",
        "description": (
            "Developer notes from my personal experience. Mostly Java, Golang, "
            "Javascript and infrastructure, but not limited to"
        ),
        "author": "Kirill Merkushev (github:lanwen)",
        "lang": "en",
        "site_url": "",
        "base_url": "",
        "index_title": "Merkushev Kirill's Blog - All posts",
        "keywords": ["lanwen", "java", "javascript", "golang"],
    },
    "social": [
        {"key": "github", "url": "https://github.com/lanwen"},
        {"key": "linkedin", "url": "https://linkedin.com/in/kirill-merkushev/"},
        {"key": "twitter", "url": "https://twitter.com/delnariel"},
    ],
    "manifest": {
        "name": "lanwen-blog",
        "short_name": "lanwen",
        "start_url": "/",
        "background_color": "#fff",
        "theme_color": "#fff",
        "display": "minimal-ui",
        "icon": None,
    },
    "markdown": {
        "code_style": "default",
    },
    "feed": {
        "limit": 20,
        "path": "/rss.xml",
    },
    "cname": None,
}


def _merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path):
    """Read ``config.yaml`` at *path* and merge it over :data:`DEFAULTS`."""
    cfg = copy.deepcopy(DEFAULTS)
    path = pathlib.Path(path)
    if not path.exists():
        return cfg

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e

    if raw is None:
        return cfg
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    for section in ("site", "manifest", "markdown", "feed"):
        if section in raw and not isinstance(raw[section], dict):
            raise ConfigError(f"{path}: '{section}' must be a mapping")
    if "social" in raw and not isinstance(raw["social"], list):
        raise ConfigError(f"{path}: 'social' must be a list")

    _merge(cfg, raw)
    cfg["site"]["site_url"] = (cfg["site"]["site_url"] or "").rstrip("/")
    cfg["site"]["base_url"] = (cfg["site"]["base_url"] or "").rstrip("/")
    return cfg
