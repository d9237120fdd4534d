"""
Theme configuration, inheritance chains and asset lists.

Every cache in this module is keyed by ``(tenant_id, theme_slug)``: two
tenants may configure same-named themes differently.
"""
import copy
import logging
from typing import Dict, List, Optional, Tuple

from flask import current_app

from storefront.models.theme import Theme

logger = logging.getLogger(__name__)

DEFAULT_THEME = "default"

# Used only until the tenant has a database-backed "default" theme record
BASELINE_DEFAULT_CONFIG = {
    "slug": DEFAULT_THEME,
    "name": "Default",
    "version": "1.0.0",
    "inherits": None,
    "source": "system",
    "assets": {
        "css": ["assets/css/theme.css"],
        "js": ["assets/js/theme.js"],
    },
}

_config_cache: Dict[Tuple[str, str], dict] = {}


def _config_from_row(theme: Theme) -> dict:
    raw = theme.config or {}
    assets = raw.get("assets") or {}
    return {
        "slug": theme.slug,
        "name": theme.name,
        "version": theme.version or "1.0.0",
        "inherits": theme.inherits or raw.get("inherits"),
        "source": theme.source,
        "assets": {
            "css": list(assets.get("css") or []),
            "js": list(assets.get("js") or []),
        },
    }


def get_theme_config(tenant_id: str, slug: str) -> Optional[dict]:
    """
    Return the theme's config, or None if the tenant has no such theme.
    """
    if not slug:
        return None

    key = (tenant_id, slug)
    if key in _config_cache:
        return _config_cache[key]

    theme = Theme.query.filter_by(tenant_id=tenant_id, slug=slug).first()
    if theme is not None:
        config = _config_from_row(theme)
    elif slug == DEFAULT_THEME:
        config = copy.deepcopy(BASELINE_DEFAULT_CONFIG)
    else:
        return None

    _config_cache[key] = config
    return config


def resolve_theme_chain(tenant_id: str, slug: str) -> List[str]:
    """
    Walk ``inherits`` pointers starting at ``slug``.

    Returns theme slugs parent-first (the base theme first, ``slug`` last).
    Stops at the first repeated slug so cyclic chains terminate, and at the
    first theme the tenant does not have. ``default`` is prepended when the
    walk never reached it.
    """
    walked: List[str] = []
    visited = set()
    current = slug

    while current:
        if current in visited:
            logger.warning("Theme inheritance cycle at %r (tenant=%s)", current, tenant_id)
            break
        visited.add(current)
        config = get_theme_config(tenant_id, current)
        if config is None:
            break
        walked.append(current)
        current = config.get("inherits")

    chain = list(reversed(walked))
    if DEFAULT_THEME not in visited:
        chain.insert(0, DEFAULT_THEME)
    return chain


def get_theme_assets(tenant_id: str, slug: str) -> Dict[str, List[str]]:
    """
    CSS and JS URLs for the theme, ancestors first so that a child theme's
    stylesheets come later in the cascade.
    """
    prefix = current_app.config.get("THEME_ASSET_URL_PREFIX", "/themes").rstrip("/")
    css: List[str] = []
    js: List[str] = []

    for theme_slug in resolve_theme_chain(tenant_id, slug):
        config = get_theme_config(tenant_id, theme_slug)
        if not config:
            continue
        assets = config.get("assets") or {}
        css.extend(f"{prefix}/{theme_slug}/{path.lstrip('/')}" for path in assets.get("css") or [])
        js.extend(f"{prefix}/{theme_slug}/{path.lstrip('/')}" for path in assets.get("js") or [])

    return {"css": css, "js": js}


def clear_theme_config_cache(tenant_id: Optional[str] = None) -> None:
    if tenant_id is None:
        _config_cache.clear()
        return
    for key in [k for k in _config_cache if k[0] == tenant_id]:
        del _config_cache[key]
