"""
Single entry point for rendering a theme template into a response.

Render failures are logged and turned into a 500 page rendered through
this same pipeline. If the error page itself cannot render, a plain-text
500 is returned so the failure cannot recurse.
"""
import logging
from typing import Optional

from flask import Response, current_app, g, request
from jinja2 import TemplateError, TemplateNotFound

from storefront.domain.access import ANONYMOUS
from storefront.normalizers.customer import normalize_customer
from storefront.utils.json_fields import parse_json_object
from storefront.utils.log import log_error
from .environment import get_template_environment, resolve_active_theme
from .fragments import FRAGMENT_RENDERER_KEY, FragmentRenderer
from .shortcodes import process_shortcodes
from .styles import resolve_styles
from .themes import get_theme_assets

logger = logging.getLogger(__name__)

NOT_FOUND_TEMPLATE = "pages/404.html"
SERVER_ERROR_TEMPLATE = "pages/500.html"
ERROR_TEMPLATES = (NOT_FOUND_TEMPLATE, SERVER_ERROR_TEMPLATE)


def _active_environment():
    tenant = g.current_tenant
    theme_slug = resolve_active_theme(tenant.id, g.site.get("active_theme"))
    return theme_slug, get_template_environment(tenant.id, theme_slug)


def default_seo(site: dict) -> dict:
    url = f"{site.get('site_url', '')}{request.path}"
    return {
        "title": site.get("site_name", ""),
        "description": site.get("default_meta_description", ""),
        "canonical": url,
        "robots": "index, follow",
        "og": {
            "title": site.get("site_name", ""),
            "description": site.get("default_meta_description", ""),
            "image": "",
            "url": url,
            "type": "website",
        },
        "schema": None,
    }


def merge_seo(base: dict, overrides: Optional[dict]) -> dict:
    """Caller SEO fields over the defaults; ``og`` is merged key by key."""
    merged = dict(base)
    for key, value in (overrides or {}).items():
        if key == "og" and isinstance(value, dict):
            merged["og"] = {**base.get("og", {}), **value}
        else:
            merged[key] = value
    return merged


def template_exists(template_name: str) -> bool:
    """
    Whether the active theme can load ``template_name``. A template that
    exists but does not compile counts as missing so that callers fall back.
    """
    _, env = _active_environment()
    try:
        env.get_template(template_name)
    except TemplateNotFound:
        return False
    except TemplateError as exc:
        log_error(logger, f"LOAD:{template_name}", exc)
        return False
    return True


async def _render(template_name: str, context: dict) -> str:
    tenant = g.current_tenant
    site = g.site
    theme_slug, env = _active_environment()

    fragments = getattr(g, "fragments", [])
    permission_context = getattr(g, "permission_context", ANONYMOUS)
    renderer = FragmentRenderer(env, fragments, permission_context, site)

    assets = get_theme_assets(tenant.id, theme_slug)
    template_meta = context.get("template") or {}
    styles = resolve_styles(site.get("global_styles"), parse_json_object(template_meta.get("options")))

    full_context = {
        "site": site,
        "customer": normalize_customer(getattr(g, "customer", None)),
        "has_active_subscription": permission_context.has_active_subscription,
        "blocks": fragments,
        "menus": getattr(g, "menus", {}),
    }
    full_context.update(context)
    full_context["seo"] = merge_seo(default_seo(site), context.get("seo"))
    full_context.update({
        "styles": styles,
        "theme_css": assets["css"],
        "theme_js": assets["js"],
        FRAGMENT_RENDERER_KEY: renderer,
    })

    template = env.get_template(template_name)
    html = await template.render_async(full_context)
    return await process_shortcodes(html, env, renderer)


async def render_page(template_name: str, context: Optional[dict] = None, status: int = 200) -> Response:
    try:
        html = await _render(template_name, dict(context or {}))
    except Exception as exc:
        log_error(logger, f"RENDER:{template_name}", exc)
        if template_name in ERROR_TEMPLATES:
            message = "Critical Server Error"
            if current_app.debug:
                message = f"{message}: {exc}"
            return Response(message, status=500, mimetype="text/plain")
        return await render_error(500, {"error": str(exc) if current_app.debug else None})

    return Response(html, status=status, mimetype="text/html")


async def render_error(status: int, context: Optional[dict] = None) -> Response:
    not_found = status == 404
    error_context = {
        "title": "Page Not Found" if not_found else "Server Error",
        "page": {"title": "Page Not Found" if not_found else "Error"},
        "status_code": status,
    }
    error_context.update(context or {})
    template_name = NOT_FOUND_TEMPLATE if not_found else SERVER_ERROR_TEMPLATE
    return await render_page(template_name, error_context, status=status)
