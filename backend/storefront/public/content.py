import logging

from flask import g, redirect, request

from storefront.application.content.module_detail import load_module_detail
from storefront.application.content.module_index import index_module_for, query_module_index
from storefront.application.content.resolve_content import (
    normalize_path,
    resolve_content,
    resolve_home_slug,
)
from storefront.application.content.seo import build_seo
from storefront.domain.access import can_access, parse_access_rules
from storefront.domain.exceptions import ContentIntegrityError
from storefront.models.redirect import Redirect
from storefront.rendering.pipeline import render_error, render_page, template_exists
from storefront.utils.json_fields import parse_json_object
from storefront.utils.log import log_error
from . import public_bp

logger = logging.getLogger(__name__)


async def _render_module_index(module: str, site: dict):
    items, filters = query_module_index(g.current_tenant.id, module, request.args)
    return await render_page(f"{module}/index.html", {
        "module": module,
        "content": items,
        "filters": filters,
        "seo": {
            "title": f"{module.capitalize()} - {site.get('site_name', '')}",
            "description": site.get("default_meta_description", ""),
            "robots": "index, follow",
        },
    })


@public_bp.route("/", defaults={"path": ""}, methods=["GET"])
@public_bp.route("/<path:path>", methods=["GET"])
async def render_content(path):
    tenant = g.current_tenant
    site = g.site

    try:
        slug = normalize_path(request.path)

        rule = Redirect.query.filter_by(tenant_id=tenant.id, source_path=slug).first()
        if rule is not None:
            return redirect(rule.target_path, code=rule.status_code or 301)

        if slug == "/" and site.get("home_page_id"):
            slug = resolve_home_slug(tenant.id, site["home_page_id"]) or slug

        module = index_module_for(slug)
        if module and template_exists(f"{module}/index.html"):
            return await _render_module_index(module, site)

        content, slug = resolve_content(tenant.id, slug)
        if content is None:
            return await render_error(404)

        page = load_module_detail(content)
        if page is None:
            return await render_error(404)

        if not page.get("template_filename"):
            raise ContentIntegrityError(
                f"No template assigned to {content.module} content {content.id}"
            )

        seo = build_seo(page, content, site, slug)
        access_rules = parse_access_rules(page.get("access_rules"))

        context = {
            "page": page,
            "content": parse_json_object(content.data),
            "template": {
                "id": page.get("template_id"),
                "options": page.get("template_options"),
            },
            "content_type": content.module,
            "seo": seo,
            # Advisory: the template decides how to present gated content
            "subscription_required": not can_access(access_rules, g.permission_context),
        }
        if content.module == "products":
            context["product"] = page
        if content.module == "classifieds":
            context["ad"] = page

        return await render_page(page["template_filename"], context)

    except Exception as exc:
        log_error(logger, "RENDER_CONTENT", exc)
        return await render_error(500)
