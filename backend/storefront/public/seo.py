import logging
from xml.etree import ElementTree

from flask import Response, g, request

from storefront.models.content import Content
from storefront.models.page import Page
from storefront.models.setting import Setting
from storefront.rendering.pipeline import render_page
from storefront.normalizers.content import normalize_index_item
from . import public_bp

logger = logging.getLogger(__name__)

DEFAULT_ROBOTS_TXT = "User-agent: *\nAllow: /"
SEARCH_LIMIT = 20

# Well-known routes served outside the content table
SYSTEM_ROUTES = [
    {"title": "Home", "url": "/", "priority": 1.0, "changefreq": "daily"},
    {"title": "Search", "url": "/search", "priority": 0.3, "changefreq": "monthly"},
    {"title": "Blog", "url": "/posts", "priority": 0.8, "changefreq": "daily"},
    {"title": "Shop", "url": "/products", "priority": 0.9, "changefreq": "daily"},
    {"title": "Classifieds", "url": "/classifieds", "priority": 0.8, "changefreq": "daily"},
    {"title": "Shopping Cart", "url": "/cart", "priority": 0.1, "changefreq": "monthly"},
    {"title": "Subscription Plans", "url": "/subscribe", "priority": 0.5, "changefreq": "monthly"},
    {"title": "Login", "url": "/customer/login", "priority": 0.2, "changefreq": "monthly"},
    {"title": "Logout", "url": "/customer/logout", "priority": 0.0, "changefreq": "never"},
]


@public_bp.route("/robots.txt", methods=["GET"])
def robots_txt():
    setting = Setting.query.filter_by(tenant_id=g.current_tenant.id, key="robots_txt").first()
    body = setting.value if setting and setting.value else DEFAULT_ROBOTS_TXT
    return Response(body, mimetype="text/plain")


def _add_url(urlset, loc, changefreq, priority, lastmod=None):
    url = ElementTree.SubElement(urlset, "url")
    ElementTree.SubElement(url, "loc").text = loc
    if lastmod:
        ElementTree.SubElement(url, "lastmod").text = lastmod
    ElementTree.SubElement(url, "changefreq").text = changefreq
    ElementTree.SubElement(url, "priority").text = f"{priority:.1f}"


@public_bp.route("/sitemap.xml", methods=["GET"])
def sitemap_xml():
    site_url = g.site["site_url"]
    urlset = ElementTree.Element("urlset", xmlns="http://www.sitemaps.org/schemas/sitemap/0.9")

    for route in SYSTEM_ROUTES:
        if route["priority"] > 0:
            loc = site_url if route["url"] == "/" else f"{site_url}{route['url']}"
            _add_url(urlset, loc, route["changefreq"], route["priority"])

    pages = (
        Page.query.join(Content, Page.content_id == Content.id)
        .filter(
            Page.tenant_id == g.current_tenant.id,
            Page.status == "published",
            Content.slug.isnot(None),
            Content.deleted_at.is_(None),
        )
        .order_by(Page.updated_at.desc())
        .all()
    )
    for page in pages:
        slug = page.content.slug
        _add_url(
            urlset,
            site_url if slug == "/" else f"{site_url}{slug}",
            "weekly",
            1.0 if slug == "/" else 0.8,
            lastmod=page.updated_at.date().isoformat() if page.updated_at else None,
        )

    body = ElementTree.tostring(urlset, encoding="utf-8", xml_declaration=True)
    return Response(body, mimetype="application/xml")


@public_bp.route("/search", methods=["GET"])
async def search():
    site = g.site
    q = (request.args.get("q") or "").strip()

    results = []
    if q:
        pattern = f"%{q}%"
        rows = (
            Content.query.filter(
                Content.tenant_id == g.current_tenant.id,
                Content.slug.isnot(None),
                Content.deleted_at.is_(None),
                Content.title.ilike(pattern)
                | Content.slug.ilike(pattern)
                | Content.search_index.ilike(pattern),
            )
            .limit(SEARCH_LIMIT)
            .all()
        )
        results = [normalize_index_item(row) for row in rows]

    return await render_page("pages/search.html", {
        "q": q,
        "results": results,
        "page": {"title": f'Search Results for "{q}"', "slug": "/search"},
        "seo": {
            "title": f"Search: {q} - {site.get('site_name', '')}",
            "robots": "noindex, follow",
        },
    })
