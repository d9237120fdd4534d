# storefront/application/content/resolve_content.py
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from storefront.extensions import db
from storefront.models.content import Content
from storefront.models.page import Page

logger = logging.getLogger(__name__)

# Tried in this order when a slug has no exact match
MODULE_PREFIXES = ("/products", "/pages", "/posts")


def normalize_path(path: str) -> str:
    slug = path if path.startswith("/") else f"/{path}"
    if slug != "/" and slug.endswith("/"):
        slug = slug.rstrip("/") or "/"
    return slug


def find_content(tenant_id: str, slug: str, module: Optional[str] = None) -> Optional[Content]:
    query = Content.query.filter(
        Content.tenant_id == tenant_id,
        Content.slug == slug,
        Content.deleted_at.is_(None),
    )
    if module:
        query = query.filter(Content.module == module)
    return query.order_by(Content.created_at, Content.id).first()


def _find_fallback(tenant_id: str, slug: str, module: Optional[str] = None) -> Optional[Content]:
    # Fallbacks only paper over inconsistent slug conventions; a failing
    # lookup means "no match", not an error page.
    try:
        return find_content(tenant_id, slug, module)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning("Slug fallback lookup failed slug=%s module=%s: %s", slug, module, exc)
        return None


def resolve_content(tenant_id: str, slug: str) -> Tuple[Optional[Content], str]:
    """
    Map a normalized request path to a content row.

    Resolution order, first hit wins:
      1. exact slug
      2. slug with a module prefix prepended (/products, /pages, /posts)
      3. slug with its module prefix stripped, restricted to that module

    Returns the row (or None) and the slug it was found under.
    """
    content = find_content(tenant_id, slug)
    if content is not None or slug == "/":
        return content, slug

    for prefix in MODULE_PREFIXES:
        if slug.startswith(f"{prefix}/"):
            continue
        candidate = f"{prefix}{slug}"
        content = _find_fallback(tenant_id, candidate)
        if content is not None:
            return content, candidate

    for prefix in MODULE_PREFIXES:
        if slug.startswith(f"{prefix}/"):
            stripped = slug[len(prefix):]
            content = _find_fallback(tenant_id, stripped, module=prefix.lstrip("/"))
            if content is not None:
                return content, stripped

    return None, slug


def resolve_home_slug(tenant_id: str, home_page_id: str) -> Optional[str]:
    try:
        page = Page.query.filter_by(id=home_page_id, tenant_id=tenant_id).first()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning("Home page lookup failed id=%s: %s", home_page_id, exc)
        return None

    if page is None or page.content is None:
        return None
    return page.content.slug
