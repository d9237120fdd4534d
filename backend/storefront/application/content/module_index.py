# storefront/application/content/module_index.py
from typing import List, Mapping, Optional, Tuple

from sqlalchemy import or_

from storefront.extensions import db
from storefront.models.content import Content
from storefront.models.product import Product
from storefront.normalizers.content import normalize_index_item

INDEX_MODULES = ("pages", "products", "posts")
PRODUCT_SORT_FIELDS = ("price", "title", "created_at")


def index_module_for(slug: str) -> Optional[str]:
    module = slug.strip("/")
    if slug == f"/{module}" and module in INDEX_MODULES:
        return module
    return None


def _parse_price(raw) -> Optional[float]:
    if raw in (None, ""):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _base_query(tenant_id: str, module: str):
    return Content.query.filter(
        Content.tenant_id == tenant_id,
        Content.module == module,
        Content.slug.isnot(None),
        Content.deleted_at.is_(None),
    )


def _product_index(tenant_id: str, args: Mapping[str, str]) -> List[dict]:
    query = (
        db.session.query(Content, Product)
        .outerjoin(Product, Product.content_id == Content.id)
        .filter(
            Content.tenant_id == tenant_id,
            Content.module == "products",
            Content.slug.isnot(None),
            Content.deleted_at.is_(None),
        )
    )

    q = (args.get("q") or "").strip()
    if q:
        pattern = f"%{q}%"
        query = query.filter(or_(
            Content.title.ilike(pattern),
            Product.sku.ilike(pattern),
            Content.search_index.ilike(pattern),
        ))

    min_price = _parse_price(args.get("min_price"))
    if min_price is not None:
        query = query.filter(Product.price >= min_price)

    max_price = _parse_price(args.get("max_price"))
    if max_price is not None:
        query = query.filter(Product.price <= max_price)

    sort = args.get("sort")
    sort_field = sort if sort in PRODUCT_SORT_FIELDS else "title"
    column = {
        "title": Content.title,
        "price": Product.price,
        "created_at": Content.created_at,
    }[sort_field]
    ordering = column.desc() if args.get("order") == "desc" else column.asc()

    rows = query.order_by(ordering, Content.id).all()
    return [normalize_index_item(content, product) for content, product in rows]


def query_module_index(tenant_id: str, module: str, args: Mapping[str, str]) -> Tuple[List[dict], dict]:
    """
    Listing for a module index page plus the filters echoed back to the
    template. Only products are searchable and sortable; other modules
    list newest first.
    """
    filters = {key: args.get(key) for key in ("sort", "order", "min_price", "max_price", "q")}

    if module == "products":
        return _product_index(tenant_id, args), filters

    rows = _base_query(tenant_id, module).order_by(Content.created_at.desc(), Content.id).all()
    return [normalize_index_item(content) for content in rows], filters
