# storefront/application/content/module_detail.py
from typing import Callable, Dict, Optional

from sqlalchemy.orm import joinedload, selectinload

from storefront.domain.lifecycle.content import PUBLIC_STATUSES
from storefront.models.block import Block
from storefront.models.classified import ClassifiedAd
from storefront.models.content import Content
from storefront.models.page import Page
from storefront.models.post import Post
from storefront.models.product import Product
from storefront.normalizers.content import (
    normalize_block_detail,
    normalize_classified,
    normalize_detail,
    normalize_post,
    normalize_product,
)


def _load_page(content: Content) -> Optional[dict]:
    page = (
        Page.query.options(joinedload(Page.template))
        .filter(Page.content_id == content.id, Page.status.in_(PUBLIC_STATUSES["pages"]))
        .first()
    )
    return normalize_detail(page, content) if page else None


def _load_post(content: Content) -> Optional[dict]:
    post = (
        Post.query.options(joinedload(Post.template))
        .filter(Post.content_id == content.id, Post.status.in_(PUBLIC_STATUSES["posts"]))
        .first()
    )
    return normalize_post(post, content) if post else None


def _load_product(content: Content) -> Optional[dict]:
    product = (
        Product.query.options(
            joinedload(Product.template),
            selectinload(Product.variants),
            selectinload(Product.images),
        )
        .filter(Product.content_id == content.id, Product.status.in_(PUBLIC_STATUSES["products"]))
        .first()
    )
    return normalize_product(product, content) if product else None


def _load_classified(content: Content) -> Optional[dict]:
    ad = (
        ClassifiedAd.query.options(
            joinedload(ClassifiedAd.template),
            joinedload(ClassifiedAd.category),
            joinedload(ClassifiedAd.owner),
        )
        .filter(ClassifiedAd.content_id == content.id, ClassifiedAd.status.in_(PUBLIC_STATUSES["classifieds"]))
        .first()
    )
    return normalize_classified(ad, content) if ad else None


def _load_block(content: Content) -> Optional[dict]:
    block = (
        Block.query.options(joinedload(Block.template))
        .filter(Block.content_id == content.id)
        .first()
    )
    return normalize_block_detail(block, content) if block else None


DETAIL_LOADERS: Dict[str, Callable[[Content], Optional[dict]]] = {
    "pages": _load_page,
    "posts": _load_post,
    "products": _load_product,
    "classifieds": _load_classified,
    "blocks": _load_block,
}


def load_module_detail(content: Content) -> Optional[dict]:
    """
    The visible detail row for a content row, flattened for templates.
    Unknown modules are looked up as pages.
    """
    loader = DETAIL_LOADERS.get(content.module, _load_page)
    return loader(content)
