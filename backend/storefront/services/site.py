import logging
from typing import List, Optional

from flask import request
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError
from sqlalchemy.orm import contains_eager, joinedload

from storefront.models.block import Block
from storefront.models.content import Content
from storefront.models.customer import Customer
from storefront.models.setting import Setting
from storefront.rendering.fragments import Fragment
from storefront.utils.json_fields import parse_json_object

logger = logging.getLogger(__name__)

DEFAULT_SITE_SETTINGS = {
    "site_name": "Storefront",
    "active_theme": "default",
    "default_meta_description": "",
}

JSON_SETTINGS = ("global_styles",)


def get_site_settings(tenant_id: str) -> dict:
    site = dict(DEFAULT_SITE_SETTINGS)
    for setting in Setting.query.filter_by(tenant_id=tenant_id).all():
        site[setting.key] = setting.value

    for key in JSON_SETTINGS:
        site[key] = parse_json_object(site.get(key))

    if not site.get("site_url"):
        site["site_url"] = request.host_url.rstrip("/")
    return site


def load_fragments(tenant_id: str) -> List[Fragment]:
    """Blocks and widgets whose content row has not been deleted."""
    blocks = (
        Block.query.join(Content, Block.content_id == Content.id)
        .options(contains_eager(Block.content), joinedload(Block.template))
        .filter(Block.tenant_id == tenant_id, Content.deleted_at.is_(None))
        .all()
    )
    return [Fragment.from_block(block) for block in blocks]


def get_current_customer(tenant_id: str) -> Optional[Customer]:
    """
    The visitor's customer record, from an optional token issued by the
    customer auth service. Anonymous when there is no usable token.
    """
    try:
        verify_jwt_in_request(optional=True)
        claims = get_jwt()
    except (JWTExtendedException, PyJWTError) as exc:
        logger.info("Ignoring unusable visitor token: %s", exc)
        return None

    customer_id = claims.get("customer_id")
    if not customer_id or claims.get("tenant_id") != tenant_id:
        return None

    return Customer.query.filter_by(id=customer_id, tenant_id=tenant_id, is_active=True).first()
