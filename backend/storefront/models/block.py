from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_detail_mixin import ContentDetailMixin

FRAGMENT_TYPES = ("blocks", "widgets")


class Block(BaseModel, TenantMixin, ContentDetailMixin):
    __tablename__ = "blocks"

    slug = db.Column(db.String(200), nullable=False, index=True)
    content_type = db.Column(db.String(20), nullable=False, default="blocks")  # blocks, widgets

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "content_type", "slug", name="uq_block_slug_per_type"),
    )
