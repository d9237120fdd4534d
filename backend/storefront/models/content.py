from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .soft_delete_mixin import SoftDeleteMixin

CONTENT_MODULES = ("pages", "products", "posts", "classifieds", "blocks", "widgets")


class Content(BaseModel, TenantMixin, SoftDeleteMixin):
    __tablename__ = "content"

    module = db.Column(db.String(50), nullable=False, index=True)
    slug = db.Column(db.String(255), nullable=True, index=True)
    title = db.Column(db.String(255), nullable=True)
    data = db.Column(db.JSON, default=dict)  # editable fields
    search_index = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", name="uq_content_slug_per_tenant"),
    )
