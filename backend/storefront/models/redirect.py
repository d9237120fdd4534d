from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Redirect(BaseModel, TenantMixin):
    __tablename__ = "redirects"

    source_path = db.Column(db.String(512), nullable=False)
    target_path = db.Column(db.String(512), nullable=False)
    status_code = db.Column(db.Integer, default=301)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "source_path", name="uq_redirect_source_per_tenant"),
    )
