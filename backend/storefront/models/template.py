from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Template(BaseModel, TenantMixin):
    __tablename__ = "templates"

    filename = db.Column(db.String(255), nullable=False, index=True)
    content = db.Column(db.Text, nullable=True)
    content_type = db.Column(db.String(50), nullable=True)  # pages, products, widgets...
    options = db.Column(db.JSON, default=dict)  # style overrides
    regions = db.Column(db.JSON, default=list)  # read by the admin region scanner only

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "filename", name="uq_template_filename_per_tenant"),
    )
