from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Theme(BaseModel, TenantMixin):
    __tablename__ = "themes"

    slug = db.Column(db.String(100), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    version = db.Column(db.String(20), default="1.0.0")
    inherits = db.Column(db.String(100), nullable=True)  # parent theme slug
    config = db.Column(db.JSON, default=dict)  # {"assets": {"css": [...], "js": [...]}}
    source = db.Column(db.String(20), default="database")  # filesystem, database, system

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", name="uq_theme_slug_per_tenant"),
    )
