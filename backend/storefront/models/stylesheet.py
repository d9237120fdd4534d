from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Stylesheet(BaseModel, TenantMixin):
    __tablename__ = "stylesheets"

    filename = db.Column(db.String(255), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False, default="")
    is_active = db.Column(db.Boolean, default=True)
    load_order = db.Column(db.Integer, default=0)
