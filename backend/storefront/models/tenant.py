from storefront.extensions import db
from .base import BaseModel

class Tenant(BaseModel):
    __tablename__ = "tenants"

    # Basic info
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True)

    # Public storefront host, e.g. "shop.example.com"
    domain = db.Column(db.String(255), unique=True, nullable=True, index=True)

    def __repr__(self):
        return f"<Tenant {self.slug}>"
