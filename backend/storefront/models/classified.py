from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_detail_mixin import ContentDetailMixin

class ClassifiedCategory(BaseModel, TenantMixin):
    __tablename__ = "classified_categories"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False)


class ClassifiedAd(BaseModel, TenantMixin, ContentDetailMixin):
    __tablename__ = "classified_ads"

    status = db.Column(db.String(50), default="pending", index=True)  # pending, approved, rejected
    price = db.Column(db.Numeric(10, 2), nullable=True)
    category_id = db.Column(db.String(36), db.ForeignKey("classified_categories.id"), nullable=True)
    customer_id = db.Column(db.String(36), db.ForeignKey("customers.id"), nullable=True)

    category = db.relationship("ClassifiedCategory")
    owner = db.relationship("Customer")
