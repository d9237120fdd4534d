from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_detail_mixin import ContentDetailMixin

class Product(BaseModel, TenantMixin, ContentDetailMixin):
    __tablename__ = "products"

    status = db.Column(db.String(50), default="draft", index=True)  # active, draft, archived
    price = db.Column(db.Numeric(10, 2), nullable=True)
    sku = db.Column(db.String(100), nullable=True, index=True)
    inventory_quantity = db.Column(db.Integer, default=0)
    image = db.Column(db.String(512), nullable=True)  # hero image URL

    # Ordered child collections
    variants = db.relationship(
        "ProductVariant",
        back_populates="product",
        order_by="ProductVariant.position",
        cascade="all, delete-orphan"
    )
    images = db.relationship(
        "ProductImage",
        back_populates="product",
        order_by="ProductImage.position",
        cascade="all, delete-orphan"
    )


class ProductVariant(BaseModel, TenantMixin):
    __tablename__ = "product_variants"

    product_id = db.Column(db.String(36), db.ForeignKey("products.id"), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    title = db.Column(db.String(200), nullable=False)
    sku = db.Column(db.String(100), nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=True)
    inventory_quantity = db.Column(db.Integer, default=0)

    product = db.relationship("Product", back_populates="variants")


class ProductImage(BaseModel, TenantMixin):
    __tablename__ = "product_images"

    product_id = db.Column(db.String(36), db.ForeignKey("products.id"), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    url = db.Column(db.String(512), nullable=False)
    alt = db.Column(db.String(255), nullable=True)

    product = db.relationship("Product", back_populates="images")
