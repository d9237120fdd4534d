from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class Menu(BaseModel, TenantMixin):
    __tablename__ = "menus"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(100), nullable=False, index=True)  # header, footer, ...
    description = db.Column(db.String(500), nullable=True)

    items = db.relationship(
        "MenuItem",
        back_populates="menu",
        order_by="MenuItem.position",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", name="uq_menu_slug_per_tenant"),
    )


class MenuItem(BaseModel, TenantMixin):
    __tablename__ = "menu_items"

    menu_id = db.Column(db.String(36), db.ForeignKey("menus.id"), nullable=False, index=True)
    parent_id = db.Column(db.String(36), db.ForeignKey("menu_items.id"), nullable=True)
    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True)  # wins over url

    title = db.Column(db.String(200), nullable=False)
    url = db.Column(db.String(512), nullable=True)
    target = db.Column(db.String(20), default="_self")
    position = db.Column(db.Integer, nullable=False, default=0)

    # Mega menu presentation
    description = db.Column(db.String(500), nullable=True)
    image = db.Column(db.String(512), nullable=True)
    is_mega = db.Column(db.Boolean, default=False)
    mega_columns = db.Column(db.Integer, default=4)
    css_class = db.Column(db.String(100), nullable=True)

    # Access rules plus an optional "url_pattern" (``*`` wildcard) on the current path
    display_rules = db.Column(db.JSON(none_as_null=True), nullable=True)

    menu = db.relationship("Menu", back_populates="items")
    page = db.relationship("Page")
