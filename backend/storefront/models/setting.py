from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Setting(BaseModel, TenantMixin):
    __tablename__ = "settings"

    key = db.Column(db.String(100), nullable=False)
    value = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "key", name="uq_setting_key_per_tenant"),
    )
