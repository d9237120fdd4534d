from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Customer(BaseModel, TenantMixin):
    __tablename__ = "customers"

    email = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=True)
    last_name = db.Column(db.String(100), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    # Maintained by the billing integration
    subscription_status = db.Column(db.String(50), nullable=True)  # active, past_due, canceled
    subscription_plan = db.Column(db.String(100), nullable=True)  # plan slug

    @property
    def has_active_subscription(self) -> bool:
        return self.subscription_status == "active"
