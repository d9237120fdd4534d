from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_detail_mixin import ContentDetailMixin

class Page(BaseModel, TenantMixin, ContentDetailMixin):
    __tablename__ = 'pages'

    status = db.Column(db.String(50), default='draft', index=True)
