from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .content_detail_mixin import ContentDetailMixin

class Post(BaseModel, TenantMixin, ContentDetailMixin):
    __tablename__ = 'posts'

    status = db.Column(db.String(50), default='draft', index=True)
    author_name = db.Column(db.String(200), nullable=True)
    published_at = db.Column(db.DateTime, nullable=True)
