from sqlalchemy.orm import declared_attr
from storefront.extensions import db


class ContentDetailMixin:
    """
    Columns shared by every module detail row (pages, posts, products,
    classified ads, blocks). Each row is joined 1:1 to a Content row and
    names the template it renders through.
    """
    content_id = db.Column(db.String(36), db.ForeignKey("content.id"), nullable=False, index=True)
    template_id = db.Column(db.String(36), db.ForeignKey("templates.id"), nullable=True)

    # meta_title, meta_description, og_title, og_description, og_image,
    # canonical_url, robots, schema_markup
    seo = db.Column(db.JSON(none_as_null=True), default=dict)
    access_rules = db.Column(db.JSON(none_as_null=True), nullable=True)

    @declared_attr
    def content(cls):
        return db.relationship("Content")

    @declared_attr
    def template(cls):
        return db.relationship("Template")
