import json

import pytest
from flask_jwt_extended import create_access_token

from storefront import create_app
from storefront.extensions import db
from storefront.models import (
    Block,
    Content,
    Customer,
    Page,
    Setting,
    Template,
    Tenant,
    Theme,
)
from storefront.rendering.cache import invalidate_render_caches


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
    invalidate_render_caches()


@pytest.fixture
def client(app):
    return app.test_client()


def save(*rows):
    db.session.add_all(rows)
    db.session.commit()
    return rows[0] if len(rows) == 1 else rows


@pytest.fixture
def tenant(app):
    return save(Tenant(name="Acme", slug="acme", domain="shop.acme.test"))


@pytest.fixture
def other_tenant(app):
    return save(Tenant(name="Globex", slug="globex", domain="shop.globex.test"))


def tenant_headers(tenant, token=None):
    headers = {"X-Tenant-ID": tenant.id}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def add_setting(tenant, key, value):
    if not isinstance(value, str):
        value = json.dumps(value)
    return save(Setting(tenant_id=tenant.id, key=key, value=value))


def add_template(tenant, filename, content, options=None):
    return save(Template(tenant_id=tenant.id, filename=filename, content=content, options=options or {}))


def add_theme(tenant, slug, inherits=None, css=(), js=()):
    return save(Theme(
        tenant_id=tenant.id,
        slug=slug,
        name=slug.title(),
        inherits=inherits,
        config={"assets": {"css": list(css), "js": list(js)}},
    ))


def add_content(tenant, module, slug, title, detail_cls, template=None, data=None, **detail):
    content = save(Content(tenant_id=tenant.id, module=module, slug=slug, title=title, data=data or {}))
    row = detail_cls(
        tenant_id=tenant.id,
        content_id=content.id,
        template_id=template.id if template else None,
        **detail,
    )
    save(row)
    return content, row


def add_page(tenant, slug, title, template=None, status="published", **kwargs):
    return add_content(tenant, "pages", slug, title, Page, template=template, status=status, **kwargs)


def add_widget(tenant, slug, template, data=None, access_rules=None, content_type="widgets"):
    content = save(Content(tenant_id=tenant.id, module=content_type, slug=None, title=slug, data=data or {}))
    return save(Block(
        tenant_id=tenant.id,
        content_id=content.id,
        template_id=template.id,
        slug=slug,
        content_type=content_type,
        access_rules=access_rules,
    ))


def add_customer(tenant, subscription_status=None, subscription_plan=None):
    return save(Customer(
        tenant_id=tenant.id,
        email="visitor@example.com",
        first_name="Vera",
        subscription_status=subscription_status,
        subscription_plan=subscription_plan,
    ))


def customer_token(tenant, customer):
    return create_access_token(
        identity=customer.id,
        additional_claims={"tenant_id": tenant.id, "customer_id": customer.id},
    )


def admin_token(tenant_id, role="admin"):
    return create_access_token(
        identity="admin-user",
        additional_claims={"tenant_id": tenant_id, "role": role},
    )
