from flask import request, g, jsonify
from storefront.models.tenant import Tenant

# Endpoints that are served without a tenant
TENANT_EXEMPT_ENDPOINTS = {"v1.health_check", "openapi_storefront", "static"}


def resolve_tenant():
    tenant_id = request.headers.get('X-Tenant-ID')
    if tenant_id:
        return Tenant.query.filter_by(id=tenant_id, is_active=True).first()

    host = request.host.split(":", 1)[0].lower()
    return Tenant.query.filter_by(domain=host, is_active=True).first()


def tenant_middleware(app):
    @app.before_request
    def load_tenant():
        endpoint = request.endpoint or ""
        if endpoint in TENANT_EXEMPT_ENDPOINTS or endpoint.startswith("swagger_ui"):
            return None

        tenant = resolve_tenant()
        if not tenant:
            return jsonify({"error": "Invalid tenant"}), 404

        # Attach tenant to global context
        g.current_tenant = tenant
