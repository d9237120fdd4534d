import logging

from flask import g, jsonify
from flask_jwt_extended import jwt_required

from storefront.rendering.cache import invalidate_render_caches
from storefront.utils.decorators import tenant_required, roles_required
from . import v1_bp

logger = logging.getLogger(__name__)


@v1_bp.route("/admin/cache/invalidate", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
def invalidate_cache():
    """
    Called by the admin layer after bulk theme/template imports that bypass
    the ORM (e.g. template sync jobs).
    """
    tenant = g.current_tenant
    invalidate_render_caches(tenant.id)
    logger.info("Render caches invalidated by admin request tenant=%s", tenant.slug)

    return jsonify({
        "message": "Render caches invalidated",
        "tenant_id": tenant.id
    }), 200
