from flask import Response, g

from storefront.models.setting import Setting
from storefront.models.stylesheet import Stylesheet
from . import public_bp

CSS_CACHE_CONTROL = "public, max-age=3600"


def _css_response(css, status=200):
    response = Response(css, status=status, mimetype="text/css")
    if status == 200:
        response.headers["Cache-Control"] = CSS_CACHE_CONTROL
    return response


@public_bp.route("/styles/<path:filename>", methods=["GET"])
def serve_style(filename):
    tenant = g.current_tenant

    if filename == "custom.css":
        setting = Setting.query.filter_by(tenant_id=tenant.id, key="global_custom_css").first()
        return _css_response(setting.value if setting and setting.value else "")

    stylesheet = (
        Stylesheet.query.filter_by(tenant_id=tenant.id, filename=filename, is_active=True)
        .order_by(Stylesheet.load_order.asc())
        .first()
    )
    if stylesheet is None:
        return _css_response(f"/* Stylesheet not found: {filename.replace('*/', '')} */", status=404)
    return _css_response(stylesheet.content)
