from flask import Blueprint

from storefront.middleware.global_context import load_global_context

# Visitor-facing site, served for whichever tenant the request resolves to
public_bp = Blueprint("public", __name__)
public_bp.before_request(load_global_context)

# Import route modules so they register with public_bp
from . import styles
from . import seo
from . import content
