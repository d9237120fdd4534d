from flask import jsonify
from storefront.domain.exceptions import StorefrontError

def register_error_handlers(app):
    @app.errorhandler(StorefrontError)
    def handle_storefront_error(error):
        response = jsonify({
            "error": type(error).__name__,
            "message": str(error)
        })
        response.status_code = error.status_code
        return response
