class StorefrontError(Exception):
    """Base class for errors raised by the storefront core."""
    status_code = 500


class ContentIntegrityError(StorefrontError):
    """A content row exists but cannot be rendered (e.g. no template assigned)."""
    status_code = 500


class TenantMismatch(StorefrontError):
    status_code = 403
