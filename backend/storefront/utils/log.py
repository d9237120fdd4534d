from flask import g, has_request_context, request


def tenant_label() -> str:
    tenant = getattr(g, "current_tenant", None) if has_request_context() else None
    return tenant.slug if tenant is not None else "system"


def log_error(logger, operation: str, exc: BaseException = None) -> None:
    """Log a failure tagged with the tenant and the operation that failed."""
    where = f"{request.method} {request.path}" if has_request_context() else "-"
    logger.error(
        "[%s] tenant=%s %s - %s",
        operation, tenant_label(), where, exc or "error",
        exc_info=exc,
    )
