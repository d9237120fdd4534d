from flask import g, request

from storefront.domain.access import PermissionContext
from storefront.services.menus import load_menus
from storefront.services.site import get_current_customer, get_site_settings, load_fragments


def load_global_context():
    """
    Site-wide render state shared by every public page: settings, the
    visitor, menus filtered for the visitor, and the tenant's fragments.
    """
    tenant = g.current_tenant
    customer = get_current_customer(tenant.id)

    g.site = get_site_settings(tenant.id)
    g.customer = customer
    g.permission_context = PermissionContext.from_customer(customer)
    g.menus = load_menus(tenant.id, g.permission_context, request.path)
    g.fragments = load_fragments(tenant.id)
