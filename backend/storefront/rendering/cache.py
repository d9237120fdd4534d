import logging
from typing import Optional

from sqlalchemy import event

from storefront.models.setting import Setting
from storefront.models.template import Template
from storefront.models.theme import Theme
from .environment import clear_environment_cache
from .themes import clear_theme_config_cache

logger = logging.getLogger(__name__)


def invalidate_render_caches(tenant_id: Optional[str] = None) -> None:
    """
    Drop theme configs, environments and loaded template sources for one
    tenant (or every tenant). Call after any theme, template or setting
    change.
    """
    clear_theme_config_cache(tenant_id)
    clear_environment_cache(tenant_id)
    logger.debug("Render caches invalidated tenant=%s", tenant_id or "*")


def _invalidate_for_row(mapper, connection, target):
    invalidate_render_caches(getattr(target, "tenant_id", None))


for _model in (Theme, Template, Setting):
    for _event_name in ("after_insert", "after_update", "after_delete"):
        event.listen(_model, _event_name, _invalidate_for_row)
