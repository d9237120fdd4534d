import logging
import re
from typing import Dict, List, Optional

from sqlalchemy.orm import joinedload, selectinload

from storefront.domain.access import ANONYMOUS, PermissionContext, can_access, parse_access_rules
from storefront.models.menu import Menu, MenuItem
from storefront.models.page import Page
from storefront.normalizers.menu import normalize_menu, normalize_menu_item

logger = logging.getLogger(__name__)


def path_matches(pattern: str, path: str) -> bool:
    """``*`` matches any run of characters; everything else is literal."""
    regex = re.escape(pattern).replace(r"\*", ".*")
    return re.fullmatch(regex, path) is not None


def item_visible(rules: Optional[dict], context: PermissionContext, current_path: Optional[str]) -> bool:
    if not can_access(rules, context):
        return False

    pattern = (rules or {}).get("url_pattern")
    if pattern and current_path is not None:
        return path_matches(pattern, current_path)
    return True


def build_menu_tree(items, context: PermissionContext = ANONYMOUS, current_path: Optional[str] = None) -> List[dict]:
    """
    Nest visible items under their parents, keeping position order.
    Children of a hidden item are hidden with it.
    """
    by_id: Dict[str, dict] = {}
    visible = []
    for item in items:
        rules = parse_access_rules(item.display_rules)
        if item_visible(rules, context, current_path):
            by_id[item.id] = normalize_menu_item(item, rules)
            visible.append(item)

    roots = []
    for item in visible:
        node = by_id[item.id]
        if item.parent_id is None:
            roots.append(node)
        elif item.parent_id in by_id:
            by_id[item.parent_id]["children"].append(node)
    return roots


def load_menus(
    tenant_id: str,
    permission_context: PermissionContext = ANONYMOUS,
    current_path: Optional[str] = None,
) -> Dict[str, dict]:
    """Every menu of the tenant keyed by slug, filtered for the visitor."""
    menus = (
        Menu.query.filter_by(tenant_id=tenant_id)
        .options(
            selectinload(Menu.items)
            .joinedload(MenuItem.page)
            .joinedload(Page.content)
        )
        .all()
    )

    result = {}
    for menu in menus:
        items = build_menu_tree(menu.items, permission_context, current_path)
        result[menu.slug] = normalize_menu(menu, items)

    logger.debug("Loaded %d menus tenant=%s", len(result), tenant_id)
    return result
