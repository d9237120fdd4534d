def menu_item_url(item):
    if item.page_id:
        content = item.page.content if item.page else None
        return content.slug if content and content.slug else "/"
    return item.url


def normalize_menu_item(item, display_rules=None):
    return {
        "id": item.id,
        "title": item.title,
        "url": menu_item_url(item),
        "target": item.target,
        "description": item.description,
        "image": item.image,
        "is_mega": bool(item.is_mega),
        "mega_columns": item.mega_columns or 4,
        "css_class": item.css_class,
        "display_rules": display_rules,
        "children": [],
    }


def normalize_menu(menu, items):
    return {
        "id": menu.id,
        "name": menu.name,
        "slug": menu.slug,
        "description": menu.description,
        "items": items,
    }
