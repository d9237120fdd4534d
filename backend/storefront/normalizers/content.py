from storefront.utils.json_fields import parse_json_object

SEO_FIELDS = (
    "meta_title",
    "meta_description",
    "og_title",
    "og_description",
    "og_image",
    "canonical_url",
    "robots",
    "schema_markup",
)


def _money(value):
    return float(value) if value is not None else None


def normalize_detail(row, content):
    """
    Flatten a module detail row, its content row and its template into the
    ``page`` dict handed to templates.
    """
    template = row.template
    seo = row.seo or {}

    base = {
        "id": row.id,
        "content_id": content.id,
        "module": content.module,
        "slug": content.slug,
        "title": content.title,
        "status": getattr(row, "status", None),
        "template_id": row.template_id,
        "template_filename": template.filename if template else None,
        "template_options": parse_json_object(template.options) if template else {},
        "access_rules": row.access_rules,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }
    for field in SEO_FIELDS:
        base[field] = seo.get(field)

    return base


def normalize_variant(variant):
    return {
        "id": variant.id,
        "position": variant.position,
        "title": variant.title,
        "sku": variant.sku,
        "price": _money(variant.price),
        "inventory_quantity": variant.inventory_quantity,
    }


def normalize_image(image):
    return {
        "id": image.id,
        "position": image.position,
        "url": image.url,
        "alt": image.alt,
    }


def normalize_product(product, content):
    base = normalize_detail(product, content)
    base.update({
        "price": _money(product.price),
        "sku": product.sku,
        "inventory_quantity": product.inventory_quantity,
        "image": product.image,
        "variants": [normalize_variant(v) for v in product.variants],
        "images": [normalize_image(i) for i in product.images],
    })
    return base


def normalize_post(post, content):
    base = normalize_detail(post, content)
    base.update({
        "author_name": post.author_name,
        "published_at": post.published_at,
    })
    return base


def normalize_classified(ad, content):
    base = normalize_detail(ad, content)
    category = ad.category
    owner = ad.owner
    base.update({
        "price": _money(ad.price),
        "category_name": category.name if category else None,
        "category_slug": category.slug if category else None,
        "owner_first_name": owner.first_name if owner else None,
        "owner_last_name": owner.last_name if owner else None,
    })
    return base


def normalize_block_detail(block, content):
    base = normalize_detail(block, content)
    base.update({
        "block_slug": block.slug,
        "content_type": block.content_type,
    })
    return base


def normalize_index_item(content, product=None):
    item = {
        "id": content.id,
        "module": content.module,
        "slug": content.slug,
        "title": content.title,
        "data": parse_json_object(content.data),
        "created_at": content.created_at,
        "updated_at": content.updated_at,
    }
    if product is not None:
        item.update({
            "price": _money(product.price),
            "sku": product.sku,
            "inventory_quantity": product.inventory_quantity,
            "image": product.image,
        })
    return item
