from storefront.utils.json_fields import parse_json_field


def build_seo(page: dict, content, site: dict, slug: str) -> dict:
    """
    SEO block for a content page, each field falling back to the next best
    source when not set explicitly.
    """
    url = f"{site.get('site_url', '')}{slug}"
    title = page.get("meta_title") or content.title
    description = page.get("meta_description") or ""

    images = page.get("images") or []
    og_image = (
        page.get("og_image")
        or page.get("image")
        or (images[0].get("url") if images else None)
        or ""
    )

    return {
        "title": title,
        "description": description,
        "canonical": page.get("canonical_url") or url,
        "robots": page.get("robots") or "index, follow",
        "og": {
            "title": page.get("og_title") or title,
            "description": page.get("og_description") or description,
            "image": og_image,
            "url": url,
            "type": "website",
        },
        "schema": parse_json_field(page.get("schema_markup")),
    }
