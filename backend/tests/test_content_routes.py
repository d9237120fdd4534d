from decimal import Decimal

from storefront.models import ClassifiedAd, ClassifiedCategory, Post, Product, ProductImage, ProductVariant, Redirect

from conftest import (
    add_content,
    add_customer,
    add_page,
    add_setting,
    add_template,
    add_theme,
    add_widget,
    customer_token,
    save,
    tenant_headers,
)

PAGE_TEMPLATE = "<h1>{{ page.title }}</h1><p>{{ content.body }}</p><title>{{ seo.title }}</title>"


def add_product(tenant, slug, title, price, template=None, status="active", **kwargs):
    return add_content(
        tenant, "products", slug, title, Product,
        template=template, status=status, price=Decimal(str(price)), **kwargs,
    )


def test_exact_slug_renders_page(client, tenant):
    template = add_template(tenant, "pages/page.html", PAGE_TEMPLATE)
    add_page(tenant, "/about", "About Us", template=template, data={"body": "We sell things"})

    response = client.get("/about/", headers=tenant_headers(tenant))
    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "<h1>About Us</h1>" in html
    assert "<p>We sell things</p>" in html
    assert "<title>About Us</title>" in html


def test_tenant_resolved_from_host(client, tenant):
    template = add_template(tenant, "pages/page.html", PAGE_TEMPLATE)
    add_page(tenant, "/about", "About Us", template=template)

    response = client.get("/about", base_url="http://shop.acme.test")
    assert response.status_code == 200
    assert "About Us" in response.get_data(as_text=True)


def test_unknown_tenant_is_rejected(client, app):
    response = client.get("/about", headers={"X-Tenant-ID": "nope"})
    assert response.status_code == 404
    assert response.get_json() == {"error": "Invalid tenant"}


def test_slug_without_prefix_finds_prefixed_content(client, tenant):
    template = add_template(tenant, "products/product.html", "product:{{ product.title }}")
    add_product(tenant, "/products/blue-widget", "Blue Widget", 9.5, template=template)

    response = client.get("/blue-widget", headers=tenant_headers(tenant))
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "product:Blue Widget"


def test_prefixed_slug_finds_unprefixed_content(client, tenant):
    template = add_template(tenant, "products/product.html", "product:{{ product.title }}")
    add_product(tenant, "/hat", "Hat", 20, template=template)

    response = client.get("/products/hat", headers=tenant_headers(tenant))
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "product:Hat"


def test_prefix_strip_is_scoped_to_module(client, tenant):
    template = add_template(tenant, "pages/page.html", PAGE_TEMPLATE)
    add_page(tenant, "/hat", "Hat page", template=template)

    response = client.get("/products/hat", headers=tenant_headers(tenant))
    assert response.status_code == 404


def test_prepend_order_prefers_products(client, tenant):
    page_template = add_template(tenant, "pages/page.html", "page")
    product_template = add_template(tenant, "products/product.html", "product")
    add_page(tenant, "/pages/sale", "Sale page", template=page_template)
    add_product(tenant, "/products/sale", "Sale product", 1, template=product_template)

    response = client.get("/sale", headers=tenant_headers(tenant))
    assert response.get_data(as_text=True) == "product"


def test_missing_content_renders_404_page(client, tenant):
    response = client.get("/nowhere", headers=tenant_headers(tenant))
    assert response.status_code == 404
    assert "Page Not Found" in response.get_data(as_text=True)


def test_theme_can_override_404_page(client, tenant):
    add_template(tenant, "pages/404.html", "custom {{ status_code }}")
    response = client.get("/nowhere", headers=tenant_headers(tenant))
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "custom 404"


def test_unpublished_page_is_404(client, tenant):
    template = add_template(tenant, "pages/page.html", PAGE_TEMPLATE)
    add_page(tenant, "/draft", "Draft", template=template, status="draft")

    assert client.get("/draft", headers=tenant_headers(tenant)).status_code == 404


def test_soft_deleted_content_is_404(client, tenant):
    template = add_template(tenant, "pages/page.html", PAGE_TEMPLATE)
    content, _ = add_page(tenant, "/gone", "Gone", template=template)
    content.soft_delete()
    save(content)

    assert client.get("/gone", headers=tenant_headers(tenant)).status_code == 404


def test_page_without_template_is_server_error(client, tenant):
    add_page(tenant, "/broken", "Broken", template=None)

    response = client.get("/broken", headers=tenant_headers(tenant))
    assert response.status_code == 500
    assert "Server Error" in response.get_data(as_text=True)


def test_template_error_renders_500_page(client, tenant):
    template = add_template(tenant, "pages/page.html", "{{ missing_function() }}")
    add_page(tenant, "/oops", "Oops", template=template)

    response = client.get("/oops", headers=tenant_headers(tenant))
    assert response.status_code == 500
    assert "Something went wrong" in response.get_data(as_text=True)


def test_failing_error_template_returns_plain_text(client, tenant):
    template = add_template(tenant, "pages/page.html", "{{ missing_function() }}")
    add_template(tenant, "pages/500.html", "{% if %}")
    add_page(tenant, "/oops", "Oops", template=template)

    response = client.get("/oops", headers=tenant_headers(tenant))
    assert response.status_code == 500
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True) == "Critical Server Error"


def test_home_page_setting(client, tenant):
    template = add_template(tenant, "pages/page.html", PAGE_TEMPLATE)
    _, page = add_page(tenant, "/home", "Home", template=template)
    add_setting(tenant, "home_page_id", page.id)

    response = client.get("/", headers=tenant_headers(tenant))
    assert response.status_code == 200
    assert "<h1>Home</h1>" in response.get_data(as_text=True)


def test_root_without_home_page_is_404(client, tenant):
    assert client.get("/", headers=tenant_headers(tenant)).status_code == 404


def test_redirect(client, tenant):
    save(Redirect(tenant_id=tenant.id, source_path="/old", target_path="/new", status_code=301))

    response = client.get("/old/", headers=tenant_headers(tenant))
    assert response.status_code == 301
    assert response.headers["Location"].endswith("/new")


def test_subscription_required_is_advisory(client, tenant):
    template = add_template(
        tenant,
        "pages/page.html",
        "{% if subscription_required %}Subscribe to read{% else %}{{ content.body }}{% endif %}",
    )
    add_page(
        tenant, "/premium", "Premium", template=template,
        data={"body": "Premium article"}, access_rules={"subscription": "required"},
    )

    anonymous = client.get("/premium", headers=tenant_headers(tenant))
    assert anonymous.status_code == 200
    assert anonymous.get_data(as_text=True) == "Subscribe to read"

    customer = add_customer(tenant, subscription_status="active", subscription_plan="pro")
    token = customer_token(tenant, customer)
    subscriber = client.get("/premium", headers=tenant_headers(tenant, token))
    assert subscriber.status_code == 200
    assert subscriber.get_data(as_text=True) == "Premium article"


def test_token_for_other_tenant_is_anonymous(client, tenant, other_tenant):
    template = add_template(tenant, "pages/page.html", "{{ 'member' if customer else 'guest' }}")
    add_page(tenant, "/who", "Who", template=template)

    customer = add_customer(other_tenant, subscription_status="active")
    token = customer_token(other_tenant, customer)
    response = client.get("/who", headers=tenant_headers(tenant, token))
    assert response.get_data(as_text=True) == "guest"


def test_garbage_token_is_anonymous(client, tenant):
    template = add_template(tenant, "pages/page.html", "{{ 'member' if customer else 'guest' }}")
    add_page(tenant, "/who", "Who", template=template)

    response = client.get("/who", headers=tenant_headers(tenant, "not-a-jwt"))
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "guest"


def test_product_detail_hydrates_variants_and_images(client, tenant):
    template = add_template(
        tenant,
        "products/product.html",
        "{% for v in product.variants %}{{ v.title }},{% endfor %}|{{ seo.og.image }}|{{ product.price }}",
    )
    _, product = add_product(tenant, "/products/shirt", "Shirt", 25, template=template)
    save(
        ProductVariant(tenant_id=tenant.id, product_id=product.id, position=2, title="Large"),
        ProductVariant(tenant_id=tenant.id, product_id=product.id, position=1, title="Small"),
        ProductImage(tenant_id=tenant.id, product_id=product.id, position=1, url="/img/back.jpg"),
        ProductImage(tenant_id=tenant.id, product_id=product.id, position=0, url="/img/front.jpg"),
    )

    response = client.get("/products/shirt", headers=tenant_headers(tenant))
    assert response.get_data(as_text=True) == "Small,Large,|/img/front.jpg|25.0"


def test_seo_fields_and_fallbacks(client, tenant):
    add_setting(tenant, "site_url", "https://shop.acme.test")
    template = add_template(
        tenant,
        "pages/page.html",
        "{{ seo.title }}|{{ seo.canonical }}|{{ seo.robots }}|{{ seo.og.title }}|{{ seo.og.image }}|{{ seo.schema['@type'] }}",
    )
    add_page(
        tenant, "/about", "About", template=template,
        seo={
            "meta_title": "About Acme",
            "og_image": "/img/og.png",
            "schema_markup": '{"@type": "Organization"}',
        },
    )

    response = client.get("/about", headers=tenant_headers(tenant))
    assert response.get_data(as_text=True) == (
        "About Acme|https://shop.acme.test/about|index, follow|About Acme|/img/og.png|Organization"
    )


def test_post_and_classified_detail(client, tenant):
    post_template = add_template(tenant, "posts/post.html", "{{ page.author_name }}:{{ page.title }}")
    add_content(tenant, "posts", "/posts/hello", "Hello", Post, template=post_template, status="published", author_name="Ann")

    ad_template = add_template(tenant, "classifieds/ad.html", "{{ ad.title }} in {{ ad.category_name }}")
    category = save(ClassifiedCategory(tenant_id=tenant.id, name="Bikes", slug="bikes"))
    add_content(
        tenant, "classifieds", "/classifieds/bike", "Red bike", ClassifiedAd,
        template=ad_template, status="approved", category_id=category.id,
    )
    add_content(
        tenant, "classifieds", "/classifieds/pending", "Pending", ClassifiedAd,
        template=ad_template, status="pending",
    )

    headers = tenant_headers(tenant)
    assert client.get("/hello", headers=headers).get_data(as_text=True) == "Ann:Hello"
    assert client.get("/classifieds/bike", headers=headers).get_data(as_text=True) == "Red bike in Bikes"
    assert client.get("/classifieds/pending", headers=headers).status_code == 404


def test_page_renders_widgets_and_shortcodes(client, tenant):
    widget_template = add_template(tenant, "widgets/promo.html", "<aside>{{ content.text }}</aside>")
    add_widget(tenant, "promo", widget_template, data={"text": "Sale!"})
    add_widget(tenant, "members", widget_template, data={"text": "Hi member"}, access_rules={"auth": "logged_in"})

    template = add_template(
        tenant,
        "pages/page.html",
        "{{ renderWidget('promo') }}|{{ content.body | safe }}|{{ renderWidget('members') }}",
    )
    add_page(tenant, "/home", "Home", template=template, data={"body": "[[widget:promo]][[widget:nope]]"})

    response = client.get("/home", headers=tenant_headers(tenant))
    assert response.status_code == 200
    assert response.get_data(as_text=True) == (
        "<aside>Sale!</aside>|<aside>Sale!</aside><!-- Widget not found: nope -->|"
        "<!-- Access denied: members -->"
    )


def test_product_index_search_and_sort(client, tenant):
    add_template(tenant, "products/index.html", "{% for p in content %}{{ p.title }};{% endfor %}")
    add_product(tenant, "/products/banana", "Banana", 2)
    add_product(tenant, "/products/apple", "Apple", 5)
    add_product(tenant, "/products/cherry", "Cherry", 10)
    headers = tenant_headers(tenant)

    def titles(query=""):
        return client.get(f"/products{query}", headers=headers).get_data(as_text=True)

    assert titles() == "Apple;Banana;Cherry;"
    assert titles("?sort=price&order=desc") == "Cherry;Apple;Banana;"
    assert titles("?sort=price") == "Banana;Apple;Cherry;"
    assert titles("?min_price=3&max_price=9") == "Apple;"
    assert titles("?q=ban") == "Banana;"
    assert titles("?sort=bogus&min_price=abc") == "Apple;Banana;Cherry;"


def test_post_index_lists_newest_first(client, tenant):
    add_template(tenant, "posts/index.html", "{% for p in content %}{{ p.title }};{% endfor %}")
    first, _ = add_content(tenant, "posts", "/posts/first", "First", Post, status="published")
    second, _ = add_content(tenant, "posts", "/posts/second", "Second", Post, status="published")
    first.created_at = first.created_at.replace(year=2000)
    save(first)

    response = client.get("/posts", headers=tenant_headers(tenant))
    assert response.get_data(as_text=True) == "Second;First;"


def test_module_index_falls_through_without_template(client, tenant):
    template = add_template(tenant, "pages/page.html", "pages landing")
    add_page(tenant, "/pages", "Pages", template=template)

    response = client.get("/pages", headers=tenant_headers(tenant))
    assert response.get_data(as_text=True) == "pages landing"


def test_template_options_override_global_styles(client, tenant):
    add_setting(tenant, "global_styles", {"google_font_body": "Roboto", "primary_color": "#111111"})
    template = add_template(
        tenant,
        "pages/page.html",
        "{{ styles.google_font_body }}|{{ styles.google_font_heading }}|{{ styles.primary_color }}",
        options={"google_font_body": "Inter", "primary_color": "#222222"},
    )
    add_page(tenant, "/styled", "Styled", template=template)

    response = client.get("/styled", headers=tenant_headers(tenant))
    assert response.get_data(as_text=True) == "Roboto|Roboto|#222222"


def test_active_theme_assets_in_context(client, tenant):
    add_theme(tenant, "bold", css=["bold.css"])
    add_setting(tenant, "active_theme", "bold")
    template = add_template(tenant, "pages/page.html", "{{ theme_css | join(',') }}")
    add_page(tenant, "/a", "A", template=template)

    response = client.get("/a", headers=tenant_headers(tenant))
    assert response.get_data(as_text=True) == "/themes/default/assets/css/theme.css,/themes/bold/bold.css"


def test_index_pages_receive_full_seo_object(client, tenant):
    add_setting(tenant, "site_url", "https://shop.acme.test")
    add_setting(tenant, "site_name", "Acme")
    add_template(
        tenant,
        "products/index.html",
        "{{ seo.title }}|{{ seo.og.title }}|{{ seo.og.url }}|{{ seo.canonical }}|{{ seo.robots }}",
    )

    response = client.get("/products", headers=tenant_headers(tenant))
    assert response.status_code == 200
    assert response.get_data(as_text=True) == (
        "Products - Acme|Acme|https://shop.acme.test/products|https://shop.acme.test/products|index, follow"
    )


def test_broken_index_template_falls_through_to_content(client, tenant):
    add_template(tenant, "pages/index.html", "{% for %}")
    template = add_template(tenant, "pages/page.html", "pages landing")
    add_page(tenant, "/pages", "Pages", template=template)

    response = client.get("/pages", headers=tenant_headers(tenant))
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "pages landing"


def test_deleted_widget_is_not_rendered(client, tenant):
    widget_template = add_template(tenant, "widgets/promo.html", "<aside>promo</aside>")
    widget = add_widget(tenant, "promo", widget_template)
    widget.content.soft_delete()
    save(widget)

    template = add_template(tenant, "pages/page.html", "{{ content.body | safe }}|{{ renderWidget('promo') }}")
    add_page(tenant, "/home", "Home", template=template, data={"body": "[[widget:promo]]"})

    response = client.get("/home", headers=tenant_headers(tenant))
    assert response.status_code == 200
    assert response.get_data(as_text=True) == (
        "<!-- Widget not found: promo -->|<!-- Widget not found: promo -->"
    )
