"""
Per-tenant, per-theme Jinja environments.

Environments are built lazily and cached by ``(tenant_id, theme_slug)``.
They render asynchronously, so ``renderBlock`` / ``renderWidget`` render
their fragment in place instead of leaving a token for a later pass.
"""
import logging
from typing import Dict, Optional, Tuple

from flask import current_app
from jinja2 import Environment, pass_context
from markupsafe import Markup

from .filters import STOREFRONT_FILTERS
from .fragments import FRAGMENT_RENDERER_KEY
from .loaders import DatabaseTemplateSource, FilesystemTemplateSource, TemplateProviderChain
from .themes import DEFAULT_THEME, get_theme_config, resolve_theme_chain

logger = logging.getLogger(__name__)

_env_cache: Dict[Tuple[str, str], Environment] = {}


@pass_context
async def render_block(context, slug):
    renderer = context.get(FRAGMENT_RENDERER_KEY)
    if renderer is None:
        return Markup("")
    return await renderer.render(slug, "blocks")


@pass_context
async def render_widget(context, slug):
    renderer = context.get(FRAGMENT_RENDERER_KEY)
    if renderer is None:
        return Markup("")
    return await renderer.render(slug, "widgets")


def resolve_active_theme(tenant_id: str, theme_slug: Optional[str]) -> str:
    """The requested theme, or ``default`` when the tenant does not have it."""
    slug = theme_slug or DEFAULT_THEME
    if slug != DEFAULT_THEME and get_theme_config(tenant_id, slug) is None:
        logger.warning(
            'Theme "%s" not found for tenant %s, falling back to "%s"',
            slug, tenant_id, DEFAULT_THEME,
        )
        slug = DEFAULT_THEME
    return slug


def _build_environment(tenant_id: str, theme_slug: str) -> Environment:
    chain = resolve_theme_chain(tenant_id, theme_slug)
    loader = TemplateProviderChain([
        DatabaseTemplateSource(tenant_id, chain),
        FilesystemTemplateSource(current_app.config["TEMPLATE_ROOT"]),
    ])

    env = Environment(loader=loader, autoescape=True, enable_async=True)
    env.filters.update(STOREFRONT_FILTERS)
    env.globals["renderBlock"] = render_block
    env.globals["renderWidget"] = render_widget

    logger.info("Built template environment theme=%s chain=%s tenant=%s", theme_slug, chain, tenant_id)
    return env


def get_template_environment(tenant_id: str, theme_slug: Optional[str] = None) -> Environment:
    slug = resolve_active_theme(tenant_id, theme_slug)
    key = (tenant_id, slug)

    env = _env_cache.get(key)
    if env is None:
        env = _build_environment(tenant_id, slug)
        _env_cache[key] = env
    return env


def clear_environment_cache(tenant_id: Optional[str] = None) -> None:
    keys = [k for k in _env_cache if tenant_id is None or k[0] == tenant_id]
    for key in keys:
        env = _env_cache.pop(key)
        env.loader.clear_cache()
