"""
Reusable fragments (blocks and widgets) rendered inside pages.

A fragment render is isolated: a missing fragment, a denied fragment or a
fragment whose template blows up becomes an HTML comment in place of the
markup, and the surrounding page still renders.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from flask import current_app, has_app_context
from markupsafe import Markup, escape

from storefront.domain.access import ANONYMOUS, PermissionContext, can_access, parse_access_rules
from storefront.utils.json_fields import parse_json_object

logger = logging.getLogger(__name__)

# Context key under which the active renderer travels through templates
FRAGMENT_RENDERER_KEY = "_fragment_renderer"

_LABELS = {"widgets": "Widget", "blocks": "Block"}


@dataclass(frozen=True)
class Fragment:
    slug: str
    content_type: str
    template_filename: Optional[str]
    content: dict = field(default_factory=dict)
    access_rules: Optional[dict] = None
    id: Optional[str] = None

    @classmethod
    def from_block(cls, block) -> "Fragment":
        return cls(
            id=block.id,
            slug=block.slug,
            content_type=block.content_type,
            template_filename=block.template.filename if block.template else None,
            content=parse_json_object(block.content.data if block.content else None),
            access_rules=parse_access_rules(block.access_rules),
        )


def _comment_text(text: Any) -> str:
    return str(escape(str(text))).replace("--", "- -")


class FragmentRenderer:
    """Looks up fragments by slug and renders them with the page's environment."""

    def __init__(
        self,
        env,
        fragments: Iterable[Fragment],
        permission_context: PermissionContext = ANONYMOUS,
        site: Optional[dict] = None,
    ):
        self.env = env
        self.fragments: List[Fragment] = list(fragments or [])
        self.permission_context = permission_context or ANONYMOUS
        self.site = site or {}

    def find(self, slug: str, content_type: str) -> Optional[Fragment]:
        for fragment in self.fragments:
            if fragment.slug == slug and fragment.content_type == content_type:
                return fragment
        return None

    async def render(self, slug: str, content_type: str = "widgets") -> Markup:
        label = _LABELS.get(content_type, "Fragment")
        fragment = self.find(slug, content_type)

        if fragment is None:
            logger.warning("%s not found: %s", label, slug)
            return Markup(f"<!-- {label} not found: {_comment_text(slug)} -->")

        if not can_access(fragment.access_rules, self.permission_context):
            return Markup(f"<!-- Access denied: {_comment_text(slug)} -->")

        try:
            if not fragment.template_filename:
                raise LookupError(f"no template assigned to {label.lower()} {slug}")

            template = self.env.get_template(fragment.template_filename)
            html = await template.render_async(
                content=fragment.content,
                site=self.site,
                blocks=self.fragments,
                **{
                    "widget" if content_type == "widgets" else "block": fragment,
                    FRAGMENT_RENDERER_KEY: self,
                },
            )
        except Exception as exc:
            logger.exception("Error rendering %s %s", label.lower(), slug)
            detail = f": {_comment_text(exc)}" if has_app_context() and current_app.debug else ""
            return Markup(f"<!-- Error rendering {label.lower()} {_comment_text(slug)}{detail} -->")

        return Markup(html)
