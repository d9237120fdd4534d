import asyncio
import re
from typing import Iterable, Optional, Union

from storefront.domain.access import ANONYMOUS, PermissionContext
from .fragments import Fragment, FragmentRenderer

SHORTCODE_RE = re.compile(r"\[\[widget:([A-Za-z0-9_-]+)\]\]")


async def process_shortcodes(
    html: str,
    env,
    fragments: Union[FragmentRenderer, Iterable[Fragment]],
    permission_context: PermissionContext = ANONYMOUS,
    site: Optional[dict] = None,
) -> str:
    """
    Replace every ``[[widget:<slug>]]`` token in rendered HTML with the
    widget's markup.

    Occurrences render concurrently, each through its own lookup, and are
    put back in scan order. Text outside the tokens is left untouched.
    """
    if not html:
        return html

    matches = list(SHORTCODE_RE.finditer(html))
    if not matches:
        return html

    if isinstance(fragments, FragmentRenderer):
        renderer = fragments
    else:
        renderer = FragmentRenderer(env, fragments, permission_context, site)

    rendered = await asyncio.gather(
        *(renderer.render(match.group(1), "widgets") for match in matches)
    )

    parts = []
    cursor = 0
    for match, replacement in zip(matches, rendered):
        parts.append(html[cursor:match.start()])
        parts.append(str(replacement))
        cursor = match.end()
    parts.append(html[cursor:])
    return "".join(parts)
