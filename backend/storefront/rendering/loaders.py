"""
Template source providers.

Templates are looked up through an ordered chain of named providers. A
provider answers with a Jinja source tuple (found), ``None`` (not found,
ask the next provider) or raises (a real error that fails the render).
"""
import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from jinja2 import BaseLoader, FileSystemLoader, TemplateNotFound

from storefront.models.template import Template

logger = logging.getLogger(__name__)

Source = Tuple[str, Optional[str], Callable[[], bool]]


def _always_fresh() -> bool:
    # Database sources only change through the admin layer, which
    # invalidates the owning environment explicitly.
    return True


class TemplateSourceProvider:
    name = "provider"

    def find_source(self, environment, template: str) -> Optional[Source]:
        raise NotImplementedError


class DatabaseTemplateSource(TemplateSourceProvider):
    """
    Templates stored in the tenant's ``templates`` table.

    A requested name is tried as given, with its leading slash toggled, and
    prefixed by each theme of the chain (child theme first).
    """
    name = "database"

    def __init__(self, tenant_id: str, theme_chain: Sequence[str] = ()):
        self.tenant_id = tenant_id
        self.theme_chain = list(theme_chain)
        self._sources = {}

    def candidate_names(self, template: str) -> List[str]:
        bare = template.lstrip("/")
        names = [template, bare if template.startswith("/") else f"/{template}"]
        names.extend(f"{slug}/{bare}" for slug in reversed(self.theme_chain))

        unique: List[str] = []
        for name in names:
            if name not in unique:
                unique.append(name)
        return unique

    def find_source(self, environment, template: str) -> Optional[Source]:
        if template in self._sources:
            return self._sources[template]

        candidates = self.candidate_names(template)
        rows = Template.query.filter(
            Template.tenant_id == self.tenant_id,
            Template.filename.in_(candidates),
        ).all()
        by_filename = {row.filename: row for row in rows if row.content}

        for name in candidates:
            row = by_filename.get(name)
            if row is not None:
                source = (row.content, None, _always_fresh)
                self._sources[template] = source
                return source
        return None

    def clear_cache(self) -> None:
        self._sources.clear()


class FilesystemTemplateSource(TemplateSourceProvider):
    """Shared on-disk templates (system pages not migrated into the database)."""
    name = "filesystem"

    def __init__(self, root: str):
        self.root = root
        self._loader = FileSystemLoader(root)

    def find_source(self, environment, template: str) -> Optional[Source]:
        try:
            return self._loader.get_source(environment, template.lstrip("/"))
        except TemplateNotFound:
            return None


class TemplateProviderChain(BaseLoader):
    """Jinja loader that asks each provider in order; first match wins."""

    def __init__(self, providers: Iterable[TemplateSourceProvider]):
        self.providers = list(providers)

    def get_source(self, environment, template):
        for provider in self.providers:
            source = provider.find_source(environment, template)
            if source is not None:
                logger.debug("Template %r served by %s source", template, provider.name)
                return source
        raise TemplateNotFound(template)

    def clear_cache(self) -> None:
        for provider in self.providers:
            if hasattr(provider, "clear_cache"):
                provider.clear_cache()
