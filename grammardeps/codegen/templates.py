"""Named string templates backing a code generation target."""

from __future__ import annotations

from typing import Dict, Mapping

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateNotFound


class TemplateCatalog:
    """Small template dictionary exposing ``is_defined`` and ``render``.

    Templates are jinja2 sources keyed by name, e.g. ``codeFileExtension``
    rendering to ``".java"``.
    """

    def __init__(self, sources: Mapping[str, str]) -> None:
        self._sources: Dict[str, str] = dict(sources)
        self._env = Environment(
            loader=DictLoader(self._sources),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

    def is_defined(self, name: str) -> bool:
        return name in self._sources

    def render(self, name: str, **bindings: object) -> str:
        """Render template ``name``; raises ``TemplateNotFound`` when undefined."""
        if not self.is_defined(name):
            raise TemplateNotFound(name)
        template = self._env.get_template(name)
        return template.render(**bindings)


__all__ = ["TemplateCatalog", "TemplateNotFound"]
