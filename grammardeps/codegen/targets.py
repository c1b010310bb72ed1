"""Known code generation targets and their file naming conventions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .templates import TemplateCatalog

_HEADER_FILE_TEMPLATE = "{# recognizer header #}"


@dataclass(frozen=True)
class TargetDescriptor:
    """Code generation backend facts queried by the dependency resolver."""

    language: str
    templates: TemplateCatalog
    separate_header: bool = False

    def needs_header(self) -> bool:
        """True when the recognizer is split into a header and a source file."""
        return self.separate_header and self.templates.is_defined("headerFile")

    @property
    def code_file_extension(self) -> str:
        return self.templates.render("codeFileExtension")

    @property
    def header_file_extension(self) -> Optional[str]:
        if not self.templates.is_defined("headerFileExtension"):
            return None
        return self.templates.render("headerFileExtension")


def _catalog(code_ext: str, header_ext: str | None = None) -> TemplateCatalog:
    sources = {"codeFileExtension": code_ext}
    if header_ext is not None:
        sources["headerFileExtension"] = header_ext
        sources["headerFile"] = _HEADER_FILE_TEMPLATE
    return TemplateCatalog(sources)


_TARGETS: Dict[str, TargetDescriptor] = {
    "Java": TargetDescriptor("Java", _catalog(".java")),
    "CSharp": TargetDescriptor("CSharp", _catalog(".cs")),
    "Cpp": TargetDescriptor("Cpp", _catalog(".cpp", ".h"), separate_header=True),
    "Python3": TargetDescriptor("Python3", _catalog(".py")),
    "JavaScript": TargetDescriptor("JavaScript", _catalog(".js")),
    "TypeScript": TargetDescriptor("TypeScript", _catalog(".ts")),
    "Go": TargetDescriptor("Go", _catalog(".go")),
    "Swift": TargetDescriptor("Swift", _catalog(".swift")),
    "Dart": TargetDescriptor("Dart", _catalog(".dart")),
    "PHP": TargetDescriptor("PHP", _catalog(".php")),
}

_ALIASES = {
    "c#": "CSharp",
    "csharp": "CSharp",
    "c++": "Cpp",
    "cpp": "Cpp",
    "python": "Python3",
    "python3": "Python3",
    "js": "JavaScript",
    "ts": "TypeScript",
}


def get_target(language: str | None) -> Optional[TargetDescriptor]:
    """Return the target for ``language`` or ``None`` when it is not supported."""
    if not language:
        return None
    target = _TARGETS.get(language)
    if target is not None:
        return target
    canonical = _ALIASES.get(language.lower())
    if canonical is None:
        canonical = next((name for name in _TARGETS if name.lower() == language.lower()), None)
    return _TARGETS.get(canonical) if canonical else None


def register_target(descriptor: TargetDescriptor) -> None:
    """Add or replace a target under its language name."""
    _TARGETS[descriptor.language] = descriptor


def available_targets() -> list[str]:
    return sorted(_TARGETS)


__all__ = [
    "TargetDescriptor",
    "available_targets",
    "get_target",
    "register_target",
]
