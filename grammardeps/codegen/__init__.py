"""Code generator naming facts: targets, template catalogs and file names."""

from .generator import DEFAULT_LANGUAGE, CodeGenerator
from .targets import TargetDescriptor, available_targets, get_target, register_target
from .templates import TemplateCatalog

__all__ = [
    "CodeGenerator",
    "DEFAULT_LANGUAGE",
    "TargetDescriptor",
    "TemplateCatalog",
    "available_targets",
    "get_target",
    "register_target",
]
