"""Build dependency computation for grammar compilers."""

from .config import ConfigError, ToolConfig, load_config
from .dependencies import (
    DependencyResolver,
    ReportError,
    compute_dependencies,
    compute_inputs,
    compute_outputs,
    groom_qualified_file_name,
    render_report,
)
from .grammar import GrammarError, load_grammar
from .models import DependencyResult, Grammar, GrammarType

__all__ = [
    "ConfigError",
    "DependencyResolver",
    "DependencyResult",
    "Grammar",
    "GrammarError",
    "GrammarType",
    "ReportError",
    "ToolConfig",
    "compute_dependencies",
    "compute_inputs",
    "compute_outputs",
    "groom_qualified_file_name",
    "load_config",
    "load_grammar",
    "render_report",
]
