"""
sassvars - resolved variable values from SCSS stylesheets.

Evaluates a stylesheet with libsass and captures the final value of each
variable (after functions, color math, and imports) as plain data.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.config import ExtractorConfig, load_config
from .core.errors import ParseError, ResolveError, RewriteError, SassVarsError
from .core.extract import extract, extract_sync
from .core.ir.values import UNDEFINED, ExtractionResult, VariableRecord


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("sassvars")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "ExtractionResult",
    "ExtractorConfig",
    "ParseError",
    "ResolveError",
    "RewriteError",
    "SassVarsError",
    "UNDEFINED",
    "VariableRecord",
    "extract",
    "extract_sync",
    "load_config",
]
