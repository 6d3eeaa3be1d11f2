"""
Extractor configuration.

Defaults suit most projects; a project can override them in the
``[tool.sassvars]`` table of its ``pyproject.toml``:

    [tool.sassvars]
    export-function = "export_var"
    nested-declarations = false
    include-paths = ["node_modules"]
    precision = 10
    output-style = "compressed"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from enum import StrEnum
from pathlib import Path
from typing import Any

from sassvars.core.rewriter import DEFAULT_EXPORT_FUNCTION


class OutputStyle(StrEnum):
    """libsass output styles."""

    NESTED = "nested"
    EXPANDED = "expanded"
    COMPACT = "compact"
    COMPRESSED = "compressed"


@dataclass(frozen=True)
class ExtractorConfig:
    """Options for one extraction."""

    export_function: str = DEFAULT_EXPORT_FUNCTION
    nested_declarations: bool = False  # also export variables declared inside blocks
    include_paths: tuple[str, ...] = ()
    precision: int = 5
    output_style: OutputStyle = OutputStyle.NESTED


def config_from_mapping(data: dict[str, Any]) -> ExtractorConfig:
    """Build a config from a ``[tool.sassvars]``-style mapping.

    Keys may use dashes or underscores.

    Raises:
        ValueError: On unknown keys or an unknown output style.
    """
    known = {f.name for f in fields(ExtractorConfig)}
    options = {key.replace("-", "_"): value for key, value in data.items()}
    unknown = sorted(set(options) - known)
    if unknown:
        raise ValueError(f"Unknown sassvars option(s): {', '.join(unknown)}")

    if "include_paths" in options:
        options["include_paths"] = tuple(str(p) for p in options["include_paths"])
    if "output_style" in options:
        options["output_style"] = OutputStyle(options["output_style"])
    return ExtractorConfig(**options)


def load_config(path: Path) -> ExtractorConfig:
    """Load ``[tool.sassvars]`` from a pyproject.toml; defaults if absent."""
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    section = data.get("tool", {}).get("sassvars", {})
    return config_from_mapping(section)
