"""Thin wrapper around the libsass compiler."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import sass

from sassvars.core.config import ExtractorConfig

logger = logging.getLogger(__name__)

# ``prev`` value libsass passes to importers for imports in the entry source
ENTRY_SOURCE = "stdin"


def render(
    source: str,
    *,
    importer: Callable[[str, str], list[tuple[str]]],
    functions: Sequence[sass.SassFunction],
    config: ExtractorConfig,
) -> str:
    """Compile SCSS source, invoking ``importer`` and ``functions`` along the way.

    Returns:
        The compiled CSS.

    Raises:
        sass.CompileError: On any evaluation or import failure.
    """
    logger.debug("Rendering %d characters of SCSS", len(source))
    css = sass.compile(
        string=source,
        importers=[(0, importer)],
        custom_functions=list(functions),
        include_paths=list(config.include_paths),
        precision=config.precision,
        output_style=str(config.output_style),
    )
    logger.debug("Render finished")
    return css
