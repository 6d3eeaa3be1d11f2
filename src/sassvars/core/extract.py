"""
Extract resolved variable values from an SCSS stylesheet.

Pipeline:
    1. parse the source
    2. wrap each variable declaration in an export hook call
    3. print the rewritten tree back to source
    4. render it with libsass, capturing the hook's arguments
    5. convert captured values to plain data

Usage:
    from sassvars import extract_sync

    result = extract_sync("/app/styles/theme.scss", resolve, source)
    result.variables     # (VariableRecord("primary", "rgb(255, 0, 0)"), ...)
    result.dependencies  # ("/app/styles/_colors.scss", ...)
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any

import sass

from sassvars.core.config import ExtractorConfig
from sassvars.core.converter import convert_value
from sassvars.core.engine import render
from sassvars.core.importer import Resolver, make_importer
from sassvars.core.ir.values import UNDEFINED, ExtractionResult, VariableRecord
from sassvars.core.rewriter import rewrite_declarations
from sassvars.core.scss_lang import parse, stringify

logger = logging.getLogger(__name__)


class VariableCollector:
    """Export hook state for one extraction.

    ``export`` is registered with libsass; each call records the converted
    ``(name, value)`` pair and hands the value back unchanged.
    """

    def __init__(self) -> None:
        self.records: list[VariableRecord] = []

    def export(self, name: Any, value: Any) -> Any:
        converted_name = convert_value(name)
        converted_value = convert_value(value)
        if converted_name is not UNDEFINED or converted_value is not UNDEFINED:
            self.records.append(VariableRecord(converted_name, converted_value))
        return value

    def as_sass_function(self, function_name: str) -> sass.SassFunction:
        return sass.SassFunction(function_name, ("$name", "$value"), self.export)


async def extract(
    entry_path: str | os.PathLike[str],
    resolve: Resolver,
    source: str,
    *,
    config: ExtractorConfig | None = None,
) -> ExtractionResult:
    """Extract every top-level variable of ``source`` with its resolved value.

    Args:
        entry_path: Path of the stylesheet; imports in ``source`` resolve
            relative to its directory.
        resolve: Host resolver ``(directory, request) -> path``, plain or async.
        source: Stylesheet text.
        config: Extraction options; defaults when omitted.

    Returns:
        Captured variables in evaluation order and the resolved import paths.

    Raises:
        ParseError: If ``source`` is malformed.
        RewriteError: If declarations cannot be rewritten.
        sass.CompileError: If rendering fails, including failed imports.
    """
    config = config or ExtractorConfig()

    tree = parse(source, file=Path(entry_path))
    rewrite_declarations(
        tree,
        export_function=config.export_function,
        nested=config.nested_declarations,
    )
    rewritten = stringify(tree)

    importer = make_importer(entry_path, resolve, loop=asyncio.get_running_loop())
    collector = VariableCollector()

    if rewritten.strip():
        # libsass blocks and calls the importer synchronously
        await asyncio.to_thread(
            render,
            rewritten,
            importer=importer,
            functions=[collector.as_sass_function(config.export_function)],
            config=config,
        )
    else:
        logger.debug("Nothing to render for %s", entry_path)

    logger.debug(
        "Extracted %d variables and %d dependencies from %s",
        len(collector.records),
        len(importer.dependencies),
        entry_path,
    )
    return ExtractionResult(
        variables=tuple(collector.records),
        dependencies=tuple(importer.dependencies),
    )


def extract_sync(
    entry_path: str | os.PathLike[str],
    resolve: Resolver,
    source: str,
    *,
    config: ExtractorConfig | None = None,
) -> ExtractionResult:
    """Blocking wrapper around ``extract`` for callers without an event loop."""
    return asyncio.run(extract(entry_path, resolve, source, config=config))
