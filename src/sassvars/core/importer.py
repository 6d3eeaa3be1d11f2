"""
Adapt a host path resolver into a libsass importer.

The host resolver has the signature ``resolve(directory, request) -> path``
and may be a plain function or a coroutine function. Every path it
returns is recorded as a dependency of the extraction.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import os
import re
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeAlias

from sassvars.core.engine import ENTRY_SOURCE
from sassvars.core.errors import ResolveError

logger = logging.getLogger(__name__)

Resolver: TypeAlias = Callable[[str, str], "str | os.PathLike[str] | Awaitable[str | os.PathLike[str]]"]

_WINDOWS_PATH_RE = re.compile(r"^[a-zA-Z]:[\\/]|^\\\\")


def url_to_request(url: str) -> str:
    """Normalize an ``@import`` URL into a resolver request.

    ``~pkg/file`` is a module request (``pkg/file``); relative and
    absolute paths are kept; bare names become ``./name``.
    """
    if not url:
        return ""
    if url.startswith("~"):
        return url[1:]
    if _WINDOWS_PATH_RE.match(url) or url.startswith("/"):
        return url
    if url.startswith(("./", "../")):
        return url
    return f"./{url}"


class ImportResolver:
    """libsass importer bound to one extraction.

    Attributes:
        base_path: Path of the entry stylesheet.
        dependencies: Resolved file paths, in resolution order.
    """

    def __init__(
        self,
        base_path: str | os.PathLike[str],
        resolve: Resolver,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.base_path = Path(base_path)
        self.resolve = resolve
        self.loop = loop
        self.dependencies: list[str] = []

    def directory_for(self, prev: str) -> str:
        """Directory an import found in ``prev`` resolves against."""
        importing_file = self.base_path if prev == ENTRY_SOURCE else Path(prev)
        return str(importing_file.parent)

    def __call__(self, url: str, prev: str) -> list[tuple[str]]:
        directory = self.directory_for(prev)
        request = url_to_request(url)
        resolved = self._await(self.resolve(directory, request))
        if not resolved:
            raise ResolveError(f"Resolver returned no file for {url!r} in {directory}")

        path = os.fspath(resolved)
        self.dependencies.append(path)
        logger.debug("Resolved import %r from %s to %s", url, directory, path)
        return [(path,)]

    def _await(self, result: Any) -> Any:
        if not inspect.isawaitable(result):
            return result
        if self.loop is None:
            if inspect.iscoroutine(result):
                result.close()
            raise ResolveError("An async resolver needs an event loop to run on")
        # libsass calls importers from the render thread; hand the
        # coroutine back to the caller's loop and block until it finishes.
        future = asyncio.run_coroutine_threadsafe(_as_coroutine(result), self.loop)
        return future.result()


async def _as_coroutine(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def make_importer(
    base_path: str | os.PathLike[str],
    resolve: Resolver,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> ImportResolver:
    """Create an importer resolving relative to ``base_path`` for entry imports."""
    return ImportResolver(base_path, resolve, loop=loop)
