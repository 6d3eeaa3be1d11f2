"""Shared pytest fixtures for sassvars tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


def _resolve_in(directory: str, request: str) -> str:
    """Resolve ``./name`` to ``name.scss`` or ``_name.scss`` under ``directory``."""
    target = Path(directory) / request
    candidates = [
        target,
        target.with_name(target.name + ".scss"),
        target.with_name("_" + target.name + ".scss"),
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    raise FileNotFoundError(f"Cannot resolve {request!r} in {directory}")


@pytest.fixture
def resolver() -> Callable[[str, str], str]:
    """Synchronous filesystem resolver."""
    return _resolve_in


@pytest.fixture
def async_resolver() -> Callable[[str, str], object]:
    """Coroutine resolver with the same lookup rules."""

    async def resolve(directory: str, request: str) -> str:
        return _resolve_in(directory, request)

    return resolve


@pytest.fixture
def write_scss(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a stylesheet under tmp_path and return its path."""

    def write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write
