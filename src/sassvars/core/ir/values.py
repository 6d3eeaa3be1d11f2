"""
Plain, engine-independent value types.

A resolved Sass value is converted to one of ``bool``, ``int``/``float``,
``str``, ``None``, ``list`` or ``dict``. Values with no plain counterpart
convert to ``UNDEFINED``, which is distinct from ``None`` (Sass ``null``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, TypeAlias


class Undefined(Enum):
    """Marker for a value that has no plain representation."""

    UNDEFINED = "undefined"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = Undefined.UNDEFINED

PlainValue: TypeAlias = "bool | int | float | str | None | list[PlainValue] | dict[Any, PlainValue]"


class VariableRecord(NamedTuple):
    """One captured ``(name, value)`` pair, in evaluation order."""

    name: Any
    value: Any


@dataclass(frozen=True)
class ExtractionResult:
    """Variables and import dependencies captured by one extraction."""

    variables: tuple[VariableRecord, ...] = ()
    dependencies: tuple[str, ...] = ()

    def as_dict(self) -> dict[Any, Any]:
        """Collapse records into a mapping; later redeclarations win.

        Records whose name is ``UNDEFINED`` are dropped.
        """
        collapsed: dict[Any, Any] = {}
        for name, value in self.variables:
            if name is UNDEFINED:
                continue
            collapsed[name] = value
        return collapsed
