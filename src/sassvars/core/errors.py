"""
Error types for stylesheet parsing, rewriting, and import resolution.

Render failures raised by the Sass engine itself (``sass.CompileError``)
are not wrapped; they reach the caller unchanged.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class SassVarsError(Exception):
    """Base exception for all sassvars errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(SassVarsError):
    """
    Raised when stylesheet source cannot be tokenized or parsed.

    Examples:
    - Unterminated strings, comments, or interpolations
    - Unbalanced braces, parentheses, or brackets
    - A declaration missing its ':' separator
    """

    pass


class RewriteError(SassVarsError):
    """
    Raised when declarations cannot be wrapped in export calls.

    Examples:
    - An export function name that is not a valid identifier
    - A declaration whose value node is not attached to its parent
    """

    pass


class ResolveError(SassVarsError):
    """
    Raised by the importer when the host resolver yields no file.

    The engine turns this into a render failure.
    """

    pass

@dataclass
class ErrorContext:
    """Source location of an error: ``line`` and ``column`` are 1-indexed."""

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Number the snippet lines and put a marker under the error column."""
        formatted = []
        for line_num, text in enumerate(self.snippet.split("\n"), start=max(1, self.line - 2)):
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + text)
            if line_num == self.line:
                formatted.append(" " * (len(prefix) + self.column - 1) + "^^^")
        return "\n".join(formatted)


def make_snippet(source: str, line: int) -> str:
    """Return up to two lines either side of ``line`` (1-indexed)."""
    lines = source.split("\n")
    start = max(1, line - 2)
    end = min(len(lines), line + 2)
    return "\n".join(lines[start - 1 : end])


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ParseError:
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return ParseError(message, context)
