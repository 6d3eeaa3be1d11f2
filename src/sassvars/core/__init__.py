"""Core sassvars functionality: syntax tree, rewriting, value conversion, extraction."""

from . import ir
from .cleaner import clean, clean_all
from .config import ExtractorConfig, OutputStyle, config_from_mapping, load_config
from .converter import convert_value
from .errors import ErrorContext, ParseError, ResolveError, RewriteError, SassVarsError
from .extract import VariableCollector, extract, extract_sync
from .importer import ImportResolver, make_importer, url_to_request
from .rewriter import rewrite_declarations

__all__ = [
    "ir",
    # Errors
    "ErrorContext",
    "ParseError",
    "ResolveError",
    "RewriteError",
    "SassVarsError",
    # Config
    "ExtractorConfig",
    "OutputStyle",
    "config_from_mapping",
    "load_config",
    # Pipeline
    "ImportResolver",
    "VariableCollector",
    "clean",
    "clean_all",
    "convert_value",
    "extract",
    "extract_sync",
    "make_importer",
    "rewrite_declarations",
    "url_to_request",
]
