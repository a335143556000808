"""gofr-dotenv - dotenv file loading for GOFR projects.

This package provides:
- parser: tokenizer for ``[export ]KEY=VALUE`` files with quoting and comments
- expander: single-pass ``${VAR}`` / ``$VAR`` substitution
- merger: precedence merging of a base file and its optional overlays
- applicator: load (keep existing) or overload (replace) semantics
- loader: ``load``, ``overload`` and ``load_env`` entry points
- exceptions: structured error classes
- logger: session-tracked text/JSON logging

Example:
    from gofr_dotenv import load_env

    load_env(".env", "APP_ENV", "dev")
"""

__version__ = "1.0.0"

from gofr_dotenv.applicator import apply
from gofr_dotenv.environment import (
    EnvironmentProvider,
    MemoryEnvironment,
    OsEnvironment,
)
from gofr_dotenv.exceptions import (
    ApplyError,
    ConfigurationError,
    DotenvError,
    FileParseError,
    FileReadError,
    LoadError,
    MalformedLineError,
    ParseError,
    UnterminatedQuoteError,
)
from gofr_dotenv.expander import expand
from gofr_dotenv.loader import (
    Dotenv,
    candidate_paths,
    dotenv_values,
    load,
    load_env,
    overload,
)
from gofr_dotenv.logger import Logger, create_logger, get_logger
from gofr_dotenv.merger import Merger, merge
from gofr_dotenv.parser import Assignment, ParsedFile, parse, tokenize

__all__ = [
    "__version__",
    # Loading
    "Dotenv",
    "load",
    "overload",
    "load_env",
    "dotenv_values",
    "candidate_paths",
    # Core
    "parse",
    "tokenize",
    "Assignment",
    "ParsedFile",
    "expand",
    "merge",
    "Merger",
    "apply",
    # Environment
    "EnvironmentProvider",
    "OsEnvironment",
    "MemoryEnvironment",
    # Logger
    "Logger",
    "create_logger",
    "get_logger",
    # Exceptions
    "DotenvError",
    "ConfigurationError",
    "ParseError",
    "MalformedLineError",
    "UnterminatedQuoteError",
    "LoadError",
    "FileReadError",
    "FileParseError",
    "ApplyError",
]
