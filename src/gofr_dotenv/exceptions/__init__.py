"""Exceptions raised by gofr-dotenv.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging

Hierarchy:
    DotenvError
    ├── ConfigurationError
    ├── ParseError
    │   ├── MalformedLineError
    │   └── UnterminatedQuoteError
    ├── LoadError
    │   ├── FileReadError
    │   └── FileParseError
    └── ApplyError

Usage:
    from gofr_dotenv.exceptions import DotenvError, ParseError

    try:
        load(".env")
    except DotenvError as exc:
        print(exc.to_dict())
"""

from gofr_dotenv.exceptions.base import (
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

__all__ = [
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
