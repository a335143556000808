"""Lexer and parser for dotenv documents.

The lexer turns raw text into a stream of tagged tokens, one per logical
line::

    Blank        empty or whitespace-only line
    Comment      line whose first non-blank character is ``#``
    Assignment   ``[export ]KEY=VALUE``
    Malformed    anything else, including unterminated quotes

``parse`` consumes that stream and raises on the first ``Malformed`` token;
``tokenize`` keeps going so that a checker can report every bad line.

Value syntax:
    FOO=  bar baz        unquoted, runs to end of line or an unescaped ``#``;
                         leading whitespace is kept, trailing is trimmed
    FOO="a\\nb"          double quoted, ``\\n \\t \\r \\"`` are decoded
    FOO=" \\\\ "         kept as ``\\\\`` for the expander, which decodes it along
                         with ``\\$``; decoded here when not interpolated
    FOO='$literal'       single quoted, no escapes and no expansion
    FOO='it'\\''s'       quoted segments concatenate shell-style

No expansion happens here; see ``gofr_dotenv.expander``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from gofr_dotenv.exceptions import MalformedLineError, UnterminatedQuoteError

NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

_DECLARATION = re.compile(
    rf"[ \t]*(?P<export>export[ \t]+)?(?P<key>{NAME_PATTERN})[ \t]*="
)
_BARE_NAME = re.compile(rf"[ \t]*(?P<export>export[ \t]+)?{NAME_PATTERN}[ \t]*(?:#.*)?$")

_DOUBLE_QUOTE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}
_UNQUOTED_ESCAPES = frozenset("#\"'")
_QUOTES = frozenset("\"'")
_INLINE_SPACE = frozenset(" \t")


# =============================================================================
# Tokens
# =============================================================================


@dataclass(frozen=True)
class Blank:
    line: int


@dataclass(frozen=True)
class Comment:
    line: int
    text: str


@dataclass(frozen=True)
class Assignment:
    """One ``KEY=VALUE`` declaration.

    Attributes:
        key: Variable name
        value: Value with quotes stripped and quote escapes decoded, not expanded
        line: 1-based line on which the declaration starts
        interpolate: False for single-quoted values, which are never expanded
    """

    key: str
    value: str
    line: int
    interpolate: bool = True


@dataclass(frozen=True)
class Malformed:
    line: int
    reason: str
    unterminated: bool = False


Token = Union[Blank, Comment, Assignment, Malformed]


@dataclass(frozen=True)
class ParsedFile:
    """Assignments of one document, in file order."""

    assignments: tuple[Assignment, ...]
    path: Optional[str] = None

    def __iter__(self) -> Iterator[Assignment]:
        return iter(self.assignments)

    def __len__(self) -> int:
        return len(self.assignments)

    def values(self) -> dict[str, str]:
        """Map each key to its last assigned raw value."""
        return {assignment.key: assignment.value for assignment in self.assignments}


# =============================================================================
# Lexer
# =============================================================================


class _LexFailure(Exception):
    def __init__(self, reason: str, line: int, unterminated: bool = False):
        super().__init__(reason)
        self.reason = reason
        self.line = line
        self.unterminated = unterminated


def normalize(text: str) -> str:
    """Strip a UTF-8 BOM and convert CRLF / CR line endings to LF."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")


class Lexer:
    """Cursor over a normalized document producing one token per logical line."""

    def __init__(self, text: str):
        self.text = normalize(text)
        self.pos = 0
        self.line = 1

    def tokens(self) -> Iterator[Token]:
        while self.pos < len(self.text):
            yield self._next_token()

    # -- cursor helpers -------------------------------------------------------

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _advance(self) -> str:
        char = self.text[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
        return char

    def _line_end(self) -> int:
        end = self.text.find("\n", self.pos)
        return len(self.text) if end == -1 else end

    def _skip_line(self) -> None:
        end = self._line_end()
        self.pos = end
        if self.pos < len(self.text):
            self._advance()

    def _skip_inline_space(self) -> None:
        while self._peek() in _INLINE_SPACE:
            self.pos += 1

    # -- tokens ---------------------------------------------------------------

    def _next_token(self) -> Token:
        start_line = self.line
        content = self.text[self.pos:self._line_end()].strip()

        if not content:
            self._skip_line()
            return Blank(start_line)

        if content.startswith("#"):
            self._skip_line()
            return Comment(start_line, content[1:].strip())

        match = _DECLARATION.match(self.text, self.pos)
        if match is None:
            reason = self._diagnose(self.text[self.pos:self._line_end()])
            self._skip_line()
            return Malformed(start_line, reason)

        self.pos = match.end()
        try:
            value, interpolate = self._lex_value()
        except _LexFailure as failure:
            if failure.unterminated:
                self.pos = len(self.text)
            else:
                self._skip_line()
            return Malformed(failure.line, failure.reason, failure.unterminated)

        return Assignment(match.group("key"), value, start_line, interpolate)

    @staticmethod
    def _diagnose(raw_line: str) -> str:
        bare = _BARE_NAME.match(raw_line)
        if bare is not None:
            if bare.group("export"):
                return "Unable to unset an environment variable"
            return "Missing = in the environment variable declaration"
        return "Invalid character in variable name"

    def _lex_value(self) -> tuple[str, bool]:
        value_start = self.pos
        self._skip_inline_space()
        first = self._peek()

        if first in ("", "\n"):
            self._finish_line()
            return "", True

        interpolate = first != "'"
        if first in _QUOTES:
            value = self._lex_segments(interpolate)
        else:
            # Leading whitespace belongs to an unquoted value
            self.pos = value_start
            value = self._lex_unquoted()

        self._finish_line()
        return value, interpolate

    def _finish_line(self) -> None:
        """Allow only trailing whitespace and a comment after a value."""
        self._skip_inline_space()
        char = self._peek()
        if char == "#":
            self._skip_line()
        elif char == "\n":
            self._advance()
        elif char:
            raise _LexFailure("Unexpected characters after the value", self.line)

    def _lex_segments(self, interpolate: bool) -> str:
        parts = []
        while True:
            char = self._peek()
            if char == "'":
                parts.append(self._lex_single_quoted())
            elif char == '"':
                parts.append(self._lex_double_quoted(interpolate))
            elif char in ("", "\n", "#") or char in _INLINE_SPACE:
                return "".join(parts)
            else:
                parts.append(self._lex_bare_segment())

    def _lex_single_quoted(self) -> str:
        opening_line = self.line
        self.pos += 1
        end = self.text.find("'", self.pos)
        if end == -1:
            raise _LexFailure("Missing quote to end the value", opening_line, unterminated=True)
        value = self.text[self.pos:end]
        self.line += value.count("\n")
        self.pos = end + 1
        return value

    def _lex_double_quoted(self, interpolate: bool) -> str:
        opening_line = self.line
        self.pos += 1
        chars = []
        while True:
            char = self._peek()
            if not char:
                raise _LexFailure("Missing quote to end the value", opening_line, unterminated=True)
            self._advance()
            if char == '"':
                return "".join(chars)
            if char == "\\" and self._peek():
                escaped = self._advance()
                if escaped == "\\" and interpolate:
                    # The expander decodes \\ together with \$
                    chars.append("\\\\")
                else:
                    # Unknown escapes stay verbatim so that \$ reaches the expander
                    chars.append(_DOUBLE_QUOTE_ESCAPES.get(escaped, "\\" + escaped))
            else:
                chars.append(char)

    def _lex_bare_segment(self) -> str:
        """Unquoted text between quoted segments, up to whitespace or a quote."""
        chars = []
        while True:
            char = self._peek()
            if char in ("", "\n", "#") or char in _INLINE_SPACE or char in _QUOTES:
                return "".join(chars)
            chars.append(self._lex_unquoted_char())

    def _lex_unquoted(self) -> str:
        chars = []
        while True:
            char = self._peek()
            if char in ("", "\n", "#"):
                return "".join(chars).rstrip(" \t")
            chars.append(self._lex_unquoted_char())

    def _lex_unquoted_char(self) -> str:
        char = self._advance()
        if char != "\\":
            return char
        following = self._peek()
        if following in _UNQUOTED_ESCAPES:
            self.pos += 1
            return following
        if following and following != "\n":
            self.pos += 1
            return "\\" + following
        return char


# =============================================================================
# Public API
# =============================================================================


def tokenize(text: str) -> Iterator[Token]:
    """Yield one token per logical line of ``text``.

    Malformed lines are reported as ``Malformed`` tokens and lexing resumes
    on the next line. An unterminated quote consumes the rest of the input.
    """
    return Lexer(text).tokens()


def parse(text: str, path: Optional[str] = None) -> ParsedFile:
    """Parse a dotenv document into its assignments.

    Args:
        text: Document contents
        path: Source path, used only in error messages

    Returns:
        ParsedFile with assignments in file order, not yet expanded

    Raises:
        MalformedLineError: A line is not blank, a comment or an assignment
        UnterminatedQuoteError: A quoted value is never closed
    """
    assignments = []
    for token in tokenize(text):
        if isinstance(token, Malformed):
            if token.unterminated:
                raise UnterminatedQuoteError(token.line, path=path)
            raise MalformedLineError(token.line, token.reason, path=path)
        if isinstance(token, Assignment):
            assignments.append(token)
    return ParsedFile(tuple(assignments), path)


__all__ = [
    "NAME_PATTERN",
    "Blank",
    "Comment",
    "Assignment",
    "Malformed",
    "Token",
    "ParsedFile",
    "Lexer",
    "normalize",
    "tokenize",
    "parse",
]
