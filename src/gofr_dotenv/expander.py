"""Variable expansion for parsed values.

Recognized forms:
    ${NAME}            value of NAME
    $NAME              value of NAME
    ${NAME:-default}   value of NAME, or ``default`` when NAME is unset or empty
    \\$                a literal dollar sign
    \\\\               a literal backslash, so ``\\\\$HOME`` is a backslash then HOME

Names resolve against the scope of values merged so far, then against the
process environment, then to the empty string. Expansion is a single pass:
substituted text is never scanned again, so ``A=$B`` with ``B=$A`` cannot loop.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

from gofr_dotenv.environment import EnvironmentProvider, default_environment
from gofr_dotenv.parser import NAME_PATTERN

_REFERENCE = re.compile(
    rf"""
    (?P<backslash>\\\\)
    | (?P<escaped>\\\$)
    | \$\{{(?P<braced>{NAME_PATTERN})(?::-(?P<default>[^}}]*))?\}}
    | \$(?P<bare>{NAME_PATTERN})
    """,
    re.VERBOSE,
)


def lookup(
    name: str, scope: Mapping[str, str], environ: Optional[EnvironmentProvider] = None
) -> Optional[str]:
    """Resolve ``name`` in ``scope`` first, then in the environment."""
    if name in scope:
        return scope[name]
    return default_environment(environ).get(name)


def expand(
    value: str, scope: Mapping[str, str], environ: Optional[EnvironmentProvider] = None
) -> str:
    """Substitute variable references in ``value``.

    Args:
        value: Raw value as produced by the parser
        scope: Variables accumulated so far in the current merge
        environ: Fallback environment (defaults to the process environment)

    Returns:
        The expanded value. Undefined names expand to ``""``.
    """
    if "$" not in value and "\\\\" not in value:
        return value

    environment = default_environment(environ)

    def substitute(match: re.Match[str]) -> str:
        if match.group("backslash"):
            return "\\"
        if match.group("escaped"):
            return "$"
        name = match.group("braced") or match.group("bare")
        resolved = lookup(name, scope, environment)
        default = match.group("default")
        if default is not None and not resolved:
            return default
        return resolved or ""

    return _REFERENCE.sub(substitute, value)


__all__ = ["expand", "lookup"]
