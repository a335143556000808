"""Writes merged values into the environment.

With ``overwrite=False`` ("load" semantics) variables that are already
defined keep their value. With ``overwrite=True`` ("overload") every value
is written. Application is not transactional: when setting a variable
fails, the variables written before it stay written.
"""

from __future__ import annotations

from typing import List, Mapping, Optional

from gofr_dotenv.environment import EnvironmentProvider, default_environment
from gofr_dotenv.exceptions import ApplyError


def apply(
    merged: Mapping[str, str],
    overwrite: bool = False,
    environ: Optional[EnvironmentProvider] = None,
) -> List[str]:
    """Apply ``merged`` to the environment.

    Args:
        merged: Final key/value mapping
        overwrite: Replace variables that are already defined
        environ: Target environment (defaults to the process environment)

    Returns:
        Keys that were actually written, in mapping order

    Raises:
        ApplyError: The platform refused to set a variable
    """
    environment = default_environment(environ)
    written: List[str] = []

    for key, value in merged.items():
        if not overwrite and environment.contains(key):
            continue
        try:
            environment.set(key, value)
        except (OSError, ValueError) as exc:
            raise ApplyError(key, exc) from exc
        written.append(key)

    return written


__all__ = ["apply"]
