"""Environment providers.

The loader never touches ``os.environ`` directly. It goes through the narrow
``EnvironmentProvider`` protocol so the merge and apply logic can run against
an in-memory fake in tests.
"""

from __future__ import annotations

import os
from typing import Dict, Iterator, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class EnvironmentProvider(Protocol):
    """Protocol for a process-environment-like store.

    Example:
        class MyEnvironment:
            def get(self, key: str) -> Optional[str]: ...
            def set(self, key: str, value: str) -> None: ...
            def contains(self, key: str) -> bool: ...

        # MyEnvironment is a valid EnvironmentProvider by structural subtyping
        env: EnvironmentProvider = MyEnvironment()
    """

    def get(self, key: str) -> Optional[str]:
        """Return the value of ``key``, or None when it is not defined."""
        ...

    def set(self, key: str, value: str) -> None:
        """Define ``key``, replacing any previous value.

        Raises:
            ValueError: The platform rejects the name or value
            OSError: The platform failed to update the environment
        """
        ...

    def contains(self, key: str) -> bool:
        """Return True if ``key`` is defined (even as an empty string)."""
        ...


class OsEnvironment:
    """Provider backed by the real process environment (``os.environ``)."""

    def get(self, key: str) -> Optional[str]:
        return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value

    def contains(self, key: str) -> bool:
        return key in os.environ

    def __repr__(self) -> str:
        return "OsEnvironment()"


class MemoryEnvironment:
    """Dict-backed provider for tests and dry runs.

    Example:
        env = MemoryEnvironment({"HOME": "/home/app"})
        Dotenv(environ=env).load(".env")
        env.get("DB_USER")
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._vars: Dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str) -> Optional[str]:
        return self._vars.get(key)

    def set(self, key: str, value: str) -> None:
        if "\x00" in key or "\x00" in value:
            raise ValueError("embedded null byte")
        if not key or "=" in key:
            raise ValueError(f"illegal environment variable name: {key!r}")
        self._vars[key] = value

    def contains(self, key: str) -> bool:
        return key in self._vars

    def as_dict(self) -> Dict[str, str]:
        """Return an independent copy of all variables."""
        return self._vars.copy()

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"MemoryEnvironment({len(self._vars)} vars)"


def default_environment(environ: Optional[EnvironmentProvider] = None) -> EnvironmentProvider:
    """Return ``environ`` or, when None, the real process environment."""
    return environ if environ is not None else OsEnvironment()


__all__ = [
    "EnvironmentProvider",
    "OsEnvironment",
    "MemoryEnvironment",
    "default_environment",
]
