"""High-level dotenv loading.

Three entry points, each available as a ``Dotenv`` method and as a
module-level function bound to the real process environment:

    load(path)        merge one file, never overwrite existing variables
    overload(path)    merge one file, overwrite existing variables
    load_env(path, env_key, default_env)
                      merge the environment-specific cascade:

        .env                  committed defaults
        .env.local            uncommitted local overrides
        .env.{APP_ENV}        committed environment-specific defaults
        .env.{APP_ENV}.local  uncommitted environment-specific overrides

      later files taking precedence over earlier ones.

Example:
    from gofr_dotenv import load_env

    load_env(".env", "APP_ENV", "dev")
    db_user = os.environ["DB_USER"]
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from gofr_dotenv.applicator import apply
from gofr_dotenv.environment import EnvironmentProvider, default_environment
from gofr_dotenv.exceptions import ConfigurationError
from gofr_dotenv.logger import Logger, get_logger
from gofr_dotenv.merger import Merger

PathLike = Union[str, Path]

DEFAULT_PATH = ".env"
DEFAULT_ENV_KEY = "APP_ENV"
DEFAULT_ENV = "dev"
# Selecting this environment stops the cascade after the base files
LOCAL_ENV = "local"


def is_plain_suffix(env: str) -> bool:
    """True if ``env`` can be appended to a file name without leaving its directory."""
    return bool(env) and not env.startswith(".") and not any(sep in env for sep in "/\\\x00")


def local_path(path: PathLike) -> str:
    return f"{path}.local"


def env_paths(path: PathLike, env: str) -> List[str]:
    """Environment-specific overlay files for ``env``, lowest precedence first."""
    return [f"{path}.{env}", f"{path}.{env}.local"]


def candidate_paths(path: PathLike, env: str) -> List[str]:
    """All four cascade files for ``env``, lowest precedence first."""
    return [str(path), local_path(path)] + env_paths(path, env)


class Dotenv:
    """Loader bound to an environment provider and a logger.

    Args:
        environ: Target environment (defaults to the process environment)
        logger: Logger for diagnostics (defaults to ``get_logger()``)
    """

    def __init__(
        self,
        environ: Optional[EnvironmentProvider] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self.environ = default_environment(environ)
        self.logger = logger or get_logger()

    def _merger(self) -> Merger:
        return Merger(self.environ, self.logger)

    def apply_values(self, merged: Dict[str, str], overwrite: bool) -> List[str]:
        written = apply(merged, overwrite=overwrite, environ=self.environ)
        self.logger.debug(
            "Applied dotenv values",
            written=len(written),
            skipped=len(merged) - len(written),
            overwrite=overwrite,
        )
        return written

    def values(self, path: PathLike = DEFAULT_PATH) -> Dict[str, str]:
        """Merge one file and return its values without applying them."""
        return self._merger().merge_files([path])

    def load(self, path: PathLike = DEFAULT_PATH) -> List[str]:
        """Load ``path`` without overwriting existing variables.

        Returns:
            The keys that were set

        Raises:
            FileReadError, FileParseError, ApplyError
        """
        return self.apply_values(self.values(path), overwrite=False)

    def overload(self, path: PathLike = DEFAULT_PATH) -> List[str]:
        """Load ``path``, overwriting existing variables.

        Returns:
            The keys that were set

        Raises:
            FileReadError, FileParseError, ApplyError
        """
        return self.apply_values(self.values(path), overwrite=True)

    def resolve_env(
        self,
        env_key: str = DEFAULT_ENV_KEY,
        default_env: str = DEFAULT_ENV,
        merged: Optional[Merger] = None,
    ) -> str:
        """Pick the environment name.

        The process environment wins, then a value defined by the base files
        already merged into ``merged``, then ``default_env``.

        Raises:
            ConfigurationError: The name is empty, starts with a dot or
                contains a path separator
        """
        env = self.environ.get(env_key)
        if env is None and merged is not None:
            env = merged.get(env_key)
        if env is None:
            env = default_env

        if not is_plain_suffix(env):
            raise ConfigurationError(
                "INVALID_ENVIRONMENT",
                f"{env_key} must name a plain file suffix, got {env!r}",
                {"env_key": env_key, "env": env},
            )
        return env

    def cascade(
        self,
        path: PathLike = DEFAULT_PATH,
        env_key: str = DEFAULT_ENV_KEY,
        default_env: str = DEFAULT_ENV,
    ) -> Merger:
        """Merge the environment-specific cascade without applying it."""
        merger = self._merger()
        merger.merge_files([path, local_path(path)])

        env = self.resolve_env(env_key, default_env, merger)
        self.logger.debug("Resolved dotenv environment", env_key=env_key, env=env)

        if env != LOCAL_ENV:
            merger.merge_files(env_paths(path, env))
        return merger

    def load_env(
        self,
        path: PathLike = DEFAULT_PATH,
        env_key: str = DEFAULT_ENV_KEY,
        default_env: str = DEFAULT_ENV,
    ) -> List[str]:
        """Load the environment-specific cascade without overwriting.

        Returns:
            The keys that were set

        Raises:
            FileReadError, FileParseError, ApplyError
        """
        merger = self.cascade(path, env_key, default_env)
        return self.apply_values(merger.values, overwrite=False)


def load(path: PathLike = DEFAULT_PATH) -> List[str]:
    """Load ``path`` into ``os.environ`` without overwriting."""
    return Dotenv().load(path)


def overload(path: PathLike = DEFAULT_PATH) -> List[str]:
    """Load ``path`` into ``os.environ``, overwriting existing variables."""
    return Dotenv().overload(path)


def load_env(
    path: PathLike = DEFAULT_PATH,
    env_key: str = DEFAULT_ENV_KEY,
    default_env: str = DEFAULT_ENV,
) -> List[str]:
    """Load the environment-specific cascade into ``os.environ``."""
    return Dotenv().load_env(path, env_key, default_env)


def dotenv_values(path: PathLike = DEFAULT_PATH) -> Dict[str, str]:
    """Return the expanded values of ``path`` without touching ``os.environ``."""
    return Dotenv().values(path)


__all__ = [
    "DEFAULT_PATH",
    "DEFAULT_ENV_KEY",
    "DEFAULT_ENV",
    "LOCAL_ENV",
    "Dotenv",
    "is_plain_suffix",
    "candidate_paths",
    "env_paths",
    "local_path",
    "load",
    "overload",
    "load_env",
    "dotenv_values",
]
