"""Precedence merging of several dotenv files.

Files are merged strictly in the order given; later files win. A file that
does not exist contributes nothing. Each assignment is expanded against the
values merged so far (including earlier lines of the same file) with the
process environment as fallback, then stored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from gofr_dotenv.environment import EnvironmentProvider, default_environment
from gofr_dotenv.exceptions import FileParseError, FileReadError, ParseError
from gofr_dotenv.expander import expand
from gofr_dotenv.logger import Logger
from gofr_dotenv.parser import ParsedFile, parse

PathLike = Union[str, Path]


def read_optional(path: PathLike) -> Optional[str]:
    """Read a dotenv file as UTF-8 text.

    Returns:
        The file contents, or None if the file does not exist

    Raises:
        FileReadError: The file exists but cannot be read or decoded
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        return None
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(str(path), exc) from exc


class Merger:
    """Accumulates expanded values across files in precedence order.

    Example:
        merger = Merger()
        merger.merge_file(".env")
        merger.merge_file(".env.local")
        merger.values  # {"DB_HOST": "localhost", ...}
    """

    def __init__(
        self,
        environ: Optional[EnvironmentProvider] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._environ = default_environment(environ)
        self._logger = logger
        self._values: Dict[str, str] = {}
        self.loaded_paths: List[Path] = []

    @property
    def values(self) -> Dict[str, str]:
        """Copy of the merged mapping, in first-definition order."""
        return dict(self._values)

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def merge_parsed(self, parsed: ParsedFile) -> None:
        """Expand and fold the assignments of one parsed document."""
        for assignment in parsed:
            value = assignment.value
            if assignment.interpolate:
                value = expand(value, self._values, self._environ)
            self._values[assignment.key] = value

    def merge_file(self, path: PathLike) -> bool:
        """Merge one file if it exists.

        Returns:
            True if the file was found and merged, False if it was missing

        Raises:
            FileReadError: The file exists but is unreadable
            FileParseError: The file contents are not valid dotenv syntax
        """
        text = read_optional(path)
        if text is None:
            if self._logger:
                self._logger.debug("Skipping missing dotenv file", path=str(path))
            return False

        try:
            parsed = parse(text, str(path))
        except ParseError as exc:
            raise FileParseError(str(path), exc) from exc

        self.merge_parsed(parsed)
        self.loaded_paths.append(Path(path))
        if self._logger:
            self._logger.debug("Merged dotenv file", path=str(path), keys=len(parsed))
        return True

    def merge_files(self, paths: Iterable[PathLike]) -> Dict[str, str]:
        for path in paths:
            self.merge_file(path)
        return self.values


def merge(
    paths: Iterable[PathLike],
    environ: Optional[EnvironmentProvider] = None,
    logger: Optional[Logger] = None,
) -> Dict[str, str]:
    """Merge ``paths`` in order (later files win) into one mapping.

    Missing files are skipped. Nothing is written to the environment.
    """
    return Merger(environ, logger).merge_files(paths)


__all__ = ["Merger", "merge", "read_optional"]
