"""Command line interface for gofr-dotenv.

USAGE:
    gofr-dotenv show [--[no-]cascade] [--format text|json] [PATH]
    gofr-dotenv check PATH [PATH ...]
    gofr-dotenv run [--[no-]overload] [--[no-]cascade] [-f PATH] -- COMMAND [ARGS ...]

EXAMPLES:
    # Print the merged values of .env and its overlays for APP_ENV=test
    APP_ENV=test gofr-dotenv show --cascade --format json

    # Validate several files, reporting every malformed line
    gofr-dotenv check .env .env.local .env.prod

    # Run a command with .env loaded (existing variables win)
    gofr-dotenv run -- python manage.py migrate

ENVIRONMENT:
    GOFR_DOTENV_PATH, GOFR_DOTENV_ENV_KEY, GOFR_DOTENV_DEFAULT_ENV,
    GOFR_DOTENV_OVERWRITE, GOFR_DOTENV_CASCADE provide the defaults for the
    matching options. The --no-cascade and --no-overload forms
    turn a default back off.

EXIT CODES:
    0  success (for ``run``: the command's own exit code)
    1  a dotenv file could not be read, parsed or applied
    2  invalid usage or settings
    127  the command for ``run`` was not found
"""

import argparse
import json
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from gofr_dotenv.config import LoaderSettings
from gofr_dotenv.environment import MemoryEnvironment, OsEnvironment
from gofr_dotenv.exceptions import ConfigurationError, DotenvError
from gofr_dotenv.loader import Dotenv
from gofr_dotenv.logger import DEFAULT_LOGGER_NAME, DefaultLogger, Logger, create_logger
from gofr_dotenv.merger import read_optional
from gofr_dotenv.parser import Malformed, tokenize

EXIT_OK = 0
EXIT_DOTENV_ERROR = 1
EXIT_USAGE = 2
EXIT_COMMAND_NOT_FOUND = 127


def _build_logger(verbose: bool, settings: LoaderSettings) -> Logger:
    if verbose:
        return DefaultLogger(name=DEFAULT_LOGGER_NAME, output=sys.stderr)
    return create_logger(level=getattr(logging, settings.log_level), stream=sys.stderr)


def _add_source_options(parser: argparse.ArgumentParser, settings: LoaderSettings) -> None:
    parser.add_argument(
        "--cascade",
        action=argparse.BooleanOptionalAction,
        default=settings.cascade,
        help="Also load PATH.local, PATH.<env> and PATH.<env>.local",
    )
    parser.add_argument(
        "--env-key",
        default=settings.env_key,
        help="Variable selecting the environment for --cascade. Default: %(default)s",
    )
    parser.add_argument(
        "--default-env",
        default=settings.default_env,
        help="Environment used when the selector is unset. Default: %(default)s",
    )


# =============================================================================
# Commands
# =============================================================================


def cmd_show(args: argparse.Namespace, logger: Logger) -> int:
    """Print merged values without modifying the environment."""
    # Merge against a snapshot so nothing leaks into this process
    dotenv = Dotenv(environ=MemoryEnvironment(os.environ), logger=logger)
    if args.cascade:
        values = dotenv.cascade(args.path, args.env_key, args.default_env).values
    else:
        values = dotenv.values(args.path)

    if args.format == "json":
        print(json.dumps(values, indent=2))
    else:
        for key, value in values.items():
            print(f"{key}={json.dumps(value)}")
    return EXIT_OK


def cmd_check(args: argparse.Namespace, logger: Logger) -> int:
    """Report every malformed line in each file."""
    failures = 0
    for path in args.paths:
        text = read_optional(path)
        if text is None:
            print(f"{path}: not found", file=sys.stderr)
            failures += 1
            continue

        problems = [token for token in tokenize(text) if isinstance(token, Malformed)]
        for token in problems:
            print(f"{path}:{token.line}: {token.reason}", file=sys.stderr)
        if problems:
            failures += 1
        else:
            print(f"{path}: ok")
        logger.debug("Checked dotenv file", path=str(path), problems=len(problems))

    return EXIT_DOTENV_ERROR if failures else EXIT_OK


def cmd_run(args: argparse.Namespace, logger: Logger) -> int:
    """Load into this process's environment, then run the command."""
    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        print("Error: no command given", file=sys.stderr)
        return EXIT_USAGE

    dotenv = Dotenv(environ=OsEnvironment(), logger=logger)
    if args.cascade:
        merger = dotenv.cascade(args.path, args.env_key, args.default_env)
        written = dotenv.apply_values(merger.values, overwrite=args.overload)
    elif args.overload:
        written = dotenv.overload(args.path)
    else:
        written = dotenv.load(args.path)
    logger.debug("Running command", command=command[0], variables=len(written))

    try:
        return subprocess.run(command).returncode
    except FileNotFoundError:
        print(f"Error: command not found: {command[0]}", file=sys.stderr)
        return EXIT_COMMAND_NOT_FOUND


# =============================================================================
# Entry point
# =============================================================================


def build_parser(settings: LoaderSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gofr-dotenv",
        description="Load, inspect and validate dotenv files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Defaults come from GOFR_DOTENV_* environment variables.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print diagnostics to stderr",
    )

    subparsers = parser.add_subparsers(dest="command_name", required=True)

    show = subparsers.add_parser("show", help="Print merged values")
    show.add_argument("path", nargs="?", type=Path, default=settings.path)
    show.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format. Default: %(default)s",
    )
    _add_source_options(show, settings)
    show.set_defaults(handler=cmd_show)

    check = subparsers.add_parser("check", help="Validate dotenv files")
    check.add_argument("paths", nargs="+", type=Path)
    check.set_defaults(handler=cmd_check)

    run = subparsers.add_parser("run", help="Run a command with dotenv values loaded")
    run.add_argument("-f", "--file", dest="path", type=Path, default=settings.path)
    run.add_argument(
        "--overload",
        action=argparse.BooleanOptionalAction,
        default=settings.overwrite,
        help="Overwrite variables that are already defined",
    )
    _add_source_options(run, settings)
    run.add_argument("command", nargs=argparse.REMAINDER)
    run.set_defaults(handler=cmd_run)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    try:
        settings = LoaderSettings.from_env()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    parser = build_parser(settings)
    args = parser.parse_args(argv)
    logger = _build_logger(args.verbose, settings)

    try:
        return args.handler(args, logger)
    except DotenvError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        logger.debug("Dotenv failure", code=exc.code, details=exc.details)
        return EXIT_DOTENV_ERROR


if __name__ == "__main__":
    sys.exit(main())
