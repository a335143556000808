"""Tests for the high-level load / overload / load_env operations."""

import os
from pathlib import Path
from typing import List
from unittest.mock import patch

import pytest

import gofr_dotenv
from gofr_dotenv.environment import MemoryEnvironment
from gofr_dotenv.exceptions import ApplyError, ConfigurationError, FileParseError
from gofr_dotenv.loader import (
    Dotenv,
    candidate_paths,
    dotenv_values,
    env_paths,
    is_plain_suffix,
    load,
    load_env,
    local_path,
    overload,
)


def write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text)
    return path


@pytest.fixture
def environ():
    return MemoryEnvironment({"HOME": "/home/app"})


@pytest.fixture
def dotenv(environ):
    return Dotenv(environ=environ)


class TestCandidatePaths:
    """Tests for cascade path construction."""

    def test_candidate_paths_order(self):
        assert candidate_paths(".env", "dev") == [
            ".env",
            ".env.local",
            ".env.dev",
            ".env.dev.local",
        ]

    def test_accepts_path_objects(self):
        assert local_path(Path("config") / ".env") == str(Path("config") / ".env") + ".local"

    def test_env_paths(self):
        assert env_paths(".env", "prod") == [".env.prod", ".env.prod.local"]

    @pytest.mark.parametrize("env", ["dev", "prod-eu", "v1.2", "local"])
    def test_plain_suffixes(self, env):
        assert is_plain_suffix(env)

    @pytest.mark.parametrize("env", ["", ".hidden", "../x", "a/b", "a\\b", "nul\x00"])
    def test_unsafe_suffixes(self, env):
        assert not is_plain_suffix(env)


class TestLoad:
    """Tests for load semantics."""

    def test_load_sets_variables(self, tmp_path: Path, dotenv, environ):
        env_file = write(tmp_path, ".env", "DB_USER=root\nDB_PASS=pass\n")

        written = dotenv.load(env_file)

        assert written == ["DB_USER", "DB_PASS"]
        assert environ.get("DB_USER") == "root"
        assert environ.get("DB_PASS") == "pass"

    def test_load_does_not_overwrite(self, tmp_path: Path, environ, dotenv):
        """An existing variable wins under load."""
        environ.set("X", "preexisting")
        env_file = write(tmp_path, ".env", "X=new\n")

        dotenv.load(env_file)

        assert environ.get("X") == "preexisting"

    def test_overload_overwrites(self, tmp_path: Path, environ, dotenv):
        environ.set("X", "preexisting")
        env_file = write(tmp_path, ".env", "X=new\n")

        dotenv.overload(env_file)

        assert environ.get("X") == "new"

    def test_load_is_idempotent(self, tmp_path: Path, environ, dotenv):
        env_file = write(tmp_path, ".env", "A=1\nB=${A}2\n")

        dotenv.load(env_file)
        snapshot = environ.as_dict()
        written = dotenv.load(env_file)

        assert written == []
        assert environ.as_dict() == snapshot

    def test_load_missing_file_is_noop(self, tmp_path: Path, environ, dotenv):
        before = environ.as_dict()

        assert dotenv.load(tmp_path / ".env") == []
        assert environ.as_dict() == before

    def test_load_expands_against_environment(self, tmp_path: Path, environ, dotenv):
        env_file = write(tmp_path, ".env", "APP_DIR=${HOME}/app\n")

        dotenv.load(env_file)

        assert environ.get("APP_DIR") == "/home/app/app"

    def test_load_propagates_parse_errors(self, tmp_path: Path, environ, dotenv):
        env_file = write(tmp_path, ".env", "GOOD=1\nBAD LINE\n")

        with pytest.raises(FileParseError):
            dotenv.load(env_file)
        assert not environ.contains("GOOD")

    def test_load_propagates_apply_errors(self, tmp_path: Path, dotenv):
        env_file = write(tmp_path, ".env", "KEY=1\n")

        with patch.object(MemoryEnvironment, "set", side_effect=OSError("read-only")):
            with pytest.raises(ApplyError):
                dotenv.load(env_file)

    def test_values_does_not_apply(self, tmp_path: Path, environ, dotenv):
        env_file = write(tmp_path, ".env", "ONLY_READ=1\n")

        assert dotenv.values(env_file) == {"ONLY_READ": "1"}
        assert not environ.contains("ONLY_READ")


class TestLoadEnv:
    """Tests for the environment-specific cascade."""

    def test_selector_fallback_merges_four_files_in_order(self, environ):
        """With APP_ENV unset the dev cascade is attempted in order."""
        attempted: List[str] = []

        def record(path):
            attempted.append(str(path))
            return None

        with patch("gofr_dotenv.merger.read_optional", side_effect=record):
            Dotenv(environ=environ).load_env(".env", "APP_ENV", "dev")

        assert attempted == [".env", ".env.local", ".env.dev", ".env.dev.local"]

    def test_precedence(self, tmp_path: Path, environ, dotenv):
        base = tmp_path / ".env"
        write(tmp_path, ".env", "A=base\nB=base\nC=base\nD=base\n")
        write(tmp_path, ".env.local", "B=local\nC=local\nD=local\n")
        write(tmp_path, ".env.dev", "C=dev\nD=dev\n")
        write(tmp_path, ".env.dev.local", "D=dev-local\n")

        dotenv.load_env(base, "APP_ENV", "dev")

        assert environ.get("A") == "base"
        assert environ.get("B") == "local"
        assert environ.get("C") == "dev"
        assert environ.get("D") == "dev-local"

    def test_selector_from_environment(self, tmp_path: Path, environ, dotenv):
        base = write(tmp_path, ".env", "DB=base\n")
        write(tmp_path, ".env.prod", "DB=prod\n")
        write(tmp_path, ".env.dev", "DB=dev\n")
        environ.set("APP_ENV", "prod")

        dotenv.load_env(base, "APP_ENV", "dev")

        assert environ.get("DB") == "prod"

    def test_selector_from_base_file(self, tmp_path: Path, environ, dotenv):
        base = write(tmp_path, ".env", "APP_ENV=test\nDB=base\n")
        write(tmp_path, ".env.test", "DB=test\n")

        dotenv.load_env(base, "APP_ENV", "dev")

        assert environ.get("APP_ENV") == "test"
        assert environ.get("DB") == "test"

    def test_local_env_skips_env_specific_files(self, tmp_path: Path, environ, dotenv):
        base = write(tmp_path, ".env", "DB=base\n")
        write(tmp_path, ".env.local", "DB=local\n")
        write(tmp_path, ".env.local.local", "DB=never\n")
        environ.set("APP_ENV", "local")

        dotenv.load_env(base, "APP_ENV", "dev")

        assert environ.get("DB") == "local"

    def test_does_not_overwrite_existing(self, tmp_path: Path, environ, dotenv):
        base = write(tmp_path, ".env", "DB=base\n")
        write(tmp_path, ".env.dev", "DB=dev\n")
        environ.set("DB", "existing")

        dotenv.load_env(base)

        assert environ.get("DB") == "existing"

    def test_overlay_expands_against_base(self, tmp_path: Path, environ, dotenv):
        base = write(tmp_path, ".env", "HOST=localhost\n")
        write(tmp_path, ".env.dev", "URL=http://${HOST}:8000\n")

        dotenv.load_env(base)

        assert environ.get("URL") == "http://localhost:8000"

    def test_selector_outside_directory_rejected(self, tmp_path: Path, environ, dotenv):
        base = write(tmp_path, ".env", "DB=base\n")
        environ.set("APP_ENV", "../escape")

        with pytest.raises(ConfigurationError) as exc_info:
            dotenv.load_env(base)

        assert exc_info.value.code == "INVALID_ENVIRONMENT"
        assert exc_info.value.details == {"env_key": "APP_ENV", "env": "../escape"}
        assert not environ.contains("DB")

    def test_selector_from_base_file_is_checked(self, tmp_path: Path, environ, dotenv):
        base = write(tmp_path, ".env", "APP_ENV=nested/prod\n")

        with pytest.raises(ConfigurationError):
            dotenv.cascade(base)

    def test_empty_selector_rejected(self, tmp_path: Path, environ, dotenv):
        environ.set("APP_ENV", "")

        with pytest.raises(ConfigurationError):
            dotenv.resolve_env()

    def test_cascade_does_not_apply(self, tmp_path: Path, environ, dotenv):
        base = write(tmp_path, ".env", "ONLY=1\n")

        merger = dotenv.cascade(base)

        assert merger.values == {"ONLY": "1"}
        assert merger.loaded_paths == [base]
        assert not environ.contains("ONLY")


class TestModuleFunctions:
    """Tests for the os.environ-bound module functions."""

    def test_load_uses_process_environment(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("GOFR_LOADER_TEST_A", raising=False)
        monkeypatch.setenv("GOFR_LOADER_TEST_B", "existing")
        env_file = write(tmp_path, ".env", "GOFR_LOADER_TEST_A=1\nGOFR_LOADER_TEST_B=2\n")

        with patch.dict(os.environ):
            load(env_file)
            assert os.environ["GOFR_LOADER_TEST_A"] == "1"
            assert os.environ["GOFR_LOADER_TEST_B"] == "existing"

    def test_overload_uses_process_environment(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GOFR_LOADER_TEST_B", "existing")
        env_file = write(tmp_path, ".env", "GOFR_LOADER_TEST_B=2\n")

        with patch.dict(os.environ):
            overload(env_file)
            assert os.environ["GOFR_LOADER_TEST_B"] == "2"

    def test_load_env_uses_process_environment(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GOFR_LOADER_ENV", "ci")
        monkeypatch.delenv("GOFR_LOADER_TEST_C", raising=False)
        base = write(tmp_path, ".env", "GOFR_LOADER_TEST_C=base\n")
        write(tmp_path, ".env.ci", "GOFR_LOADER_TEST_C=ci\n")

        with patch.dict(os.environ):
            load_env(base, "GOFR_LOADER_ENV", "dev")
            assert os.environ["GOFR_LOADER_TEST_C"] == "ci"

    def test_dotenv_values(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("GOFR_LOADER_TEST_D", raising=False)
        env_file = write(tmp_path, ".env", "GOFR_LOADER_TEST_D=1\n")

        assert dotenv_values(env_file) == {"GOFR_LOADER_TEST_D": "1"}
        assert "GOFR_LOADER_TEST_D" not in os.environ

    def test_exported_from_package(self):
        assert gofr_dotenv.load is load
        assert gofr_dotenv.load_env is load_env
        assert gofr_dotenv.Dotenv is Dotenv
