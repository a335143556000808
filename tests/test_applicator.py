"""Tests for applying merged values to an environment."""

import pytest

from gofr_dotenv.applicator import apply
from gofr_dotenv.environment import MemoryEnvironment
from gofr_dotenv.exceptions import ApplyError, DotenvError


class TestApply:
    """Tests for load and overload semantics."""

    def test_sets_new_variables(self):
        env = MemoryEnvironment()

        written = apply({"A": "1", "B": "2"}, environ=env)

        assert written == ["A", "B"]
        assert env.as_dict() == {"A": "1", "B": "2"}

    def test_load_keeps_existing(self):
        """Without overwrite the existing value wins."""
        env = MemoryEnvironment({"X": "preexisting"})

        written = apply({"X": "new", "Y": "1"}, overwrite=False, environ=env)

        assert written == ["Y"]
        assert env.get("X") == "preexisting"

    def test_load_keeps_existing_empty_value(self):
        env = MemoryEnvironment({"X": ""})
        apply({"X": "new"}, environ=env)
        assert env.get("X") == ""

    def test_overload_replaces_existing(self):
        env = MemoryEnvironment({"X": "preexisting"})

        written = apply({"X": "new"}, overwrite=True, environ=env)

        assert written == ["X"]
        assert env.get("X") == "new"

    def test_empty_mapping(self):
        env = MemoryEnvironment({"A": "1"})
        assert apply({}, environ=env) == []
        assert env.as_dict() == {"A": "1"}


class TestApplyErrors:
    """Tests for platform failures while setting variables."""

    def test_failure_raises_apply_error(self):
        env = MemoryEnvironment()

        with pytest.raises(ApplyError) as exc_info:
            apply({"BAD": "null\x00byte"}, environ=env)

        error = exc_info.value
        assert isinstance(error, DotenvError)
        assert error.key == "BAD"
        assert error.code == "APPLY_ERROR"
        assert isinstance(error.cause, ValueError)

    def test_partial_application_not_rolled_back(self):
        """Keys written before a failure stay written."""
        env = MemoryEnvironment()

        with pytest.raises(ApplyError):
            apply({"FIRST": "1", "BAD": "\x00", "LAST": "3"}, environ=env)

        assert env.get("FIRST") == "1"
        assert not env.contains("LAST")
