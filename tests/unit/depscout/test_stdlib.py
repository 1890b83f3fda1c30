# tests/unit/depscout/test_stdlib.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for depscout.stdlib.

Tests the StandardLibraryRegistry constructors and membership.
"""

import json
import subprocess
import sys
from unittest.mock import patch

import pytest

from depscout.exceptions import StandardLibraryQueryError
from depscout.stdlib import StandardLibraryRegistry


def completed(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestMembership:
    """Tests for the membership test."""

    def test_contains(self):
        registry = StandardLibraryRegistry(["os", "sys"])
        assert "os" in registry
        assert "numpy" not in registry
        assert len(registry) == 2

    def test_names_are_immutable(self):
        registry = StandardLibraryRegistry(["os"])
        assert isinstance(registry.names, frozenset)


class TestFromRuntime:
    """Tests for from_runtime."""

    def test_contains_common_modules(self):
        registry = StandardLibraryRegistry.from_runtime()
        for name in ["os", "sys", "collections", "json", "__future__"]:
            assert name in registry
        assert "numpy" not in registry
        assert registry.source == "runtime"


class TestFromInterpreter:
    """Tests for the external interpreter query."""

    def test_parses_json_output(self):
        with patch("depscout.stdlib.subprocess.run") as run:
            run.return_value = completed(stdout=json.dumps(["os", "sys"]) + "\n")
            registry = StandardLibraryRegistry.from_interpreter("python3")

        assert "os" in registry
        assert registry.source == "interpreter"
        assert run.call_args.args[0][0] == "python3"

    def test_nonzero_exit_raises(self):
        with patch("depscout.stdlib.subprocess.run") as run:
            run.return_value = completed(returncode=1, stderr="boom")
            with pytest.raises(StandardLibraryQueryError, match="boom"):
                StandardLibraryRegistry.from_interpreter("python3")

    def test_missing_interpreter_raises(self):
        with patch("depscout.stdlib.subprocess.run", side_effect=FileNotFoundError("nope")):
            with pytest.raises(StandardLibraryQueryError):
                StandardLibraryRegistry.from_interpreter("no-such-python")

    def test_garbage_output_raises(self):
        with patch("depscout.stdlib.subprocess.run") as run:
            run.return_value = completed(stdout="['os', 'sys']")
            with pytest.raises(StandardLibraryQueryError):
                StandardLibraryRegistry.from_interpreter("python3")

    def test_real_interpreter(self):
        """Querying the running interpreter matches from_runtime."""
        registry = StandardLibraryRegistry.from_interpreter(sys.executable)
        assert registry.names == StandardLibraryRegistry.from_runtime().names


class TestFallback:
    """Tests for the baked-in degraded-mode list."""

    def test_fallback_has_top_level_names(self):
        registry = StandardLibraryRegistry.fallback("3.11")
        assert "os" in registry
        assert "json" in registry
        assert "os.path" not in registry
        assert registry.source == "fallback"

    def test_unknown_version_uses_newest(self):
        registry = StandardLibraryRegistry.fallback("9.99")
        assert "os" in registry


class TestLoad:
    """Tests for load."""

    def test_no_python_uses_runtime(self):
        assert StandardLibraryRegistry.load().source == "runtime"

    def test_failure_without_fallback_raises(self):
        with patch("depscout.stdlib.subprocess.run", side_effect=FileNotFoundError("nope")):
            with pytest.raises(StandardLibraryQueryError):
                StandardLibraryRegistry.load("no-such-python")

    def test_failure_with_fallback(self):
        with patch("depscout.stdlib.subprocess.run", side_effect=FileNotFoundError("nope")):
            registry = StandardLibraryRegistry.load("no-such-python", allow_fallback=True)
        assert registry.source == "fallback"
        assert "os" in registry
