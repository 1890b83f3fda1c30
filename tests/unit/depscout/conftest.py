# tests/unit/depscout/conftest.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Shared fixtures for depscout unit tests."""

import pytest

from depscout.stdlib import StandardLibraryRegistry


FAKE_STDLIB = {
    "__future__",
    "collections",
    "json",
    "logging",
    "os",
    "pathlib",
    "re",
    "sys",
    "typing",
}


@pytest.fixture
def registry() -> StandardLibraryRegistry:
    """A fixed stdlib registry independent of the running interpreter."""
    return StandardLibraryRegistry(FAKE_STDLIB, source="test")


@pytest.fixture
def make_tree(tmp_path):
    """Create files under tmp_path from a {relative_path: content} dict."""

    def _make(files: dict[str, str]):
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return tmp_path

    return _make
