# tests/unit/depscout/test_scanner.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for depscout.scanner.

Tests line-based import extraction, install hints, and relative imports.
"""

import pytest

from depscout.scanner import ImportScanner, ModuleReference, top_level


@pytest.fixture
def scanner():
    return ImportScanner()


def modules(refs):
    return [r.module for r in refs]


class TestTopLevel:
    """Tests for the top_level helper."""

    def test_dotted(self):
        assert top_level("numpy.random") == "numpy"

    def test_plain(self):
        assert top_level("requests") == "requests"


class TestPlainImports:
    """Tests for `import x` statements."""

    def test_single_import(self, scanner):
        """A bare import yields one reference."""
        refs = scanner.scan("import numpy\n")
        assert refs == [ModuleReference(module="numpy", line=1)]

    def test_dotted_import_reduces_to_top_level(self, scanner):
        """Submodule imports reduce to their first segment."""
        assert modules(scanner.scan("import numpy.random\n")) == ["numpy"]

    def test_alias(self, scanner):
        """Trailing `as alias` is tolerated."""
        assert modules(scanner.scan("import pandas as pd\n")) == ["pandas"]

    def test_comma_separated(self, scanner):
        """Each module in a comma list becomes its own reference."""
        refs = scanner.scan("import os, numpy as np, requests\n")
        assert modules(refs) == ["os", "numpy", "requests"]

    def test_indented_import(self, scanner):
        """Imports inside blocks are still recognized."""
        content = "try:\n    import ujson\nexcept ImportError:\n    import json\n"
        assert modules(scanner.scan(content)) == ["ujson", "json"]

    def test_line_numbers(self, scanner):
        """References record their 1-indexed line."""
        refs = scanner.scan("\n\nimport yaml\n", "a.py")
        assert refs[0].line == 3
        assert refs[0].file_path == "a.py"


class TestFromImports:
    """Tests for `from x import y` statements."""

    def test_from_import(self, scanner):
        assert modules(scanner.scan("from collections import OrderedDict\n")) == ["collections"]

    def test_from_dotted(self, scanner):
        assert modules(scanner.scan("from google.cloud import vision\n")) == ["google"]

    def test_parenthesised_continuation(self, scanner):
        """Only the module is taken from a multi-line import."""
        content = "from flask import (\n    Flask,\n    request,\n)\n"
        assert modules(scanner.scan(content)) == ["flask"]

    def test_future_import(self, scanner):
        assert modules(scanner.scan("from __future__ import annotations\n")) == ["__future__"]


class TestRelativeImports:
    """Tests for dot-prefixed imports."""

    def test_relative_module(self, scanner):
        refs = scanner.scan("from .utils import helper\n")
        assert len(refs) == 1
        assert refs[0].relative is True
        assert refs[0].module == ".utils"

    def test_bare_dot(self, scanner):
        refs = scanner.scan("from . import views\n")
        assert refs[0].relative is True

    def test_parent_package(self, scanner):
        refs = scanner.scan("from ..core.models import User\n")
        assert refs[0].relative is True
        assert refs[0].module == "..core.models"


class TestInstallHints:
    """Tests for `# install: <package>` directives."""

    def test_hint_captured(self, scanner):
        refs = scanner.scan("import sklearn  # install: scikit-learn\n")
        assert refs[0].module == "sklearn"
        assert refs[0].hint == "scikit-learn"

    def test_hint_on_from_import(self, scanner):
        refs = scanner.scan("from PIL import Image  # install: Pillow\n")
        assert refs[0].hint == "Pillow"

    def test_hint_without_space(self, scanner):
        refs = scanner.scan("import cv2 #install:opencv-python-headless\n")
        assert refs[0].hint == "opencv-python-headless"

    def test_hint_with_extras_and_version(self, scanner):
        refs = scanner.scan("import uvicorn  # install: uvicorn[standard]>=0.29\n")
        assert refs[0].hint == "uvicorn[standard]>=0.29"

    def test_hint_attaches_to_first_module(self, scanner):
        refs = scanner.scan("import bs4, lxml  # install: beautifulsoup4\n")
        assert refs[0].hint == "beautifulsoup4"
        assert refs[1].hint is None

    def test_hint_keeps_every_version_clause(self, scanner):
        refs = scanner.scan("import numpy  # install: numpy>=1.26,<2\n")
        assert refs[0].hint == "numpy>=1.26,<2"

    def test_hint_stops_at_next_comment(self, scanner):
        refs = scanner.scan("import numpy  # install: numpy==1.26.4  # pinned for CI\n")
        assert refs[0].hint == "numpy==1.26.4"

    def test_empty_hint_ignored(self, scanner):
        refs = scanner.scan("import numpy  # install:\n")
        assert refs[0].hint is None

    def test_plain_comment_is_not_hint(self, scanner):
        refs = scanner.scan("import numpy  # fast arrays\n")
        assert refs[0].hint is None


class TestNonImports:
    """Lines that must not be recognized."""

    @pytest.mark.parametrize(
        "line",
        [
            "# import numpy",
            "important = True",
            "x = 'import os'",
            "Import numpy",
            "FROM numpy IMPORT array",
            "from_value = 3",
            "print('from x import y')",
        ],
    )
    def test_not_an_import(self, scanner, line):
        assert scanner.scan(line + "\n") == []

    def test_empty_text(self, scanner):
        assert scanner.scan("") == []


class TestScanFile:
    """Tests for scan_file."""

    def test_reads_file(self, scanner, tmp_path):
        path = tmp_path / "script.py"
        path.write_text("import requests\n")
        refs = scanner.scan_file(path)
        assert modules(refs) == ["requests"]
        assert refs[0].file_path == str(path)

    def test_missing_file_yields_nothing(self, scanner, tmp_path, caplog):
        """An unreadable file is a warning, not an error."""
        refs = scanner.scan_file(tmp_path / "missing.py")
        assert refs == []
        assert "Could not read" in caplog.text

    def test_utf8_bom_does_not_hide_first_import(self, scanner, tmp_path):
        """A byte order mark before line 1 is dropped."""
        path = tmp_path / "bom.py"
        path.write_bytes("\ufeffimport numpy\nimport requests\n".encode("utf-8"))
        assert modules(scanner.scan_file(path)) == ["numpy", "requests"]

    def test_latin1_file_still_scanned(self, scanner, tmp_path):
        """Non-UTF-8 bytes elsewhere in the file do not lose its imports."""
        path = tmp_path / "legacy.py"
        content = "# -*- coding: latin-1 -*-\nimport numpy\nname = '\xe9'\n"
        path.write_bytes(content.encode("latin-1"))
        assert modules(scanner.scan_file(path)) == ["numpy"]
