# depscout/scanner.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Line-based import scanner.

Finds `import x` and `from x import y` statements in Python source text
without building an AST. Imports inside conditionals, try blocks and function
bodies are found the same as module-level ones; the scanner has no idea
whether they would ever run.

A trailing directive comment names the package to install explicitly:

    import sklearn  # install: scikit-learn
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from .exceptions import FileReadError

logger = logging.getLogger(__name__)

# Keywords are matched case-sensitively: "Import" or "FROM" are not statements
_FROM_RE = re.compile(r"^[ \t]*from[ \t]+(?P<module>\.+[\w.]*|[A-Za-z_][\w.]*)[ \t]+import\b")
_IMPORT_RE = re.compile(r"^[ \t]*import[ \t]+(?P<names>[^#;]+)")
# The whole requirement up to end of line or the next comment, e.g. "numpy>=1.26,<2"
_HINT_RE = re.compile(r"#\s*install:\s*(?P<hint>[^#\s][^#]*?)\s*(?:#|$)")
_DOTTED_NAME_RE = re.compile(r"^[A-Za-z_][\w]*(?:\.[A-Za-z_][\w]*)*$")


@dataclass(frozen=True)
class ModuleReference:
    """One module named by an import statement.

    Attributes:
        module: Top-level module name ("numpy" for "numpy.random"). Relative
            references keep their raw dotted text (".utils").
        hint: Package named by a trailing "# install:" comment, if any.
        file_path: File the statement came from ("" for bare text).
        line: 1-indexed line number of the statement.
        relative: True for dot-prefixed (package-relative) imports.
    """

    module: str
    hint: Optional[str] = None
    file_path: str = ""
    line: int = 0
    relative: bool = False


def top_level(module: str) -> str:
    """First dotted segment of a module path."""
    return module.split(".")[0]


def _split_import_names(names: str) -> Iterator[str]:
    """Yield dotted module names from the tail of an `import` statement.

    Handles `a, b.c as d` and drops anything that is not a dotted name.
    """
    for part in names.split(","):
        tokens = part.split()
        if not tokens:
            continue
        name = tokens[0].rstrip("\\")
        if _DOTTED_NAME_RE.match(name):
            yield name


class ImportScanner:
    """Extracts ModuleReferences from Python source text."""

    def scan(self, content: str, file_path: str = "") -> list[ModuleReference]:
        """Scan source text for import statements.

        Args:
            content: Source code as string.
            file_path: Path recorded on each reference.

        Returns:
            References in the order they appear in the text.
        """
        references: list[ModuleReference] = []
        for line_no, line in enumerate(content.splitlines(), start=1):
            references.extend(self.scan_line(line, file_path, line_no))
        return references

    def scan_line(
        self, line: str, file_path: str = "", line_no: int = 0
    ) -> list[ModuleReference]:
        """Scan a single line. Returns [] if it is not an import statement."""
        modules = self._match_modules(line)
        if not modules:
            return []

        hint_match = _HINT_RE.search(line)
        hint = hint_match.group("hint") if hint_match else None

        references = []
        for i, module in enumerate(modules):
            relative = module.startswith(".")
            references.append(
                ModuleReference(
                    module=module if relative else top_level(module),
                    # The directive belongs to the statement's first module
                    hint=hint if i == 0 else None,
                    file_path=file_path,
                    line=line_no,
                    relative=relative,
                )
            )
        return references

    def _match_modules(self, line: str) -> list[str]:
        from_match = _FROM_RE.match(line)
        if from_match:
            return [from_match.group("module")]

        import_match = _IMPORT_RE.match(line)
        if import_match:
            return list(_split_import_names(import_match.group("names")))

        return []

    def scan_file(self, path: Path) -> list[ModuleReference]:
        """Scan a source file.

        An unreadable file is logged and yields no references.
        """
        try:
            content = self.read_source(path)
        except FileReadError as e:
            logger.warning(str(e))
            return []
        return self.scan(content, str(path))

    @staticmethod
    def read_source(path: Path) -> str:
        """Read a source file as UTF-8, dropping a leading BOM.

        Files in other encodings (PEP 263 coding cookies) are decoded with
        replacement characters. Import statements are ASCII, so they survive.

        Raises:
            FileReadError: If the file cannot be opened.
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise FileReadError(f"Could not read {path}: {e}") from e

        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError:
            logger.debug(f"{path} is not UTF-8, decoding with replacement")
            return data.decode("utf-8-sig", errors="replace")
