# depscout/stdlib.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Standard library module registry.

Holds the set of module names that ship with an interpreter so they can be
filtered out of install lists. The registry is an immutable value built once
per run and passed to the resolver, so tests can hand in a fixed fake.
"""

import json
import logging
import subprocess
import sys
from typing import Iterable, Optional

from stdlib_list import short_versions, stdlib_list

from .exceptions import StandardLibraryQueryError

logger = logging.getLogger(__name__)

# Printed as JSON so the parent never has to parse a Python list repr
_QUERY_SCRIPT = (
    "import json, sys; "
    "print(json.dumps(sorted(set(sys.stdlib_module_names) | set(sys.builtin_module_names))))"
)


class StandardLibraryRegistry:
    """Immutable membership test for standard library module names."""

    def __init__(self, names: Iterable[str], source: str = "custom"):
        self._names: frozenset[str] = frozenset(names)
        self.source = source

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"StandardLibraryRegistry({len(self._names)} names, source={self.source!r})"

    @property
    def names(self) -> frozenset[str]:
        return self._names

    @classmethod
    def from_runtime(cls) -> "StandardLibraryRegistry":
        """Build from the running interpreter."""
        names = set(sys.stdlib_module_names) | set(sys.builtin_module_names)
        return cls(names, source="runtime")

    @classmethod
    def from_interpreter(cls, python: str) -> "StandardLibraryRegistry":
        """Ask another interpreter for its standard library module names.

        Args:
            python: Path or command name of the interpreter to query.

        Returns:
            Registry holding that interpreter's module names.

        Raises:
            StandardLibraryQueryError: If the interpreter cannot be run, exits
                non-zero, or prints something that is not a JSON list.
        """
        # TODO: add a timeout once a sensible default for slow interpreters is agreed
        try:
            result = subprocess.run(
                [python, "-c", _QUERY_SCRIPT],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise StandardLibraryQueryError(f"Could not run {python}: {e}") from e

        if result.returncode != 0:
            raise StandardLibraryQueryError(
                f"{python} exited with status {result.returncode}: {result.stderr.strip()}"
            )

        try:
            names = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise StandardLibraryQueryError(
                f"Unexpected stdlib query output from {python}: {e}"
            ) from e

        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise StandardLibraryQueryError(
                f"Unexpected stdlib query output from {python}: not a list of names"
            )

        return cls(names, source="interpreter")

    @classmethod
    def fallback(cls, version: Optional[str] = None) -> "StandardLibraryRegistry":
        """Degraded mode: the module list baked into the stdlib-list distribution.

        Args:
            version: "major.minor" Python version. Defaults to the running
                interpreter; versions the list does not know fall back to the
                newest one it ships.
        """
        if version is None:
            version = f"{sys.version_info.major}.{sys.version_info.minor}"
        if version not in short_versions:
            newest = short_versions[-1]
            logger.warning(f"No baked-in stdlib list for Python {version}, using {newest}")
            version = newest

        names = {name.split(".")[0] for name in stdlib_list(version)}
        return cls(names, source="fallback")

    @classmethod
    def load(
        cls, python: Optional[str] = None, allow_fallback: bool = False
    ) -> "StandardLibraryRegistry":
        """Build the registry for a run.

        Args:
            python: Interpreter to query. None uses the running interpreter.
            allow_fallback: On query failure, use the baked-in list instead
                of raising.

        Raises:
            StandardLibraryQueryError: If the query fails and fallback is off.
        """
        if python is None:
            return cls.from_runtime()

        try:
            return cls.from_interpreter(python)
        except StandardLibraryQueryError as e:
            if not allow_fallback:
                raise
            logger.warning(f"Stdlib query failed ({e}); using baked-in fallback list")
            return cls.fallback()
