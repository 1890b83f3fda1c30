# depscout/walker.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Project tree traversal.

Two walks share the same directory skip rules:
- find_manifest: breadth-first, depth-limited, first match wins
- iter_source_files: exhaustive, unbounded depth

Both visit entries in sorted order so results are deterministic, and both
track resolved directories so symlink loops are visited once.
"""

import logging
import os
from collections import deque
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .config import DEFAULT_MANIFEST_MAX_DEPTH, DEFAULT_MANIFEST_NAME

logger = logging.getLogger(__name__)

# Virtual environments, bytecode caches and foreign dependency folders
EXCLUDED_DIRS = frozenset(
    {
        "venv",
        "env",
        "virtualenv",
        "__pycache__",
        "__pypackages__",
        "node_modules",
        "site-packages",
    }
)

SOURCE_SUFFIX = ".py"


class ProjectWalker:
    """Walks a project tree, skipping environment, cache and hidden directories."""

    def __init__(self, extra_excluded: Optional[Iterable[str]] = None):
        """Initialize walker.

        Args:
            extra_excluded: Additional directory names to skip (e.g. a
                custom virtual environment name).
        """
        self.excluded = EXCLUDED_DIRS | frozenset(extra_excluded or ())

    def is_excluded(self, name: str) -> bool:
        """Check whether a directory name is skipped."""
        return name.startswith(".") or name in self.excluded

    def _list_dir(self, directory: Path) -> tuple[list[Path], list[Path]]:
        """Split a directory's entries into (subdirs, files), sorted by name."""
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot list {directory}: {e}")
            return [], []

        dirs, files = [], []
        for entry in entries:
            try:
                if entry.is_dir():
                    if not self.is_excluded(entry.name):
                        dirs.append(Path(entry.path))
                elif entry.is_file():
                    files.append(Path(entry.path))
            except OSError as e:
                logger.debug(f"Skipping {entry.path}: {e}")
        return dirs, files

    def find_manifest(
        self,
        root: Path,
        name: str = DEFAULT_MANIFEST_NAME,
        max_depth: int = DEFAULT_MANIFEST_MAX_DEPTH,
    ) -> Optional[Path]:
        """Breadth-first search for a manifest file.

        Args:
            root: Directory to search from (depth 0).
            name: Manifest file name.
            max_depth: Deepest directory level searched below the root.

        Returns:
            Path of the shallowest match, or None.
        """
        root = Path(root)
        visited: set[Path] = set()
        queue = deque([(root, 0)])

        while queue:
            directory, depth = queue.popleft()
            real = directory.resolve()
            if real in visited:
                continue
            visited.add(real)

            dirs, files = self._list_dir(directory)
            for file_path in files:
                if file_path.name == name:
                    logger.debug(f"Found manifest {file_path}")
                    return file_path

            if depth < max_depth:
                queue.extend((sub, depth + 1) for sub in dirs)

        return None

    def iter_source_files(self, root: Path) -> Iterator[Path]:
        """Yield every Python source file under root, depth-first, sorted."""
        visited: set[Path] = set()
        stack = [Path(root)]

        while stack:
            directory = stack.pop()
            real = directory.resolve()
            if real in visited:
                continue
            visited.add(real)

            dirs, files = self._list_dir(directory)
            for file_path in files:
                if file_path.suffix == SOURCE_SUFFIX:
                    yield file_path
            # Reversed so the stack pops subdirectories in sorted order
            stack.extend(reversed(dirs))
