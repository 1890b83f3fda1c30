# depscout/local_modules.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Local (in-project) module detection.

Decides whether a top-level module name refers to code that already lives in
the project, in which case it must not be installed.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from .config import DEFAULT_SOURCE_SUBDIRS


class LocalModuleResolver:
    """Looks for a module as a file or package inside the project.

    Search order, first match wins:
    1. The directory of the file being scanned
    2. The project root
    3. Each conventional source subdirectory under the root (src, lib, app, core)

    In each location "<name>.py" or "<name>/__init__.py" counts as a match.
    """

    def __init__(
        self,
        project_root: Union[str, Path],
        subdirs: Optional[Iterable[str]] = None,
    ):
        """Initialize resolver for one project.

        Args:
            project_root: Root directory of the project.
            subdirs: Conventional source subdirectories under the root.
        """
        self.project_root = Path(project_root)
        self.subdirs = list(subdirs) if subdirs is not None else list(DEFAULT_SOURCE_SUBDIRS)

    def search_dirs(self, file_dir: Optional[Union[str, Path]] = None) -> list[Path]:
        """Directories checked for a module, in priority order."""
        dirs = []
        if file_dir is not None:
            dirs.append(Path(file_dir))
        dirs.append(self.project_root)
        dirs.extend(self.project_root / sub for sub in self.subdirs)
        return dirs

    def is_local(self, name: str, file_dir: Optional[Union[str, Path]] = None) -> bool:
        """Check whether a top-level module name is provided by the project.

        Args:
            name: Top-level module name (no dots).
            file_dir: Directory containing the file under scan.

        Returns:
            True if the module exists in any search location.
        """
        return any(self._defines(directory, name) for directory in self.search_dirs(file_dir))

    @staticmethod
    def _defines(directory: Path, name: str) -> bool:
        if (directory / f"{name}.py").is_file():
            return True
        return (directory / name / "__init__.py").is_file()
