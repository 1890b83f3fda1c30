# depscout/installer.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Virtual environment provisioning.

Thin wrapper around `python -m venv` and the environment's pip.
"""

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

from .exceptions import ExternalCommandError

logger = logging.getLogger(__name__)


class VenvInstaller:
    """Creates a virtual environment and installs packages into it."""

    def __init__(self, venv_name: str, python: Optional[str] = None):
        """Initialize installer.

        Args:
            venv_name: Directory of the virtual environment.
            python: Interpreter used to create the environment.
        """
        self.venv_path = Path(venv_name)
        self.python = python or sys.executable

    @staticmethod
    def _is_windows() -> bool:
        return os.name == "nt"

    def exists(self) -> bool:
        return self.venv_path.exists()

    def pip_path(self) -> Path:
        if self._is_windows():
            return self.venv_path / "Scripts" / "pip.exe"
        return self.venv_path / "bin" / "pip"

    def _run(self, command: Sequence[str], what: str) -> None:
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(list(command), check=False)
        except OSError as e:
            raise ExternalCommandError(f"Failed to {what}: {e}") from e
        if result.returncode != 0:
            raise ExternalCommandError(
                f"Failed to {what} (exit status {result.returncode})",
                returncode=result.returncode,
            )

    def create(self) -> None:
        """Create the virtual environment.

        Raises:
            ExternalCommandError: If venv creation fails.
        """
        print(f"Creating virtual environment '{self.venv_path}'...")
        self._run([self.python, "-m", "venv", str(self.venv_path)], "create virtual environment")

    def ensure(self) -> None:
        """Create the virtual environment unless it already exists."""
        if self.exists():
            logger.info(f"Using existing virtual environment {self.venv_path}")
            return
        self.create()

    def install(self, libraries: Sequence[str]) -> None:
        """Install packages into the environment.

        An empty list is a successful no-op.

        Raises:
            ExternalCommandError: If pip fails.
        """
        if not libraries:
            print("No external libraries to install")
            return

        print(f"Installing libraries: {', '.join(libraries)}")
        self._run([str(self.pip_path()), "install", *libraries], "install dependencies")

    def activate_hint(self, target: Path) -> str:
        """Shell command that activates the environment and runs the target."""
        run = f"python {target}" if Path(target).is_file() else "python"
        if self._is_windows():
            return f"{self.venv_path}\\Scripts\\activate && {run}"
        return f"source {self.venv_path}/bin/activate && {run}"
