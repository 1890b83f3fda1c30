# depscout/config.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Settings for a dependency scan and provisioning run.

Values come from DEPSCOUT_* environment variables (optionally loaded from a
.env file) and can be overridden by CLI flags.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_VENV_NAME = "venv"
DEFAULT_MANIFEST_NAME = "requirements.txt"
DEFAULT_MANIFEST_MAX_DEPTH = 3
DEFAULT_SOURCE_SUBDIRS = ["src", "lib", "app", "core"]


def _split_list(value: Optional[str]) -> Optional[list[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def get_env(dotenv_path: Optional[str] = None) -> Dict[str, Any]:
    """Read DEPSCOUT_* settings from the environment.

    Unset variables are left out so the model defaults apply.
    """
    if dotenv_path is not None:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    env = {
        "venv_name": os.getenv("DEPSCOUT_VENV_NAME"),
        "mapping_path": os.getenv("DEPSCOUT_MAPPING_FILE"),
        "python": os.getenv("DEPSCOUT_PYTHON"),
        "manifest_name": os.getenv("DEPSCOUT_MANIFEST_NAME"),
        "manifest_max_depth": os.getenv("DEPSCOUT_MANIFEST_MAX_DEPTH"),
        "source_subdirs": _split_list(os.getenv("DEPSCOUT_SOURCE_SUBDIRS")),
        "extra_excluded_dirs": _split_list(os.getenv("DEPSCOUT_EXCLUDE_DIRS")),
        "stdlib_fallback": os.getenv("DEPSCOUT_STDLIB_FALLBACK"),
    }
    if env["stdlib_fallback"] is not None:
        env["stdlib_fallback"] = env["stdlib_fallback"].lower() in ("1", "true", "yes")
    return {key: value for key, value in env.items() if value is not None}


class ScanSettings(BaseModel):
    """Settings for one resolution run.

    Attributes:
        venv_name: Name of the virtual environment directory to provision.
        mapping_path: Explicit module -> package mapping file, if any.
        python: Interpreter used to create the venv and to query for its
            standard library module names. None means the running interpreter.
        manifest_name: File name of the pinned-dependency manifest.
        manifest_max_depth: How many directory levels below the root are
            searched for the manifest.
        source_subdirs: Conventional subdirectories searched for local modules.
        extra_excluded_dirs: Directory names skipped in addition to the
            built-in environment/cache names.
        stdlib_fallback: Use the baked-in stdlib list when the interpreter
            query fails instead of aborting.
    """

    venv_name: str = DEFAULT_VENV_NAME
    mapping_path: Optional[Path] = None
    python: Optional[str] = None
    manifest_name: str = DEFAULT_MANIFEST_NAME
    manifest_max_depth: int = Field(default=DEFAULT_MANIFEST_MAX_DEPTH, ge=0)
    source_subdirs: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_SUBDIRS))
    extra_excluded_dirs: list[str] = Field(default_factory=list)
    stdlib_fallback: bool = False

    @classmethod
    def from_env(cls, dotenv_file: Optional[str] = None) -> "ScanSettings":
        env = get_env(dotenv_file)
        return cls(**env)
