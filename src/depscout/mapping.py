# depscout/mapping.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Module name -> install package name override tables.

A mapping file is a flat table, e.g. in TOML:

    cv2 = "opencv-python"
    sklearn = "scikit-learn"

or the same keys in YAML. A missing file yields an empty table; a malformed
one logs a warning and yields an empty table.
"""

import logging
import os
import tomllib
from importlib import resources
from pathlib import Path
from typing import Optional

import yaml

from .exceptions import MappingParseError

logger = logging.getLogger(__name__)

MAPPING_FILE_NAME = "mapping.toml"
MAPPING_ENV_VAR = "DEPSCOUT_MAPPING_FILE"


def parse_mapping(content: str, fmt: str = "toml") -> dict[str, str]:
    """Parse mapping file text.

    Args:
        content: File contents.
        fmt: "toml" or "yaml".

    Returns:
        Table of module name -> package name. Entries whose value is not a
        string are ignored.

    Raises:
        MappingParseError: If the text does not parse or is not a table.
    """
    try:
        if fmt == "yaml":
            data = yaml.safe_load(content)
        else:
            data = tomllib.loads(content)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise MappingParseError(f"Invalid {fmt} mapping: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MappingParseError(f"Mapping must be a table, got {type(data).__name__}")

    mapping = {}
    for module, package in data.items():
        if isinstance(package, str):
            mapping[str(module)] = package
        else:
            logger.debug(f"Ignoring non-string mapping entry for {module!r}")
    return mapping


def load_mapping(path: Optional[Path], required: bool = False) -> dict[str, str]:
    """Load a mapping table from disk.

    Args:
        path: Mapping file. ".yaml"/".yml" files are read as YAML, anything
              else as TOML. None or a missing file gives an empty table.
        required: The user named this file explicitly, so a missing file
              is logged as a warning rather than at debug level.

    Returns:
        The mapping table (empty on any failure).
    """
    if path is None:
        return {}

    path = Path(path)
    if not path.exists():
        if required:
            logger.warning(f"Mapping file not found: {path}; using an empty mapping")
        else:
            logger.debug(f"No mapping file at {path}")
        return {}

    fmt = "yaml" if path.suffix.lower() in (".yaml", ".yml") else "toml"
    try:
        content = path.read_text(encoding="utf-8")
        mapping = parse_mapping(content, fmt)
    except (OSError, UnicodeDecodeError, MappingParseError) as e:
        logger.warning(f"Failed to load mapping {path}: {e}")
        return {}

    logger.info(f"Loaded {len(mapping)} mapping entries from {path}")
    return mapping


def default_mapping_path() -> Path:
    """Path of the mapping table bundled with the package."""
    return Path(str(resources.files("depscout") / "data" / MAPPING_FILE_NAME))


def find_mapping_file(
    explicit: Optional[Path] = None, project_root: Optional[Path] = None
) -> Path:
    """Pick the mapping file for a run.

    Order: explicit argument, DEPSCOUT_MAPPING_FILE, mapping.toml in the
    project root, then the bundled default.
    """
    if explicit is not None:
        return Path(explicit)

    from_env = os.getenv(MAPPING_ENV_VAR)
    if from_env:
        return Path(from_env)

    if project_root is not None:
        candidate = Path(project_root) / MAPPING_FILE_NAME
        if candidate.is_file():
            return candidate

    return default_mapping_path()
