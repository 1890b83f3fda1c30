# depscout/manifest.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Reader for requirements.txt style manifests."""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from .exceptions import ManifestParseError

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"^(?P<name>[A-Za-z0-9][A-Za-z0-9._-]*)(?P<rest>.*)$")


def parse_requirement_line(line: str) -> Optional[str]:
    """Extract the package name from one manifest line.

    Returns None for blank lines, comments, option flags ("-r", "-e",
    "--index-url"...), URLs, VCS references and local paths.

    Examples:
        "numpy==1.26.4"              -> "numpy"
        "uvicorn[standard]>=0.29"    -> "uvicorn"
        "pywin32; sys_platform == 'win32'" -> "pywin32"
        "git+https://host/repo.git"  -> None
    """
    line = line.strip()
    if not line or line.startswith("#") or line.startswith("-"):
        return None

    match = _TOKEN_RE.match(line)
    if not match:
        logger.debug(f"No package name in manifest line: {line!r}")
        return None

    # "git+https://...", "C:\\path", "file:..." are not package names
    rest = match.group("rest")
    if rest.startswith(("+", ":", "/", "\\")):
        logger.debug(f"Skipping URL or path requirement: {line!r}")
        return None

    return match.group("name")


def parse_manifest(lines: Iterable[str]) -> list[str]:
    """Parse manifest lines into package names, first occurrence order, no duplicates."""
    seen: dict[str, None] = {}
    for line in lines:
        name = parse_requirement_line(line)
        if name is not None:
            seen.setdefault(name, None)
    return list(seen)


def read_manifest(path: Path) -> list[str]:
    """Read a manifest file.

    Args:
        path: Path to requirements.txt (or equivalent).

    Returns:
        Package names in file order, deduplicated.

    Raises:
        ManifestParseError: If the file cannot be read or decoded.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestParseError(f"Could not read manifest {path}: {e}") from e

    packages = parse_manifest(content.splitlines())
    logger.info(f"Read {len(packages)} packages from {path}")
    return packages
