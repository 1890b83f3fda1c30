# depscout/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Static dependency scanner for Python projects.

Finds the third-party packages a file or project imports and provisions a
virtual environment with them.

Usage:
    python -m depscout path/to/project venv

Components:
    - ImportScanner: Line-based import statement extraction
    - LocalModuleResolver: In-project module detection
    - StandardLibraryRegistry: Stdlib module names to filter out
    - DependencyResolver: Manifest-or-scan resolution into a sorted package list
    - ProjectWalker: Manifest search and source file enumeration
    - VenvInstaller: venv creation and pip install
"""

from .config import ScanSettings
from .exceptions import (
    DepscoutError,
    ExternalCommandError,
    FileReadError,
    ManifestParseError,
    MappingParseError,
    PathNotFoundError,
    StandardLibraryQueryError,
)
from .installer import VenvInstaller
from .local_modules import LocalModuleResolver
from .manifest import read_manifest
from .mapping import find_mapping_file, load_mapping
from .resolver import DependencyResolver, ResolvedName
from .scanner import ImportScanner, ModuleReference
from .stdlib import StandardLibraryRegistry
from .walker import ProjectWalker

__all__ = [
    # Config
    "ScanSettings",
    # Scanning
    "ImportScanner",
    "ModuleReference",
    "LocalModuleResolver",
    "ProjectWalker",
    "read_manifest",
    # Resolution
    "DependencyResolver",
    "ResolvedName",
    "StandardLibraryRegistry",
    "find_mapping_file",
    "load_mapping",
    # Provisioning
    "VenvInstaller",
    # Errors
    "DepscoutError",
    "ExternalCommandError",
    "FileReadError",
    "ManifestParseError",
    "MappingParseError",
    "PathNotFoundError",
    "StandardLibraryQueryError",
]
