# depscout/resolver.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Dependency resolution.

Turns a file or project directory into the sorted list of packages to
install. A requirements manifest anywhere under the project (within the
search depth) wins outright; otherwise every source file is scanned and each
import runs through an ordered pipeline:

    apply_hint -> discard_relative -> discard_local -> apply_mapping

Each stage either settles the reference (a ResolvedName, or DISCARD) or
returns None to pass it on. Standard library names are filtered last, except
names that came from an explicit install hint.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Union

from .config import DEFAULT_MANIFEST_MAX_DEPTH, DEFAULT_MANIFEST_NAME
from .exceptions import ManifestParseError, PathNotFoundError
from .local_modules import LocalModuleResolver
from .manifest import read_manifest
from .scanner import ImportScanner, ModuleReference
from .stdlib import StandardLibraryRegistry
from .walker import ProjectWalker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedName:
    """A package name produced for one import."""

    name: str
    hinted: bool = False


class _Discard:
    def __repr__(self) -> str:
        return "DISCARD"


DISCARD = _Discard()

StageResult = Union[ResolvedName, _Discard, None]


@dataclass(frozen=True)
class ResolutionContext:
    """Per-file inputs shared by the pipeline stages."""

    mapping: Mapping[str, str]
    local_resolver: Optional[LocalModuleResolver] = None
    file_dir: Optional[Path] = None


def apply_hint(ref: ModuleReference, ctx: ResolutionContext) -> StageResult:
    """An install hint is authoritative: no mapping, no local check."""
    if ref.hint:
        return ResolvedName(ref.hint, hinted=True)
    return None


def discard_relative(ref: ModuleReference, ctx: ResolutionContext) -> StageResult:
    if ref.relative or ref.module.startswith("."):
        return DISCARD
    return None


def discard_local(ref: ModuleReference, ctx: ResolutionContext) -> StageResult:
    if ctx.local_resolver is not None and ctx.local_resolver.is_local(ref.module, ctx.file_dir):
        return DISCARD
    return None


def apply_mapping(ref: ModuleReference, ctx: ResolutionContext) -> StageResult:
    """Final stage: mapped package name, or the module name itself."""
    return ResolvedName(ctx.mapping.get(ref.module, ref.module))


PIPELINE: tuple[Callable[[ModuleReference, ResolutionContext], StageResult], ...] = (
    apply_hint,
    discard_relative,
    discard_local,
    apply_mapping,
)


def resolve_reference(ref: ModuleReference, ctx: ResolutionContext) -> Optional[ResolvedName]:
    """Run one reference through the pipeline.

    Returns:
        The resolved name, or None if the reference was discarded.
    """
    for stage in PIPELINE:
        result = stage(ref, ctx)
        if result is DISCARD:
            return None
        if result is not None:
            return result
    return None


def finalize(
    names: Iterable[ResolvedName], registry: StandardLibraryRegistry
) -> list[str]:
    """Filter standard library names, deduplicate and sort.

    A name survives the stdlib filter if any occurrence of it was hinted.
    """
    names = list(names)
    hinted = {n.name for n in names if n.hinted}
    kept = {n.name for n in names if n.name in hinted or n.name not in registry}
    return sorted(kept)


class DependencyResolver:
    """Builds the install list for a file or a project directory.

    The registry and mapping are built once per run and never modified, so
    one resolver can be reused for any number of targets.
    """

    def __init__(
        self,
        registry: StandardLibraryRegistry,
        mapping: Optional[Mapping[str, str]] = None,
        walker: Optional[ProjectWalker] = None,
        scanner: Optional[ImportScanner] = None,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        manifest_max_depth: int = DEFAULT_MANIFEST_MAX_DEPTH,
        subdirs: Optional[Iterable[str]] = None,
    ):
        """Initialize resolver.

        Args:
            registry: Standard library names to filter out.
            mapping: Module name -> package name overrides.
            walker: Project walker (defaults to the standard skip rules).
            scanner: Import scanner.
            manifest_name: Manifest file name that short-circuits scanning.
            manifest_max_depth: Directory levels searched for the manifest.
            subdirs: Conventional source subdirectories for local modules.
        """
        self.registry = registry
        self.mapping: Mapping[str, str] = dict(mapping or {})
        self.walker = walker or ProjectWalker()
        self.scanner = scanner or ImportScanner()
        self.manifest_name = manifest_name
        self.manifest_max_depth = manifest_max_depth
        self.subdirs = list(subdirs) if subdirs is not None else None
        self.last_source: Optional[str] = None

    def resolve(self, target: Union[str, Path]) -> list[str]:
        """Resolve the packages needed by a file or directory.

        Args:
            target: A Python source file or a project directory.

        Returns:
            Sorted, duplicate-free package names.

        Raises:
            PathNotFoundError: If target does not exist.
        """
        target = Path(target)
        if not target.exists():
            raise PathNotFoundError(f"Path not found: {target}")

        if target.is_dir():
            from_manifest = self._resolve_manifest(target)
            if from_manifest is not None:
                self.last_source = "manifest"
                return from_manifest
            files = list(self.walker.iter_source_files(target))
            root = target
        else:
            files = [target]
            root = target.parent

        logger.info(f"Scanning {len(files)} source files under {root}")
        local_resolver = LocalModuleResolver(root, self.subdirs)
        names: list[ResolvedName] = []
        for file_path in files:
            names.extend(self._resolve_file_names(file_path, local_resolver))

        self.last_source = "scan"
        return finalize(names, self.registry)

    def resolve_file(self, path: Union[str, Path], project_root: Optional[Path] = None) -> list[str]:
        """Resolve a single file, ignoring any manifest."""
        path = Path(path)
        if not path.exists():
            raise PathNotFoundError(f"Path not found: {path}")
        local_resolver = LocalModuleResolver(project_root or path.parent, self.subdirs)
        return finalize(self._resolve_file_names(path, local_resolver), self.registry)

    def resolve_text(
        self,
        content: str,
        file_path: Optional[Union[str, Path]] = None,
        project_root: Optional[Path] = None,
    ) -> list[str]:
        """Resolve imports in source text.

        Local-module checks run only when a project root is given.
        """
        file_dir = Path(file_path).parent if file_path else None
        local_resolver = (
            LocalModuleResolver(project_root, self.subdirs) if project_root is not None else None
        )
        ctx = ResolutionContext(self.mapping, local_resolver, file_dir)
        refs = self.scanner.scan(content, str(file_path or ""))
        return finalize(self._resolve_refs(refs, ctx), self.registry)

    def _resolve_manifest(self, root: Path) -> Optional[list[str]]:
        manifest = self.walker.find_manifest(root, self.manifest_name, self.manifest_max_depth)
        if manifest is None:
            return None
        try:
            packages = read_manifest(manifest)
        except ManifestParseError as e:
            logger.warning(f"{e}; falling back to source scan")
            return None
        logger.info(f"Using manifest {manifest}, source scan skipped")
        return sorted(set(packages))

    def _resolve_file_names(
        self, file_path: Path, local_resolver: LocalModuleResolver
    ) -> list[ResolvedName]:
        refs = self.scanner.scan_file(file_path)
        ctx = ResolutionContext(self.mapping, local_resolver, file_path.parent)
        names = self._resolve_refs(refs, ctx)
        logger.debug(f"{file_path}: {len(refs)} imports, {len(names)} candidate packages")
        return names

    @staticmethod
    def _resolve_refs(refs: Iterable[ModuleReference], ctx: ResolutionContext) -> list[ResolvedName]:
        resolved = []
        for ref in refs:
            name = resolve_reference(ref, ctx)
            if name is not None:
                resolved.append(name)
        return resolved
