# depscout/main.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
CLI entry point for depscout.

Usage:
    depscout [path] [venv-name]
    python -m depscout script.py myenv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import ScanSettings
from .exceptions import ExternalCommandError, PathNotFoundError, StandardLibraryQueryError
from .installer import VenvInstaller
from .mapping import find_mapping_file, load_mapping
from .resolver import DependencyResolver
from .stdlib import StandardLibraryRegistry
from .walker import ProjectWalker

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depscout",
        description="Find the third-party packages a Python project imports and install them into a venv",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Scan the current directory, install into ./venv
    depscout

    # Scan one script, install into ./myenv
    depscout script.py myenv

    # Only print what would be installed
    depscout src --dry-run
        """,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        type=Path,
        help="Python file or project directory to scan (default: current directory)",
    )
    parser.add_argument(
        "venv_name",
        nargs="?",
        default=None,
        help="Virtual environment directory (default: venv)",
    )
    parser.add_argument("--mapping", type=Path, help="Module -> package mapping file (TOML or YAML)")
    parser.add_argument("--python", help="Interpreter used to create the venv and list its stdlib")
    parser.add_argument(
        "--stdlib-fallback",
        action="store_true",
        help="Use the baked-in stdlib list if the interpreter cannot be queried",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the package list and exit")
    parser.add_argument("--env-file", help="Path to a .env file with DEPSCOUT_* settings")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    return parser


def build_settings(args: argparse.Namespace) -> ScanSettings:
    """Environment settings with CLI flags applied on top."""
    settings = ScanSettings.from_env(args.env_file)
    overrides = {}
    if args.venv_name:
        overrides["venv_name"] = args.venv_name
    if args.mapping:
        overrides["mapping_path"] = args.mapping
    if args.python:
        overrides["python"] = args.python
    if args.stdlib_fallback:
        overrides["stdlib_fallback"] = True
    return settings.model_copy(update=overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the depscout CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = build_settings(args)
    target: Path = args.path
    if not target.exists():
        logger.error(f"Path not found: {target}")
        return 1

    project_root = target if target.is_dir() else target.parent
    # settings.mapping_path is set by --mapping or DEPSCOUT_MAPPING_FILE
    mapping = load_mapping(
        find_mapping_file(settings.mapping_path, project_root),
        required=settings.mapping_path is not None,
    )

    try:
        registry = StandardLibraryRegistry.load(settings.python, settings.stdlib_fallback)
    except StandardLibraryQueryError as e:
        logger.error(f"Cannot determine standard library modules: {e}")
        return 1

    walker = ProjectWalker(extra_excluded=[Path(settings.venv_name).name, *settings.extra_excluded_dirs])
    resolver = DependencyResolver(
        registry,
        mapping,
        walker=walker,
        manifest_name=settings.manifest_name,
        manifest_max_depth=settings.manifest_max_depth,
        subdirs=settings.source_subdirs,
    )

    try:
        libraries = resolver.resolve(target)
    except PathNotFoundError as e:
        logger.error(str(e))
        return 1

    if args.dry_run:
        for name in libraries:
            print(name)
        return 0

    installer = VenvInstaller(settings.venv_name, settings.python)
    try:
        installer.ensure()
        installer.install(libraries)
    except ExternalCommandError as e:
        logger.error(str(e))
        return e.returncode

    print("\nSuccess! Now run your script using:")
    print(f"    {installer.activate_hint(target)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
