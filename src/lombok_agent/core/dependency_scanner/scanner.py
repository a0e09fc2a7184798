"""
Lombok dependency scanner.

Walks a project tree looking at Maven and Gradle build descriptors for a
Lombok declaration. Detection is pattern based: files are never parsed.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Iterable, NamedTuple

from .interfaces import DependencyScannerInterface
from .models import BUILD_FILES, LOMBOK_MATCHERS, SKIP_DIRS, ScanResult

logger = logging.getLogger(__name__)


class _Entry(NamedTuple):
    path: Path
    is_dir: bool
    is_file: bool


def has_lombok_dependency(content: str) -> bool:
    """Return True if build file text declares Lombok."""
    return any(matcher.search(content) for matcher in LOMBOK_MATCHERS)


def _list_entries(directory: Path, follow_symlinks: bool = False) -> list[_Entry]:
    """
    List a directory, classifying each entry. Unreadable directories are empty.

    Symlinks count as neither file nor directory unless follow_symlinks is set.
    """
    entries: list[_Entry] = []
    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                try:
                    is_dir = dir_entry.is_dir(follow_symlinks=follow_symlinks)
                    is_file = dir_entry.is_file(follow_symlinks=follow_symlinks)
                except OSError:
                    continue
                entries.append(_Entry(Path(dir_entry.path), is_dir, is_file))
    except PermissionError as e:
        logger.warning(f"Permission denied accessing directory: {directory} - {e}")
        return []
    except (OSError, ValueError) as e:
        logger.warning(f"Error accessing directory: {directory!r} - {e}")
        return []
    return entries


def _read_text(file_path: Path) -> str:
    """Read a build file, returning an empty string on failure."""
    try:
        return file_path.read_text(encoding="utf-8", errors="replace")
    except (OSError, ValueError) as e:
        logger.warning(f"Error reading file: {file_path!r} - {e}")
        return ""


def _resolve(path: Path) -> Path | None:
    try:
        return path.resolve()
    except (OSError, RuntimeError, ValueError):
        return None


class LombokScanner(DependencyScannerInterface):
    """
    Concrete implementation of DependencyScannerInterface for Lombok.

    Provides a sequential depth-first walk with:
    - Exact-name matching of build descriptors
    - A fixed "do not descend" set of directory names
    - Short-circuit on the first matching descriptor
    - Symlinks ignored by default, with cycle protection when followed
    """

    def __init__(
        self,
        build_files: Iterable[str] | None = None,
        skip_dirs: Iterable[str] | None = None,
        follow_symlinks: bool = False,
    ):
        """
        Initialize the scanner.

        Args:
            build_files: Filenames treated as build descriptors.
                         If None, uses BUILD_FILES.
            skip_dirs: Directory names never descended into.
                       If None, uses SKIP_DIRS.
            follow_symlinks: Whether to treat symlinked directories and build
                             files like real ones. Directories already on the
                             walk stack are skipped.
        """
        self._build_files = frozenset(build_files) if build_files is not None else BUILD_FILES
        self._skip_dirs = frozenset(skip_dirs) if skip_dirs is not None else SKIP_DIRS
        self._follow_symlinks = follow_symlinks

    def should_descend(self, name: str) -> bool:
        """Return True if a directory with this name may be walked."""
        return name not in self._skip_dirs

    def is_build_file(self, name: str) -> bool:
        """Return True if a file with this name is a build descriptor."""
        return name in self._build_files

    async def scan(self, root_path: Path) -> ScanResult:
        """
        Recursively scan a project tree for a Lombok dependency.

        Args:
            root_path: Root directory to scan

        Returns:
            ScanResult with the first matching build file, if any
        """
        result = ScanResult(detected=False)
        try:
            root = Path(root_path)
        except TypeError:
            logger.debug(f"Ignoring non-path scan root: {root_path!r}")
            return result

        stack: set[Path] = set()
        match = await self._scan_directory(root, stack, result)
        if match is not None:
            result.detected = True
            result.build_file = match
        return result

    async def _scan_directory(
        self, current_path: Path, stack: set[Path], result: ScanResult
    ) -> Path | None:
        """
        Scan one directory and its non-excluded subdirectories.

        Args:
            current_path: Directory being scanned
            stack: Resolved paths of the directories currently being walked
            result: Accumulates the number of inspected files

        Returns:
            Path of the first matching build file, or None
        """
        real_path = await asyncio.to_thread(_resolve, current_path)
        if real_path is not None:
            if real_path in stack:
                logger.debug(f"Skipping recursive cycle: {current_path} -> {real_path}")
                return None
            stack.add(real_path)

        try:
            entries = await asyncio.to_thread(
                _list_entries, current_path, self._follow_symlinks
            )

            for entry in entries:
                name = entry.path.name

                if entry.is_file and self.is_build_file(name):
                    result.files_inspected += 1
                    content = await asyncio.to_thread(_read_text, entry.path)
                    if content and has_lombok_dependency(content):
                        logger.debug(f"Lombok declared in {entry.path}")
                        return entry.path

                if entry.is_dir:
                    if not self.should_descend(name):
                        logger.debug(f"Skipping excluded directory: {entry.path}")
                        continue
                    match = await self._scan_directory(entry.path, stack, result)
                    if match is not None:
                        return match
        finally:
            # Allow other paths to reach this real directory once we backtrack
            if real_path is not None:
                stack.discard(real_path)

        return None


async def detect_lombok_dependency(project_root: Path | str) -> bool:
    """Return True if any build file under project_root declares Lombok."""
    result = await LombokScanner().scan(project_root)
    return result.detected
