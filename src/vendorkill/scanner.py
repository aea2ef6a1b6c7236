"""Discovery of vendor directories.

This module walks a search root looking for directories with a marker
name (``vendor`` by default) and keeps only those whose parent holds a
project manifest (``composer.json`` by default).
"""

import logging
import os
from typing import Callable, Generator, Iterable, Optional

from vendorkill.errors import ConfigError, InvalidRoot, ScanFailed
from vendorkill.filesystem import FileSystem, LocalFileSystem
from vendorkill.models import (
    DEFAULT_MANIFEST,
    DEFAULT_MARKER,
    DEFAULT_MAX_DEPTH,
    ScanReport,
    ScanWarning,
    ScanWarningKind,
)

log = logging.getLogger(__name__)


def find_matching_directories(
    root: str,
    marker: str,
    max_depth: int,
    fs: FileSystem,
    on_error: Callable[[str, OSError], None] | None = None,
    _depth: int = 0,
) -> Generator[str, None, None]:
    """
    Find directories named *marker* below *root*, in lexical pre-order.

    The root sits at depth 0, so its children are at depth 1. A directory
    at depth ``d`` is considered only when ``d <= max_depth``, which is how
    ``find -maxdepth`` counts. Matches are searched too, so a vendor tree
    nested inside another one is reported right after its outer match.

    Args:
        root: Directory to start searching from
        marker: Directory name to match (e.g., 'vendor')
        max_depth: Maximum depth of a reported directory
        fs: File system to list directories with
        on_error: Optional callback(path, error) for entries that cannot be read

    Yields:
        Paths to matching directories
    """
    if _depth >= max_depth:
        return

    def skip(path: str, error: OSError) -> None:
        log.warning("Skipping unreadable directory %s: %s", path, error)
        if on_error:
            on_error(path, error)

    try:
        children = fs.list_directories(root, on_error=skip)
    except OSError as e:
        if _depth == 0:
            raise
        skip(root, e)
        return

    for child in children:
        if os.path.basename(child) == marker:
            yield child

        yield from find_matching_directories(
            child,
            marker,
            max_depth,
            fs,
            on_error,
            _depth + 1,
        )


def scan_vendor_directories(
    root: Optional[str] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    marker: str = DEFAULT_MARKER,
    fs: Optional[FileSystem] = None,
) -> ScanReport:
    """
    Collect every directory named *marker* within *max_depth* of *root*.

    Args:
        root: Search root; the current working directory when None
        max_depth: Maximum traversal depth (non-negative)
        marker: Directory name to collect
        fs: File system to use (defaults to the local one)

    Returns:
        ScanReport with paths in traversal order and any partial-scan warnings

    Raises:
        InvalidRoot: root is missing or not a directory
        ScanFailed: root itself cannot be listed
        ConfigError: max_depth is negative
    """
    fs = fs or LocalFileSystem()
    if max_depth < 0:
        raise ConfigError(f"max depth must be zero or positive, got {max_depth}")

    root = os.path.abspath(root if root is not None else os.getcwd())
    if not fs.exists(root):
        raise InvalidRoot(root)
    if not fs.is_dir(root):
        raise InvalidRoot(root, "not a directory")

    warnings: list[ScanWarning] = []

    def record(path: str, error: OSError) -> None:
        warnings.append(
            ScanWarning(
                kind=ScanWarningKind.PARTIAL_SCAN,
                path=path,
                message=error.strerror or str(error),
            )
        )

    log.info("Scanning %s for '%s' directories (max depth %d)", root, marker, max_depth)
    try:
        paths = list(find_matching_directories(root, marker, max_depth, fs, on_error=record))
    except OSError as e:
        raise ScanFailed(root, e) from e

    log.info("Found %d '%s' directories", len(paths), marker)
    return ScanReport(root=root, max_depth=max_depth, paths=paths, warnings=warnings)


def has_manifest(
    candidate: str,
    manifest: str = DEFAULT_MANIFEST,
    fs: Optional[FileSystem] = None,
) -> bool:
    """
    Check whether the candidate's parent directory holds a manifest file.

    Only existence is checked; the manifest is never opened. Anything that
    cannot be verified counts as missing.
    """
    fs = fs or LocalFileSystem()
    manifest_path = os.path.join(os.path.dirname(candidate), manifest)
    try:
        return fs.is_file(manifest_path)
    except OSError as e:
        log.warning("Cannot check %s: %s", manifest_path, e)
        return False


def filter_by_manifest(
    candidates: Iterable[str],
    manifest: str = DEFAULT_MANIFEST,
    fs: Optional[FileSystem] = None,
) -> list[str]:
    """Keep candidates backed by a sibling manifest, preserving order."""
    fs = fs or LocalFileSystem()
    accepted = []
    for candidate in candidates:
        if has_manifest(candidate, manifest, fs):
            accepted.append(candidate)
        else:
            log.debug("Rejected %s: no %s next to it", candidate, manifest)
    return accepted
