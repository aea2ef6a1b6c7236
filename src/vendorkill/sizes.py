"""Directory size calculation and formatting."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from vendorkill.filesystem import FileSystem, LocalFileSystem
from vendorkill.models import DEFAULT_WORKERS, DirectorySize, ScanWarning, ScanWarningKind

log = logging.getLogger(__name__)

SIZE_UNITS = ["KB", "MB", "GB", "TB"]


def format_size(size_bytes: int) -> str:
    """
    Format a byte count the way ``du -s`` output was always shown.

    The count is expressed in KB first, then divided by 1024 while the
    value is strictly greater than 1024, up to TB. Exactly 1024 stays in
    the current unit.

    Examples:
        >>> format_size(1536)
        '1.5 KB'
        >>> format_size(1048576)
        '1024 KB'
    """
    size = size_bytes / 1024
    unit = 0
    while size > 1024 and unit < len(SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    number = f"{size:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[unit]}"


def get_directory_size(path: str, fs: Optional[FileSystem] = None) -> DirectorySize:
    """
    Calculate the allocated size of a directory tree.

    Unreadable entries never fail the calculation; they are counted in
    ``DirectorySize.skipped`` and the size becomes a lower bound.
    """
    fs = fs or LocalFileSystem()
    size = fs.disk_usage(path)
    if size.partial:
        log.warning("Size of %s is incomplete: %d entries skipped", path, size.skipped)
    return size


def measure_directories(
    paths: Iterable[str],
    fs: Optional[FileSystem] = None,
    workers: int = DEFAULT_WORKERS,
    progress_callback: Callable[[str, int], None] | None = None,
) -> list[DirectorySize]:
    """
    Measure several directories, optionally in parallel.

    Args:
        paths: Directories to measure
        fs: File system to use (defaults to the local one)
        workers: Maximum worker threads; 1 measures sequentially
        progress_callback: Optional callback(path, size_bytes) per finished directory

    Returns:
        One DirectorySize per path, in the same order as ``paths``
    """
    fs = fs or LocalFileSystem()
    paths = list(paths)
    if not paths:
        return []

    if workers <= 1 or len(paths) == 1:
        sizes = []
        for path in paths:
            size = get_directory_size(path, fs)
            sizes.append(size)
            if progress_callback:
                progress_callback(path, size.size_bytes)
        return sizes

    with ThreadPoolExecutor(max_workers=min(workers, len(paths))) as executor:
        futures = [executor.submit(get_directory_size, path, fs) for path in paths]
        sizes = []
        for path, future in zip(paths, futures):
            size = future.result()
            sizes.append(size)
            if progress_callback:
                progress_callback(path, size.size_bytes)
    return sizes


def total_size(sizes: Iterable[DirectorySize]) -> int:
    """Integer sum of measured sizes."""
    return sum(s.size_bytes for s in sizes)


def size_warnings(sizes: Iterable[DirectorySize]) -> list[ScanWarning]:
    """Warnings for every size that is only a lower bound."""
    return [
        ScanWarning(
            kind=ScanWarningKind.PARTIAL_SIZE,
            path=s.path,
            message=f"{s.skipped} entries could not be read ({s.error}); size is a lower bound",
        )
        for s in sizes
        if s.partial
    ]
