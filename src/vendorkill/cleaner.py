"""Deletion of selected vendor directories."""

import logging
from typing import Callable, Iterable, Optional

from vendorkill.filesystem import FileSystem, LocalFileSystem
from vendorkill.models import DeletionResult, DeletionSummary, VendorEntry

log = logging.getLogger(__name__)


def delete_entry(
    entry: VendorEntry,
    dry_run: bool = False,
    fs: Optional[FileSystem] = None,
) -> DeletionResult:
    """
    Permanently delete one vendor directory.

    Never raises for file-system problems: a path that vanished, turned
    into a symlink or cannot be removed yields a failed result instead.

    Args:
        entry: Catalog entry to delete
        dry_run: If True, don't actually delete

    Returns:
        DeletionResult for the entry
    """
    fs = fs or LocalFileSystem()

    def failed(message: str) -> DeletionResult:
        log.warning("Could not delete %s: %s", entry.path, message)
        return DeletionResult(
            index=entry.index,
            path=entry.path,
            bytes_freed=0,
            success=False,
            error=message,
            dry_run=dry_run,
        )

    if fs.is_symlink(entry.path):
        return failed("Path is now a symbolic link, refusing to follow it")
    if not fs.exists(entry.path):
        return failed("Already removed")
    if not fs.is_dir(entry.path):
        return failed("Path is no longer a directory")

    if not dry_run:
        try:
            fs.remove_tree(entry.path)
        except PermissionError as e:
            return failed(f"Permission denied: {e}")
        except OSError as e:
            return failed(f"OS error: {e}")
        log.info("Deleted %s (%d bytes)", entry.path, entry.size_bytes)

    return DeletionResult(
        index=entry.index,
        path=entry.path,
        bytes_freed=entry.size_bytes,
        success=True,
        dry_run=dry_run,
    )


def delete_entries(
    entries: Iterable[VendorEntry],
    dry_run: bool = False,
    fs: Optional[FileSystem] = None,
    on_result: Callable[[DeletionResult], None] | None = None,
) -> DeletionSummary:
    """
    Delete every given entry; a failure never stops the remaining ones.

    Args:
        entries: Entries already resolved from a catalog
        dry_run: If True, don't actually delete
        on_result: Optional callback fired after each entry

    Returns:
        DeletionSummary with one result per entry
    """
    fs = fs or LocalFileSystem()
    summary = DeletionSummary()
    for entry in entries:
        result = delete_entry(entry, dry_run=dry_run, fs=fs)
        summary.results.append(result)
        if on_result:
            on_result(result)
    return summary
