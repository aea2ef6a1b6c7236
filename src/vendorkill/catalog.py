"""Catalog building: the indexed list of deletable vendor directories."""

import logging
import os
from typing import Callable, Iterable, Optional

from vendorkill.filesystem import FileSystem, LocalFileSystem
from vendorkill.models import Catalog, DirectorySize, RunSummary, ScanConfig, ScanWarning, VendorEntry
from vendorkill.scanner import filter_by_manifest, scan_vendor_directories
from vendorkill.sizes import format_size, measure_directories, size_warnings, total_size

log = logging.getLogger(__name__)


def summarize(entries: Iterable[VendorEntry]) -> RunSummary:
    """Count and total size of catalog entries."""
    entries = list(entries)
    total = sum(e.size_bytes for e in entries)
    return RunSummary(count=len(entries), total_bytes=total, total_human=format_size(total))


def build_catalog(
    sizes: Iterable[DirectorySize],
    warnings: Iterable[ScanWarning] = (),
) -> Catalog:
    """
    Number measured vendor directories 1..N in the order given.

    The same input always produces the same indices, and the returned
    catalog is frozen, so the numbers shown to the user are the numbers
    used for deletion.
    """
    sizes = list(sizes)
    entries = tuple(
        VendorEntry(
            index=i,
            path=size.path,
            project_name=os.path.basename(os.path.dirname(size.path)),
            size_bytes=size.size_bytes,
            size_human=format_size(size.size_bytes),
            size_partial=size.partial,
        )
        for i, size in enumerate(sizes, start=1)
    )
    total = total_size(sizes)
    summary = RunSummary(count=len(entries), total_bytes=total, total_human=format_size(total))
    all_warnings = tuple(warnings) + tuple(size_warnings(sizes))
    return Catalog(entries=entries, summary=summary, warnings=all_warnings)


def discover(
    config: ScanConfig,
    fs: Optional[FileSystem] = None,
    progress_callback: Callable[[str, int], None] | None = None,
) -> Catalog:
    """
    Run scan, manifest filter and size calculation, then build the catalog.

    Args:
        config: Search options
        fs: File system to use (defaults to the local one)
        progress_callback: Optional callback(path, size_bytes) per measured directory

    Returns:
        Frozen catalog; empty when nothing qualifies
    """
    fs = fs or LocalFileSystem()
    report = scan_vendor_directories(config.search_root, config.max_depth, config.marker, fs)
    accepted = filter_by_manifest(report.paths, config.manifest, fs)
    log.info("%d of %d directories have a %s", len(accepted), len(report.paths), config.manifest)

    sizes = measure_directories(accepted, fs, config.workers, progress_callback)
    return build_catalog(sizes, report.warnings)
