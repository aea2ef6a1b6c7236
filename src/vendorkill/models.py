"""Data models for vendorkill."""

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from vendorkill.errors import InvalidSelection

DEFAULT_MARKER = "vendor"
DEFAULT_MANIFEST = "composer.json"
DEFAULT_MAX_DEPTH = 2
DEFAULT_WORKERS = 4


class ScanConfig(BaseModel):
    """Options for a single discovery run."""

    search_root: str = Field(default_factory=os.getcwd, description="Directory to search from")
    max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=0, description="Maximum traversal depth")
    marker: str = Field(DEFAULT_MARKER, min_length=1, description="Directory name to look for")
    manifest: str = Field(
        DEFAULT_MANIFEST,
        min_length=1,
        description="File that must exist next to a marker directory",
    )
    workers: int = Field(DEFAULT_WORKERS, ge=1, description="Size calculation worker threads")


class ScanWarningKind(str, Enum):
    """Kind of non-fatal problem met during a run."""

    PARTIAL_SCAN = "partial_scan"  # Subtree could not be listed
    PARTIAL_SIZE = "partial_size"  # Size is a lower bound


class ScanWarning(BaseModel):
    """A non-fatal problem attached to a path."""

    model_config = ConfigDict(frozen=True)

    kind: ScanWarningKind = Field(..., description="What went wrong")
    path: str = Field(..., description="Affected path")
    message: str = Field(..., description="Human-readable detail")


class ScanReport(BaseModel):
    """Directories found by the scanner, in traversal order."""

    root: str = Field(..., description="Absolute search root")
    max_depth: int = Field(..., description="Depth bound used")
    paths: list[str] = Field(default_factory=list, description="Matching directories")
    warnings: list[ScanWarning] = Field(default_factory=list)


class DirectorySize(BaseModel):
    """Disk usage of one directory tree."""

    path: str = Field(..., description="Measured directory")
    size_bytes: int = Field(0, ge=0, description="Allocated bytes, du semantics")
    file_count: int = Field(0, description="Number of non-directory entries")
    dir_count: int = Field(0, description="Number of subdirectories")
    skipped: int = Field(0, description="Entries that could not be read")
    error: Optional[str] = Field(None, description="Last error met while measuring")

    @property
    def partial(self) -> bool:
        """Whether some entries were left out of the sum."""
        return self.skipped > 0


class VendorEntry(BaseModel):
    """A confirmed vendor directory offered for deletion."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1, description="1-based catalog position")
    path: str = Field(..., description="Vendor directory path")
    project_name: str = Field(..., description="Name of the owning project directory")
    size_bytes: int = Field(..., ge=0, description="Allocated bytes")
    size_human: str = Field(..., description="Formatted size")
    size_partial: bool = Field(False, description="Size is a lower bound")

    @property
    def label(self) -> str:
        """Display label used by the selection prompt."""
        return f"{self.project_name} ({self.size_human}) [{self.path}]"


class RunSummary(BaseModel):
    """Aggregate view over a catalog."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(0, description="Number of entries")
    total_bytes: int = Field(0, description="Sum of entry sizes")
    total_human: str = Field(..., description="Formatted total")


class Catalog(BaseModel):
    """Frozen, indexed list of vendor entries for one run."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[VendorEntry, ...] = Field(default_factory=tuple)
    summary: RunSummary
    warnings: tuple[ScanWarning, ...] = Field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def options(self) -> dict[int, str]:
        """Index to label mapping, in catalog order."""
        return {entry.index: entry.label for entry in self.entries}

    def get(self, index: int) -> VendorEntry:
        """Return the entry at a 1-based index."""
        if not 1 <= index <= len(self.entries):
            raise InvalidSelection(f"No vendor directory with number {index} (1-{len(self.entries)})")
        return self.entries[index - 1]

    def resolve(self, indices: list[int]) -> list[VendorEntry]:
        """Map selected indices to entries, validating every one first."""
        seen: set[int] = set()
        resolved = []
        for index in indices:
            if index in seen:
                continue
            resolved.append(self.get(index))
            seen.add(index)
        return resolved


class DeletionResult(BaseModel):
    """Outcome of deleting one vendor directory."""

    index: int = Field(..., description="Catalog index of the entry")
    path: str = Field(..., description="Directory that was targeted")
    bytes_freed: int = Field(0, description="Bytes reclaimed")
    success: bool = Field(True, description="Whether deletion succeeded")
    error: Optional[str] = Field(None, description="Error message if failed")
    dry_run: bool = Field(False, description="Whether this was a dry run")


class DeletionSummary(BaseModel):
    """All deletion outcomes for one run."""

    results: list[DeletionResult] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def total_bytes_freed(self) -> int:
        return sum(r.bytes_freed for r in self.results if r.success)
