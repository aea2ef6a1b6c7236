"""Shared fixtures for vendorkill tests."""

import os
from pathlib import Path

import pytest

from vendorkill.filesystem import FileSystem
from vendorkill.models import DirectorySize


class FakeFileSystem(FileSystem):
    """In-memory file system with injectable failures."""

    def __init__(self):
        self.dirs: set[str] = {"/"}
        self.files: set[str] = set()
        self.links: set[str] = set()
        self.sizes: dict[str, DirectorySize] = {}
        self.unreadable: set[str] = set()
        self.stat_errors: dict[str, OSError] = {}
        self.entry_errors: dict[str, OSError] = {}
        self.remove_errors: dict[str, OSError] = {}
        self.removed: list[str] = []

    def _add_parents(self, path: str) -> None:
        parent = os.path.dirname(path)
        while parent not in self.dirs:
            self.dirs.add(parent)
            parent = os.path.dirname(parent)

    def add_dir(self, path: str, size_bytes: int = 0, skipped: int = 0) -> str:
        self._add_parents(path)
        self.dirs.add(path)
        self.sizes[path] = DirectorySize(
            path=path,
            size_bytes=size_bytes,
            skipped=skipped,
            error="Permission denied" if skipped else None,
        )
        return path

    def add_file(self, path: str) -> str:
        self._add_parents(path)
        self.files.add(path)
        return path

    def list_directories(self, path, on_error=None):
        if path in self.unreadable:
            raise PermissionError(13, "Permission denied", path)
        if path not in self.dirs:
            raise FileNotFoundError(2, "No such file or directory", path)
        children = []
        for d in sorted(d for d in self.dirs if d != path and os.path.dirname(d) == path):
            if d in self.entry_errors:
                if on_error:
                    on_error(d, self.entry_errors[d])
                continue
            children.append(d)
        return children

    def disk_usage(self, path: str) -> DirectorySize:
        return self.sizes.get(path, DirectorySize(path=path))

    def remove_tree(self, path: str) -> None:
        if path in self.remove_errors:
            raise self.remove_errors[path]
        prefix = path + "/"
        self.dirs = {d for d in self.dirs if d != path and not d.startswith(prefix)}
        self.files = {f for f in self.files if not f.startswith(prefix)}
        self.removed.append(path)

    def is_dir(self, path: str) -> bool:
        return path in self.dirs

    def is_file(self, path: str) -> bool:
        if path in self.stat_errors:
            raise self.stat_errors[path]
        return path in self.files

    def is_symlink(self, path: str) -> bool:
        return path in self.links


@pytest.fixture
def fake_fs():
    return FakeFileSystem()


@pytest.fixture
def make_project(tmp_path):
    """Create ``<tmp_path>/<name>/vendor`` with an optional composer.json."""

    def _make(name: str, manifest: bool = True, payload: bytes = b"<?php\n") -> Path:
        project = tmp_path / name
        vendor = project / "vendor"
        (vendor / "acme" / "lib").mkdir(parents=True)
        (vendor / "acme" / "lib" / "Lib.php").write_bytes(payload)
        (vendor / "autoload.php").write_text("<?php return [];\n")
        if manifest:
            (project / "composer.json").write_text('{"name": "acme/%s"}' % name)
        return vendor

    return _make
