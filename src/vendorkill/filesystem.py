"""File-system access used by the discovery and deletion pipeline.

Everything goes through native ``os``/``shutil`` calls; paths are never
handed to a shell, so spaces and shell metacharacters need no quoting.
"""

import logging
import os
import shutil
import stat
from abc import ABC, abstractmethod
from typing import Callable, Optional

from vendorkill.models import DirectorySize

log = logging.getLogger(__name__)

# st_blocks is always counted in 512-byte units, whatever the block size
BLOCK_SIZE = 512


class FileSystem(ABC):
    """Operations the pipeline needs from a file system."""

    @abstractmethod
    def list_directories(
        self, path: str, on_error: Optional[Callable[[str, OSError], None]] = None
    ) -> list[str]:
        """Return child directories of *path*, sorted by name.

        Symbolic links are never reported as directories. Raises ``OSError``
        when *path* cannot be listed. A child whose type cannot be read is
        left out and handed to *on_error* with the error.
        """

    @abstractmethod
    def disk_usage(self, path: str) -> DirectorySize:
        """Return allocated disk usage of the tree rooted at *path*."""

    @abstractmethod
    def remove_tree(self, path: str) -> None:
        """Recursively and permanently delete *path*."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """True if *path* is a directory (links are followed)."""

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """True if *path* is a regular file (links are followed)."""

    @abstractmethod
    def is_symlink(self, path: str) -> bool:
        """True if *path* is a symbolic link."""

    def exists(self, path: str) -> bool:
        return self.is_symlink(path) or self.is_dir(path) or self.is_file(path)


class LocalFileSystem(FileSystem):
    """The real, local file system."""

    def list_directories(
        self, path: str, on_error: Optional[Callable[[str, OSError], None]] = None
    ) -> list[str]:
        children = []
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        children.append(entry.name)
                except OSError as e:
                    log.debug("Cannot stat %s: %s", entry.path, e)
                    if on_error:
                        on_error(entry.path, e)
        return [os.path.join(path, name) for name in sorted(children)]

    def disk_usage(self, path: str) -> DirectorySize:
        """
        Sum allocated blocks below *path*, like ``du -s``.

        Symlinks are counted by their own allocation and never followed.
        Hard-linked files are counted once. Entries that cannot be read are
        left out and counted in ``skipped``.
        """
        total = 0
        files = 0
        dirs = 0
        skipped = 0
        last_error = None
        seen_inodes: set[tuple[int, int]] = set()

        try:
            root_stat = os.lstat(path)
        except OSError as e:
            return DirectorySize(path=path, skipped=1, error=str(e))
        total += root_stat.st_blocks * BLOCK_SIZE

        stack = [path]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as entries:
                    for entry in entries:
                        try:
                            st = entry.stat(follow_symlinks=False)
                        except OSError as e:
                            skipped += 1
                            last_error = str(e)
                            continue

                        if st.st_nlink > 1 and not stat.S_ISDIR(st.st_mode):
                            key = (st.st_dev, st.st_ino)
                            if key in seen_inodes:
                                continue
                            seen_inodes.add(key)

                        total += st.st_blocks * BLOCK_SIZE
                        if stat.S_ISDIR(st.st_mode):
                            dirs += 1
                            stack.append(entry.path)
                        else:
                            files += 1
            except OSError as e:
                skipped += 1
                last_error = str(e)
                log.debug("Cannot list %s: %s", current, e)

        return DirectorySize(
            path=path,
            size_bytes=total,
            file_count=files,
            dir_count=dirs,
            skipped=skipped,
            error=last_error,
        )

    def remove_tree(self, path: str) -> None:
        shutil.rmtree(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)
