"""Tests for size calculation and formatting."""

import os
import threading
from unittest.mock import patch

import pytest

from vendorkill.filesystem import LocalFileSystem
from vendorkill.models import DirectorySize, ScanWarningKind
from vendorkill.sizes import (
    format_size,
    get_directory_size,
    measure_directories,
    size_warnings,
    total_size,
)


class TestFormatSize:
    def test_below_one_kilobyte(self):
        assert format_size(500) == "0.49 KB"

    def test_one_kilobyte(self):
        assert format_size(1024) == "1 KB"

    def test_one_and_a_half_kilobytes(self):
        assert format_size(1536) == "1.5 KB"

    def test_exactly_1024_kilobytes_stays_in_kilobytes(self):
        """Promotion only happens above 1024, not at it."""
        assert format_size(1048576) == "1024 KB"

    def test_just_above_boundary_promotes(self):
        assert format_size(1048576 + 1024) == "1 MB"

    def test_exactly_1024_megabytes_stays_in_megabytes(self):
        assert format_size(1073741824) == "1024 MB"

    def test_ten_megabytes(self):
        assert format_size(10 * 1024**2) == "10 MB"

    def test_gigabytes(self):
        assert format_size(int(2.5 * 1024**3)) == "2.5 GB"

    def test_terabytes_is_the_ceiling(self):
        assert format_size(3000 * 1024**4) == "3000 TB"

    def test_zero(self):
        assert format_size(0) == "0 KB"

    def test_rounds_to_two_decimals(self):
        assert format_size(1234 * 1024) == "1.21 MB"


class TestGetDirectorySize:
    def test_empty_directory(self, tmp_path):
        size = get_directory_size(str(tmp_path))
        assert size.file_count == 0
        assert size.dir_count == 0
        assert not size.partial

    def test_counts_allocated_blocks(self, tmp_path):
        (tmp_path / "data.bin").write_bytes(os.urandom(64 * 1024))
        size = get_directory_size(str(tmp_path))
        assert size.size_bytes >= 64 * 1024
        assert size.size_bytes % 512 == 0
        assert size.file_count == 1

    def test_nested_directories(self, tmp_path):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        (nested / "file.txt").write_text("hello")
        (tmp_path / "a" / "other.txt").write_text("world")

        size = get_directory_size(str(tmp_path))
        assert size.file_count == 2
        assert size.dir_count == 2

    def test_hard_links_counted_once(self, tmp_path):
        original = tmp_path / "original.bin"
        original.write_bytes(os.urandom(64 * 1024))
        before = get_directory_size(str(tmp_path)).size_bytes

        os.link(original, tmp_path / "linked.bin")
        after = get_directory_size(str(tmp_path))

        assert after.size_bytes == before
        assert after.file_count == 1

    def test_symlinks_not_followed(self, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "big.bin").write_bytes(os.urandom(256 * 1024))
        inside = tmp_path / "inside"
        inside.mkdir()
        (inside / "link").symlink_to(outside, target_is_directory=True)

        size = get_directory_size(str(inside))
        assert size.size_bytes < 256 * 1024
        assert size.dir_count == 0

    def test_unreadable_subdirectory_is_skipped(self, tmp_path):
        (tmp_path / "ok").mkdir()
        (tmp_path / "ok" / "file.txt").write_text("fine")
        locked = tmp_path / "locked"
        locked.mkdir()

        real_scandir = os.scandir

        def flaky_scandir(path):
            if os.fspath(path) == str(locked):
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        with patch("vendorkill.filesystem.os.scandir", side_effect=flaky_scandir):
            size = get_directory_size(str(tmp_path))

        assert size.partial
        assert size.skipped == 1
        assert "Permission denied" in size.error
        assert size.file_count == 1

    def test_missing_directory(self, tmp_path):
        size = get_directory_size(str(tmp_path / "gone"))
        assert size.size_bytes == 0
        assert size.partial

    def test_uses_given_file_system(self, fake_fs):
        fake_fs.add_dir("/work/app/vendor", size_bytes=4096)
        assert get_directory_size("/work/app/vendor", fake_fs).size_bytes == 4096


class TestMeasureDirectories:
    def test_empty_input(self, fake_fs):
        assert measure_directories([], fake_fs) == []

    @pytest.mark.parametrize("workers", [1, 4])
    def test_preserves_input_order(self, fake_fs, workers):
        paths = [f"/work/p{i}/vendor" for i in range(10)]
        for i, path in enumerate(paths):
            fake_fs.add_dir(path, size_bytes=(10 - i) * 1024)

        sizes = measure_directories(paths, fake_fs, workers=workers)
        assert [s.path for s in sizes] == paths
        assert [s.size_bytes for s in sizes] == [(10 - i) * 1024 for i in range(10)]

    def test_runs_in_worker_threads(self, fake_fs):
        paths = [fake_fs.add_dir(f"/work/p{i}/vendor") for i in range(3)]
        threads = set()
        original = fake_fs.disk_usage

        def recording_disk_usage(path):
            threads.add(threading.current_thread().name)
            return original(path)

        fake_fs.disk_usage = recording_disk_usage
        measure_directories(paths, fake_fs, workers=3)
        assert threading.main_thread().name not in threads

    def test_progress_callback(self, fake_fs):
        paths = [fake_fs.add_dir(f"/work/p{i}/vendor", size_bytes=512) for i in range(3)]
        seen = []
        measure_directories(paths, fake_fs, workers=2, progress_callback=lambda p, s: seen.append((p, s)))
        assert seen == [(p, 512) for p in paths]

    def test_real_directories(self, make_project):
        vendor = make_project("app")
        sizes = measure_directories([str(vendor)], LocalFileSystem())
        assert sizes[0].file_count == 2


class TestTotals:
    def test_total_size_is_integer_sum(self):
        sizes = [DirectorySize(path=f"/p{i}", size_bytes=1024 * i) for i in range(5)]
        assert total_size(sizes) == 1024 * 10

    def test_size_warnings_only_for_partial(self):
        sizes = [
            DirectorySize(path="/a", size_bytes=10),
            DirectorySize(path="/b", size_bytes=10, skipped=2, error="Permission denied"),
        ]
        warnings = size_warnings(sizes)
        assert len(warnings) == 1
        assert warnings[0].path == "/b"
        assert warnings[0].kind == ScanWarningKind.PARTIAL_SIZE
        assert "lower bound" in warnings[0].message
