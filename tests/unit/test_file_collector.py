"""Unit tests for the file collector."""

import unittest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch

from decoreco.core.exceptions import CollectionError
from decoreco.core.modules.processing.file_collector import (
    clean_explicit, discover_files, filter_nonempty, sort_by_size, collect_files,
    VIDEO_EXTENSIONS, IMAGE_EXTENSIONS
)
from tests.fakes import make_file


class TestExplicitSet(unittest.TestCase):

    def test_blank_entries_dropped(self):
        files = clean_explicit(["a.mkv", "", "   ", "b.mp4"])
        self.assertEqual(files, [Path("a.mkv"), Path("b.mp4")])

    def test_order_preserved(self):
        files = clean_explicit(["z.mkv", "a.mkv"])
        self.assertEqual([f.name for f in files], ["z.mkv", "a.mkv"])


class TestDiscoverFiles(unittest.TestCase):
    """Test directory walks."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        make_file(self.temp_dir / "top.mkv", 10)
        make_file(self.temp_dir / "clip.MP4", 10)
        make_file(self.temp_dir / "notes.txt", 10)
        make_file(self.temp_dir / "photo.png", 10)
        make_file(self.temp_dir / "sub" / "nested.webm", 10)
        make_file(self.temp_dir / "sub" / "deeper" / "deep.avi", 10)
        make_file(self.temp_dir / "sub" / "pic.jpeg", 10)

    def tearDown(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def _names(self, files):
        return sorted(f.name for f in files)

    def test_video_extensions(self):
        files = discover_files(self.temp_dir, VIDEO_EXTENSIONS)
        self.assertEqual(self._names(files), ["clip.MP4", "deep.avi", "nested.webm", "top.mkv"])

    def test_image_extensions(self):
        files = discover_files(self.temp_dir, IMAGE_EXTENSIONS)
        self.assertEqual(self._names(files), ["pic.jpeg", "photo.png"])

    def test_depth_one_is_root_only(self):
        files = discover_files(self.temp_dir, VIDEO_EXTENSIONS, depth=1)
        self.assertEqual(self._names(files), ["clip.MP4", "top.mkv"])

    def test_depth_two_includes_direct_subdirectories(self):
        files = discover_files(self.temp_dir, VIDEO_EXTENSIONS, depth=2)
        self.assertEqual(self._names(files), ["clip.MP4", "nested.webm", "top.mkv"])

    def test_depth_zero_finds_nothing(self):
        self.assertEqual(discover_files(self.temp_dir, VIDEO_EXTENSIONS, depth=0), [])

    def test_symlinks_skipped(self):
        (self.temp_dir / "link.mkv").symlink_to(self.temp_dir / "top.mkv")
        found = discover_files(self.temp_dir, VIDEO_EXTENSIONS)
        self.assertNotIn("link.mkv", self._names(found))
        self.assertIn("top.mkv", self._names(found))

    def test_results_sorted(self):
        files = discover_files(self.temp_dir, VIDEO_EXTENSIONS)
        self.assertEqual(files, sorted(files))

    def test_missing_root_is_fatal(self):
        with self.assertRaises(CollectionError):
            discover_files(self.temp_dir / "missing", VIDEO_EXTENSIONS)

    def test_file_root_is_fatal(self):
        with self.assertRaises(CollectionError):
            discover_files(self.temp_dir / "top.mkv", VIDEO_EXTENSIONS)

    def test_walk_error_is_fatal(self):
        def broken_walk(root, onerror=None):
            onerror(PermissionError(13, "Permission denied", str(root)))
            return iter(())

        with patch("decoreco.core.modules.processing.file_collector.os.walk", side_effect=broken_walk):
            with self.assertRaises(CollectionError):
                discover_files(self.temp_dir, VIDEO_EXTENSIONS)


class TestFilteringAndSorting(unittest.TestCase):

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.small = make_file(self.temp_dir / "small.mkv", 100)
        self.large = make_file(self.temp_dir / "large.mkv", 3000)
        self.medium = make_file(self.temp_dir / "medium.mkv", 2000)
        self.empty = make_file(self.temp_dir / "empty.mkv", 0)

    def tearDown(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_empty_files_dropped(self):
        kept = filter_nonempty([self.small, self.empty, self.large])
        self.assertEqual(kept, [self.small, self.large])

    def test_unreadable_files_dropped_with_warning(self):
        missing = self.temp_dir / "gone.mkv"
        with patch("decoreco.core.modules.processing.file_collector.logger") as mock_logger:
            kept = filter_nonempty([missing, self.small])
        self.assertEqual(kept, [self.small])
        mock_logger.warn.assert_called_once()
        self.assertIn("gone.mkv", mock_logger.warn.call_args[0][0])

    def test_sort_ascending(self):
        files = sort_by_size([self.large, self.small, self.medium])
        sizes = [f.stat().st_size for f in files]
        self.assertEqual(sizes, sorted(sizes))

    def test_sort_descending(self):
        files = sort_by_size([self.small, self.large, self.medium], reverse=True)
        sizes = [f.stat().st_size for f in files]
        self.assertEqual(sizes, sorted(sizes, reverse=True))


class TestCollectFiles(unittest.TestCase):

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        make_file(self.temp_dir / "b.mkv", 500)
        make_file(self.temp_dir / "a.mkv", 1500)
        make_file(self.temp_dir / "c.mkv", 0)

    def tearDown(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_walk_filters_empty(self):
        files = collect_files(root=self.temp_dir)
        self.assertEqual([f.name for f in files], ["a.mkv", "b.mkv"])

    def test_sort(self):
        files = collect_files(root=self.temp_dir, sort=True)
        self.assertEqual([f.name for f in files], ["b.mkv", "a.mkv"])

    def test_sort_reverse(self):
        files = collect_files(root=self.temp_dir, sort=True, reverse=True)
        self.assertEqual([f.name for f in files], ["a.mkv", "b.mkv"])

    def test_reverse_without_sort_keeps_order(self):
        files = collect_files(root=self.temp_dir, reverse=True)
        self.assertEqual([f.name for f in files], ["a.mkv", "b.mkv"])

    def test_explicit_set_overrides_root(self):
        explicit = [str(self.temp_dir / "b.mkv"), ""]
        files = collect_files(root=Path("/does/not/exist"), explicit=explicit)
        self.assertEqual([f.name for f in files], ["b.mkv"])

    def test_explicit_set_is_not_extension_filtered(self):
        other = make_file(self.temp_dir / "anim.gif", 10)
        files = collect_files(explicit=[str(other)], images=True)
        self.assertEqual(files, [other])

    def test_nothing_given_is_fatal(self):
        with self.assertRaises(CollectionError):
            collect_files()


if __name__ == '__main__':
    unittest.main()
