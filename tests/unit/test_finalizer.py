"""Unit tests for replacing originals with improved outputs."""

import unittest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch

from decoreco.core.exceptions import ReplaceError
from decoreco.core.modules.processing.finalizer import finalize, target_path, replace_atomically
from decoreco.core.modules.processing.transcoding_engine import ImageMode, VideoMode
from tests.fakes import make_file


class TestTargetPath(unittest.TestCase):

    def test_video_overwrites_source(self):
        self.assertEqual(target_path(Path("/m/a.mkv"), VideoMode()), Path("/m/a.mkv"))

    def test_image_appends_jxl(self):
        self.assertEqual(target_path(Path("/m/pic.png"), ImageMode()), Path("/m/pic.png.jxl"))


class TestFinalize(unittest.TestCase):

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.scratch = self.temp_dir / "scratch"
        self.media = self.temp_dir / "media"

    def tearDown(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_video_replaces_original(self):
        src = make_file(self.media / "a.mkv", 1000)
        out = make_file(self.scratch / "0.mkv", 600)
        result = finalize(src, out, VideoMode())
        self.assertEqual(result, src)
        self.assertEqual(src.stat().st_size, 600)
        self.assertFalse(out.exists())
        self.assertEqual(sorted(p.name for p in self.media.iterdir()), ["a.mkv"])

    def test_image_writes_jxl_and_removes_original(self):
        src = make_file(self.media / "pic.png", 1000)
        out = make_file(self.scratch / "0.jxl", 300)
        result = finalize(src, out, ImageMode())
        self.assertEqual(result, self.media / "pic.png.jxl")
        self.assertFalse(src.exists())
        self.assertEqual(result.stat().st_size, 300)

    def test_dry_run_changes_nothing(self):
        src = make_file(self.media / "a.mkv", 1000)
        out = make_file(self.scratch / "0.mkv", 600)
        finalize(src, out, VideoMode(), dry_run=True)
        self.assertEqual(src.stat().st_size, 1000)
        self.assertTrue(out.exists())

    def test_missing_output_raises(self):
        src = make_file(self.media / "a.mkv", 1000)
        with self.assertRaises(ReplaceError):
            finalize(src, self.scratch / "missing.mkv", VideoMode())
        self.assertEqual(src.stat().st_size, 1000)

    def test_failed_rename_leaves_original_and_no_staging_file(self):
        src = make_file(self.media / "a.mkv", 1000)
        out = make_file(self.scratch / "0.mkv", 600)
        with patch('decoreco.core.modules.processing.finalizer.os.replace',
                   side_effect=OSError(13, "Permission denied")):
            with self.assertRaises(ReplaceError):
                replace_atomically(out, src)
        self.assertEqual(src.stat().st_size, 1000)
        self.assertEqual(sorted(p.name for p in self.media.iterdir()), ["a.mkv"])


if __name__ == '__main__':
    unittest.main()
