import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

from octobuild_installer.errors import MissingSourceError
from octobuild_installer.file_operations import FileManager, Logger


class TestFileManager(unittest.TestCase):

    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_write_creates_parent_directories(self):
        target = self.root / "target" / "wix" / "octobuild.wxs"
        returned = FileManager.write_to_file(target, "<Wix/>\n")
        self.assertEqual(returned, target)
        self.assertEqual(target.read_text(encoding="utf-8"), "<Wix/>\n")

    def test_append_keeps_existing_content(self):
        target = self.root / "logs" / "errors.log"
        FileManager.append_to_file(target, "one\n")
        FileManager.append_to_file(target, "two\n")
        self.assertEqual(target.read_text(encoding="utf-8"), "one\ntwo\n")

    def test_require_file_resolves_existing_file(self):
        source = self.root / "LICENSE"
        source.write_text("MIT", encoding="utf-8")
        self.assertEqual(FileManager.require_file(source), source.resolve())

    def test_require_file_rejects_missing_file(self):
        with self.assertRaises(MissingSourceError):
            FileManager.require_file(self.root / "xgConsole.exe")

    def test_require_file_rejects_directory(self):
        with self.assertRaises(MissingSourceError):
            FileManager.require_file(self.root)


class TestLogger(unittest.TestCase):

    def setUp(self):
        self._tmp = TemporaryDirectory()
        self._env = patch.dict("os.environ", {"LOCALAPPDATA": self._tmp.name})
        self._env.start()
        self.log_dir = Path(self._tmp.name) / "Octobuild" / "logs"

    def tearDown(self):
        self._env.stop()
        self._tmp.cleanup()

    def test_log_dir_follows_localappdata(self):
        self.assertEqual(Logger.log_dir(), self.log_dir)

    def test_log_event_writes_json(self):
        Logger.log_event({"version": "0.1.13", "outputs": ["target/octobuild-0.1.13.msi"]})
        data = json.loads((self.log_dir / "last_build.json").read_text(encoding="utf-8"))
        self.assertEqual(data["version"], "0.1.13")

    def test_log_error_appends_timestamped_lines(self):
        Logger.log_error("first")
        Logger.log_error("second")
        lines = (self.log_dir / "errors.log").read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].endswith("ERROR: first"))
        self.assertTrue(lines[0].startswith("["))

    def test_log_error_never_raises(self):
        with patch("octobuild_installer.file_operations.logger.FileManager.append_to_file",
                   side_effect=IOError("disk full")):
            Logger.log_error("ignored")


if __name__ == '__main__':
    unittest.main()
