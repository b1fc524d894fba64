import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from metadata_file.cli import main, run_check, run_dump
from metadata_file.config import Settings


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.good = self.tmp / "good.tags"
        self.good.write_bytes(b"TITLE=Hello\nLYRICS=\n\tone\n\ttwo\n")
        self.bad = self.tmp / "bad.tags"
        self.bad.write_bytes(b"=oops\n")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_check_reports_each_file(self) -> None:
        out = io.StringIO()
        status = run_check([self.good, self.bad], Settings(), out)
        self.assertEqual(status, 1)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], f"{self.good}: OK (2 tags)")
        self.assertEqual(lines[1], f"{self.bad}: ERROR (empty tags are not permitted)")

    def test_check_success(self) -> None:
        out = io.StringIO()
        self.assertEqual(run_check([self.good], Settings(), out), 0)

    def test_dump_json(self) -> None:
        out = io.StringIO()
        self.assertEqual(run_dump(self.good, Settings(), out), 0)
        self.assertEqual(
            json.loads(out.getvalue()),
            [{"tag": "TITLE", "value": "Hello"}, {"tag": "LYRICS", "value": "one\ntwo"}],
        )

    def test_dump_vorbis_output_parses_back(self) -> None:
        out = io.StringIO()
        self.assertEqual(run_dump(self.good, Settings(), out, vorbis=True), 0)
        self.assertEqual(out.getvalue().encode("utf-8"), self.good.read_bytes())

    def test_dump_error(self) -> None:
        out = io.StringIO()
        self.assertEqual(run_dump(self.tmp / "missing.tags", Settings(), out), 1)
        self.assertIn("error opening metadata file", out.getvalue())

    def test_vorbis_dump_is_described_as_debugging_view(self) -> None:
        out = io.StringIO()
        with patch("sys.stdout", out):
            with self.assertRaises(SystemExit):
                main(["dump", "--help"])
        self.assertIn("debugging", out.getvalue())

    def test_main_uses_config(self) -> None:
        config = self.tmp / "metadata-file.yaml"
        config.write_text("parser:\n  max_file_bytes: 4\n", encoding="utf-8")
        out = io.StringIO()
        with patch("metadata_file.cli.sys.stdout", out):
            status = main(["--config", str(config), "check", str(self.good)])
        self.assertEqual(status, 1)
        self.assertIn("metadata file exceeds 4 bytes", out.getvalue())


if __name__ == "__main__":
    unittest.main()
