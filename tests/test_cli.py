import contextlib
import io
import json
import logging
import tempfile
import unittest
from pathlib import Path

import structlog

from cdpgen import __version__
from cdpgen.cli import main

from sample_protocols import CONSOLE, NETWORK, PAGE, document


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.proto = self.root / "browser.json"
        self.proto.write_text(json.dumps(document(PAGE, NETWORK, CONSOLE)), encoding="utf-8")
        self.dest = self.root / "out"
        root_logger = logging.getLogger()
        self._handlers = root_logger.handlers[:]
        self._level = root_logger.level

    def tearDown(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers = self._handlers
        root_logger.setLevel(self._level)
        structlog.reset_defaults()
        self._tmp.cleanup()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_generates_package(self) -> None:
        code, out, _ = self._run("--proto", str(self.proto), "--dest", str(self.dest), "--package", "devtools")
        self.assertEqual(code, 0)
        self.assertIn("wrote 8 files", out)
        self.assertTrue((self.dest / "devtools" / "client.py").is_file())
        self.assertTrue((self.dest / "devtools" / "protocol" / "page.py").is_file())

    def test_check_reports_stale_files(self) -> None:
        args = ("--proto", str(self.proto), "--dest", str(self.dest))
        code, _, err = self._run(*args, "--check")
        self.assertEqual(code, 1)
        self.assertIn("out of date", err)
        self.assertFalse(self.dest.exists())

        self.assertEqual(self._run(*args)[0], 0)
        self.assertEqual(self._run(*args, "--check")[0], 0)

    def test_config_file_supplies_defaults(self) -> None:
        config = self.root / "cdpgen.toml"
        config.write_text('[tool.cdpgen]\npackage = "browser"\ndest = "gen"\n', encoding="utf-8")
        code, _, _ = self._run("--proto", str(self.proto), "--config", str(config))
        self.assertEqual(code, 0)
        self.assertTrue((self.root / "gen" / "browser" / "__init__.py").is_file())

    def test_invalid_document_exits_with_error(self) -> None:
        broken = self.root / "broken.json"
        broken.write_text("{}", encoding="utf-8")
        code, _, err = self._run("--proto", str(broken), "--dest", str(self.dest))
        self.assertEqual(code, 1)
        self.assertIn("cdpgen: error:", err)
        self.assertIn("broken.json", err)

    def test_merges_repeated_proto_flags(self) -> None:
        other = self.root / "inspector.json"
        other.write_text(json.dumps(document({"domain": "Inspector", "commands": [{"name": "enable"}]})), encoding="utf-8")
        code, _, _ = self._run("--proto", str(self.proto), "--proto", str(other), "--dest", str(self.dest))
        self.assertEqual(code, 0)
        commands = (self.dest / "cdp" / "commands.py").read_text(encoding="utf-8")
        self.assertIn("InspectorEnable = 'Inspector.enable'", commands)

    def test_version(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main(["--version"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn(__version__, out.getvalue())


if __name__ == "__main__":
    unittest.main()
