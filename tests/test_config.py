import tempfile
import unittest
from pathlib import Path

from cdpgen.config import ConfigError, GeneratorConfig, load_config, validate_config


class TestGeneratorConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = load_config(None)
        self.assertEqual(config, GeneratorConfig())
        self.assertEqual(config.package_dir, Path("cdp"))
        self.assertEqual(config.types_dir, Path("cdp") / "protocol")

    def test_toml_table_is_read_relative_to_the_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "pyproject.toml"
            path.write_text(
                "[tool.cdpgen]\n"
                'package = "devtools"\n'
                'dest = "generated"\n'
                'runtime_module = "devtools_runtime.wire"\n',
                encoding="utf-8",
            )
            config = load_config(path)
        self.assertEqual(config.package, "devtools")
        self.assertEqual(config.dest, Path(tmp) / "generated")
        self.assertEqual(config.runtime_module, "devtools_runtime.wire")
        self.assertEqual(config.types_package, "protocol")

    def test_overrides_win_over_file_values(self) -> None:
        config = GeneratorConfig(package="devtools").merged(package=None, dest="out", runtime_module="rt")
        self.assertEqual(config.package, "devtools")
        self.assertEqual(config.dest, Path("out"))
        self.assertEqual(config.runtime_module, "rt")

    def test_unknown_keys_are_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cdpgen.toml"
            path.write_text("[tool.cdpgen]\nformatter = \"black\"\n", encoding="utf-8")
            with self.assertRaises(ConfigError) as ctx:
                load_config(path)
        self.assertIn("formatter", str(ctx.exception))

    def test_invalid_toml_raises_config_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cdpgen.toml"
            path.write_text("[tool.cdpgen\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(path)

    def test_file_without_table_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "pyproject.toml"
            path.write_text('[project]\nname = "x"\n', encoding="utf-8")
            self.assertEqual(load_config(path), GeneratorConfig())

    def test_validate_rejects_non_identifiers(self) -> None:
        validate_config(GeneratorConfig(runtime_module="a.b.c"))
        with self.assertRaises(ConfigError):
            validate_config(GeneratorConfig(package="my-client"))
        with self.assertRaises(ConfigError):
            validate_config(GeneratorConfig(runtime_module="a..b"))


if __name__ == "__main__":
    unittest.main()
