"""Generator settings.

Settings come from the command line, then an optional ``[tool.cdpgen]``
table in a TOML file, then the defaults below.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from .errors import CdpgenError

DEFAULT_PACKAGE = "cdp"
DEFAULT_RUNTIME_MODULE = "cdpgen.runtime"
DEFAULT_TYPES_PACKAGE = "protocol"


class ConfigError(CdpgenError):
    pass


@dataclass(frozen=True)
class GeneratorConfig:
    package: str = DEFAULT_PACKAGE
    dest: Path = Path(".")
    runtime_module: str = DEFAULT_RUNTIME_MODULE
    types_package: str = DEFAULT_TYPES_PACKAGE

    @property
    def package_dir(self) -> Path:
        return self.dest / self.package

    @property
    def types_dir(self) -> Path:
        return self.package_dir / self.types_package

    def merged(self, **overrides: Any) -> GeneratorConfig:
        """Copy with every override that is not None applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        if "dest" in values:
            values["dest"] = Path(values["dest"])
        return replace(self, **values)


def _identifier(key: str, value: Any, *, dotted: bool = False) -> str:
    parts = value.split(".") if isinstance(value, str) and dotted else [value]
    if not all(isinstance(part, str) and part.isidentifier() for part in parts):
        raise ConfigError(f"{key} must be a Python {'module path' if dotted else 'identifier'}, got {value!r}")
    return value


def load_config(path: str | Path | None = None) -> GeneratorConfig:
    """Read ``[tool.cdpgen]`` from a TOML file, or return the defaults."""
    config = GeneratorConfig()
    if path is None:
        return config

    path = Path(path)
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"{path}: {exc.strerror or exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc

    table = document.get("tool", {}).get("cdpgen", {})
    if not isinstance(table, dict):
        raise ConfigError(f"{path}: [tool.cdpgen] must be a table")
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ConfigError(f"{path}: unknown [tool.cdpgen] keys: {', '.join(unknown)}")

    dest = table.get("dest")
    if dest is not None:
        # Relative destinations are taken from the config file's directory.
        dest = path.parent / str(dest)
    return config.merged(
        package=table.get("package"),
        dest=dest,
        runtime_module=table.get("runtime_module"),
        types_package=table.get("types_package"),
    )


def validate_config(config: GeneratorConfig) -> GeneratorConfig:
    _identifier("package", config.package)
    _identifier("types_package", config.types_package)
    _identifier("runtime_module", config.runtime_module, dotted=True)
    return config
