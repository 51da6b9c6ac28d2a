"""Generation pipeline: classify, emit and persist every module."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import structlog

from . import naming
from .buffer import SourceBuffer
from .config import GeneratorConfig
from .emitters import ClientEmitter, CommandEmitter, EventEmitter, TypeEmitter
from .loader import load_domains
from .model import Domain
from .resolver import Resolver, classify
from .writer import AstFormatter, FileSystemPersister, Formatter, MemoryPersister, Persister, Writer

logger = structlog.get_logger(__name__)


def _package_init(buf: SourceBuffer) -> None:
    buf.header("Generated protocol client.")
    buf.declare()
    buf.require(".client", "Client")
    buf.blank(2)
    buf.line('__all__ = ["Client"]')


def _types_init(buf: SourceBuffer, modules: Sequence[str]) -> None:
    if not modules:
        return
    buf.header("Protocol types, one module per domain.")
    buf.declare()
    buf.blank(2)
    buf.line("__all__ = [")
    for module in modules:
        buf.line(f'"{module}",', indent=1)
    buf.line("]")


def generate(
    domains: Sequence[Domain],
    config: GeneratorConfig,
    *,
    formatter: Formatter | None = None,
    persister: Persister | None = None,
) -> list[Path]:
    """Write the client package for the merged, sorted domains.

    Every module is rendered before the first one is persisted, so a failing
    run leaves the destination untouched. Returns the paths written, in
    write order.
    """
    index = classify(domains)
    resolver = Resolver(index)
    staged = MemoryPersister()
    writer = Writer(formatter or AstFormatter(), staged)
    buf = SourceBuffer(runtime_module=config.runtime_module)
    types_package = f".{config.types_package}"
    log = logger.bind(package=config.package, domains=len(domains), types=len(index))
    log.info("generating", dest=str(config.dest))

    written: list[Path] = []

    def flush(path: Path) -> bool:
        result = writer.flush(buf, path)
        if result is not None:
            written.append(result)
        return result is not None

    _package_init(buf)
    flush(config.package_dir / "__init__.py")

    client = ClientEmitter(resolver, buf, types_package=types_package)
    client.client(domains)
    for domain in domains:
        client.domain(domain)
    flush(config.package_dir / "client.py")

    type_modules: list[str] = []
    types = TypeEmitter(resolver, buf)
    for domain in domains:
        types.domain(domain)
        module = naming.module_name(domain.name)
        if flush(config.types_dir / f"{module}.py"):
            type_modules.append(module)

    _types_init(buf, type_modules)
    flush(config.types_dir / "__init__.py")

    commands = CommandEmitter(resolver, buf, types_package=types_package)
    commands.registry(domains)
    for domain in domains:
        commands.domain(domain)
    flush(config.package_dir / "commands.py")

    events = EventEmitter(resolver, buf, types_package=types_package)
    events.registry(domains)
    for domain in domains:
        events.domain(domain)
    flush(config.package_dir / "events.py")

    persister = persister or FileSystemPersister()
    for path, data in staged.files.items():
        persister.write(path, data)
    log.info("generated", files=len(written))
    return written


def generate_from_paths(
    paths: Sequence[Path],
    config: GeneratorConfig,
    *,
    formatter: Formatter | None = None,
    persister: Persister | None = None,
) -> list[Path]:
    return generate(load_domains(paths), config, formatter=formatter, persister=persister)


def stale_files(domains: Sequence[Domain], config: GeneratorConfig) -> list[Path]:
    """Generate in memory and list the files whose on-disk content differs."""
    persister = MemoryPersister()
    generate(domains, config, persister=persister)
    stale: list[Path] = []
    for path, data in persister.files.items():
        if not path.is_file() or path.read_bytes() != data:
            stale.append(path)
    return stale
