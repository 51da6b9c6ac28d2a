"""Formatting and persistence of generated modules."""

from __future__ import annotations

import ast
import re
from pathlib import Path
from typing import Protocol

import structlog

from .buffer import SourceBuffer
from .errors import FormatError

logger = structlog.get_logger(__name__)

_TRAILING_WS_RE = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"\n{4,}")


class Formatter(Protocol):
    def format(self, text: str) -> str: ...


class Persister(Protocol):
    def write(self, path: Path, data: bytes) -> None: ...


class AstFormatter:
    """Checks that the text parses and normalises whitespace."""

    def format(self, text: str) -> str:
        try:
            ast.parse(text)
        except SyntaxError as exc:
            raise FormatError(f"line {exc.lineno}: {exc.msg}") from exc
        text = _TRAILING_WS_RE.sub("", text)
        text = _BLANK_RUN_RE.sub("\n\n\n", text)
        return text.rstrip("\n") + "\n"


class FileSystemPersister:
    def write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)


class MemoryPersister:
    """Keeps written files in memory, keyed by path."""

    def __init__(self) -> None:
        self.files: dict[Path, bytes] = {}

    def write(self, path: Path, data: bytes) -> None:
        self.files[Path(path)] = data


class Writer:
    def __init__(self, formatter: Formatter, persister: Persister) -> None:
        self.formatter = formatter
        self.persister = persister

    def flush(self, buffer: SourceBuffer, path: Path) -> Path | None:
        """Format and persist the buffer, then reset it.

        Returns the path written, or None when the buffer held no declaration.
        """
        if not buffer.has_content:
            logger.info("skipping", path=str(path), reason="no declarations")
            buffer.clear()
            return None

        text = buffer.render()
        try:
            text = self.formatter.format(text)
        except FormatError as exc:
            logger.warning("format failed, writing unformatted source", path=str(path), error=str(exc))

        logger.info("writing", path=str(path))
        self.persister.write(path, text.encode("utf-8"))
        buffer.clear()
        return path
