from __future__ import annotations

import textwrap
from typing import Iterable, Sequence

GENERATED_BANNER = "# Code generated by cdpgen. DO NOT EDIT."
INDENT = "    "
_WRAP_WIDTH = 72


def _escape_doc(text: str) -> str:
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text = text[:-1] + '\\"'
    return text


def _wrap(text: str, width: int) -> list[str]:
    return textwrap.wrap(text, width=width, break_on_hyphens=False, break_long_words=False)


def _paragraphs(texts: Iterable[str]) -> list[str]:
    out: list[str] = []
    for text in texts:
        for chunk in text.replace("\r\n", "\n").split("\n\n"):
            chunk = " ".join(chunk.split())
            if chunk:
                out.append(chunk)
    return out


class SourceBuffer:
    """Accumulates the source of one generated module.

    Imports are collected with `require` while the body is emitted and
    rendered once, above the body, by `render`. A buffer that never saw
    `declare` holds no real declaration and is not worth persisting.
    """

    def __init__(self, *, runtime_module: str = "cdpgen.runtime") -> None:
        self.runtime_module = runtime_module
        self.has_header = False
        self.has_content = False
        self._docstring: str | None = None
        self._plain_imports: set[str] = set()
        self._from_imports: dict[str, set[str]] = {}
        self._lines: list[str] = []

    def header(self, docstring: str | None = None) -> None:
        if self.has_header:
            return
        self.has_header = True
        self._docstring = docstring

    def declare(self) -> None:
        self.has_content = True

    def require(self, module: str, *names: str) -> None:
        if not names:
            self._plain_imports.add(module)
            return
        self._from_imports.setdefault(module, set()).update(names)

    def line(self, text: str = "", indent: int = 0) -> None:
        self._lines.append(f"{INDENT * indent}{text}" if text else "")

    def lines(self, texts: Iterable[str], indent: int = 0) -> None:
        for text in texts:
            self.line(text, indent)

    def blank(self, count: int = 1) -> None:
        self._lines.extend([""] * count)

    def docstring(self, texts: Sequence[str], indent: int = 0) -> None:
        paragraphs = _paragraphs(texts)
        if not paragraphs:
            return
        width = max(_WRAP_WIDTH - len(INDENT * indent), 40)
        if len(paragraphs) == 1 and len(paragraphs[0]) + 6 <= width:
            self.line(f'"""{_escape_doc(paragraphs[0])}"""', indent)
            return
        body: list[str] = []
        for i, paragraph in enumerate(paragraphs):
            if i:
                body.append("")
            # The opening quotes share the first line.
            body.extend(_wrap(_escape_doc(paragraph), width - 3))
        body[0] = '"""' + body[0]
        self.lines(body, indent)
        self.line('"""', indent)

    def comment(self, texts: Sequence[str], indent: int = 0, *, prefix: str = "#:") -> None:
        width = max(_WRAP_WIDTH - len(INDENT * indent) - len(prefix) - 1, 40)
        for paragraph in _paragraphs(texts):
            for text in _wrap(paragraph, width):
                self.line(f"{prefix} {text}", indent)

    def _import_lines(self) -> list[str]:
        groups: dict[str, list[str]] = {"stdlib": [], "runtime": [], "local": []}

        def group_of(module: str) -> str:
            if module.startswith("."):
                return "local"
            if module == self.runtime_module or module.startswith(self.runtime_module.split(".")[0] + "."):
                return "runtime"
            return "stdlib"

        for module in sorted(self._plain_imports):
            groups[group_of(module)].append(f"import {module}")
        for module in sorted(self._from_imports):
            names = ", ".join(sorted(self._from_imports[module]))
            groups[group_of(module)].append(f"from {module} import {names}")

        out: list[str] = []
        for key in ("stdlib", "runtime", "local"):
            if groups[key]:
                if out:
                    out.append("")
                out.extend(groups[key])
        return out

    def render(self) -> str:
        out: list[str] = [GENERATED_BANNER]
        if self._docstring:
            out.append(f'"""{_escape_doc(self._docstring)}"""')
        out.append("")
        out.append("from __future__ import annotations")
        imports = self._import_lines()
        if imports:
            out.append("")
            out.extend(imports)
        out.extend(["", ""])
        body = list(self._lines)
        while body and not body[0]:
            body.pop(0)
        out.extend(body)
        return "\n".join(out).rstrip() + "\n"

    def clear(self) -> None:
        self.has_header = False
        self.has_content = False
        self._docstring = None
        self._plain_imports.clear()
        self._from_imports.clear()
        self._lines.clear()
