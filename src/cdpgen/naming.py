"""Naming policy for generated identifiers.

Rules:
- class names keep the schema spelling with the first letter upper-cased;
- attributes, methods, parameters and modules are snake_case, splitting
  camelCase and acronym runs (``getHTML`` -> ``get_html``,
  ``IndexedDB`` -> ``indexed_db``);
- anything colliding with a Python keyword or a reserved name gets a
  trailing underscore;
- enum members are UPPER_SNAKE, deduplicated in declaration order, and never
  shadow ``NOT_SET``.
"""

from __future__ import annotations

import keyword
import re

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_IDENT_RE = re.compile(r"[^0-9A-Za-z_]")
_RESERVED_NAMES = {"self", "cls"}
_RESERVED_CLASSES = {"Client"}
# Names the generated modules import at top level.
_RESERVED_MODULES = {"abc", "client", "commands", "dataclasses", "enum", "events", "protocol", "typing"}

NOT_SET_MEMBER = "NOT_SET"


def safe_ident(value: str) -> str:
    value = _NON_IDENT_RE.sub("_", value)
    value = re.sub(r"_+", "_", value).strip("_")
    if not value:
        value = "value"
    if value[0].isdigit():
        value = f"_{value}"
    if keyword.iskeyword(value) or value in _RESERVED_NAMES:
        value += "_"
    return value


def snake(value: str) -> str:
    value = _CAMEL_BOUNDARY_RE.sub("_", value)
    value = re.sub(r"[^0-9A-Za-z]+", "_", value)
    return re.sub(r"_+", "_", value).strip("_").lower()


def pascal(value: str) -> str:
    parts = [part for part in re.split(r"[^0-9A-Za-z]+", value) if part]
    return "".join(part[:1].upper() + part[1:] for part in parts)


def attribute_name(name: str) -> str:
    return safe_ident(snake(name))


def module_name(domain: str) -> str:
    name = safe_ident(snake(domain))
    if name in _RESERVED_MODULES:
        name += "_"
    return name


def class_name(name: str) -> str:
    return safe_ident(pascal(name))


def domain_class(domain: str) -> str:
    name = class_name(domain)
    if name in _RESERVED_CLASSES:
        name += "_"
    return name


def member_name(domain: str, name: str) -> str:
    """Registry member for a command or event, e.g. ``PageReload``."""
    return safe_ident(pascal(domain) + pascal(name))


def args_name(domain: str, command: str) -> str:
    return member_name(domain, command) + "Args"


def reply_name(domain: str, name: str) -> str:
    return member_name(domain, name) + "Reply"


def event_client_name(domain: str, event: str) -> str:
    return member_name(domain, event) + "Client"


def args_constructor_name(domain: str, command: str) -> str:
    return f"new_{snake(domain)}_{snake(command)}_args"


def enum_member_names(labels: list[str]) -> list[str]:
    used = {NOT_SET_MEMBER}
    names: list[str] = []
    for label in labels:
        base = snake(label).upper() or "VALUE"
        if base[0].isdigit():
            base = f"VALUE_{base}"
        name = base
        if name == NOT_SET_MEMBER:
            name = f"{base}_"
        suffix = 2
        while name in used:
            name = f"{base}_{suffix}"
            suffix += 1
        used.add(name)
        names.append(name)
    return names
