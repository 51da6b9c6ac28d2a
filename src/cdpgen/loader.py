from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from jsonschema import Draft202012Validator
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ParseError
from .model import Domain, Protocol

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "protocol.schema.json"


def _to_builtin(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _to_builtin(v) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [_to_builtin(v) for v in value]
    return value


def _load_yaml(path: Path) -> Any:
    yaml = YAML(typ="safe")
    with path.open("r", encoding="utf-8") as file:
        data = yaml.load(file)
    return _to_builtin(data)


def _load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as file:
        return json.load(file)


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = _load_json(_SCHEMA_PATH)
    return Draft202012Validator(schema)


def _json_path(parts: Iterable[Any]) -> str:
    out = "$"
    for part in parts:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}"
    return out


def validate_document(document: Any) -> list[str]:
    """Return shape errors for a decoded document, empty when well-formed."""
    errors = sorted(_validator().iter_errors(document), key=lambda e: list(e.absolute_path))
    return [f"{_json_path(e.absolute_path)}: {e.message}" for e in errors]


def parse_document(document: Any, *, source: str = "<document>") -> Protocol:
    errors = validate_document(document)
    if errors:
        raise ParseError(source, "document does not match the protocol schema", errors=errors)
    try:
        return Protocol.model_validate(document)
    except ValidationError as exc:
        rendered = [f"{_json_path(err['loc'])}: {err['msg']}" for err in exc.errors()]
        raise ParseError(source, "document could not be decoded", errors=rendered) from exc


def load_document(path: Path) -> Protocol:
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            document = _load_yaml(path)
        else:
            document = _load_json(path)
    except OSError as exc:
        raise ParseError(str(path), f"cannot read document: {exc.strerror or exc}") from exc
    except (json.JSONDecodeError, YAMLError) as exc:
        raise ParseError(str(path), f"invalid document: {exc}") from exc
    return parse_document(document, source=str(path))


def merge(protocols: Iterable[Protocol]) -> list[Domain]:
    """Concatenate the domains of every protocol and sort them by name.

    The sort is stable, so the result only depends on the set of domains and
    not on the order the documents were given in.
    """
    domains: list[Domain] = []
    for protocol in protocols:
        domains.extend(protocol.domains)

    seen: set[str] = set()
    duplicates: list[str] = []
    for domain in domains:
        if domain.name in seen:
            duplicates.append(domain.name)
        seen.add(domain.name)
    if duplicates:
        raise ParseError("<merged>", "duplicate domain definitions", errors=sorted(set(duplicates)))

    return sorted(domains, key=lambda d: d.name)


def load_domains(paths: Sequence[Path]) -> list[Domain]:
    return merge(load_document(path) for path in paths)
