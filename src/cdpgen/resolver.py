"""Type resolution for generated code.

Resolution runs in two phases. `classify` looks at every declared type of
every domain and produces an immutable `TypeIndex`; only then does the
`Resolver` decide, property by property, how each one is represented. The
split matters because a property may reference a type declared in a domain
that sorts later.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Container, Iterator, Mapping, Sequence

from . import naming
from .errors import ClassificationError
from .model import Domain, Property, TypeDef, TypeSpec

_PRIMITIVES = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
}


class Kind(str, enum.Enum):
    PRIMITIVE = "primitive"
    ANY = "any"
    ARRAY = "array"
    MAP = "map"
    RECORD = "record"
    ENUM = "enum"
    OPAQUE = "opaque"
    ALIAS = "alias"


_NAMED_KINDS = {Kind.RECORD, Kind.ENUM, Kind.OPAQUE, Kind.ALIAS}
_NON_INDIRECT_KINDS = {Kind.ANY, Kind.ARRAY, Kind.MAP, Kind.ENUM, Kind.OPAQUE}


@dataclass(frozen=True)
class TypeInfo:
    domain: str
    id: str
    kind: Kind
    non_indirect: bool
    definition: TypeDef

    @property
    def key(self) -> str:
        return f"{self.domain}.{self.id}"


@dataclass(frozen=True)
class TypeIndex:
    types: Mapping[str, TypeInfo]

    def get(self, key: str) -> TypeInfo | None:
        return self.types.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self.types

    def __len__(self) -> int:
        return len(self.types)


@dataclass(frozen=True)
class TypeRef:
    """A resolved type expression.

    Named kinds carry the declaring domain and the class name; `ARRAY` carries
    its item and `ALIAS` carries the type it stands for.
    """

    kind: Kind
    name: str
    domain: str | None = None
    item: TypeRef | None = None
    key: str | None = None

    @property
    def named(self) -> bool:
        return self.kind in _NAMED_KINDS

    def target(self) -> TypeRef:
        """Follow aliases down to the type that decides the wire encoding."""
        ref = self
        while ref.kind is Kind.ALIAS and ref.item is not None:
            ref = ref.item
        return ref


@dataclass(frozen=True)
class Field:
    prop: Property
    attr: str
    ref: TypeRef
    indirect: bool
    omit_empty: bool

    @property
    def wire_name(self) -> str:
        return self.prop.name

    @property
    def required(self) -> bool:
        return not self.prop.optional


def _shape(domain: Domain, typedef: TypeDef) -> Kind:
    if typedef.ref:
        return Kind.ALIAS
    if typedef.enum:
        if typedef.type != "string":
            raise ClassificationError(domain.name, typedef.id, f"unsupported enum type: {typedef.type}")
        return Kind.ENUM
    if typedef.type == "object":
        return Kind.RECORD if typedef.properties else Kind.OPAQUE
    if typedef.type in _PRIMITIVES or typedef.type in {"array", "any"}:
        return Kind.ALIAS
    raise ClassificationError(domain.name, typedef.id, f"unknown type: {typedef.type}")


def _qualify(domain: str, ref: str) -> str:
    return ref if "." in ref else f"{domain}.{ref}"


def _type_expressions(domain: Domain) -> Iterator[tuple[str, TypeSpec]]:
    """Every type expression a domain uses, named for error messages."""
    for typedef in domain.types:
        if typedef.type == "array" and not typedef.ref:
            yield typedef.id, typedef
        for prop in typedef.properties or []:
            yield f"{typedef.id}.{prop.name}", prop
    for command in domain.commands:
        for prop in (*command.parameters, *command.returns):
            yield f"{command.name}.{prop.name}", prop
    for event in domain.events:
        for prop in event.parameters:
            yield f"{event.name}.{prop.name}", prop


def _check_expression(keys: Container[str], domain: str, name: str, spec: TypeSpec) -> None:
    if spec.ref:
        if _qualify(domain, spec.ref) not in keys:
            raise ClassificationError(domain, name, f"unknown reference: {spec.ref}")
    elif spec.type == "array":
        if spec.items is None:
            raise ClassificationError(domain, name, "array without items")
        _check_expression(keys, domain, name, spec.items)
    elif spec.type not in _PRIMITIVES and spec.type not in {"any", "object"}:
        raise ClassificationError(domain, name, f"unknown type: {spec.type}")


def classify(domains: Sequence[Domain]) -> TypeIndex:
    """Classify every declared type across all domains.

    A type is non-indirect when its representation already has a natural
    empty state: enums, opaque payloads, and aliases of arrays, maps or `any`.
    Records and aliases of primitives need indirection when optional.

    Every property, parameter and return value is checked here too, so a
    dangling reference fails before anything is emitted.
    """
    shapes: dict[str, tuple[Domain, TypeDef, Kind]] = {}
    for domain in domains:
        for typedef in domain.types:
            shapes[f"{domain.name}.{typedef.id}"] = (domain, typedef, _shape(domain, typedef))
    for domain in domains:
        for name, spec in _type_expressions(domain):
            _check_expression(shapes, domain.name, name, spec)

    resolved: dict[str, bool] = {}

    def non_indirect(key: str, trail: tuple[str, ...]) -> bool:
        if key in resolved:
            return resolved[key]
        if key in trail:
            domain, typedef, _ = shapes[trail[0]]
            raise ClassificationError(domain.name, typedef.id, f"alias cycle: {' -> '.join((*trail, key))}")
        domain, typedef, kind = shapes[key]
        if kind is not Kind.ALIAS:
            value = kind in _NON_INDIRECT_KINDS
        elif typedef.ref:
            target = _qualify(domain.name, typedef.ref)
            if target not in shapes:
                raise ClassificationError(domain.name, typedef.id, f"unknown reference: {typedef.ref}")
            value = non_indirect(target, (*trail, key))
        else:
            value = typedef.type in {"array", "any"}
        resolved[key] = value
        return value

    types: dict[str, TypeInfo] = {}
    for key, (domain, typedef, kind) in shapes.items():
        types[key] = TypeInfo(
            domain=domain.name,
            id=typedef.id,
            kind=kind,
            non_indirect=non_indirect(key, ()),
            definition=typedef,
        )
    return TypeIndex(types=MappingProxyType(types))


class Scope:
    """Where a type expression is rendered.

    `domain` is the domain whose types module is being written, or None for
    the shared commands/events/client modules. Qualified references are
    recorded through `on_import` so the caller can emit the module imports.
    """

    def __init__(self, domain: str | None, on_import: Callable[[str], None]) -> None:
        self.domain = domain
        self._on_import = on_import

    def qualify(self, ref: TypeRef) -> str:
        if ref.domain is None or ref.domain == self.domain:
            return ref.name
        module = naming.module_name(ref.domain)
        self._on_import(module)
        return f"{module}.{ref.name}"


class Resolver:
    def __init__(self, index: TypeIndex) -> None:
        self.index = index

    def ref(self, spec: TypeSpec, domain: str) -> TypeRef:
        if spec.ref:
            return self.named(_qualify(domain, spec.ref), domain, spec)
        if spec.type in _PRIMITIVES:
            return TypeRef(Kind.PRIMITIVE, _PRIMITIVES[spec.type])
        if spec.type == "any":
            return TypeRef(Kind.ANY, "Any")
        if spec.type == "array":
            if spec.items is None:
                raise ClassificationError(domain, getattr(spec, "name", "?"), "array without items")
            return TypeRef(Kind.ARRAY, "list", item=self.ref(spec.items, domain))
        if spec.type == "object":
            return TypeRef(Kind.MAP, "dict")
        raise ClassificationError(domain, getattr(spec, "name", "?"), f"unknown type: {spec.type}")

    def named(self, key: str, domain: str, spec: TypeSpec | None = None) -> TypeRef:
        info = self.index.get(key)
        if info is None:
            name = getattr(spec, "name", key)
            raise ClassificationError(domain, name, f"unknown reference: {key}")
        item: TypeRef | None = None
        if info.kind is Kind.ALIAS:
            item = self.ref(info.definition, info.domain)
        return TypeRef(info.kind, naming.class_name(info.id), domain=info.domain, item=item, key=info.key)

    def needs_indirection(self, ref: TypeRef) -> bool:
        """Whether an optional value of this type needs `| None` to express absence."""
        if ref.key is not None:
            info = self.index.get(ref.key)
            if info is not None:
                return not info.non_indirect
        return ref.kind not in _NON_INDIRECT_KINDS

    def field(self, prop: Property, domain: str, owner: str, scope: Scope) -> Field:
        ref = self.ref(prop, domain)
        indirect = prop.optional and self.needs_indirection(ref)
        # A record holding itself by value could never be constructed.
        if ref.kind is Kind.RECORD and self.annotation(ref, scope) == owner:
            indirect = True
        return Field(
            prop=prop,
            attr=naming.attribute_name(prop.name),
            ref=ref,
            indirect=indirect,
            omit_empty=prop.optional,
        )

    def annotation(self, ref: TypeRef, scope: Scope, *, quote_names: bool = False) -> str:
        if ref.kind is Kind.ARRAY and ref.item is not None:
            return f"list[{self.annotation(ref.item, scope, quote_names=quote_names)}]"
        if ref.kind is Kind.MAP:
            return "dict[str, Any]"
        if ref.named:
            name = scope.qualify(ref)
            return f'"{name}"' if quote_names else name
        return ref.name

    def field_annotation(self, field: Field, scope: Scope) -> str:
        text = self.annotation(field.ref, scope)
        return f"{text} | None" if field.indirect else text
