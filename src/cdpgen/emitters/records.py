"""Dataclass rendering shared by the type, command and event emitters."""

from __future__ import annotations

from typing import Callable, Sequence

from ..buffer import SourceBuffer
from ..model import Property
from ..resolver import Field, Kind, Resolver, Scope, TypeRef


def scope_for(buf: SourceBuffer, domain: str | None, package_prefix: str) -> Scope:
    """Scope whose qualified references become `from <prefix> import <module>`."""
    return Scope(domain, lambda module: buf.require(package_prefix, module))


def fields_for(resolver: Resolver, props: Sequence[Property], domain: str, owner: str, scope: Scope) -> list[Field]:
    return [resolver.field(prop, domain, owner, scope) for prop in props]


class RecordWriter:
    def __init__(self, resolver: Resolver, buf: SourceBuffer, scope: Scope) -> None:
        self.resolver = resolver
        self.buf = buf
        self.scope = scope

    def encode(self, ref: TypeRef, expr: str, depth: int = 0) -> str:
        target = ref.target()
        if target.kind is Kind.RECORD:
            return f"{expr}.to_dict()"
        if target.kind in (Kind.ENUM, Kind.OPAQUE):
            return f"{expr}.to_wire()"
        if target.kind is Kind.ARRAY and target.item is not None:
            var = f"item{depth}"
            inner = self.encode(target.item, var, depth + 1)
            if inner == var:
                return f"list({expr})"
            return f"[{inner} for {var} in {expr}]"
        return expr

    def decode(self, ref: TypeRef, expr: str, depth: int = 0) -> str:
        target = ref.target()
        if target.kind is Kind.RECORD:
            return f"{self.scope.qualify(target)}.from_dict({expr})"
        if target.kind in (Kind.ENUM, Kind.OPAQUE):
            return f"{self.scope.qualify(target)}.from_wire({expr})"
        if target.kind is Kind.ARRAY and target.item is not None:
            var = f"item{depth}"
            inner = self.decode(target.item, var, depth + 1)
            if inner == var:
                return f"list({expr})"
            return f"[{inner} for {var} in {expr}]"
        return expr

    def default(self, field: Field) -> str | None:
        if field.indirect:
            return "None"
        if not field.omit_empty:
            return None
        target = field.ref.target()
        if target.kind is Kind.ENUM:
            return f"dataclasses.field(default_factory=lambda: {self.scope.qualify(target)}.NOT_SET)"
        if target.kind is Kind.OPAQUE:
            return f"dataclasses.field(default_factory=lambda: {self.scope.qualify(target)}())"
        if target.kind is Kind.ARRAY:
            return "dataclasses.field(default_factory=list)"
        if target.kind is Kind.MAP:
            return "dataclasses.field(default_factory=dict)"
        return "None"

    def _present(self, field: Field) -> str:
        if field.indirect or field.ref.target().kind is Kind.ANY:
            return f"self.{field.attr} is not None"
        return f"self.{field.attr}"

    def _from_wire(self, field: Field) -> str:
        key = repr(field.wire_name)
        if field.indirect:
            value = self.decode(field.ref, f"data[{key}]")
            if value == f"data[{key}]":
                return f"data.get({key})"
            return f"{value} if data.get({key}) is not None else None"
        if not field.omit_empty:
            return self.decode(field.ref, f"data[{key}]")
        target = field.ref.target()
        if target.kind in (Kind.ENUM, Kind.OPAQUE):
            return self.decode(field.ref, f"data.get({key})")
        if target.kind is Kind.ARRAY:
            return self.decode(field.ref, f"data.get({key}) or []")
        if target.kind is Kind.MAP:
            return f"dict(data.get({key}) or {{}})"
        return f"data.get({key})"

    def emit(
        self,
        name: str,
        doc: Sequence[str],
        fields: Sequence[Field],
        *,
        methods: Callable[[], None] | None = None,
    ) -> None:
        buf = self.buf
        buf.declare()
        buf.require("dataclasses")
        buf.require("typing", "Any")

        buf.blank(2)
        buf.line("@dataclasses.dataclass(kw_only=True)")
        buf.line(f"class {name}:")
        buf.docstring(doc, indent=1)

        if fields:
            buf.blank()
        for field in fields:
            buf.comment([field.prop.desc(), *field.prop.notes()], indent=1)
            annotation = self.resolver.field_annotation(field, self.scope)
            default = self.default(field)
            if default is None:
                buf.line(f"{field.attr}: {annotation}", indent=1)
            else:
                buf.line(f"{field.attr}: {annotation} = {default}", indent=1)

        if methods is not None:
            methods()

        buf.blank()
        buf.line("def to_dict(self) -> dict[str, Any]:", indent=1)
        buf.line("data: dict[str, Any] = {}", indent=2)
        for field in fields:
            key = repr(field.wire_name)
            value = self.encode(field.ref, f"self.{field.attr}")
            if field.omit_empty:
                buf.line(f"if {self._present(field)}:", indent=2)
                buf.line(f"data[{key}] = {value}", indent=3)
            elif field.indirect and value != f"self.{field.attr}":
                buf.line(f"data[{key}] = {value} if self.{field.attr} is not None else None", indent=2)
            else:
                buf.line(f"data[{key}] = {value}", indent=2)
        buf.line("return data", indent=2)

        buf.blank()
        buf.line("@classmethod", indent=1)
        buf.line(f"def from_dict(cls, data: dict[str, Any]) -> {name}:", indent=1)
        if not fields:
            buf.line("return cls()", indent=2)
            return
        buf.line("return cls(", indent=2)
        for field in fields:
            buf.line(f"{field.attr}={self._from_wire(field)},", indent=3)
        buf.line(")", indent=2)
