from __future__ import annotations

from .. import naming
from ..buffer import SourceBuffer
from ..model import Domain, TypeDef, notes_for
from ..resolver import Kind, Resolver
from .records import RecordWriter, fields_for, scope_for


class TypeEmitter:
    """Renders the declared types of one domain into its own module."""

    def __init__(self, resolver: Resolver, buf: SourceBuffer) -> None:
        self.resolver = resolver
        self.buf = buf

    def domain(self, domain: Domain) -> None:
        if not domain.types:
            return
        self.buf.header(f"Types of the {domain.name} domain.")
        for typedef in domain.types:
            self.type(domain, typedef)

    def type(self, domain: Domain, typedef: TypeDef) -> None:
        info = self.resolver.index.get(f"{domain.name}.{typedef.id}")
        if info is None:
            raise KeyError(f"{domain.name}.{typedef.id} was not classified")
        name = naming.class_name(typedef.id)
        doc = [typedef.desc(), *notes_for(typedef, "type")]

        if info.kind is Kind.RECORD:
            scope = scope_for(self.buf, domain.name, ".")
            fields = fields_for(self.resolver, typedef.properties or [], domain.name, name, scope)
            RecordWriter(self.resolver, self.buf, scope).emit(name, doc, fields)
        elif info.kind is Kind.ENUM:
            self._enum(name, doc, typedef.enum or [])
        elif info.kind is Kind.OPAQUE:
            self._opaque(name, doc)
        else:
            self._alias(domain, name, doc, typedef)

    def _enum(self, name: str, doc: list[str], labels: list[str]) -> None:
        buf = self.buf
        buf.declare()
        buf.require(buf.runtime_module, "WireEnum")
        buf.blank(2)
        buf.line(f"class {name}(WireEnum):")
        buf.docstring(doc, indent=1)
        buf.blank()
        values = ", ".join(repr(label) for label in labels)
        trailing = "," if len(labels) == 1 else ""
        buf.line(f"__labels__ = ({values}{trailing})", indent=1)
        buf.blank()
        buf.line(f"{naming.NOT_SET_MEMBER} = 0", indent=1)
        for ordinal, member in enumerate(naming.enum_member_names(labels), start=1):
            buf.line(f"{member} = {ordinal}", indent=1)

    def _opaque(self, name: str, doc: list[str]) -> None:
        buf = self.buf
        buf.declare()
        buf.require(buf.runtime_module, "RawMessage")
        buf.blank(2)
        buf.line(f"class {name}(RawMessage):")
        buf.docstring(doc, indent=1)

    def _alias(self, domain: Domain, name: str, doc: list[str], typedef: TypeDef) -> None:
        buf = self.buf
        buf.declare()
        buf.require("typing", "TypeAlias")
        scope = scope_for(buf, domain.name, ".")
        target = self.resolver.ref(typedef, domain.name)
        annotation = self.resolver.annotation(target, scope, quote_names=True)
        if "Any" in annotation:
            buf.require("typing", "Any")
        buf.blank(2)
        buf.comment(doc, prefix="#")
        buf.line(f"{name}: TypeAlias = {annotation}")
