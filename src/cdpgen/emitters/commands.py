from __future__ import annotations

from typing import Sequence

from .. import naming
from ..buffer import SourceBuffer
from ..model import Command, Domain
from ..resolver import Field, Resolver
from .records import RecordWriter, fields_for, scope_for


class CommandEmitter:
    """Renders the command registry and per-command argument/reply records."""

    def __init__(self, resolver: Resolver, buf: SourceBuffer, *, types_package: str) -> None:
        self.resolver = resolver
        self.buf = buf
        self.types_package = types_package

    def registry(self, domains: Sequence[Domain]) -> None:
        buf = self.buf
        buf.header("Command payloads and wire names.")
        buf.declare()
        buf.require("enum", "StrEnum")
        buf.blank(2)
        buf.line("class CmdType(StrEnum):")
        buf.docstring(["Wire names of every protocol command."], indent=1)
        members = [
            (naming.member_name(d.name, c.name), f"{d.name}.{c.name}") for d in domains for c in d.commands
        ]
        if members:
            buf.blank()
        for member, wire in members:
            buf.line(f"{member} = {wire!r}", indent=1)

    def domain(self, domain: Domain) -> None:
        if not domain.commands:
            return
        self.buf.header("Command payloads and wire names.")
        for command in domain.commands:
            self.command(domain, command)

    def command(self, domain: Domain, command: Command) -> None:
        scope = scope_for(self.buf, None, self.types_package)
        writer = RecordWriter(self.resolver, self.buf, scope)
        wire = f"{domain.name}.{command.name}"

        if command.parameters:
            name = naming.args_name(domain.name, command.name)
            fields = fields_for(self.resolver, command.parameters, domain.name, name, scope)
            optional = [f for f in fields if f.omit_empty]
            writer.emit(
                name,
                [f"Arguments for {wire}."],
                fields,
                methods=lambda: self._setters(name, optional, scope_writer=writer),
            )

        if command.returns:
            name = naming.reply_name(domain.name, command.name)
            fields = fields_for(self.resolver, command.returns, domain.name, name, scope)
            writer.emit(name, [f"Return values of {wire}."], fields)

    def _setters(self, owner: str, optional: Sequence[Field], *, scope_writer: RecordWriter) -> None:
        buf = self.buf
        for field in optional:
            annotation = self.resolver.annotation(field.ref, scope_writer.scope)
            buf.blank()
            buf.line(f"def set_{field.attr.rstrip('_')}(self, {field.attr}: {annotation}) -> {owner}:", indent=1)
            buf.docstring(
                [f"Set the optional {field.wire_name} argument.", field.prop.desc(), *field.prop.notes()],
                indent=2,
            )
            buf.line(f"self.{field.attr} = {field.attr}", indent=2)
            buf.line("return self", indent=2)
