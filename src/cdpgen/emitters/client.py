from __future__ import annotations

from typing import Sequence

from .. import naming
from ..buffer import SourceBuffer
from ..model import Command, Domain, Event, notes_for
from ..resolver import Resolver
from .records import fields_for, scope_for


class ClientEmitter:
    """Renders the aggregate client and one capability class per domain.

    Each domain gets an abstract class listing its commands and events, a
    concrete ``<Domain>Domain`` bound to a connection, one private receiver
    per event, and ``new_<domain>_<command>_args`` builders for commands
    with optional parameters.
    """

    def __init__(self, resolver: Resolver, buf: SourceBuffer, *, types_package: str) -> None:
        self.resolver = resolver
        self.buf = buf
        self.types_package = types_package

    def client(self, domains: Sequence[Domain]) -> None:
        buf = self.buf
        buf.header("Protocol client bound to a connection.")
        buf.declare()
        buf.require(buf.runtime_module, "Conn")
        buf.blank(2)
        buf.line("class Client:")
        buf.docstring(
            [
                "Client for every protocol domain.",
                "Each attribute exposes the commands and events of one domain over the shared connection.",
            ],
            indent=1,
        )
        buf.blank()
        buf.line("def __init__(self, conn: Conn) -> None:", indent=1)
        if not domains:
            buf.line("self._conn = conn", indent=2)
        for domain in domains:
            attr = naming.module_name(domain.name)
            cls = naming.domain_class(domain.name)
            buf.line(f"self.{attr}: {cls} = {cls}Domain(conn)", indent=2)

    def domain(self, domain: Domain) -> None:
        buf = self.buf
        buf.header("Protocol client bound to a connection.")
        buf.declare()
        buf.require("abc", "ABC", "abstractmethod")
        cls = naming.domain_class(domain.name)

        buf.blank(2)
        buf.line(f"class {cls}(ABC):")
        buf.docstring([f"The {domain.name} domain. {domain.desc()}", *notes_for(domain, "domain")], indent=1)
        for command in domain.commands:
            buf.blank()
            buf.line("@abstractmethod", indent=1)
            buf.line(self._command_signature(domain, command), indent=1)
            buf.docstring([f"Command {command.name}.", command.desc(), *notes_for(command, "command")], indent=2)
        for event in domain.events:
            buf.blank()
            buf.line("@abstractmethod", indent=1)
            buf.line(self._event_signature(domain, event), indent=1)
            buf.docstring([f"Event {event.name}.", event.desc(), *notes_for(event, "event")], indent=2)

        buf.blank(2)
        buf.line(f"class {cls}Domain({cls}):")
        buf.docstring([f"{cls} implemented over a connection."], indent=1)
        buf.blank()
        buf.line("def __init__(self, conn: Conn) -> None:", indent=1)
        buf.line("self._conn = conn", indent=2)
        for command in domain.commands:
            self._command_impl(domain, command)
        for event in domain.events:
            self._event_impl(domain, event)

        for event in domain.events:
            self._event_client(domain, event)
        for command in domain.commands:
            if command.optional_parameters():
                self._args_constructor(domain, command)

    def _command_signature(self, domain: Domain, command: Command) -> str:
        self.buf.require(".", "commands")
        method = naming.attribute_name(command.name)
        args = ""
        if command.parameters:
            args = f", args: commands.{naming.args_name(domain.name, command.name)}"
        reply = "None"
        if command.returns:
            reply = f"commands.{naming.reply_name(domain.name, command.name)}"
        return f"def {method}(self{args}) -> {reply}:"

    def _event_signature(self, domain: Domain, event: Event) -> str:
        self.buf.require(".", "events")
        method = naming.attribute_name(event.name)
        return f"def {method}(self) -> events.{naming.event_client_name(domain.name, event.name)}:"

    def _command_impl(self, domain: Domain, command: Command) -> None:
        buf = self.buf
        member = naming.member_name(domain.name, command.name)
        params = "args.to_dict()" if command.parameters else "None"
        invoke = f"self._conn.invoke(commands.CmdType.{member}.value, {params})"
        buf.blank()
        buf.line(self._command_signature(domain, command), indent=1)
        if command.returns:
            buf.line(f"reply = {invoke}", indent=2)
            buf.line(f"return commands.{naming.reply_name(domain.name, command.name)}.from_dict(reply)", indent=2)
        else:
            buf.line(invoke, indent=2)

    def _event_impl(self, domain: Domain, event: Event) -> None:
        buf = self.buf
        member = naming.member_name(domain.name, event.name)
        buf.blank()
        buf.line(self._event_signature(domain, event), indent=1)
        buf.line(f"stream = self._conn.subscribe(events.EventType.{member}.value)", indent=2)
        buf.line(f"return _{naming.event_client_name(domain.name, event.name)}(stream)", indent=2)

    def _event_client(self, domain: Domain, event: Event) -> None:
        buf = self.buf
        buf.require(buf.runtime_module, "EventDecodeError", "Stream")
        client = naming.event_client_name(domain.name, event.name)
        reply = naming.reply_name(domain.name, event.name)
        buf.blank(2)
        buf.line(f"class _{client}(events.{client}):")
        buf.line("def __init__(self, stream: Stream) -> None:", indent=1)
        buf.line("self._stream = stream", indent=2)
        buf.blank()
        buf.line(f"def recv(self) -> events.{reply}:", indent=1)
        buf.line("data = self._stream.recv_msg()", indent=2)
        buf.line("try:", indent=2)
        buf.line(f"return events.{reply}.from_dict(data)", indent=3)
        buf.line("except (AttributeError, KeyError, TypeError, ValueError) as exc:", indent=2)
        buf.line(f"raise EventDecodeError({domain.name!r}, {event.name!r}, exc) from exc", indent=3)
        buf.blank()
        buf.line("def close(self) -> None:", indent=1)
        buf.line("self._stream.close()", indent=2)

    def _args_constructor(self, domain: Domain, command: Command) -> None:
        buf = self.buf
        scope = scope_for(buf, None, self.types_package)
        name = naming.args_name(domain.name, command.name)
        fields = [f for f in fields_for(self.resolver, command.parameters, domain.name, name, scope) if f.required]
        params = ", ".join(f"{f.attr}: {self.resolver.field_annotation(f, scope)}" for f in fields)
        kwargs = ", ".join(f"{f.attr}={f.attr}" for f in fields)
        buf.blank(2)
        buf.line(f"def {naming.args_constructor_name(domain.name, command.name)}({params}) -> commands.{name}:")
        buf.docstring(
            [f"Initialize the arguments for {domain.name}.{command.name} with the required arguments."],
            indent=1,
        )
        buf.line(f"return commands.{name}({kwargs})", indent=1)
