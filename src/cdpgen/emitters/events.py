from __future__ import annotations

from typing import Sequence

from .. import naming
from ..buffer import SourceBuffer
from ..model import Domain, Event, notes_for
from ..resolver import Resolver
from .records import RecordWriter, fields_for, scope_for


class EventEmitter:
    """Renders the event registry, stream abstractions and payload records."""

    def __init__(self, resolver: Resolver, buf: SourceBuffer, *, types_package: str) -> None:
        self.resolver = resolver
        self.buf = buf
        self.types_package = types_package

    def registry(self, domains: Sequence[Domain]) -> None:
        buf = self.buf
        buf.header("Event payloads, streams and wire names.")
        buf.declare()
        buf.require("enum", "StrEnum")
        buf.blank(2)
        buf.line("class EventType(StrEnum):")
        buf.docstring(["Wire names of every protocol event."], indent=1)
        members = [(naming.member_name(d.name, e.name), f"{d.name}.{e.name}") for d in domains for e in d.events]
        if members:
            buf.blank()
        for member, wire in members:
            buf.line(f"{member} = {wire!r}", indent=1)

    def domain(self, domain: Domain) -> None:
        if not domain.events:
            return
        self.buf.header("Event payloads, streams and wire names.")
        for event in domain.events:
            self.event(domain, event)

    def event(self, domain: Domain, event: Event) -> None:
        self._client(domain, event)
        self._reply(domain, event)

    def _client(self, domain: Domain, event: Event) -> None:
        buf = self.buf
        buf.declare()
        buf.require("abc", "ABC", "abstractmethod")
        client = naming.event_client_name(domain.name, event.name)
        reply = naming.reply_name(domain.name, event.name)
        buf.blank(2)
        buf.line(f"class {client}(ABC):")
        buf.docstring([f"Receives {domain.name}.{event.name} events."], indent=1)
        buf.blank()
        buf.line("@abstractmethod", indent=1)
        buf.line(f"def recv(self) -> {reply}:", indent=1)
        buf.docstring(["Block until the next event arrives and return its payload."], indent=2)
        buf.blank()
        buf.line("@abstractmethod", indent=1)
        buf.line("def close(self) -> None:", indent=1)
        buf.docstring(["Stop receiving events."], indent=2)

    def _reply(self, domain: Domain, event: Event) -> None:
        scope = scope_for(self.buf, None, self.types_package)
        name = naming.reply_name(domain.name, event.name)
        fields = fields_for(self.resolver, event.parameters, domain.name, name, scope)
        doc = [event.desc(), *notes_for(event, "event")]
        RecordWriter(self.resolver, self.buf, scope).emit(name, doc, fields)
