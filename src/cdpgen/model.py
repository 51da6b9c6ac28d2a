"""Schema model for protocol definition documents.

The models mirror the JSON layout of a protocol document one-to-one so that
`Protocol.model_validate(document)` is the only decoding step. They carry no
generation behaviour beyond name and description accessors.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

NO_DESCRIPTION = "No description."


class _SchemaModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class TypeSpec(_SchemaModel):
    """A type expression: a primitive name, a `$ref`, or an array of either."""

    description: str | None = None
    type: str | None = None
    ref: str | None = Field(default=None, alias="$ref")
    items: TypeSpec | None = None
    enum: list[str] | None = None

    def desc(self) -> str:
        text = (self.description or "").strip()
        return text or NO_DESCRIPTION


class Property(TypeSpec):
    name: str
    optional: bool = False
    experimental: bool = False
    deprecated: bool = False

    def notes(self) -> list[str]:
        lines: list[str] = []
        if self.enum:
            values = ", ".join(f'"{value}"' for value in self.enum)
            lines.append(f"Values: {values}.")
        if self.experimental:
            lines.append("Note: This property is experimental.")
        if self.deprecated:
            lines.append("Deprecated: This property is deprecated.")
        return lines


class TypeDef(TypeSpec):
    id: str
    properties: list[Property] | None = None
    experimental: bool = False
    deprecated: bool = False


class Command(_SchemaModel):
    name: str
    description: str | None = None
    parameters: list[Property] = Field(default_factory=list)
    returns: list[Property] = Field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False

    def desc(self) -> str:
        text = (self.description or "").strip()
        return text or NO_DESCRIPTION

    def optional_parameters(self) -> list[Property]:
        return [p for p in self.parameters if p.optional]


class Event(_SchemaModel):
    name: str
    description: str | None = None
    parameters: list[Property] = Field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False

    def desc(self) -> str:
        text = (self.description or "").strip()
        return text or NO_DESCRIPTION


class Domain(_SchemaModel):
    domain: str
    description: str | None = None
    experimental: bool = False
    deprecated: bool = False
    types: list[TypeDef] = Field(default_factory=list)
    commands: list[Command] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)

    @property
    def name(self) -> str:
        return self.domain

    def desc(self) -> str:
        return (self.description or "").strip()


class Protocol(_SchemaModel):
    version: dict[str, Any] | None = None
    domains: list[Domain] = Field(default_factory=list)


def notes_for(item: TypeDef | Command | Event | Domain, kind: str) -> list[str]:
    lines: list[str] = []
    if item.experimental:
        lines.append(f"Note: This {kind} is experimental.")
    if item.deprecated:
        lines.append(f"Deprecated: This {kind} is deprecated.")
    return lines
