"""Runtime support shared by every generated client package.

Generated modules import from here; the transport itself (request/response
correlation, event delivery) is supplied by the application as a `Conn`.
"""

from __future__ import annotations

import enum
import json
from typing import Any, ClassVar, Protocol, Self, runtime_checkable


@runtime_checkable
class Stream(Protocol):
    def recv_msg(self) -> Any:
        """Block until the next message arrives and return its decoded payload."""
        ...

    def close(self) -> None: ...


@runtime_checkable
class Conn(Protocol):
    def invoke(self, method: str, params: dict[str, Any] | None) -> Any:
        """Send a command and return the decoded reply payload."""
        ...

    def subscribe(self, method: str) -> Stream: ...


class UnrecognizedEnumValue(ValueError):
    def __init__(self, type_name: str, label: Any) -> None:
        self.type_name = type_name
        self.label = label

        super().__init__(str(self))

    def __str__(self) -> str:
        return f"unrecognized {self.type_name} value: {self.label!r}"


class EventDecodeError(Exception):
    def __init__(self, domain: str, event: str, cause: BaseException) -> None:
        self.domain = domain
        self.event = event
        self.cause = cause

        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.domain}.{self.event} recv: {self.cause}"


class WireEnum(enum.IntEnum):
    """Integer enum carried on the wire by label.

    Ordinal 0 means "no value selected": it decodes from a missing or null
    value and encodes back to null, never to its ``<Name>NotSet`` label.
    Subclasses list their labels in ``__labels__``; label ``i`` has ordinal
    ``i + 1``.
    """

    __labels__: ClassVar[tuple[str, ...]] = ()

    def __str__(self) -> str:
        if self.value == 0:
            return f"{type(self).__name__}NotSet"
        return self.__labels__[self.value - 1]

    def valid(self) -> bool:
        return 1 <= self.value <= len(self.__labels__)

    def to_wire(self) -> str | None:
        if self.value == 0:
            return None
        return self.__labels__[self.value - 1]

    @classmethod
    def from_wire(cls, data: Any) -> Self:
        if data is None:
            return cls(0)
        try:
            index = cls.__labels__.index(data)
        except ValueError:
            raise UnrecognizedEnumValue(cls.__name__, data) from None
        return cls(index + 1)


class RawMessage(bytes):
    """Uninterpreted JSON payload.

    Decoding keeps bytes verbatim; already-decoded values are re-serialised
    compactly. An empty payload encodes to null.
    """

    def to_wire(self) -> Any:
        if not self:
            return None
        return json.loads(self)

    @classmethod
    def from_wire(cls, data: Any) -> Self:
        if data is None:
            return cls()
        if isinstance(data, (bytes, bytearray)):
            return cls(data)
        return cls(json.dumps(data, separators=(",", ":")).encode("utf-8"))
