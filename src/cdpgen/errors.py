from __future__ import annotations


class CdpgenError(Exception):
    """Base class for generation failures."""


class ParseError(CdpgenError):
    def __init__(self, source: str, message: str, *, errors: list[str] | None = None) -> None:
        self.source = source
        self.message = message
        self.errors = list(errors or [])

        super().__init__(str(self))

    def __str__(self) -> str:
        if not self.errors:
            return f"{self.source}: {self.message}"
        details = "\n".join(f"  - {e}" for e in self.errors)
        return f"{self.source}: {self.message}\n{details}"


class ClassificationError(CdpgenError):
    def __init__(self, domain: str, name: str, message: str) -> None:
        self.domain = domain
        self.name = name
        self.message = message

        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.domain}.{self.name}: {self.message}"


class FormatError(CdpgenError):
    """Raised by a formatter that rejects generated source."""
