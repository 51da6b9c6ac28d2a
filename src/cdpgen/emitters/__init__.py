from .client import ClientEmitter
from .commands import CommandEmitter
from .events import EventEmitter
from .types import TypeEmitter

__all__ = ["ClientEmitter", "CommandEmitter", "EventEmitter", "TypeEmitter"]
