"""Generate typed Python clients from remote-debugging protocol schemas."""

from .config import GeneratorConfig
from .errors import CdpgenError, ClassificationError, FormatError, ParseError
from .generate import generate, generate_from_paths
from .loader import load_domains, merge

__version__ = "0.1.0"

__all__ = [
    "CdpgenError",
    "ClassificationError",
    "FormatError",
    "GeneratorConfig",
    "ParseError",
    "__version__",
    "generate",
    "generate_from_paths",
    "load_domains",
    "merge",
]
