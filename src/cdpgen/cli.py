from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

import structlog

from . import __version__
from .config import load_config, validate_config
from .errors import CdpgenError
from .generate import generate, stale_files
from .loader import load_domains
from .logging import configure_logging

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cdpgen",
        description="Generate a typed Python client package from protocol schema documents.",
    )
    parser.add_argument(
        "--proto",
        dest="protos",
        action="append",
        required=True,
        type=Path,
        metavar="PATH",
        help="Protocol document (JSON or YAML). Repeat to merge several documents.",
    )
    parser.add_argument("--dest", type=Path, help="Directory the package is written into (default: .)")
    parser.add_argument("--package", help="Name of the generated package (default: cdp)")
    parser.add_argument(
        "--runtime-module",
        help="Module the generated code imports its runtime from (default: cdpgen.runtime)",
    )
    parser.add_argument("--config", type=Path, metavar="TOML", help="TOML file with a [tool.cdpgen] table")
    parser.add_argument("--check", action="store_true", help="Do not write; exit 1 if files on disk are out of date")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, log_json=args.log_json)

    try:
        config = load_config(args.config).merged(
            package=args.package,
            dest=args.dest,
            runtime_module=args.runtime_module,
        )
        validate_config(config)
        domains = load_domains(args.protos)
        if args.check:
            stale = stale_files(domains, config)
            if stale:
                print("[cdpgen] out of date:", file=sys.stderr)
                for path in stale:
                    print(f"  {path}", file=sys.stderr)
                return 1
            return 0
        written = generate(domains, config)
    except CdpgenError as exc:
        print(f"cdpgen: error: {exc}", file=sys.stderr)
        return 1

    logger.debug("done", files=[str(path) for path in written])
    print(f"[cdpgen] wrote {len(written)} files to {config.package_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
