"""Compile the minecraft-data block catalogue into a static block registry.

The catalogue is fetched once, every record is validated, block state ranges
are expanded into a state index and the result is written as a canonical JSON
artifact. Any error aborts the run before anything is written.

Usage:
  blockreg-compile
  blockreg-compile --source data/blocks.json --out build/blocks.json.gz
  blockreg-compile --check --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from .config import Settings
from .emit import write_registry
from .errors import CompileError
from .fetch import fetch_catalogue
from .normalize import normalize_records
from .registry import Registry, build_registry

LOG = logging.getLogger(__name__)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def compile_catalogue(records: Iterable[Any]) -> Registry:
    return build_registry(normalize_records(records))


def compile_source(source: Union[str, Path], *, timeout: float) -> Registry:
    return compile_catalogue(fetch_catalogue(source, timeout=timeout))


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {raw}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0: {raw}")
    return value


def _parse_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Compile a minecraft-data blocks.json catalogue into a block registry")
    ap.add_argument("--source", help="Catalogue URL or path (default: $BLOCKREG_SOURCE or minecraft-data 1.16.2)")
    ap.add_argument("--out", help="Artifact path, .gz for gzip (default: $BLOCKREG_OUTPUT or build/blocks.json)")
    ap.add_argument("--timeout", type=_positive_float, help="Fetch timeout in seconds (default: $BLOCKREG_TIMEOUT_SEC or 30)")
    ap.add_argument("--log-level", choices=LOG_LEVELS, help="Logging level (default: $BLOCKREG_LOG_LEVEL or INFO)")
    ap.add_argument("--check", action="store_true", help="Compile and report without writing the artifact")
    return ap.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    source = args.source or settings.source
    out = Path(args.out) if args.out else settings.output
    timeout = args.timeout or settings.timeout_sec
    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    LOG.debug("Compiling source=%s out=%s timeout=%ss check=%s", source, out, timeout, args.check)

    try:
        registry = compile_source(source, timeout=timeout)
        if not args.check:
            write_registry(registry, out)
    except CompileError as e:
        print(f"[error] {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    summary = f"{len(registry)} blocks, {len(registry.state_index)} states, bits_per_block={registry.bits_per_block}"
    if args.check:
        print(f"[ok] {source} ({summary})")
    else:
        print(f"[ok] {source} -> {out.as_posix()} ({summary})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
