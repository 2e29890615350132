from __future__ import annotations

import gzip
import json
import logging
import os
import zlib
from pathlib import Path
from typing import Any

from .errors import DecodeError, FetchError, WriteError
from .models import Block
from .normalize import normalize_records
from .registry import Registry, build_registry

LOG = logging.getLogger(__name__)

FORMAT_VERSION = 1
_GZIP_MAGIC = b"\x1f\x8b"


def block_record(block: Block) -> dict[str, Any]:
    return {
        "id": block.id,
        "displayName": block.display_name,
        "name": block.name,
        "hardness": block.hardness,
        "diggable": block.diggable,
        "drops": list(block.drop_ids),
        "harvestTools": {str(tool): needed for tool, needed in sorted(block.needs_tools.items())},
        "minStateId": block.min_state_id,
        "maxStateId": block.max_state_id,
        "transparent": block.transparent,
        "filterLight": block.filter_light_level,
        "emitLight": block.emit_light_level,
    }


def dump_registry(registry: Registry) -> bytes:
    payload = {
        "format": FORMAT_VERSION,
        "bits_per_block": registry.bits_per_block,
        "block_count": len(registry),
        "state_count": len(registry.state_index),
        "blocks": [block_record(b) for b in registry],
    }
    text = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


def write_registry(registry: Registry, path: Path) -> None:
    raw = dump_registry(registry)
    if path.suffix == ".gz":
        raw = gzip.compress(raw, mtime=0)
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_bytes(raw)
        os.replace(tmp, path)
    except OSError as exc:
        raise WriteError(f"{path}: cannot write registry artifact: {exc}") from exc
    finally:
        if tmp.is_file():
            tmp.unlink()
    LOG.info("Wrote registry artifact %s (%d bytes)", path, len(raw))


def load_registry(path: Path) -> Registry:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise FetchError(f"{path}: {exc}") from exc
    if raw[:2] == _GZIP_MAGIC:
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as exc:
            raise DecodeError(f"{path}: corrupt gzip artifact: {exc}") from exc
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(f"{path}: artifact is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DecodeError(f"{path}: artifact root must be an object")
    if data.get("format") != FORMAT_VERSION:
        raise DecodeError(f"{path}: unsupported artifact format {data.get('format')!r}")
    records = data.get("blocks")
    if not isinstance(records, list):
        raise DecodeError(f"{path}: artifact is missing its 'blocks' array")

    registry = build_registry(normalize_records(records))
    expected = {
        "bits_per_block": registry.bits_per_block,
        "block_count": len(registry),
        "state_count": len(registry.state_index),
    }
    for key, actual in expected.items():
        if data.get(key) != actual:
            raise DecodeError(f"{path}: stored {key}={data.get(key)!r} does not match rebuilt value {actual}")
    return registry
