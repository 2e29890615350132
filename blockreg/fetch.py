from __future__ import annotations

import gzip
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
import zlib
from pathlib import Path
from typing import Any, Union

from .errors import DecodeError, FetchError

LOG = logging.getLogger(__name__)

DEFAULT_SOURCE = "https://raw.githubusercontent.com/PrismarineJS/minecraft-data/master/data/pc/1.16.2/blocks.json"
USER_AGENT = "mc-block-registry/1.0 (+offline compiler)"
_GZIP_MAGIC = b"\x1f\x8b"


def is_url(source: Union[str, Path]) -> bool:
    return urllib.parse.urlsplit(str(source)).scheme in ("http", "https")


def _read_url(url: str, timeout: float) -> bytes:
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.read()
    except urllib.error.HTTPError as exc:
        raise FetchError(f"{url}: HTTP {exc.code} {exc.reason}") from exc
    except urllib.error.URLError as exc:
        raise FetchError(f"{url}: {exc.reason}") from exc
    except (TimeoutError, OSError) as exc:
        raise FetchError(f"{url}: {exc}") from exc


def _read_path(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FetchError(f"{path}: {exc}") from exc


def decode_catalogue(raw: bytes, *, source: str = "<memory>") -> list[dict[str, Any]]:
    if raw[:2] == _GZIP_MAGIC:
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as exc:
            raise DecodeError(f"{source}: corrupt gzip payload: {exc}") from exc
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(f"{source}: payload is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise DecodeError(f"{source}: expected a JSON array of block records, got {type(data).__name__}")
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise DecodeError(f"{source}: record {i} must be an object, got {type(record).__name__}")
    return data


def fetch_catalogue(source: Union[str, Path], *, timeout: float) -> list[dict[str, Any]]:
    """Return the raw block records found at ``source`` (URL or file path).

    A single attempt is made; ``timeout`` bounds the network request.
    """
    label = str(source)
    if is_url(label):
        LOG.info("Fetching block catalogue from %s (timeout=%ss)", label, timeout)
        raw = _read_url(label, timeout)
    else:
        LOG.info("Reading block catalogue from %s", label)
        raw = _read_path(Path(source))
    records = decode_catalogue(raw, source=label)
    LOG.info("Decoded %d raw record(s) (%d bytes)", len(records), len(raw))
    return records
