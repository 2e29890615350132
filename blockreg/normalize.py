from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from pydantic import ValidationError

from .errors import SchemaError
from .models import Block

LOG = logging.getLogger(__name__)
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")


def derive_identifier(name: str) -> str:
    ident = _SEPARATOR_RE.sub("_", name).strip("_").upper()
    if not ident or ident[0].isdigit():
        raise SchemaError(f"cannot derive an identifier from block name {name!r}")
    return ident


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<record>"
        parts.append(f"field '{loc}': {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def normalize_record(raw: Any, *, index: int) -> Block:
    try:
        return Block.model_validate(raw)
    except ValidationError as exc:
        label = f"record {index}"
        if isinstance(raw, dict) and isinstance(raw.get("name"), str):
            label += f" ({raw['name']})"
        raise SchemaError(f"{label}: {_describe(exc)}") from exc


def normalize_records(raws: Iterable[Any]) -> list[Block]:
    blocks = [normalize_record(raw, index=i) for i, raw in enumerate(raws)]
    LOG.info("Normalized %d block record(s)", len(blocks))
    return blocks
