from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .fetch import DEFAULT_SOURCE

DEFAULT_OUTPUT = "build/blocks.json"
DEFAULT_TIMEOUT_SEC = 30.0


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid BLOCKREG_TIMEOUT_SEC: {raw}") from exc
    if value <= 0:
        raise ValueError(f"Invalid BLOCKREG_TIMEOUT_SEC: {raw} (must be > 0)")
    return value


def _parse_level(raw: str) -> str:
    level = raw.strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Invalid BLOCKREG_LOG_LEVEL: {raw}")
    return level


@dataclass(frozen=True)
class Settings:
    source: str
    output: Path
    timeout_sec: float
    log_level: str

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        source = env.get("BLOCKREG_SOURCE", "").strip() or DEFAULT_SOURCE
        output = Path(env.get("BLOCKREG_OUTPUT", "").strip() or DEFAULT_OUTPUT)
        timeout_raw = env.get("BLOCKREG_TIMEOUT_SEC", "").strip() or str(DEFAULT_TIMEOUT_SEC)
        return cls(
            source=source,
            output=output,
            timeout_sec=_parse_timeout(timeout_raw),
            log_level=_parse_level(env.get("BLOCKREG_LOG_LEVEL", "INFO")),
        )
