"""Offline compiler for the Minecraft block registry."""

from .compile import compile_catalogue, compile_source
from .emit import load_registry, write_registry
from .errors import (
    CompileError,
    DecodeError,
    DuplicateKeyError,
    EmptyCatalogueError,
    FetchError,
    OverlapError,
    RangeError,
    SchemaError,
    WriteError,
)
from .models import Block
from .registry import Registry, bits_per_block, build_registry, expand_states

__all__ = [
    "Block",
    "CompileError",
    "DecodeError",
    "DuplicateKeyError",
    "EmptyCatalogueError",
    "FetchError",
    "OverlapError",
    "RangeError",
    "Registry",
    "SchemaError",
    "WriteError",
    "bits_per_block",
    "build_registry",
    "compile_catalogue",
    "compile_source",
    "expand_states",
    "load_registry",
    "write_registry",
]
