from __future__ import annotations


class CompileError(RuntimeError):
    pass


class FetchError(CompileError):
    pass


class DecodeError(CompileError):
    pass


class SchemaError(CompileError):
    pass


class RangeError(CompileError):
    pass


class DuplicateKeyError(CompileError):
    pass


class OverlapError(CompileError):
    pass


class EmptyCatalogueError(CompileError):
    pass


class WriteError(CompileError):
    pass
