from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from .errors import DuplicateKeyError, EmptyCatalogueError, OverlapError, RangeError, SchemaError
from .models import Block
from .normalize import derive_identifier

LOG = logging.getLogger(__name__)


def expand_states(block: Block) -> Iterator[tuple[int, int]]:
    """Yield ``(state_id, block_id)`` for every state in the block's closed interval."""
    lo, hi = block.min_state_id, block.max_state_id
    if lo > hi:
        raise RangeError(f"block {block.id} ({block.name}): min_state_id {lo} > max_state_id {hi}")
    if lo == hi:
        yield lo, block.id
        return
    for state_id in range(lo, hi + 1):
        yield state_id, block.id


def bits_per_block(state_count: int) -> int:
    """Smallest bit width able to enumerate ``state_count`` distinct states.

    Equal to ceil(log2(state_count)), computed without floating point.
    """
    if state_count <= 0:
        raise EmptyCatalogueError("catalogue has no block states; a global palette needs at least one")
    if state_count == 1:
        return 0
    return (state_count - 1).bit_length()


class Registry:
    """Read-only block registry with lookups by block ID and by state ID.

    Blocks are held once, in ID order; the state index only stores block IDs.
    Instances never change after construction and can be shared freely.
    """

    __slots__ = ("_blocks", "_by_id", "_state_index", "_identifiers", "_bits_per_block")

    def __init__(
        self,
        blocks: tuple[Block, ...],
        state_index: dict[int, int],
        identifiers: dict[str, int],
        bits: int,
    ) -> None:
        object.__setattr__(self, "_blocks", blocks)
        object.__setattr__(self, "_by_id", MappingProxyType({b.id: b for b in blocks}))
        object.__setattr__(self, "_state_index", MappingProxyType(state_index))
        object.__setattr__(self, "_identifiers", MappingProxyType(identifiers))
        object.__setattr__(self, "_bits_per_block", bits)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    @property
    def blocks(self) -> tuple[Block, ...]:
        return self._blocks

    @property
    def by_id(self) -> Mapping[int, Block]:
        return self._by_id

    @property
    def state_index(self) -> Mapping[int, int]:
        return self._state_index

    @property
    def identifiers(self) -> Mapping[str, int]:
        return self._identifiers

    @property
    def bits_per_block(self) -> int:
        return self._bits_per_block

    def block(self, block_id: int) -> Optional[Block]:
        return self._by_id.get(block_id)

    def block_id_for_state(self, state_id: int) -> Optional[int]:
        return self._state_index.get(state_id)

    def block_for_state(self, state_id: int) -> Optional[Block]:
        block_id = self._state_index.get(state_id)
        if block_id is None:
            return None
        return self._by_id[block_id]

    def by_identifier(self, identifier: str) -> Optional[Block]:
        block_id = self._identifiers.get(identifier)
        if block_id is None:
            return None
        return self._by_id[block_id]

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._by_id

    def __repr__(self) -> str:
        return (
            f"Registry(blocks={len(self._blocks)}, states={len(self._state_index)}, "
            f"bits_per_block={self._bits_per_block})"
        )


def build_registry(blocks: Iterable[Block]) -> Registry:
    ordered = sorted(blocks, key=lambda b: b.id)
    # Every interval is expanded before any index is built.
    pairs = [pair for block in ordered for pair in expand_states(block)]

    by_id: dict[int, Block] = {}
    identifiers: dict[str, int] = {}
    for block in ordered:
        prev = by_id.get(block.id)
        if prev is not None:
            raise DuplicateKeyError(f"block id {block.id} is declared by both '{prev.name}' and '{block.name}'")
        by_id[block.id] = block

        ident = derive_identifier(block.name)
        other = identifiers.get(ident)
        if other is not None:
            raise SchemaError(
                f"identifier {ident} derived from '{block.name}' collides with '{by_id[other].name}'"
            )
        identifiers[ident] = block.id
        LOG.debug("Block %d %s -> states [%d, %d]", block.id, ident, block.min_state_id, block.max_state_id)

    state_index: dict[int, int] = {}
    for state_id, block_id in pairs:
        owner = state_index.get(state_id)
        if owner is not None:
            raise OverlapError(
                f"state {state_id} is claimed by block {owner} ({by_id[owner].name}) "
                f"and block {block_id} ({by_id[block_id].name})"
            )
        state_index[state_id] = block_id

    bits = bits_per_block(len(state_index))
    LOG.info(
        "Built registry: %d block(s), %d state(s), bits_per_block=%d",
        len(ordered),
        len(state_index),
        bits,
    )
    return Registry(tuple(ordered), state_index, identifiers, bits)
