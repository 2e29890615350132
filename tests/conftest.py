from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def raw_block(block_id: int, min_state: int, max_state: int, **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": block_id,
        "displayName": f"Block {block_id}",
        "name": f"block_{block_id}",
        "hardness": 1.5,
        "resistance": 6.0,
        "stackSize": 64,
        "diggable": True,
        "material": "rock",
        "transparent": False,
        "emitLight": 0,
        "filterLight": 15,
        "drops": [block_id],
        "harvestTools": {"585": True, "590": True},
        "minStateId": min_state,
        "maxStateId": max_state,
    }
    record.update(overrides)
    return record


# A trimmed excerpt of minecraft-data pc/1.16.2 blocks.json.
SAMPLE_CATALOGUE = [
    {
        "id": 0,
        "displayName": "Air",
        "name": "air",
        "hardness": 0,
        "minStateId": 0,
        "maxStateId": 0,
        "states": [],
        "drops": [],
        "diggable": False,
        "transparent": True,
        "filterLight": 0,
        "emitLight": 0,
        "boundingBox": "empty",
        "stackSize": 0,
        "defaultState": 0,
        "resistance": 0,
    },
    {
        "id": 1,
        "displayName": "Stone",
        "name": "stone",
        "hardness": 1.5,
        "minStateId": 1,
        "maxStateId": 1,
        "drops": [14],
        "diggable": True,
        "transparent": False,
        "filterLight": 15,
        "emitLight": 0,
        "harvestTools": {"585": True, "590": True, "595": True, "600": True, "605": True, "610": True},
    },
    {
        "id": 8,
        "displayName": "Grass Block",
        "name": "grass_block",
        "hardness": 0.6,
        "minStateId": 8,
        "maxStateId": 9,
        "drops": [10],
        "diggable": True,
        "transparent": False,
        "filterLight": 15,
        "emitLight": 0,
    },
    {
        "id": 33,
        "displayName": "Bedrock",
        "name": "bedrock",
        "hardness": None,
        "minStateId": 33,
        "maxStateId": 33,
        "drops": [],
        "diggable": False,
        "transparent": False,
        "filterLight": 15,
        "emitLight": 0,
    },
    {
        "id": 34,
        "displayName": "Water",
        "name": "water",
        "hardness": 100,
        "minStateId": 34,
        "maxStateId": 49,
        "drops": [],
        "diggable": False,
        "transparent": True,
        "filterLight": 2,
        "emitLight": 0,
    },
]


@pytest.fixture()
def sample_records() -> list[dict[str, Any]]:
    return json.loads(json.dumps(SAMPLE_CATALOGUE))


@pytest.fixture()
def make_raw() -> Callable[..., dict[str, Any]]:
    return raw_block


@pytest.fixture()
def catalogue_file(tmp_path: Path, sample_records) -> Path:
    path = tmp_path / "blocks.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path
