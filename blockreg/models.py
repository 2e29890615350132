from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UINT32_MAX = 2**32 - 1


class Block(BaseModel):
    """One block type of the catalogue, as published by minecraft-data.

    Field aliases are the upstream JSON keys. Validation is strict so that a
    quoted number or a 0/1 flag is rejected instead of silently coerced.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True, extra="ignore")

    id: int = Field(ge=0, le=UINT32_MAX)
    display_name: str = Field(alias="displayName")
    name: str = Field(min_length=1)

    hardness: Optional[float] = Field(ge=0)
    diggable: bool
    drop_ids: tuple[int, ...] = Field(default=(), alias="drops")
    needs_tools: Mapping[int, bool] = Field(default_factory=dict, alias="harvestTools", validate_default=True)

    min_state_id: int = Field(alias="minStateId", ge=0, le=UINT32_MAX)
    max_state_id: int = Field(alias="maxStateId", ge=0, le=UINT32_MAX)

    transparent: bool
    filter_light_level: int = Field(alias="filterLight", ge=0)
    emit_light_level: int = Field(alias="emitLight", ge=0)

    @field_validator("drop_ids", mode="before")
    @classmethod
    def drops_as_tuple(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, list):
            return tuple(value)
        return value

    @field_validator("needs_tools", mode="before")
    @classmethod
    def tool_ids_as_int(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            return value
        out: dict[Any, Any] = {}
        for key, flag in value.items():
            # JSON object keys are always strings.
            if isinstance(key, str) and key.isdigit():
                key = int(key)
            if key in out:
                raise ValueError(f"duplicate harvest tool id {key}")
            out[key] = flag
        return out

    @field_validator("needs_tools", mode="after")
    @classmethod
    def freeze_tools(cls, value: Mapping[int, bool]) -> Mapping[int, bool]:
        return MappingProxyType(dict(value))

    @property
    def state_count(self) -> int:
        return self.max_state_id - self.min_state_id + 1
