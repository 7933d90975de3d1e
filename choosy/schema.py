"""
Typed data structures describing choosy categories.

Each category carries a ``model`` tag naming the algorithm that picks from it.
Unknown tags and unknown fields are rejected when a config is validated.
"""
from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, TypeAdapter

DEFAULT_STDDEV_SCALING_FACTOR = 3.0
DEFAULT_WEIGHT = 1
DEFAULT_TICKETS = 1


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class WeightedChoice(_Strict):
    name: str
    weight: StrictInt = Field(default=DEFAULT_WEIGHT, ge=0)


class InventoryChoice(_Strict):
    name: str
    tickets: StrictInt = Field(default=DEFAULT_TICKETS, ge=0)


class LotteryChoice(_Strict):
    """A lottery entry; ``weight`` tickets are added every round it does not win."""

    name: str
    tickets: StrictInt = Field(default=DEFAULT_TICKETS, ge=0)
    weight: StrictInt = Field(default=DEFAULT_WEIGHT, ge=0)


class EvenCategory(_Strict):
    model: Literal["even"] = "even"
    choices: List[str]


class WeightedCategory(_Strict):
    model: Literal["weighted"] = "weighted"
    choices: List[WeightedChoice]


class GaussianCategory(_Strict):
    """
    Prefers choices near the front of the list. The standard deviation is the
    length of the list divided by ``stddev_scaling_factor``.
    """

    model: Literal["gaussian"] = "gaussian"
    stddev_scaling_factor: StrictFloat = Field(
        default=DEFAULT_STDDEV_SCALING_FACTOR, gt=0, allow_inf_nan=False
    )
    choices: List[str]


class InventoryCategory(_Strict):
    model: Literal["inventory"] = "inventory"
    choices: List[InventoryChoice]


class LotteryCategory(_Strict):
    model: Literal["lottery"] = "lottery"
    choices: List[LotteryChoice]


class LRUCategory(_Strict):
    """The front of ``choices`` is the least recently used entry."""

    model: Literal["lru"] = "lru"
    choices: List[str]


Category = Annotated[
    Union[
        EvenCategory,
        WeightedCategory,
        GaussianCategory,
        InventoryCategory,
        LotteryCategory,
        LRUCategory,
    ],
    Field(discriminator="model"),
]

ChoosyConfig = Dict[str, Category]

config_adapter: TypeAdapter[ChoosyConfig] = TypeAdapter(ChoosyConfig)
