"""
Loading, validating, and writing choosy configuration files.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import yaml
from pydantic import ValidationError

from .schema import (
    Category,
    EvenCategory,
    GaussianCategory,
    InventoryCategory,
    InventoryChoice,
    LotteryCategory,
    LotteryChoice,
    LRUCategory,
    WeightedCategory,
    WeightedChoice,
    config_adapter,
)

logger = logging.getLogger(__name__)

# ---------- Default generators ----------


def default_config() -> Dict[str, Category]:
    """Generate a sample configuration with one category per model."""
    return {
        "dinner": EvenCategory(choices=["pizza", "tacos", "curry"]),
        "movie_genre": WeightedCategory(
            choices=[
                WeightedChoice(name="comedy", weight=3),
                WeightedChoice(name="documentary", weight=1),
                WeightedChoice(name="horror", weight=2),
            ]
        ),
        "album": GaussianCategory(choices=["first album", "second album", "third album"]),
        "snack": InventoryCategory(
            choices=[
                InventoryChoice(name="apple", tickets=4),
                InventoryChoice(name="pretzels", tickets=2),
            ]
        ),
        "chore": LotteryCategory(
            choices=[
                LotteryChoice(name="dishes", tickets=1, weight=1),
                LotteryChoice(name="laundry", tickets=2, weight=2),
                LotteryChoice(name="vacuum", tickets=1, weight=3),
            ]
        ),
        "board_game": LRUCategory(choices=["chess", "go", "backgammon"]),
    }


# ---------- Load helpers ----------


def _load_yaml(path: Path):
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    return data


def parse_config(data) -> Dict[str, Category]:
    """
    Validate a raw mapping of category names to categories.

    Unknown models and unknown fields are errors, never silently dropped.
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping of category names to categories.")
    return config_adapter.validate_python(data)


def read_config(path: Path) -> Dict[str, Category]:
    logger.debug("Reading config from %s", path)
    data = _load_yaml(path)
    try:
        return parse_config(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e


# ---------- Write helpers ----------


def dump_config(config: Dict[str, Category]) -> dict:
    """Convert categories to plain data, with every default filled in."""
    return config_adapter.dump_python(config, mode="json")


def write_yaml(path: Path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(payload, f, sort_keys=False, allow_unicode=True)


def write_config(path: Path, config: Dict[str, Category]) -> None:
    logger.debug("Writing %d categories to %s", len(config), path)
    write_yaml(path, dump_config(config))


def write_default_config(path: Path, overwrite: bool = False) -> bool:
    """
    Write the sample configuration unless ``path`` already exists.

    Returns True if the file was written.
    """
    if path.exists() and not overwrite:
        return False
    write_config(path, default_config())
    return True
