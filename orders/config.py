# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# config.py
# -----------------------------------------------------------------------------
# Purpose:
#   Load the YAML configuration, merge scenario overrides, and turn the raw
#   dict into validated OrderSettings / LevelData.
#
# Design notes:
#   - Validation happens here and in OrderCoordinator.init(), never inside a
#     running tick: bad configs fail fast with ConfigError.
#
# Usage:
#   cfg = load_cfg(); settings = settings_from_cfg(cfg); level = level_from_cfg(cfg)
# -----------------------------------------------------------------------------

from __future__ import annotations
import copy, math, os
from dataclasses import dataclass
from typing import Dict, Optional
import yaml

from .entities import IngredientType, LevelData, Recipe

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CFG = os.path.join(ROOT, "config", "baseline.yaml")

class ConfigError(ValueError):
    """Raised for configuration that would make the order system unusable."""

def _positive(value) -> bool:
    # NaN and inf compare false/true in ways that would stall the Env
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0

@dataclass
class OrderSettings:
    interval_between_drops: float = 5.0    # seconds between spawn attempts
    max_concurrent_orders: int = 5

    def validate(self):
        if not _positive(self.interval_between_drops):
            raise ConfigError(f"interval_between_drops must be positive, got {self.interval_between_drops!r}")
        if isinstance(self.max_concurrent_orders, bool) or not isinstance(self.max_concurrent_orders, int) \
                or self.max_concurrent_orders <= 0:
            raise ConfigError(f"max_concurrent_orders must be a positive integer, got {self.max_concurrent_orders!r}")

def validate_level(level: Optional[LevelData]):
    if level is None or not level.orders:
        raise ConfigError("level has an empty recipe catalog")
    for recipe in level.orders:
        if not recipe.ingredients:
            raise ConfigError(f"recipe {recipe.name!r} has no ingredients")
        if not _positive(recipe.time_limit):
            raise ConfigError(f"recipe {recipe.name!r} needs a positive time_limit")

def load_cfg(path: Optional[str] = None) -> Dict:
    with open(path or DEFAULT_CFG, "r") as f:
        try:
            cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"config {path or DEFAULT_CFG} is not valid YAML: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"config {path or DEFAULT_CFG} is not a mapping")
    return cfg

def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply scenario overrides (recursive merge) on top of the base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides)
    return new

def settings_from_cfg(cfg: Dict) -> OrderSettings:
    raw = cfg.get("orders") or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'orders' must be a mapping, got {type(raw).__name__}")
    try:
        settings = OrderSettings(
            interval_between_drops=float(raw.get("interval_between_drops", 5.0)),
            max_concurrent_orders=int(raw.get("max_concurrent_orders", 5)),
        )
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigError(f"bad 'orders' section: {e}") from e
    settings.validate()
    return settings

def level_from_cfg(cfg: Dict) -> LevelData:
    raw = cfg.get("level") or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'level' must be a mapping, got {type(raw).__name__}")
    entries = raw.get("orders") or []
    if not isinstance(entries, list):
        raise ConfigError(f"'level.orders' must be a list, got {type(entries).__name__}")
    recipes = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"'level.orders[{i}]' must be a mapping, got {entry!r}")
        name = entry.get("name", f"recipe{i}")
        try:
            ingredients = [IngredientType.coerce(x) for x in entry.get("ingredients") or []]
            time_limit = float(entry.get("time_limit", 0))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"recipe {name!r}: {e}") from e
        recipes.append(Recipe(name, ingredients, time_limit))
    level = LevelData(raw.get("name", "level"), recipes)
    validate_level(level)
    return level
