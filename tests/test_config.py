import re

import pytest

from orders.config import (ConfigError, OrderSettings, apply_overrides, level_from_cfg,
                           load_cfg, settings_from_cfg)
from orders.entities import IngredientType as I


def test_baseline_config_loads():
    cfg = load_cfg()
    settings = settings_from_cfg(cfg)
    level = level_from_cfg(cfg)
    assert settings == OrderSettings(5.0, 5)
    assert len(level.orders) == 4
    salad = [r for r in level.orders if r.name == "salad"][0]
    assert salad.ingredients == [I.LETTUCE, I.TOMATO]


def test_overrides_merge_recursively():
    cfg = {"orders": {"interval_between_drops": 5.0, "max_concurrent_orders": 5}, "sim": {"seed": 1}}
    new = apply_overrides(cfg, {"orders": {"max_concurrent_orders": 2}})
    assert new["orders"] == {"interval_between_drops": 5.0, "max_concurrent_orders": 2}
    assert cfg["orders"]["max_concurrent_orders"] == 5


@pytest.mark.parametrize("orders", [
    {"interval_between_drops": 0},
    {"interval_between_drops": -1},
    {"max_concurrent_orders": 0},
    {"max_concurrent_orders": "many"},
    {"interval_between_drops": float("nan")},
    {"interval_between_drops": float("inf")},
    {"interval_between_drops": "nan"},
    {"max_concurrent_orders": float("inf")},
])
def test_bad_settings_rejected(orders):
    with pytest.raises(ConfigError):
        settings_from_cfg({"orders": orders})


@pytest.mark.parametrize("level", [
    {},
    {"orders": []},
    {"orders": [{"name": "x", "ingredients": [], "time_limit": 10}]},
    {"orders": [{"name": "x", "ingredients": ["Cheese"], "time_limit": 10}]},
    {"orders": [{"name": "x", "ingredients": ["Onion"], "time_limit": 0}]},
    {"orders": [{"name": "x", "ingredients": ["Onion"], "time_limit": float("nan")}]},
    {"orders": [{"name": "x", "ingredients": ["Onion"], "time_limit": float("inf")}]},
])
def test_bad_levels_rejected(level):
    with pytest.raises(ConfigError):
        level_from_cfg({"level": level})


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


@pytest.mark.parametrize("cfg, key", [
    ({"level": {"orders": ["salad"]}}, "level.orders[0]"),
    ({"level": {"orders": {"name": "salad"}}}, "level.orders"),
    ({"level": ["salad"]}, "level"),
])
def test_malformed_level_shapes_name_the_key(cfg, key):
    with pytest.raises(ConfigError, match=re.escape(f"'{key}'")):
        level_from_cfg(cfg)


def test_malformed_orders_section_rejected():
    with pytest.raises(ConfigError, match="'orders'"):
        settings_from_cfg({"orders": [5.0, 2]})


def test_non_finite_settings_fail_validation_directly():
    for bad in (float("nan"), float("inf"), float("-inf")):
        with pytest.raises(ConfigError):
            OrderSettings(interval_between_drops=bad, max_concurrent_orders=2).validate()


def test_invalid_yaml_raises_config_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("orders: {interval_between_drops: [1, 2\n")
    with pytest.raises(ConfigError, match="not valid YAML"):
        load_cfg(str(path))


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigError):
        load_cfg(str(path))
