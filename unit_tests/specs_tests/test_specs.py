import json
import unittest

import pytest

from component_simulation.components_config import (
    COMPONENT_SPECS,
    get_component_specs,
    load_component_specs,
)
from component_simulation.specs import ComponentSpecs, SpecOverride, UpgradeTable


class TestComponentSpecs(unittest.TestCase):

    def test_from_dict_accepts_camel_and_snake_case(self):
        a = ComponentSpecs.from_dict({"maxInputs": 1, "maxOutputs": 2, "requestCapacity": 3})
        b = ComponentSpecs.from_dict({"max_inputs": 1, "max_outputs": 2, "request_capacity": 3})
        self.assertEqual(a, b)
        self.assertIsNone(a.upgrades)

    def test_unknown_fields_are_kept_as_extras(self):
        specs = ComponentSpecs.from_dict(
            {"maxInputs": 1, "maxOutputs": 1, "requestCapacity": 1, "processingTime": 250, "icon": "cpu"})
        self.assertEqual(specs.extras, {"processingTime": 250, "icon": "cpu"})
        self.assertEqual(specs.to_dict()["processingTime"], 250)

    def test_missing_capacity_field_is_rejected(self):
        with self.assertRaises(ValueError):
            ComponentSpecs.from_dict({"maxInputs": 1, "maxOutputs": 1})

    def test_negative_or_non_integer_capacity_is_rejected(self):
        with self.assertRaises(ValueError):
            ComponentSpecs.from_dict({"maxInputs": -1, "maxOutputs": 1, "requestCapacity": 1})
        with self.assertRaises(ValueError):
            ComponentSpecs.from_dict({"maxInputs": 1.5, "maxOutputs": 1, "requestCapacity": 1})
        with self.assertRaises(ValueError):
            ComponentSpecs.from_dict({"maxInputs": True, "maxOutputs": 1, "requestCapacity": 1})

    def test_apply_overlays_only_mentioned_fields(self):
        base = ComponentSpecs(max_inputs=1, max_outputs=1, request_capacity=1, extras={"a": 1, "b": 2})
        upgraded = base.apply(SpecOverride(max_outputs=4, extras={"b": 3}))
        self.assertEqual(upgraded.max_inputs, 1)
        self.assertEqual(upgraded.max_outputs, 4)
        self.assertEqual(upgraded.request_capacity, 1)
        self.assertEqual(upgraded.extras, {"a": 1, "b": 3})
        # the base specs are untouched
        self.assertEqual(base.max_outputs, 1)
        self.assertEqual(base.extras, {"a": 1, "b": 2})

    def test_direct_construction_is_validated(self):
        with self.assertRaises(ValueError):
            ComponentSpecs(max_inputs=-1, max_outputs=1, request_capacity=1)
        with self.assertRaises(ValueError):
            SpecOverride(request_capacity=-3)

    def test_extras_are_copied_and_read_only(self):
        extras = {"icon": "cpu"}
        specs = ComponentSpecs(max_inputs=1, max_outputs=1, request_capacity=1, extras=extras)
        extras["icon"] = "disk"
        self.assertEqual(specs.extras["icon"], "cpu")
        with self.assertRaises(TypeError):
            specs.extras["icon"] = "disk"

        override_extras = {"label": "big"}
        override = SpecOverride(extras=override_extras)
        override_extras["label"] = "small"
        self.assertEqual(override.extras["label"], "big")

    def test_apply_none_returns_same_specs(self):
        base = ComponentSpecs(max_inputs=1, max_outputs=1, request_capacity=1)
        self.assertIs(base.apply(None), base)


class TestUpgradeTable(unittest.TestCase):

    def test_string_levels_from_json_are_converted(self):
        table = UpgradeTable.from_dict({"1": {"maxInputs": 2}, "3": {"requestCapacity": 9}})
        self.assertEqual(list(table), [1, 3])
        self.assertEqual(table.max_level, 3)
        self.assertEqual(table.override_for(1), SpecOverride(max_inputs=2))
        self.assertIsNone(table.override_for(2))

    def test_level_zero_is_rejected(self):
        with self.assertRaises(ValueError):
            UpgradeTable.from_dict({0: {"maxInputs": 2}})

    def test_non_numeric_level_is_rejected(self):
        with self.assertRaises(ValueError):
            UpgradeTable.from_dict({"first": {"maxInputs": 2}})

    def test_fractional_and_boolean_levels_are_rejected(self):
        with self.assertRaises(ValueError):
            UpgradeTable.from_dict({1.7: {"maxInputs": 2}})
        with self.assertRaises(ValueError):
            UpgradeTable.from_dict({"1.7": {"maxInputs": 2}})
        with self.assertRaises(ValueError):
            UpgradeTable.from_dict({True: {"maxInputs": 2}})

    def test_duplicate_levels_are_rejected(self):
        with self.assertRaises(ValueError):
            UpgradeTable.from_dict({"1": {"maxInputs": 2}, 1: {"maxInputs": 3}})

    def test_lowering_connection_ceiling_is_rejected(self):
        with self.assertRaises(ValueError):
            ComponentSpecs.from_dict({
                "maxInputs": 2, "maxOutputs": 2, "requestCapacity": 2,
                "upgrades": {1: {}, 2: {"maxInputs": 1}},
            })
        with self.assertRaises(ValueError):
            ComponentSpecs.from_dict({
                "maxInputs": 2, "maxOutputs": 3, "requestCapacity": 2,
                "upgrades": {1: {"maxOutputs": 4}, 3: {"maxOutputs": 3}},
            })

    def test_lowering_request_capacity_is_allowed(self):
        specs = ComponentSpecs.from_dict({
            "maxInputs": 2, "maxOutputs": 2, "requestCapacity": 4,
            "upgrades": {1: {"requestCapacity": 3}},
        })
        self.assertEqual(specs.upgrades.override_for(1).request_capacity, 3)

    def test_empty_table_has_max_level_zero(self):
        self.assertEqual(UpgradeTable({}).max_level, 0)


def test_builtin_roles():
    client = get_component_specs("client")
    processor = get_component_specs("Processor")
    assert client.upgrades is None
    assert processor.upgrades.max_level == 3
    assert set(COMPONENT_SPECS) == {"client", "processor"}


def test_unknown_role_is_rejected():
    with pytest.raises(ValueError):
        get_component_specs("router")


def test_load_component_specs_from_json(tmp_path):
    path = tmp_path / "components.json"
    path.write_text(json.dumps({
        "Gateway": {
            "maxInputs": 4,
            "maxOutputs": 4,
            "requestCapacity": 10,
            "upgrades": {"1": {"requestCapacity": 12}},
        },
    }))
    specs = load_component_specs(str(path))
    assert list(specs) == ["gateway"]
    assert specs["gateway"].upgrades.override_for(1).request_capacity == 12


def test_load_component_specs_rejects_non_object(tmp_path):
    path = tmp_path / "components.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        load_component_specs(str(path))
