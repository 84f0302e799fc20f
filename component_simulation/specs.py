from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

# Bundles coming from JSON/JS-style configs use camelCase keys.
_FIELD_ALIASES: Dict[str, str] = {
    "maxInputs": "max_inputs",
    "maxOutputs": "max_outputs",
    "requestCapacity": "request_capacity",
}
_CAPACITY_FIELDS = ("max_inputs", "max_outputs", "request_capacity")
# Connection ceilings may only grow with levels; connected counts are never clamped.
_CONNECTION_FIELDS = ("max_inputs", "max_outputs")


def _normalize_key(key: str) -> str:
    return _FIELD_ALIASES.get(key, key)


def _check_capacity(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"'{name}' must be non-negative, got {value}")
    return value


def _parse_level(level: Any) -> int:
    # JSON object keys are always strings.
    if isinstance(level, str):
        try:
            return int(level)
        except ValueError:
            raise ValueError(f"upgrade level must be an integer, got {level!r}") from None
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"upgrade level must be an integer, got {level!r}")
    return level


@dataclass(frozen=True)
class SpecOverride:
    """Partial spec applied when a component reaches a given upgrade level.

    Fields left as None are not touched by the overlay.
    """
    max_inputs: Optional[int] = None
    max_outputs: Optional[int] = None
    request_capacity: Optional[int] = None
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in _CAPACITY_FIELDS:
            value = getattr(self, name)
            if value is not None:
                _check_capacity(name, value)
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    @classmethod
    def from_dict(cls, bundle: Mapping[str, Any]) -> "SpecOverride":
        values: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        for key, value in bundle.items():
            key = _normalize_key(key)
            if key in _CAPACITY_FIELDS:
                values[key] = value
            else:
                extras[key] = value
        return cls(extras=extras, **values)


class UpgradeTable(Mapping[int, SpecOverride]):
    """Level number (starting at 1) -> spec override reached at that level."""

    def __init__(self, overrides: Mapping[int, SpecOverride]):
        for level in overrides:
            if isinstance(level, bool) or not isinstance(level, int):
                raise ValueError(f"upgrade level must be an integer, got {level!r}")
            if level < 1:
                raise ValueError(f"upgrade levels start at 1, got {level}")
        self._overrides: Dict[int, SpecOverride] = dict(sorted(overrides.items()))

    @classmethod
    def from_dict(cls, table: Mapping[Any, Any]) -> "UpgradeTable":
        overrides: Dict[int, SpecOverride] = {}
        for level, bundle in table.items():
            level_int = _parse_level(level)
            if level_int in overrides:
                raise ValueError(f"upgrade level {level_int} is defined more than once")
            if isinstance(bundle, SpecOverride):
                overrides[level_int] = bundle
            else:
                overrides[level_int] = SpecOverride.from_dict(bundle)
        return cls(overrides)

    def override_for(self, level: int) -> SpecOverride | None:
        return self._overrides.get(level)

    @property
    def max_level(self) -> int:
        return max(self._overrides, default=0)

    def __getitem__(self, level: int) -> SpecOverride:
        return self._overrides[level]

    def __iter__(self) -> Iterator[int]:
        return iter(self._overrides)

    def __len__(self) -> int:
        return len(self._overrides)

    def __repr__(self) -> str:
        return f"UpgradeTable({self._overrides!r})"


@dataclass(frozen=True)
class ComponentSpecs:
    """Capacity limits and upgrade table a component is built from.

    `extras` keeps any bundle field the core does not know by name (display
    data, processing times, ...) so that it survives merging and upgrades.
    It is copied into a read-only mapping.
    """
    max_inputs: int
    max_outputs: int
    request_capacity: int
    upgrades: UpgradeTable | None = None
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in _CAPACITY_FIELDS:
            _check_capacity(name, getattr(self, name))
        if self.upgrades is not None and not isinstance(self.upgrades, UpgradeTable):
            object.__setattr__(self, "upgrades", UpgradeTable.from_dict(self.upgrades))
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    @classmethod
    def from_dict(cls, bundle: Mapping[str, Any]) -> "ComponentSpecs":
        """Build specs from a plain bundle (camelCase or snake_case keys).

        Raises ValueError when a capacity field is missing or invalid, or when
        the upgrade table lowers a connection ceiling.
        """
        values: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        upgrades: Any = None
        for key, value in bundle.items():
            key = _normalize_key(key)
            if key in _CAPACITY_FIELDS:
                values[key] = value
            elif key == "upgrades":
                upgrades = value
            else:
                extras[key] = value

        missing = [name for name in _CAPACITY_FIELDS if name not in values]
        if missing:
            raise ValueError(f"component spec is missing required fields: {', '.join(missing)}")
        specs = cls(upgrades=upgrades, extras=extras, **values)
        specs.check_upgrades()
        return specs

    def check_upgrades(self) -> None:
        """Raise ValueError if walking the upgrade table from these specs lowers max_inputs or max_outputs.

        Must be called on base (level 0) specs.
        """
        if self.upgrades is None:
            return
        current = self
        for level in range(1, self.upgrades.max_level + 1):
            upgraded = current.apply(self.upgrades.override_for(level))
            for name in _CONNECTION_FIELDS:
                before, after = getattr(current, name), getattr(upgraded, name)
                if after < before:
                    raise ValueError(f"upgrade level {level} lowers '{name}' from {before} to {after}")
            current = upgraded

    def apply(self, override: SpecOverride | None) -> "ComponentSpecs":
        """Overlay `override` field by field; untouched fields are preserved."""
        if override is None:
            return self
        changes: Dict[str, Any] = {
            name: getattr(override, name)
            for name in _CAPACITY_FIELDS
            if getattr(override, name) is not None
        }
        if override.extras:
            changes["extras"] = {**self.extras, **override.extras}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {name: getattr(self, name) for name in _CAPACITY_FIELDS}
        result.update(self.extras)
        return result
