import json
import logging
from typing import Any, Dict, Mapping

from component_simulation.specs import ComponentSpecs

_logger = logging.getLogger(__name__)

# Default bundles for the two component roles. Clients only emit requests and
# never upgrade; processors grow with each level.
DEFAULT_COMPONENT_BUNDLES: Dict[str, Dict[str, Any]] = {
    "client": {
        "maxInputs": 0,
        "maxOutputs": 1,
        "requestCapacity": 1,
    },
    "processor": {
        "maxInputs": 2,
        "maxOutputs": 2,
        "requestCapacity": 2,
        "upgrades": {
            1: {"maxInputs": 2, "maxOutputs": 2, "requestCapacity": 3},
            2: {"maxInputs": 3, "maxOutputs": 3, "requestCapacity": 5},
            3: {"maxInputs": 4, "maxOutputs": 4, "requestCapacity": 8},
        },
    },
}

COMPONENT_SPECS: Dict[str, ComponentSpecs] = {
    role: ComponentSpecs.from_dict(bundle) for role, bundle in DEFAULT_COMPONENT_BUNDLES.items()
}


def get_component_specs(role: str, specs: Mapping[str, ComponentSpecs] = COMPONENT_SPECS) -> ComponentSpecs:
    key = (role or "").lower()
    if key not in specs:
        raise ValueError(f"Unknown component role '{role}'. Valid options: {', '.join(sorted(specs))}")
    return specs[key]


def load_component_specs(path: str) -> Dict[str, ComponentSpecs]:
    """Load a JSON file mapping role name -> spec bundle."""
    with open(path, encoding="utf-8") as f:
        bundles = json.load(f)
    if not isinstance(bundles, dict):
        raise ValueError(f"{path}: expected an object mapping role name to component spec")
    result = {role.lower(): ComponentSpecs.from_dict(bundle) for role, bundle in bundles.items()}
    _logger.info(f"Loaded {len(result)} component specs from {path}")
    return result
