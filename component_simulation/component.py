"""Logic-level component of the request network (a client or a processor).

A component knows nothing about positions or drawing. It only tracks how many
input/output connections it has, the requests queued at it, its upgrade level
and the resolver that picks the next component for a request leaving it.
Routing between components is driven by the caller; components never
reference each other.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Dict, Hashable, Mapping, Optional

from component_simulation.request import Request
from component_simulation.specs import ComponentSpecs, UpgradeTable
from component_simulation.transmission import TransmissionResolver, TransmitFunc, as_resolver

_logger = logging.getLogger(__name__)


class LogicComponent:
    def __init__(self, id: Hashable, name: str,
                 specs: ComponentSpecs | Mapping[str, Any],
                 transmission: TransmissionResolver | TransmitFunc | None = None):
        self.id = id
        self.name = name
        self.level: int = 0

        self.connected_inputs: int = 0
        self.connected_outputs: int = 0
        self.num_transmitted: int = 0
        self.num_received: int = 0
        # Requests currently held by this component. Maintained by the caller
        # that processes requests; the only occupancy counter.
        self.contained_requests: int = 0

        # requests waiting to be processed here, in arrival order
        self.incoming_request_queue: Deque[Request] = deque()
        # responses travelling back through this component
        self.returning_request_queue: Deque[Request] = deque()

        self.goal: Optional[int] = None
        self.goal_met: bool = False

        self.transmit_func: TransmissionResolver = as_resolver(transmission)

        if isinstance(specs, ComponentSpecs):
            specs.check_upgrades()
        else:
            specs = ComponentSpecs.from_dict(specs)
        self._base_specs: ComponentSpecs = specs
        self.specs: ComponentSpecs = specs
        self.upgrade()

    # --- specs ---
    @property
    def max_inputs(self) -> int:
        return self.specs.max_inputs

    @property
    def max_outputs(self) -> int:
        return self.specs.max_outputs

    @property
    def request_capacity(self) -> int:
        return self.specs.request_capacity

    @property
    def upgrades(self) -> UpgradeTable | None:
        return self.specs.upgrades

    @property
    def num_processing(self) -> int:
        return self.contained_requests

    def set_goal(self, goal: int) -> None:
        """Set the number of requests to process; the caller flips `goal_met`."""
        self.goal = goal
        self.goal_met = False

    def set_transmit_func(self, transmission: TransmissionResolver | TransmitFunc | None) -> None:
        self.transmit_func = as_resolver(transmission)

    def next_hop(self, destination: Any) -> LogicComponent | None:
        return self.transmit_func.resolve(destination)

    def upgrade(self) -> None:
        """Advance one level and overlay that level's overrides.

        Without an upgrade table this is a no-op. There is no upper bound: a
        level missing from the table still advances `level` but changes nothing.
        """
        if self.upgrades is None:
            return
        self.level += 1
        override = self.upgrades.override_for(self.level)
        if override is None:
            _logger.warning(f"Component {self.name} has no upgrade specs for level {self.level}")
            return
        self.specs = self.specs.apply(override)
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                f"Component upgraded  name={self.name} level={self.level} max_inputs={self.max_inputs} "
                f"max_outputs={self.max_outputs} request_capacity={self.request_capacity}")

    # --- connections ---
    def add_input(self) -> bool:
        if self.has_available_input():
            self.connected_inputs += 1
            return True
        return False

    def add_output(self) -> bool:
        if self.has_available_output():
            self.connected_outputs += 1
            return True
        return False

    def remove_input(self) -> None:
        self.connected_inputs = max(self.connected_inputs - 1, 0)

    def remove_output(self) -> None:
        self.connected_outputs = max(self.connected_outputs - 1, 0)

    def has_available_input(self) -> bool:
        return self.connected_inputs < self.max_inputs

    def has_available_output(self) -> bool:
        return self.connected_outputs < self.max_outputs

    # --- requests ---
    def enqueue(self, request: Request) -> None:
        """Queue `request` here and tell it which component holds it.

        Capacity is not checked: callers must consult `is_available()` or
        `get_availability()` first. Enqueueing into a full component still
        queues the request.
        """
        request.pending_processing(self)
        self.incoming_request_queue.append(request)

    def get_availability(self) -> int:
        """Free request slots; zero or negative means full."""
        return self.request_capacity - self.contained_requests

    def is_available(self) -> bool:
        return self.contained_requests < self.request_capacity

    # --- control ---
    def soft_reset(self) -> None:
        self.num_transmitted = 0
        self.num_received = 0
        self.goal = None
        self.goal_met = False
        self.incoming_request_queue.clear()

    def hard_reset(self) -> None:
        """Soft reset, drop all connections and held requests, and go back to the level reached at construction.

        Responses in `returning_request_queue` are kept.
        """
        self.soft_reset()
        self.connected_inputs = 0
        self.connected_outputs = 0
        self.contained_requests = 0
        self.specs = self._base_specs
        self.level = 0
        self.upgrade()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "connected_inputs": self.connected_inputs,
            "max_inputs": self.max_inputs,
            "connected_outputs": self.connected_outputs,
            "max_outputs": self.max_outputs,
            "request_capacity": self.request_capacity,
            "contained_requests": self.contained_requests,
            "queued_requests": len(self.incoming_request_queue),
            "returning_requests": len(self.returning_request_queue),
            "num_transmitted": self.num_transmitted,
            "num_received": self.num_received,
            "goal": self.goal,
            "goal_met": self.goal_met,
        }

    def __repr__(self) -> str:
        return f"LogicComponent(id={self.id!r}, name={self.name!r}, level={self.level})"
