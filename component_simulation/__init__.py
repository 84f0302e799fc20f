"""Simulation core for capacity-limited request processing components.

See `component_simulation.component.LogicComponent`.
"""
from .component import LogicComponent
from .request import Request
from .specs import ComponentSpecs, SpecOverride, UpgradeTable
from .transmission import (
    FunctionResolver,
    NoRouteResolver,
    RoutingTableResolver,
    TransmissionResolver,
    as_resolver,
    route_key,
)

__all__ = [
    "LogicComponent",
    "Request",
    "ComponentSpecs",
    "SpecOverride",
    "UpgradeTable",
    "TransmissionResolver",
    "FunctionResolver",
    "NoRouteResolver",
    "RoutingTableResolver",
    "as_resolver",
    "route_key",
]
