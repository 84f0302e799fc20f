from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Callable, Dict, Hashable, List, Optional, TYPE_CHECKING

import xxhash

if TYPE_CHECKING:
    from component_simulation.component import LogicComponent

_logger = logging.getLogger(__name__)

TransmitFunc = Callable[[Any], Optional["LogicComponent"]]


class TransmissionResolver(ABC):
    """Decides which component a request leaving a component is handed to next."""

    @abstractmethod
    def resolve(self, destination: Any) -> LogicComponent | None:
        raise NotImplementedError

    def __call__(self, destination: Any) -> LogicComponent | None:
        return self.resolve(destination)


class FunctionResolver(TransmissionResolver):
    """Adapts a bare `destination -> next component` function."""

    def __init__(self, func: TransmitFunc):
        self.func = func

    def resolve(self, destination: Any) -> LogicComponent | None:
        return self.func(destination)

    def __repr__(self) -> str:
        return f"FunctionResolver({getattr(self.func, '__name__', self.func)!r})"


class NoRouteResolver(TransmissionResolver):
    def resolve(self, destination: Any) -> LogicComponent | None:
        return None


class RoutingTableResolver(TransmissionResolver):
    """Static table of next hops per destination.

    A destination may be reachable through several equal-cost next hops; one
    of them is chosen with a stable hash of the destination so the same
    destination always leaves through the same component, across runs too.
    Components are hashed by their id; any other destination by `str()`, so
    plain-object destinations must define a stable `__str__`.
    """

    def __init__(self):
        self.routes: Dict[Hashable, List[LogicComponent]] = defaultdict(list)

    def add_route(self, destination: Hashable, next_hop: LogicComponent) -> None:
        self.routes[destination].append(next_hop)

    def remove_routes(self, destination: Hashable) -> None:
        self.routes.pop(destination, None)

    def resolve(self, destination: Any) -> LogicComponent | None:
        hops = self.routes.get(destination)
        if not hops:
            if _logger.isEnabledFor(logging.DEBUG):
                _logger.debug(f"No route for destination={destination!r}")
            return None
        if len(hops) == 1:
            return hops[0]
        return hops[xxhash.xxh64(route_key(destination)).intdigest() % len(hops)]


def route_key(destination: Any) -> bytes:
    """Bytes identifying `destination` for equal-cost next-hop hashing."""
    from component_simulation.component import LogicComponent
    if isinstance(destination, LogicComponent):
        return str(destination.id).encode("utf-8")
    return str(destination).encode("utf-8")


def as_resolver(transmission: TransmissionResolver | TransmitFunc | None) -> TransmissionResolver:
    """Wrap whatever the orchestrator handed over into a resolver."""
    if transmission is None:
        return NoRouteResolver()
    if isinstance(transmission, TransmissionResolver):
        return transmission
    if callable(transmission):
        return FunctionResolver(transmission)
    raise TypeError(f"transmission must be a resolver or a callable, got {type(transmission).__name__}")
