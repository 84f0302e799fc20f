from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from component_simulation.component import LogicComponent


@runtime_checkable
class Request(Protocol):
    """Work unit held by a component.

    Requests are created and owned by the surrounding game; a component only
    keeps a reference in one of its queues and tells the request where it is.
    """

    def pending_processing(self, component: LogicComponent) -> None:
        ...
