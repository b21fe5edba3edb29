from statfinder.coordinator.state import (
    ActiveView,
    Failed,
    Idle,
    Loading,
    OperationState,
    Succeeded,
    SummaryStatus,
)
from statfinder.coordinator.view import ViewCoordinator

__all__ = [
    "ActiveView",
    "Failed",
    "Idle",
    "Loading",
    "OperationState",
    "Succeeded",
    "SummaryStatus",
    "ViewCoordinator",
]
