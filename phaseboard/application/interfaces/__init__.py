"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from phaseboard.infrastructure or phaseboard.api.
"""

from phaseboard.application.interfaces.repositories import (
    IPersonLookup,
    IPhaseAssignmentPolicy,
    ITaskPersistence,
)
from phaseboard.application.interfaces.services import (
    INotificationService,
    IPhaseAdvancer,
    IViewInvalidator,
)

__all__ = [
    "INotificationService",
    "IPersonLookup",
    "IPhaseAdvancer",
    "IPhaseAssignmentPolicy",
    "ITaskPersistence",
    "IViewInvalidator",
]
