"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (persistence, advance-phase,
notifications, view invalidation).
"""

from phaseboard.application.interfaces import (
    INotificationService,
    IPersonLookup,
    IPhaseAdvancer,
    IPhaseAssignmentPolicy,
    ITaskPersistence,
    IViewInvalidator,
)
from phaseboard.application.services import (
    AccessPolicy,
    PhaseEntryAutomation,
    PhaseEventBus,
    PrivacyAutomation,
)
from phaseboard.application.use_cases import (
    BulkMutationCoordinator,
    TaskMutationCoordinator,
)

__all__ = [
    "AccessPolicy",
    "BulkMutationCoordinator",
    "INotificationService",
    "IPersonLookup",
    "IPhaseAdvancer",
    "IPhaseAssignmentPolicy",
    "ITaskPersistence",
    "IViewInvalidator",
    "PhaseEntryAutomation",
    "PhaseEventBus",
    "PrivacyAutomation",
    "TaskMutationCoordinator",
]
