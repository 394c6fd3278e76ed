"""Domain layer: entities, value objects, phases, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from phaseboard.domain.entities import Person, TaskEntity
from phaseboard.domain.enums import (
    AuditRecordType,
    MemberTier,
    RoleField,
    TaskField,
    TaskStatus,
    ViewScope,
)
from phaseboard.domain.exceptions import (
    AuthorizationException,
    PersistenceException,
    PhaseAdvanceException,
    PhaseboardException,
    ResourceNotFoundException,
    StatusLockException,
    ValidationException,
)
from phaseboard.domain.phases import (
    PHASE_ORDER,
    Phase,
    phase_for_board_name,
    role_field_for_phase,
)
from phaseboard.domain.value_objects import (
    CLEARED,
    UNCHANGED,
    ActorContext,
    SetTo,
    TaskChanges,
)

__all__ = [
    # Entities
    "Person",
    "TaskEntity",
    # Enums
    "AuditRecordType",
    "MemberTier",
    "RoleField",
    "TaskField",
    "TaskStatus",
    "ViewScope",
    # Exceptions
    "AuthorizationException",
    "PersistenceException",
    "PhaseAdvanceException",
    "PhaseboardException",
    "ResourceNotFoundException",
    "StatusLockException",
    "ValidationException",
    # Phases
    "PHASE_ORDER",
    "Phase",
    "phase_for_board_name",
    "role_field_for_phase",
    # Value objects
    "ActorContext",
    "CLEARED",
    "SetTo",
    "TaskChanges",
    "UNCHANGED",
]
