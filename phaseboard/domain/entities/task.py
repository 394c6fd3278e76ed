"""Task domain entity.

A task is one work order moving through the production phases. It lives on
exactly one board at a time; the board name carries the phase, so moving a
task to the next phase means moving it to another board/group rather than
mutating a phase field in place.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from phaseboard.domain.enums import RoleField, TaskStatus
from phaseboard.domain.phases import phase_for_board_name


@dataclass(frozen=True)
class Person:
    """Reference to a team member.

    is_guest is supplied by the person lookup (external collaborators have no
    internal email address); the core treats it as an opaque flag.
    """

    id: str
    name: str = ""
    is_guest: bool = False


@dataclass
class TaskEntity:
    """Domain entity for a task (work order) as loaded from persistence."""

    id: str
    name: str
    group_id: str
    board_name: str
    status: str = TaskStatus.NOT_STARTED.value
    fase: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    date_delivered: date | None = None
    roles: dict[RoleField, Person] = field(default_factory=dict)
    people: list[Person] = field(default_factory=list)
    is_private: bool = False
    viewer_ids: set[str] = field(default_factory=set)
    date_assigned: date | None = None
    guest_due_date: date | None = None
    miami_due_date: date | None = None
    client_due_date: date | None = None
    prueba_de_voz: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def current_phase(self) -> str:
        """Phase label derived from the owning board."""
        return phase_for_board_name(self.board_name)

    @property
    def project_manager(self) -> Person | None:
        return self.roles.get(RoleField.PROJECT_MANAGER)

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE.value

    def role(self, role_field: RoleField) -> Person | None:
        """Return the Person assigned to role_field, or None if unset."""
        return self.roles.get(role_field)

    def people_ids(self) -> set[str]:
        return {person.id for person in self.people}
