"""In-memory collaborators for task pipeline tests."""

from __future__ import annotations

import copy
from datetime import date
from typing import Any

from phaseboard.application.dtos.task import AdvanceResult, AuditEntry, ColumnValues, TaskColumn
from phaseboard.application.services.field_mapping import role_column
from phaseboard.domain.entities.task import Person, TaskEntity
from phaseboard.domain.enums import RoleField, ViewScope
from phaseboard.domain.exceptions import PersistenceException, PhaseAdvanceException
from phaseboard.domain.phases import Phase

# TaskColumn -> TaskEntity attribute for columns the fake mirrors onto entities.
_ENTITY_ATTRS: dict[TaskColumn, str] = {
    TaskColumn.NAME: "name",
    TaskColumn.STATUS: "status",
    TaskColumn.FASE: "fase",
    TaskColumn.IS_PRIVATE: "is_private",
    TaskColumn.STARTED_AT: "started_at",
    TaskColumn.COMPLETED_AT: "completed_at",
    TaskColumn.DATE_DELIVERED: "date_delivered",
    TaskColumn.DATE_ASSIGNED: "date_assigned",
    TaskColumn.GUEST_DUE_DATE: "guest_due_date",
    TaskColumn.ENTREGA_MIAMI_END: "miami_due_date",
    TaskColumn.ENTREGA_CLIENTE: "client_due_date",
    TaskColumn.PRUEBA_DE_VOZ: "prueba_de_voz",
}
_ROLE_BY_COLUMN: dict[TaskColumn, RoleField] = {role_column(r): r for r in RoleField}


class FakeTaskPersistence:
    """ITaskPersistence over dicts. Set fail_on to {(operation, task_id)} to inject errors."""

    def __init__(self, *tasks: TaskEntity, persons: dict[str, Person] | None = None) -> None:
        self.tasks: dict[str, TaskEntity] = {task.id: copy.deepcopy(task) for task in tasks}
        self.persons: dict[str, Person] = dict(persons or {})
        self.viewers: dict[str, list[str]] = {
            task.id: sorted(task.viewer_ids) for task in tasks
        }
        self.updates: list[tuple[str, ColumnValues]] = []
        self.batch_updates: list[tuple[list[str], ColumnValues]] = []
        self.audit: list[AuditEntry] = []
        self.people_writes: list[tuple[str, list[str]]] = []
        self.moves: list[tuple[str, Phase]] = []
        self.deleted: list[str] = []
        self.fail_on: set[tuple[str, str | None]] = set()
        self._copies = 0

    def _maybe_fail(self, operation: str, task_id: str | None) -> None:
        if (operation, task_id) in self.fail_on or (operation, None) in self.fail_on:
            raise PersistenceException(operation, "injected failure", task_id)

    def _apply(self, task_id: str, values: ColumnValues) -> None:
        task = self.tasks[task_id]
        for column, value in values.items():
            if column in _ROLE_BY_COLUMN:
                role = _ROLE_BY_COLUMN[column]
                if value is None:
                    task.roles.pop(role, None)
                else:
                    task.roles[role] = self.persons.get(value, Person(id=value))
            elif column in _ENTITY_ATTRS:
                setattr(task, _ENTITY_ATTRS[column], value)
            else:
                task.metadata[column.value] = value

    async def get_task(self, task_id: str) -> TaskEntity | None:
        self._maybe_fail("get_task", task_id)
        task = self.tasks.get(task_id)
        if task is None:
            return None
        loaded = copy.deepcopy(task)
        loaded.viewer_ids = set(self.viewers.get(task_id, []))
        return loaded

    async def update_task(self, task_id: str, values: ColumnValues) -> None:
        self._maybe_fail("update_task", task_id)
        if task_id not in self.tasks:
            raise PersistenceException("update_task", "task not found", task_id)
        self.updates.append((task_id, dict(values)))
        self._apply(task_id, values)

    async def batch_update_tasks(self, task_ids: list[str], values: ColumnValues) -> None:
        self._maybe_fail("batch_update_tasks", None)
        self.batch_updates.append((list(task_ids), dict(values)))
        for task_id in task_ids:
            if task_id in self.tasks:
                self._apply(task_id, values)

    async def replace_task_people(self, task_id: str, person_ids: list[str]) -> None:
        self._maybe_fail("replace_task_people", task_id)
        self.people_writes.append((task_id, list(person_ids)))
        self.tasks[task_id].people = [self.persons.get(p, Person(id=p)) for p in person_ids]

    async def insert_audit_record(self, entry: AuditEntry) -> None:
        self._maybe_fail("insert_audit_record", entry.task_id)
        self.audit.append(entry)

    async def insert_viewer(self, task_id: str, person_id: str) -> None:
        self._maybe_fail("insert_viewer", task_id)
        viewers = self.viewers.setdefault(task_id, [])
        if person_id not in viewers:
            viewers.append(person_id)

    async def list_viewers(self, task_id: str) -> list[str]:
        return list(self.viewers.get(task_id, []))

    async def delete_viewers(self, task_id: str) -> list[str]:
        self._maybe_fail("delete_viewers", task_id)
        return self.viewers.pop(task_id, [])

    async def duplicate_task(self, task_id: str) -> str:
        self._maybe_fail("duplicate_task", task_id)
        source = self.tasks[task_id]
        self._copies += 1
        new_id = f"{task_id}-copy-{self._copies}"
        self.tasks[new_id] = copy.deepcopy(source)
        self.tasks[new_id].id = new_id
        self.tasks[new_id].name = f"{source.name} (Copy)"
        return new_id

    async def delete_task(self, task_id: str) -> None:
        self._maybe_fail("delete_task", task_id)
        if self.tasks.pop(task_id, None) is None:
            raise PersistenceException("delete_task", "task not found", task_id)
        self.deleted.append(task_id)

    async def move_task_to_phase(self, task_id: str, phase: Phase, actor_id: str | None) -> str:
        self._maybe_fail("move_task_to_phase", task_id)
        task = self.tasks[task_id]
        prefix = task.board_name.split("-", 1)[0]
        task.board_name = f"{prefix}-{phase.label}"
        task.fase = phase.label
        self.moves.append((task_id, phase))
        return task.board_name


class FakePersonLookup:
    """IPersonLookup: ids in guests are guests."""

    def __init__(self, guests: set[str] | None = None) -> None:
        self.guests = set(guests or ())
        self.calls: list[str] = []

    async def is_guest(self, person_id: str) -> bool:
        self.calls.append(person_id)
        return person_id in self.guests


class RecordingNotifications:
    """INotificationService that records calls; set fail to raise."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    async def notify_assignment(self, person_id: str, task_id: str, message: str) -> None:
        if self.fail:
            raise RuntimeError("notification backend down")
        self.sent.append((person_id, task_id, message))


class RecordingInvalidator:
    """IViewInvalidator that counts invalidations."""

    def __init__(self) -> None:
        self.scopes: list[ViewScope] = []

    async def invalidate(self, scope: ViewScope) -> None:
        self.scopes.append(scope)


class FakeAdvancer:
    """IPhaseAdvancer returning scripted results per task id (default: success to Translation)."""

    def __init__(
        self,
        results: dict[str, AdvanceResult | Exception] | None = None,
        default: AdvanceResult | None = None,
    ) -> None:
        self.results = dict(results or {})
        self.default = default or AdvanceResult(success=True, new_phase="Translation")
        self.calls: list[tuple[str, str | None]] = []

    async def advance_phase(self, task_id: str, actor_id: str | None) -> AdvanceResult:
        self.calls.append((task_id, actor_id))
        result = self.results.get(task_id, self.default)
        if isinstance(result, Exception):
            if isinstance(result, PhaseAdvanceException):
                raise result
            raise PhaseAdvanceException(task_id, str(result))
        return result


class FixedAssignmentPolicy:
    """IPhaseAssignmentPolicy returning the same person for every phase."""

    def __init__(self, person: Person | None) -> None:
        self.person = person
        self.calls: list[tuple[str, Phase]] = []

    async def assignee_for(self, task: TaskEntity, phase: Phase) -> Person | None:
        self.calls.append((task.id, phase))
        return self.person


def make_task(task_id: str = "t1", **overrides: Any) -> TaskEntity:
    """Build a TaskEntity on a Colombia post-kickoff board by default."""
    fields: dict[str, Any] = {
        "id": task_id,
        "name": f"Work order {task_id}",
        "group_id": "g1",
        "board_name": "Col-Translation",
        "fase": "Translation",
    }
    fields.update(overrides)
    return TaskEntity(**fields)


def friday() -> date:
    return date(2024, 5, 10)


def tuesday() -> date:
    return date(2024, 5, 14)
