"""Logical task field -> persisted column mapping.

The table is checked for completeness at import time: adding a TaskField
without a column (or a RoleField without an id column) fails loudly instead
of the change being silently dropped.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from phaseboard.application.dtos.task import ColumnValues, TaskColumn
from phaseboard.domain.enums import RoleField, TaskField, TaskStatus

if TYPE_CHECKING:
    from phaseboard.domain.entities.task import Person, TaskEntity
    from phaseboard.domain.value_objects import TaskChanges

FIELD_COLUMNS: dict[TaskField, TaskColumn] = {
    TaskField.NAME: TaskColumn.NAME,
    TaskField.STATUS: TaskColumn.STATUS,
    TaskField.FASE: TaskColumn.FASE,
    TaskField.IS_PRIVATE: TaskColumn.IS_PRIVATE,
    TaskField.PROJECT_MANAGER: TaskColumn.PROJECT_MANAGER_ID,
    TaskField.DIRECTOR: TaskColumn.DIRECTOR_ID,
    TaskField.TECNICO: TaskColumn.TECNICO_ID,
    TaskField.QC1: TaskColumn.QC_1_ID,
    TaskField.QC_RETAKES: TaskColumn.QC_RETAKES_ID,
    TaskField.MIXER_BOGOTA: TaskColumn.MIXER_BOGOTA_ID,
    TaskField.MIXER_MIAMI: TaskColumn.MIXER_MIAMI_ID,
    TaskField.QC_MIX: TaskColumn.QC_MIX_ID,
    TaskField.TRADUCTOR: TaskColumn.TRADUCTOR_ID,
    TaskField.ADAPTADOR: TaskColumn.ADAPTADOR_ID,
    TaskField.DATE_ASSIGNED: TaskColumn.DATE_ASSIGNED,
    TaskField.DATE_DELIVERED: TaskColumn.DATE_DELIVERED,
    TaskField.GUEST_DUE_DATE: TaskColumn.GUEST_DUE_DATE,
    TaskField.PHASE_DUE_DATE: TaskColumn.PHASE_DUE_DATE,
    TaskField.MIAMI_DUE_START: TaskColumn.ENTREGA_MIAMI_START,
    TaskField.MIAMI_DUE_DATE: TaskColumn.ENTREGA_MIAMI_END,
    TaskField.CLIENT_DUE_DATE: TaskColumn.ENTREGA_CLIENTE,
    TaskField.MIX_RETAKES_DUE_DATE: TaskColumn.ENTREGA_MIX_RETAKES,
    TaskField.SESSIONS_DUE_DATE: TaskColumn.ENTREGA_SESIONES,
    TaskField.BRANCH: TaskColumn.BRANCH,
    TaskField.CLIENT_NAME: TaskColumn.CLIENT_NAME,
    TaskField.WORK_ORDER_NUMBER: TaskColumn.WORK_ORDER_NUMBER,
    TaskField.EPISODE_COUNT: TaskColumn.CANTIDAD_EPISODIOS,
    TaskField.LOCKED_RUNTIME: TaskColumn.LOCKED_RUNTIME,
    TaskField.FINAL_RUNTIME: TaskColumn.FINAL_RUNTIME,
    TaskField.PRUEBA_DE_VOZ: TaskColumn.PRUEBA_DE_VOZ,
    TaskField.AOR_NEEDED: TaskColumn.AOR_NEEDED,
    TaskField.AOR_COMPLETE: TaskColumn.AOR_COMPLETE,
    TaskField.STUDIO: TaskColumn.STUDIO,
    TaskField.PREMIX_RETAKE_LIST: TaskColumn.PREMIX_RETAKE_LIST,
    TaskField.MIX_RETAKE_LIST: TaskColumn.MIX_RETAKE_LIST,
    TaskField.DELIVERY_COMMENT: TaskColumn.DELIVERY_COMMENT,
}

# People is a many-to-many list, replaced through replace_task_people.
SEPARATELY_RECONCILED: frozenset[TaskField] = frozenset({TaskField.PEOPLE})

ROLE_TASK_FIELDS: dict[TaskField, RoleField] = {
    TaskField.PROJECT_MANAGER: RoleField.PROJECT_MANAGER,
    TaskField.DIRECTOR: RoleField.DIRECTOR,
    TaskField.TECNICO: RoleField.TECNICO,
    TaskField.QC1: RoleField.QC1,
    TaskField.QC_RETAKES: RoleField.QC_RETAKES,
    TaskField.MIXER_BOGOTA: RoleField.MIXER_BOGOTA,
    TaskField.MIXER_MIAMI: RoleField.MIXER_MIAMI,
    TaskField.QC_MIX: RoleField.QC_MIX,
    TaskField.TRADUCTOR: RoleField.TRADUCTOR,
    TaskField.ADAPTADOR: RoleField.ADAPTADOR,
}

_TASK_FIELD_BY_ROLE: dict[RoleField, TaskField] = {
    role: task_field for task_field, role in ROLE_TASK_FIELDS.items()
}


def _check_complete() -> None:
    unmapped = set(TaskField) - set(FIELD_COLUMNS) - SEPARATELY_RECONCILED
    if unmapped:
        raise RuntimeError(f"Task fields without a column: {sorted(f.value for f in unmapped)}")
    roles_unmapped = set(RoleField) - set(_TASK_FIELD_BY_ROLE)
    if roles_unmapped:
        raise RuntimeError(f"Role fields without a task field: {sorted(r.value for r in roles_unmapped)}")


_check_complete()


def column_for(task_field: TaskField) -> TaskColumn:
    """Return the persisted column for a logical field.

    Raises:
        ValueError: For fields reconciled outside the column map (people).
    """
    if task_field in SEPARATELY_RECONCILED:
        raise ValueError(f"{task_field.value} has no task column")
    return FIELD_COLUMNS[task_field]


def role_for_task_field(task_field: TaskField) -> RoleField | None:
    return ROLE_TASK_FIELDS.get(task_field)


def task_field_for_role(role_field: RoleField) -> TaskField:
    return _TASK_FIELD_BY_ROLE[role_field]


def role_column(role_field: RoleField) -> TaskColumn:
    """Return the '<role>_id' column holding the role's assignee."""
    return FIELD_COLUMNS[task_field_for_role(role_field)]


def map_changes(changes: TaskChanges) -> ColumnValues:
    """Translate logical changes to column values.

    Role fields store the assigned Person's id (None when cleared). Fields in
    SEPARATELY_RECONCILED are skipped.
    """
    values: ColumnValues = {}
    for task_field in changes:
        if task_field in SEPARATELY_RECONCILED:
            continue
        value = changes.new_value(task_field)
        if task_field in ROLE_TASK_FIELDS:
            person: Person | None = value
            value = person.id if person is not None else None
        values[column_for(task_field)] = value
    return values


def status_side_effects(task: TaskEntity, new_status: str, now: datetime) -> ColumnValues:
    """Return the timestamp columns stamped by a status change.

    done stamps completed_at and date_delivered; working stamps started_at the
    first time only.
    """
    if new_status == TaskStatus.DONE.value:
        return {
            TaskColumn.COMPLETED_AT: now,
            TaskColumn.DATE_DELIVERED: now.date(),
        }
    if new_status == TaskStatus.WORKING.value and task.started_at is None:
        return {TaskColumn.STARTED_AT: now}
    return {}
