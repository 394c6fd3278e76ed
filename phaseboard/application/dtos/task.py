"""DTOs for the task pipelines (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from phaseboard.domain.enums import AuditRecordType


class TaskColumn(str, Enum):
    """Persisted task columns written by the persistence port."""

    NAME = "name"
    STATUS = "status"
    FASE = "fase"
    IS_PRIVATE = "is_private"
    GROUP_ID = "group_id"
    STARTED_AT = "started_at"
    COMPLETED_AT = "completed_at"

    PROJECT_MANAGER_ID = "project_manager_id"
    DIRECTOR_ID = "director_id"
    TECNICO_ID = "tecnico_id"
    QC_1_ID = "qc_1_id"
    QC_RETAKES_ID = "qc_retakes_id"
    MIXER_BOGOTA_ID = "mixer_bogota_id"
    MIXER_MIAMI_ID = "mixer_miami_id"
    QC_MIX_ID = "qc_mix_id"
    TRADUCTOR_ID = "traductor_id"
    ADAPTADOR_ID = "adaptador_id"

    DATE_ASSIGNED = "date_assigned"
    DATE_DELIVERED = "date_delivered"
    GUEST_DUE_DATE = "guest_due_date"
    PHASE_DUE_DATE = "phase_due_date"
    ENTREGA_MIAMI_START = "entrega_miami_start"
    ENTREGA_MIAMI_END = "entrega_miami_end"
    ENTREGA_CLIENTE = "entrega_cliente"
    ENTREGA_MIX_RETAKES = "entrega_mix_retakes"
    ENTREGA_SESIONES = "entrega_sesiones"

    BRANCH = "branch"
    CLIENT_NAME = "client_name"
    WORK_ORDER_NUMBER = "work_order_number"
    CANTIDAD_EPISODIOS = "cantidad_episodios"
    LOCKED_RUNTIME = "locked_runtime"
    FINAL_RUNTIME = "final_runtime"
    PRUEBA_DE_VOZ = "prueba_de_voz"
    AOR_NEEDED = "aor_needed"
    AOR_COMPLETE = "aor_complete"
    STUDIO = "studio"
    PREMIX_RETAKE_LIST = "premix_retake_list"
    MIX_RETAKE_LIST = "mix_retake_list"
    DELIVERY_COMMENT = "delivery_comment"


ColumnValues = dict[TaskColumn, Any]


@dataclass(frozen=True)
class AuditEntry:
    """Activity log record for a task change."""

    task_id: str
    record_type: AuditRecordType
    field: str
    old_value: Any
    new_value: Any
    actor_id: str | None


@dataclass(frozen=True)
class AdvanceResult:
    """Result reported by the advance-phase service."""

    success: bool
    new_phase: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class PhaseEntered:
    """Published after a task has been moved onto a new phase board."""

    task_id: str
    new_phase: str
    actor_id: str | None = None


class OutcomeKind(str, Enum):
    """Result kinds of the single-task update pipeline."""

    APPLIED = "applied"
    REJECTED_VALIDATION = "rejected_validation"
    REJECTED_STATUS_LOCK = "rejected_status_lock"
    PERSIST_FAILED = "persist_failed"
    PHASE_ADVANCE_FAILED = "phase_advance_failed"


@dataclass(frozen=True)
class UpdateOutcome:
    """Structured result of apply_update.

    PHASE_ADVANCE_FAILED is a partial success: the changes (including
    status=done) were persisted but the task could not be moved on.
    """

    kind: OutcomeKind
    task_id: str
    reason: str | None = None
    new_phase: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.APPLIED

    @property
    def persisted(self) -> bool:
        return self.kind in (OutcomeKind.APPLIED, OutcomeKind.PHASE_ADVANCE_FAILED)

    @classmethod
    def applied(cls, task_id: str, new_phase: str | None = None) -> UpdateOutcome:
        return cls(OutcomeKind.APPLIED, task_id, new_phase=new_phase)

    @classmethod
    def rejected_validation(cls, task_id: str, reason: str) -> UpdateOutcome:
        return cls(OutcomeKind.REJECTED_VALIDATION, task_id, reason=reason)

    @classmethod
    def rejected_status_lock(cls, task_id: str, reason: str) -> UpdateOutcome:
        return cls(OutcomeKind.REJECTED_STATUS_LOCK, task_id, reason=reason)

    @classmethod
    def persist_failed(cls, task_id: str, cause: str) -> UpdateOutcome:
        return cls(OutcomeKind.PERSIST_FAILED, task_id, reason=cause)

    @classmethod
    def phase_advance_failed(cls, task_id: str, cause: str) -> UpdateOutcome:
        return cls(OutcomeKind.PHASE_ADVANCE_FAILED, task_id, reason=cause)
