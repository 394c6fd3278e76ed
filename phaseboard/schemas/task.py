"""Task API schemas."""

from datetime import date
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from phaseboard.application.dtos.bulk import (
    BulkOperation,
    BulkOutcome,
    Delete,
    Duplicate,
    MarkDone,
    MoveToPhase,
    SetField,
)
from phaseboard.application.dtos.task import UpdateOutcome
from phaseboard.application.services.field_mapping import role_for_task_field
from phaseboard.domain.entities.task import Person
from phaseboard.domain.enums import TaskField
from phaseboard.domain.exceptions import ValidationException
from phaseboard.domain.phases import resolve_phase
from phaseboard.domain.value_objects import TaskChanges


class PersonPayload(BaseModel):
    """Team member reference in a request body."""

    id: str = Field(..., min_length=1)
    name: str = Field(default="", max_length=255)

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_id(cls, data: Any) -> Any:
        """Allow a plain member id string in place of {id, name}."""
        if isinstance(data, str):
            return {"id": data}
        return data

    def to_person(self) -> Person:
        return Person(id=self.id, name=self.name)


class TaskUpdateRequest(BaseModel):
    """Partial task update (PATCH).

    Keys are board column ids (camelCase). A key that is absent is left
    unchanged; a key sent as null clears the field.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=500)
    status: str | None = Field(default=None, max_length=64)
    fase: str | None = Field(default=None, max_length=64)
    is_private: bool | None = None
    people: list[PersonPayload] | None = None

    project_manager: PersonPayload | None = None
    director: PersonPayload | None = None
    tecnico: PersonPayload | None = None
    qc1: PersonPayload | None = None
    qc_retakes: PersonPayload | None = None
    mixer_bogota: PersonPayload | None = None
    mixer_miami: PersonPayload | None = None
    qc_mix: PersonPayload | None = None
    traductor: PersonPayload | None = None
    adaptador: PersonPayload | None = None

    date_assigned: date | None = None
    date_delivered: date | None = None
    guest_due_date: date | None = None
    phase_due_date: date | None = None
    entrega_miami_start: date | None = None
    entrega_miami_end: date | None = None
    entrega_cliente: date | None = None
    entrega_mix_retakes: date | None = None
    entrega_sesiones: date | None = None

    branch: str | None = Field(default=None, max_length=64)
    client_name: str | None = Field(default=None, max_length=255)
    work_order_number: str | None = Field(default=None, max_length=64)
    cantidad_episodios: int | None = Field(default=None, ge=0)
    locked_runtime: str | None = Field(default=None, max_length=32)
    final_runtime: str | None = Field(default=None, max_length=32)
    prueba_de_voz: bool | None = None
    aor_needed: bool | None = None
    aor_complete: bool | None = None
    studio: str | None = Field(default=None, max_length=255)
    premix_retake_list: str | None = None
    mix_retake_list: str | None = None
    delivery_comment: str | None = None

    def to_changes(self) -> TaskChanges:
        """Build tri-state changes from the keys that were actually sent."""
        values: dict[TaskField, Any] = {}
        for attr in self.model_fields_set:
            task_field = TaskField(type(self).model_fields[attr].alias)
            value = getattr(self, attr)
            if isinstance(value, PersonPayload):
                value = value.to_person()
            elif task_field is TaskField.PEOPLE and value is not None:
                value = [p.to_person() for p in value]
            values[task_field] = value
        return TaskChanges.from_values(values)


def _check_aliases() -> None:
    aliases = {f.alias for f in TaskUpdateRequest.model_fields.values()}
    missing = set(TaskField.values()) - aliases
    unknown = aliases - set(TaskField.values())
    if missing or unknown:
        raise RuntimeError(
            f"TaskUpdateRequest out of sync with TaskField: missing={sorted(missing)} "
            f"unknown={sorted(unknown)}"
        )


_check_aliases()


class UpdateOutcomeResponse(BaseModel):
    """Result of PATCH /tasks/{task_id}."""

    kind: str
    task_id: str
    ok: bool
    persisted: bool
    reason: str | None = None
    new_phase: str | None = None

    @classmethod
    def from_outcome(cls, outcome: UpdateOutcome) -> "UpdateOutcomeResponse":
        return cls(
            kind=outcome.kind.value,
            task_id=outcome.task_id,
            ok=outcome.ok,
            persisted=outcome.persisted,
            reason=outcome.reason,
            new_phase=outcome.new_phase,
        )


class BulkRequest(BaseModel):
    """Request body for POST /tasks/bulk."""

    operation: Literal["duplicate", "delete", "move_to_phase", "set_field", "mark_done"]
    task_ids: list[str] = Field(default_factory=list, max_length=500)
    phase: str | None = Field(default=None, description="Target phase for move_to_phase")
    field: str | None = Field(default=None, description="Column id for set_field")
    value: Any = Field(default=None, description="New value for set_field; null clears")

    @field_validator("task_ids")
    @classmethod
    def _strip_empty_ids(cls, v: list[str]) -> list[str]:
        return [task_id for task_id in v if task_id]

    def to_operation(self) -> BulkOperation:
        """Return the bulk operation DTO.

        Raises:
            ValidationException: If phase or field is missing or unknown.
        """
        if self.operation == "duplicate":
            return Duplicate()
        if self.operation == "delete":
            return Delete()
        if self.operation == "mark_done":
            return MarkDone()
        if self.operation == "move_to_phase":
            phase = resolve_phase(self.phase)
            if phase is None:
                raise ValidationException(f"Unknown phase: {self.phase!r}", field="phase")
            return MoveToPhase(phase)
        return SetField(*self._field_and_value())

    def _field_and_value(self) -> tuple[TaskField, Any]:
        try:
            task_field = TaskField(self.field)
        except ValueError:
            raise ValidationException(f"Unknown field: {self.field!r}", field="field") from None
        if task_field is TaskField.PEOPLE:
            raise ValidationException("people cannot be set in bulk", field="field")
        if self.value is None:
            return task_field, None
        # Reuse the PATCH body to coerce dates, booleans and persons.
        try:
            parsed = TaskUpdateRequest.model_validate({task_field.value: self.value})
        except ValidationError as exc:
            raise ValidationException(
                f"Invalid value for {task_field.value}: {exc.errors()[0]['msg']}",
                field=task_field.value,
            ) from exc
        value = getattr(parsed, to_snake_attr(task_field))
        if role_for_task_field(task_field) is not None:
            value = value.to_person()
        return task_field, value


def to_snake_attr(task_field: TaskField) -> str:
    """Return the TaskUpdateRequest attribute name for a TaskField."""
    for attr, info in TaskUpdateRequest.model_fields.items():
        if info.alias == task_field.value:
            return attr
    raise KeyError(task_field)


class BulkOutcomeResponse(BaseModel):
    """Result of POST /tasks/bulk."""

    operation: str
    requested: int
    succeeded: int
    failed_ids: list[str]
    message: str
    ok: bool

    @classmethod
    def from_outcome(cls, outcome: BulkOutcome) -> "BulkOutcomeResponse":
        return cls(
            operation=outcome.operation,
            requested=outcome.requested,
            succeeded=outcome.succeeded,
            failed_ids=list(outcome.failed_ids),
            message=outcome.message,
            ok=outcome.ok,
        )


class ColumnPermissionResponse(BaseModel):
    """Result of GET /tasks/{task_id}/permissions."""

    column: str
    can_edit: bool


class PhaseResponse(BaseModel):
    """One production phase in workflow order."""

    key: str
    label: str
    position: int
    role_field: str | None = None
