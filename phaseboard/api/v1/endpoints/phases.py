"""Phase directory API: static list of production phases."""

from fastapi import APIRouter

from phaseboard.domain.phases import PHASE_ORDER, role_field_for_phase
from phaseboard.schemas.task import PhaseResponse

router = APIRouter()


@router.get("", response_model=list[PhaseResponse])
def list_phases() -> list[PhaseResponse]:
    """Return phases in workflow order with the role field that holds each phase's assignee."""
    return [
        PhaseResponse(
            key=phase.value,
            label=phase.label,
            position=position,
            role_field=role.value if (role := role_field_for_phase(phase)) else None,
        )
        for position, phase in enumerate(PHASE_ORDER)
    ]
