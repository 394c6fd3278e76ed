"""Domain enumerations for phaseboard.

Enums represent fixed sets of domain values (task status, member tier,
role fields, audit record types).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class TaskStatus(_ValuesMixin, str, Enum):
    """Known task status values.

    NOT_STARTED, WORKING and DONE drive the status state machine; the
    remaining labels are workflow markers shown on boards and carry no
    transition rules of their own. Status is stored as a plain string, so
    values outside this enum are tolerated.
    """

    NOT_STARTED = "not_started"
    WORKING = "working"
    DONE = "done"

    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    DELAYED = "delayed"
    DELIVERED = "delivered"
    PENDING_CLIENT_APPROVAL = "pending_client_approval"
    NO_RETAKES = "no_retakes"
    LAUNCH = "launch"
    READY_FOR_ASSETS = "ready_for_assets"
    READY_FOR_TRANSLATION = "ready_for_translation"
    READY_FOR_ADAPTING = "ready_for_adapting"
    READY_FOR_CASTING = "ready_for_casting"
    READY_FOR_RECORDING = "ready_for_recording"
    READY_FOR_PREMIX = "ready_for_premix"
    READY_FOR_QC_PREMIX = "ready_for_qc_premix"
    READY_FOR_RETAKES = "ready_for_retakes"
    READY_FOR_QC_RETAKES = "ready_for_qc_retakes"
    READY_FOR_MIX = "ready_for_mix"
    READY_FOR_QC_MIX = "ready_for_qc_mix"
    READY_FOR_QC_MIX_RETAKES = "ready_for_qc_mix_retakes"
    READY_FOR_FINAL_DELIVERY = "ready_for_final_delivery"


class MemberTier(_ValuesMixin, str, Enum):
    """Membership tier of the acting team member.

    Ordered by privilege: god > admin > team_member > guest.
    """

    GOD = "god"
    ADMIN = "admin"
    TEAM_MEMBER = "team_member"
    GUEST = "guest"

    @classmethod
    def from_stored_role(cls, role: str | None) -> "MemberTier":
        """Map a stored team_members.role value (including legacy names) to a tier.

        'project_manager' is a legacy admin role and 'member' a legacy team
        member role. Unknown non-empty roles default to TEAM_MEMBER; a
        missing role is treated as GUEST.
        """
        if not role:
            return cls.GUEST
        legacy = {"project_manager": cls.ADMIN, "member": cls.TEAM_MEMBER}
        if role in legacy:
            return legacy[role]
        try:
            return cls(role)
        except ValueError:
            return cls.TEAM_MEMBER


class RoleField(_ValuesMixin, str, Enum):
    """Task role fields: each holds at most one assigned Person."""

    PROJECT_MANAGER = "project_manager"
    DIRECTOR = "director"
    TECNICO = "tecnico"
    QC1 = "qc1"
    QC_RETAKES = "qc_retakes"
    MIXER_BOGOTA = "mixer_bogota"
    MIXER_MIAMI = "mixer_miami"
    QC_MIX = "qc_mix"
    TRADUCTOR = "traductor"
    ADAPTADOR = "adaptador"


class AuditRecordType(_ValuesMixin, str, Enum):
    """Activity log record types written by the task pipelines."""

    PEOPLE_ADDED = "people_added"
    PEOPLE_REMOVED = "people_removed"
    FIELD_CHANGE = "field_change"
    PHASE_CHANGE = "phase_change"


class ViewScope(_ValuesMixin, str, Enum):
    """Cached view families refreshed after a logical operation."""

    BOARDS = "boards"
    TASK = "task"


class TaskField(_ValuesMixin, str, Enum):
    """Logical task fields accepted by the update pipeline.

    Values are the column ids used by board views and the access policy.
    Every member must have a persisted column in the field mapping table.
    """

    NAME = "name"
    STATUS = "status"
    FASE = "fase"
    IS_PRIVATE = "isPrivate"
    PEOPLE = "people"

    PROJECT_MANAGER = "projectManager"
    DIRECTOR = "director"
    TECNICO = "tecnico"
    QC1 = "qc1"
    QC_RETAKES = "qcRetakes"
    MIXER_BOGOTA = "mixerBogota"
    MIXER_MIAMI = "mixerMiami"
    QC_MIX = "qcMix"
    TRADUCTOR = "traductor"
    ADAPTADOR = "adaptador"

    DATE_ASSIGNED = "dateAssigned"
    DATE_DELIVERED = "dateDelivered"
    GUEST_DUE_DATE = "guestDueDate"
    PHASE_DUE_DATE = "phaseDueDate"
    MIAMI_DUE_START = "entregaMiamiStart"
    MIAMI_DUE_DATE = "entregaMiamiEnd"
    CLIENT_DUE_DATE = "entregaCliente"
    MIX_RETAKES_DUE_DATE = "entregaMixRetakes"
    SESSIONS_DUE_DATE = "entregaSesiones"

    BRANCH = "branch"
    CLIENT_NAME = "clientName"
    WORK_ORDER_NUMBER = "workOrderNumber"
    EPISODE_COUNT = "cantidadEpisodios"
    LOCKED_RUNTIME = "lockedRuntime"
    FINAL_RUNTIME = "finalRuntime"
    PRUEBA_DE_VOZ = "pruebaDeVoz"
    AOR_NEEDED = "aorNeeded"
    AOR_COMPLETE = "aorComplete"
    STUDIO = "studio"
    PREMIX_RETAKE_LIST = "premixRetakeList"
    MIX_RETAKE_LIST = "mixRetakeList"
    DELIVERY_COMMENT = "deliveryComment"
