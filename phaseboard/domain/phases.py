"""Phase directory: ordered production phases and their static metadata.

Every board is named '<Branch>-<PhaseLabel>' (e.g. 'Col-QC Premix'); HQ
aggregate boards carry the phase label alone. Phase labels are compared
through a normalized key (lower-case, alphanumerics only) so that 'QC Premix',
'qc-premix' and the legacy 'QC1' all resolve to the same phase.
"""

import re
from enum import Enum

from phaseboard.domain.enums import RoleField

BOARD_NAME_SEPARATOR = "-"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


class Phase(str, Enum):
    """Production phases in workflow order. Values are normalized keys."""

    KICKOFF = "kickoff"
    ASSETS = "assets"
    TRANSLATION = "translation"
    ADAPTING = "adapting"
    VOICE_TESTS = "voicetests"
    RECORDING = "recording"
    PREMIX = "premix"
    QC_PREMIX = "qcpremix"
    RETAKES = "retakes"
    QC_RETAKES = "qcretakes"
    MIX = "mix"
    QC_MIX = "qcmix"
    MIX_RETAKES = "mixretakes"
    DELIVERIES = "deliveries"

    @property
    def label(self) -> str:
        """Human-readable phase label (as used in board names)."""
        return PHASE_LABELS[self]


PHASE_ORDER: tuple[Phase, ...] = tuple(Phase)

PHASE_LABELS: dict[Phase, str] = {
    Phase.KICKOFF: "Kickoff",
    Phase.ASSETS: "Assets",
    Phase.TRANSLATION: "Translation",
    Phase.ADAPTING: "Adapting",
    Phase.VOICE_TESTS: "Voice Tests",
    Phase.RECORDING: "Recording",
    Phase.PREMIX: "Premix",
    Phase.QC_PREMIX: "QC Premix",
    Phase.RETAKES: "Retakes",
    Phase.QC_RETAKES: "QC Retakes",
    Phase.MIX: "Mix",
    Phase.QC_MIX: "QC Mix",
    Phase.MIX_RETAKES: "Mix Retakes",
    Phase.DELIVERIES: "Deliveries",
}

# Legacy and Spanish board labels seen in existing workspaces.
_PHASE_ALIASES: dict[str, Phase] = {
    "assetslaunch": Phase.ASSETS,
    "materiales": Phase.ASSETS,
    "traduccionad": Phase.TRANSLATION,
    "traduccinad": Phase.TRANSLATION,
    "adaptacion": Phase.ADAPTING,
    "grabacion": Phase.RECORDING,
    "qc1": Phase.QC_PREMIX,
    "mixbogota": Phase.MIX,
    "entregados": Phase.DELIVERIES,
}

# The one role field treated as "the current assignee" while a task sits in a phase.
_ROLE_FIELD_BY_PHASE: dict[Phase, RoleField] = {
    Phase.TRANSLATION: RoleField.TRADUCTOR,
    Phase.ADAPTING: RoleField.ADAPTADOR,
    Phase.PREMIX: RoleField.MIXER_BOGOTA,
    Phase.QC_PREMIX: RoleField.QC1,
    Phase.QC_RETAKES: RoleField.QC_RETAKES,
    Phase.MIX: RoleField.MIXER_MIAMI,
    Phase.QC_MIX: RoleField.QC_MIX,
}

# Stored `fase` keys for which a task still counts as not having left kickoff.
_INITIAL_FASE_KEYS = frozenset({"", "onhold", Phase.KICKOFF.value})


def phase_for_board_name(board_name: str) -> str:
    """Return the phase label part of a board name.

    'Col-Translation' -> 'Translation'; 'Mia-QC-Mix' -> 'QC-Mix';
    'Translation' (HQ board, no separator) -> 'Translation'.
    """
    _, sep, rest = board_name.partition(BOARD_NAME_SEPARATOR)
    return rest if sep else board_name


def branch_prefix_for_board_name(board_name: str) -> str | None:
    """Return the branch prefix of a board name, or None for HQ boards."""
    prefix, sep, _ = board_name.partition(BOARD_NAME_SEPARATOR)
    return prefix if sep else None


def normalize_phase_key(label: str | None) -> str:
    """Lower-case, strip non-alphanumerics, and resolve known aliases.

    Unknown labels are returned in normalized form so callers can still
    compare them.
    """
    key = _NON_ALNUM_RE.sub("", (label or "").lower())
    alias = _PHASE_ALIASES.get(key)
    return alias.value if alias else key


def parse_phase(label: str | None) -> Phase | None:
    """Return the Phase for a label or board phase part, or None if unknown."""
    try:
        return Phase(normalize_phase_key(label))
    except ValueError:
        return None


def role_field_for_phase(phase: Phase | str | None) -> RoleField | None:
    """Return the role field that holds the phase's canonical assignee, if any."""
    resolved = phase if isinstance(phase, Phase) else parse_phase(phase)
    if resolved is None:
        return None
    return _ROLE_FIELD_BY_PHASE.get(resolved)


def is_initial_phase(fase: str | None) -> bool:
    """Return True if a stored `fase` means the task has not left kickoff (empty, on hold, kickoff)."""
    return normalize_phase_key(fase) in _INITIAL_FASE_KEYS


def board_matches_phase(board_name: str, phase: Phase | str, branch_prefix: str | None) -> bool:
    """Return True if board_name is the board for phase within the given branch."""
    target = phase if isinstance(phase, Phase) else parse_phase(phase)
    if target is None:
        return False
    if parse_phase(phase_for_board_name(board_name)) is not target:
        return False
    return branch_prefix is None or branch_prefix_for_board_name(board_name) == branch_prefix


def phase_label(phase: Phase | str) -> str:
    """Return the display label for a phase; unknown labels are returned unchanged."""
    resolved = phase if isinstance(phase, Phase) else parse_phase(phase)
    return PHASE_LABELS[resolved] if resolved else str(phase)


def resolve_phase(label_or_board_name: str | None) -> Phase | None:
    """Resolve a phase label or a full board name ('Col-QC Mix') to a Phase."""
    phase = parse_phase(label_or_board_name)
    if phase is None and label_or_board_name:
        phase = parse_phase(phase_for_board_name(label_or_board_name))
    return phase
