"""Application services: access policy, privacy and phase-entry automation, field mapping."""

from phaseboard.application.services.access_policy import (
    POST_KICKOFF_EDITABLE_COLUMNS,
    AccessPolicy,
)
from phaseboard.application.services.phase_entry_automation import PhaseEntryAutomation
from phaseboard.application.services.phase_events import PhaseEventBus
from phaseboard.application.services.privacy_automation import PrivacyAutomation

__all__ = [
    "AccessPolicy",
    "POST_KICKOFF_EDITABLE_COLUMNS",
    "PhaseEntryAutomation",
    "PhaseEventBus",
    "PrivacyAutomation",
]
