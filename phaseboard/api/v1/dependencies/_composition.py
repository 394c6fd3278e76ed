"""Composition root for the task pipelines.

Builds the coordinators once per application from infrastructure
implementations; routes depend only on the TaskServices container.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.application.interfaces.repositories import ITaskPersistence
from phaseboard.application.interfaces.services import (
    INotificationService,
    IPhaseAdvancer,
    IViewInvalidator,
)
from phaseboard.application.services import (
    AccessPolicy,
    PhaseEntryAutomation,
    PhaseEventBus,
    PrivacyAutomation,
)
from phaseboard.application.use_cases.tasks import (
    BulkMutationCoordinator,
    TaskMutationCoordinator,
)
from phaseboard.core.config import Settings
from phaseboard.infrastructure.persistence.repositories import (
    SqlPersonLookup,
    SqlPhaseAssignmentPolicy,
    SqlTaskPersistence,
)
from phaseboard.infrastructure.services import InAppNotificationService, SqlPhaseAdvancer


@dataclass
class TaskServices:
    """Application-scoped task pipeline objects."""

    persistence: ITaskPersistence
    access_policy: AccessPolicy
    privacy: PrivacyAutomation
    phase_events: PhaseEventBus
    updater: TaskMutationCoordinator
    bulk: BulkMutationCoordinator


def build_task_services(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
    invalidator: IViewInvalidator,
    *,
    advancer: IPhaseAdvancer | None = None,
    notifications: INotificationService | None = None,
) -> TaskServices:
    """Wire SQL adapters, automations and coordinators.

    The phase-entry automation is subscribed to the returned event bus.
    """
    domain = settings.internal_email_domain
    persistence = SqlTaskPersistence(session_factory, domain)
    privacy = PrivacyAutomation(
        persistence,
        SqlPersonLookup(session_factory, domain),
        notifications or InAppNotificationService(session_factory),
    )
    phase_events = PhaseEventBus()
    PhaseEntryAutomation(
        persistence, privacy, SqlPhaseAssignmentPolicy(session_factory, domain)
    ).register(phase_events)

    access_policy = AccessPolicy(settings.editable_column_overrides())
    updater = TaskMutationCoordinator(
        persistence,
        advancer or SqlPhaseAdvancer(session_factory, settings.advance_phase_function),
        privacy,
        phase_events,
        invalidator,
    )
    bulk = BulkMutationCoordinator(
        persistence, updater, access_policy, phase_events, invalidator
    )
    return TaskServices(
        persistence=persistence,
        access_policy=access_policy,
        privacy=privacy,
        phase_events=phase_events,
        updater=updater,
        bulk=bulk,
    )
