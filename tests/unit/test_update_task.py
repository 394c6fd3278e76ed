"""Unit tests for TaskMutationCoordinator (single-task update pipeline)."""

from datetime import date, datetime, timezone

import pytest

from phaseboard.application.dtos.task import AdvanceResult, OutcomeKind, PhaseEntered, TaskColumn
from phaseboard.application.services import PhaseEventBus, PrivacyAutomation
from phaseboard.application.use_cases.tasks import TaskMutationCoordinator
from phaseboard.domain.entities.task import Person
from phaseboard.domain.enums import AuditRecordType, MemberTier, RoleField, TaskField, ViewScope
from phaseboard.domain.exceptions import PhaseAdvanceException
from phaseboard.domain.value_objects import ActorContext, TaskChanges
from tests.fakes import (
    FakeAdvancer,
    FakePersonLookup,
    FakeTaskPersistence,
    RecordingInvalidator,
    RecordingNotifications,
    make_task,
    tuesday,
)

NOW = datetime(2024, 5, 14, 15, 0, tzinfo=timezone.utc)
MEMBER = ActorContext("member-1", MemberTier.TEAM_MEMBER)
ADMIN = ActorContext("admin-1", MemberTier.ADMIN)


class Harness:
    """Coordinator plus its recording collaborators."""

    def __init__(self, *tasks, guests=(), advancer=None) -> None:
        self.persistence = FakeTaskPersistence(*tasks)
        self.lookup = FakePersonLookup(set(guests))
        self.notifications = RecordingNotifications()
        self.invalidator = RecordingInvalidator()
        self.advancer = advancer or FakeAdvancer()
        self.events: list[PhaseEntered] = []
        self.bus = PhaseEventBus()
        self.bus.subscribe(self._record)
        self.privacy = PrivacyAutomation(
            self.persistence, self.lookup, self.notifications, today=tuesday
        )
        self.coordinator = TaskMutationCoordinator(
            self.persistence,
            self.advancer,
            self.privacy,
            self.bus,
            self.invalidator,
            now=lambda: NOW,
        )

    async def _record(self, event: PhaseEntered) -> None:
        self.events.append(event)

    async def apply(self, task_id: str, values: dict, actor: ActorContext = MEMBER):
        task = await self.persistence.get_task(task_id)
        outcome = await self.coordinator.apply_update(task, TaskChanges.from_values(values), actor)
        await self.privacy.drain_notifications()
        return outcome


class TestStatusLock:
    async def test_non_admin_cannot_reopen_done_task(self) -> None:
        h = Harness(make_task(status="done"))
        outcome = await h.apply("t1", {TaskField.STATUS: "working"})
        assert outcome.kind is OutcomeKind.REJECTED_STATUS_LOCK
        assert h.persistence.tasks["t1"].status == "done"
        assert h.persistence.updates == []
        assert h.invalidator.scopes == []

    async def test_admin_can_reopen_done_task(self) -> None:
        h = Harness(make_task(status="done"))
        outcome = await h.apply("t1", {TaskField.STATUS: "working"}, actor=ADMIN)
        assert outcome.ok
        assert h.persistence.tasks["t1"].status == "working"
        assert h.invalidator.scopes == [ViewScope.BOARDS]

    async def test_clearing_status_is_validation_error(self) -> None:
        h = Harness(make_task())
        outcome = await h.apply("t1", {TaskField.STATUS: None})
        assert outcome.kind is OutcomeKind.REJECTED_VALIDATION
        assert h.persistence.updates == []

    async def test_working_stamps_started_at(self) -> None:
        h = Harness(make_task())
        await h.apply("t1", {TaskField.STATUS: "working"})
        assert h.persistence.updates == [
            ("t1", {TaskColumn.STATUS: "working", TaskColumn.STARTED_AT: NOW})
        ]


class TestDueDateValidation:
    async def test_miami_after_client_rejected_and_store_unchanged(self) -> None:
        h = Harness(make_task(miami_due_date=date(2024, 6, 1), client_due_date=date(2024, 6, 10)))
        outcome = await h.apply("t1", {TaskField.MIAMI_DUE_DATE: date(2024, 6, 15)})
        assert outcome.kind is OutcomeKind.REJECTED_VALIDATION
        assert "Miami" in outcome.reason
        stored = h.persistence.tasks["t1"]
        assert stored.miami_due_date == date(2024, 6, 1)
        assert stored.client_due_date == date(2024, 6, 10)
        assert h.persistence.updates == []

    async def test_client_before_miami_rejected(self) -> None:
        h = Harness(make_task(miami_due_date=date(2024, 6, 1), client_due_date=date(2024, 6, 10)))
        outcome = await h.apply("t1", {TaskField.CLIENT_DUE_DATE: date(2024, 5, 20)})
        assert outcome.kind is OutcomeKind.REJECTED_VALIDATION
        assert outcome.reason.startswith("Client due date")

    async def test_equal_dates_allowed(self) -> None:
        h = Harness(make_task(client_due_date=date(2024, 6, 10)))
        outcome = await h.apply("t1", {TaskField.MIAMI_DUE_DATE: date(2024, 6, 10)})
        assert outcome.ok

    async def test_clearing_client_date_allowed(self) -> None:
        h = Harness(make_task(miami_due_date=date(2024, 6, 20), client_due_date=date(2024, 6, 25)))
        outcome = await h.apply("t1", {TaskField.CLIENT_DUE_DATE: None})
        assert outcome.ok
        assert h.persistence.tasks["t1"].client_due_date is None


class TestDoneAdvancesPhase:
    async def test_done_advances_and_publishes(self) -> None:
        h = Harness(make_task())
        outcome = await h.apply("t1", {TaskField.STATUS: "done"})
        assert outcome.ok
        assert outcome.new_phase == "Translation"
        assert h.advancer.calls == [("t1", "member-1")]
        assert h.events == [PhaseEntered("t1", "Translation", "member-1")]
        (task_id, values), = h.persistence.updates
        assert values[TaskColumn.COMPLETED_AT] == NOW
        assert values[TaskColumn.DATE_DELIVERED] == NOW.date()
        assert h.invalidator.scopes == [ViewScope.BOARDS]

    async def test_advance_failure_keeps_done(self) -> None:
        advancer = FakeAdvancer(default=AdvanceResult(False, error="Missing voice test"))
        h = Harness(make_task(), advancer=advancer)
        outcome = await h.apply("t1", {TaskField.STATUS: "done"})
        assert outcome.kind is OutcomeKind.PHASE_ADVANCE_FAILED
        assert outcome.persisted
        assert outcome.reason == "Missing voice test"
        assert h.persistence.tasks["t1"].status == "done"
        assert h.events == []

    async def test_advance_transport_error_is_reported(self) -> None:
        advancer = FakeAdvancer({"t1": PhaseAdvanceException("t1", "connection reset")})
        h = Harness(make_task(), advancer=advancer)
        outcome = await h.apply("t1", {TaskField.STATUS: "done"})
        assert outcome.kind is OutcomeKind.PHASE_ADVANCE_FAILED
        assert "connection reset" in outcome.reason


class TestPersistFailure:
    async def test_persistence_error_becomes_outcome(self) -> None:
        h = Harness(make_task())
        h.persistence.fail_on.add(("update_task", "t1"))
        outcome = await h.apply("t1", {TaskField.STUDIO: "B"})
        assert outcome.kind is OutcomeKind.PERSIST_FAILED
        assert "injected failure" in outcome.reason
        assert h.advancer.calls == []


class TestPrivacyRules:
    async def test_guest_assignment_on_private_task_exposes_viewer(self) -> None:
        h = Harness(make_task(is_private=True), guests={"g1"})
        outcome = await h.apply("t1", {TaskField.TRADUCTOR: Person("g1", "Guest")})
        assert outcome.ok
        assert h.persistence.viewers["t1"] == ["g1"]
        stored = h.persistence.tasks["t1"]
        assert stored.date_assigned == tuesday()
        assert stored.guest_due_date == date(2024, 5, 15)
        assert stored.role(RoleField.TRADUCTOR).id == "g1"
        assert [sent[0] for sent in h.notifications.sent] == ["g1"]

    async def test_becoming_private_in_same_update_exposes_guest(self) -> None:
        h = Harness(make_task(), guests={"g1"})
        await h.apply("t1", {TaskField.IS_PRIVATE: True, TaskField.ADAPTADOR: Person("g1")})
        assert h.persistence.viewers["t1"] == ["g1"]
        assert h.persistence.tasks["t1"].is_private is True

    async def test_public_task_does_not_expose(self) -> None:
        h = Harness(make_task(), guests={"g1"})
        await h.apply("t1", {TaskField.TRADUCTOR: Person("g1")})
        assert h.persistence.viewers.get("t1", []) == []
        assert h.notifications.sent == []

    async def test_making_public_clears_guest_role(self) -> None:
        task = make_task(
            is_private=True,
            viewer_ids={"g1"},
            roles={RoleField.TRADUCTOR: Person("g1"), RoleField.DIRECTOR: Person("staff-1")},
        )
        h = Harness(task, guests={"g1"})
        outcome = await h.apply("t1", {TaskField.IS_PRIVATE: False})
        assert outcome.ok
        stored = h.persistence.tasks["t1"]
        assert stored.is_private is False
        assert stored.role(RoleField.TRADUCTOR) is None
        assert stored.role(RoleField.DIRECTOR).id == "staff-1"
        assert h.persistence.viewers.get("t1", []) == []
        # the make-public write carries is_private; no second write of it
        written = [values for _, values in h.persistence.updates]
        assert sum(TaskColumn.IS_PRIVATE in values for values in written) == 1


class TestPeopleReconciliation:
    async def test_superset_audited_as_people_added(self) -> None:
        h = Harness(make_task(people=[Person("p1", "Ana")]))
        await h.apply("t1", {TaskField.PEOPLE: [Person("p1", "Ana"), Person("p2", "Beto")]})
        assert h.persistence.people_writes == [("t1", ["p1", "p2"])]
        (entry,) = h.persistence.audit
        assert entry.record_type is AuditRecordType.PEOPLE_ADDED
        assert entry.new_value == "Beto"

    async def test_subset_audited_as_people_removed(self) -> None:
        h = Harness(make_task(people=[Person("p1", "Ana"), Person("p2", "Beto")]))
        await h.apply("t1", {TaskField.PEOPLE: [Person("p1", "Ana")]})
        (entry,) = h.persistence.audit
        assert entry.record_type is AuditRecordType.PEOPLE_REMOVED
        assert entry.old_value == "Beto"

    async def test_swap_audited_as_field_change(self) -> None:
        h = Harness(make_task(people=[Person("p1", "Ana")]))
        await h.apply("t1", {TaskField.PEOPLE: [Person("p2", "Beto")]})
        (entry,) = h.persistence.audit
        assert entry.record_type is AuditRecordType.FIELD_CHANGE
        assert (entry.old_value, entry.new_value) == ("Ana", "Beto")

    async def test_equal_set_is_noop(self) -> None:
        h = Harness(make_task(people=[Person("p1"), Person("p2")]))
        outcome = await h.apply("t1", {TaskField.PEOPLE: [Person("p2"), Person("p1"), Person("p1")]})
        assert outcome.ok
        assert h.persistence.people_writes == []
        assert h.persistence.audit == []
        assert h.invalidator.scopes == []


@pytest.mark.parametrize("invalidate", [True, False])
async def test_invalidate_flag(invalidate: bool) -> None:
    h = Harness(make_task())
    task = await h.persistence.get_task("t1")
    await h.coordinator.apply_update(
        task, TaskChanges.from_values({TaskField.STUDIO: "B"}), MEMBER, invalidate=invalidate
    )
    assert h.invalidator.scopes == ([ViewScope.BOARDS] if invalidate else [])
