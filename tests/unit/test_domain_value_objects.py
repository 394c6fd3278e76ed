"""Tests for domain value objects (ActorContext, TaskChanges tri-state)."""

import pytest

from phaseboard.domain.entities.task import Person
from phaseboard.domain.enums import MemberTier, RoleField, TaskField
from phaseboard.domain.value_objects import CLEARED, UNCHANGED, ActorContext, SetTo, TaskChanges
from tests.fakes import make_task


class TestActorContext:
    def test_empty_person_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            ActorContext("", MemberTier.ADMIN)

    def test_tier_flags(self) -> None:
        assert ActorContext("a", MemberTier.GUEST).is_guest
        assert ActorContext("a", MemberTier.GOD).is_admin_or_above
        assert ActorContext("a", MemberTier.ADMIN).is_admin_or_above
        assert not ActorContext("a", MemberTier.TEAM_MEMBER).is_admin_or_above

    def test_project_manager_derived_from_task(self) -> None:
        task = make_task(roles={RoleField.PROJECT_MANAGER: Person("pm-1")})
        assert ActorContext("pm-1", MemberTier.TEAM_MEMBER).is_project_manager_of(task)
        assert not ActorContext("other", MemberTier.TEAM_MEMBER).is_project_manager_of(task)
        assert not ActorContext("pm-1", MemberTier.TEAM_MEMBER).is_project_manager_of(make_task())


class TestMemberTier:
    def test_legacy_roles(self) -> None:
        assert MemberTier.from_stored_role("project_manager") is MemberTier.ADMIN
        assert MemberTier.from_stored_role("member") is MemberTier.TEAM_MEMBER
        assert MemberTier.from_stored_role("god") is MemberTier.GOD
        assert MemberTier.from_stored_role(None) is MemberTier.GUEST
        assert MemberTier.from_stored_role("sound_engineer") is MemberTier.TEAM_MEMBER


class TestTaskChanges:
    """Absent means UNCHANGED, None means CLEARED, anything else SetTo."""

    def test_from_values(self) -> None:
        changes = TaskChanges.from_values({TaskField.STUDIO: "B", TaskField.BRANCH: None})
        assert changes.get(TaskField.STUDIO) == SetTo("B")
        assert changes.get(TaskField.BRANCH) is CLEARED
        assert changes.get(TaskField.NAME) is UNCHANGED

    def test_unchanged_entries_are_dropped(self) -> None:
        changes = TaskChanges({TaskField.NAME: UNCHANGED})
        assert not changes
        assert len(changes) == 0

    def test_new_value_and_effective(self) -> None:
        changes = TaskChanges.from_values({TaskField.STUDIO: "B", TaskField.BRANCH: None})
        assert changes.new_value(TaskField.STUDIO) == "B"
        assert changes.new_value(TaskField.BRANCH) is None
        assert changes.effective(TaskField.NAME, "current") == "current"
        assert changes.effective(TaskField.BRANCH, "Col") is None
        with pytest.raises(KeyError):
            changes.new_value(TaskField.NAME)

    def test_is_set_vs_is_changed(self) -> None:
        changes = TaskChanges.from_values({TaskField.BRANCH: None})
        assert changes.is_changed(TaskField.BRANCH)
        assert not changes.is_set(TaskField.BRANCH)
