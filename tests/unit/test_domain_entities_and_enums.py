"""Tests for domain entities (TaskEntity) and enums (TaskStatus, RoleField, TaskField)."""

from phaseboard.domain.entities.task import Person
from phaseboard.domain.enums import RoleField, TaskField, TaskStatus
from tests.fakes import make_task


class TestTaskStatus:
    """TaskStatus enum values and .values() helper."""

    def test_state_machine_values(self) -> None:
        got = TaskStatus.values()
        assert {"not_started", "working", "done"} <= set(got)

    def test_member_values(self) -> None:
        assert TaskStatus.DONE.value == "done"
        assert TaskStatus.READY_FOR_QC_MIX.value == "ready_for_qc_mix"


class TestRoleFields:
    def test_every_role_is_a_task_field(self) -> None:
        field_values = set(TaskField.values())
        assert {"projectManager", "qc1", "qcRetakes", "mixerBogota", "mixerMiami", "qcMix"} <= field_values
        assert len(RoleField) == 10


class TestTaskEntity:
    def test_current_phase_from_board_name(self) -> None:
        assert make_task(board_name="Col-QC Premix").current_phase == "QC Premix"
        assert make_task(board_name="Translation").current_phase == "Translation"

    def test_roles_and_people(self) -> None:
        pm = Person("pm-1", "Paula")
        task = make_task(
            roles={RoleField.PROJECT_MANAGER: pm},
            people=[Person("p1"), Person("p2"), Person("p1")],
        )
        assert task.project_manager == pm
        assert task.role(RoleField.DIRECTOR) is None
        assert task.people_ids() == {"p1", "p2"}

    def test_is_done(self) -> None:
        assert make_task(status="done").is_done
        assert not make_task().is_done
        assert make_task().status == "not_started"
