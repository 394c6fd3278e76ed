"""Seed data for repository tests against SQLite."""

from dataclasses import dataclass

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phaseboard.infrastructure.persistence.models import (
    Board,
    Task,
    TaskGroup,
    TaskPerson,
    TaskViewer,
    TeamMember,
    Workspace,
)

INTERNAL_DOMAIN = "@centauro.com"


@dataclass
class Seed:
    workspace_id: str = "ws1"
    task_id: str = "t1"
    staff_id: str = "s1"
    guest_id: str = "g1"


@pytest.fixture
async def seeded(session_factory: async_sessionmaker[AsyncSession]) -> Seed:
    """One Colombia workspace: a private translation task with a guest translator.

    Boards: Col-Translation (source), Col-Adapting, Mia-Adapting, HQ Adapting,
    and Col-Mix without any group.
    """
    async with session_factory() as session:
        async with session.begin():
            session.add(Workspace(id="ws1", name="Show A"))
            session.add_all(
                [
                    TeamMember(id="s1", name="Sara Staff", email="sara@centauro.com", role="admin"),
                    TeamMember(id="g1", name="Gil Guest", email="gil@gmail.com", role="guest"),
                ]
            )
            session.add_all(
                [
                    Board(id="b-col-tr", workspace_id="ws1", name="Col-Translation"),
                    Board(id="b-col-ad", workspace_id="ws1", name="Col-Adapting"),
                    Board(id="b-mia-ad", workspace_id="ws1", name="Mia-Adapting"),
                    Board(id="b-hq-ad", workspace_id="ws1", name="Adapting", is_hq=True),
                    Board(id="b-col-mix", workspace_id="ws1", name="Col-Mix"),
                ]
            )
            session.add_all(
                [
                    TaskGroup(id="grp-tr", board_id="b-col-tr"),
                    TaskGroup(id="grp-ad", board_id="b-col-ad"),
                    TaskGroup(id="grp-mia", board_id="b-mia-ad"),
                    TaskGroup(id="grp-hq", board_id="b-hq-ad"),
                ]
            )
            session.add(
                Task(
                    id="t1",
                    group_id="grp-tr",
                    name="Episode 101",
                    status="working",
                    fase="Translation",
                    is_private=True,
                    project_manager_id="s1",
                    traductor_id="g1",
                    studio="A",
                )
            )
            session.add_all(
                [
                    TaskPerson(task_id="t1", team_member_id="s1"),
                    TaskViewer(task_id="t1", team_member_id="g1"),
                ]
            )
    return Seed()
