"""
Team state manager.
Owns the teams visible to the signed-in user, the selected team and that
team's membership roster. Every collection is replaced wholesale on fetch.
"""
from __future__ import annotations

import logging
import uuid

from tasksquad.core.dependencies import StoreContext
from tasksquad.core.exceptions import InvalidInputError, RemoteError, ValidationError
from tasksquad.core.ports import Join
from tasksquad.schemas.team import Team, TeamCreate, TeamMember, TeamMemberCreate
from tasksquad.services.store_base import BaseStore

logger = logging.getLogger(__name__)

MEMBER_PROFILE = Join(alias="profile", table="profiles", local_key="user_id")


class TeamStore(BaseStore):
    """
    Teams, selection and roster for the current identity.

    Consumers read ``teams``, ``current_team``, ``team_members`` and
    ``loading`` as snapshots. A roster fetch that resolves after the selection
    has moved on is still applied; requests are never cancelled.
    """

    def __init__(self, context: StoreContext) -> None:
        super().__init__(context)
        self._teams: tuple[Team, ...] = ()
        self._current_team: Team | None = None
        self._team_members: tuple[TeamMember, ...] = ()
        self._loaded_for: uuid.UUID | None = None

    @property
    def teams(self) -> tuple[Team, ...]:
        return self._teams

    @property
    def current_team(self) -> Team | None:
        return self._current_team

    @property
    def team_members(self) -> tuple[TeamMember, ...]:
        return self._team_members

    async def load(self) -> None:
        """
        Load teams for whoever is signed in now.
        A different identity than the last load starts from empty state.
        """
        user = self._ctx.user
        user_id = user.id if user is not None else None
        if user_id != self._loaded_for:
            self._teams = ()
            self._current_team = None
            self._team_members = ()
            self._loaded_for = user_id
        await self.fetch_teams()

    async def fetch_teams(self) -> None:
        default: Team | None = None
        try:
            self._require_user()
            response = await self._ctx.remote.select(
                "teams", order_by="created_at", descending=True
            )
            self._teams = self._parse_rows(Team, "teams", response)
            logger.debug("Fetched %d teams", len(self._teams))
            if self._current_team is None and self._teams:
                default = self._teams[0]
        except ValidationError as exc:
            self._skip("fetch_teams", exc)
        except RemoteError as exc:
            self._fail("fetch_teams", exc)
        finally:
            self._loading = False

        if default is not None:
            await self.set_current_team(default)

    async def set_current_team(self, team: Team | None) -> None:
        """Change the selection, then refresh (or clear) the roster."""
        self._current_team = team
        if team is None:
            self._team_members = ()
            return
        await self.fetch_team_members(team.id)

    async def select_team(self, team_id: uuid.UUID | str) -> Team | None:
        """Select a loaded team by id; unknown ids leave the selection alone."""
        team = next((t for t in self._teams if str(t.id) == str(team_id)), None)
        if team is None:
            logger.debug("select_team ignored unknown team_id=%s", team_id)
            return None
        await self.set_current_team(team)
        return team

    async def fetch_team_members(self, team_id: uuid.UUID | None) -> None:
        try:
            if team_id is None:
                raise ValidationError("No team to fetch members for")
            response = await self._ctx.remote.select(
                "team_members",
                filters={"team_id": team_id},
                joins=(MEMBER_PROFILE,),
            )
            self._team_members = self._parse_rows(TeamMember, "team_members", response)
            logger.debug("Fetched %d members for team_id=%s", len(self._team_members), team_id)
        except ValidationError as exc:
            self._skip("fetch_team_members", exc)
        except RemoteError as exc:
            self._fail("fetch_team_members", exc)

    async def create_team(self, name: str, description: str | None = None) -> Team | None:
        """
        Insert the team, then the creator's admin membership.

        The two inserts are not atomic: if the membership insert fails the
        team row stays behind and the failure is reported as a single error.
        Returns the new team, or None when nothing was created.
        """
        try:
            user = self._require_user()
            if not name or not name.strip():
                raise ValidationError("Team name is required")
            team_in = self._build(
                TeamCreate, {"name": name, "description": description}, table="teams"
            )

            response = await self._ctx.remote.insert(
                "teams", {**team_in.model_dump(), "created_by": user.id}
            )
            team = self._parse_one(Team, "teams", response)

            membership = TeamMemberCreate(team_id=team.id, user_id=user.id, role="admin")
            self._check(
                "team_members",
                await self._ctx.remote.insert("team_members", membership.model_dump()),
            )
        except ValidationError as exc:
            self._skip("create_team", exc)
            return None
        except (InvalidInputError, RemoteError) as exc:
            self._fail("create_team", exc)
            return None

        logger.info("Team created: team_id=%s created_by=%s", team.id, user.id)
        self._succeed("Team created successfully!")

        await self.fetch_teams()
        refreshed = next((t for t in self._teams if t.id == team.id), team)
        await self.set_current_team(refreshed)
        return refreshed
