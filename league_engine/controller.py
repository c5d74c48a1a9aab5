"""
League state controller.

Owns the roster, the match log and the view preferences, and re-runs the
standings aggregation whenever the match log changes. Intended for a single
owner (one event loop); nothing here is locked.
"""

import logging
import re
from typing import Any, Mapping, Optional, Union

from league_engine.config import Config, DEFAULT_CONFIG
from league_engine.data.loader import LeagueDataLoader, LoadError
from league_engine.data.storage import JsonFileStore, KeyValueStore
from league_engine.models import (
    FormattedMatch,
    Match,
    MatchDraft,
    SortDirection,
    SortField,
    Team,
)
from league_engine.standings import aggregate, sort_view

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 7
UNKNOWN_TEAM = "Unknown Team"


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_leading_int(value: str) -> Optional[int]:
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _valid_score(score: Any) -> bool:
    return (
        isinstance(score, int)
        and not isinstance(score, bool)
        and MIN_SCORE <= score <= MAX_SCORE
    )


class LeagueController:
    """
    Standings state plus the operations the UI calls.

    Usage:
        controller = LeagueController()
        await controller.bootstrap()

        controller.record_match({"homeTeamId": 1, "awayTeamId": 2,
                                 "homeScore": 2, "awayScore": 1,
                                 "date": "2024-09-01"})
        table = controller.get_sorted_view()
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        loader: Optional[Any] = None,
        store: Optional[KeyValueStore] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.loader = loader or LeagueDataLoader(self.config)
        self.store = store if store is not None else JsonFileStore(self.config.store_path)

        self.teams: list[Team] = []
        self.matches: list[Match] = []
        self.is_loading: bool = False
        self.sort_by: SortField = SortField.POSITION
        self.sort_direction: SortDirection = SortDirection.ASC
        self.favorite_team_id: Optional[int] = None

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def favorite_team(self) -> Optional[Team]:
        """The favorite team, or None if unset or not on the roster."""
        if not self.favorite_team_id or not self.teams:
            return None
        return self.get_team(self.favorite_team_id)

    def get_team(self, team_id: int) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    @staticmethod
    def games_played(team: Team) -> int:
        return team.games_played

    def get_sorted_view(self) -> list[Team]:
        """Roster sorted on the active view column and direction."""
        return sort_view(self.teams, self.sort_by, self.sort_direction)

    def get_team_history(
        self, team_id: Optional[int], limit: Optional[int] = None
    ) -> list[FormattedMatch]:
        """
        Matches involving a team, most recent first.

        Args:
            team_id: Team to look up
            limit: Keep only this many of the most recent matches

        Returns:
            Matches annotated with the team's result and home/away flag
        """
        if not team_id or not self.matches:
            return []

        played = [m for m in self.matches if m.involves(team_id)]
        played.sort(key=lambda m: m.date, reverse=True)
        if limit:
            played = played[:limit]

        names = {t.id: t.name for t in self.teams}
        return [
            FormattedMatch(
                id=m.id,
                date=m.date,
                home_team=names.get(m.home_team_id, UNKNOWN_TEAM),
                away_team=names.get(m.away_team_id, UNKNOWN_TEAM),
                home_score=m.home_score,
                away_score=m.away_score,
                result=m.result_for(team_id),
                is_home=m.home_team_id == team_id,
            )
            for m in played
        ]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def fetch_initial_data(self) -> None:
        """
        Load roster and match log, then compute standings.

        Load failures (LoadError) are logged and leave an empty league
        behind. Any other exception from the loader is a bug and propagates.
        """
        self.is_loading = True
        try:
            payload = await self.loader.load()
            self.matches = list(payload.matches)
            self.teams = aggregate(payload.teams, self.matches)
        except LoadError:
            logger.exception("Error fetching league data")
            self.teams = []
            self.matches = []
        finally:
            self.is_loading = False

    async def bootstrap(self) -> None:
        """
        Restore the persisted favorite team, then load the league.

        The stored value is read by its leading base-10 digits ("2.0" and
        "2abc" both give 2); values without leading digits are ignored.
        """
        saved = self.store.get(self.config.favorite_key)
        if saved:
            favorite_id = parse_leading_int(saved)
            if favorite_id is None:
                logger.warning("Ignoring invalid stored favorite team id %r", saved)
            else:
                self.favorite_team_id = favorite_id

        await self.fetch_initial_data()

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------

    def set_sort_preference(self, field: Union[SortField, str]) -> None:
        """Flip direction on the active column, else switch column ascending."""
        field = SortField(field)
        if self.sort_by == field:
            self.sort_direction = (
                SortDirection.DESC
                if self.sort_direction == SortDirection.ASC
                else SortDirection.ASC
            )
        else:
            self.sort_by = field
            self.sort_direction = SortDirection.ASC

    toggle_sort_direction = set_sort_preference

    def set_favorite_team(self, team_id: Optional[int]) -> None:
        """Toggle the favorite team and persist the choice."""
        if self.favorite_team_id == team_id or team_id is None:
            self.favorite_team_id = None
            self.store.remove(self.config.favorite_key)
        else:
            self.favorite_team_id = team_id
            self.store.set(self.config.favorite_key, str(team_id))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def edit_team_profile(self, team_id: int, coach: str, stadium: str) -> bool:
        """Update coach and stadium in place. Standings are not recomputed."""
        team = self.get_team(team_id)
        if team is None:
            return False

        team.coach = coach
        team.stadium = stadium
        return True

    def correct_match_result(
        self, match_id: int, new_home_score: int, new_away_score: int
    ) -> bool:
        """
        Overwrite a match score and recompute the whole table.

        Returns:
            False (with nothing changed) if a score is not an integer in
            0-7 or the match does not exist, True otherwise
        """
        if not (_valid_score(new_home_score) and _valid_score(new_away_score)):
            logger.info(
                "Rejected score %r-%r for match %s", new_home_score, new_away_score, match_id
            )
            return False

        index = next((i for i, m in enumerate(self.matches) if m.id == match_id), None)
        if index is None:
            return False

        matches = list(self.matches)
        matches[index] = matches[index].model_copy(
            update={"home_score": new_home_score, "away_score": new_away_score}
        )
        self._commit(matches)
        logger.info("Corrected match %s to %d-%d", match_id, new_home_score, new_away_score)
        return True

    def record_match(self, match: Union[MatchDraft, Mapping[str, Any]]) -> int:
        """
        Append a match to the log and recompute the whole table.

        Returns:
            The new match id (highest existing id + 1)
        """
        if not isinstance(match, MatchDraft):
            match = MatchDraft.model_validate(match)

        new_id = max([0, *(m.id for m in self.matches)]) + 1
        new_match = Match(id=new_id, **match.model_dump(include=set(MatchDraft.model_fields)))

        self._commit([*self.matches, new_match])
        logger.info("Recorded match %d", new_id)
        return new_id

    def _commit(self, matches: list[Match]) -> None:
        teams = aggregate(self.teams, matches)
        self.matches = matches
        self.teams = teams
