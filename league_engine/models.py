"""
Pydantic models for league roster and match log records.

Attributes are snake_case; the JSON fixture uses camelCase names
(homeTeamId, goalsFor, recentForm, ...). Both spellings are accepted.
"""

from datetime import date as date_type, datetime, time
from enum import Enum

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class MatchResult(str, Enum):
    """Outcome of a match from one team's point of view."""

    WIN = "W"
    DRAW = "D"
    LOSS = "L"


class SortField(str, Enum):
    """Columns the standings view can be sorted on."""

    POSITION = "position"
    NAME = "name"
    POINTS = "points"
    WINS = "wins"
    DRAWS = "draws"
    LOSSES = "losses"
    GOALS_FOR = "goalsFor"
    GOALS_AGAINST = "goalsAgainst"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Team(_Record):
    """Roster entry plus the standings fields derived from the match log."""

    id: int
    name: str
    coach: str = ""
    stadium: str = ""

    # Derived, always overwritten by aggregation
    points: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    recent_form: list[MatchResult] = Field(default_factory=list)
    position: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.draws + self.losses

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against


class MatchDraft(_Record):
    """Match result that has not been assigned an id yet."""

    home_team_id: int
    away_team_id: int
    home_score: int
    away_score: int
    date: datetime

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        """Parse to a naive UTC datetime so dates from any source compare."""
        if isinstance(v, date_type) and not isinstance(v, datetime):
            v = datetime.combine(v, time())
        if isinstance(v, (str, datetime)):
            ts = pd.Timestamp(v)
            if ts.tzinfo is not None:
                ts = ts.tz_convert("UTC").tz_localize(None)
            return ts.to_pydatetime()
        return v

    def result_for(self, team_id: int) -> MatchResult:
        """Result of this match for the given team."""
        if team_id == self.home_team_id:
            own, other = self.home_score, self.away_score
        else:
            own, other = self.away_score, self.home_score
        if own > other:
            return MatchResult.WIN
        if own < other:
            return MatchResult.LOSS
        return MatchResult.DRAW


class Match(MatchDraft):
    """Match log entry."""

    id: int

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)


class FormattedMatch(_Record):
    """Match annotated for display in one team's history."""

    id: int
    date: datetime
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    result: MatchResult
    is_home: bool


class LeaguePayload(_Record):
    """Shape of the external input data source."""

    teams: list[Team] = Field(default_factory=list)
    matches: list[Match] = Field(default_factory=list)
