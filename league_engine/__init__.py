"""
League Engine

An in-memory league standings table derived from a match log, with
deterministic tie-breaks and user view state.
"""

__version__ = "1.0.0"

from league_engine.config import Config
from league_engine.controller import LeagueController
from league_engine.data.loader import LeagueDataLoader
from league_engine.models import Match, MatchDraft, MatchResult, Team
from league_engine.standings import aggregate, rank_teams

__all__ = [
    "Config",
    "LeagueController",
    "LeagueDataLoader",
    "Match",
    "MatchDraft",
    "MatchResult",
    "Team",
    "aggregate",
    "rank_teams",
]
