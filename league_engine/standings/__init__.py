"""Standings computation and ordering."""

from league_engine.standings.aggregator import aggregate
from league_engine.standings.ranking import rank_teams, ranking_key, sort_view

__all__ = ["aggregate", "rank_teams", "ranking_key", "sort_view"]
