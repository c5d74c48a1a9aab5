"""
Standings aggregation.

Rebuilds every derived team field from the match log. Nothing is patched
incrementally: each call starts from zeroed copies of the roster.
"""

import logging
from typing import Iterable

from league_engine.models import Match, MatchResult, Team
from league_engine.standings.ranking import rank_teams

logger = logging.getLogger(__name__)

POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1
RECENT_FORM_LENGTH = 5


def _fresh_record(team: Team) -> Team:
    return team.model_copy(
        update={
            "points": 0,
            "wins": 0,
            "draws": 0,
            "losses": 0,
            "goals_for": 0,
            "goals_against": 0,
            "recent_form": [],
            "position": 0,
        }
    )


def _record_outcome(team: Team, outcome: MatchResult) -> None:
    if outcome is MatchResult.WIN:
        team.wins += 1
        team.points += POINTS_FOR_WIN
    elif outcome is MatchResult.DRAW:
        team.draws += 1
        team.points += POINTS_FOR_DRAW
    else:
        team.losses += 1
    # Most recent first while folding
    team.recent_form.insert(0, outcome)


def aggregate(roster: Iterable[Team], matches: Iterable[Match]) -> list[Team]:
    """
    Compute standings for a roster from a match log.

    Args:
        roster: Teams under management (never mutated)
        matches: Match log, folded in insertion order

    Returns:
        New team records, ranked best-first with positions assigned
    """
    stats: dict[int, Team] = {team.id: _fresh_record(team) for team in roster}

    skipped = 0
    for match in matches:
        home = stats.get(match.home_team_id)
        away = stats.get(match.away_team_id)
        if home is None or away is None:
            skipped += 1
            continue

        home.goals_for += match.home_score
        home.goals_against += match.away_score
        away.goals_for += match.away_score
        away.goals_against += match.home_score

        _record_outcome(home, match.result_for(home.id))
        _record_outcome(away, match.result_for(away.id))

    if skipped:
        logger.debug("Skipped %d matches referencing unknown teams", skipped)

    for team in stats.values():
        team.recent_form = list(reversed(team.recent_form[:RECENT_FORM_LENGTH]))
        team.points = team.wins * POINTS_FOR_WIN + team.draws * POINTS_FOR_DRAW

    return rank_teams(stats.values())
