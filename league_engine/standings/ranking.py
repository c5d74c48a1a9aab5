"""
Ordering of standings records.

Two distinct orderings live here:

- the ranking order (points, goal difference, goals for, name) used to
  assign ``position``;
- the single-key view order the user picks from the table header.

The view order never feeds back into positions.
"""

import unicodedata
from typing import Callable, Iterable

from league_engine.models import SortDirection, SortField, Team


def collation_key(name: str) -> tuple[str, str]:
    """
    Locale-aware sort key for team names.

    Accents are stripped and case is folded, so "Écija" sorts next to
    "Ecija" and "atlético" next to "Atlético". The raw name is kept as a
    final tie-break to keep the order total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def ranking_key(team: Team) -> tuple:
    """Sort key putting the best team first."""
    return (
        -team.points,
        -team.goal_difference,
        -team.goals_for,
        collation_key(team.name),
    )


def rank_teams(teams: Iterable[Team]) -> list[Team]:
    """
    Sort teams best-first and assign dense 1-based positions.

    Positions are written onto the given records, so callers pass
    records they own.
    """
    ranked = sorted(teams, key=ranking_key)
    for index, team in enumerate(ranked):
        team.position = index + 1
    return ranked


VIEW_KEYS: dict[SortField, Callable[[Team], object]] = {
    SortField.POSITION: lambda t: t.position,
    SortField.NAME: lambda t: collation_key(t.name),
    SortField.POINTS: lambda t: t.points,
    SortField.WINS: lambda t: t.wins,
    SortField.DRAWS: lambda t: t.draws,
    SortField.LOSSES: lambda t: t.losses,
    SortField.GOALS_FOR: lambda t: t.goals_for,
    SortField.GOALS_AGAINST: lambda t: t.goals_against,
}


def sort_view(
    teams: Iterable[Team],
    field: SortField = SortField.POSITION,
    direction: SortDirection = SortDirection.ASC,
) -> list[Team]:
    """
    Sort teams on one user-selected column.

    Ties keep their input order in both directions.
    """
    key = VIEW_KEYS.get(SortField(field), VIEW_KEYS[SortField.POSITION])
    return sorted(
        teams,
        key=key,
        reverse=SortDirection(direction) == SortDirection.DESC,
    )
