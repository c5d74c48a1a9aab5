"""
Standings export.

Flattens a standings table into a pandas DataFrame and writes it as CSV,
Excel or JSON.
"""

from pathlib import Path
from typing import Iterable

import pandas as pd

from league_engine.models import Team

COLUMNS = [
    "position",
    "team",
    "played",
    "wins",
    "draws",
    "losses",
    "goals_for",
    "goals_against",
    "goal_difference",
    "points",
    "form",
]


def standings_frame(teams: Iterable[Team]) -> pd.DataFrame:
    """
    Build a display table from team records.

    Rows keep the order of ``teams``; form is rendered as e.g. "W D L W W".
    """
    rows = [
        {
            "position": t.position,
            "team": t.name,
            "played": t.games_played,
            "wins": t.wins,
            "draws": t.draws,
            "losses": t.losses,
            "goals_for": t.goals_for,
            "goals_against": t.goals_against,
            "goal_difference": t.goal_difference,
            "points": t.points,
            "form": " ".join(r.value for r in t.recent_form),
        }
        for t in teams
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def export_standings(teams: Iterable[Team], path: str) -> str:
    """
    Write the standings table to a file.

    Args:
        teams: Team records in display order
        path: Output path; suffix picks the format (.csv, .xlsx, .json)

    Returns:
        Path to output file

    Raises:
        ValueError: If the suffix is not supported
    """
    out_path = Path(path)
    suffix = out_path.suffix.lower()
    if suffix not in (".csv", ".xlsx", ".json"):
        raise ValueError(f"Unsupported export format: {suffix or path}")

    df = standings_frame(teams)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if suffix == ".csv":
        df.to_csv(out_path, index=False)
    elif suffix == ".xlsx":
        df.to_excel(out_path, index=False, sheet_name="Standings", engine="openpyxl")
    else:
        df.to_json(out_path, orient="records", indent=2)

    return str(out_path)
