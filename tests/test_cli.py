"""
Tests for the command line entry point (sample data only).
"""

import pandas as pd

from league_engine.cli import main, parse_args


def test_parse_args_defaults():
    args = parse_args(["table"])
    assert args.command == "table"
    assert args.sort == "position"
    assert args.desc is False
    assert args.use_sample is False


def test_table_command(capsys):
    assert main(["--use-sample", "table"]) == 0
    out = capsys.readouterr().out
    assert "position" in out
    assert "Atlético Riverside" in out


def test_history_command(capsys):
    assert main(["--use-sample", "history", "1", "--limit", "3"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("Atlético Riverside:")
    assert len(lines) == 4


def test_history_unknown_team():
    assert main(["--use-sample", "history", "99"]) == 1


def test_export_command_sorted(tmp_path):
    out = tmp_path / "table.csv"
    assert main(["--use-sample", "--sort", "points", "--desc", "export", str(out)]) == 0

    df = pd.read_csv(out)
    assert df["points"].tolist() == sorted(df["points"].tolist(), reverse=True)


def test_missing_source_exits_nonzero(tmp_path, monkeypatch):
    monkeypatch.setenv("LEAGUE_STORE_PATH", str(tmp_path / "store.json"))
    assert main(["--source", str(tmp_path / "none.json"), "table"]) == 1
