"""
Tests for the league state controller.

Async operations are driven with asyncio.run; no network or disk access
except through tmp_path.
"""

import asyncio
from datetime import datetime

import pytest

from league_engine.config import Config
from league_engine.controller import LeagueController
from league_engine.data.loader import LeagueDataLoader, LoadError, StaticLoader
from league_engine.data.storage import MemoryStore
from league_engine.models import (
    LeaguePayload,
    Match,
    MatchDraft,
    MatchResult,
    SortDirection,
    SortField,
    Team,
)

FAVORITE_KEY = "favoriteTeamId"


def make_payload(matches=None):
    teams = [
        Team(id=1, name="Zulu", coach="Coach Z", stadium="Zulu Park"),
        Team(id=2, name="Alpha", coach="Coach A", stadium="Alpha Ground"),
    ]
    if matches is None:
        matches = [
            Match(id=1, home_team_id=1, away_team_id=2, home_score=2, away_score=1,
                  date=datetime(2024, 8, 10)),
        ]
    return LeaguePayload(teams=teams, matches=matches)


def loaded_controller(payload=None, store=None):
    controller = LeagueController(
        Config(),
        loader=StaticLoader(payload or make_payload()),
        store=store if store is not None else MemoryStore(),
    )
    asyncio.run(controller.fetch_initial_data())
    return controller


def snapshot(controller):
    return (
        [t.model_dump() for t in controller.teams],
        [m.model_dump() for m in controller.matches],
    )


class FailingLoader:
    async def load(self, source=None):
        raise LoadError("boom")


class TestLoading:

    def test_initial_load_ranks_with_full_comparator(self):
        controller = loaded_controller()
        assert [t.name for t in controller.teams] == ["Zulu", "Alpha"]
        zulu = controller.get_team(1)
        assert (zulu.points, zulu.position) == (3, 1)
        assert controller.is_loading is False

    def test_initial_load_breaks_ties_by_name(self):
        draw = [Match(id=1, home_team_id=1, away_team_id=2, home_score=0, away_score=0,
                      date=datetime(2024, 8, 10))]
        controller = loaded_controller(make_payload(draw))
        assert [t.name for t in controller.teams] == ["Alpha", "Zulu"]

    def test_load_failure_resets_state(self):
        controller = loaded_controller()
        controller.loader = FailingLoader()

        asyncio.run(controller.fetch_initial_data())

        assert controller.teams == []
        assert controller.matches == []
        assert controller.is_loading is False

    def test_unexpected_loader_error_propagates(self):
        class BrokenLoader:
            async def load(self, source=None):
                raise RuntimeError("bug in loader")

        controller = LeagueController(Config(), loader=BrokenLoader(), store=MemoryStore())

        with pytest.raises(RuntimeError):
            asyncio.run(controller.fetch_initial_data())
        assert controller.is_loading is False

    def test_missing_file_fails_soft(self, tmp_path):
        config = Config()
        config.data_source = str(tmp_path / "missing.json")
        controller = LeagueController(config, loader=LeagueDataLoader(config), store=MemoryStore())

        asyncio.run(controller.fetch_initial_data())

        assert controller.teams == []
        assert controller.is_loading is False

    def test_loading_flag_set_during_load(self):
        seen = []

        class ObservingLoader:
            async def load(self, source=None):
                seen.append(controller.is_loading)
                return make_payload()

        controller = LeagueController(Config(), loader=ObservingLoader(), store=MemoryStore())
        asyncio.run(controller.fetch_initial_data())

        assert seen == [True]
        assert controller.is_loading is False


class TestBootstrap:

    def test_restores_favorite(self):
        store = MemoryStore({FAVORITE_KEY: "2"})
        controller = LeagueController(Config(), loader=StaticLoader(make_payload()), store=store)

        asyncio.run(controller.bootstrap())

        assert controller.favorite_team_id == 2
        assert controller.favorite_team.name == "Alpha"

    def test_invalid_stored_favorite_ignored(self):
        store = MemoryStore({FAVORITE_KEY: "not-a-number"})
        controller = LeagueController(Config(), loader=StaticLoader(make_payload()), store=store)

        asyncio.run(controller.bootstrap())

        assert controller.favorite_team_id is None
        assert len(controller.teams) == 2

    @pytest.mark.parametrize("stored, expected", [("2.0", 2), ("2abc", 2), (" 1", 1)])
    def test_stored_favorite_read_by_leading_digits(self, stored, expected):
        store = MemoryStore({FAVORITE_KEY: stored})
        controller = LeagueController(Config(), loader=StaticLoader(make_payload()), store=store)

        asyncio.run(controller.bootstrap())

        assert controller.favorite_team_id == expected
        assert controller.favorite_team.id == expected

    def test_stale_favorite_yields_no_team(self):
        store = MemoryStore({FAVORITE_KEY: "99"})
        controller = LeagueController(Config(), loader=StaticLoader(make_payload()), store=store)

        asyncio.run(controller.bootstrap())

        assert controller.favorite_team_id == 99
        assert controller.favorite_team is None


class TestCorrectMatchResult:

    def test_correction_recomputes_table(self):
        controller = loaded_controller()

        assert controller.correct_match_result(1, 1, 1) is True

        zulu, alpha = controller.get_team(1), controller.get_team(2)
        assert (zulu.wins, zulu.draws, zulu.losses, zulu.points) == (0, 1, 0, 1)
        assert (alpha.wins, alpha.draws, alpha.losses, alpha.points) == (0, 1, 0, 1)
        # Equal on points, difference and goals: name decides
        assert (alpha.position, zulu.position) == (1, 2)
        assert zulu.recent_form == [MatchResult.DRAW]
        assert controller.matches[0].home_score == 1

    @pytest.mark.parametrize("home, away", [(8, 0), (0, -1), (2.5, 1), (True, 1), ("3", 1), (None, 0)])
    def test_invalid_scores_leave_state_untouched(self, home, away):
        controller = loaded_controller()
        before = snapshot(controller)

        assert controller.correct_match_result(1, home, away) is False
        assert snapshot(controller) == before

    def test_boundaries_accepted(self):
        controller = loaded_controller()
        assert controller.correct_match_result(1, 0, 7) is True
        assert controller.get_team(2).goals_for == 7

    def test_unknown_match(self):
        controller = loaded_controller()
        before = snapshot(controller)
        assert controller.correct_match_result(42, 1, 0) is False
        assert snapshot(controller) == before


class TestRecordMatch:

    def test_first_id_on_empty_log(self):
        controller = loaded_controller(make_payload(matches=[]))
        new_id = controller.record_match(
            MatchDraft(home_team_id=2, away_team_id=1, home_score=3, away_score=0,
                       date=datetime(2024, 9, 1))
        )
        assert new_id == 1
        assert controller.get_team(2).points == 3
        assert controller.get_team(2).position == 1

    def test_id_follows_max_existing(self):
        matches = [
            Match(id=3, home_team_id=1, away_team_id=2, home_score=1, away_score=0,
                  date=datetime(2024, 8, 1)),
            Match(id=7, home_team_id=2, away_team_id=1, home_score=1, away_score=0,
                  date=datetime(2024, 8, 8)),
        ]
        controller = loaded_controller(make_payload(matches))

        new_id = controller.record_match(
            {"homeTeamId": 1, "awayTeamId": 2, "homeScore": 2, "awayScore": 2,
             "date": "2024-08-15"}
        )

        assert new_id == 8
        assert [m.id for m in controller.matches] == [3, 7, 8]
        zulu = controller.get_team(1)
        assert zulu.recent_form == [MatchResult.WIN, MatchResult.LOSS, MatchResult.DRAW]
        assert zulu.points == 4

    def test_id_never_below_one(self):
        matches = [
            Match(id=-3, home_team_id=1, away_team_id=2, home_score=1, away_score=0,
                  date=datetime(2024, 8, 1)),
        ]
        controller = loaded_controller(make_payload(matches))

        new_id = controller.record_match(
            {"homeTeamId": 2, "awayTeamId": 1, "homeScore": 0, "awayScore": 0,
             "date": "2024-08-08"}
        )

        assert new_id == 1
        assert [m.id for m in controller.matches] == [-3, 1]

    def test_profile_edits_survive_recompute(self):
        controller = loaded_controller()
        controller.edit_team_profile(1, "New Coach", "New Ground")
        controller.record_match(
            {"homeTeamId": 2, "awayTeamId": 1, "homeScore": 0, "awayScore": 1,
             "date": "2024-08-20"}
        )
        assert controller.get_team(1).coach == "New Coach"
        assert controller.get_team(1).points == 6


class TestEditTeamProfile:

    def test_edit_in_place(self):
        controller = loaded_controller()
        team = controller.get_team(2)
        points = team.points

        assert controller.edit_team_profile(2, "Someone", "Somewhere") is True
        assert team.coach == "Someone"
        assert team.stadium == "Somewhere"
        assert team.points == points

    def test_unknown_team(self):
        controller = loaded_controller()
        assert controller.edit_team_profile(99, "x", "y") is False


class TestViewState:

    def test_same_field_twice_restores_direction(self):
        controller = loaded_controller()
        controller.set_sort_preference(SortField.POINTS)
        assert controller.sort_direction == SortDirection.ASC
        controller.set_sort_preference(SortField.POINTS)
        assert controller.sort_direction == SortDirection.DESC
        controller.set_sort_preference(SortField.POINTS)
        assert controller.sort_direction == SortDirection.ASC

    def test_new_field_resets_to_ascending(self):
        controller = loaded_controller()
        controller.toggle_sort_direction(SortField.POSITION)
        assert controller.sort_direction == SortDirection.DESC

        controller.set_sort_preference("name")
        assert controller.sort_by == SortField.NAME
        assert controller.sort_direction == SortDirection.ASC

    def test_sorted_view(self):
        controller = loaded_controller()
        assert [t.name for t in controller.get_sorted_view()] == ["Zulu", "Alpha"]

        controller.set_sort_preference(SortField.NAME)
        assert [t.name for t in controller.get_sorted_view()] == ["Alpha", "Zulu"]

        controller.set_sort_preference(SortField.NAME)
        assert [t.name for t in controller.get_sorted_view()] == ["Zulu", "Alpha"]

    def test_games_played(self):
        controller = loaded_controller()
        assert controller.games_played(controller.get_team(1)) == 1


class TestFavorite:

    def test_toggle_and_persist(self):
        store = MemoryStore()
        controller = loaded_controller(store=store)

        controller.set_favorite_team(2)
        assert controller.favorite_team_id == 2
        assert store.get(FAVORITE_KEY) == "2"

        controller.set_favorite_team(2)
        assert controller.favorite_team_id is None
        assert store.get(FAVORITE_KEY) is None

    def test_switch_favorite(self):
        store = MemoryStore()
        controller = loaded_controller(store=store)

        controller.set_favorite_team(1)
        controller.set_favorite_team(2)
        assert controller.favorite_team.name == "Alpha"
        assert store.get(FAVORITE_KEY) == "2"

    def test_clear_with_none(self):
        store = MemoryStore({FAVORITE_KEY: "1"})
        controller = loaded_controller(store=store)
        controller.favorite_team_id = 1

        controller.set_favorite_team(None)
        assert controller.favorite_team_id is None
        assert store.get(FAVORITE_KEY) is None


class TestTeamHistory:

    def history_controller(self):
        matches = [
            Match(id=1, home_team_id=1, away_team_id=2, home_score=2, away_score=0,
                  date=datetime(2024, 8, 20)),
            Match(id=2, home_team_id=2, away_team_id=1, home_score=1, away_score=1,
                  date=datetime(2024, 8, 1)),
            Match(id=3, home_team_id=2, away_team_id=1, home_score=3, away_score=0,
                  date=datetime(2024, 8, 27)),
            Match(id=4, home_team_id=1, away_team_id=5, home_score=0, away_score=4,
                  date=datetime(2024, 8, 10)),
        ]
        return loaded_controller(make_payload(matches))

    def test_sorted_by_date_descending(self):
        history = self.history_controller().get_team_history(1)
        assert [m.id for m in history] == [3, 1, 4, 2]

    def test_annotations(self):
        history = {m.id: m for m in self.history_controller().get_team_history(1)}

        assert history[1].is_home is True
        assert history[1].result == MatchResult.WIN
        assert history[3].is_home is False
        assert history[3].result == MatchResult.LOSS
        assert history[3].home_team == "Alpha"
        assert history[2].result == MatchResult.DRAW
        assert history[4].away_team == "Unknown Team"
        assert history[4].result == MatchResult.LOSS

    def test_limit(self):
        controller = self.history_controller()
        assert [m.id for m in controller.get_team_history(1, limit=2)] == [3, 1]
        assert len(controller.get_team_history(1, limit=0)) == 4

    def test_mixed_date_formats(self):
        """Date-only and UTC-offset timestamps sort together by calendar time."""
        payload = LeaguePayload.model_validate({
            "teams": [{"id": 1, "name": "Zulu"}, {"id": 2, "name": "Alpha"}],
            "matches": [
                {"id": 1, "homeTeamId": 1, "awayTeamId": 2, "homeScore": 1,
                 "awayScore": 0, "date": "2024-08-10"},
                {"id": 2, "homeTeamId": 2, "awayTeamId": 1, "homeScore": 0,
                 "awayScore": 0, "date": "2024-08-17T15:00:00Z"},
                {"id": 3, "homeTeamId": 1, "awayTeamId": 2, "homeScore": 2,
                 "awayScore": 2, "date": "2024-08-12T23:30:00-02:00"},
            ],
        })
        controller = loaded_controller(payload)

        history = controller.get_team_history(1)

        assert [m.id for m in history] == [2, 3, 1]
        assert history[0].date == datetime(2024, 8, 17, 15, 0)
        assert history[1].date == datetime(2024, 8, 13, 1, 30)
        assert history[0].date.tzinfo is None

    def test_empty_cases(self):
        controller = self.history_controller()
        assert controller.get_team_history(0) == []
        assert controller.get_team_history(None) == []
        assert controller.get_team_history(42) == []
        assert loaded_controller(make_payload(matches=[])).get_team_history(1) == []
