#!/usr/bin/env python
"""Verification script for League Engine."""

import asyncio
import sys


def main():
    print("=" * 60)
    print("LEAGUE ENGINE VERIFICATION")
    print("=" * 60)

    errors = []

    # Test 1: Imports
    print("\n[1/4] Testing imports...")
    try:
        from league_engine import LeagueController, aggregate
        from league_engine.data import MemoryStore, StaticLoader
        from league_engine.data.sample_data import generate_sample_league, validate_sample_league
        print("  ✓ All imports successful")
    except ImportError as e:
        errors.append(f"Import failed: {e}")
        print(f"  ✗ {e}")
        return 1

    # Test 2: Sample league generation
    print("\n[2/4] Testing sample league generation...")
    try:
        payload = generate_sample_league(n_teams=8, seed=42)
        validation = validate_sample_league(payload)
        assert validation["overall_healthy"], validation
        print(f"  ✓ Generated {validation['n_matches']} matches for {validation['n_teams']} teams")
    except Exception as e:
        errors.append(f"Sample data failed: {e}")
        print(f"  ✗ {e}")

    # Test 3: Aggregation invariants
    print("\n[3/4] Testing aggregation invariants...")
    try:
        table = aggregate(payload.teams, payload.matches)
        assert [t.position for t in table] == list(range(1, len(table) + 1))
        assert all(t.points == t.wins * 3 + t.draws for t in table)
        assert all(len(t.recent_form) <= 5 for t in table)
        print(f"  ✓ Leader: {table[0].name} ({table[0].points} pts)")
    except Exception as e:
        errors.append(f"Aggregation failed: {e}")
        print(f"  ✗ {e}")

    # Test 4: Controller round trip
    print("\n[4/4] Testing controller...")
    try:
        controller = LeagueController(loader=StaticLoader(payload), store=MemoryStore())
        asyncio.run(controller.bootstrap())
        first = controller.matches[0]
        assert controller.correct_match_result(first.id, 7, 0)
        assert not controller.correct_match_result(first.id, 8, 0)
        new_id = controller.record_match(
            {"homeTeamId": 1, "awayTeamId": 2, "homeScore": 1, "awayScore": 0,
             "date": "2025-05-01"}
        )
        assert new_id == len(payload.matches) + 1
        print(f"  ✓ Corrected match {first.id}, recorded match {new_id}")
    except Exception as e:
        errors.append(f"Controller failed: {e}")
        print(f"  ✗ {e}")

    # Summary
    print("\n" + "=" * 60)
    if errors:
        print(f"FAILED: {len(errors)} error(s)")
        for err in errors:
            print(f"  - {err}")
        return 1
    else:
        print("ALL CHECKS PASSED ✓")
        return 0

if __name__ == "__main__":
    sys.exit(main())
