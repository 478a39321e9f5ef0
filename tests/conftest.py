from __future__ import annotations

import pytest

from league_analytics.models import MatchupRecord, RosterRecord


def _season(points_by_roster: dict[int, list[float | None]], paired: list[tuple[int, int]] | None = None) -> list[MatchupRecord]:
    """Build matchup records; ``paired`` rosters share a matchup_id every week."""
    matchup_of: dict[int, int] = {}
    for mid, (a, b) in enumerate(paired or [], start=1):
        matchup_of[a] = mid
        matchup_of[b] = mid
    rows = []
    for rid, pts in points_by_roster.items():
        for wk, p in enumerate(pts, start=1):
            rows.append(MatchupRecord(roster_id=rid, matchup_id=matchup_of.get(rid), week=wk, points=p))
    return rows


@pytest.fixture
def two_team_matchups() -> list[MatchupRecord]:
    return _season({1: [100, 110, 90], 2: [95, 95, 95]}, paired=[(1, 2)])


@pytest.fixture
def two_team_rosters() -> list[RosterRecord]:
    return [RosterRecord(1, "Alpha"), RosterRecord(2, None)]


@pytest.fixture
def four_team_matchups() -> list[MatchupRecord]:
    return _season(
        {
            1: [140, 150, 135, 160],
            2: [100, 90, 120, 95],
            3: [110, 130, 80, 100],
            4: [90, 100, 110, 130],
        },
        paired=[(1, 2), (3, 4)],
    )


@pytest.fixture
def four_team_rosters() -> list[RosterRecord]:
    return [RosterRecord(i, f"Team {chr(64 + i)}") for i in range(1, 5)]


@pytest.fixture
def make_season():
    return _season
