"""Shared grouping and lookup helpers.

These functions are side-effect free and operate on already-loaded matchup
records, so every calculator can reuse the same week grouping.
"""

from __future__ import annotations

from typing import Iterable

from league_analytics.models import MatchupRecord, RosterRecord

WeekGroups = dict[int, list[MatchupRecord]]


def group_matchups_by_week(matchups: Iterable[MatchupRecord]) -> WeekGroups:
    by_week: WeekGroups = {}
    for m in matchups or []:
        by_week.setdefault(m.week, []).append(m)
    return by_week


def group_rows(entries: Iterable[MatchupRecord]) -> dict[int, list[MatchupRecord]]:
    """Group one week's records by matchup_id, synthesizing ids when missing.

    A record without ``matchup_id`` (bye week) gets a per-roster synthetic id so
    it never pairs with anyone.
    """
    groups: dict[int, list[MatchupRecord]] = {}
    for m in entries or []:
        mid = m.matchup_id if m.matchup_id is not None else -100000 - m.roster_id
        groups.setdefault(mid, []).append(m)
    return groups


def sorted_weeks(by_week: WeekGroups) -> list[int]:
    return sorted(by_week)


def find_entry(roster_id: int, week_matchups: list[MatchupRecord]) -> MatchupRecord | None:
    for m in week_matchups:
        if m.roster_id == roster_id:
            return m
    return None


def find_opponent(entry: MatchupRecord, week_matchups: list[MatchupRecord]) -> MatchupRecord | None:
    """Return the other roster sharing ``entry``'s matchup, or None on a bye."""
    if entry.matchup_id is None:
        return None
    for m in week_matchups:
        if m.matchup_id == entry.matchup_id and m.roster_id != entry.roster_id:
            return m
    return None


def weekly_points(roster_id: int, by_week: WeekGroups) -> list[float]:
    """Points per week in week order; weeks without a record are skipped."""
    points: list[float] = []
    for week in sorted_weeks(by_week):
        entry = find_entry(roster_id, by_week[week])
        if entry is not None:
            points.append(entry.score)
    return points


def team_names(rosters: Iterable[RosterRecord]) -> dict[int, str]:
    return {r.roster_id: r.display_name for r in rosters or []}


def team_label(roster_id: int | None, names: dict[int, str]) -> str:
    if roster_id is None:
        return "Team ?"
    return names.get(roster_id) or f"Team {roster_id}"
