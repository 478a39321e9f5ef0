"""Power rankings: per-roster metrics, composite score and weekly trajectory.

All metrics are computed from matchup records grouped by week. Two scores are
produced:

* the power score, where each metric is normalized by the league-wide maximum
  (floored at 1) and combined with ``PowerWeights``;
* a lighter trend score, used only to order rosters week by week over a
  growing window of data (``TrendWeights``).

Sorting is stable everywhere, so rosters that tie keep their input order.
"""

from __future__ import annotations

import logging
import statistics
from dataclasses import dataclass
from typing import Iterable, Sequence

from league_analytics.config import PowerWeights, TrendWeights
from league_analytics.models import (
    MatchupRecord,
    PowerRankingRow,
    Record,
    RosterRecord,
    ShouldBeRecord,
    SummaryStats,
    WeeklyRank,
)

from .core import (
    WeekGroups,
    find_entry,
    find_opponent,
    group_matchups_by_week,
    sorted_weeks,
    weekly_points,
)

logger = logging.getLogger(__name__)


def expected_wins(roster_id: int, by_week: WeekGroups) -> float:
    """All-play wins: share of the league's other rosters beaten each week.

    A tie with another roster is worth half a win. Weeks where the roster has
    no record, or is the only roster, are skipped.
    """
    total = 0.0
    for week_matchups in by_week.values():
        entry = find_entry(roster_id, week_matchups)
        if entry is None:
            continue
        others = [m for m in week_matchups if m.roster_id != roster_id]
        if not others:
            continue
        mine = entry.score
        beaten = sum(1 for m in others if mine > m.score)
        tied = sum(1 for m in others if mine == m.score)
        total += (beaten + 0.5 * tied) / len(others)
    return total


def actual_record(roster_id: int, by_week: WeekGroups) -> Record:
    rec = Record()
    for week_matchups in by_week.values():
        entry = find_entry(roster_id, week_matchups)
        if entry is None:
            continue
        opp = find_opponent(entry, week_matchups)
        if opp is None:
            continue
        if entry.score > opp.score:
            rec.wins += 1
        elif entry.score < opp.score:
            rec.losses += 1
        else:
            rec.ties += 1
    return rec


def consistency(points: Sequence[float]) -> float:
    """Population standard deviation of weekly points (lower is steadier)."""
    if not points:
        return 0.0
    return statistics.pstdev(points)


def strength_of_schedule(roster_id: int, by_week: WeekGroups) -> float:
    """Mean points scored by the roster's actual opponents."""
    opp_points: list[float] = []
    for week_matchups in by_week.values():
        entry = find_entry(roster_id, week_matchups)
        if entry is None:
            continue
        opp = find_opponent(entry, week_matchups)
        if opp is not None:
            opp_points.append(opp.score)
    return sum(opp_points) / len(opp_points) if opp_points else 0.0


def should_be_record(roster_id: int, by_week: WeekGroups) -> ShouldBeRecord:
    """Record against the weekly scoring median.

    Landing exactly on the median counts as neither a win nor a loss.
    """
    rec = ShouldBeRecord()
    for week_matchups in by_week.values():
        entry = find_entry(roster_id, week_matchups)
        if entry is None:
            continue
        median = statistics.median(m.score for m in week_matchups)
        if entry.score > median:
            rec.wins += 1
        elif entry.score < median:
            rec.losses += 1
    return rec


@dataclass(slots=True)
class RosterStats:
    roster_id: int
    record: Record
    expected_wins: float
    consistency: float
    avg_points: float
    total_points: float
    strength_of_schedule: float
    should_be: ShouldBeRecord
    weeks_played: int


def roster_stats(roster_id: int, by_week: WeekGroups) -> RosterStats:
    points = weekly_points(roster_id, by_week)
    total = sum(points)
    return RosterStats(
        roster_id=roster_id,
        record=actual_record(roster_id, by_week),
        expected_wins=expected_wins(roster_id, by_week),
        consistency=consistency(points),
        avg_points=total / len(points) if points else 0.0,
        total_points=total,
        strength_of_schedule=strength_of_schedule(roster_id, by_week),
        should_be=should_be_record(roster_id, by_week),
        weeks_played=len(points),
    )


def _league_max(values: Iterable[float]) -> float:
    return max([*values, 1])


def power_score(
    stats: RosterStats,
    league: Sequence[RosterStats],
    weights: PowerWeights | None = None,
) -> float:
    """Weighted composite of normalized wins, points, all-play wins and consistency.

    Each metric is divided by the league maximum (floored at 1). Consistency
    is inverted so the steadiest roster scores highest. Not clamped.
    """
    w = weights or PowerWeights()
    max_wins = _league_max(s.record.wins for s in league)
    max_points = _league_max(s.avg_points for s in league)
    max_expected = _league_max(s.expected_wins for s in league)
    max_consistency = _league_max(s.consistency for s in league)
    return (
        stats.record.wins / max_wins * w.wins
        + stats.avg_points / max_points * w.avg_points
        + stats.expected_wins / max_expected * w.expected_wins
        + (1 - stats.consistency / max_consistency) * w.consistency
    )


def trend_score(stats: RosterStats, weights: TrendWeights | None = None) -> float:
    w = weights or TrendWeights()
    normalized_consistency = max(0.0, 1 - stats.consistency / w.consistency_cap)
    return (
        stats.record.wins * w.wins
        + stats.avg_points * w.avg_points
        + stats.expected_wins * w.expected_wins
        + normalized_consistency * w.consistency
    )


def weekly_ranks(
    by_week: WeekGroups,
    roster_ids: Sequence[int],
    weights: TrendWeights | None = None,
) -> dict[int, list[WeeklyRank]]:
    """Rank trajectory per roster using only data through each week.

    Week ``w`` ranks the rosters that have a record in week ``w``, scored on
    weeks ``<= w``. Rosters absent that week get no entry for it.
    """
    ordered_ids = list(dict.fromkeys(roster_ids))
    out: dict[int, list[WeeklyRank]] = {rid: [] for rid in ordered_ids}
    weeks = sorted_weeks(by_week)
    for idx, week in enumerate(weeks):
        window = {w: by_week[w] for w in weeks[: idx + 1]}
        present = [rid for rid in ordered_ids if find_entry(rid, by_week[week]) is not None]
        scored = []
        for rid in present:
            stats = roster_stats(rid, window)
            scored.append((trend_score(stats, weights), rid, stats.avg_points))
        scored.sort(key=lambda t: -t[0])
        for pos, (_score, rid, avg) in enumerate(scored):
            out[rid].append(WeeklyRank(week=week, rank=pos + 1, points=avg))
    return out


def calculate_power_rankings(
    matchups: Iterable[MatchupRecord],
    rosters: Sequence[RosterRecord],
    *,
    weights: PowerWeights | None = None,
    trend_weights: TrendWeights | None = None,
) -> list[PowerRankingRow]:
    """Build one ranked row per roster, best power score first."""
    if not rosters:
        return []
    by_week = group_matchups_by_week(matchups)
    roster_ids = [r.roster_id for r in rosters]
    logger.debug("power rankings: %d rosters, %d weeks", len(rosters), len(by_week))

    league = [roster_stats(rid, by_week) for rid in roster_ids]
    trajectories = weekly_ranks(by_week, roster_ids, trend_weights)

    rows: list[PowerRankingRow] = []
    for roster, stats in zip(rosters, league):
        rows.append(
            PowerRankingRow(
                roster_id=roster.roster_id,
                team_name=roster.display_name,
                power_rank=0,
                power_score=power_score(stats, league, weights),
                actual_wins=stats.record.wins,
                actual_losses=stats.record.losses,
                actual_ties=stats.record.ties,
                expected_wins=stats.expected_wins,
                luck_index=stats.record.wins - stats.expected_wins,
                should_be_wins=stats.should_be.wins,
                should_be_losses=stats.should_be.losses,
                consistency_score=stats.consistency,
                avg_points=stats.avg_points,
                total_points=stats.total_points,
                strength_of_schedule=stats.strength_of_schedule,
                weekly_ranks=list(trajectories.get(roster.roster_id, [])),
                weeks_played=stats.weeks_played,
            )
        )

    rows.sort(key=lambda r: -r.power_score)
    for pos, row in enumerate(rows):
        row.power_rank = pos + 1
    return rows


def summary_stats(rows: Sequence[PowerRankingRow]) -> SummaryStats:
    """Luckiest/unluckiest, most consistent and toughest-schedule callouts."""
    if not rows:
        return SummaryStats()
    return SummaryStats(
        luckiest=max(rows, key=lambda r: r.luck_index),
        unluckiest=min(rows, key=lambda r: r.luck_index),
        most_consistent=min(rows, key=lambda r: r.consistency_score),
        toughest_schedule=max(rows, key=lambda r: r.strength_of_schedule),
    )
