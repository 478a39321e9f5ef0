"""Per-manager summaries: head-to-head record, trade volume, keeper success and graded trades."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from league_analytics.models import (
    KeeperTotal,
    ManagerSummary,
    MatchupRecord,
    PlayerWeeklyPoints,
    Record,
    RosterRecord,
    TradeHistoryEntry,
    Transaction,
)

from .core import group_matchups_by_week, group_rows, team_label, team_names
from .keepers import keeper_success_rate, league_average_keeper_points
from .trades import calculate_trade_grade, index_points

logger = logging.getLogger(__name__)


def manager_records(matchups: Iterable[MatchupRecord], rosters: Sequence[RosterRecord]) -> dict[int, Record]:
    """W/L/T per roster from weekly pairs; pairs involving unknown rosters are skipped."""
    records: dict[int, Record] = {r.roster_id: Record() for r in rosters}
    by_week = group_matchups_by_week(matchups)
    for wk in sorted(by_week):
        for _, entries in group_rows(by_week[wk]).items():
            if len(entries) != 2:
                continue
            a, b = entries
            rec_a = records.get(a.roster_id)
            rec_b = records.get(b.roster_id)
            if rec_a is None or rec_b is None:
                continue
            if a.score > b.score:
                rec_a.wins += 1
                rec_b.losses += 1
            elif b.score > a.score:
                rec_b.wins += 1
                rec_a.losses += 1
            else:
                rec_a.ties += 1
                rec_b.ties += 1
    return records


def trade_counts(transactions: Iterable[Transaction], rosters: Sequence[RosterRecord]) -> dict[int, int]:
    counts = {r.roster_id: 0 for r in rosters}
    for t in transactions or []:
        if not t.is_completed_trade:
            continue
        for rid in t.roster_ids:
            if rid in counts:
                counts[rid] += 1
    return counts


def keeper_success_by_roster(keepers_by_roster: Mapping[int, Sequence[KeeperTotal]]) -> dict[int, float]:
    """Success rate per roster against the average of every keeper in the league."""
    all_keepers = [k for keepers in keepers_by_roster.values() for k in keepers]
    league_avg = league_average_keeper_points(all_keepers)
    return {rid: keeper_success_rate(keepers, league_avg) for rid, keepers in keepers_by_roster.items()}


def trade_history(
    roster_id: int,
    transactions: Iterable[Transaction],
    rosters: Sequence[RosterRecord],
    player_points: Iterable[PlayerWeeklyPoints],
    player_names: Mapping[str, str],
    current_week: int,
    current_season_id: int,
) -> list[TradeHistoryEntry]:
    names = team_names(rosters)
    index = index_points(player_points)
    out: list[TradeHistoryEntry] = []
    for t in transactions or []:
        if not t.is_completed_trade or roster_id not in t.roster_ids:
            continue
        partner = next((rid for rid in t.roster_ids if rid != roster_id), None)
        partner_name = team_label(partner, names)
        grade = calculate_trade_grade(t, roster_id, index, player_names, current_week, current_season_id)
        out.append(
            TradeHistoryEntry(
                transaction_id=t.transaction_id,
                week=t.week,
                season_id=t.season_id,
                created_at=t.created_at or 0,
                trade_partner=partner_name,
                grade=grade,
            )
        )
    return out


def build_manager_summaries(
    matchups: Iterable[MatchupRecord],
    rosters: Sequence[RosterRecord],
    transactions: Iterable[Transaction],
    keepers_by_roster: Mapping[int, Sequence[KeeperTotal]] | None = None,
) -> list[ManagerSummary]:
    records = manager_records(matchups, rosters)
    counts = trade_counts(transactions, rosters)
    success = keeper_success_by_roster(keepers_by_roster or {})
    logger.debug("manager summaries: %d rosters, %d with keepers", len(rosters), len(success))
    return [
        ManagerSummary(
            roster_id=r.roster_id,
            team_name=r.display_name,
            wins=records[r.roster_id].wins,
            losses=records[r.roster_id].losses,
            ties=records[r.roster_id].ties,
            trade_count=counts[r.roster_id],
            keeper_success_rate=success.get(r.roster_id, 0.0),
        )
        for r in rosters
    ]
