"""Transaction activity tables: per-manager counts, trade partners, league totals, position churn."""

from __future__ import annotations

from typing import Mapping, Sequence

from league_analytics.constants import (
    CHURN_POSITIONS,
    TYPE_COMMISSIONER,
    TYPE_FREE_AGENT,
    TYPE_TRADE,
    TYPE_WAIVER,
)
from league_analytics.models import (
    ManagerActivity,
    PositionChurn,
    RosterRecord,
    TradeMatrixCell,
    Transaction,
    TransactionSummary,
)

from .core import team_label, team_names

_TYPE_FIELDS = {
    TYPE_TRADE: "trades",
    TYPE_WAIVER: "waivers",
    TYPE_FREE_AGENT: "free_agents",
    TYPE_COMMISSIONER: "commissioner",
}


def manager_activity(transactions: Sequence[Transaction], rosters: Sequence[RosterRecord]) -> list[ManagerActivity]:
    """Transaction counts by type for each roster, most active first.

    Every listed roster appears, even with no activity. Unknown types still
    count toward ``total``.
    """
    activity = {r.roster_id: ManagerActivity(roster_id=r.roster_id, team_name=r.display_name) for r in rosters}
    for t in transactions or []:
        field_name = _TYPE_FIELDS.get(t.type)
        for rid in t.roster_ids:
            act = activity.get(rid)
            if act is None:
                continue
            if field_name:
                setattr(act, field_name, getattr(act, field_name) + 1)
            act.total += 1
    return sorted(activity.values(), key=lambda a: -a.total)


def trade_matrix(transactions: Sequence[Transaction], rosters: Sequence[RosterRecord]) -> list[TradeMatrixCell]:
    """Trade counts per pair of rosters, for two-team trades only."""
    names = team_names(rosters)
    counts: dict[tuple[int, int], int] = {}
    for t in transactions or []:
        if t.type != TYPE_TRADE or len(t.roster_ids) != 2:
            continue
        pair = tuple(sorted(t.roster_ids))
        counts[pair] = counts.get(pair, 0) + 1
    cells = [
        TradeMatrixCell(
            roster_id_1=a,
            roster_id_2=b,
            team_name_1=team_label(a, names),
            team_name_2=team_label(b, names),
            trade_count=n,
        )
        for (a, b), n in counts.items()
    ]
    cells.sort(key=lambda c: -c.trade_count)
    return cells


def transaction_summary(transactions: Sequence[Transaction], rosters: Sequence[RosterRecord]) -> TransactionSummary:
    if not transactions:
        return TransactionSummary()
    week_counts: dict[int, int] = {}
    for t in transactions:
        week_counts[t.week] = week_counts.get(t.week, 0) + 1
    busiest: tuple[int, int] | None = None
    for week, count in week_counts.items():
        if busiest is None or count > busiest[1]:
            busiest = (week, count)
    activity = manager_activity(transactions, rosters)
    return TransactionSummary(
        total_transactions=len(transactions),
        total_trades=sum(1 for t in transactions if t.type == TYPE_TRADE),
        total_waivers=sum(1 for t in transactions if t.type == TYPE_WAIVER),
        total_free_agents=sum(1 for t in transactions if t.type == TYPE_FREE_AGENT),
        busiest_week=busiest,
        most_active_manager=activity[0] if activity else None,
    )


def position_churn(transactions: Sequence[Transaction], player_positions: Mapping[str, str]) -> list[PositionChurn]:
    """Adds and drops per position across all transactions.

    One row per tracked position, in ``CHURN_POSITIONS`` order, even with no
    moves. Players whose position is unknown or untracked are not counted.
    """
    churn = {pos: PositionChurn(position=pos) for pos in CHURN_POSITIONS}
    for t in transactions or []:
        for player_id in t.adds:
            row = churn.get(player_positions.get(player_id) or "")
            if row is not None:
                row.adds += 1
        for player_id in t.drops:
            row = churn.get(player_positions.get(player_id) or "")
            if row is not None:
                row.drops += 1
    for row in churn.values():
        row.net = row.adds - row.drops
    return list(churn.values())
