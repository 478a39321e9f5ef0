from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from league_analytics.compute.activity import (
    manager_activity,
    position_churn,
    trade_matrix,
    transaction_summary,
)
from league_analytics.compute.managers import build_manager_summaries
from league_analytics.compute.power import calculate_power_rankings, summary_stats
from league_analytics.config import PowerWeights, TrendWeights
from league_analytics.models import (
    KeeperTotal,
    ManagerActivity,
    ManagerSummary,
    MatchupRecord,
    PositionChurn,
    PowerRankingRow,
    RosterRecord,
    SummaryStats,
    TradeMatrixCell,
    Transaction,
    TransactionSummary,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LeagueReport:
    season_id: int
    current_week: int
    power_rankings: list[PowerRankingRow]
    summary: SummaryStats
    managers: list[ManagerSummary]
    activity: list[ManagerActivity]
    trade_matrix: list[TradeMatrixCell]
    transactions: TransactionSummary
    position_churn: list[PositionChurn] = field(default_factory=list)

    def to_json_payload(self, schema_version: str) -> dict[str, Any]:
        return {
            "schema_version": schema_version,
            "metadata": {
                "season_id": self.season_id,
                "current_week": self.current_week,
                "num_teams": len(self.power_rankings),
            },
            "power_rankings": [r.to_dict() for r in self.power_rankings],
            "summary": self.summary.to_dict(),
            "managers": [m.to_dict() for m in self.managers],
            "manager_activity": [a.to_dict() for a in self.activity],
            "trade_matrix": [c.to_dict() for c in self.trade_matrix],
            "transaction_summary": self.transactions.to_dict(),
            "position_churn": [p.to_dict() for p in self.position_churn],
        }


def build_league_report(
    matchups: Sequence[MatchupRecord],
    rosters: Sequence[RosterRecord],
    transactions: Sequence[Transaction],
    *,
    season_id: int,
    current_week: int,
    keepers_by_roster: Mapping[int, Sequence[KeeperTotal]] | None = None,
    weights: PowerWeights | None = None,
    trend_weights: TrendWeights | None = None,
    player_positions: Mapping[str, str] | None = None,
) -> LeagueReport:
    """Run every season-level calculator over one snapshot.

    Position churn is only computed when ``player_positions`` is given.
    """
    rankings = calculate_power_rankings(matchups, rosters, weights=weights, trend_weights=trend_weights)
    logger.debug("league report season=%s week=%s rows=%d", season_id, current_week, len(rankings))
    return LeagueReport(
        season_id=season_id,
        current_week=current_week,
        power_rankings=rankings,
        summary=summary_stats(rankings),
        managers=build_manager_summaries(matchups, rosters, transactions, keepers_by_roster),
        activity=manager_activity(transactions, rosters),
        trade_matrix=trade_matrix(transactions, rosters),
        transactions=transaction_summary(transactions, rosters),
        position_churn=position_churn(transactions, player_positions) if player_positions else [],
    )
