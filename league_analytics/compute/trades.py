"""Trade grades for one roster's side of a completed trade.

A trade is judged on what happened next: the fantasy points the acquired and
departed players scored over the weeks right after the trade, plus a fixed
value for each draft pick that changed hands. Until the full observation
window has been played the grade stays ``pending``.

Sleeper numbers keeper-league draft rounds from 1; rounds 1-6 are keeper
slots and never traded, so round 7 is what the league calls the "1st round".
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from league_analytics.constants import (
    DEFAULT_PICK_VALUE,
    KEEPER_ROUNDS,
    PICK_VALUES,
    WEEKS_TO_ANALYZE,
)
from league_analytics.models import (
    Grade,
    PickValue,
    PlayerPoints,
    PlayerWeeklyPoints,
    TradeGrade,
    Transaction,
    _coerce_int,
)

logger = logging.getLogger(__name__)

PointsIndex = dict[tuple[str, int, int], float]


def pick_value(round_: int) -> int:
    return PICK_VALUES.get(round_, DEFAULT_PICK_VALUE)


def display_round(round_: int) -> str:
    """League-facing round label (Sleeper round 7 -> "Round 1")."""
    display = round_ - KEEPER_ROUNDS
    if display <= 0:
        return "Keeper"
    return f"Round {display}"


def index_points(player_points: Iterable[PlayerWeeklyPoints]) -> PointsIndex:
    """Map ``(player_id, season_id, week)`` to points; the first record wins."""
    index: PointsIndex = {}
    for p in player_points or []:
        index.setdefault((p.player_id, p.season_id, p.week), p.points)
    return index


def observation_weeks(
    transaction: Transaction,
    current_week: int,
    current_season_id: int,
    weeks_to_analyze: int = WEEKS_TO_ANALYZE,
) -> list[int]:
    """Weeks after the trade that can be scored.

    Trades from an earlier season always get the full window. Trades from the
    current season only see weeks that have been played.
    """
    if transaction.season_id < current_season_id:
        available = weeks_to_analyze
    else:
        available = max(0, current_week - transaction.week)
    count = min(weeks_to_analyze, available)
    return [transaction.week + i for i in range(1, count + 1)]


def _players_points(
    player_ids: list[str],
    season_id: int,
    weeks: list[int],
    index: PointsIndex,
    player_names: Mapping[str, str],
) -> list[PlayerPoints]:
    out: list[PlayerPoints] = []
    for pid in player_ids:
        total = sum(index.get((pid, season_id, wk), 0.0) for wk in weeks)
        out.append(PlayerPoints(player_id=pid, name=player_names.get(pid) or f"Player {pid}", points=total))
    return out


def calculate_trade_grade(
    transaction: Transaction,
    roster_id: int,
    player_points: Iterable[PlayerWeeklyPoints] | PointsIndex,
    player_names: Mapping[str, str],
    current_week: int,
    current_season_id: int,
    *,
    weeks_to_analyze: int = WEEKS_TO_ANALYZE,
) -> TradeGrade:
    """Grade ``transaction`` from ``roster_id``'s point of view.

    ``player_points`` may be raw weekly records or a prebuilt ``index_points``
    mapping when grading many trades against the same history. Ties
    (``total_differential == 0``) grade as favorable.
    """
    acquired_ids = [pid for pid, rid in transaction.adds.items() if rid == roster_id]
    lost_ids = [pid for pid, rid in transaction.drops.items() if rid == roster_id]

    picks_received: list[PickValue] = []
    picks_given: list[PickValue] = []
    for pick in transaction.draft_picks:
        entry = PickValue(round=pick.round, season=_coerce_int(pick.season, 0), value=pick_value(pick.round))
        if pick.owner_id == roster_id and pick.previous_owner_id != roster_id:
            picks_received.append(entry)
        elif pick.previous_owner_id == roster_id and pick.owner_id != roster_id:
            picks_given.append(entry)

    weeks = observation_weeks(transaction, current_week, current_season_id, weeks_to_analyze)
    index = player_points if isinstance(player_points, dict) else index_points(player_points)
    acquired = _players_points(acquired_ids, transaction.season_id, weeks, index, player_names)
    lost = _players_points(lost_ids, transaction.season_id, weeks, index, player_names)

    player_differential = sum(p.points for p in acquired) - sum(p.points for p in lost)
    picks_net = sum(p.value for p in picks_received) - sum(p.value for p in picks_given)
    total = player_differential + picks_net

    if len(weeks) < weeks_to_analyze:
        grade = Grade.PENDING
    elif total >= 0:
        grade = Grade.FAVORABLE
    else:
        grade = Grade.UNFAVORABLE

    logger.debug(
        "trade %s roster %s: %d weeks observed, total %.2f -> %s",
        transaction.transaction_id,
        roster_id,
        len(weeks),
        total,
        grade.value,
    )
    return TradeGrade(
        grade=grade,
        player_differential=player_differential,
        pick_value=picks_net,
        total_differential=total,
        weeks_analyzed=len(weeks),
        acquired=acquired,
        lost=lost,
        picks_received=picks_received,
        picks_given=picks_given,
    )
