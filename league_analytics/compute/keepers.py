"""Keeper success: how a roster's kept players fared against the league's keepers."""

from __future__ import annotations

from typing import Iterable, Sequence

from league_analytics.models import KeeperTotal, PlayerWeeklyPoints


def season_point_totals(player_points: Iterable[PlayerWeeklyPoints], season_id: int) -> dict[str, float]:
    totals: dict[str, float] = {}
    for p in player_points or []:
        if p.season_id != season_id:
            continue
        totals[p.player_id] = totals.get(p.player_id, 0.0) + p.points
    return totals


def keeper_totals(player_ids: Iterable[str], totals: dict[str, float]) -> list[KeeperTotal]:
    return [KeeperTotal(player_id=pid, total_points=totals.get(pid, 0.0)) for pid in player_ids]


def league_average_keeper_points(all_keepers: Sequence[KeeperTotal]) -> float:
    if not all_keepers:
        return 0.0
    return sum(k.total_points for k in all_keepers) / len(all_keepers)


def keeper_success_rate(keepers: Sequence[KeeperTotal], league_average: float) -> float:
    """Percentage (0-100) of keepers scoring strictly above the league average."""
    if not keepers:
        return 0.0
    above = sum(1 for k in keepers if k.total_points > league_average)
    return above / len(keepers) * 100


def top_performers(keepers: Sequence[KeeperTotal], count: int = 2) -> list[str]:
    ranked = sorted(keepers, key=lambda k: -k.total_points)
    return [k.player_id for k in ranked[:count]]
