"""Typed records for engine inputs and outputs.

Raw rows from the league store are loosely shaped (nullable columns, numeric
strings, missing keys). Each input record has a ``from_row`` constructor that
applies the engine's null policy once, at the boundary, so compute code reads
plain attributes. Optional fields that keep meaning when absent (``points``,
``matchup_id``, ``team_name``) stay ``None`` and are defaulted at read sites.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterable

from league_analytics.constants import STATUS_COMPLETE, TYPE_TRADE


def _coerce_optional_int(value: object) -> int | None:
    """Best-effort int conversion (int, float, numeric str); None when impossible."""
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None
    if isinstance(value, int | float):
        try:
            return int(value)
        except (ValueError, OverflowError):  # nan / inf
            return None
    return None


def _coerce_int(value: object, default: int = 0) -> int:
    out = _coerce_optional_int(value)
    return default if out is None else out


def _coerce_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        out = float(value)
    elif isinstance(value, str):
        try:
            out = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return out if math.isfinite(out) else None


def _int_mapping(raw: object) -> dict[str, int]:
    if not isinstance(raw, dict):
        return {}
    return {str(k): _coerce_int(v, -1) for k, v in raw.items()}


class Grade(str, Enum):
    FAVORABLE = "favorable"
    UNFAVORABLE = "unfavorable"
    PENDING = "pending"


@dataclass(slots=True)
class MatchupRecord:
    roster_id: int
    matchup_id: int | None
    week: int
    points: float | None = None

    @property
    def score(self) -> float:
        return self.points if self.points is not None else 0.0

    @classmethod
    def from_row(cls, row: dict) -> MatchupRecord:
        return cls(
            roster_id=_coerce_int(row.get("roster_id"), -1),
            matchup_id=_coerce_optional_int(row.get("matchup_id")),
            week=_coerce_int(row.get("week"), 0),
            points=_coerce_float(row.get("points")),
        )


@dataclass(slots=True)
class RosterRecord:
    roster_id: int
    team_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.team_name or f"Team {self.roster_id}"

    @classmethod
    def from_row(cls, row: dict) -> RosterRecord:
        name = row.get("team_name")
        return cls(
            roster_id=_coerce_int(row.get("roster_id"), -1),
            team_name=str(name) if name else None,
        )


@dataclass(slots=True)
class DraftPickTrade:
    season: str
    round: int
    roster_id: int
    previous_owner_id: int
    owner_id: int

    @classmethod
    def from_row(cls, row: dict) -> DraftPickTrade:
        return cls(
            season=str(row.get("season") or ""),
            round=_coerce_int(row.get("round"), 0),
            roster_id=_coerce_int(row.get("roster_id"), -1),
            previous_owner_id=_coerce_int(row.get("previous_owner_id"), -1),
            owner_id=_coerce_int(row.get("owner_id"), -1),
        )


@dataclass(slots=True)
class Transaction:
    transaction_id: str
    season_id: int
    week: int
    type: str
    status: str
    roster_ids: list[int] = field(default_factory=list)
    adds: dict[str, int] = field(default_factory=dict)
    drops: dict[str, int] = field(default_factory=dict)
    draft_picks: list[DraftPickTrade] = field(default_factory=list)
    created_at: int | None = None

    @property
    def is_completed_trade(self) -> bool:
        return self.type == TYPE_TRADE and self.status == STATUS_COMPLETE

    @classmethod
    def from_row(cls, row: dict) -> Transaction:
        picks = row.get("draft_picks") or []
        created = row.get("created_at_sleeper")
        if created is None:
            created = row.get("created_at")
        return cls(
            transaction_id=str(row.get("transaction_id") or ""),
            season_id=_coerce_int(row.get("season_id"), 0),
            week=_coerce_int(row.get("week"), 0),
            type=str(row.get("type") or ""),
            status=str(row.get("status") or ""),
            roster_ids=[_coerce_int(r, -1) for r in (row.get("roster_ids") or [])],
            adds=_int_mapping(row.get("adds")),
            drops=_int_mapping(row.get("drops")),
            draft_picks=[DraftPickTrade.from_row(p) for p in picks if isinstance(p, dict)],
            created_at=_coerce_optional_int(created),
        )


@dataclass(slots=True)
class PlayerWeeklyPoints:
    player_id: str
    week: int
    season_id: int
    points: float = 0.0

    @classmethod
    def from_row(cls, row: dict) -> PlayerWeeklyPoints:
        return cls(
            player_id=str(row.get("player_id") or ""),
            week=_coerce_int(row.get("week"), 0),
            season_id=_coerce_int(row.get("season_id"), 0),
            points=_coerce_float(row.get("points")) or 0.0,
        )


@dataclass(slots=True)
class KeeperTotal:
    player_id: str
    total_points: float = 0.0


def records_from_rows(cls, rows: Iterable[dict] | None) -> list:
    """Convert raw store rows to records of ``cls``; non-dict rows are skipped."""
    return [cls.from_row(r) for r in (rows or []) if isinstance(r, dict)]


# --- Derived outputs ---


@dataclass(slots=True)
class Record:
    wins: int = 0
    losses: int = 0
    ties: int = 0


@dataclass(slots=True)
class ShouldBeRecord:
    wins: int = 0
    losses: int = 0


@dataclass(slots=True)
class WeeklyRank:
    week: int
    rank: int
    points: float


@dataclass(slots=True)
class PowerRankingRow:
    roster_id: int
    team_name: str
    power_rank: int
    power_score: float
    actual_wins: int
    actual_losses: int
    actual_ties: int
    expected_wins: float
    luck_index: float
    should_be_wins: int
    should_be_losses: int
    consistency_score: float
    avg_points: float
    total_points: float
    strength_of_schedule: float
    weekly_ranks: list[WeeklyRank] = field(default_factory=list)
    weeks_played: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# summary callout -> the row metric it is about
_SUMMARY_METRICS = {
    "luckiest": "luck_index",
    "unluckiest": "luck_index",
    "most_consistent": "consistency_score",
    "toughest_schedule": "strength_of_schedule",
}


@dataclass(slots=True)
class SummaryStats:
    luckiest: PowerRankingRow | None = None
    unluckiest: PowerRankingRow | None = None
    most_consistent: PowerRankingRow | None = None
    toughest_schedule: PowerRankingRow | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, metric in _SUMMARY_METRICS.items():
            row = getattr(self, key)
            if row is None:
                out[key] = None
                continue
            out[key] = {"roster_id": row.roster_id, "team_name": row.team_name, metric: getattr(row, metric)}
        return out


@dataclass(slots=True)
class PlayerPoints:
    player_id: str
    name: str
    points: float


@dataclass(slots=True)
class PickValue:
    round: int
    season: int
    value: int


@dataclass(slots=True)
class TradeGrade:
    grade: Grade
    player_differential: float
    pick_value: int
    total_differential: float
    weeks_analyzed: int
    acquired: list[PlayerPoints] = field(default_factory=list)
    lost: list[PlayerPoints] = field(default_factory=list)
    picks_received: list[PickValue] = field(default_factory=list)
    picks_given: list[PickValue] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["grade"] = self.grade.value
        return out


@dataclass(slots=True)
class TradeHistoryEntry:
    transaction_id: str
    week: int
    season_id: int
    created_at: int
    trade_partner: str
    grade: TradeGrade

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["grade"] = self.grade.to_dict()
        return out


@dataclass(slots=True)
class ManagerSummary:
    roster_id: int
    team_name: str
    wins: int
    losses: int
    ties: int
    trade_count: int
    keeper_success_rate: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ManagerActivity:
    roster_id: int
    team_name: str
    trades: int = 0
    waivers: int = 0
    free_agents: int = 0
    commissioner: int = 0
    total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class TradeMatrixCell:
    roster_id_1: int
    roster_id_2: int
    team_name_1: str
    team_name_2: str
    trade_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class TransactionSummary:
    total_transactions: int = 0
    total_trades: int = 0
    total_waivers: int = 0
    total_free_agents: int = 0
    busiest_week: tuple[int, int] | None = None  # (week, count)
    most_active_manager: ManagerActivity | None = None

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        if self.busiest_week is not None:
            out["busiest_week"] = {"week": self.busiest_week[0], "count": self.busiest_week[1]}
        return out


@dataclass(slots=True)
class PositionChurn:
    position: str
    adds: int = 0
    drops: int = 0
    net: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
