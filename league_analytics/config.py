"""Weight configuration for the power ranking composite.

The composite weights are heuristics, not measured optima, so they are kept as
plain values objects that callers pass into the compute functions. Defaults
live in :mod:`league_analytics.constants`; a YAML file can override any subset:

    power:
      wins: 0.4
      avg_points: 0.25
    trend:
      consistency_cap: 40

Nothing here is global. ``load_weights`` returns fresh objects every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from league_analytics.constants import (
    POWER_WEIGHT_AVG_POINTS,
    POWER_WEIGHT_CONSISTENCY,
    POWER_WEIGHT_EXPECTED_WINS,
    POWER_WEIGHT_WINS,
    TREND_CONSISTENCY_CAP,
    TREND_WEIGHT_AVG_POINTS,
    TREND_WEIGHT_CONSISTENCY,
    TREND_WEIGHT_EXPECTED_WINS,
    TREND_WEIGHT_WINS,
)

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a weights document cannot be applied."""


@dataclass(frozen=True, slots=True)
class PowerWeights:
    """Weights for the normalized end-of-season power score."""

    wins: float = POWER_WEIGHT_WINS
    avg_points: float = POWER_WEIGHT_AVG_POINTS
    expected_wins: float = POWER_WEIGHT_EXPECTED_WINS
    consistency: float = POWER_WEIGHT_CONSISTENCY


@dataclass(frozen=True, slots=True)
class TrendWeights:
    """Weights for the lighter week-by-week rank score.

    ``avg_points`` multiplies raw average points (not normalized), and
    consistency is scaled as ``max(0, 1 - stdev / consistency_cap)``.
    """

    wins: float = TREND_WEIGHT_WINS
    avg_points: float = TREND_WEIGHT_AVG_POINTS
    expected_wins: float = TREND_WEIGHT_EXPECTED_WINS
    consistency: float = TREND_WEIGHT_CONSISTENCY
    consistency_cap: float = TREND_CONSISTENCY_CAP


def _apply_overrides(base, section: str, raw: Any):
    if raw is None:
        return base
    if not isinstance(raw, dict):
        raise ConfigError(f"'{section}' must be a mapping, got {type(raw).__name__}")
    known = {f.name for f in fields(base)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown {section} weight(s): {', '.join(map(str, unknown))}")
    values: dict[str, float] = {}
    for key, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ConfigError(f"{section}.{key} must be numeric, got {value!r}")
        values[key] = float(value)
    return replace(base, **values)


def weights_from_mapping(data: dict | None) -> tuple[PowerWeights, TrendWeights]:
    """Build weights from an already-parsed mapping (``None`` means defaults)."""
    if data is None:
        return PowerWeights(), TrendWeights()
    if not isinstance(data, dict):
        raise ConfigError("Weights document must be a mapping at the top level")
    unknown = sorted(set(data) - {"power", "trend"})
    if unknown:
        raise ConfigError(f"Unknown section(s): {', '.join(map(str, unknown))}")
    power = _apply_overrides(PowerWeights(), "power", data.get("power"))
    trend = _apply_overrides(TrendWeights(), "trend", data.get("trend"))
    if trend.consistency_cap <= 0:
        raise ConfigError("trend.consistency_cap must be positive")
    return power, trend


def load_weights(path: str | Path) -> tuple[PowerWeights, TrendWeights]:
    """Read a YAML weights file and return ``(PowerWeights, TrendWeights)``.

    Missing sections and keys keep their defaults. Raises ``ConfigError`` for
    unusable content; ``OSError`` and ``yaml.YAMLError`` propagate.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    power, trend = weights_from_mapping(data)
    logger.debug("loaded weights from %s: power=%s trend=%s", path, power, trend)
    return power, trend
