# constants.py
# Centralized defaults for the analytics engine. Do not change values without bumping SCHEMA_VERSION.

SCHEMA_VERSION = "1.0.0"

# Power score weights (final ranking)
POWER_WEIGHT_WINS = 0.35
POWER_WEIGHT_AVG_POINTS = 0.30
POWER_WEIGHT_EXPECTED_WINS = 0.20
POWER_WEIGHT_CONSISTENCY = 0.15

# Weekly trend weights (week-by-week rank ordering only)
TREND_WEIGHT_WINS = 0.35
TREND_WEIGHT_AVG_POINTS = 0.003  # raw points are ~100x larger than win counts
TREND_WEIGHT_EXPECTED_WINS = 0.20
TREND_WEIGHT_CONSISTENCY = 0.10
TREND_CONSISTENCY_CAP = 50.0

# Draft pick value tiers. Rounds 1-6 are keeper slots; round 7 is the "1st round".
PICK_VALUES = {
    7: 30,
    8: 20,
    9: 12,
    10: 12,
    11: 6,
    12: 6,
}
DEFAULT_PICK_VALUE = 3
KEEPER_ROUNDS = 6

# Weeks observed after a trade before it gets a definitive grade
WEEKS_TO_ANALYZE = 4

# Transaction vocabulary (Sleeper values)
TYPE_TRADE = "trade"
TYPE_WAIVER = "waiver"
TYPE_FREE_AGENT = "free_agent"
TYPE_COMMISSIONER = "commissioner"
STATUS_COMPLETE = "complete"

# Positions tracked by add/drop churn, in display order
CHURN_POSITIONS = ("QB", "RB", "WR", "TE", "K", "DEF")
