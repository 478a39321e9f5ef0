from .formatters import format_differential, format_json, format_points
from .models import LeagueReport, build_league_report

__all__ = [
    "LeagueReport",
    "build_league_report",
    "format_json",
    "format_points",
    "format_differential",
]
