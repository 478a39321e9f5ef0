"""Output helpers for league reports.

JSON output keeps full float precision; rounding for display is left to the
``format_*`` helpers so the payload stays lossless.
"""

from __future__ import annotations

import json

from .models import LeagueReport


def format_json(report: LeagueReport, schema_version: str, *, pretty: bool = False) -> str:
    """Render a report to JSON.

    Args:
        schema_version: Stamped into the payload.
        pretty: Indent output.
    """
    payload = report.to_json_payload(schema_version)
    if pretty:
        return json.dumps(payload, indent=2)
    return json.dumps(payload, separators=(",", ":"))


def format_points(points: float) -> str:
    """One decimal with thousands separators, e.g. ``1,234.5``."""
    return f"{points:,.1f}"


def format_differential(diff: float) -> str:
    """Signed one-decimal differential; zero shows as ``+0.0``."""
    sign = "+" if diff >= 0 else ""
    return f"{sign}{diff:.1f}"
