"""
Views over a drawn schedule: pot seed lists, the flat list view, the
per-day view, and a plain-text version for the terminal.
"""
from __future__ import annotations

from typing import Any, Sequence

from potdraw.models import Schedule

MATCH_FORMAT = "BO3"


def pot_listing(pot: Sequence[str]) -> list[dict[str, Any]]:
    """Seed is 1-based draw position. Display only."""
    return [{"seed": i + 1, "team": team} for i, team in enumerate(pot)]


def list_view(schedule: Schedule) -> list[dict[str, Any]]:
    """One row per match, in day order."""
    rows: list[dict[str, Any]] = []
    for day in schedule.days:
        for m in day.matches:
            rows.append({
                "day": day.day,
                "phase": day.phase.value,
                "phase_label": day.phase.label,
                "side1": m.side1,
                "side2": m.side2,
                "format": MATCH_FORMAT,
            })
    return rows


def day_view(schedule: Schedule) -> list[dict[str, Any]]:
    """One card per day."""
    return [
        {
            "day": day.day,
            "title": f"Match Day {day.day}",
            "phase": day.phase.value,
            "phase_label": day.phase.label,
            "matches": [m.to_dict() for m in day.matches],
        }
        for day in schedule.days
    ]


def format_pots_text(schedule: Schedule) -> str:
    width = max((len(t) for t in schedule.pot_a + schedule.pot_b), default=4)
    lines = [f"  {'Pot A':<{width + 10}}Pot B"]
    for a, b in zip(pot_listing(schedule.pot_a), pot_listing(schedule.pot_b)):
        left = f"{a['seed']}. {a['team']}"
        right = f"{b['seed']}. {b['team']}"
        lines.append(f"  {left:<{width + 10}}{right}")
    return "\n".join(lines)


def format_match_line(side1: str, side2: str, width: int = 0) -> str:
    return f"    {side1:>{width}}  vs  {side2}"


def format_schedule_text(schedule: Schedule) -> str:
    """Whole schedule as terminal text: pots first, then each day."""
    width = max((len(t) for t in schedule.pot_a + schedule.pot_b), default=0)
    out = [format_pots_text(schedule), ""]
    for card in day_view(schedule):
        out.append(f"  {card['title']}  [{card['phase_label']}]")
        for m in card["matches"]:
            out.append(format_match_line(m["side1"], m["side2"], width))
        out.append("")
    return "\n".join(out).rstrip() + "\n"
