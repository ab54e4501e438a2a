"""
Two-pot tournament draw: 16 teams, two pots of 8, 4 same-pot days and
4 cross-pot days.
"""
from potdraw.models import Match, MatchDay, Phase, Schedule
from potdraw.services.draw_service import compose_schedule

__all__ = ["Match", "MatchDay", "Phase", "Schedule", "compose_schedule"]
