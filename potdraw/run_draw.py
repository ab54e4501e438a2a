"""
Draw a two-pot schedule from the terminal.
Reads 16 team names (one per line) from a file or stdin, draws the pots,
reveals each match day in turn as if on stage, and saves the result to the
configured store.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from potdraw.config import load_settings
from potdraw.models import Phase, Schedule
from potdraw.persistence.store import NullScheduleStore, build_store
from potdraw.render import format_match_line, format_pots_text
from potdraw.reveal import RevealConfig, RevealEvent, RevealSession, SyncRevealer, reveal_events
from potdraw.rng import SeededRNG
from potdraw.services.draw_service import DrawService
from potdraw.services.validation import DrawValidationError

# Exit code for unusable input, as argparse uses for bad arguments
EXIT_BAD_INPUT = 2


def _read_teams(path: Path | None) -> str:
    if path is None:
        return sys.stdin.read()
    if not path.exists():
        raise SystemExit(f"Teams file not found: {path}")
    return path.read_text(encoding="utf-8")


def _print_event(event: RevealEvent, width: int) -> None:
    if event.first_of_day:
        print()
        print(f"  Match Day {event.day}  [{event.phase.label}]")
    print(format_match_line(event.match.side1, event.match.side2, width))


def _print_summary(schedule: Schedule) -> None:
    same = sum(len(d.matches) for d in schedule.days if d.phase == Phase.SAME_POT)
    cross = sum(len(d.matches) for d in schedule.days if d.phase == Phase.CROSS_POT)
    print()
    print("=" * 60)
    print(f"  {len(schedule.days)} match days: {same} same-pot, {cross} cross-pot matches")
    print("=" * 60)


def run(
    text: str,
    seed: int | None = None,
    fast: bool = False,
    save: bool = True,
) -> int:
    settings = load_settings()
    store = build_store(settings) if save else NullScheduleStore()
    service = DrawService(store)
    rng = SeededRNG(seed) if seed is not None else None
    try:
        schedule, result = service.draw_from_text(text, rng)
    except DrawValidationError as e:
        print(f"  {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    width = max(len(t) for t in schedule.teams)
    print()
    print(format_pots_text(schedule))
    print("  " + "-" * 56)

    revealer = SyncRevealer(RevealConfig(seconds_per_match=settings.reveal_seconds, fast_forward=fast))
    session = RevealSession()
    try:
        revealer.run(schedule, lambda ev: _print_event(ev, width), session)
    except KeyboardInterrupt:
        # Ctrl-C during the reveal shows the rest at once
        session.skip()
        for ev in _remaining_events(schedule, session.revealed):
            _print_event(ev, width)
    _print_summary(schedule)

    if not save:
        return 0
    if result.ok:
        where = f"{result.backend} (fallback)" if result.fallback_used else result.backend
        print(f"  Saved {result.record_id} to {where}")
        return 0
    print(f"  Not saved: {result.error}", file=sys.stderr)
    return 1


def _remaining_events(schedule: Schedule, already: int):
    for i, ev in enumerate(reveal_events(schedule)):
        if i >= already:
            yield ev


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Draw two pots of 8 and an 8-day match schedule.")
    parser.add_argument("--file", type=Path, default=None, help="Team list, one per line (default: stdin)")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible draw")
    parser.add_argument("--fast", action="store_true", help="No delay between revealed matches")
    parser.add_argument("--no-save", action="store_true", help="Do not persist the draw")
    parser.add_argument("--verbose", action="store_true", help="Log store activity")
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    text = _read_teams(args.file)
    return run(text, seed=args.seed, fast=args.fast, save=not args.no_save)


if __name__ == "__main__":
    sys.exit(main())
