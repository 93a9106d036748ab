"""Command-line interface for inspecting rosters and registering teams."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from rosterdesk.config import get_rules, iter_rules, load_settings
from rosterdesk.exceptions import RosterDeskError, ValidationError
from rosterdesk.notifications import NotificationLog
from rosterdesk.seed import SeedProfile, seed_store
from rosterdesk.store import RosterStore
from rosterdesk.wizard import RegistrationWizard


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage college tournament teams and rosters")
    parser.add_argument("--verbose", action="store_true", help="Log store and wizard activity")
    sub = parser.add_subparsers(dest="command", required=True)

    positions = sub.add_parser("positions", help="Show positions and tracked statistics per tournament")
    positions.add_argument("--variant", default=None, help="Tournament code (asl or apl)")

    teams = sub.add_parser("teams", help="List committed teams of a tournament")
    teams.add_argument("--variant", default="asl", help="Tournament code (asl or apl)")
    teams.add_argument("--seed", type=Path, default=None, help="Seed JSON to load instead of the demo teams")
    teams.add_argument("--search", default=None, help="Only teams whose name contains this text")
    teams.add_argument("--json", action="store_true", help="Print teams as JSON")

    players = sub.add_parser("players", help="List players of a tournament across all teams")
    players.add_argument("--variant", default="asl", help="Tournament code (asl or apl)")
    players.add_argument("--seed", type=Path, default=None, help="Seed JSON to load instead of the demo teams")
    players.add_argument("--position", default=None, help="Only players in this position")
    players.add_argument("--search", default=None, help="Only players whose name contains this text")
    players.add_argument("--json", action="store_true", help="Print players as JSON")

    register = sub.add_parser("register", help="Run a registration draft through the wizard")
    register.add_argument("draft", type=Path, help="Draft JSON with tournament, team and players")
    register.add_argument("--seed", type=Path, default=None, help="Seed JSON to load instead of the demo teams")
    register.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Submission delay in seconds (defaults to ROSTERDESK_SUBMIT_DELAY)",
    )
    register.add_argument("--save-seed", type=Path, default=None, help="Write all teams to this JSON file afterwards")
    return parser.parse_args(argv)


def _load_store(seed: Optional[Path], delay: Optional[float] = None) -> RosterStore:
    settings = load_settings()
    if delay is not None:
        settings = replace(settings, submit_delay=max(0.0, delay))
    profile = SeedProfile.load(seed) if seed else None
    return seed_store(profile, settings=settings)


def _cmd_positions(args: argparse.Namespace) -> int:
    rules_list = [get_rules(args.variant)] if args.variant else list(iter_rules())
    for rules in rules_list:
        print(f"{rules.display_name} ({rules.code})")
        print(f"  positions: {', '.join(rules.positions)}")
        print(f"  statistics: {', '.join(rules.stat_fields())}")
    return 0


def _cmd_teams(args: argparse.Namespace) -> int:
    store = _load_store(args.seed)
    rules = get_rules(args.variant)
    teams = store.list_teams(rules.variant, search=args.search)
    if args.json:
        payload = [team.model_dump(mode="json", by_alias=True) for team in teams]
        print(json.dumps(payload, indent=2))
        return 0
    summary = store.summary(rules.variant)
    print(f"{rules.display_name}: {summary.total_teams} teams registered, {summary.active_teams} active")
    for team in teams:
        print(
            f"  #{team.id} {team.name} [{team.status.value}] captain={team.captain_name} "
            f"players={len(team.players)}"
        )
    return 0


def _cmd_players(args: argparse.Namespace) -> int:
    store = _load_store(args.seed)
    rules = get_rules(args.variant)
    rows = store.list_players(rules.variant, position=args.position, search=args.search)
    if args.json:
        payload = [
            {"team": team.name, **player.model_dump(mode="json", by_alias=True)}
            for team, player in rows
        ]
        print(json.dumps(payload, indent=2))
        return 0
    print(f"{rules.display_name}: {len(rows)} players")
    for team, player in rows:
        jersey = "-" if player.jersey_number is None else player.jersey_number
        print(f"  {player.name} ({player.position}, #{jersey}) {team.name}")
    return 0


def _cmd_register(args: argparse.Namespace) -> int:
    try:
        draft = json.loads(args.draft.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Error: cannot read draft {args.draft}: {exc}")
        return 2
    if not isinstance(draft, dict):
        print(f"Error: draft {args.draft} must contain a JSON object")
        return 2
    store = _load_store(args.seed, args.delay)
    notifications = NotificationLog()
    wizard = RegistrationWizard(store, draft.get("tournament", "asl"), notifier=notifications)

    try:
        wizard.update_team_info(**draft.get("team", {}))
        wizard.next()
        for player in draft.get("players", []):
            wizard.add_draft_player(**player)
        wizard.next()
        if draft.get("description"):
            wizard.update_team_info(description=draft["description"])
        team = asyncio.run(wizard.submit())
    except ValidationError:
        for event in notifications.events:
            print(f"[{event.severity.value}] {event.title}: {event.description}")
        return 1

    for event in notifications.events:
        print(f"[{event.severity.value}] {event.title}: {event.description}")
    print(f"Committed team #{team.id} {team.name} with {len(team.players)} players")

    if args.save_seed:
        SeedProfile.from_store(store).save(args.save_seed)
        print(f"Saved teams to {args.save_seed}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    handlers = {
        "positions": _cmd_positions,
        "teams": _cmd_teams,
        "players": _cmd_players,
        "register": _cmd_register,
    }
    try:
        return handlers[args.command](args)
    except RosterDeskError as exc:
        print(f"Error: {exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
