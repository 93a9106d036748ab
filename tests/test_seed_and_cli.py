import json

import pytest

from rosterdesk.cli import main
from rosterdesk.config import Settings
from rosterdesk.exceptions import ConfigurationError
from rosterdesk.models import PremierStats, TeamStatus
from rosterdesk.seed import SeedProfile, seed_store


def _draft(player_count: int) -> dict:
    return {
        "tournament": "asl",
        "team": {
            "name": "Tigers FC",
            "department": "engineering",
            "captainName": "Alex Lee",
            "captainEmail": "a@x.com",
            "captainPhone": "1234567890",
        },
        "players": [
            {"name": f"P{idx}", "position": "Forward", "jerseyNumber": idx}
            for idx in range(1, player_count + 1)
        ],
    }


def test_default_seed_builds_both_tournaments():
    store = seed_store(settings=Settings(submit_delay=0.0))

    soccer = store.list_teams("asl")
    cricket = store.list_teams("apl")
    assert [team.name for team in soccer] == ["Engineering Tigers", "Medicine United"]
    assert soccer[0].players[0].stats.goals == 5
    assert cricket[0].players[2].position == "AllRounder"
    assert isinstance(cricket[0].players[1].stats, PremierStats)
    assert cricket[0].players[1].stats.average == 3.75


def test_seed_round_trips_through_json(tmp_path):
    store = seed_store(settings=Settings(submit_delay=0.0))
    store.update_team("asl", 2, {"status": "pending"})
    path = tmp_path / "teams.json"

    SeedProfile.from_store(store).save(path)
    reloaded = seed_store(SeedProfile.load(path), settings=Settings(submit_delay=0.0))

    assert reloaded.list_teams("asl") == store.list_teams("asl")
    assert reloaded.list_teams("apl") == store.list_teams("apl")
    assert reloaded.get_team("asl", 2).status is TeamStatus.PENDING


def test_seed_rejects_players_outside_schema():
    profile = SeedProfile.default()
    profile.teams["asl"][0]["players"][0]["position"] = "Bowler"

    with pytest.raises(ConfigurationError):
        profile.build_teams()


def test_seed_rejects_invalid_team_fields():
    profile = SeedProfile.default()
    profile.teams["apl"][1]["captainEmail"] = "nope"

    with pytest.raises(ConfigurationError):
        seed_store(profile)


def test_cli_positions(capsys):
    assert main(["positions"]) == 0
    out = capsys.readouterr().out
    assert "Ahalia Soccer League (asl)" in out
    assert "Batter, Bowler, AllRounder" in out
    assert "runs, wickets, matches, average" in out


def test_cli_teams_listing_and_json(capsys):
    assert main(["teams", "--variant", "apl"]) == 0
    out = capsys.readouterr().out
    assert "2 teams registered, 2 active" in out
    assert "Science Strikers" in out

    assert main(["teams", "--variant", "asl", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["captainName"] == "John Davis"
    assert payload[0]["players"][0]["stats"]["yellowCards"] == 1


def test_cli_unknown_variant(capsys):
    assert main(["teams", "--variant", "polo"]) == 2
    assert "Unknown tournament variant" in capsys.readouterr().out


def test_cli_register_commits_team(tmp_path, capsys):
    draft = tmp_path / "draft.json"
    draft.write_text(json.dumps(_draft(11)), encoding="utf-8")
    saved = tmp_path / "teams.json"

    assert main(["register", str(draft), "--delay", "0", "--save-seed", str(saved)]) == 0

    out = capsys.readouterr().out
    assert "Team registered successfully!" in out
    assert "Committed team #3 Tigers FC with 11 players" in out
    store = seed_store(SeedProfile.load(saved))
    assert [team.name for team in store.list_teams("asl")][-1] == "Tigers FC"


def test_cli_register_reports_short_roster(tmp_path, capsys):
    draft = tmp_path / "draft.json"
    draft.write_text(json.dumps(_draft(10)), encoding="utf-8")

    assert main(["register", str(draft), "--delay", "0"]) == 1
    out = capsys.readouterr().out
    assert "[destructive] Insufficient players" in out


def test_cli_players_filters_across_teams(capsys):
    assert main(["players", "--variant", "apl", "--position", "all rounder"]) == 0
    out = capsys.readouterr().out
    assert "Ahalia Premier League: 2 players" in out
    assert "Tom Wilson (AllRounder, #7) Science Strikers" in out
    assert "Ben Smith (AllRounder, #23) Arts Avengers" in out
    assert "Raj Patel" not in out

    assert main(["players", "--search", "smith", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [(row["team"], row["name"]) for row in payload] == [("Engineering Tigers", "Mike Smith")]


def test_cli_players_rejects_unknown_position(capsys):
    assert main(["players", "--position", "Bowler"]) == 2
    assert "Position must be one of" in capsys.readouterr().out


def test_cli_teams_search(capsys):
    assert main(["teams", "--search", "medicine"]) == 0
    out = capsys.readouterr().out
    assert "Medicine United" in out
    assert "Engineering Tigers" not in out


def test_cli_register_reports_unreadable_drafts(tmp_path, capsys):
    missing = tmp_path / "missing.json"
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    assert main(["register", str(missing)]) == 2
    assert capsys.readouterr().out.startswith("Error: cannot read draft")
    assert main(["register", str(broken)]) == 2
    assert capsys.readouterr().out.startswith("Error: cannot read draft")


def test_unreadable_seed_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        SeedProfile.load(tmp_path / "nowhere.json")
