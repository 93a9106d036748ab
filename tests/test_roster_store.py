import pytest

from rosterdesk.config import Settings
from rosterdesk.exceptions import ConfigurationError, NotFoundError, ValidationError
from rosterdesk.models import PremierStats, SoccerStats, TeamStatus, TournamentVariant
from rosterdesk.store import RosterStore


ASL = TournamentVariant.SOCCER_LEAGUE
APL = TournamentVariant.PREMIER_LEAGUE


def _team_fields(**overrides) -> dict:
    fields = {
        "name": "Tigers FC",
        "department": "engineering",
        "captainName": "Alex Lee",
        "captainEmail": "a@x.com",
        "captainPhone": "1234567890",
    }
    fields.update(overrides)
    return fields


def _store(**settings) -> RosterStore:
    return RosterStore(settings=Settings(submit_delay=0.0, **settings))


def _roster(count: int, position: str = "Forward") -> list[dict]:
    return [{"name": f"P{idx}", "position": position} for idx in range(1, count + 1)]


def test_create_team_starts_active_and_empty():
    store = _store()
    team = store.create_team(ASL, _team_fields())

    assert team.id == 1
    assert team.name == "Tigers FC"
    assert team.variant is ASL
    assert team.status is TeamStatus.ACTIVE
    assert team.players == ()
    assert store.list_teams(ASL) == [team]


def test_create_team_lists_every_violation():
    store = _store()
    with pytest.raises(ValidationError) as exc_info:
        store.create_team(
            ASL,
            {
                "name": "ab",
                "department": "",
                "captainName": "",
                "captainEmail": "not-an-email",
                "captainPhone": "123",
            },
        )
    assert set(exc_info.value.errors) == {
        "name",
        "department",
        "captain_name",
        "captain_email",
        "captain_phone",
    }
    assert store.list_teams(ASL) == []


def test_team_ids_are_scoped_per_variant():
    store = _store()
    soccer = store.create_team(ASL, _team_fields())
    cricket = store.create_team(APL, _team_fields(name="Science Strikers"))
    second = store.create_team(ASL, _team_fields(name="Medicine United"))

    assert (soccer.id, cricket.id, second.id) == (1, 1, 2)
    assert [team.name for team in store.list_teams(APL)] == ["Science Strikers"]


def test_team_ids_are_not_reused_after_delete():
    store = _store()
    store.create_team(ASL, _team_fields())
    second = store.create_team(ASL, _team_fields(name="Second Team"))
    store.delete_team(ASL, second.id)

    third = store.create_team(ASL, _team_fields(name="Third Team"))
    assert third.id == 3


def test_list_teams_keeps_insertion_order_without_dedup():
    store = _store()
    store.create_team(ASL, _team_fields(name="Zebras"))
    store.create_team(ASL, _team_fields(name="Antelopes"))
    store.create_team(ASL, _team_fields(name="Zebras"))

    assert [team.name for team in store.list_teams(ASL)] == ["Zebras", "Antelopes", "Zebras"]


def test_update_with_identical_fields_round_trips():
    store = _store()
    created = store.create_team(ASL, _team_fields())
    updated = store.update_team(ASL, created.id, _team_fields())

    assert updated == created


def test_update_team_rejects_invalid_patch_without_partial_write():
    store = _store()
    created = store.create_team(ASL, _team_fields())

    with pytest.raises(ValidationError) as exc_info:
        store.update_team(ASL, created.id, {"name": "Renamed FC", "captainEmail": "broken"})

    assert list(exc_info.value.errors) == ["captain_email"]
    assert store.get_team(ASL, created.id) == created


def test_update_team_changes_status():
    store = _store()
    created = store.create_team(ASL, _team_fields())

    updated = store.update_team(ASL, created.id, {"status": "pending"})
    assert updated.status is TeamStatus.PENDING

    with pytest.raises(ValidationError) as exc_info:
        store.update_team(ASL, created.id, {"status": "archived"})
    assert "status" in exc_info.value.errors


def test_update_missing_team_raises_not_found():
    store = _store()
    with pytest.raises(NotFoundError):
        store.update_team(ASL, 99, _team_fields())
    with pytest.raises(NotFoundError):
        store.get_team(ASL, 99)


def test_delete_team_cascades_players():
    store = _store()
    doomed = store.create_team(ASL, _team_fields(name="Doomed FC"))
    kept = store.create_team(ASL, _team_fields(name="Kept FC"))
    store.add_player(ASL, doomed.id, {"name": "Gone One"})
    store.add_player(ASL, doomed.id, {"name": "Gone Two"})
    store.add_player(ASL, kept.id, {"name": "Stays One"})

    store.delete_team(ASL, doomed.id)

    remaining = [
        (team.id, player.id, player.name)
        for team in store.list_teams(ASL)
        for player in team.players
    ]
    assert remaining == [(kept.id, 1, "Stays One")]
    assert store.summary(ASL).total_players == 1


def test_delete_missing_team_raises_not_found():
    store = _store()
    team = store.create_team(ASL, _team_fields())
    store.delete_team(ASL, team.id)

    with pytest.raises(NotFoundError):
        store.delete_team(ASL, team.id)


def test_add_player_defaults_and_coercion():
    store = _store()
    team = store.create_team(ASL, _team_fields())

    first = store.add_player(ASL, team.id, {"name": "Keeper", "position": "goalkeeper", "jerseyNumber": "1"})
    second = store.add_player(ASL, team.id, {"name": "Striker", "jersey_number": "nine"})

    assert (first.id, first.position, first.jersey_number) == (1, "Goalkeeper", 1)
    assert (second.id, second.position, second.jersey_number) == (2, "Forward", None)
    assert [player.name for player in store.get_team(ASL, team.id).players] == ["Keeper", "Striker"]


def test_add_player_requires_name_and_leaves_roster_untouched():
    store = _store()
    team = store.create_team(ASL, _team_fields())

    with pytest.raises(ValidationError) as exc_info:
        store.add_player(ASL, team.id, {"name": "   ", "position": "Forward"})

    assert "name" in exc_info.value.errors
    assert store.get_team(ASL, team.id).players == ()


def test_add_player_rejects_position_from_other_variant():
    store = _store()
    team = store.create_team(ASL, _team_fields())

    with pytest.raises(ValidationError) as exc_info:
        store.add_player(ASL, team.id, {"name": "Wrong Sport", "position": "Batter"})

    assert list(exc_info.value.errors) == ["position"]


def test_players_follow_their_variant_schema():
    store = _store()
    soccer_team = store.create_team(ASL, _team_fields())
    cricket_team = store.create_team(APL, _team_fields(name="Science Strikers"))

    soccer = store.add_player(ASL, soccer_team.id, {"name": "Winger", "position": "Midfielder"})
    cricket = store.add_player(APL, cricket_team.id, {"name": "Spinner", "position": "Bowler"})

    assert soccer.position in {"Forward", "Midfielder", "Defender", "Goalkeeper"}
    assert isinstance(soccer.stats, SoccerStats)
    assert set(soccer.stats.as_dict()) == {"goals", "assists", "yellowCards", "redCards"}
    assert cricket.position in {"Batter", "Bowler", "AllRounder"}
    assert isinstance(cricket.stats, PremierStats)
    assert set(cricket.stats.as_dict()) == {"runs", "wickets", "matches", "average"}


def test_update_player_merges_stats_leniently():
    store = _store()
    team = store.create_team(ASL, _team_fields())
    player = store.add_player(ASL, team.id, {"name": "Striker"})
    store.update_player(ASL, team.id, player.id, {"stats": {"goals": "3", "assists": 2}})

    updated = store.update_player(ASL, team.id, player.id, {"stats": {"assists": "lots"}, "yellowCards": "1"})

    assert updated.stats.as_dict() == {"goals": 3, "assists": 0, "yellowCards": 1, "redCards": 0}
    assert store.get_team(ASL, team.id).players == (updated,)


def test_update_player_average_is_decimal():
    store = _store()
    team = store.create_team(APL, _team_fields(name="Arts Avengers"))
    player = store.add_player(APL, team.id, {"name": "Opener", "position": "Batter"})

    updated = store.update_player(APL, team.id, player.id, {"stats": {"runs": "95", "average": "31.67"}})

    assert updated.stats.runs == 95
    assert updated.stats.average == pytest.approx(31.67)


def test_update_player_validates_fields_without_partial_write():
    store = _store()
    team = store.create_team(ASL, _team_fields())
    player = store.add_player(ASL, team.id, {"name": "Striker"})

    with pytest.raises(ValidationError) as exc_info:
        store.update_player(ASL, team.id, player.id, {"name": "", "position": "Bowler", "goals": 5})

    assert set(exc_info.value.errors) == {"name", "position"}
    assert store.get_team(ASL, team.id).players == (player,)


def test_update_player_edits_fields():
    store = _store()
    team = store.create_team(ASL, _team_fields())
    player = store.add_player(ASL, team.id, {"name": "Striker", "jerseyNumber": 9})

    updated = store.update_player(ASL, team.id, player.id, {"position": "Defender", "jerseyNumber": "4"})

    assert (updated.name, updated.position, updated.jersey_number) == ("Striker", "Defender", 4)


def test_update_missing_player_raises_not_found():
    store = _store()
    team = store.create_team(ASL, _team_fields())
    with pytest.raises(NotFoundError):
        store.update_player(ASL, team.id, 7, {"name": "Ghost"})


def test_remove_player_twice_is_a_noop():
    store = _store()
    team = store.create_team(ASL, _team_fields())
    player = store.add_player(ASL, team.id, {"name": "Striker"})

    assert store.remove_player(ASL, team.id, player.id) == player
    assert store.remove_player(ASL, team.id, player.id) is None
    assert store.get_team(ASL, team.id).players == ()


def test_reuse_policy_numbers_players_by_roster_length():
    store = _store()
    team = store.create_team(ASL, _team_fields())
    for name in ("One", "Two", "Three"):
        store.add_player(ASL, team.id, {"name": name})
    store.remove_player(ASL, team.id, 2)

    newcomer = store.add_player(ASL, team.id, {"name": "Four"})

    assert newcomer.id == 3
    assert [player.id for player in store.get_team(ASL, team.id).players] == [1, 3, 3]


def test_monotonic_policy_never_repeats_player_ids():
    store = _store(player_id_policy="monotonic")
    team = store.create_team(ASL, _team_fields())
    for name in ("One", "Two", "Three"):
        store.add_player(ASL, team.id, {"name": name})
    store.remove_player(ASL, team.id, 3)

    newcomer = store.add_player(ASL, team.id, {"name": "Four"})

    assert newcomer.id == 4


def test_commit_registration_stores_team_and_roster_together():
    store = _store()
    team = store.commit_registration(ASL, _team_fields(), _roster(11))

    assert team.status is TeamStatus.ACTIVE
    assert [player.id for player in team.players] == list(range(1, 12))
    assert all(player.stats == SoccerStats() for player in team.players)
    assert store.list_teams(ASL) == [team]


def test_commit_registration_is_all_or_nothing():
    store = _store()
    roster = _roster(11)
    roster[2] = {"name": "", "position": "Forward"}
    roster[5] = {"name": "Batsman", "position": "Batter"}

    with pytest.raises(ValidationError) as exc_info:
        store.commit_registration(ASL, _team_fields(captainEmail="nope"), roster)

    assert set(exc_info.value.errors) == {"captain_email", "players.3.name", "players.6.position"}
    assert store.list_teams(ASL) == []


def test_commit_registration_enforces_roster_bounds():
    store = _store()
    with pytest.raises(ValidationError) as short:
        store.commit_registration(ASL, _team_fields(), _roster(10))
    with pytest.raises(ValidationError) as long:
        store.commit_registration(ASL, _team_fields(), _roster(19))

    assert "players" in short.value.errors
    assert "players" in long.value.errors
    assert store.list_teams(ASL) == []


def test_summary_counts_active_teams():
    store = _store()
    first = store.create_team(ASL, _team_fields())
    store.create_team(ASL, _team_fields(name="Second Team"))
    store.update_team(ASL, first.id, {"status": "rejected"})

    summary = store.summary(ASL)
    assert (summary.total_teams, summary.active_teams) == (2, 1)


def test_unknown_variant_is_a_configuration_error():
    store = _store()
    with pytest.raises(ConfigurationError):
        store.list_teams("hockey")


def _browsable_store() -> RosterStore:
    store = _store()
    strikers = store.create_team(APL, _team_fields(name="Science Strikers"))
    avengers = store.create_team(APL, _team_fields(name="Arts Avengers"))
    store.add_player(APL, strikers.id, {"name": "David Miller", "position": "Batter"})
    store.add_player(APL, strikers.id, {"name": "Tom Wilson", "position": "AllRounder"})
    store.add_player(APL, avengers.id, {"name": "Ben Smith", "position": "AllRounder"})
    store.add_player(APL, avengers.id, {"name": "Jessica Lee", "position": "Batter"})
    return store


def test_list_players_pairs_players_with_teams_in_order():
    store = _browsable_store()

    rows = store.list_players(APL)

    assert [(team.name, player.name) for team, player in rows] == [
        ("Science Strikers", "David Miller"),
        ("Science Strikers", "Tom Wilson"),
        ("Arts Avengers", "Ben Smith"),
        ("Arts Avengers", "Jessica Lee"),
    ]
    assert store.list_players(ASL) == []


def test_list_players_filters_by_resolved_position_and_name():
    store = _browsable_store()

    all_rounders = store.list_players(APL, position="all rounder")
    assert [player.name for _, player in all_rounders] == ["Tom Wilson", "Ben Smith"]

    found = store.list_players(APL, position="Batter", search="LEE")
    assert [(team.name, player.name) for team, player in found] == [("Arts Avengers", "Jessica Lee")]

    with pytest.raises(ValidationError) as exc_info:
        store.list_players(APL, position="Goalkeeper")
    assert list(exc_info.value.errors) == ["position"]


def test_list_teams_search_is_case_insensitive_and_read_only():
    store = _browsable_store()
    before = store.list_teams(APL)

    assert [team.name for team in store.list_teams(APL, search="aRtS")] == ["Arts Avengers"]
    assert store.list_teams(APL, search="Rugby") == []
    assert store.list_teams(APL) == before
