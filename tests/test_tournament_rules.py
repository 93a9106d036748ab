import pytest

from rosterdesk.config import (
    default_position,
    display_name,
    empty_stats,
    get_rules,
    iter_rules,
    positions_for,
    resolve_position,
)
from rosterdesk.exceptions import ConfigurationError
from rosterdesk.models import PremierStats, SoccerStats, TournamentVariant


def test_positions_are_non_empty_and_disjoint():
    soccer = positions_for(TournamentVariant.SOCCER_LEAGUE)
    premier = positions_for(TournamentVariant.PREMIER_LEAGUE)
    assert soccer == ("Forward", "Midfielder", "Defender", "Goalkeeper")
    assert premier == ("Batter", "Bowler", "AllRounder")
    assert not set(soccer) & set(premier)


def test_get_rules_accepts_codes_and_names():
    assert get_rules("ASL").variant is TournamentVariant.SOCCER_LEAGUE
    assert get_rules("apl").variant is TournamentVariant.PREMIER_LEAGUE
    assert get_rules("PREMIER_LEAGUE").variant is TournamentVariant.PREMIER_LEAGUE
    assert get_rules("SoccerLeague").variant is TournamentVariant.SOCCER_LEAGUE


def test_unknown_variant_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        get_rules("curling")
    with pytest.raises(ConfigurationError):
        positions_for(None)


def test_empty_stats_are_zeroed_per_variant():
    soccer = empty_stats("asl")
    premier = empty_stats("apl")
    assert isinstance(soccer, SoccerStats)
    assert isinstance(premier, PremierStats)
    assert soccer.as_dict() == {"goals": 0, "assists": 0, "yellowCards": 0, "redCards": 0}
    assert premier.as_dict() == {"runs": 0, "wickets": 0, "matches": 0, "average": 0.0}


def test_default_position_and_display_name():
    assert default_position("asl") == "Forward"
    assert default_position("apl") == "Batter"
    assert display_name("asl") == "Ahalia Soccer League"
    assert display_name("apl") == "Ahalia Premier League"
    assert {rules.code for rules in iter_rules()} == {"asl", "apl"}


def test_resolve_position_ignores_case_and_spacing():
    assert resolve_position("apl", "all rounder") == "AllRounder"
    assert resolve_position("asl", "GOALKEEPER") == "Goalkeeper"
    assert resolve_position("apl", "Forward") is None
    assert resolve_position("asl", "") is None
    assert resolve_position("asl", 7) is None
