"""Tests for the information-leakage report, pattern detection and dossier."""

import pytest

from pirate_battle.analysis import (
    PlayStyle,
    build_dossier,
    categorize,
    detect_patterns,
    dossier,
    leakage_report,
    predict_next_move,
)
from pirate_battle.models.game import WeatherKind
from pirate_battle.models.ship import ShipType
from pirate_battle.models.tile import TerrainKind
from tests.helpers.builders import duel, event, make_player, make_ship, make_state, water_map, with_terrain


def _attacks(n, **data):
    return [event("attack", damage=10, **data) for _ in range(n)]


class TestCategorize:
    def test_ability_categories(self):
        """Test abilities are classified by their category."""
        assert categorize(event("use_ability", category="offensive")) == "aggressive"
        assert categorize(event("use_ability", category="defensive")) == "defensive"
        assert categorize(event("use_ability", category="utility")) == "scouting"

    def test_non_actions(self):
        """Test world and bookkeeping events are not actions."""
        assert categorize(event("end_turn")) is None
        assert categorize(event("weather", player_id=None)) is None


class TestPatterns:
    def test_aggressive_attacker(self):
        """Test a high share of attacks is detected."""
        keys = [p.key for p in detect_patterns(_attacks(5), "alice")]
        assert "aggressive_attacker" in keys

    def test_needs_three_actions(self):
        """Test ratio patterns need some history."""
        assert detect_patterns(_attacks(2), "alice") == []

    def test_attacks_after_scanning(self):
        """Test scan-then-attack sequences."""
        history = [
            event("scan_coordinate"),
            event("attack"),
            event("move"),
            event("scan_coordinate"),
            event("attack"),
        ]
        keys = [p.key for p in detect_patterns(history, "alice")]
        assert "attacks_after_scanning" in keys

    def test_never_retreats(self):
        """Test damaged ships that keep advancing."""
        history = [
            event("move", health_ratio=0.2, retreat=False),
            event("move", health_ratio=0.1, retreat=False),
        ]
        keys = [p.key for p in detect_patterns(history, "alice")]
        assert "never_retreats_when_damaged" in keys

    def test_retreating_player_not_flagged(self):
        """Test one retreat breaks the pattern."""
        history = [
            event("move", health_ratio=0.2, retreat=True),
            event("move", health_ratio=0.1, retreat=False),
        ]
        keys = [p.key for p in detect_patterns(history, "alice")]
        assert "never_retreats_when_damaged" not in keys

    def test_repeated_sequence(self):
        """Test a recurring pair of action categories."""
        history = [event("move"), event("claim_territory")] * 3
        keys = [p.key for p in detect_patterns(history, "alice")]
        assert "repeated_sequence" in keys

    def test_consistent_timing(self):
        """Test steady decision times."""
        history = [event("move", decision_time_ms=t) for t in (3000, 3200, 3100)]
        keys = [p.key for p in detect_patterns(history, "alice")]
        assert "consistent_timing" in keys

    def test_shielded_events_hidden(self):
        """Test the ghost fleet hides actions from pattern detection."""
        history = [event("attack", shielded=True) for _ in range(5)]
        assert detect_patterns(history, "alice") == []

    def test_other_players_ignored(self):
        """Test filtering by player."""
        history = _attacks(5)
        assert detect_patterns(history, "bob") == []


class TestLeakageReport:
    def test_visible_ships_score(self):
        """Test two visible ships on open water score 30."""
        report = leakage_report(duel(), "alice")
        assert report.visible_ship_positions == {"alice_sloop_1": (0, 0), "alice_frigate_1": (1, 0)}
        assert report.visible_resources == []
        assert report.score == 30
        assert not report.shielded

    def test_resources_and_territory(self):
        """Test nearby resource tiles and controlled territory add to the score."""
        game_map = with_terrain(water_map(), TerrainKind.PORT, (2, 0), owner="alice")
        game_map = with_terrain(game_map, TerrainKind.ISLAND, (8, 8))
        state = make_state(
            make_player("alice", [make_ship("alice", ShipType.SLOOP, (0, 0))], controlled_territories={(2, 0)}),
            make_player("bob", [make_ship("bob", ShipType.SLOOP, (9, 9))]),
            game_map=game_map,
        )
        report = leakage_report(state, "alice")
        assert [r.coordinate for r in report.visible_resources] == [(2, 0)]
        assert report.visible_territories == [(2, 0)]
        assert report.score == 15 + 5 + 5

    def test_actions_add_to_score(self):
        """Test logged actions are capped at 20 points."""
        state = duel()
        report = leakage_report(state, "alice", history=_attacks(10))
        assert report.score == 30 + 20
        assert report.detected_patterns

    def test_shielded_player(self):
        """Test the ghost fleet zeroes the report."""
        state = make_state(
            make_player("alice", [make_ship("alice", ShipType.SLOOP, (0, 0))], shield_turns_remaining=2),
            make_player("bob", [make_ship("bob", ShipType.SLOOP, (9, 9))]),
        )
        report = leakage_report(state, "alice", history=_attacks(5))
        assert report.shielded
        assert report.score == 0
        assert report.visible_ship_positions == {}
        assert report.detected_patterns == []

    def test_fog_hides_ship_positions(self):
        """Test fog keeps ship positions out of the report."""
        report = leakage_report(duel(weather=WeatherKind.FOG), "alice")
        assert report.visible_ship_positions == {}
        assert report.score == 0

    def test_unknown_player(self):
        """Test analyzing someone not in the game."""
        with pytest.raises(ValueError, match="not found"):
            leakage_report(duel(), "mallory")


class TestDossier:
    def test_empty_history(self):
        """Test a player with no visible actions."""
        profile = dossier([], "alice")
        assert profile.typical_play_style == PlayStyle.BALANCED
        assert profile.predictability_score == 100

    def test_aggressive(self):
        """Test a single-minded attacker is fully predictable."""
        profile = build_dossier(_attacks(6), "alice")
        assert profile.typical_play_style == PlayStyle.AGGRESSIVE
        assert profile.predictability_score == 100
        assert profile.action_counts == {"aggressive": 6}

    def test_unpredictable(self):
        """Test one action in every category."""
        history = [
            event("attack"),
            event("use_ability", category="defensive"),
            event("collect_resources"),
            event("claim_territory"),
            event("scan_coordinate"),
            event("move"),
        ]
        profile = build_dossier(history, "alice")
        assert profile.predictability_score == 0
        assert profile.typical_play_style == PlayStyle.UNPREDICTABLE

    def test_territorial(self):
        """Test a dominant category above the 40% share."""
        history = [event("claim_territory")] * 3 + [event("attack"), event("move")]
        assert build_dossier(history, "alice").typical_play_style == PlayStyle.TERRITORIAL

    def test_balanced(self):
        """Test no dominant category with too few actions to be unpredictable."""
        history = [event("attack"), event("claim_territory"), event("collect_resources"), event("move")]
        profile = build_dossier(history, "alice")
        assert profile.typical_play_style == PlayStyle.BALANCED
        assert profile.predictability_score == 23

    def test_predict_next_move(self):
        """Test the next category follows the player's habit."""
        history = [event("attack"), event("move"), event("attack"), event("move"), event("attack")]
        assert predict_next_move(history, "alice") == ("movement", 1.0)

    def test_predict_without_history(self):
        """Test prediction with nothing to go on."""
        assert predict_next_move([], "alice") == (None, 0.0)
