"""Tests for the AI decision engine."""

import pytest

from pirate_battle.ai import (
    ADMIRAL,
    NOVICE,
    PIRATE,
    AIDecisionEngine,
    OptionKind,
    decide,
    enumerate_options,
    get_profile,
    score_breakdown,
)
from pirate_battle.models.intent import ClaimTerritory, EndTurn
from pirate_battle.models.ship import ShipType
from pirate_battle.models.tile import TerrainKind
from pirate_battle.utils import GameRNG
from pirate_battle.utils.serialization import serialize_state
from tests.helpers.builders import duel, make_ship, started_game, water_map, with_terrain


def _port_next_door():
    """Alice's fleet beside an unowned port; Bob far away."""
    return duel(game_map=with_terrain(water_map(), TerrainKind.PORT, (1, 1)))


class TestProfiles:
    def test_lookup_is_case_insensitive(self):
        """Test preset lookup by name."""
        assert get_profile("Admiral") is ADMIRAL

    def test_unknown_profile(self):
        """Test an unknown preset name."""
        with pytest.raises(ValueError, match="Unknown difficulty"):
            get_profile("kraken")

    def test_tiers_increase(self):
        """Test higher tiers are more aggressive and look further ahead."""
        assert NOVICE.aggressiveness < PIRATE.aggressiveness < ADMIRAL.aggressiveness
        assert NOVICE.lookahead < PIRATE.lookahead < ADMIRAL.lookahead


class TestOptions:
    def test_pass_is_always_last(self):
        """Test enumeration ends with Pass."""
        options = enumerate_options(duel(), "alice")
        assert options[-1].kind == OptionKind.PASS
        assert len(options) > 1

    def test_only_pass_when_not_your_turn(self):
        """Test a waiting player only gets Pass."""
        options = enumerate_options(duel(), "bob")
        assert [o.kind for o in options] == [OptionKind.PASS]

    def test_claim_options_near_port(self):
        """Test both ships can claim the adjacent port."""
        options = enumerate_options(_port_next_door(), "alice")
        claims = [o for o in options if o.kind == OptionKind.CLAIM]
        assert {o.ship_id for o in claims} == {"alice_sloop_1", "alice_frigate_1"}
        assert all(o.coordinate == (1, 1) for o in claims)

    def test_no_collect_option_after_collecting(self):
        """Test Collect is offered once per turn."""
        state = duel(game_map=with_terrain(water_map(), TerrainKind.PORT, (5, 5), owner="alice"))
        state.player("alice").controlled_territories = {(5, 5)}
        assert any(o.kind == OptionKind.COLLECT for o in enumerate_options(state, "alice"))

        state.player("alice").collected_this_turn = True
        assert not any(o.kind == OptionKind.COLLECT for o in enumerate_options(state, "alice"))

    def test_moves_avoid_occupied_tiles(self):
        """Test move options never target a ship's tile."""
        options = enumerate_options(duel(), "alice")
        targets = {o.coordinate for o in options if o.kind == OptionKind.MOVE}
        assert (1, 0) not in targets
        assert (0, 0) not in targets


class TestDecisions:
    def test_claims_adjacent_port(self):
        """Test the AI grabs an uncontested port next to its fleet."""
        decision, explanation = AIDecisionEngine().evaluate(_port_next_door(), "alice", NOVICE)
        assert decision.chosen.kind == OptionKind.CLAIM
        assert isinstance(decision.intent, ClaimTerritory)
        assert decision.intent.coordinate == (1, 1)
        assert explanation.summary.startswith("[novice]")

    def test_admiral_attacks_weak_ship(self):
        """Test an aggressive profile finishes off a damaged enemy in range."""
        state = duel(
            alice_ships=[make_ship("alice", ShipType.FRIGATE, (5, 5))],
            bob_ships=[
                make_ship("bob", ShipType.SLOOP, (6, 5), health=10),
                make_ship("bob", ShipType.FRIGATE, (9, 9)),
            ],
        )
        decision, _ = AIDecisionEngine().evaluate(state, "alice", ADMIRAL)
        assert decision.chosen.kind in (OptionKind.ATTACK, OptionKind.ABILITY)

    def test_deterministic(self):
        """Test same state and profile give the same decision."""
        state = started_game(seed=11)
        assert decide(state, "alice", PIRATE) == decide(state, "alice", PIRATE)

    def test_decide_does_not_mutate(self):
        """Test the AI is read-only."""
        state = started_game(seed=5)
        before = serialize_state(state, viewer="alice")
        decide(state, "alice", ADMIRAL)
        assert serialize_state(state, viewer="alice") == before
        assert state.rng.random() == started_game(seed=5).rng.random()

    def test_not_your_turn_passes(self):
        """Test deciding for a waiting player returns EndTurn."""
        assert decide(duel(), "bob", PIRATE) == EndTurn()

    def test_ranked_best_first(self):
        """Test ranked options are sorted by score."""
        decision, _ = AIDecisionEngine().evaluate(started_game(), "alice", PIRATE)
        scores = [s.score for s in decision.ranked]
        assert scores == sorted(scores, reverse=True)
        assert decision.score == scores[0]


class TestScoring:
    def test_jitter_bounded_by_aggressiveness(self):
        """Test jitter stays within (1 - aggressiveness) x 20."""
        state = duel()
        option = enumerate_options(state, "alice")[-1]
        rng = GameRNG(1)
        for profile in (NOVICE, PIRATE, ADMIRAL):
            for _ in range(20):
                jitter = score_breakdown(option, state, "alice", profile, rng).jitter
                assert 0.0 <= jitter <= (1 - profile.aggressiveness) * 20 + 1e-9

    def test_hazard_moves_penalized(self):
        """Test moving into a whirlpool scores below moving into open water."""
        state = duel(game_map=with_terrain(water_map(), TerrainKind.WHIRLPOOL, (0, 1)))
        moves = {
            o.coordinate: o
            for o in enumerate_options(state, "alice")
            if o.kind == OptionKind.MOVE and o.ship_id == "alice_sloop_1"
        }
        hazard = score_breakdown(moves[(0, 1)], state, "alice", NOVICE).total
        water = score_breakdown(moves[(1, 1)], state, "alice", NOVICE).total
        assert hazard < water

    def test_exposure_ignored_by_novice(self):
        """Test novice does not weigh counter-exposure."""
        state = duel(
            alice_ships=[make_ship("alice", ShipType.SLOOP, (5, 5))],
            bob_ships=[make_ship("bob", ShipType.FLAGSHIP, (9, 9))],
        )
        move = next(
            o for o in enumerate_options(state, "alice") if o.kind == OptionKind.MOVE and o.coordinate == (6, 6)
        )
        assert score_breakdown(move, state, "alice", NOVICE).exposure == 0.0
        assert score_breakdown(move, state, "alice", ADMIRAL).exposure > 0.0
