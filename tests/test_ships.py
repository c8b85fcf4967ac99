"""Tests for ship stats, damage, effects and abilities."""

from dataclasses import replace

from pirate_battle.engine.errors import ErrorType
from pirate_battle.engine.ships import (
    apply_damage,
    can_move,
    can_use_ability,
    compute_damage,
    create_ship,
    effective_stats,
    start_cooldown,
    tick_cooldown,
    tick_effects,
    use_ability,
)
from pirate_battle.models.resources import Resources
from pirate_battle.models.ship import Effect, EffectKind, ShipType
from tests.helpers.builders import duel, make_ship


class TestCreateShip:
    def test_ids_and_stats(self):
        """Test ship ids and base stats per hull."""
        ship = create_ship("alice", ShipType.FRIGATE, (1, 0), 1)
        assert ship.id == "alice_frigate_1"
        assert (ship.max_health, ship.attack, ship.defense, ship.speed) == (200, 40, 25, 2)
        assert ship.ability.name == "Broadside"
        assert ship.ability.ready

    def test_position_stored_as_tuple(self):
        """Test list positions become tuples."""
        assert create_ship("bob", ShipType.SLOOP, [3, 4], 2).position == (3, 4)


class TestDamage:
    def test_damage_floor_is_one(self):
        """Test a weak attacker still deals 1 damage."""
        sloop = make_ship("alice", ShipType.SLOOP, (0, 0))
        flagship = make_ship("bob", ShipType.FLAGSHIP, (1, 0))
        assert compute_damage(sloop, flagship) == 1

    def test_damage_with_weather(self):
        """Test the weather damage modifier is applied and floored."""
        frigate = make_ship("alice", ShipType.FRIGATE, (0, 0))
        sloop = make_ship("bob", ShipType.SLOOP, (1, 0))
        assert compute_damage(frigate, sloop) == 30
        assert compute_damage(frigate, sloop, 1.3) == 39
        assert compute_damage(frigate, sloop, 0.8) == 24

    def test_defense_buff_reduces_damage(self):
        """Test that Fortress Mode's defense buff counts."""
        flagship = make_ship("alice", ShipType.FLAGSHIP, (0, 0))
        galleon = make_ship("bob", ShipType.GALLEON, (1, 0))
        buffed = replace(galleon, effects=(Effect(EffectKind.DEFENSE_BUFF, 0.5, 2, galleon.id),))
        assert effective_stats(buffed).defense == 60
        assert compute_damage(flagship, buffed) == 20

    def test_destroyed_ship_drops_effects_and_cooldown(self):
        """Test that health floors at zero and state is cleared on destruction."""
        galleon = make_ship("bob", ShipType.GALLEON, (1, 0))
        fortified = use_ability(galleon, duel()).ship
        sunk = apply_damage(fortified, 1000)
        assert sunk.health == 0
        assert not sunk.alive
        assert sunk.effects == ()
        assert sunk.ability.ready

    def test_partial_damage_keeps_effects(self):
        """Test that surviving ships keep their effects."""
        galleon = make_ship("bob", ShipType.GALLEON, (1, 0))
        fortified = use_ability(galleon, duel()).ship
        hit = apply_damage(fortified, 50)
        assert hit.health == 300
        assert hit.has_effect(EffectKind.DEFENSE_BUFF)


class TestMovementAndTicks:
    def test_can_move_within_speed(self):
        """Test Euclidean movement against speed and weather."""
        sloop = make_ship("alice", ShipType.SLOOP, (0, 0))
        assert can_move(sloop, (2, 1))
        assert can_move(sloop, (3, 0))
        assert not can_move(sloop, (3, 1))
        # Storm halves speed: 1.5
        assert not can_move(sloop, (2, 0), 0.5)

    def test_immobile_ship_cannot_move(self):
        """Test the immobile effect blocks movement."""
        sloop = make_ship("alice", ShipType.SLOOP, (0, 0))
        anchored = replace(sloop, effects=(Effect(EffectKind.IMMOBILE, 1.0, 2, sloop.id),))
        assert not can_move(anchored, (1, 0))

    def test_cooldown_ticks_to_ready(self):
        """Test cooldown countdown and the ready flag."""
        frigate = start_cooldown(make_ship("alice", ShipType.FRIGATE, (0, 0)))
        assert frigate.ability.remaining_cooldown == 3
        assert not frigate.ability.ready
        for _ in range(3):
            frigate = tick_cooldown(frigate)
        assert frigate.ability.remaining_cooldown == 0
        assert frigate.ability.ready
        assert tick_cooldown(frigate).ability.remaining_cooldown == 0

    def test_effects_expire(self):
        """Test that effects are removed when their duration runs out."""
        sloop = make_ship("alice", ShipType.SLOOP, (0, 0))
        buffed = replace(sloop, effects=(Effect(EffectKind.ATTACK_BUFF, 0.2, 2, sloop.id),))
        once = tick_effects(buffed)
        assert once.effects[0].duration == 1
        assert tick_effects(once).effects == ()


class TestCanUseAbility:
    def test_ready_and_affordable(self):
        """Test a fresh ability with enough resources."""
        sloop = make_ship("alice", ShipType.SLOOP, (0, 0))
        assert can_use_ability(sloop, Resources(gold=50)).ok

    def test_destroyed(self):
        """Test destroyed ships cannot use abilities."""
        sloop = make_ship("alice", ShipType.SLOOP, (0, 0), health=0)
        assert can_use_ability(sloop, Resources(gold=50)).error_type == ErrorType.DESTROYED

    def test_on_cooldown(self):
        """Test cooldown blocks activation."""
        sloop = start_cooldown(make_ship("alice", ShipType.SLOOP, (0, 0)))
        result = can_use_ability(sloop, Resources(gold=50))
        assert result.error_type == ErrorType.ON_COOLDOWN
        assert result.error.details["remaining_cooldown"] == 2

    def test_insufficient_resources(self):
        """Test the structured shortfall details."""
        sloop = make_ship("alice", ShipType.SLOOP, (0, 0))
        result = can_use_ability(sloop, Resources(gold=10))
        assert result.error_type == ErrorType.INSUFFICIENT_RESOURCES
        assert result.error.details == {"resource": "gold", "required": 50, "available": 10, "needed": 40}


class TestAbilities:
    def test_broadside_hits_two_enemies(self):
        """Test Broadside hits enemies at distance 2 and 2.8 and starts a full cooldown."""
        frigate = make_ship("alice", ShipType.FRIGATE, (5, 5))
        state = duel(
            alice_ships=[frigate],
            bob_ships=[
                make_ship("bob", ShipType.SLOOP, (7, 5)),
                make_ship("bob", ShipType.FRIGATE, (7, 7)),
            ],
        )

        outcome = use_ability(frigate, state)

        assert {h.target_id for h in outcome.hits} == {"bob_sloop_1", "bob_frigate_1"}
        assert outcome.ship.ability.remaining_cooldown == 3
        assert outcome.error is None

    def test_broadside_prefers_closest_targets(self):
        """Test target selection is capped at two, nearest first."""
        frigate = make_ship("alice", ShipType.FRIGATE, (5, 5))
        state = duel(
            alice_ships=[frigate],
            bob_ships=[
                make_ship("bob", ShipType.SLOOP, (5, 8), serial=1),
                make_ship("bob", ShipType.SLOOP, (6, 5), serial=2),
                make_ship("bob", ShipType.SLOOP, (5, 7), serial=3),
            ],
        )
        outcome = use_ability(frigate, state)
        assert [h.target_id for h in outcome.hits] == ["bob_sloop_2", "bob_sloop_3"]

    def test_broadside_breaks_distance_ties_on_health(self):
        """Test the weaker of two equally distant ships is hit after the nearest one."""
        frigate = make_ship("alice", ShipType.FRIGATE, (5, 5))
        state = duel(
            alice_ships=[frigate],
            bob_ships=[
                make_ship("bob", ShipType.SLOOP, (7, 5), serial=1),
                make_ship("bob", ShipType.SLOOP, (5, 7), serial=2, health=40),
                make_ship("bob", ShipType.SLOOP, (6, 5), serial=3),
            ],
        )
        outcome = use_ability(frigate, state)
        assert [h.target_id for h in outcome.hits] == ["bob_sloop_3", "bob_sloop_2"]

    def test_broadside_without_targets_still_cools_down(self):
        """Test a wasted Broadside keeps its cooldown."""
        frigate = make_ship("alice", ShipType.FRIGATE, (0, 0))
        outcome = use_ability(frigate, duel(alice_ships=[frigate]))
        assert outcome.hits == ()
        assert outcome.error is None
        assert outcome.ship.ability.remaining_cooldown == 3

    def test_volley_needs_target(self):
        """Test Devastating Volley without a target."""
        flagship = make_ship("alice", ShipType.FLAGSHIP, (5, 5))
        outcome = use_ability(flagship, duel(alice_ships=[flagship]))
        assert outcome.error.error_type == ErrorType.NO_TARGET
        assert outcome.ship.ability.remaining_cooldown == 4

    def test_volley_target_not_found(self):
        """Test Devastating Volley against an unknown ship."""
        flagship = make_ship("alice", ShipType.FLAGSHIP, (5, 5))
        outcome = use_ability(flagship, duel(alice_ships=[flagship]), "ghost_ship")
        assert outcome.error.error_type == ErrorType.TARGET_NOT_FOUND

    def test_volley_out_of_range(self):
        """Test the 1.5x range allowance: range 2 reaches 3.0."""
        flagship = make_ship("alice", ShipType.FLAGSHIP, (5, 5))
        target = make_ship("bob", ShipType.SLOOP, (5, 9))
        outcome = use_ability(flagship, duel(alice_ships=[flagship], bob_ships=[target]), target.id)
        assert outcome.error.error_type == ErrorType.TARGET_OUT_OF_RANGE

    def test_volley_double_damage(self):
        """Test Devastating Volley deals twice the normal damage."""
        flagship = make_ship("alice", ShipType.FLAGSHIP, (5, 5))
        target = make_ship("bob", ShipType.GALLEON, (7, 6))
        outcome = use_ability(flagship, duel(alice_ships=[flagship], bob_ships=[target]), target.id)
        assert outcome.hits[0].damage == 2 * (80 - 40)

    def test_fortress_mode(self):
        """Test Fortress Mode buffs defense and anchors the galleon."""
        galleon = make_ship("alice", ShipType.GALLEON, (5, 5))
        outcome = use_ability(galleon, duel(alice_ships=[galleon]))
        stats = effective_stats(outcome.ship)
        assert stats.defense == 60
        assert not stats.can_move
        assert {e.kind for e in outcome.effects} == {EffectKind.DEFENSE_BUFF, EffectKind.IMMOBILE}

    def test_spy_glass_reveals_area(self):
        """Test Spy Glass reveals a 5x5 area clipped to the map."""
        sloop = make_ship("alice", ShipType.SLOOP, (5, 5))
        assert len(use_ability(sloop, duel(alice_ships=[sloop])).revealed) == 25
        corner = make_ship("alice", ShipType.SLOOP, (0, 0))
        assert len(use_ability(corner, duel(alice_ships=[corner])).revealed) == 9
