"""Tests for victory condition checking."""

from pirate_battle.engine.victory import (
    FLEET,
    LAST_STANDING,
    RESOURCES,
    TERRITORY,
    check_victory,
    fleet_share,
    territory_share,
)
from pirate_battle.models.resources import Resources
from pirate_battle.models.ship import ShipType
from pirate_battle.models.tile import TerrainKind
from tests.helpers.builders import duel, make_player, make_ship, make_state, water_map, with_terrain

ISLANDS = [(x, 5) for x in range(10)]


def _island_map():
    return with_terrain(water_map(), TerrainKind.ISLAND, *ISLANDS)


def _fleet(owner: str, x: int):
    return [make_ship(owner, ShipType.SLOOP, (x, 0)), make_ship(owner, ShipType.FRIGATE, (x, 1))]


def test_no_victory_at_start():
    """Test that an even opening has no winner."""
    assert check_victory(duel()) is None


def test_territory_victory():
    """Test that 60% of claimable tiles wins."""
    alice = make_player("alice", _fleet("alice", 0), controlled_territories=set(ISLANDS[:6]))
    bob = make_player("bob", _fleet("bob", 9))
    state = make_state(alice, bob, game_map=_island_map())

    assert territory_share(alice, state) == 0.6
    assert check_victory(state).condition == TERRITORY
    assert check_victory(state).winner == "alice"


def test_territory_below_threshold():
    """Test that 50% is not enough."""
    alice = make_player("alice", _fleet("alice", 0), controlled_territories=set(ISLANDS[:5]))
    state = make_state(alice, make_player("bob", _fleet("bob", 9)), game_map=_island_map())
    assert check_victory(state) is None


def test_territory_tie_goes_to_lower_index():
    """Test two players both at 60%: the earlier joiner wins."""
    alice = make_player("alice", _fleet("alice", 0), controlled_territories=set(ISLANDS[:6]))
    bob = make_player("bob", _fleet("bob", 9), controlled_territories=set(ISLANDS[4:]))
    state = make_state(alice, bob, game_map=_island_map())

    victory = check_victory(state)

    assert victory.winner == "alice"
    assert victory.condition == TERRITORY


def test_territory_beats_resources():
    """Test territory is checked before resources in the same assessment."""
    alice = make_player("alice", _fleet("alice", 0), resources=Resources(gold=20000))
    bob = make_player("bob", _fleet("bob", 9), controlled_territories=set(ISLANDS[:6]))
    state = make_state(alice, bob, game_map=_island_map())

    victory = check_victory(state)

    assert victory.winner == "bob"
    assert victory.condition == TERRITORY


def test_fleet_victory():
    """Test 80% of living attack + defense wins."""
    alice = make_player(
        "alice",
        _fleet("alice", 0) + [make_ship("alice", ShipType.FLAGSHIP, (2, 2))],
    )
    bob = make_player("bob", [make_ship("bob", ShipType.SLOOP, (9, 9))])
    state = make_state(alice, bob)

    # (30 + 65 + 140) / (235 + 30)
    assert fleet_share(alice, state) > 0.8
    assert check_victory(state).condition == FLEET


def test_destroyed_ships_do_not_count():
    """Test fleet power only counts living ships."""
    alice = make_player("alice", _fleet("alice", 0))
    bob = make_player(
        "bob",
        [
            make_ship("bob", ShipType.SLOOP, (9, 9), health=0),
            make_ship("bob", ShipType.FRIGATE, (8, 9)),
        ],
    )
    state = make_state(alice, bob)
    assert fleet_share(bob, state) == 65 / (95 + 65)


def test_resource_victory():
    """Test a weighted resource value of 15,000 wins."""
    alice = make_player("alice", _fleet("alice", 0), resources=Resources(gold=10000, rum=500))
    state = make_state(alice, make_player("bob", _fleet("bob", 9)))
    victory = check_victory(state)
    assert victory.winner == "alice"
    assert victory.condition == RESOURCES


def test_last_standing():
    """Test one active player left wins when nothing else applies."""
    alice = make_player("alice", _fleet("alice", 0))
    bob = make_player("bob", _fleet("bob", 9), active=False)
    victory = check_victory(make_state(alice, bob))
    assert victory.winner == "alice"
    assert victory.condition == LAST_STANDING


def test_inactive_player_cannot_win():
    """Test that a resigned player's territory does not count."""
    alice = make_player("alice", _fleet("alice", 0), controlled_territories=set(ISLANDS[:6]), active=False)
    bob = make_player("bob", _fleet("bob", 9))
    victory = check_victory(make_state(alice, bob, game_map=_island_map()))
    assert victory.winner == "bob"
    assert victory.condition == LAST_STANDING
