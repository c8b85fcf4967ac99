"""Tests for territory claims, yields and tiered bonuses."""

from pirate_battle.engine.errors import ErrorType
from pirate_battle.engine.territory import (
    BONUSES,
    BonusTier,
    active_bonuses,
    claim,
    collection_yield,
    combined_effects,
    next_bonus_progress,
    roll_location_event,
    ship_cost,
    yield_of,
)
from pirate_battle.models.resources import Resources
from pirate_battle.models.ship import ShipType
from pirate_battle.models.tile import TerrainKind
from pirate_battle.utils import GameRNG
from tests.helpers.builders import make_player, make_ship, water_map, with_terrain


def _player_with(kind: TerrainKind, count: int):
    """Player controlling ``count`` tiles of one kind along row 5."""
    coordinates = [(x, 5) for x in range(count)]
    game_map = with_terrain(water_map(), kind, *coordinates, owner="alice")
    player = make_player("alice", controlled_territories=set(coordinates))
    return player, game_map


class TestClaim:
    def test_claim_adjacent_tile(self):
        """Test claiming a port from a diagonal neighbour."""
        game_map = with_terrain(water_map(), TerrainKind.PORT, (1, 1))
        ship = make_ship("alice", ShipType.SLOOP, (0, 0))

        result = claim(game_map, (1, 1), ship, "alice")

        assert result.ok
        assert result.value.tile_at((1, 1)).owner == "alice"
        assert game_map.tile_at((1, 1)).owner is None

    def test_claim_off_map(self):
        """Test that a coordinate outside the grid is rejected first."""
        ship = make_ship("alice", ShipType.SLOOP, (0, 0))
        result = claim(water_map(), (10, 0), ship, "alice")
        assert result.error_type == ErrorType.INVALID_COORDINATE

    def test_claim_water_not_claimable(self):
        """Test that open water cannot be claimed."""
        ship = make_ship("alice", ShipType.SLOOP, (0, 0))
        result = claim(water_map(), (1, 1), ship, "alice")
        assert result.error_type == ErrorType.NOT_CLAIMABLE

    def test_claim_too_far(self):
        """Test that the ship must be on or next to the tile."""
        game_map = with_terrain(water_map(), TerrainKind.ISLAND, (2, 2))
        ship = make_ship("alice", ShipType.SLOOP, (0, 0))
        result = claim(game_map, (2, 2), ship, "alice")
        assert result.error_type == ErrorType.OUT_OF_RANGE
        assert result.error.details["distance"] == 2

    def test_contested_claim_changes_owner(self):
        """Test that ownership is never locked."""
        game_map = with_terrain(water_map(), TerrainKind.TREASURE, (4, 4), owner="bob")
        ship = make_ship("alice", ShipType.SLOOP, (4, 4))
        result = claim(game_map, (4, 4), ship, "alice")
        assert result.value.tile_at((4, 4)).owner == "alice"


class TestYields:
    def test_yield_by_kind(self):
        """Test per-tile yields."""
        assert yield_of(TerrainKind.PORT) == Resources(gold=5, crew=2)
        assert yield_of(TerrainKind.ISLAND) == Resources(supplies=3)
        assert yield_of(TerrainKind.TREASURE) == Resources(gold=10)
        assert yield_of(TerrainKind.REEF).is_empty()

    def test_collection_with_harbor_master(self):
        """Test that two ports earn the bronze multiplier."""
        player, game_map = _player_with(TerrainKind.PORT, 2)
        gained = collection_yield(player, game_map)
        # 10 gold x1.25 = 12.5 -> 12, 4 crew x1.25 = 5
        assert gained.gold == 12
        assert gained.crew == 5

    def test_collection_applies_weather(self):
        """Test the weather resource modifier on top of bonuses."""
        player, game_map = _player_with(TerrainKind.PORT, 2)
        gained = collection_yield(player, game_map, resource_modifier=1.2)
        assert gained.gold == 15
        assert gained.crew == 6

    def test_collection_without_territory_is_empty(self):
        """Test collecting with nothing controlled."""
        assert collection_yield(make_player("alice"), water_map()).is_empty()


class TestBonuses:
    def test_threshold_awards_both_tiers(self):
        """Test that three ports qualify for bronze and silver, higher tier first."""
        player, game_map = _player_with(TerrainKind.PORT, 3)
        bonuses = active_bonuses(player, game_map)
        assert [b.key for b in bonuses] == ["trade_network", "port_starter"]
        assert bonuses[0].tier == BonusTier.SILVER

    def test_no_bonus_below_threshold(self):
        """Test that one island earns nothing."""
        player, game_map = _player_with(TerrainKind.ISLAND, 1)
        assert active_bonuses(player, game_map) == []

    def test_cost_reduction_is_capped(self):
        """Test the 50% cap on stacked ship cost reductions."""
        keys = {"trade_network", "naval_supremacy", "pirate_king"}
        effects = combined_effects([b for b in BONUSES if b.key in keys])
        assert effects.cost_reduction == 0.5
        assert effects.extra_action
        assert effects.trickle == 20

    def test_multipliers_compound(self):
        """Test that multipliers from several bonuses multiply."""
        keys = {"port_starter", "trade_network"}
        effects = combined_effects([b for b in BONUSES if b.key in keys])
        assert effects.multipliers["gold"] == 1.25 * 1.5

    def test_ship_cost_discount(self):
        """Test Trade Network's 15% discount on a sloop."""
        player, game_map = _player_with(TerrainKind.PORT, 3)
        cost = ship_cost(ShipType.SLOOP, player, game_map)
        assert cost == Resources(gold=425, crew=8, cannons=4, supplies=17)

    def test_next_bonus_progress(self):
        """Test the closest unearned bonus for a single port."""
        player, game_map = _player_with(TerrainKind.PORT, 1)
        progress = next_bonus_progress(player, game_map)
        assert progress.bonus.key == "port_starter"
        assert progress.fraction == 0.5
        assert progress.remaining_text == "1 port"


class TestLocationEvents:
    def test_same_seed_same_events(self):
        """Test location rolls replay from the seed."""
        kinds = [TerrainKind.TREASURE, TerrainKind.STORM, TerrainKind.ISLAND, TerrainKind.WATER] * 5
        first, second = GameRNG(11), GameRNG(11)
        assert [roll_location_event(k, first) for k in kinds] == [roll_location_event(k, second) for k in kinds]

    def test_one_draw_per_roll(self):
        """Test every terrain consumes exactly one draw, even with no events."""
        rng, reference = GameRNG(5), GameRNG(5)
        roll_location_event(TerrainKind.REEF, rng)
        roll_location_event(TerrainKind.WATER, rng)
        reference.random()
        reference.random()
        assert rng.random() == reference.random()

    def test_storm_always_has_an_outcome(self):
        """Test a storm tile either damages the hull or costs supplies."""
        rng = GameRNG(3)
        for _ in range(50):
            event = roll_location_event(TerrainKind.STORM, rng)
            assert event is not None
            assert (event.damage, event.lost) in ((15, Resources()), (0, Resources(supplies=10)))
