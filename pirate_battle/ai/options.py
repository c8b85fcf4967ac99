"""Enumeration of legal AI options for the player to act."""

import math
from dataclasses import dataclass
from enum import Enum

from ..engine.ships import can_move, can_use_ability
from ..engine.territory import ship_cost
from ..models.game import GameState, GameStatus
from ..models.intent import (
    Attack,
    BuildShip,
    ClaimTerritory,
    CollectResources,
    EndTurn,
    Intent,
    Move,
    UseAbility,
)
from ..models.player import Player
from ..models.ship import Ship, ShipType
from ..models.tile import TerrainKind
from ..utils.constants import MAX_SHIPS_PER_PLAYER, RANGE_DIAGONAL_ALLOWANCE
from ..utils.distance import Coordinate, euclidean_distance


class OptionKind(Enum):
    CLAIM = "claim"
    ATTACK = "attack"
    ABILITY = "ability"
    MOVE = "move"
    COLLECT = "collect"
    BUILD = "build"
    PASS = "pass"


@dataclass(frozen=True)
class Option:
    """One candidate action and the intent that carries it out.

    Attributes:
        kind: Option category
        intent: Intent to submit if chosen
        ship_id: Acting ship, None for player-level options
        coordinate: Tile targeted (claim, move, build)
        target_id: Ship targeted (attack, single-target ability)
    """

    kind: OptionKind
    intent: Intent
    ship_id: str | None = None
    coordinate: Coordinate | None = None
    target_id: str | None = None

    def describe(self) -> str:
        parts = [self.kind.value]
        if self.ship_id:
            parts.append(self.ship_id)
        if self.target_id:
            parts.append(f"-> {self.target_id}")
        elif self.coordinate is not None:
            parts.append(f"-> {self.coordinate}")
        return " ".join(parts)


PASS_OPTION = Option(kind=OptionKind.PASS, intent=EndTurn())


def _enemies(state: GameState, player_id: str) -> list[Ship]:
    return sorted((s for s in state.living_ships() if s.owner != player_id), key=lambda s: s.id)


def _claim_options(state: GameState, player: Player, ship: Ship) -> list[Option]:
    options = []
    game_map = state.game_map
    for coordinate in [ship.position, *game_map.neighbours(ship.position)]:
        tile = game_map.tile_at(coordinate)
        if tile.kind.claimable and tile.owner != player.id:
            options.append(
                Option(
                    kind=OptionKind.CLAIM,
                    intent=ClaimTerritory(ship.id, coordinate),
                    ship_id=ship.id,
                    coordinate=coordinate,
                )
            )
    return options


def _attack_options(state: GameState, player: Player, ship: Ship) -> list[Option]:
    reach = ship.attack_range * RANGE_DIAGONAL_ALLOWANCE
    return [
        Option(
            kind=OptionKind.ATTACK,
            intent=Attack(ship.id, enemy.id),
            ship_id=ship.id,
            target_id=enemy.id,
        )
        for enemy in _enemies(state, player.id)
        if euclidean_distance(ship.position, enemy.position) <= reach + 1e-9
    ]


def _ability_options(state: GameState, player: Player, ship: Ship) -> list[Option]:
    if not can_use_ability(ship, player.resources).ok:
        return []
    ability = ship.ability
    if not ability.single_target:
        return [Option(kind=OptionKind.ABILITY, intent=UseAbility(ship.id), ship_id=ship.id)]
    reach = ability.range * RANGE_DIAGONAL_ALLOWANCE
    return [
        Option(
            kind=OptionKind.ABILITY,
            intent=UseAbility(ship.id, enemy.id),
            ship_id=ship.id,
            target_id=enemy.id,
        )
        for enemy in _enemies(state, player.id)
        if euclidean_distance(ship.position, enemy.position) <= reach + 1e-9
    ]


def _move_options(state: GameState, player: Player, ship: Ship) -> list[Option]:
    modifier = state.weather.movement_modifier
    radius = math.floor(ship.speed * modifier)
    occupied = {s.position for s in state.living_ships()}
    options = []
    x0, y0 = ship.position
    for y in range(y0 - radius, y0 + radius + 1):
        for x in range(x0 - radius, x0 + radius + 1):
            destination = (x, y)
            if destination == ship.position or destination in occupied:
                continue
            if not state.game_map.in_bounds(destination):
                continue
            if can_move(ship, destination, modifier):
                options.append(
                    Option(
                        kind=OptionKind.MOVE,
                        intent=Move(ship.id, destination),
                        ship_id=ship.id,
                        coordinate=destination,
                    )
                )
    return options


def _build_options(state: GameState, player: Player) -> list[Option]:
    if len(player.living_ships()) >= MAX_SHIPS_PER_PLAYER:
        return []
    game_map = state.game_map
    occupied = {s.position for s in state.living_ships()}
    ports = sorted(
        c
        for c in player.controlled_territories
        if game_map.in_bounds(c) and game_map.tile_at(c).kind == TerrainKind.PORT
        and game_map.tile_at(c).owner == player.id
    )
    spawn = next(
        (c for port in ports for c in game_map.neighbours(port) if c not in occupied),
        None,
    )
    if spawn is None:
        return []
    return [
        Option(kind=OptionKind.BUILD, intent=BuildShip(ship_type, spawn), coordinate=spawn)
        for ship_type in ShipType
        if player.resources.can_afford(ship_cost(ship_type, player, game_map))
    ]


def enumerate_options(state: GameState, player_id: str) -> list[Option]:
    """List every legal option for a player, in deterministic order.

    Ships are visited in id order; per ship the order is claims, attacks,
    abilities, moves. Collect and build follow, and Pass is always last, so
    the list is never empty.

    Args:
        state: Read-only snapshot
        player_id: Player to enumerate for

    Returns:
        Options ending with Pass
    """
    player = state.player(player_id)
    if (
        player is None
        or not player.active
        or state.status != GameStatus.ACTIVE
        or state.current_player is None
        or state.current_player.id != player_id
        or player.actions_remaining <= 0
    ):
        return [PASS_OPTION]

    options: list[Option] = []
    for ship in sorted(player.living_ships(), key=lambda s: s.id):
        options.extend(_claim_options(state, player, ship))
        options.extend(_attack_options(state, player, ship))
        options.extend(_ability_options(state, player, ship))
        options.extend(_move_options(state, player, ship))

    if player.controlled_territories and not player.collected_this_turn:
        options.append(Option(kind=OptionKind.COLLECT, intent=CollectResources()))
    options.extend(_build_options(state, player))
    options.append(PASS_OPTION)
    return options
