"""Intent resolution: the single mutation entry point of the engine.

Each call to ``apply_intent`` runs these steps in order:
1. Turn ownership (always first, nothing else is checked on failure)
2. Game status (completed, still waiting)
3. Action budget for action intents
4. Intent-specific validation and mutation on a private copy
5. Speed-bonus bookkeeping
6. Elimination of fleetless players
7. Victory assessment

A failing intent leaves the caller's state untouched, so resubmitting it
against the same state always fails the same way.
"""

import copy
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from ..models.game import GameEvent, GameState, GameStatus
from ..models.intent import (
    ActivateShield,
    Attack,
    BuildShip,
    ClaimTerritory,
    CollectResources,
    EndTurn,
    Intent,
    IntentKind,
    Move,
    Resign,
    ScanCoordinate,
    UseAbility,
)
from ..models.player import Player
from ..models.resources import Resources
from ..models.ship import Ship
from ..models.tile import TerrainKind
from ..utils.constants import (
    ACTIONS_PER_TURN,
    EXTRA_ACTION_BONUS,
    MAX_SHIPS_PER_PLAYER,
    RANGE_DIAGONAL_ALLOWANCE,
    SHIELD_DURATION,
    SPEED_BONUS_TIERS,
)
from ..utils.distance import euclidean_distance
from .errors import EngineError, ErrorType, Result, insufficient
from .ships import (
    apply_damage,
    can_move,
    can_use_ability,
    compute_damage,
    create_ship,
    effective_stats,
    tick_cooldown,
    tick_effects,
    use_ability,
)
from .territory import (
    active_bonuses,
    claim,
    collection_yield,
    combined_effects,
    roll_location_event,
    ship_cost,
)
from .victory import check_victory
from .weather import roll_weather

logger = logging.getLogger(__name__)


def speed_bonus(decision_time_ms: int) -> int:
    """Score awarded for a decision of the given duration.

    Examples:
        >>> speed_bonus(4200)
        100
        >>> speed_bonus(12000)
        25
        >>> speed_bonus(20000)
        0
    """
    elapsed = max(0, decision_time_ms)
    for limit, bonus in SPEED_BONUS_TIERS:
        if elapsed <= limit:
            return bonus
    return 0


def nearest_enemy_distance(state: GameState, owner: str, position) -> float | None:
    distances = [
        euclidean_distance(position, s.position) for s in state.living_ships() if s.owner != owner
    ]
    return min(distances) if distances else None


class TurnResolver:
    """Validates and applies one player intent at a time.

    Each intent kind has its own handler. Handlers work on a deep copy of
    the incoming state, raise EngineError on a rule violation, and return the
    events they produced.
    """

    def __init__(self):
        self._handlers: dict[IntentKind, Callable[[GameState, Player, Any], list[GameEvent]]] = {
            IntentKind.MOVE: self._apply_move,
            IntentKind.ATTACK: self._apply_attack,
            IntentKind.CLAIM_TERRITORY: self._apply_claim,
            IntentKind.COLLECT_RESOURCES: self._apply_collect,
            IntentKind.BUILD_SHIP: self._apply_build,
            IntentKind.USE_ABILITY: self._apply_ability,
            IntentKind.SCAN_COORDINATE: self._apply_scan,
            IntentKind.END_TURN: self._apply_end_turn,
            IntentKind.ACTIVATE_SHIELD: self._apply_shield,
            IntentKind.RESIGN: self._apply_resign,
        }

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    def apply(self, state: GameState, player_id: str, intent: Intent) -> Result[GameState]:
        """Apply one intent.

        Args:
            state: Current snapshot (never modified)
            player_id: Identity of the acting player
            intent: Requested action

        Returns:
            Result with the new snapshot and its events, or the violated rule
        """
        try:
            self._check_turn(state, player_id)
            self._check_status(state)

            working = copy.deepcopy(state)
            player = working.player(player_id)
            if intent.consumes_action and player.actions_remaining <= 0:
                raise EngineError(
                    ErrorType.NO_ACTIONS_REMAINING,
                    f"{player_id} has no actions left this turn",
                    player_id=player_id,
                )

            events = self._handlers[intent.kind](working, player, intent)
        except EngineError as error:
            logger.debug(f"Rejected {intent.kind.value} from {player_id}: {error.message}")
            return Result.failure(error)

        if intent.consumes_action:
            player.actions_remaining -= 1
        if intent.decision_time_ms is not None:
            self._record_decision_time(player, intent.decision_time_ms)
            if events:
                events[0].data["decision_time_ms"] = intent.decision_time_ms

        events.extend(self._process_eliminations(working))
        events.extend(self._process_victory(working))

        working.events.extend(events)
        logger.debug(f"Applied {intent.kind.value} from {player_id} on turn {state.turn}")
        return Result.success(working, events)

    # =========================================================================
    # GATE CHECKS
    # =========================================================================

    def _check_turn(self, state: GameState, player_id: str) -> None:
        current = state.current_player
        if current is None or current.id != player_id:
            raise EngineError(
                ErrorType.NOT_YOUR_TURN,
                f"It is not {player_id}'s turn",
                player_id=player_id,
                current_player=current.id if current else None,
            )

    def _check_status(self, state: GameState) -> None:
        if state.status == GameStatus.COMPLETED:
            raise EngineError(
                ErrorType.GAME_ALREADY_COMPLETED,
                f"Game is already completed (winner: {state.winner})",
                winner=state.winner,
            )
        if state.status == GameStatus.WAITING:
            raise EngineError(
                ErrorType.GAME_NOT_ACTIVE,
                f"Game is waiting for players ({len(state.players)}/{state.max_players})",
                players=len(state.players),
            )

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _event(self, state: GameState, player: Player, kind: str, **data) -> GameEvent:
        return GameEvent(
            turn=state.turn, player_id=player.id, kind=kind, data=data, shielded=player.shielded
        )

    def _own_ship(self, player: Player, ship_id: str) -> Ship:
        ship = player.find_ship(ship_id)
        if ship is None:
            raise EngineError(
                ErrorType.SHIP_NOT_FOUND,
                f"{player.id} has no ship {ship_id}",
                ship_id=ship_id,
            )
        if not ship.alive:
            raise EngineError(ErrorType.DESTROYED, f"Ship {ship_id} is destroyed", ship_id=ship_id)
        return ship

    def _require_in_bounds(self, state: GameState, coordinate) -> None:
        if not state.game_map.in_bounds(coordinate):
            raise EngineError(
                ErrorType.INVALID_COORDINATE,
                f"Coordinate {coordinate} is off the map",
                coordinate=list(coordinate),
                size=state.game_map.size,
            )

    def _damage_ship(self, state: GameState, ship_id: str, damage: int) -> Ship:
        target = state.find_ship(ship_id)
        updated = apply_damage(target, damage)
        state.player(target.owner).replace_ship(updated)
        return updated

    def _destruction_event(self, state: GameState, player: Player, ship: Ship) -> GameEvent:
        logger.info(f"Ship {ship.id} ({ship.owner}) destroyed on turn {state.turn}")
        return self._event(state, player, "ship_destroyed", ship_id=ship.id, owner=ship.owner)

    def _record_decision_time(self, player: Player, decision_time_ms: int) -> None:
        bonus = speed_bonus(decision_time_ms)
        player.score += bonus
        player.speed_bonus_accumulated += bonus
        total = player.average_decision_time_ms * player.timed_decisions + decision_time_ms
        player.timed_decisions += 1
        player.average_decision_time_ms = total / player.timed_decisions

    def _actions_for(self, state: GameState, player: Player) -> int:
        effects = combined_effects(active_bonuses(player, state.game_map))
        return ACTIONS_PER_TURN + (EXTRA_ACTION_BONUS if effects.extra_action else 0)

    def _advance_turn(self, state: GameState) -> None:
        """Hand the turn to the next active player, if any."""
        count = len(state.players)
        index = state.current_player_index
        for step in range(1, count + 1):
            candidate = (index + step) % count
            if state.players[candidate].active:
                state.current_player_index = candidate
                break
        nxt = state.players[state.current_player_index]
        nxt.actions_remaining = self._actions_for(state, nxt)
        nxt.collected_this_turn = False

    # =========================================================================
    # INTENT HANDLERS
    # =========================================================================

    def _apply_move(self, state: GameState, player: Player, intent: Move) -> list[GameEvent]:
        ship = self._own_ship(player, intent.ship_id)
        destination = intent.destination
        self._require_in_bounds(state, destination)

        occupant = state.ship_at(destination)
        if occupant is not None and occupant.id != ship.id:
            raise EngineError(
                ErrorType.POSITION_OCCUPIED,
                f"{destination} is occupied by {occupant.id}",
                coordinate=list(destination),
                occupant=occupant.id,
            )
        if not effective_stats(ship).can_move:
            raise EngineError(ErrorType.SHIP_IMMOBILE, f"Ship {ship.id} cannot move", ship_id=ship.id)

        modifier = state.weather.movement_modifier
        distance = euclidean_distance(ship.position, destination)
        if not can_move(ship, destination, modifier):
            raise EngineError(
                ErrorType.OUT_OF_RANGE,
                f"{destination} is {distance:.1f} away; {ship.id} moves {ship.speed * modifier:.1f}",
                ship_id=ship.id,
                distance=round(distance, 2),
                max_distance=ship.speed * modifier,
            )

        before = nearest_enemy_distance(state, player.id, ship.position)
        after = nearest_enemy_distance(state, player.id, destination)
        moved = replace(ship, position=destination, last_action_turn=state.turn)

        hazard_damage = 0
        gained = lost = Resources()
        kind = state.game_map.tile_at(destination).kind
        location = roll_location_event(kind, state.rng)
        if location is not None:
            if location.damage:
                hazard_damage = location.damage
                moved = apply_damage(moved, location.damage)
            gained = location.gained
            # A loss the player cannot cover is skipped rather than partly paid
            if not location.lost.is_empty() and player.resources.can_afford(location.lost):
                lost = location.lost
            player.resources = player.resources.plus(gained).minus(lost)
        player.replace_ship(moved)

        events = [
            self._event(
                state,
                player,
                IntentKind.MOVE.value,
                ship_id=ship.id,
                origin=list(ship.position),
                destination=list(destination),
                distance=round(distance, 2),
                health_ratio=round(ship.health_ratio, 3),
                retreat=before is not None and after > before,
                hazard=kind.value if kind.hazardous else None,
                hazard_damage=hazard_damage,
                location_event=location.name if location else None,
                resources_gained=gained.as_dict(),
                resources_lost=lost.as_dict(),
            )
        ]
        if not moved.alive:
            events.append(self._destruction_event(state, player, moved))
        return events

    def _apply_attack(self, state: GameState, player: Player, intent: Attack) -> list[GameEvent]:
        attacker = self._own_ship(player, intent.ship_id)
        target = state.find_ship(intent.target_id)
        if target is None or not target.alive or target.owner == player.id:
            raise EngineError(
                ErrorType.TARGET_NOT_FOUND,
                f"Target {intent.target_id} is not a living enemy ship",
                target_id=intent.target_id,
            )

        distance = euclidean_distance(attacker.position, target.position)
        max_distance = attacker.attack_range * RANGE_DIAGONAL_ALLOWANCE
        if distance > max_distance + 1e-9:
            raise EngineError(
                ErrorType.TARGET_OUT_OF_RANGE,
                f"Target {target.id} is {distance:.1f} away (max {max_distance:.1f})",
                target_id=target.id,
                distance=round(distance, 2),
                max_distance=max_distance,
            )

        damage = compute_damage(attacker, target, state.weather.damage_modifier)
        damaged = self._damage_ship(state, target.id, damage)
        player.replace_ship(replace(attacker, last_action_turn=state.turn))

        events = [
            self._event(
                state,
                player,
                IntentKind.ATTACK.value,
                ship_id=attacker.id,
                target_id=target.id,
                target_owner=target.owner,
                damage=damage,
                distance=round(distance, 2),
                destroyed=not damaged.alive,
                health_ratio=round(attacker.health_ratio, 3),
            )
        ]
        if not damaged.alive:
            events.append(self._destruction_event(state, player, damaged))
        return events

    def _apply_claim(self, state: GameState, player: Player, intent: ClaimTerritory) -> list[GameEvent]:
        ship = self._own_ship(player, intent.ship_id)
        result = claim(state.game_map, intent.coordinate, ship, player.id)
        if not result.ok:
            raise result.error

        coordinate = intent.coordinate
        previous_owner = state.game_map.tile_at(coordinate).owner
        state.game_map = result.value
        player.controlled_territories.add(coordinate)
        if previous_owner is not None and previous_owner != player.id:
            loser = state.player(previous_owner)
            if loser is not None:
                loser.controlled_territories.discard(coordinate)

        return [
            self._event(
                state,
                player,
                IntentKind.CLAIM_TERRITORY.value,
                ship_id=ship.id,
                coordinate=list(coordinate),
                terrain=state.game_map.tile_at(coordinate).kind.value,
                previous_owner=previous_owner,
                health_ratio=round(ship.health_ratio, 3),
            )
        ]

    def _apply_collect(self, state: GameState, player: Player, intent: CollectResources) -> list[GameEvent]:
        if player.collected_this_turn:
            raise EngineError(
                ErrorType.RESOURCES_ALREADY_COLLECTED,
                f"{player.id} already collected resources this turn",
                player_id=player.id,
            )
        gained = collection_yield(player, state.game_map, state.weather.resource_modifier)
        player.resources = player.resources.plus(gained)
        player.collected_this_turn = True
        return [
            self._event(
                state,
                player,
                IntentKind.COLLECT_RESOURCES.value,
                gained=gained.as_dict(),
                territories=len(player.controlled_territories),
            )
        ]

    def _apply_build(self, state: GameState, player: Player, intent: BuildShip) -> list[GameEvent]:
        coordinate = intent.coordinate
        self._require_in_bounds(state, coordinate)

        ports = [
            c
            for c in state.game_map.neighbours(coordinate)
            if state.game_map.tile_at(c).kind == TerrainKind.PORT
            and state.game_map.tile_at(c).owner == player.id
        ]
        if not ports:
            raise EngineError(
                ErrorType.NO_CONTROLLED_PORT,
                f"{player.id} controls no port next to {coordinate}",
                coordinate=list(coordinate),
            )

        occupant = state.ship_at(coordinate)
        if occupant is not None:
            raise EngineError(
                ErrorType.POSITION_OCCUPIED,
                f"{coordinate} is occupied by {occupant.id}",
                coordinate=list(coordinate),
                occupant=occupant.id,
            )

        if len(player.living_ships()) >= MAX_SHIPS_PER_PLAYER:
            raise EngineError(
                ErrorType.FLEET_SIZE_LIMIT,
                f"{player.id} already has {MAX_SHIPS_PER_PLAYER} ships",
                limit=MAX_SHIPS_PER_PLAYER,
            )

        cost = ship_cost(intent.ship_type, player, state.game_map)
        short = player.resources.shortfall(cost)
        if short is not None:
            raise insufficient(*short)

        player.resources = player.resources.minus(cost)
        player.ships_built += 1
        ship = create_ship(player.id, intent.ship_type, coordinate, player.ships_built)
        player.ships.append(ship)

        return [
            self._event(
                state,
                player,
                IntentKind.BUILD_SHIP.value,
                ship_id=ship.id,
                ship_type=intent.ship_type.value,
                coordinate=list(coordinate),
                port=list(ports[0]),
                cost=cost.as_dict(),
            )
        ]

    def _apply_ability(self, state: GameState, player: Player, intent: UseAbility) -> list[GameEvent]:
        ship = self._own_ship(player, intent.ship_id)
        usable = can_use_ability(ship, player.resources)
        if not usable.ok:
            raise usable.error

        outcome = use_ability(ship, state, intent.target_id)
        if outcome.error is not None:
            raise outcome.error

        player.resources = player.resources.minus(ship.ability.cost)
        player.replace_ship(replace(outcome.ship, last_action_turn=state.turn))
        player.revealed_tiles.update(outcome.revealed)

        hits = []
        destroyed = []
        for hit in outcome.hits:
            damaged = self._damage_ship(state, hit.target_id, hit.damage)
            hits.append({"target_id": hit.target_id, "damage": hit.damage, "destroyed": not damaged.alive})
            if not damaged.alive:
                destroyed.append(damaged)

        spotted = [
            s.id for s in state.living_ships() if s.owner != player.id and s.position in set(outcome.revealed)
        ]
        events = [
            self._event(
                state,
                player,
                IntentKind.USE_ABILITY.value,
                ship_id=ship.id,
                ability=ship.ability.name,
                category=ship.ability.category.value,
                target_id=intent.target_id,
                hits=hits,
                revealed=len(outcome.revealed),
                spotted=spotted,
                message=outcome.message,
                cost=ship.ability.cost.as_dict(),
                health_ratio=round(ship.health_ratio, 3),
            )
        ]
        events.extend(self._destruction_event(state, player, s) for s in destroyed)
        return events

    def _apply_scan(self, state: GameState, player: Player, intent: ScanCoordinate) -> list[GameEvent]:
        coordinate = intent.coordinate
        self._require_in_bounds(state, coordinate)
        if player.scan_charges <= 0:
            raise EngineError(
                ErrorType.NO_SCAN_CHARGES_REMAINING,
                f"{player.id} has no scan charges left",
                player_id=player.id,
            )
        if coordinate in player.scanned_tiles:
            raise EngineError(
                ErrorType.COORDINATE_ALREADY_SCANNED,
                f"{coordinate} was already scanned",
                coordinate=list(coordinate),
            )

        player.scan_charges -= 1
        player.scanned_tiles[coordinate] = state.game_map.tile_at(coordinate).kind
        # The terrain stays out of the public log; only the scanner learns it
        return [
            self._event(
                state,
                player,
                IntentKind.SCAN_COORDINATE.value,
                coordinate=list(coordinate),
                charges_left=player.scan_charges,
            )
        ]

    def _apply_end_turn(self, state: GameState, player: Player, intent: EndTurn) -> list[GameEvent]:
        for ship in player.living_ships():
            player.replace_ship(tick_effects(tick_cooldown(ship)))
        if player.shield_turns_remaining > 0:
            player.shield_turns_remaining -= 1

        trickle = combined_effects(active_bonuses(player, state.game_map)).trickle
        if trickle:
            player.resources = replace(
                player.resources,
                gold=player.resources.gold + trickle,
                supplies=player.resources.supplies + trickle,
            )

        ended_turn = state.turn
        self._advance_turn(state)
        state.turn += 1

        events = [
            GameEvent(
                turn=ended_turn,
                player_id=player.id,
                kind=IntentKind.END_TURN.value,
                data={"trickle": trickle, "next_player": state.current_player.id},
                shielded=player.shielded,
            )
        ]

        previous = state.weather
        state.weather, changed = roll_weather(state.weather, state.rng)
        if changed:
            events.append(
                GameEvent(
                    turn=state.turn,
                    player_id=None,
                    kind="weather",
                    data={
                        "from": previous.kind.value,
                        "to": state.weather.kind.value,
                        "turns": state.weather.turns_remaining,
                    },
                )
            )
        return events

    def _apply_shield(self, state: GameState, player: Player, intent: ActivateShield) -> list[GameEvent]:
        if player.shielded:
            raise EngineError(
                ErrorType.SHIELD_ALREADY_ACTIVE,
                f"Ghost fleet already active for {player.shield_turns_remaining} turn(s)",
                turns_remaining=player.shield_turns_remaining,
            )
        if player.shield_charges <= 0:
            raise EngineError(
                ErrorType.NO_SHIELD_CHARGES_REMAINING,
                f"{player.id} has no shield charges left",
                player_id=player.id,
            )
        player.shield_charges -= 1
        player.shield_turns_remaining = SHIELD_DURATION
        return [
            self._event(
                state,
                player,
                IntentKind.ACTIVATE_SHIELD.value,
                charges_left=player.shield_charges,
                duration=SHIELD_DURATION,
            )
        ]

    def _apply_resign(self, state: GameState, player: Player, intent: Resign) -> list[GameEvent]:
        player.active = False
        logger.info(f"{player.id} resigned on turn {state.turn}")
        events = [self._event(state, player, IntentKind.RESIGN.value)]
        if state.active_players():
            self._advance_turn(state)
        return events

    # =========================================================================
    # POST-INTENT PHASES
    # =========================================================================

    def _process_eliminations(self, state: GameState) -> list[GameEvent]:
        """Deactivate players who have lost every ship."""
        events = []
        for player in state.players:
            if player.active and player.ships and not player.living_ships():
                player.active = False
                logger.info(f"{player.id} eliminated on turn {state.turn}")
                events.append(self._event(state, player, "eliminated"))
                if state.current_player.id == player.id and state.active_players():
                    self._advance_turn(state)
        return events

    def _process_victory(self, state: GameState) -> list[GameEvent]:
        victory = check_victory(state)
        if victory is None:
            return []
        state.status = GameStatus.COMPLETED
        state.winner = victory.winner
        state.victory_condition = victory.condition
        logger.info(f"{victory.winner} wins by {victory.condition} on turn {state.turn}")
        return [
            GameEvent(
                turn=state.turn,
                player_id=victory.winner,
                kind="victory",
                data={"condition": victory.condition},
            )
        ]


_resolver = TurnResolver()


def apply_intent(state: GameState, player_id: str, intent: Intent) -> Result[GameState]:
    """Apply one player intent to a state.

    The single mutation entry point. The input state is never modified.

    Args:
        state: Current snapshot
        player_id: Acting player
        intent: Requested action

    Returns:
        Result holding the new snapshot and the events appended, or the
        EngineError naming the violated rule
    """
    return _resolver.apply(state, player_id, intent)
