#!/usr/bin/env python3
"""Pirate Battle - Main entry point.

Runs an AI-vs-AI match on a seeded map and prints the outcome together with
the leakage report and dossier for every captain.
"""

import argparse
import logging
import sys

from pirate_battle.ai import AIDecisionEngine, DifficultyProfile, get_profile
from pirate_battle.ai.difficulty import PROFILES
from pirate_battle.analysis import dossier, leakage_report
from pirate_battle.engine import apply_intent, initialize, join
from pirate_battle.models.game import GameState, GameStatus
from pirate_battle.models.intent import EndTurn
from pirate_battle.utils import MAX_PLAYERS, MIN_PLAYERS, RNG_SEED_DEFAULT

logger = logging.getLogger(__name__)

CAPTAIN_NAMES = ["blackbeard", "anne_bonny", "calico_jack", "red_legs"]


class MatchOrchestrator:
    """Drives a match between computer-controlled captains."""

    def __init__(self, state: GameState, profile: DifficultyProfile, max_turns: int = 100):
        """Initialize match orchestrator.

        Args:
            state: Game with every captain already seated
            profile: Difficulty preset used by every captain
            max_turns: Stop after this many turns if nobody has won
        """
        self.state = state
        self.profile = profile
        self.max_turns = max_turns
        self.engine = AIDecisionEngine()
        self.applied = 0
        self.rejected = 0

    def run(self) -> GameState:
        """Main match loop."""
        while self.state.status == GameStatus.ACTIVE and self.state.turn <= self.max_turns:
            self._play_one_intent()

        if self.state.winner:
            logger.info(
                f"{self.state.winner} wins by {self.state.victory_condition} on turn {self.state.turn}"
            )
        else:
            logger.info(f"No winner after {self.max_turns} turns")
        return self.state

    def _play_one_intent(self) -> None:
        """Ask the current captain for an intent and apply it.

        A rejected intent is followed by EndTurn so the match always advances.
        """
        player = self.state.current_player
        decision, explanation = self.engine.evaluate(self.state, player.id, self.profile)
        logger.debug(explanation.summary)

        result = apply_intent(self.state, player.id, decision.intent)
        if result.ok:
            self.state = result.value
            self.applied += 1
            return

        self.rejected += 1
        logger.warning(f"{player.id}: {decision.chosen.describe()} rejected ({result.error.message})")
        result = apply_intent(self.state, player.id, EndTurn())
        if not result.ok:
            raise RuntimeError(f"EndTurn rejected for {player.id}: {result.error.message}")
        self.state = result.value


def setup_match(seed: int, players: int) -> GameState:
    """Create a game and seat ``players`` captains.

    Raises:
        ValueError: If the player count is out of range
    """
    state = initialize(seed, max_players=players)
    for name in CAPTAIN_NAMES[:players]:
        result = join(state, name)
        if not result.ok:
            raise ValueError(f"Could not seat {name}: {result.error.message}")
        state = result.value
    return state


def print_summary(state: GameState) -> None:
    """Print the final standings with leakage and dossier per captain."""
    print("\n" + "=" * 60)
    print("Pirate Battle - Final Report")
    print("=" * 60)
    if state.winner:
        print(f"\nWinner: {state.winner} ({state.victory_condition}) on turn {state.turn}")
    else:
        print(f"\nNo winner after turn {state.turn - 1}")
    print(f"Weather: {state.weather.kind.value}")

    for player in state.players:
        report = leakage_report(state, player.id)
        profile = dossier(state.events, player.id)
        status = "active" if player.active else "eliminated"
        print(f"\n--- {player.id} ({status}) ---")
        print(
            f"  Ships: {len(player.living_ships())}  Territories: {len(player.controlled_territories)}"
            f"  Score: {player.score}"
        )
        print(f"  Resources: {player.resources.as_dict()}")
        print(f"  Leakage score: {report.score}{' (shielded)' if report.shielded else ''}")
        for pattern in report.detected_patterns:
            print(f"    - {pattern.description} ({pattern.confidence:.0%})")
        print(
            f"  Dossier: {profile.typical_play_style.value}, "
            f"predictability {profile.predictability_score}"
        )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Pirate Battle - AI vs AI naval strategy match",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # Two pirates, seed 42
  %(prog)s --players 4 --difficulty admiral # Four admirals
  %(prog)s --seed 7 --max-turns 30 --verbose
        """,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for map and weather (default: {RNG_SEED_DEFAULT})",
    )
    parser.add_argument(
        "--players",
        type=int,
        choices=range(MIN_PLAYERS, MAX_PLAYERS + 1),
        default=MIN_PLAYERS,
        help=f"Number of AI captains (default: {MIN_PLAYERS})",
    )
    parser.add_argument(
        "--difficulty",
        choices=sorted(PROFILES),
        default="pirate",
        help="AI difficulty preset (default: pirate)",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=100,
        help="Stop the match after this many turns (default: 100)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging, including every AI justification",
    )

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    print(f"Generating new map with seed {args.seed}...")
    state = setup_match(args.seed, args.players)
    orchestrator = MatchOrchestrator(state, get_profile(args.difficulty), max_turns=args.max_turns)
    final_state = orchestrator.run()
    print_summary(final_state)
    return 0


if __name__ == "__main__":
    sys.exit(main())
