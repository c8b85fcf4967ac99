"""Weather state machine, rolled once per EndTurn."""

import logging

from ..models.game import Weather, WeatherKind
from ..utils import GameRNG
from ..utils.constants import WEATHER_EARLY_CHANGE_PROB, WEATHER_TABLE

logger = logging.getLogger(__name__)


def weather_for(kind: WeatherKind) -> Weather:
    """Fresh weather of a kind with its full duration."""
    return Weather(kind=kind, turns_remaining=WEATHER_TABLE[kind.value][0])


def roll_weather(weather: Weather, rng: GameRNG) -> tuple[Weather, bool]:
    """Advance the weather by one turn.

    The current weather counts down. When it runs out, or on an early-change
    roll, a new kind is drawn; the draw may repeat the current kind.

    Args:
        weather: Current weather
        rng: Game RNG (advanced by this call)

    Returns:
        (new weather, True if a new kind was drawn)
    """
    remaining = weather.turns_remaining - 1
    early = rng.chance(WEATHER_EARLY_CHANGE_PROB)
    if remaining > 0 and not early:
        return Weather(kind=weather.kind, turns_remaining=remaining), False

    kind = rng.choice(list(WeatherKind))
    logger.debug(f"Weather changes from {weather.kind.value} to {kind.value}")
    return weather_for(kind), True
