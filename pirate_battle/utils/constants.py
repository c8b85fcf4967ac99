"""Game configuration constants.

Tables are keyed by the string value of the matching enum (``ShipType.SLOOP.value``
is ``"sloop"``) so this module stays free of model imports.
"""

# Map
MAP_SIZE = 10  # Square grid, 10x10 tiles

# Players
MIN_PLAYERS = 2  # Game becomes active once this many have joined
MAX_PLAYERS = 4
MAX_SHIPS_PER_PLAYER = 6  # Living ships only

# Per-player pools
INITIAL_SCAN_CHARGES = 3  # Never replenished
INITIAL_SHIELD_CHARGES = 3  # Ghost fleet activations
SHIELD_DURATION = 3  # Turns hidden per activation

# Action economy
ACTIONS_PER_TURN = 3
EXTRA_ACTION_BONUS = 1  # Granted by Treasure Hunter, Pirate King, Master Strategist

# Canonical resource order (also the order of shortfall checks)
RESOURCE_NAMES = ("gold", "crew", "cannons", "supplies", "wood", "rum")

STARTING_RESOURCES = {
    "gold": 1000,
    "crew": 50,
    "cannons": 10,
    "supplies": 100,
    "wood": 0,
    "rum": 0,
}

# Weighted aggregate used for the resource victory
RESOURCE_VALUE_WEIGHTS = {
    "gold": 1,
    "crew": 5,
    "cannons": 10,
    "supplies": 2,
    "wood": 2,
    "rum": 10,
}

# Ships: (max_health, attack, defense, speed, attack_range)
SHIP_STATS = {
    "sloop": (100, 20, 10, 3, 1),
    "frigate": (200, 40, 25, 2, 2),
    "galleon": (350, 60, 40, 1, 2),
    "flagship": (500, 80, 60, 1, 3),
}

SHIP_COSTS = {
    "sloop": {"gold": 500, "crew": 10, "cannons": 5, "supplies": 20},
    "frigate": {"gold": 1200, "crew": 25, "cannons": 15, "supplies": 40},
    "galleon": {"gold": 2500, "crew": 50, "cannons": 30, "supplies": 80},
    "flagship": {"gold": 5000, "crew": 100, "cannons": 60, "supplies": 150},
}

RANGE_DIAGONAL_ALLOWANCE = 1.5  # Attack and single-target ability range multiplier

# Abilities, one per ship type
ABILITIES = {
    "sloop": {
        "name": "Spy Glass",
        "category": "utility",
        "cooldown": 2,
        "cost": {"gold": 50},
        "range": 2,
        "max_targets": 0,
    },
    "frigate": {
        "name": "Broadside",
        "category": "offensive",
        "cooldown": 3,
        "cost": {"cannons": 2},
        "range": 3,
        "max_targets": 2,
    },
    "galleon": {
        "name": "Fortress Mode",
        "category": "defensive",
        "cooldown": 3,
        "cost": {"supplies": 30},
        "range": 0,
        "max_targets": 0,
    },
    "flagship": {
        "name": "Devastating Volley",
        "category": "offensive",
        "cooldown": 4,
        "cost": {"cannons": 4, "supplies": 20},
        "range": 2,
        "max_targets": 1,
    },
}

FORTRESS_DEFENSE_BUFF = 0.5
FORTRESS_DURATION = 2
VOLLEY_DAMAGE_MULTIPLIER = 2

# Territory
CLAIMABLE_KINDS = ("island", "port", "treasure")
HAZARD_KINDS = ("storm", "reef", "whirlpool")

TERRITORY_YIELDS = {
    "island": {"supplies": 3},
    "port": {"gold": 5, "crew": 2},
    "treasure": {"gold": 10},
}

# Location events on entering a tile, one roll per move.
# Each entry: (name, cumulative roll threshold, resource change, hull damage)
LOCATION_EVENTS = {
    "water": (("floating_supplies", 0.05, {"supplies": 10}, 0),),
    "island": (
        ("native_tribute", 0.10, {"gold": 50}, 0),
        ("jungle_ruins", 0.25, {"supplies": 15}, 0),
    ),
    "port": (("crew_joined", 0.15, {"crew": 5}, 0),),
    "treasure": (("hidden_loot", 0.40, {"gold": 100}, 0),),
    "storm": (
        ("storm_damage", 0.60, {}, 15),
        ("rigging_damaged", 1.0, {"supplies": -10}, 0),
    ),
    "reef": (("reef_damage", 0.50, {}, 20),),
    "whirlpool": (("maelstrom", 0.80, {}, 30),),
}

BONUS_TIER_ORDER = ("bronze", "silver", "gold", "legendary")
MAX_SHIP_COST_REDUCTION = 0.5

# key: (name, tier, requirements, multipliers, cost_reduction, extra_action, trickle)
TERRITORY_BONUSES = {
    "port_starter": (
        "Harbor Master",
        "bronze",
        {"port": 2},
        {"gold": 1.25, "crew": 1.25},
        0.0,
        False,
        0,
    ),
    "island_starter": (
        "Island Chain",
        "bronze",
        {"island": 2},
        {"supplies": 1.3},
        0.0,
        False,
        0,
    ),
    "trade_network": (
        "Trade Network",
        "silver",
        {"port": 3},
        {"gold": 1.5, "crew": 1.5},
        0.15,
        False,
        0,
    ),
    "supply_chain": (
        "Supply Chain",
        "silver",
        {"island": 3},
        {"supplies": 1.5},
        0.0,
        False,
        5,
    ),
    "treasure_hunter": (
        "Treasure Hunter",
        "silver",
        {"treasure": 2},
        {"gold": 2.0},
        0.0,
        True,
        0,
    ),
    "naval_supremacy": (
        "Naval Supremacy",
        "gold",
        {"port": 4},
        {"gold": 2.0, "crew": 2.0},
        0.30,
        False,
        0,
    ),
    "resource_empire": (
        "Resource Empire",
        "gold",
        {"island": 5},
        {"supplies": 2.0},
        0.20,
        False,
        10,
    ),
    "balanced_fleet": (
        "Balanced Fleet",
        "gold",
        {"port": 1, "island": 2},
        {"gold": 1.3, "supplies": 1.3},
        0.20,
        False,
        0,
    ),
    "pirate_king": (
        "Pirate King",
        "legendary",
        {"treasure": 3},
        {"gold": 3.0},
        0.40,
        True,
        20,
    ),
    "master_strategist": (
        "Master Strategist",
        "legendary",
        {"port": 2, "island": 3, "treasure": 1},
        {"gold": 2.5, "supplies": 2.5, "crew": 2.0},
        0.35,
        True,
        0,
    ),
}

# Weather: (duration, movement, damage, resource, visibility_reduced)
WEATHER_TABLE = {
    "calm": (2, 1.0, 1.0, 1.2, False),
    "trade_winds": (3, 1.5, 1.0, 1.1, False),
    "storm": (2, 0.5, 1.3, 0.8, False),
    "fog": (3, 0.7, 0.8, 1.0, True),
}
INITIAL_WEATHER = "calm"
WEATHER_EARLY_CHANGE_PROB = 0.15

# Victory
TERRITORY_VICTORY_SHARE = 0.6  # Of claimable tiles on the map
FLEET_VICTORY_SHARE = 0.8  # Of total living attack + defense
RESOURCE_VICTORY_VALUE = 15000

# Speed bonus: (max decision time in ms, inclusive; score awarded)
SPEED_BONUS_TIERS = (
    (5000, 100),
    (10000, 50),
    (15000, 25),
)

# AI scoring
CLAIM_VALUES = {"treasure": 100, "port": 90, "island": 75}
CONTESTED_CLAIM_BONUS = 25
KILL_BONUS = 50
HAZARD_PENALTY = 40
JITTER_SCALE = 20.0

# Leakage
VISIBLE_RESOURCE_RADIUS = 3  # Manhattan distance around a player's ships
PATTERN_WINDOW = 10  # Most recent actions considered for ratio patterns
PATTERN_RATIO_THRESHOLD = 0.6

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
