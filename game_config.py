"""Game mode configuration.

Every core function takes the piece of configuration it needs as an argument;
``DEFAULT_GAME_MODE`` only supplies default values.
"""
import math
from dataclasses import dataclass, field, fields, is_dataclass, replace
from types import MappingProxyType

from poker_cards import JACK


def _frozen(mapping):
    return MappingProxyType(dict(mapping))


def round_credits(amount):
    """Round a credit amount half up, so 2.5 pays 3."""
    return int(math.floor(amount + 0.5))


@dataclass(frozen=True)
class StreakConfig:
    enabled: bool = True
    base_threshold: int = 5
    threshold_increment: float = 10
    exponential_growth: float = 1.5
    base_multiplier: float = 1.5
    multiplier_increment: float = 0.5


@dataclass(frozen=True)
class Threshold:
    enabled: bool = True
    value: float = 0


@dataclass(frozen=True)
class WinPercentThreshold:
    enabled: bool = False
    start_percent: float = 25
    increment_per_round: float = 5
    max_percent: float = 105


@dataclass(frozen=True)
class FailureConditionsConfig:
    minimum_bet_multiplier: Threshold = Threshold(True, 2.0)
    minimum_credit_efficiency: Threshold = Threshold(True, 100)
    minimum_winning_hands_per_round: Threshold = Threshold(True, 20)
    minimum_win_percent: WinPercentThreshold = WinPercentThreshold(True, 25, 5, 105)


@dataclass(frozen=True)
class EndlessModeConfig:
    start_round: int = 30
    failure_conditions: FailureConditionsConfig = FailureConditionsConfig()


@dataclass(frozen=True)
class DevilsDealConfig:
    base_chance: float = 15
    base_cost_percent: float = 300
    chance_increase_per_purchase: float = 20
    max_chance_purchases: int = 3
    cost_reduction_per_purchase: float = 6
    max_cost_reduction_purchases: int = 5


@dataclass(frozen=True)
class CostCurve:
    base_cost: int
    increase_percent: float = 0
    max_count: int = None


@dataclass(frozen=True)
class ShopConfig:
    dead_card_credit_reward: int = 2500
    wild_card: CostCurve = CostCurve(5000, 100, 3)
    single_dead_card_removal: CostCurve = CostCurve(5000, 10)
    base_price_per_hand: int = 10
    bundles: tuple = (5, 10, 25, 50)
    extra_draw_cost: int = 10000
    extra_card_in_hand: CostCurve = CostCurve(10000, 125, 3)
    devils_deal_chance: CostCurve = CostCurve(5000, 50)
    devils_deal_cost_reduction: CostCurve = CostCurve(10000, 25)


@dataclass(frozen=True)
class ShopSlot:
    max_rarity: int
    rarity_chances: tuple = None


DEFAULT_REWARDS = _frozen({
    "royal-flush": 250,
    "five-of-a-kind": 100,
    "straight-flush": 50,
    "four-of-a-kind": 25,
    "full-house": 9,
    "flush": 6,
    "straight": 4,
    "three-of-a-kind": 3,
    "two-pair": 2,
    "one-pair": 1,
    "high-card": 0,
})

DEFAULT_SHOP_WEIGHTS = _frozen({
    "parallel-hands-bundle-5": 20,
    "parallel-hands-bundle-10": 15,
    "parallel-hands-bundle-25": 8,
    "parallel-hands-bundle-50": 4,
    "dead-card": 20,
    "wild-card": 5,
    "extra-draw": 5,
    "remove-single-dead-card": 10,
    "remove-all-dead-cards": 4,
    "devils-deal-chance": 8,
    "devils-deal-cost-reduction": 8,
})

# rarity 1 = common .. 4 = rare
DEFAULT_SHOP_SLOTS = (
    ShopSlot(1),
    ShopSlot(2, (0.6, 0.4)),
    ShopSlot(3, (0.2, 0.5, 0.3)),
    ShopSlot(4, (0.1, 0.5, 0.3, 0.1)),
)

DEFAULT_SHOP_ITEMS = _frozen({
    "dead-card": 1,
    "single-dead-card-removal": 2,
    "all-dead-cards-removal": 3,
    "parallel-hands-bundle-5": 1,
    "parallel-hands-bundle-10": 1,
    "parallel-hands-bundle-25": 2,
    "parallel-hands-bundle-50": 3,
    "wild-card": 3,
    "extra-draw": 3,
    "extra-card-in-hand": 3,
    "devils-deal-chance": 2,
    "devils-deal-cost-reduction": 2,
})


@dataclass(frozen=True)
class GameMode:
    display_name: str = "Normal Game"
    starting_credits: int = 5000
    starting_bet: int = 2
    starting_hand_count: int = 10
    minimum_bet_increase_percent: float = 95
    minimum_bet_increase_interval: int = 5
    shop_option_count: int = 4
    shop_frequency: int = 2
    minimum_pair_rank: int = JACK
    dead_card_limit: int = 10
    streak: StreakConfig = StreakConfig()
    devils_deal: DevilsDealConfig = DevilsDealConfig()
    endless_mode: EndlessModeConfig = EndlessModeConfig()
    shop: ShopConfig = ShopConfig()
    rewards: MappingProxyType = field(default_factory=lambda: DEFAULT_REWARDS)
    shop_weights: MappingProxyType = field(default_factory=lambda: DEFAULT_SHOP_WEIGHTS)
    shop_slots: tuple = DEFAULT_SHOP_SLOTS
    shop_items: MappingProxyType = field(default_factory=lambda: DEFAULT_SHOP_ITEMS)


DEFAULT_GAME_MODE = GameMode()

GAME_MODES = {
    "normalGame": {},
}


def merge_game_mode(base, overrides):
    """Deep-merge a nested dict of overrides into a copy of ``base``.

    Nested dataclasses merge field by field; mappings, tuples and scalars in
    ``overrides`` replace the default outright. Unknown keys raise KeyError.
    """
    if not overrides:
        return base
    names = {f.name for f in fields(base)}
    changes = {}
    for key, value in overrides.items():
        if key not in names:
            raise KeyError(f"Unknown {type(base).__name__} setting: {key}")
        current = getattr(base, key)
        if is_dataclass(current) and isinstance(value, dict):
            changes[key] = merge_game_mode(current, value)
        elif isinstance(current, MappingProxyType) and isinstance(value, dict):
            changes[key] = _frozen(value)
        else:
            changes[key] = value
    return replace(base, **changes)


def get_game_mode(mode_id="normalGame"):
    return merge_game_mode(DEFAULT_GAME_MODE, GAME_MODES.get(mode_id, {}))
