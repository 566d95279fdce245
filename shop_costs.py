import math

from game_config import ShopConfig

DEFAULT_SHOP = ShopConfig()


def escalating_cost(curve, purchases):
    """floor(base * (1 + pct/100) ** purchases)"""
    return int(math.floor(curve.base_cost * (1 + curve.increase_percent / 100) ** purchases))


def calculate_wild_card_cost(wild_card_count, shop=DEFAULT_SHOP):
    return escalating_cost(shop.wild_card, wild_card_count)


def calculate_single_dead_card_removal_cost(removal_count, shop=DEFAULT_SHOP):
    return escalating_cost(shop.single_dead_card_removal, removal_count)


def calculate_all_dead_cards_removal_cost(removal_count, dead_card_count, shop=DEFAULT_SHOP):
    # every card is priced at the current single-removal rate
    return calculate_single_dead_card_removal_cost(removal_count, shop) * dead_card_count


def calculate_parallel_hands_bundle_cost(bundle_size, shop=DEFAULT_SHOP):
    return bundle_size * shop.base_price_per_hand


def calculate_devils_deal_chance_cost(purchases, shop=DEFAULT_SHOP):
    return escalating_cost(shop.devils_deal_chance, purchases)


def calculate_devils_deal_cost_reduction_cost(purchases, shop=DEFAULT_SHOP):
    return escalating_cost(shop.devils_deal_cost_reduction, purchases)


def calculate_extra_card_in_hand_cost(purchases, shop=DEFAULT_SHOP):
    return escalating_cost(shop.extra_card_in_hand, purchases)


def can_purchase(curve, purchases):
    return curve.max_count is None or purchases < curve.max_count
