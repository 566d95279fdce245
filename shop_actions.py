"""Shop purchases applied to the run state.

Every action returns an updated copy of the state. A purchase the player
cannot make returns the state it was given, unchanged.
"""
import logging
from dataclasses import replace

import numpy as np

from game_config import DEFAULT_GAME_MODE
from poker_cards import ACE, Card, next_uid, ranks, suits
from shop_costs import (
    calculate_all_dead_cards_removal_cost,
    calculate_devils_deal_chance_cost,
    calculate_devils_deal_cost_reduction_cost,
    calculate_parallel_hands_bundle_cost,
    calculate_single_dead_card_removal_cost,
    calculate_wild_card_cost,
    can_purchase,
)

logger = logging.getLogger(__name__)


def _refuse(state, item, reason):
    logger.debug("cannot buy %s: %s", item, reason)
    return state


def _pay(state, item, cost, **changes):
    if state.credits < cost:
        return _refuse(state, item, f"costs {cost}, have {state.credits}")
    logger.info("bought %s for %d credits", item, cost)
    return replace(state, credits=state.credits - cost, **changes)


def add_dead_card(state, mode=DEFAULT_GAME_MODE, rng=None):
    """Shuffle a random dead card into the deck in exchange for the dead card reward."""
    mods = state.deck_modifications
    if len(mods.dead_cards) >= mode.dead_card_limit:
        return _refuse(state, "dead-card", "dead card limit reached")
    if rng is None:
        rng = np.random.default_rng()
    suit = suits[int(rng.integers(len(suits)))]
    rank = ranks[int(rng.integers(len(ranks)))]
    card = Card(suit, rank, uid=next_uid("dead"), is_dead=True)
    logger.info("added dead card %s", card)
    return replace(
        state,
        credits=state.credits + mode.shop.dead_card_credit_reward,
        deck_modifications=replace(mods, dead_cards=mods.dead_cards + [card]),
    )


def remove_single_dead_card(state, mode=DEFAULT_GAME_MODE):
    mods = state.deck_modifications
    if not mods.dead_cards:
        return _refuse(state, "single-dead-card-removal", "no dead cards")
    cost = calculate_single_dead_card_removal_cost(mods.removal_count, mode.shop)
    card = mods.dead_cards[0]
    return _pay(
        state,
        "single-dead-card-removal",
        cost,
        deck_modifications=replace(
            mods,
            dead_cards=mods.dead_cards[1:],
            removed_cards=mods.removed_cards + [card],
            removal_count=mods.removal_count + 1,
        ),
    )


def remove_all_dead_cards(state, mode=DEFAULT_GAME_MODE):
    # each card counts as one removal towards later prices
    mods = state.deck_modifications
    if not mods.dead_cards:
        return _refuse(state, "all-dead-cards-removal", "no dead cards")
    cost = calculate_all_dead_cards_removal_cost(mods.removal_count, len(mods.dead_cards), mode.shop)
    return _pay(
        state,
        "all-dead-cards-removal",
        cost,
        deck_modifications=replace(
            mods,
            dead_cards=[],
            removed_cards=mods.removed_cards + mods.dead_cards,
            removal_count=mods.removal_count + len(mods.dead_cards),
        ),
    )


def add_wild_card(state, mode=DEFAULT_GAME_MODE):
    mods = state.deck_modifications
    owned = len(mods.wild_cards)
    if not can_purchase(mode.shop.wild_card, owned):
        return _refuse(state, "wild-card", "wild card limit reached")
    card = Card(Card.HEART, ACE, uid=next_uid("wild"), is_wild=True)
    return _pay(
        state,
        "wild-card",
        calculate_wild_card_cost(owned, mode.shop),
        deck_modifications=replace(mods, wild_cards=mods.wild_cards + [card]),
    )


def purchase_extra_draw(state, mode=DEFAULT_GAME_MODE):
    if state.extra_draw_purchased:
        return _refuse(state, "extra-draw", "already owned")
    return _pay(state, "extra-draw", mode.shop.extra_draw_cost, extra_draw_purchased=True)


def add_parallel_hands_bundle(state, bundle_size, mode=DEFAULT_GAME_MODE):
    if bundle_size not in mode.shop.bundles:
        return _refuse(state, f"parallel-hands-bundle-{bundle_size}", "not on sale")
    return _pay(
        state,
        f"parallel-hands-bundle-{bundle_size}",
        calculate_parallel_hands_bundle_cost(bundle_size, mode.shop),
        selected_hand_count=state.selected_hand_count + bundle_size,
    )


def purchase_devils_deal_chance(state, mode=DEFAULT_GAME_MODE):
    bought = state.devils_deal_chance_purchases
    if bought >= mode.devils_deal.max_chance_purchases:
        return _refuse(state, "devils-deal-chance", "maximum purchases reached")
    return _pay(
        state,
        "devils-deal-chance",
        calculate_devils_deal_chance_cost(bought, mode.shop),
        devils_deal_chance_purchases=bought + 1,
    )


def purchase_devils_deal_cost_reduction(state, mode=DEFAULT_GAME_MODE):
    bought = state.devils_deal_cost_reduction_purchases
    if bought >= mode.devils_deal.max_cost_reduction_purchases:
        return _refuse(state, "devils-deal-cost-reduction", "maximum purchases reached")
    return _pay(
        state,
        "devils-deal-cost-reduction",
        calculate_devils_deal_cost_reduction_cost(bought, mode.shop),
        devils_deal_cost_reduction_purchases=bought + 1,
    )
