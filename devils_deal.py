import logging
from dataclasses import dataclass

import numpy as np

import hand_evaluator as HandEvaluator
from game_config import DevilsDealConfig, round_credits
from poker_cards import JACK

logger = logging.getLogger(__name__)

TOP_CARDS = 3


@dataclass(frozen=True)
class DevilsDealOffer:
    card: object
    cost: int
    best_multiplier: int


def best_substitution(hand, card, reward_table, minimum_pair_rank=JACK):
    """Highest reward multiplier ``card`` reaches when swapped into any of the 5 positions."""
    best = 0
    for position in range(HandEvaluator.HAND_SIZE):
        test_hand = list(hand)
        test_hand[position] = card
        result = HandEvaluator.apply_rewards(HandEvaluator.evaluate(test_hand, minimum_pair_rank), reward_table)
        if result.multiplier > best:
            best = result.multiplier
    return best


def find_best_devils_deal_cards(hand, deck, reward_table, bet_amount, minimum_pair_rank=JACK):
    """Top 3 deck cards by best payout; equal payouts keep deck order."""
    hand = list(hand)
    HandEvaluator.check_hand_size(hand)
    payouts = [best_substitution(hand, card, reward_table, minimum_pair_rank) * bet_amount for card in deck]
    order = sorted(range(len(deck)), key=lambda i: -payouts[i])
    logger.debug("searched %d candidate cards, best payout %s", len(deck), payouts[order[0]] if order else 0)
    return [deck[i] for i in order[:TOP_CARDS]]


def devils_deal_chance(chance_purchases, config=DevilsDealConfig()):
    chance_purchases = min(chance_purchases, config.max_chance_purchases)
    return config.base_chance + chance_purchases * config.chance_increase_per_purchase


def devils_deal_cost(best_multiplier, bet_amount, hand_count, cost_reductions=0, config=DevilsDealConfig()):
    cost_reductions = min(cost_reductions, config.max_cost_reduction_purchases)
    # never below 1% of the payout
    cost_percent = max(1, config.base_cost_percent - cost_reductions * config.cost_reduction_per_purchase)
    return round_credits(best_multiplier * bet_amount * hand_count * cost_percent / 100)


def roll_devils_deal(hand, deck, reward_table, bet_amount, hand_count, chance_purchases=0, cost_reductions=0, config=DevilsDealConfig(), minimum_pair_rank=JACK, rng=None):
    """Maybe offer one of the best cards for this hand; returns a DevilsDealOffer or None."""
    if rng is None:
        rng = np.random.default_rng()
    roll = rng.random() * 100
    if roll >= devils_deal_chance(chance_purchases, config):
        return None
    hand = list(hand)[:HandEvaluator.HAND_SIZE]
    candidates = find_best_devils_deal_cards(hand, deck, reward_table, bet_amount, minimum_pair_rank)
    if not candidates:
        return None
    card = candidates[int(rng.integers(len(candidates)))]
    best_multiplier = best_substitution(hand, card, reward_table, minimum_pair_rank)
    cost = devils_deal_cost(best_multiplier, bet_amount, hand_count, cost_reductions, config)
    logger.info("devil's deal offered: %s for %d credits", card, cost)
    return DevilsDealOffer(card, cost, best_multiplier)


def apply_devils_deal(hand, held_indices, card):
    """Put the deal card in the first position that is not held; returns the new hand and held positions."""
    cards = list(hand)
    held = sorted(set(held_indices))
    for position in range(len(cards)):
        if position not in held:
            cards[position] = card
            return cards, sorted(held + [position])
    return cards, held
