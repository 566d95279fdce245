import logging

import numpy as np

import hand_evaluator as HandEvaluator
from poker_cards import JACK, Hand, card_key, create_full_deck

logger = logging.getLogger(__name__)


def build_draw_pool(base_hand, dead_cards=(), removed_cards=(), wild_cards=()):
    """Cards a non-held position can be replaced with.

    Dead and wild cards stay in the pool for every hand; they are not used up.
    """
    in_hand = {card_key(card) for card in base_hand}
    deck = create_full_deck(dead_cards, removed_cards, wild_cards)
    return [card for card in deck if card_key(card) not in in_hand]


def generate_parallel_hands(base_hand, held_indices, count, dead_cards=(), removed_cards=(), wild_cards=(), rng=None):
    HandEvaluator.check_hand_size(base_hand)
    if rng is None:
        rng = np.random.default_rng()
    base_hand = list(base_hand)
    held = {i for i in held_indices if 0 <= i < len(base_hand)}
    open_positions = [i for i in range(len(base_hand)) if i not in held]
    pool = build_draw_pool(base_hand, dead_cards, removed_cards, wild_cards)
    logger.debug("drawing %d hands, %d open positions, pool of %d", count, len(open_positions), len(pool))

    hands = []
    for i in range(count):
        cards = [card.copy() for card in base_hand]
        draw_count = min(len(open_positions), len(pool))
        picks = rng.choice(len(pool), size=draw_count, replace=False) if draw_count else []
        for position, pick in zip(open_positions, picks):
            cards[position] = pool[int(pick)].copy()
        hands.append(Hand(cards, uid=f"parallel-hand-{i}"))
    return hands


def estimate_hold_value(base_hand, held_indices, reward_table, samples=1000, dead_cards=(), removed_cards=(), wild_cards=(), minimum_pair_rank=JACK, rng=None):
    """Mean reward multiplier over ``samples`` simulated draws for one hold."""
    if samples <= 0:
        return 0.0
    hands = generate_parallel_hands(base_hand, held_indices, samples, dead_cards, removed_cards, wild_cards, rng)
    payouts = np.zeros(samples)
    for i, hand in enumerate(hands):
        result = HandEvaluator.apply_rewards(HandEvaluator.evaluate(hand.cards, minimum_pair_rank), reward_table)
        payouts[i] = result.multiplier
    return float(payouts.mean())


def all_holds(size=5):
    """Every subset of positions, as sorted index tuples."""
    return [tuple(i for i in range(size) if mask >> i & 1) for mask in range(1 << size)]
