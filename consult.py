import argparse
import logging

import numpy as np

import hand_evaluator as HandEvaluator
from devils_deal import best_substitution, find_best_devils_deal_cards
from game_config import get_game_mode
from parallel_hands import all_holds, estimate_hold_value
from poker_cards import parse_card, remove_cards, create_full_deck

logger = logging.getLogger(__name__)


def read_card(prompt):
    text = input(prompt)
    while True:
        try:
            return parse_card(text)
        except ValueError:
            text = input("Wrong format. Please enter again:")


def read_hand():
    hand = []
    for i in range(HandEvaluator.HAND_SIZE):
        card = read_card("Enter card" + str(i + 1) + ":")
        while card in hand:
            card = read_card("Card already in hand. Please enter again:")
        hand.append(card)
    return hand


def rank_holds(hand, mode, samples, rng, top=5):
    values = []
    for held in all_holds(len(hand)):
        value = estimate_hold_value(hand, held, mode.rewards, samples, minimum_pair_rank=mode.minimum_pair_rank, rng=rng)
        values.append((value, held))
        logger.debug("hold %s -> %.3f", held, value)
    values.sort(key=lambda item: -item[0])
    return values[:top]


def describe_hold(hand, held):
    if not held:
        return "draw all five"
    return " ".join(str(hand[i]) for i in held)


def consult(hand, mode, samples=500, rng=None, bet_amount=1):
    if rng is None:
        rng = np.random.default_rng()
    result = HandEvaluator.apply_rewards(HandEvaluator.evaluate(hand, mode.minimum_pair_rank), mode.rewards)
    print("Your card type: " + result.name + " (pays " + str(result.multiplier) + "x)")

    print("\n-best holds")
    for value, held in rank_holds(hand, mode, samples, rng):
        print(f"  {describe_hold(hand, held):<20} expected {value:.3f}x")

    print("\n-devil's deal")
    deck = remove_cards(create_full_deck(), hand)
    for card in find_best_devils_deal_cards(hand, deck, mode.rewards, bet_amount, mode.minimum_pair_rank):
        multiplier = best_substitution(hand, card, mode.rewards, mode.minimum_pair_rank)
        print(f"  {card.label:<20} up to {multiplier}x")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Suggest holds for a five card video poker hand.")
    parser.add_argument("--samples", type=int, default=500, help="simulated draws per hold")
    parser.add_argument("--mode", default="normalGame")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    mode = get_game_mode(args.mode)
    rng = np.random.default_rng(args.seed)
    print("Cards are suit then rank, e.g. HA, DT, S7")
    while True:
        hand = read_hand()
        consult(hand, mode, args.samples, rng)
        again = input("\nConsult another hand? (y/n):")
        while again not in ("y", "n"):
            again = input("Wrong format. Please enter again:")
        if again == "n":
            return 0


if __name__ == "__main__":
    raise SystemExit(main())
