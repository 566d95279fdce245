import logging
from dataclasses import dataclass, replace
from enum import Enum

from poker_cards import ACE, JACK, Card, suits

logger = logging.getLogger(__name__)

HAND_SIZE = 5


class InvalidHandSize(ValueError):
    pass


class HandRank(str, Enum):
    ROYAL_FLUSH = "royal-flush"
    STRAIGHT_FLUSH = "straight-flush"
    FIVE_OF_A_KIND = "five-of-a-kind"
    FOUR_OF_A_KIND = "four-of-a-kind"
    FULL_HOUSE = "full-house"
    FLUSH = "flush"
    STRAIGHT = "straight"
    THREE_OF_A_KIND = "three-of-a-kind"
    TWO_PAIR = "two-pair"
    ONE_PAIR = "one-pair"
    HIGH_CARD = "high-card"

    def __str__(self):
        return self.value


TIER_SCORES = {
    HandRank.HIGH_CARD: 1000,
    HandRank.ONE_PAIR: 2000,
    HandRank.TWO_PAIR: 3000,
    HandRank.THREE_OF_A_KIND: 4000,
    HandRank.STRAIGHT: 5000,
    HandRank.FLUSH: 6000,
    HandRank.FULL_HOUSE: 7000,
    HandRank.FOUR_OF_A_KIND: 8000,
    HandRank.FIVE_OF_A_KIND: 8500,
    HandRank.STRAIGHT_FLUSH: 9000,
    HandRank.ROYAL_FLUSH: 10000,
}

HAND_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FIVE_OF_A_KIND: "Five of a Kind",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

SUIT_INDEX = {suit: i for i, suit in enumerate(suits)}
ROYAL_RANKS = [10, 11, 12, 13, 14]
# best first; the wheel plays the ace low
STRAIGHT_WINDOWS = [list(range(low, low + 5)) for low in range(10, 1, -1)] + [[14, 2, 3, 4, 5]]


@dataclass(frozen=True)
class HandResult:
    rank: HandRank
    score: int
    winning_cards: tuple = ()
    multiplier: int = 0

    @property
    def name(self):
        return HAND_NAMES[self.rank]


def check_hand_size(cards):
    if len(cards) != HAND_SIZE:
        raise InvalidHandSize("Hand must contain exactly 5 cards")


def evaluate(cards, minimum_pair_rank=JACK):
    """Classify a 5-card hand.

    Dead cards are ignored, wild cards take whatever rank and suit gives the
    strongest hand. Pairs below ``minimum_pair_rank`` score as high card.
    """
    cards = list(cards)
    check_hand_size(cards)
    active = [card for card in cards if not card.is_dead]
    if not active:
        return HandResult(HandRank.HIGH_CARD, 0, ())
    wilds = [card for card in active if card.is_wild]
    regular = [card for card in active if not card.is_wild]
    if wilds:
        return resolve_wilds(regular, wilds, minimum_pair_rank)
    return classify(regular, minimum_pair_rank)


def apply_rewards(result, reward_table):
    return replace(result, multiplier=reward_table.get(result.rank, 0) or 0)


def _scored(rank, tie_break, cards):
    return HandResult(rank, TIER_SCORES[rank] + tie_break, tuple(cards))


def _straight_high(values):
    if values == [2, 3, 4, 5, 14]:
        return 5
    for i in range(1, len(values)):
        if values[i] != values[i - 1] + 1:
            return None
    return values[-1]


def classify(cards, minimum_pair_rank=JACK):
    """Rank concrete cards without wilds; fewer than five can never make a flush or straight."""
    ordered = sorted(cards, key=lambda card: card.rank)
    values = [card.rank for card in ordered]
    rank_list = [0] * 15
    suit_list = [0] * 4
    for card in ordered:
        rank_list[card.rank] += 1
        suit_list[SUIT_INDEX[card.suit]] += 1
    full = len(ordered) == HAND_SIZE
    is_flush = full and max(suit_list) == HAND_SIZE  # flush
    straight_high = _straight_high(values) if full else None

    if straight_high is not None and is_flush:
        if values[0] == 10 and values[-1] == ACE:
            return _scored(HandRank.ROYAL_FLUSH, 0, ordered)
        return _scored(HandRank.STRAIGHT_FLUSH, straight_high, ordered)
    four_rank = three_rank = None
    pair_ranks = []
    for i in range(14, 1, -1):
        if rank_list[i] == 4:
            four_rank = i
        elif rank_list[i] == 3 and three_rank is None:
            three_rank = i
        elif rank_list[i] == 2:
            pair_ranks.append(i)
    if four_rank is not None:
        return _scored(HandRank.FOUR_OF_A_KIND, four_rank, ordered)
    if three_rank is not None and pair_ranks:  # full house
        return _scored(HandRank.FULL_HOUSE, three_rank, ordered)
    if is_flush:
        return _scored(HandRank.FLUSH, values[-1], ordered)
    if straight_high is not None:
        return _scored(HandRank.STRAIGHT, straight_high, ordered)
    if three_rank is not None:
        return _scored(HandRank.THREE_OF_A_KIND, three_rank, ordered)
    if len(pair_ranks) >= 2:
        return _scored(HandRank.TWO_PAIR, pair_ranks[0], ordered)
    if pair_ranks and pair_ranks[0] >= minimum_pair_rank:
        return _scored(HandRank.ONE_PAIR, pair_ranks[0], ordered)
    # lower pairs fall through
    return _scored(HandRank.HIGH_CARD, values[-1] if values else 0, ordered)


# --- wild cards ---

def _rank_counts(cards):
    rank_list = [0] * 15
    for card in cards:
        rank_list[card.rank] += 1
    return rank_list


def _off_suit(regular):
    used = {card.suit for card in regular}
    for suit in reversed(suits):
        if suit not in used:
            return suit
    return suits[-1]


def _assign(regular, wilds, picks):
    """Regular cards plus each wild standing in for a (suit, rank) pick; spare wilds play as aces."""
    expanded = list(regular)
    for i, wild in enumerate(wilds):
        suit, rank = picks[i] if i < len(picks) else (Card.HEART, ACE)
        expanded.append(Card(suit, rank, uid=wild.uid, is_wild=True))
    return expanded


def _try(regular, wilds, picks, accepted, minimum_pair_rank):
    result = classify(_assign(regular, wilds, picks), minimum_pair_rank)
    if result.rank in accepted:
        return result
    return None


def _five_of_a_kind(regular, wilds, minimum_pair_rank):
    # needs a natural pair; a lone natural card with four wilds resolves to a straight flush
    counts = _rank_counts(regular)
    for rank in range(14, 1, -1):
        if counts[rank] >= 2 and counts[rank] + len(wilds) >= 5:
            expanded = _assign(regular, wilds, [(suits[i % 4], rank) for i in range(len(wilds))])
            return _scored(HandRank.FIVE_OF_A_KIND, rank, sorted(expanded, key=lambda card: card.suit))
    return None


def _royal_flush(regular, wilds, minimum_pair_rank):
    if len(regular) + len(wilds) != HAND_SIZE:
        return None
    for suit in suits:
        needed = [r for r in ROYAL_RANKS if not any(c.rank == r and c.suit == suit for c in regular)]
        if len(needed) <= len(wilds):
            result = _try(regular, wilds, [(suit, r) for r in needed], (HandRank.ROYAL_FLUSH,), minimum_pair_rank)
            if result:
                return result
    return None


def _straight_flush(regular, wilds, minimum_pair_rank):
    if len(regular) + len(wilds) != HAND_SIZE:
        return None
    for window in STRAIGHT_WINDOWS:
        for suit in suits:
            needed = [r for r in window if not any(c.rank == r and c.suit == suit for c in regular)]
            if len(needed) <= len(wilds):
                result = _try(regular, wilds, [(suit, r) for r in needed], (HandRank.STRAIGHT_FLUSH,), minimum_pair_rank)
                if result:
                    return result
    return None


def _n_of_a_kind(n, accepted):
    def strategy(regular, wilds, minimum_pair_rank):
        counts = _rank_counts(regular)
        suit = _off_suit(regular)
        for rank in range(14, 1, -1):
            needed = max(0, n - counts[rank])
            if needed <= len(wilds) and counts[rank] + len(wilds) >= n:
                result = _try(regular, wilds, [(suit, rank)] * needed, accepted, minimum_pair_rank)
                if result:
                    return result
        return None
    return strategy


def _two_groups(first_size, second_size, accepted):
    def strategy(regular, wilds, minimum_pair_rank):
        counts = _rank_counts(regular)
        for first in range(14, 1, -1):
            needed_first = max(0, first_size - counts[first])
            if needed_first > len(wilds):
                continue
            for second in range(14, 1, -1):
                if second == first:
                    continue
                needed_second = max(0, second_size - counts[second])
                if needed_first + needed_second > len(wilds):
                    continue
                picks = [(Card.HEART, first)] * needed_first + [(Card.DIAMOND, second)] * needed_second
                result = _try(regular, wilds, picks, accepted, minimum_pair_rank)
                if result:
                    return result
        return None
    return strategy


def _flush(regular, wilds, minimum_pair_rank):
    for suit in suits:
        in_suit = [card for card in regular if card.suit == suit]
        if len(in_suit) + len(wilds) < HAND_SIZE:
            continue
        used = {card.rank for card in in_suit}
        spare = [r for r in range(14, 1, -1) if r not in used]
        picks = [(suit, r) for r in spare[:len(wilds)]]
        accepted = (HandRank.FLUSH, HandRank.STRAIGHT_FLUSH, HandRank.ROYAL_FLUSH)
        result = _try(regular, wilds, picks, accepted, minimum_pair_rank)
        if result:
            return result
    return None


def _straight(regular, wilds, minimum_pair_rank):
    if len(regular) + len(wilds) != HAND_SIZE:
        return None
    present = {card.rank for card in regular}
    suit = _off_suit(regular)
    for window in STRAIGHT_WINDOWS:
        needed = [r for r in window if r not in present]
        if len(needed) <= len(wilds):
            result = _try(regular, wilds, [(suit, r) for r in needed], (HandRank.STRAIGHT,), minimum_pair_rank)
            if result:
                return result
    return None


def _one_pair(regular, wilds, minimum_pair_rank):
    counts = _rank_counts(regular)
    suit = _off_suit(regular)
    for rank in range(14, max(minimum_pair_rank, 2) - 1, -1):
        needed = max(0, 2 - counts[rank])
        if needed <= len(wilds):
            result = _try(regular, wilds, [(suit, rank)] * needed, (HandRank.ONE_PAIR,), minimum_pair_rank)
            if result:
                return result
    return None


WILD_STRATEGIES = [
    (HandRank.FIVE_OF_A_KIND, _five_of_a_kind),
    (HandRank.ROYAL_FLUSH, _royal_flush),
    (HandRank.STRAIGHT_FLUSH, _straight_flush),
    (HandRank.FOUR_OF_A_KIND, _n_of_a_kind(4, (HandRank.FOUR_OF_A_KIND,))),
    (HandRank.FULL_HOUSE, _two_groups(3, 2, (HandRank.FULL_HOUSE,))),
    (HandRank.FLUSH, _flush),
    (HandRank.STRAIGHT, _straight),
    (HandRank.THREE_OF_A_KIND, _n_of_a_kind(3, (HandRank.THREE_OF_A_KIND,))),
    (HandRank.TWO_PAIR, _two_groups(2, 2, (HandRank.TWO_PAIR,))),
    (HandRank.ONE_PAIR, _one_pair),
]


def resolve_wilds(regular, wilds, minimum_pair_rank=JACK):
    """Try each hand tier strongest first and keep the first one the wilds can reach."""
    for rank, strategy in WILD_STRATEGIES:
        result = strategy(regular, wilds, minimum_pair_rank)
        if result is not None:
            logger.debug("%d wild card(s) resolved to %s", len(wilds), rank)
            return result
    return classify(_assign(regular, wilds, []), minimum_pair_rank)
