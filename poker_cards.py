import itertools
from dataclasses import dataclass, field

from pypokerengine.engine.card import Card as EngineCard

suits = [EngineCard.CLUB, EngineCard.DIAMOND, EngineCard.HEART, EngineCard.SPADE]
ranks = list(range(2, 15))

SUIT_NAMES = {2: "clubs", 4: "diamonds", 8: "hearts", 16: "spades"}
SUIT_MAP = {"C": 2, "D": 4, "H": 8, "S": 16}
RANK_MAP = {
    "2": 2,
    "3": 3,
    "4": 4,
    "5": 5,
    "6": 6,
    "7": 7,
    "8": 8,
    "9": 9,
    "T": 10,
    "J": 11,
    "Q": 12,
    "K": 13,
    "A": 14,
}
RANK_LABELS = {v: k for k, v in RANK_MAP.items()}
RANK_LABELS[10] = "10"

JACK = 11
ACE = 14

_uid_counter = itertools.count(1)


def next_uid(prefix="card"):
    return f"{prefix}-{next(_uid_counter)}"


class Card(EngineCard):
    """Engine card with an identity and the wild/dead flags of the game.

    Equality is inherited from the engine (suit and rank only), so a card and
    its fresh copy compare equal while keeping distinct uids.
    """

    def __init__(self, suit, rank, uid=None, is_wild=False, is_dead=False):
        super().__init__(suit, rank)
        self.uid = uid if uid is not None else next_uid()
        self.is_wild = is_wild
        self.is_dead = is_dead

    __hash__ = None

    def __repr__(self):
        flags = ""
        if self.is_wild:
            flags = "*"
        elif self.is_dead:
            flags = "x"
        return f"Card({self}{flags})"

    @property
    def label(self):
        return f"{RANK_LABELS[self.rank]} of {SUIT_NAMES[self.suit]}"

    def copy(self, **changes):
        """Return a copy with a fresh uid unless one is given."""
        values = {
            "suit": self.suit,
            "rank": self.rank,
            "uid": None,
            "is_wild": self.is_wild,
            "is_dead": self.is_dead,
        }
        values.update(changes)
        return Card(**values)


@dataclass
class Hand:
    cards: list
    uid: str = field(default_factory=lambda: next_uid("hand"))

    def __len__(self):
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __getitem__(self, index):
        return self.cards[index]


@dataclass
class DeckModifications:
    dead_cards: list = field(default_factory=list)
    wild_cards: list = field(default_factory=list)
    removed_cards: list = field(default_factory=list)
    removal_count: int = 0


def parse_card(text, is_wild=False, is_dead=False):
    """Parse engine notation, suit first: "HA", "DT", "S10" and "c7" all work."""
    text = text.strip().upper()
    if len(text) == 3 and text[1:] == "10":
        text = text[0] + "T"
    if len(text) != 2 or text[0] not in SUIT_MAP or text[1] not in RANK_MAP:
        raise ValueError(f"Invalid card: {text!r}")
    return Card(SUIT_MAP[text[0]], RANK_MAP[text[1]], is_wild=is_wild, is_dead=is_dead)


def parse_cards(text):
    return [parse_card(part) for part in text.replace(",", " ").split()]


def card_key(card):
    """Pool identity: plain deck cards by suit and rank, special cards by uid."""
    if card.is_wild or card.is_dead:
        return card.uid
    return (card.suit, card.rank)


def create_deck():
    return [Card(suit, rank, uid=f"{SUIT_NAMES[suit]}-{RANK_LABELS[rank]}") for suit in suits for rank in ranks]


def create_full_deck(dead_cards=(), removed_cards=(), wild_cards=()):
    """Standard deck minus removed cards, plus dead and wild cards as drawable entries."""
    removed = {card_key(card) for card in removed_cards}
    deck = [card for card in create_deck() if card_key(card) not in removed]
    deck += [card for card in dead_cards if card_key(card) not in removed]
    deck += [card for card in wild_cards if card_key(card) not in removed]
    return deck


def remove_cards(deck, cards_to_remove):
    keys = {card_key(card) for card in cards_to_remove}
    return [card for card in deck if card_key(card) not in keys]


def shuffle_deck(deck, rng):
    order = rng.permutation(len(deck))
    return [deck[i] for i in order]


full_deck = create_deck()
