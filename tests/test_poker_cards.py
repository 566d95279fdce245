import numpy as np
import pytest

from poker_cards import Card, DeckModifications, card_key, create_deck, create_full_deck, full_deck, parse_card, parse_cards, remove_cards, shuffle_deck


class TestParseCard:
    def test_suit_first(self):
        card = parse_card("HA")
        assert card.suit == Card.HEART
        assert card.rank == 14
        assert str(card) == "HA"

    def test_ten_either_way(self):
        assert parse_card("S10") == parse_card("ST")
        assert parse_card("s10").rank == 10

    def test_lowercase(self):
        assert parse_card("c7") == Card(Card.CLUB, 7)

    @pytest.mark.parametrize("text", ["", "H", "XZ", "H1", "AH", "HAA"])
    def test_rejects_bad_text(self, text):
        with pytest.raises(ValueError):
            parse_card(text)

    def test_flags(self):
        card = parse_card("D9", is_wild=True)
        assert card.is_wild
        assert not card.is_dead
        assert repr(card) == "Card(D9*)"

    def test_parse_cards(self):
        parsed = parse_cards("HA, DK CQ")
        assert [str(card) for card in parsed] == ["HA", "DK", "CQ"]


class TestCard:
    def test_label(self):
        assert parse_card("HA").label == "A of hearts"
        assert parse_card("ST").label == "10 of spades"

    def test_copy_gets_fresh_uid(self):
        card = parse_card("HA", is_dead=True)
        copy = card.copy()
        assert copy == card
        assert copy.uid != card.uid
        assert copy.is_dead

    def test_copy_with_changes(self):
        copy = parse_card("HA").copy(is_wild=True, uid="wild-1")
        assert copy.is_wild
        assert copy.uid == "wild-1"

    def test_uids_are_unique(self):
        assert len({Card(Card.HEART, 2).uid for _ in range(50)}) == 50

    def test_card_key(self):
        assert card_key(parse_card("HA")) == (Card.HEART, 14)
        wild = parse_card("HA", is_wild=True)
        assert card_key(wild) == wild.uid


class TestDeck:
    def test_standard_deck(self):
        deck = create_deck()
        assert len(deck) == 52
        assert len({card_key(card) for card in deck}) == 52
        assert len(full_deck) == 52

    def test_deck_uids_name_the_card(self):
        assert create_deck()[-1].uid == "spades-A"

    def test_full_deck_adds_special_cards(self):
        dead = [parse_card("H2", is_dead=True), parse_card("H3", is_dead=True)]
        wild = [parse_card("HA", is_wild=True)]
        assert len(create_full_deck(dead, (), wild)) == 55

    def test_full_deck_leaves_out_removed(self):
        dead = [parse_card("H2", is_dead=True)]
        removed = [parse_card("SA"), dead[0]]
        deck = create_full_deck(dead, removed)
        assert len(deck) == 51
        assert parse_card("SA") not in deck
        assert all(not card.is_dead for card in deck)

    def test_remove_cards(self):
        deck = remove_cards(create_deck(), parse_cards("HA DK"))
        assert len(deck) == 50

    def test_shuffle_keeps_cards(self):
        deck = create_deck()
        shuffled = shuffle_deck(deck, np.random.default_rng(3))
        assert sorted(card.uid for card in shuffled) == sorted(card.uid for card in deck)

    def test_deck_modifications_defaults(self):
        mods = DeckModifications()
        assert mods.dead_cards == []
        assert mods.removal_count == 0
        assert mods.dead_cards is not DeckModifications().dead_cards
