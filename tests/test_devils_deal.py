import numpy as np
import pytest

from devils_deal import (
    DevilsDealOffer,
    apply_devils_deal,
    best_substitution,
    devils_deal_chance,
    devils_deal_cost,
    find_best_devils_deal_cards,
    roll_devils_deal,
)
from game_config import DEFAULT_REWARDS, DevilsDealConfig
from hand_evaluator import InvalidHandSize
from tests.conftest import cards


@pytest.fixture
def royal_draw():
    return cards("HA", "HK", "HQ", "HJ", "C2")


class TestFindBestDevilsDealCards:
    def test_best_card_first(self, royal_draw):
        deck = cards("S3", "HT", "D4")
        best = find_best_devils_deal_cards(royal_draw, deck, DEFAULT_REWARDS, 2)
        assert best[0] is deck[1]

    def test_ties_keep_deck_order(self, royal_draw):
        deck = cards("S3", "HT", "D4")
        best = find_best_devils_deal_cards(royal_draw, deck, DEFAULT_REWARDS, 2)
        assert best == [deck[1], deck[0], deck[2]]

    def test_top_three_only(self, royal_draw):
        deck = cards("S3", "HT", "D4", "SA", "C5")
        best = find_best_devils_deal_cards(royal_draw, deck, DEFAULT_REWARDS, 2)
        assert len(best) == 3
        assert best[0] is deck[1]
        # SA pairs the ace
        assert best[1] is deck[3]

    def test_short_and_empty_decks(self, royal_draw):
        assert find_best_devils_deal_cards(royal_draw, [], DEFAULT_REWARDS, 2) == []
        assert len(find_best_devils_deal_cards(royal_draw, cards("S3"), DEFAULT_REWARDS, 2)) == 1

    def test_order_ignores_bet(self, royal_draw):
        deck = cards("S3", "HT", "D4", "SA", "C5", "DK")
        low = find_best_devils_deal_cards(royal_draw, deck, DEFAULT_REWARDS, 1)
        high = find_best_devils_deal_cards(royal_draw, deck, DEFAULT_REWARDS, 50)
        assert [card.uid for card in low] == [card.uid for card in high]

    def test_rejects_wrong_size(self):
        with pytest.raises(InvalidHandSize):
            find_best_devils_deal_cards(cards("HA", "HK"), cards("HT"), DEFAULT_REWARDS, 2)

    def test_best_substitution(self, royal_draw):
        assert best_substitution(royal_draw, cards("HT")[0], DEFAULT_REWARDS) == 250
        assert best_substitution(royal_draw, cards("S3")[0], DEFAULT_REWARDS) == 0


class TestDevilsDealPricing:
    def test_chance(self):
        assert devils_deal_chance(0) == 15
        assert devils_deal_chance(2) == 55

    def test_cost(self):
        assert devils_deal_cost(250, 2, 10) == 15000

    def test_cost_reductions(self):
        assert devils_deal_cost(250, 2, 10, cost_reductions=5) == 13500

    def test_cost_floor_is_one_percent(self):
        config = DevilsDealConfig(cost_reduction_per_purchase=100)
        assert devils_deal_cost(250, 2, 10, cost_reductions=5, config=config) == 50

    def test_chance_purchases_capped(self):
        assert devils_deal_chance(3) == 75
        assert devils_deal_chance(10) == 75

    def test_cost_reductions_capped(self):
        assert devils_deal_cost(250, 2, 10, cost_reductions=100) == 13500


class TestRollDevilsDeal:
    def test_always_offers_at_full_chance(self, royal_draw):
        config = DevilsDealConfig(base_chance=100)
        offer = roll_devils_deal(royal_draw, cards("HT"), DEFAULT_REWARDS, 2, 10, config=config, rng=np.random.default_rng(5))
        assert isinstance(offer, DevilsDealOffer)
        assert offer.card == cards("HT")[0]
        assert offer.best_multiplier == 250
        assert offer.cost == 15000

    def test_never_offers_at_zero_chance(self, royal_draw):
        config = DevilsDealConfig(base_chance=0)
        assert roll_devils_deal(royal_draw, cards("HT"), DEFAULT_REWARDS, 2, 10, config=config, rng=np.random.default_rng(5)) is None

    def test_offer_is_one_of_the_best(self, royal_draw):
        deck = cards("S3", "HT", "D4", "SA", "C5", "DK")
        best = find_best_devils_deal_cards(royal_draw, deck, DEFAULT_REWARDS, 2)
        config = DevilsDealConfig(base_chance=100)
        for seed in range(10):
            offer = roll_devils_deal(royal_draw, deck, DEFAULT_REWARDS, 2, 10, config=config, rng=np.random.default_rng(seed))
            assert any(offer.card is card for card in best)

    def test_empty_deck(self, royal_draw):
        config = DevilsDealConfig(base_chance=100)
        assert roll_devils_deal(royal_draw, [], DEFAULT_REWARDS, 2, 10, config=config, rng=np.random.default_rng(5)) is None


class TestApplyDevilsDeal:
    def test_fills_first_open_position(self, royal_draw):
        card = cards("HT")[0]
        hand, held = apply_devils_deal(royal_draw, [0, 2], card)
        assert hand[1] is card
        assert held == [0, 1, 2]
        assert royal_draw[1] == cards("HK")[0]

    def test_all_held(self, royal_draw):
        card = cards("HT")[0]
        hand, held = apply_devils_deal(royal_draw, [0, 1, 2, 3, 4], card)
        assert hand == royal_draw
        assert held == [0, 1, 2, 3, 4]
