import dataclasses

import numpy as np
import pytest

from game_config import DEFAULT_GAME_MODE
from poker_cards import DeckModifications
from round_scoring import GameState, draws_per_round, start_new_run
from shop_actions import (
    add_dead_card,
    add_parallel_hands_bundle,
    add_wild_card,
    purchase_devils_deal_chance,
    purchase_devils_deal_cost_reduction,
    purchase_extra_draw,
    remove_all_dead_cards,
    remove_single_dead_card,
)
from tests.conftest import cards


def with_credits(credits, **changes):
    return dataclasses.replace(start_new_run(), credits=credits, **changes)


@pytest.fixture
def haunted():
    mods = DeckModifications(dead_cards=cards("H2", "D3", "C4", dead=(0, 1, 2)))
    return with_credits(20000, deck_modifications=mods)


class TestDeadCards:
    def test_add_dead_card_pays_reward(self):
        state = start_new_run()
        bought = add_dead_card(state, rng=np.random.default_rng(0))
        assert bought.credits == 7500
        assert len(bought.deck_modifications.dead_cards) == 1
        assert bought.deck_modifications.dead_cards[0].is_dead
        assert state.deck_modifications.dead_cards == []

    def test_dead_card_limit(self):
        mods = DeckModifications(dead_cards=cards(*["H2"] * 10, dead=range(10)))
        state = with_credits(0, deck_modifications=mods)
        assert add_dead_card(state, rng=np.random.default_rng(0)) is state

    def test_remove_single_dead_card(self, haunted):
        first = haunted.deck_modifications.dead_cards[0]
        bought = remove_single_dead_card(haunted)
        mods = bought.deck_modifications
        assert bought.credits == 15000
        assert len(mods.dead_cards) == 2
        assert mods.removed_cards == [first]
        assert mods.removal_count == 1

    def test_removal_price_escalates(self, haunted):
        bought = remove_single_dead_card(remove_single_dead_card(haunted))
        assert bought.credits == 20000 - 5000 - 5500

    def test_remove_all_dead_cards(self, haunted):
        haunted.deck_modifications.removal_count = 1
        bought = remove_all_dead_cards(haunted)
        mods = bought.deck_modifications
        assert bought.credits == 20000 - 16500
        assert mods.dead_cards == []
        assert len(mods.removed_cards) == 3
        assert mods.removal_count == 4

    def test_nothing_to_remove(self):
        state = with_credits(20000)
        assert remove_single_dead_card(state) is state
        assert remove_all_dead_cards(state) is state

    def test_removal_unaffordable(self, haunted):
        poor = dataclasses.replace(haunted, credits=4999)
        assert remove_single_dead_card(poor) is poor
        assert remove_all_dead_cards(poor) is poor


class TestUpgrades:
    def test_add_wild_card(self):
        bought = add_wild_card(with_credits(5000))
        assert bought.credits == 0
        assert [card.is_wild for card in bought.deck_modifications.wild_cards] == [True]

    def test_wild_card_limit(self):
        mods = DeckModifications(wild_cards=cards("HA", "HA", "HA", wild=(0, 1, 2)))
        state = with_credits(10 ** 6, deck_modifications=mods)
        assert add_wild_card(state) is state

    def test_extra_draw_once(self):
        bought = purchase_extra_draw(with_credits(20000))
        assert bought.credits == 10000
        assert bought.extra_draw_purchased
        assert draws_per_round(bought) == 2
        assert purchase_extra_draw(bought) is bought

    def test_parallel_hands_bundle(self):
        bought = add_parallel_hands_bundle(start_new_run(), 25)
        assert bought.credits == 4750
        assert bought.selected_hand_count == 35

    def test_bundle_not_on_sale(self):
        state = start_new_run()
        assert add_parallel_hands_bundle(state, 7) is state

    def test_devils_deal_chance(self):
        bought = purchase_devils_deal_chance(with_credits(5000))
        assert bought.credits == 0
        assert bought.devils_deal_chance_purchases == 1

    def test_devils_deal_chance_capped(self):
        state = with_credits(10 ** 6, devils_deal_chance_purchases=DEFAULT_GAME_MODE.devils_deal.max_chance_purchases)
        assert purchase_devils_deal_chance(state) is state

    def test_devils_deal_cost_reduction(self):
        bought = purchase_devils_deal_cost_reduction(with_credits(20000, devils_deal_cost_reduction_purchases=1))
        assert bought.credits == 7500
        assert bought.devils_deal_cost_reduction_purchases == 2

    def test_devils_deal_cost_reduction_capped(self):
        state = with_credits(10 ** 6, devils_deal_cost_reduction_purchases=5)
        assert purchase_devils_deal_cost_reduction(state) is state

    def test_unaffordable_upgrade(self):
        state = GameState(credits=10, bet_amount=2, minimum_bet=2, base_minimum_bet=2, selected_hand_count=10)
        assert purchase_devils_deal_chance(state) is state
        assert add_wild_card(state) is state
