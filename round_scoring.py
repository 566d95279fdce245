import logging
from collections import Counter
from dataclasses import dataclass, field, replace

import hand_evaluator as HandEvaluator
from devils_deal import roll_devils_deal
from failure_conditions import check_failure_conditions
from game_config import DEFAULT_GAME_MODE, StreakConfig, round_credits
from parallel_hands import build_draw_pool, generate_parallel_hands
from poker_cards import JACK, DeckModifications
from shop_selection import select_random_shop_options
from streak_multiplier import calculate_streak_multiplier, update_streak

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandOutcome:
    result: HandEvaluator.HandResult
    streak_multiplier: float
    credits: int


@dataclass(frozen=True)
class RoundOutcome:
    hands: tuple
    total_payout: int
    winning_hands: int
    streak_counter: int
    rank_counts: dict


@dataclass
class GameState:
    credits: int
    bet_amount: int
    minimum_bet: int
    base_minimum_bet: int
    selected_hand_count: int
    round: int = 1
    total_earnings: int = 0
    winning_hands_last_round: int = 0
    streak_counter: int = 0
    is_endless_mode: bool = False
    failure_state: object = None
    game_over: bool = False
    game_over_reason: str = None
    show_shop_next_round: bool = False
    shop_options: list = field(default_factory=list)
    deck_modifications: DeckModifications = field(default_factory=DeckModifications)
    extra_draw_purchased: bool = False
    devils_deal_chance_purchases: int = 0
    devils_deal_cost_reduction_purchases: int = 0


def start_new_run(mode=DEFAULT_GAME_MODE):
    return GameState(
        credits=mode.starting_credits,
        bet_amount=mode.starting_bet,
        minimum_bet=mode.starting_bet,
        base_minimum_bet=mode.starting_bet,
        selected_hand_count=mode.starting_hand_count,
    )


def score_round(hands, reward_table, bet_amount, streak_counter=0, streak_config=StreakConfig(), minimum_pair_rank=JACK):
    """Score parallel hands in order.

    Each hand is paid at the streak multiplier in effect before it; the
    counter then moves up on a paying hand and down by one otherwise.
    """
    outcomes = []
    rank_counts = Counter()
    total = winners = 0
    for hand in hands:
        cards = hand.cards if hasattr(hand, "cards") else hand
        result = HandEvaluator.apply_rewards(HandEvaluator.evaluate(cards, minimum_pair_rank), reward_table)
        streak_multiplier = calculate_streak_multiplier(streak_counter, streak_config)
        credits = round_credits(result.multiplier * bet_amount * streak_multiplier)
        outcomes.append(HandOutcome(result, streak_multiplier, credits))
        rank_counts[result.rank] += 1
        scored = result.multiplier > 0
        if scored:
            winners += 1
        total += credits
        streak_counter = update_streak(streak_counter, scored)
    logger.debug("scored %d hands: %d winners, %d credits", len(outcomes), winners, total)
    return RoundOutcome(tuple(outcomes), total, winners, streak_counter, dict(rank_counts))


def next_minimum_bet(minimum_bet, new_round, mode=DEFAULT_GAME_MODE):
    interval = max(1, mode.minimum_bet_increase_interval)
    if new_round % interval != 0:
        return minimum_bet
    return int(minimum_bet * (1 + mode.minimum_bet_increase_percent / 100))


def advance_round(state, payout, mode=DEFAULT_GAME_MODE, rng=None, winning_hands=None, streak_counter=None):
    """Bank the payout and set up the next round.

    Bet, then hand count, are lowered to what the credits cover; if a single
    hand at that bet is still unaffordable the run is over.
    """
    credits = state.credits + payout
    new_round = state.round + 1
    minimum_bet = next_minimum_bet(state.minimum_bet, new_round, mode)

    bet = state.bet_amount
    hand_count = state.selected_hand_count
    max_affordable_bet = credits // hand_count if hand_count > 0 else 0
    if max_affordable_bet < bet:
        bet = max(minimum_bet, max_affordable_bet)
    if credits < bet * hand_count:
        hand_count = max(1, credits // bet) if bet > 0 else 1
    game_over = credits < bet * hand_count

    show_shop = new_round % mode.shop_frequency == 0 if mode.shop_frequency > 0 else False
    shop_options = select_random_shop_options(mode.shop_weights, mode.shop_option_count, rng) if show_shop else []

    new_state = replace(
        state,
        credits=credits,
        total_earnings=state.total_earnings + payout,
        round=new_round,
        minimum_bet=minimum_bet,
        bet_amount=bet,
        selected_hand_count=hand_count,
        winning_hands_last_round=state.winning_hands_last_round if winning_hands is None else winning_hands,
        streak_counter=state.streak_counter if streak_counter is None else streak_counter,
        is_endless_mode=new_round >= mode.endless_mode.start_round,
        show_shop_next_round=show_shop,
        shop_options=shop_options,
        game_over=game_over,
        game_over_reason="insufficient-credits" if game_over else None,
    )
    failure_state = check_failure_conditions(new_state, mode.endless_mode)
    new_state.failure_state = failure_state
    if failure_state is not None and not game_over:
        new_state.game_over = True
        new_state.game_over_reason = failure_state.value
    if new_state.game_over:
        logger.info("game over after round %d: %s", state.round, new_state.game_over_reason)
    else:
        logger.info("round %d: %d credits, bet %d x %d hands", new_round, credits, bet, hand_count)
    return new_state


def play_round(state, outcome, mode=DEFAULT_GAME_MODE, rng=None):
    """Advance using a scored round, carrying its winners and streak forward."""
    return advance_round(state, outcome.total_payout, mode, rng, outcome.winning_hands, outcome.streak_counter)


def draws_per_round(state):
    return 2 if state.extra_draw_purchased else 1


def draw_round_hands(state, base_hand, held_indices, rng=None):
    """Deal the round's parallel hands from the run's modified deck."""
    mods = state.deck_modifications
    return generate_parallel_hands(
        base_hand,
        held_indices,
        state.selected_hand_count,
        dead_cards=mods.dead_cards,
        removed_cards=mods.removed_cards,
        wild_cards=mods.wild_cards,
        rng=rng,
    )


def offer_devils_deal(state, base_hand, mode=DEFAULT_GAME_MODE, rng=None):
    mods = state.deck_modifications
    deck = build_draw_pool(base_hand, mods.dead_cards, mods.removed_cards, mods.wild_cards)
    return roll_devils_deal(
        base_hand,
        deck,
        mode.rewards,
        state.bet_amount,
        state.selected_hand_count,
        state.devils_deal_chance_purchases,
        state.devils_deal_cost_reduction_purchases,
        mode.devils_deal,
        mode.minimum_pair_rank,
        rng,
    )
