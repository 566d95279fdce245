import math
from enum import Enum

from game_config import EndlessModeConfig


class FailureState(str, Enum):
    MINIMUM_BET_MULTIPLIER = "minimum-bet-multiplier"
    MINIMUM_CREDIT_EFFICIENCY = "minimum-credit-efficiency"
    MINIMUM_WINNING_HANDS = "minimum-winning-hands"
    MINIMUM_WIN_PERCENT = "minimum-win-percent"

    def __str__(self):
        return self.value


DEFAULT_ENDLESS_MODE = EndlessModeConfig()


def _num(value):
    return f"{value:g}"


def required_bet(state, endless_config=DEFAULT_ENDLESS_MODE):
    return math.ceil(state.base_minimum_bet * endless_config.failure_conditions.minimum_bet_multiplier.value)


def credit_efficiency(state):
    return state.total_earnings / state.round if state.round > 0 else 0


def required_win_percent(state, endless_config=DEFAULT_ENDLESS_MODE):
    win_percent = endless_config.failure_conditions.minimum_win_percent
    rounds_in_endless = max(0, state.round - endless_config.start_round)
    return min(win_percent.start_percent + (rounds_in_endless - 1) * win_percent.increment_per_round, win_percent.max_percent)


def check_failure_conditions(state, endless_config=DEFAULT_ENDLESS_MODE):
    """First failing endless-mode condition, or None.

    Order: bet multiplier, credit efficiency, winning hands, win percent.
    """
    if not state.is_endless_mode or endless_config is None:
        return None
    conditions = endless_config.failure_conditions

    if conditions.minimum_bet_multiplier.enabled:
        if state.bet_amount < required_bet(state, endless_config):
            return FailureState.MINIMUM_BET_MULTIPLIER

    if conditions.minimum_credit_efficiency.enabled:
        if credit_efficiency(state) < conditions.minimum_credit_efficiency.value:
            return FailureState.MINIMUM_CREDIT_EFFICIENCY

    if conditions.minimum_winning_hands_per_round.enabled:
        if state.winning_hands_last_round < conditions.minimum_winning_hands_per_round.value:
            return FailureState.MINIMUM_WINNING_HANDS

    # ramps up only once the endless start round has passed
    if conditions.minimum_win_percent.enabled and state.round > endless_config.start_round:
        required_wins = math.ceil(state.selected_hand_count * required_win_percent(state, endless_config) / 100)
        if state.winning_hands_last_round < required_wins:
            return FailureState.MINIMUM_WIN_PERCENT

    return None


def get_failure_state_description(failure_state, state, endless_config=DEFAULT_ENDLESS_MODE):
    if not failure_state or endless_config is None:
        return ""
    conditions = endless_config.failure_conditions
    if failure_state == FailureState.MINIMUM_BET_MULTIPLIER:
        multiplier = _num(conditions.minimum_bet_multiplier.value)
        return f"Bet must be ≥ {required_bet(state, endless_config)} ({multiplier}x base)"
    if failure_state == FailureState.MINIMUM_CREDIT_EFFICIENCY:
        efficiency = credit_efficiency(state)
        return f"Efficiency: {efficiency:.1f}/{_num(conditions.minimum_credit_efficiency.value)} credits/round"
    if failure_state == FailureState.MINIMUM_WINNING_HANDS:
        required = _num(conditions.minimum_winning_hands_per_round.value)
        return f"Win ≥ {required} hands/round (last: {state.winning_hands_last_round})"
    if failure_state == FailureState.MINIMUM_WIN_PERCENT:
        percent = _num(required_win_percent(state, endless_config))
        return f"You must win at least {percent}% of the hands played this round"
    return ""


def get_endless_mode_conditions(state, endless_config=DEFAULT_ENDLESS_MODE):
    """Player-facing list of every enabled condition, empty outside endless mode."""
    if not state.is_endless_mode or endless_config is None:
        return []
    conditions = endless_config.failure_conditions
    lines = []
    if conditions.minimum_bet_multiplier.enabled:
        multiplier = _num(conditions.minimum_bet_multiplier.value)
        lines.append(f"Bet must be ≥ {required_bet(state, endless_config)} ({multiplier}x base minimum)")
    if conditions.minimum_credit_efficiency.enabled:
        lines.append(f"Efficiency must be ≥ {_num(conditions.minimum_credit_efficiency.value)} credits/round")
    if conditions.minimum_winning_hands_per_round.enabled:
        lines.append(f"Win ≥ {_num(conditions.minimum_winning_hands_per_round.value)} hands per round")
    if conditions.minimum_win_percent.enabled:
        lines.append(f"Win at least {_num(required_win_percent(state, endless_config))}% of hands this round")
    return lines
