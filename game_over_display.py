from dataclasses import dataclass

from failure_conditions import DEFAULT_ENDLESS_MODE, FailureState, get_failure_state_description

VOLUNTARY = "voluntary"
INSUFFICIENT_CREDITS = "insufficient-credits"


@dataclass(frozen=True)
class GameOverDisplay:
    title: str
    subtitle: str
    tip: str = None
    is_voluntary_end: bool = False


FAILURE_FALLBACKS = {
    FailureState.MINIMUM_BET_MULTIPLIER: (
        "You did not meet the minimum bet requirement for the end game.",
        "In the end game, your bet must stay above a multiplier of the base minimum.",
    ),
    FailureState.MINIMUM_CREDIT_EFFICIENCY: (
        "Your credit efficiency fell below the end game requirement.",
        "Focus on winning hands and shop upgrades to maintain efficiency.",
    ),
    FailureState.MINIMUM_WINNING_HANDS: (
        "You did not win enough hands to meet the end game requirement.",
        "Consider holding stronger cards or buying wild cards to improve your odds.",
    ),
    FailureState.MINIMUM_WIN_PERCENT: (
        "You did not win the required percentage of hands for the end game.",
        "The required win percentage increases each round, so plan your strategy accordingly.",
    ),
}


def format_credits(amount):
    return f"{amount:,}"


def insufficient_credits_subtitle(minimum_bet, hand_count):
    required = minimum_bet * hand_count
    return (
        f"You need at least {format_credits(required)} credits to play the next round "
        f"({format_credits(minimum_bet)} × {hand_count} hands)."
    )


def get_game_over_display(reason, state=None, endless_config=DEFAULT_ENDLESS_MODE, minimum_bet=None, hand_count=None):
    reason = reason or VOLUNTARY
    if reason == VOLUNTARY:
        return GameOverDisplay("Run Complete!", "You ended your run successfully", None, True)
    if reason == INSUFFICIENT_CREDITS:
        if minimum_bet is not None and hand_count is not None:
            subtitle = insufficient_credits_subtitle(minimum_bet, hand_count)
        else:
            subtitle = "You cannot afford the minimum bet for the next round."
        return GameOverDisplay(
            "Game Over",
            subtitle,
            "Buy upgrades in the shop to increase your earnings and survive longer!",
        )
    failure_state = FailureState(reason)
    fallback, tip = FAILURE_FALLBACKS[failure_state]
    subtitle = get_failure_state_description(failure_state, state, endless_config) if state is not None else fallback
    return GameOverDisplay("Game Over", subtitle, tip)
