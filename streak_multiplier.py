import math

from game_config import StreakConfig

# tier search stops here for very long streaks
MAX_TIERS = 100

DEFAULT_STREAK_CONFIG = StreakConfig()


def tier_threshold(tier, config=DEFAULT_STREAK_CONFIG):
    """Streak count at which ``tier`` starts; tier 0 starts at the base threshold."""
    threshold = config.base_threshold
    for i in range(tier):
        threshold += config.threshold_increment * config.exponential_growth ** i
    return math.ceil(threshold)


def current_tier(streak, config=DEFAULT_STREAK_CONFIG):
    """Highest tier whose threshold ``streak`` has reached, -1 below the base threshold."""
    if streak < config.base_threshold:
        return -1
    tier = 0
    while tier < MAX_TIERS:
        if streak < tier_threshold(tier + 1, config):
            return tier
        tier += 1
    return tier


def calculate_streak_multiplier(streak, config=DEFAULT_STREAK_CONFIG):
    if not config.enabled or streak < config.base_threshold:
        return 1.0
    return config.base_multiplier + current_tier(streak, config) * config.multiplier_increment


def get_next_threshold(streak, config=DEFAULT_STREAK_CONFIG):
    if not config.enabled or streak < config.base_threshold:
        return config.base_threshold
    return tier_threshold(current_tier(streak, config) + 1, config)


def get_streak_progress(streak, config=DEFAULT_STREAK_CONFIG):
    """Percent (0-100) of the way from the current tier to the next one."""
    if streak < config.base_threshold:
        if config.base_threshold <= 0:
            return 0.0
        return max(0.0, min(100.0, streak / config.base_threshold * 100))
    tier = current_tier(streak, config)
    previous = tier_threshold(tier, config)
    span = tier_threshold(tier + 1, config) - previous
    if span <= 0:
        return 100.0
    return max(0.0, min(100.0, (streak - previous) / span * 100))


def update_streak(counter, scored):
    if scored:
        return counter + 1
    return max(0, counter - 1)
