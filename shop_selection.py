import logging

import numpy as np

logger = logging.getLogger(__name__)

MAX_RARITY = 4


def select_random_shop_options(weights, count, rng=None):
    """Weighted picks without replacement, topped up by cycling the options heaviest first.

    Always returns ``count`` options unless ``weights`` is empty.
    """
    if rng is None:
        rng = np.random.default_rng()
    available = list(weights.items())
    selected = []
    while len(selected) < count and available:
        cumulative = np.cumsum([weight for _, weight in available])
        roll = rng.random() * cumulative[-1]
        # first option whose running total reaches the roll
        index = min(int(np.searchsorted(cumulative, roll, side="left")), len(available) - 1)
        option, _ = available.pop(index)
        selected.append(option)

    if len(selected) < count and weights:
        by_weight = sorted(weights.items(), key=lambda item: -item[1])
        i = 0
        while len(selected) < count:
            selected.append(by_weight[i % len(by_weight)][0])
            i += 1
    logger.debug("shop options: %s", selected)
    return selected


def pick_rarity(max_rarity, rarity_chances, rng):
    """Roll a rarity 1..max_rarity; missing or short chances mean every rarity is equally likely."""
    if rarity_chances and len(rarity_chances) >= max_rarity:
        chances = np.array(rarity_chances[:max_rarity], dtype=float)
    else:
        chances = np.full(max_rarity, 1.0 / max_rarity)
    total = chances.sum()
    if total > 0:
        chances = chances / total
    roll = rng.random()
    cumulative = np.cumsum(chances)
    for rarity in range(1, max_rarity + 1):
        if roll < cumulative[rarity - 1]:
            return rarity
    return max_rarity


def select_shop_options_by_rarity(slots, items, count=None, rng=None):
    """Fill each slot with an item of the rolled rarity, avoiding repeats while possible."""
    if rng is None:
        rng = np.random.default_rng()
    if not slots or not items:
        return []
    keys = list(items)
    target = max(1, count if count is not None else len(slots))
    selected = []
    for i in range(target):
        slot = slots[i % len(slots)]
        max_rarity = min(MAX_RARITY, max(1, slot.max_rarity))
        rarity = pick_rarity(max_rarity, slot.rarity_chances, rng)
        unused = [key for key in keys if key not in selected]
        of_rarity = [key for key in unused if items[key] == rarity]
        pool = of_rarity or unused or keys
        selected.append(pool[int(rng.integers(len(pool)))])
    return selected
