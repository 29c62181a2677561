from __future__ import annotations

import random

from .evaluator import Category
from .models import ActionType

RAISE_BASE = 50
RAISE_PER_CATEGORY = 20


def choose_action(category: int, rng: random.Random) -> ActionType:
    """House bot: the stronger its own five cards, the more it puts in."""
    if category >= Category.FLUSH:
        return ActionType.BET
    if category >= Category.TWO_PAIR:
        return (ActionType.CALL, ActionType.BET)[rng.randrange(2)]
    if category == Category.ONE_PAIR:
        return (ActionType.FOLD, ActionType.CALL, ActionType.BET)[rng.randrange(3)]

    # High card folds, bluffing one time in four.
    if rng.randrange(4) == 0:
        return (ActionType.CALL, ActionType.BET)[rng.randrange(2)]
    return ActionType.FOLD


def raise_target(call_target: int, category: int) -> int:
    return call_target + RAISE_BASE + RAISE_PER_CATEGORY * int(category)
