from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Sequence, Tuple

from .cards import Card, cards_from_tokens

WHEEL = [14, 5, 4, 3, 2]


class Category(IntEnum):
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


class Comparison(str, Enum):
    GREATER = "GREATER"
    LESS = "LESS"
    EQUAL = "EQUAL"


@dataclass(frozen=True, order=True)
class HandStrength:
    # Field order doubles as the comparison order: category, then tiebreak values.
    category: Category
    tiebreak: Tuple[int, ...]

    @property
    def name(self) -> str:
        return self.category.display_name


def evaluate(cards: Sequence[Card]) -> HandStrength:
    """Rank exactly five cards. Input order does not matter."""
    if len(cards) != 5:
        raise ValueError(f"Expected 5 cards, got {len(cards)}")

    ordered = sorted(cards, key=lambda card: card.rank, reverse=True)
    ranks = [card.rank for card in ordered]
    rank_counts = Counter(ranks)
    suit_counts = Counter(card.suit for card in ordered)

    is_flush = 5 in suit_counts.values()
    is_wheel = ranks == WHEEL
    is_straight = len(rank_counts) == 5 and (ranks[0] - ranks[4] == 4 or is_wheel)
    if is_wheel:
        ranks = [5, 4, 3, 2, 1]  # ace plays low

    quads = sorted((r for r, c in rank_counts.items() if c == 4), reverse=True)
    trips = sorted((r for r, c in rank_counts.items() if c == 3), reverse=True)
    pairs = sorted((r for r, c in rank_counts.items() if c == 2), reverse=True)

    if is_straight and is_flush:
        if ranks[0] == 14:
            return _strength(Category.ROYAL_FLUSH, ranks)
        return _strength(Category.STRAIGHT_FLUSH, ranks)
    if quads:
        return _strength(Category.FOUR_OF_A_KIND, quads + _kickers(ranks, quads))
    if trips and pairs:
        return _strength(Category.FULL_HOUSE, [trips[0], pairs[0]])
    if is_flush:
        return _strength(Category.FLUSH, ranks)
    if is_straight:
        return _strength(Category.STRAIGHT, ranks)
    if trips:
        return _strength(Category.THREE_OF_A_KIND, trips + _kickers(ranks, trips))
    if len(pairs) >= 2:
        return _strength(Category.TWO_PAIR, pairs[:2] + _kickers(ranks, pairs[:2]))
    if pairs:
        return _strength(Category.ONE_PAIR, pairs + _kickers(ranks, pairs))
    return _strength(Category.HIGH_CARD, ranks)


def evaluate_tokens(tokens: Sequence[str]) -> HandStrength:
    return evaluate(cards_from_tokens(tokens))


def compare(a: HandStrength, b: HandStrength) -> Comparison:
    if a.category != b.category:
        return Comparison.GREATER if a.category > b.category else Comparison.LESS
    for left, right in zip(a.tiebreak, b.tiebreak):
        if left != right:
            return Comparison.GREATER if left > right else Comparison.LESS
    return Comparison.EQUAL


def _kickers(ranks: Sequence[int], used: Sequence[int]) -> List[int]:
    return sorted((rank for rank in ranks if rank not in used), reverse=True)


def _strength(category: Category, values: Sequence[int]) -> HandStrength:
    return HandStrength(category=category, tiebreak=tuple(values))
