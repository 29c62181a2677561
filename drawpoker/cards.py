from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

RANK_NAMES = (
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Jack",
    "Queen",
    "King",
    "Ace",
)
RANK_VALUE = {name: idx for idx, name in enumerate(RANK_NAMES, start=2)}
RANK_SYMBOL = {value: symbol for value, symbol in zip(range(2, 15), "23456789TJQKA")}


class Suit(str, Enum):
    SPADES = "Spades"
    DIAMONDS = "Diamonds"
    HEARTS = "Hearts"
    CLUBS = "Clubs"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOL[self]


_SUIT_SYMBOL = {Suit.SPADES: "♠", Suit.DIAMONDS: "♦", Suit.HEARTS: "♥", Suit.CLUBS: "♣"}


class ParseError(ValueError):
    """A deck token did not look like ``"<Rank> of <Suit>"``."""


@dataclass(frozen=True)
class Card:
    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if self.rank not in RANK_SYMBOL:
            raise ValueError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def token(self) -> str:
        return f"{RANK_NAMES[self.rank - 2]} of {self.suit.value}"

    @property
    def label(self) -> str:
        return f"{RANK_SYMBOL[self.rank]}{self.suit.symbol}"


def parse_card(token: str) -> Card:
    parts = token.split(" of ")
    if len(parts) != 2:
        raise ParseError(f"Invalid card token: {token!r}")
    rank_name, suit_name = parts
    if rank_name not in RANK_VALUE:
        raise ParseError(f"Invalid rank name: {rank_name!r}")
    try:
        suit = Suit(suit_name)
    except ValueError:
        raise ParseError(f"Invalid suit name: {suit_name!r}") from None
    return Card(RANK_VALUE[rank_name], suit)


def cards_from_tokens(tokens: Sequence[str]) -> List[Card]:
    return [parse_card(token) for token in tokens]


# Deck collaborator: plain string tokens, shuffled with a caller-owned RNG.


def new_deck() -> List[str]:
    return [f"{rank} of {suit.value}" for suit in Suit for rank in RANK_NAMES]


def new_shuffled_deck(rng: Optional[random.Random] = None, seed: Optional[int] = None) -> List[str]:
    if rng is None:
        rng = random.Random(seed)
    deck = new_deck()
    rng.shuffle(deck)
    return deck


def deal(deck: Sequence[str], count: int) -> Tuple[List[str], List[str]]:
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    return list(deck[:count]), list(deck[count:])


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]
