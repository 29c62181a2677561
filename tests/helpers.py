from __future__ import annotations

import random
from typing import Iterable, List, Optional

from drawpoker.cards import RANK_NAMES, Suit, new_deck
from drawpoker.game import HandRound
from drawpoker.match import Match
from drawpoker.models import MatchState, Player, TableConfig

_SHORT_RANKS = dict(zip("23456789TJQKA", RANK_NAMES))
_SHORT_SUITS = {"s": Suit.SPADES, "d": Suit.DIAMONDS, "h": Suit.HEARTS, "c": Suit.CLUBS}


def tokens(*labels: str) -> List[str]:
    """Expand short labels like "As" into deck tokens like "Ace of Spades"."""
    return [f"{_SHORT_RANKS[label[0]]} of {_SHORT_SUITS[label[1]].value}" for label in labels]


def rigged_deck(human: Iterable[str], house: Iterable[str]) -> List[str]:
    top = tokens(*human) + tokens(*house)
    return top + [token for token in new_deck() if token not in top]


class ScriptedRandom(random.Random):
    """Random source whose randrange answers come from a fixed script."""

    def __init__(self, draws: Iterable[int]) -> None:
        super().__init__(0)
        self.draws = list(draws)

    def randrange(self, *args, **kwargs):  # type: ignore[override]
        if not self.draws:
            raise AssertionError("ScriptedRandom ran out of draws")
        return self.draws.pop(0)


def create_state(
    *,
    human_chips: int = 1_000,
    house_chips: int = 1_000,
    sb: int = 25,
    bb: int = 50,
    dealer: int = 0,
) -> MatchState:
    return MatchState(
        players=(Player("You", human_chips), Player("Computer", house_chips)),
        small_blind=sb,
        big_blind=bb,
        dealer_index=dealer,
    )


def start_round(
    state: MatchState,
    human: Iterable[str],
    house: Iterable[str],
    rng: Optional[random.Random] = None,
) -> HandRound:
    hand = HandRound(state, rng=rng, hand_no=1)
    hand.post_blinds()
    hand.deal(rigged_deck(human, house))
    return hand


def create_match(*, seed: int = 42, starting_stack: int = 1_000, sb: int = 25, bb: int = 50) -> Match:
    return Match(TableConfig(starting_stack=starting_stack, sb=sb, bb=bb, seed=seed))


def total_chips(state: MatchState) -> int:
    return sum(player.chips for player in state.players) + state.pot
