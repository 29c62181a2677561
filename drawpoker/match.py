from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional

from .cards import new_shuffled_deck
from .game import Event, HandRound
from .models import Action, HandResult, MatchState, Phase, TableConfig

LOGGER = logging.getLogger("drawpoker")

Decide = Callable[[HandRound], Action]
BetweenHands = Callable[[HandResult], bool]
EventSink = Callable[[List[Event]], None]


class Match:
    """Heads-up session: hands repeat until one stack is empty or the human quits."""

    def __init__(self, config: TableConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng or random.Random(config.seed)
        self.state = MatchState.from_config(config)
        self.hand_counter = 0
        self.hand: Optional[HandRound] = None
        self.hand_finished = True

    @property
    def players(self):
        return self.state.players

    def is_over(self) -> bool:
        return any(player.chips <= 0 for player in self.state.players)

    def start_hand(self) -> HandRound:
        if self.is_over():
            raise RuntimeError("Match is over")
        if self.hand is not None and self.hand.phase != Phase.RESOLVED:
            raise RuntimeError("Hand still in progress")
        if not self.hand_finished:
            raise RuntimeError("Hand not finished")

        self.state.reset_for_hand()
        self.hand_counter += 1
        hand = HandRound(self.state, rng=self.rng, hand_no=self.hand_counter)
        hand.post_blinds()
        hand.deal(new_shuffled_deck(self.rng))
        self.hand = hand
        self.hand_finished = False
        LOGGER.debug(
            "Hand %s started, dealer %s", self.hand_counter, self.state.players[self.state.dealer_index].name
        )
        return hand

    def finish_hand(self) -> HandResult:
        hand = self.hand
        if hand is None or hand.phase != Phase.RESOLVED or hand.result is None:
            raise RuntimeError("Hand not resolved")
        if self.hand_finished:
            raise RuntimeError("Hand already finished")
        self.hand_finished = True
        self.state.dealer_index = 1 - self.state.dealer_index
        return hand.result

    def outcome(self) -> Optional[int]:
        """Seat with the larger stack, or None when the stacks are level."""
        human, house = (player.chips for player in self.state.players)
        if human == house:
            return None
        return 0 if human > house else 1

    def start_hand_payload(self) -> Dict[str, object]:
        return {
            "hand_no": self.hand_counter,
            "dealer": self.state.dealer_index,
            "stacks": self.state.stacks(),
        }

    def match_result_payload(self) -> Dict[str, object]:
        winner = self.outcome()
        return {
            "hands_played": self.hand_counter,
            "winner": None if winner is None else {"seat": winner, "name": self.state.players[winner].name},
            "final_stacks": self.state.stacks(),
        }

    def play(
        self,
        decide: Decide,
        between_hands: Optional[BetweenHands] = None,
        on_events: Optional[EventSink] = None,
    ) -> Optional[int]:
        """Run hands until the match ends; returns the winning seat or None."""
        while not self.is_over():
            hand = self.start_hand()
            if on_events:
                on_events(list(hand.events))
            events = hand.play_action(decide(hand))
            if on_events:
                on_events(events)
            result = self.finish_hand()
            if self.is_over():
                break
            if between_hands is not None and not between_hands(result):
                LOGGER.info("Match stopped after %s hands", self.hand_counter)
                break
        return self.outcome()
