from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence

from .cards import deal
from .evaluator import Comparison, HandStrength, compare, evaluate_tokens
from .models import (
    HOUSE,
    HUMAN,
    Action,
    ActionType,
    HandResult,
    MatchState,
    Outcome,
    Phase,
    Player,
)
from .opponent import choose_action, raise_target

LOGGER = logging.getLogger("drawpoker")

HAND_SIZE = 5

# HandRound holds the rules for a single hand. Nothing here reads input or
# prints; callers turn the returned events into text or network messages.

Event = Dict[str, object]


class HandRound:
    """One heads-up hand: blinds, one decision each, then settlement."""

    def __init__(self, state: MatchState, rng: Optional[random.Random] = None, hand_no: int = 0) -> None:
        self.state = state
        self.rng = rng or random.Random()
        self.hand_no = hand_no
        self.phase = Phase.IDLE
        self.deck: List[str] = []
        self.result: Optional[HandResult] = None
        self.events: List[Event] = []

    @property
    def human(self) -> Player:
        return self.state.players[HUMAN]

    @property
    def house(self) -> Player:
        return self.state.players[HOUSE]

    # Phase transitions ----------------------------------------------

    def post_blinds(self) -> List[Event]:
        self._require(Phase.IDLE)
        sb_seat = self.state.dealer_index
        bb_seat = 1 - sb_seat
        sb = self._commit(sb_seat, self.state.small_blind)
        bb = self._commit(bb_seat, self.state.big_blind)
        self._enter(Phase.BLINDS_POSTED)
        return self._record(
            {
                "ev": "POST_BLINDS",
                "sb_seat": sb_seat,
                "bb_seat": bb_seat,
                "sb": sb,
                "bb": bb,
                "pot": self.state.pot,
            }
        )

    def deal(self, deck: Sequence[str]) -> List[Event]:
        self._require(Phase.BLINDS_POSTED)
        remaining = list(deck)
        events: List[Event] = []
        for seat, player in enumerate(self.state.players):
            player.hand, remaining = deal(remaining, HAND_SIZE)
            events.append({"ev": "DEAL", "seat": seat, "count": HAND_SIZE})
        self.deck = remaining
        self._enter(Phase.HUMAN_ACTING)
        return self._record(*events)

    def human_action(self, action: Action) -> List[Event]:
        self._require(Phase.HUMAN_ACTING)
        kind = getattr(action, "kind", None)
        if kind not in (ActionType.BET, ActionType.CALL, ActionType.FOLD):
            LOGGER.warning("Unrecognized action %r treated as fold", action)
            kind = ActionType.FOLD
        event = self._apply(HUMAN, kind, getattr(action, "amount", 0))
        self._enter(Phase.SETTLING if self.human.folded else Phase.COMPUTER_ACTING)
        return self._record(event)

    def computer_action(self) -> List[Event]:
        self._require(Phase.COMPUTER_ACTING)
        strength = evaluate_tokens(self.house.hand)
        kind = choose_action(strength.category, self.rng)
        LOGGER.debug("House holds %s and chooses %s", strength.name, kind.value)
        target = raise_target(self.human.bet, strength.category) if kind == ActionType.BET else 0
        event = self._apply(HOUSE, kind, target)
        self._enter(Phase.SETTLING)
        return self._record(event)

    def resolve(self) -> List[Event]:
        self._require(Phase.SETTLING)
        pot = self.state.pot
        events: List[Event] = []
        strengths = None

        if self.human.folded or self.house.folded:
            winner: Optional[int] = HOUSE if self.human.folded else HUMAN
            outcome = Outcome.FOLD
        else:
            strengths = (evaluate_tokens(self.human.hand), evaluate_tokens(self.house.hand))
            for seat, player in enumerate(self.state.players):
                events.append(
                    {
                        "ev": "SHOWDOWN",
                        "seat": seat,
                        "hand": list(player.hand),
                        "rank": strengths[seat].name,
                    }
                )
            winner, outcome = _showdown_winner(strengths[HUMAN], strengths[HOUSE])

        if winner is None:
            # Odd chip goes to the second seat.
            half = pot // 2
            payouts = (half, pot - half)
        else:
            payouts = (pot, 0) if winner == HUMAN else (0, pot)

        for seat, amount in enumerate(payouts):
            if amount > 0:
                self.state.players[seat].chips += amount
                events.append({"ev": "POT_AWARD", "seat": seat, "amount": amount})
        self.state.pot = 0

        self.result = HandResult(
            outcome=outcome,
            winner=winner,
            payouts=payouts,
            pot=pot,
            strengths=strengths,
        )
        LOGGER.debug("Hand %s settled: %s", self.hand_no, self.result.payload())
        self._enter(Phase.RESOLVED)
        return self._record(*events)

    def play_action(self, action: Action) -> List[Event]:
        """Apply the human's decision and run the hand through to settlement."""
        events = self.human_action(action)
        if self.phase == Phase.COMPUTER_ACTING:
            events.extend(self.computer_action())
        events.extend(self.resolve())
        return events

    # Helpers ---------------------------------------------------------

    def guidance(self) -> Dict[str, int]:
        """Numbers shown to the human before they decide."""
        call_target = self.house.bet
        return {
            "call_target": call_target,
            "to_call": min(max(call_target - self.human.bet, 0), self.human.chips),
            "min_raise_to": call_target + self.state.big_blind,
            "max_bet": self.human.chips + self.human.bet,
        }

    def _apply(self, seat: int, kind: ActionType, amount: int) -> Event:
        player = self.state.players[seat]
        opponent = self.state.players[1 - seat]

        if kind == ActionType.FOLD:
            player.folded = True
            return {"ev": "FOLD", "seat": seat, "forfeited": player.bet}

        call_target = max(opponent.bet, player.bet)
        if kind == ActionType.BET and amount <= call_target:
            # Bets that do not top the table are clamped up to a call.
            LOGGER.info("Bet to %s does not exceed %s; calling instead", amount, call_target)
            kind = ActionType.CALL

        if kind == ActionType.CALL:
            added = self._commit(seat, opponent.bet - player.bet)
            return {"ev": "CALL", "seat": seat, "amount": added, "total": player.bet, "pot": self.state.pot}

        added = self._commit(seat, amount - player.bet)
        return {"ev": "BET", "seat": seat, "amount": added, "total": player.bet, "pot": self.state.pot}

    def _commit(self, seat: int, amount: int) -> int:
        player = self.state.players[seat]
        amount = max(0, min(amount, player.chips))
        player.chips -= amount
        player.bet += amount
        self.state.pot += amount
        return amount

    def _require(self, phase: Phase) -> None:
        if self.phase != phase:
            raise RuntimeError(f"Expected phase {phase.value}, hand is in {self.phase.value}")

    def _enter(self, phase: Phase) -> None:
        LOGGER.debug("Hand %s: %s -> %s", self.hand_no, self.phase.value, phase.value)
        self.phase = phase

    def _record(self, *events: Event) -> List[Event]:
        self.events.extend(events)
        return list(events)


def _showdown_winner(human: HandStrength, house: HandStrength):
    result = compare(human, house)
    if result == Comparison.GREATER:
        return HUMAN, Outcome.SHOWDOWN
    if result == Comparison.LESS:
        return HOUSE, Outcome.SHOWDOWN
    return None, Outcome.SPLIT
