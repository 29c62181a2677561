from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .evaluator import HandStrength

LOGGER = logging.getLogger("drawpoker")

HUMAN = 0
HOUSE = 1

MENU_CHOICES = {"1": "BET", "2": "CALL", "3": "FOLD"}


class InvalidInput(ValueError):
    """Human input that cannot be read as a menu choice or bet amount."""


class Phase(str, Enum):
    IDLE = "IDLE"
    BLINDS_POSTED = "BLINDS_POSTED"
    HUMAN_ACTING = "HUMAN_ACTING"
    COMPUTER_ACTING = "COMPUTER_ACTING"
    SETTLING = "SETTLING"
    RESOLVED = "RESOLVED"


class ActionType(str, Enum):
    BET = "BET"
    CALL = "CALL"
    FOLD = "FOLD"


class Outcome(str, Enum):
    FOLD = "FOLD"
    SHOWDOWN = "SHOWDOWN"
    SPLIT = "SPLIT"


@dataclass
class TableConfig:
    starting_stack: int = 1_000
    sb: int = 25
    bb: int = 50
    human_name: str = "You"
    house_name: str = "Computer"
    seed: Optional[int] = None


@dataclass(frozen=True)
class Action:
    kind: ActionType
    amount: int = 0

    @classmethod
    def bet(cls, amount: int) -> "Action":
        return cls(ActionType.BET, amount)

    @classmethod
    def call(cls) -> "Action":
        return cls(ActionType.CALL)

    @classmethod
    def fold(cls) -> "Action":
        return cls(ActionType.FOLD)


@dataclass
class Player:
    name: str
    chips: int
    hand: List[str] = field(default_factory=list)
    bet: int = 0
    folded: bool = False

    def reset_for_hand(self) -> None:
        self.hand = []
        self.bet = 0
        self.folded = False


@dataclass
class MatchState:
    """Stacks and the pot; the pot holds every chip bet this hand and is 0 once settled."""

    players: Tuple[Player, Player]
    small_blind: int
    big_blind: int
    pot: int = 0
    dealer_index: int = 0

    @classmethod
    def from_config(cls, config: TableConfig) -> "MatchState":
        return cls(
            players=(
                Player(config.human_name, config.starting_stack),
                Player(config.house_name, config.starting_stack),
            ),
            small_blind=config.sb,
            big_blind=config.bb,
        )

    def reset_for_hand(self) -> None:
        self.pot = 0
        for player in self.players:
            player.reset_for_hand()

    def stacks(self) -> List[Dict[str, object]]:
        return [
            {"seat": idx, "name": player.name, "chips": player.chips}
            for idx, player in enumerate(self.players)
        ]


@dataclass(frozen=True)
class HandResult:
    outcome: Outcome
    winner: Optional[int]
    payouts: Tuple[int, int]
    pot: int
    strengths: Optional[Tuple[HandStrength, HandStrength]] = None

    def payload(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "outcome": self.outcome.value,
            "winner": self.winner,
            "payouts": list(self.payouts),
            "pot": self.pot,
        }
        if self.strengths is not None:
            data["ranks"] = [strength.name for strength in self.strengths]
        return data


def parse_bet_amount(raw: Optional[object]) -> int:
    if isinstance(raw, bool):
        raise InvalidInput(f"Bet amount must be a number: {raw!r}")
    if isinstance(raw, int):
        amount = raw
    else:
        text = str(raw).strip() if raw is not None else ""
        try:
            amount = int(text)
        except ValueError:
            raise InvalidInput(f"Bet amount must be a number: {raw!r}") from None
    if amount < 0:
        raise InvalidInput(f"Bet amount cannot be negative: {amount}")
    return amount


def action_from_menu(choice: Optional[str], amount: Optional[object] = None) -> Action:
    """Map a raw menu choice ("1" bet, "2" call, "3" fold) onto an Action.

    Anything unrecognized folds. A bet amount that cannot be read becomes 0,
    which the betting round later clamps up to a call.
    """
    key = (choice or "").strip()
    kind = MENU_CHOICES.get(key) or MENU_CHOICES.get(_menu_key_for_name(key))
    if kind is None:
        LOGGER.warning("Unrecognized choice %r treated as fold", choice)
        return Action.fold()
    if kind != ActionType.BET.value:
        return Action(ActionType(kind))
    try:
        return Action.bet(parse_bet_amount(amount))
    except InvalidInput as exc:
        LOGGER.warning("%s; betting 0 instead", exc)
        return Action.bet(0)


def _menu_key_for_name(name: str) -> str:
    for key, kind in MENU_CHOICES.items():
        if kind == name.upper():
            return key
    return ""
