"""Heads-up five-card draw engine shared by the console and practice servers."""

from .cards import Card, ParseError, Suit, cards_from_tokens, deal, new_shuffled_deck, parse_card
from .evaluator import Category, Comparison, HandStrength, compare, evaluate
from .game import HandRound
from .match import Match
from .models import Action, ActionType, HandResult, InvalidInput, MatchState, Outcome, Phase, Player, TableConfig

__all__ = [
    "Card",
    "ParseError",
    "Suit",
    "cards_from_tokens",
    "deal",
    "new_shuffled_deck",
    "parse_card",
    "Category",
    "Comparison",
    "HandStrength",
    "compare",
    "evaluate",
    "HandRound",
    "Match",
    "Action",
    "ActionType",
    "HandResult",
    "InvalidInput",
    "MatchState",
    "Outcome",
    "Phase",
    "Player",
    "TableConfig",
]
