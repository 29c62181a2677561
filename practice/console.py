from __future__ import annotations

from typing import Callable, List, Optional

from drawpoker.cards import cards_to_labels, cards_from_tokens
from drawpoker.evaluator import evaluate_tokens
from drawpoker.game import Event, HandRound
from drawpoker.match import Match
from drawpoker.models import HUMAN, Action, HandResult, TableConfig, action_from_menu

# ConsoleGame is the terminal front end: it reads the human's choices and
# turns engine events into text. All rules stay in drawpoker.

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class ConsoleGame:
    def __init__(self, config: TableConfig, read: InputFn = input, write: OutputFn = print) -> None:
        self.match = Match(config)
        self.read = read
        self.write = write

    def run(self) -> Optional[int]:
        self.write("=== Welcome to Five Card Draw! ===")
        self.write(f"You start with {self.match.config.starting_stack} chips. Good luck!")
        self.write("WARNING: Folding means you lose any chips you've already bet (including blinds)!")

        winner = self.match.play(self._decide, self._between_hands, self._show_events)
        self._game_over(winner)
        return winner

    # Input collaborator ---------------------------------------------

    def _decide(self, hand: HandRound) -> Action:
        self._show_hand(hand)
        self.write("")
        self.write("What would you like to do?")
        self.write("1. Bet/Raise")
        self.write("2. Call")
        self.write("3. Fold (WARNING: You'll lose your blinds/bets!)")
        choice = self.read("Enter your choice (1-3): ").strip()
        if choice != "1":
            return action_from_menu(choice)

        guide = hand.guidance()
        self.write(f"Current bet to call: {guide['call_target']}")
        self.write(f"Minimum raise: {guide['min_raise_to']}")
        amount = self.read(f"How much would you like to bet? (Max: {guide['max_bet']}): ")
        return action_from_menu(choice, amount)

    def _between_hands(self, result: HandResult) -> bool:
        answer = self.read("Press Enter to continue to next hand (or type 'quit' to exit): ")
        return answer.strip().lower() != "quit"

    # Output collaborator --------------------------------------------

    def _show_hand(self, hand: HandRound) -> None:
        human = hand.human
        strength = evaluate_tokens(human.hand)
        self.write("")
        self.write("=== Your Hand ===")
        self.write(", ".join(human.hand))
        self.write("  ".join(cards_to_labels(cards_from_tokens(human.hand))))
        self.write(f"Your hand: {strength.name}")
        self.write(f"Your chips: {human.chips}")
        self.write(f"Current pot: {hand.state.pot}")
        self.write(f"Your current bet: {human.bet}")

    def _show_events(self, events: List[Event]) -> None:
        players = self.match.players
        for event in events:
            kind = event["ev"]
            seat = event.get("seat")
            name = players[seat].name if isinstance(seat, int) else ""
            if kind == "POST_BLINDS":
                dealer = players[self.match.state.dealer_index].name
                self.write("")
                self.write("=" * 50)
                self.write(f"Starting hand {self.match.hand_counter}... (Dealer: {dealer})")
                self.write(f"{players[event['sb_seat']].name} posts small blind: {event['sb']} chips")
                self.write(f"{players[event['bb_seat']].name} posts big blind: {event['bb']} chips")
                self.write(f"Pot after blinds: {event['pot']} chips")
            elif kind == "CALL":
                self.write(f"{name} -> CALL {event['amount']} (total bet {event['total']}, pot {event['pot']})")
            elif kind == "BET":
                self.write(f"{name} -> BET to {event['total']} (+{event['amount']}, pot {event['pot']})")
            elif kind == "FOLD":
                self.write(f"{name} -> FOLD (forfeits {event['forfeited']} chips already bet)")
            elif kind == "SHOWDOWN":
                if seat == HUMAN:
                    self.write("")
                    self.write("=== SHOWDOWN ===")
                self.write(f"{name}: {', '.join(event['hand'])} ({event['rank']})")
            elif kind == "POT_AWARD":
                self.write(f"{name} wins {event['amount']} chips")
        if events and events[-1]["ev"] == "POT_AWARD":
            human, house = players
            self.write("")
            self.write(f"Chip counts after hand - {human.name}: {human.chips}, {house.name}: {house.chips}")

    def _game_over(self, winner: Optional[int]) -> None:
        human, house = self.match.players
        self.write("")
        self.write("=== GAME OVER ===")
        if winner is None:
            self.write("It's a tie!")
        elif winner == HUMAN:
            self.write("Congratulations! You won overall!")
        else:
            self.write(f"{house.name} wins overall! Better luck next time!")
        self.write(f"Final scores - {human.name}: {human.chips}, {house.name}: {house.chips}")
