import random

from drawpoker.match import Match
from drawpoker.models import Action, Phase, TableConfig

from .helpers import total_chips


def random_action(rng: random.Random, max_bet: int) -> Action:
    roll = rng.randrange(3)
    if roll == 0:
        return Action.fold()
    if roll == 1:
        return Action.call()
    return Action.bet(rng.randint(0, max_bet + 100))


def test_hundreds_of_matches_keep_chip_accounting_exact():
    hands_played = 0
    for seed in range(200):
        match = Match(TableConfig(starting_stack=500, sb=25, bb=50, seed=seed))
        driver = random.Random(seed + 10_000)
        start_total = total_chips(match.state)

        for _ in range(60):
            if match.is_over():
                break
            hand = match.start_hand()
            players = match.players
            assert match.state.pot == sum(player.bet for player in players)

            hand.human_action(random_action(driver, hand.guidance()["max_bet"]))
            assert match.state.pot == sum(player.bet for player in players)
            if hand.phase == Phase.COMPUTER_ACTING:
                hand.computer_action()
            assert match.state.pot == sum(player.bet for player in players)
            assert all(player.chips >= 0 for player in players)

            hand.resolve()
            match.finish_hand()
            hands_played += 1
            assert match.state.pot == 0
            assert total_chips(match.state) == start_total

    assert hands_played >= 200
