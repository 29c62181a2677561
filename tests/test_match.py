import pytest

from drawpoker.match import Match
from drawpoker.models import HOUSE, HUMAN, Action, Outcome, Phase, TableConfig

from .helpers import create_match, rigged_deck, total_chips


def test_new_match_starts_with_configured_stacks():
    match = create_match()
    assert [player.chips for player in match.players] == [1_000, 1_000]
    assert match.state.dealer_index == 0
    assert not match.is_over()


def test_start_hand_posts_blinds_and_deals():
    match = create_match()
    hand = match.start_hand()
    human, house = match.players
    assert hand.phase == Phase.HUMAN_ACTING
    assert (human.bet, house.bet) == (25, 50)
    assert match.state.pot == 75
    assert len(human.hand) == len(house.hand) == 5
    assert not set(human.hand) & set(house.hand)
    assert match.start_hand_payload()["hand_no"] == 1


def test_finish_hand_rotates_dealer_and_next_hand_resets():
    match = create_match()
    hand = match.start_hand()
    hand.play_action(Action.fold())
    result = match.finish_hand()
    assert result.outcome == Outcome.FOLD
    assert match.state.dealer_index == 1

    match.start_hand()
    human, house = match.players
    assert not human.folded
    assert (human.bet, house.bet) == (50, 25)
    assert (human.chips, house.chips) == (975 - 50, 1_025 - 25)
    assert match.state.pot == 75


def test_start_hand_refuses_while_a_hand_is_open():
    match = create_match()
    match.start_hand()
    with pytest.raises(RuntimeError, match="Hand still in progress"):
        match.start_hand()
    with pytest.raises(RuntimeError, match="Hand not resolved"):
        match.finish_hand()


def test_resolved_hand_must_be_finished_before_the_next_starts():
    match = create_match()
    hand = match.start_hand()
    hand.play_action(Action.fold())
    with pytest.raises(RuntimeError, match="Hand not finished"):
        match.start_hand()
    assert match.state.dealer_index == 0

    match.finish_hand()
    with pytest.raises(RuntimeError, match="Hand already finished"):
        match.finish_hand()
    assert match.state.dealer_index == 1

    match.start_hand()
    assert match.state.dealer_index == 1
    assert (match.players[HUMAN].bet, match.players[HOUSE].bet) == (50, 25)


def test_start_hand_refuses_after_match_over():
    match = create_match()
    match.players[HOUSE].chips = 0
    assert match.is_over()
    with pytest.raises(RuntimeError, match="Match is over"):
        match.start_hand()


def test_rigged_deck_reaches_hands_through_match(monkeypatch):
    deck = rigged_deck(["As", "Ah", "Ad", "Ac", "Kd"], ["2c", "7d", "9h", "Js", "4s"])
    monkeypatch.setattr("drawpoker.match.new_shuffled_deck", lambda rng=None: list(deck))
    match = create_match()
    hand = match.start_hand()
    hand.play_action(Action.call())
    result = match.finish_hand()
    assert result.winner == HUMAN
    assert total_chips(match.state) == 2_000


def test_play_stops_when_player_quits_between_hands():
    match = create_match()
    answers = iter([True, True, False])
    seen = []

    def between(result):
        seen.append(result)
        return next(answers)

    winner = match.play(lambda hand: Action.fold(), between)

    # Folding every hand loses the small, big, then small blind.
    assert match.hand_counter == 3
    assert len(seen) == 3
    assert [player.chips for player in match.players] == [900, 1_100]
    assert winner == HOUSE
    assert match.outcome() == HOUSE


def test_quit_leaves_settled_stacks_untouched():
    match = create_match(seed=3)
    match.play(lambda hand: Action.call(), lambda result: False)
    assert match.hand_counter == 1
    assert match.hand is not None and match.hand.phase == Phase.RESOLVED
    assert match.state.pot == 0
    assert total_chips(match.state) == 2_000


def test_play_runs_until_a_stack_is_empty():
    match = Match(TableConfig(starting_stack=200, sb=25, bb=50, seed=11))
    winner = match.play(lambda hand: Action.bet(10_000))
    assert match.is_over()
    assert total_chips(match.state) == 400
    assert all(player.chips >= 0 for player in match.players)
    assert winner == match.outcome()
    assert winner in (HUMAN, HOUSE)


def test_play_forwards_events_to_sink():
    match = create_match(seed=5)
    batches = []
    match.play(lambda hand: Action.fold(), lambda result: False, batches.append)
    first, second = batches
    assert [event["ev"] for event in first] == ["POST_BLINDS", "DEAL", "DEAL"]
    assert [event["ev"] for event in second] == ["FOLD", "POT_AWARD"]


def test_outcome_is_none_on_level_stacks():
    match = create_match()
    assert match.outcome() is None
    payload = match.match_result_payload()
    assert payload["winner"] is None
    assert payload["final_stacks"][0]["chips"] == 1_000


def test_same_seed_replays_same_match():
    def run(seed):
        match = create_match(seed=seed)
        hands = []
        match.play(lambda hand: Action.call(), lambda result: len(hands) < 5 and not hands.append(result))
        return [player.chips for player in match.players], match.hand_counter

    assert run(21) == run(21)
