import random

import pytest

from drawpoker.cards import Card, ParseError, Suit, cards_from_tokens, deal, new_deck, new_shuffled_deck, parse_card


def test_parse_card_maps_rank_names_and_suits():
    assert parse_card("Ace of Spades") == Card(14, Suit.SPADES)
    assert parse_card("Two of Clubs") == Card(2, Suit.CLUBS)
    assert parse_card("Jack of Diamonds") == Card(11, Suit.DIAMONDS)
    assert parse_card("Ten of Hearts").token == "Ten of Hearts"
    assert parse_card("Queen of Hearts").label == "Q♥"


@pytest.mark.parametrize(
    "token",
    ["Ace Spades", "Ace of Spades of Clubs", "One of Hearts", "ace of Spades", "Ace of Stars", ""],
)
def test_parse_card_rejects_malformed_tokens(token):
    with pytest.raises(ParseError):
        parse_card(token)


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError, match="Invalid rank name"):
        parse_card("Eleven of Clubs")


def test_cards_from_tokens_propagates_errors():
    good = ["Two of Clubs", "Three of Clubs", "Four of Clubs", "Five of Clubs"]
    assert [card.rank for card in cards_from_tokens(good)] == [2, 3, 4, 5]
    with pytest.raises(ParseError):
        cards_from_tokens(good + ["Joker of Clubs"])


def test_card_validation_rejects_out_of_range_rank():
    with pytest.raises(ValueError, match="Invalid rank"):
        Card(1, Suit.SPADES)
    with pytest.raises(ValueError, match="Invalid suit"):
        Card(5, "Spades")  # type: ignore[arg-type]


def test_every_deck_token_parses():
    deck = new_deck()
    assert len(deck) == 52
    assert len({parse_card(token) for token in deck}) == 52


def test_shuffled_deck_is_reproducible_with_owned_rng():
    first = new_shuffled_deck(random.Random(7))
    second = new_shuffled_deck(seed=7)
    assert first == second
    assert sorted(first) == sorted(new_deck())
    assert first != new_deck()


def test_deal_returns_hand_and_remainder():
    deck = new_deck()
    hand, rest = deal(deck, 5)
    assert hand == deck[:5]
    assert rest == deck[5:]
    assert len(deck) == 52


def test_deal_raises_when_deck_exhausted():
    with pytest.raises(ValueError, match="Not enough cards"):
        deal(["Ace of Hearts", "King of Diamonds"], 5)
