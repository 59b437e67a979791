import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lynrummy.cards import (
    BoardCard,
    BoardCardState,
    Card,
    CardColor,
    CardValue,
    OriginDeck,
    Suit,
    cards_from_shorthand,
    iter_double_deck,
    successor,
)


def test_successor_wraps_around_the_ace():
    assert successor(CardValue.KING) == CardValue.ACE
    assert successor(CardValue.ACE) == CardValue.TWO
    assert successor(CardValue.NINE) == CardValue.TEN


def test_color_follows_suit():
    assert Card.from_label("3C").color == CardColor.BLACK
    assert Card.from_label("3S").color == CardColor.BLACK
    assert Card.from_label("3D").color == CardColor.RED
    assert Card.from_label("3H").color == CardColor.RED


def test_label_round_trip_uses_t_for_ten():
    card = Card.from_label("TH")
    assert card.value == CardValue.TEN
    assert card.suit == Suit.HEART
    assert card.label() == "TH"
    assert card.pretty() == "10♥"


@pytest.mark.parametrize("label", ["10H", "1H", "XH", "3X", "3", ""])
def test_bad_labels_are_rejected(label):
    with pytest.raises(ValueError):
        Card.from_label(label)


def test_identity_includes_origin_pack_but_face_does_not():
    one = Card.from_label("3H", OriginDeck.DECK_ONE)
    two = Card.from_label("3H", OriginDeck.DECK_TWO)
    assert one != two
    assert one.same_face(two)


def test_double_deck_has_104_distinct_cards():
    cards = list(iter_double_deck())
    assert len(cards) == 104
    assert len(set(cards)) == 104
    assert len({card.label() for card in cards}) == 52


def test_board_card_ages_one_step_per_call():
    board_card = BoardCard(Card.from_label("5S"), BoardCardState.FRESHLY_PLAYED)
    board_card.age()
    assert board_card.state == BoardCardState.FRESHLY_PLAYED_BY_LAST_PLAYER
    board_card.age()
    assert board_card.state == BoardCardState.FIRMLY_ON_BOARD
    board_card.age()
    assert board_card.state == BoardCardState.FIRMLY_ON_BOARD


def test_cards_from_shorthand_tags_origin():
    cards = cards_from_shorthand("AS,2S", OriginDeck.DECK_TWO)
    assert [card.label() for card in cards] == ["AS", "2S"]
    assert all(card.origin_deck == OriginDeck.DECK_TWO for card in cards)
