import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lynrummy.cards import BoardCard, Card, OriginDeck, cards_from_shorthand
from lynrummy.stack import CardStack, CardStackType, classify, get_examples, merge_stacks


def _classify(shorthand: str) -> CardStackType:
    return classify(cards_from_shorthand(shorthand))


@pytest.mark.parametrize(
    "shorthand, expected",
    [
        ("3H,3S,3D", CardStackType.SET),
        ("JH,JS,JD,JC", CardStackType.SET),
        ("3S,4S,5S", CardStackType.PURE_RUN),
        ("KS,AS,2S,3S", CardStackType.PURE_RUN),
        ("3S,4D,5S", CardStackType.RED_BLACK_RUN),
        ("QH,KC,AD,2S,3D", CardStackType.RED_BLACK_RUN),
        ("3S,4D,4H", CardStackType.BOGUS),
        ("5S,4S,3S", CardStackType.BOGUS),
        ("3S,4S,5D", CardStackType.BOGUS),
        ("3H,4D,5S", CardStackType.BOGUS),
        ("KC,KS", CardStackType.INCOMPLETE),
        ("QH,KH", CardStackType.INCOMPLETE),
        ("3S,4D", CardStackType.INCOMPLETE),
        ("7H", CardStackType.INCOMPLETE),
    ],
)
def test_classify_table(shorthand, expected):
    assert _classify(shorthand) == expected


def test_classify_empty_is_incomplete():
    assert classify([]) == CardStackType.INCOMPLETE


def test_dup_across_packs_inside_a_set():
    cards = [
        Card.from_label("3H", OriginDeck.DECK_ONE),
        Card.from_label("3S", OriginDeck.DECK_ONE),
        Card.from_label("3H", OriginDeck.DECK_TWO),
    ]
    assert classify(cards) == CardStackType.DUP


def test_dup_anywhere_in_a_longer_set():
    assert _classify("3H,3S,3D,3C,3S") == CardStackType.DUP


def test_leading_dup_pair_is_dup():
    assert _classify("3H,3H") == CardStackType.DUP
    assert _classify("3H,3H,3S") == CardStackType.DUP


def test_classify_is_idempotent():
    cards = cards_from_shorthand("QH,KC,AD,2S,3D")
    results = {classify(cards) for _ in range(5)}
    assert results == {CardStackType.RED_BLACK_RUN}


def test_examples_match_their_expected_types():
    good, bad = get_examples()
    for example in good + bad:
        assert example.stack().stack_type == example.expected_type, example.comment


def test_empty_stack_is_rejected():
    with pytest.raises(ValueError):
        CardStack([])


def test_merge_tries_both_orders():
    run = CardStack.from_shorthand("4S,5S,6S")
    before = CardStack.from_shorthand("3S")
    after = CardStack.from_shorthand("7S")

    merged_after = merge_stacks(run, after)
    merged_before = merge_stacks(run, before)

    assert merged_after is not None and merged_after.label() == "4S,5S,6S,7S"
    assert merged_before is not None and merged_before.label() == "3S,4S,5S,6S"
    assert merged_before.stack_type == CardStackType.PURE_RUN


def test_merge_is_symmetric_in_success():
    a = CardStack.from_shorthand("3H,3S,3D")
    b = CardStack.from_shorthand("3C")
    c = CardStack.from_shorthand("9D")
    assert merge_stacks(a, b) is not None
    assert merge_stacks(b, a) is not None
    assert merge_stacks(a, c) is None
    assert merge_stacks(c, a) is None


def test_merge_builds_a_new_stack():
    a = CardStack.from_shorthand("4S,5S,6S")
    b = CardStack.from_shorthand("7S")
    merged = merge_stacks(a, b)
    assert merged is not a and merged is not b
    assert a.label() == "4S,5S,6S"


def test_merge_rejects_dup():
    a = CardStack.from_shorthand("3H,3S,3D")
    b = CardStack.from_shorthand("3H", OriginDeck.DECK_TWO)
    assert merge_stacks(a, b) is None
    assert not a.is_mergeable_with(b)


def test_stack_is_never_mergeable_with_its_copy():
    stack = CardStack.from_shorthand("3H")
    assert not stack.is_mergeable_with(stack.clone())
    assert stack.is_mergeable_with(CardStack.from_shorthand("3S"))


def test_clone_owns_fresh_board_cards():
    stack = CardStack.from_shorthand("3S,4S,5S")
    copy = stack.clone()
    assert copy == stack
    assert all(a is not b for a, b in zip(copy.board_cards, stack.board_cards))
    assert isinstance(copy.board_cards[0], BoardCard)


def test_stack_flags():
    assert CardStack.from_shorthand("3S,4S").incomplete()
    assert CardStack.from_shorthand("3S,4D,4H").problematic()
    assert CardStack.from_shorthand("3S,4S,5S").is_complete()
