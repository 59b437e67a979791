from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .cards import BoardCard, BoardCardState, Card, HandCard, OriginDeck, cards_from_shorthand, successor


class CardStackType(str, Enum):
    INCOMPLETE = "incomplete"
    BOGUS = "bogus"
    DUP = "dup"
    SET = "set"
    PURE_RUN = "pure run"
    RED_BLACK_RUN = "red/black alternating"


COMPLETE_TYPES = frozenset({CardStackType.SET, CardStackType.PURE_RUN, CardStackType.RED_BLACK_RUN})
PROBLEMATIC_TYPES = frozenset({CardStackType.BOGUS, CardStackType.DUP})


def pair_type(first: Card, second: Card) -> CardStackType:
    """Relate two adjacent cards, in that order.

    Never returns INCOMPLETE: a pair is only ever the start of a stack.
    """
    if first.same_face(second):
        return CardStackType.DUP
    if first.value == second.value:
        return CardStackType.SET
    if second.value == successor(first.value):
        if first.suit == second.suit:
            return CardStackType.PURE_RUN
        if first.color != second.color:
            return CardStackType.RED_BLACK_RUN
    return CardStackType.BOGUS


def has_duplicate_cards(cards: Sequence[Card]) -> bool:
    for i in range(len(cards)):
        for j in range(i + 1, len(cards)):
            if cards[i].same_face(cards[j]):
                return True
    return False


def follows_consistent_pattern(cards: Sequence[Card], stack_type: CardStackType) -> bool:
    return all(pair_type(cards[i], cards[i + 1]) == stack_type for i in range(len(cards) - 1))


def classify(cards: Sequence[Card]) -> CardStackType:
    """Classify an ordered run of cards.

    This is the whole rulebook: only SET, PURE_RUN and RED_BLACK_RUN may
    stay on the board at the end of a turn. Card order matters, since runs
    are checked with a directional successor test.
    """
    if len(cards) <= 1:
        return CardStackType.INCOMPLETE

    provisional = pair_type(cards[0], cards[1])
    if provisional in PROBLEMATIC_TYPES:
        return provisional

    if len(cards) == 2:
        return CardStackType.INCOMPLETE

    # Runs cannot repeat a card, sets can, so only sets get the full scan.
    if provisional == CardStackType.SET and has_duplicate_cards(cards):
        return CardStackType.DUP

    if not follows_consistent_pattern(cards, provisional):
        return CardStackType.BOGUS

    return provisional


@dataclass
class CardStack:
    board_cards: List[BoardCard]
    stack_type: CardStackType = field(init=False)

    def __post_init__(self) -> None:
        if not self.board_cards:
            raise ValueError("card stack cannot be empty")
        self.stack_type = classify(self.get_cards())

    def get_cards(self) -> List[Card]:
        return [board_card.card for board_card in self.board_cards]

    def size(self) -> int:
        return len(self.board_cards)

    def incomplete(self) -> bool:
        return self.stack_type == CardStackType.INCOMPLETE

    def problematic(self) -> bool:
        return self.stack_type in PROBLEMATIC_TYPES

    def is_complete(self) -> bool:
        return self.stack_type in COMPLETE_TYPES

    def join(self, other: "CardStack") -> "CardStack":
        return CardStack(self.board_cards + other.board_cards)

    def marry(self, other: "CardStack") -> Optional["CardStack"]:
        return merge_stacks(self, other)

    def is_mergeable_with(self, other: "CardStack") -> bool:
        if self.get_cards() == other.get_cards():
            return False
        return merge_stacks(self, other) is not None

    def clone(self) -> "CardStack":
        return CardStack([board_card.clone() for board_card in self.board_cards])

    def label(self) -> str:
        return ",".join(card.label() for card in self.get_cards())

    def __str__(self) -> str:
        return ",".join(card.pretty() for card in self.get_cards())

    @classmethod
    def from_shorthand(cls, shorthand: str, origin_deck: OriginDeck = OriginDeck.DECK_ONE) -> "CardStack":
        return cls([BoardCard(card, BoardCardState.FIRMLY_ON_BOARD) for card in cards_from_shorthand(shorthand, origin_deck)])

    @classmethod
    def from_hand_card(cls, hand_card: HandCard) -> "CardStack":
        return cls([BoardCard(hand_card.card, BoardCardState.FRESHLY_PLAYED)])


def merge_stacks(first: CardStack, second: CardStack) -> Optional[CardStack]:
    # The player cannot say which side a pile was dropped on, so take
    # whichever order produces a legal stack.
    forward = first.join(second)
    if not forward.problematic():
        return forward
    backward = second.join(first)
    if not backward.problematic():
        return backward
    return None


@dataclass(frozen=True)
class StackExample:
    comment: str
    shorthand: str
    expected_type: CardStackType

    def stack(self) -> CardStack:
        return CardStack.from_shorthand(self.shorthand)


def get_examples() -> Tuple[List[StackExample], List[StackExample]]:
    """Return the (good, bad) stacks used to teach the rules."""
    good = [
        StackExample("SET of 3s", "3H,3S,3D", CardStackType.SET),
        StackExample("SET of Jacks", "JH,JS,JD,JC", CardStackType.SET),
        StackExample("PURE RUN of hearts", "TH,JH,QH", CardStackType.PURE_RUN),
        StackExample("PURE RUN around the ace", "KS,AS,2S,3S,4S,5S", CardStackType.PURE_RUN),
        StackExample("RED-BLACK RUN with three cards", "3S,4D,5C", CardStackType.RED_BLACK_RUN),
        StackExample("RED-BLACK RUN around the ace", "QH,KC,AD,2S,3D", CardStackType.RED_BLACK_RUN),
    ]
    bad = [
        StackExample("INCOMPLETE (set of kings)", "KC,KS", CardStackType.INCOMPLETE),
        StackExample("INCOMPLETE (pure run of hearts)", "QH,KH", CardStackType.INCOMPLETE),
        StackExample("INCOMPLETE (red-black run)", "3S,4D", CardStackType.INCOMPLETE),
        StackExample("ILLEGAL! No dups allowed.", "3H,3S,3H", CardStackType.DUP),
        StackExample("non sensical", "3S,4D,4H", CardStackType.BOGUS),
    ]
    return good, bad
