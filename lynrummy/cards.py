from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, List


class CardValue(IntEnum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


class Suit(IntEnum):
    CLUB = 0
    DIAMOND = 1
    SPADE = 2
    HEART = 3


class CardColor(IntEnum):
    BLACK = 0
    RED = 1


class OriginDeck(IntEnum):
    DECK_ONE = 1
    DECK_TWO = 2


class HandCardState(str, Enum):
    NORMAL = "NORMAL"
    FRESHLY_DRAWN = "FRESHLY_DRAWN"


class BoardCardState(str, Enum):
    FIRMLY_ON_BOARD = "FIRMLY_ON_BOARD"
    FRESHLY_PLAYED = "FRESHLY_PLAYED"
    FRESHLY_PLAYED_BY_LAST_PLAYER = "FRESHLY_PLAYED_BY_LAST_PLAYER"


VALUE_LABELS = "A23456789TJQK"
SUIT_LABELS = {"C": Suit.CLUB, "D": Suit.DIAMOND, "S": Suit.SPADE, "H": Suit.HEART}
SUIT_SYMBOLS = {
    Suit.CLUB: "♣",
    Suit.DIAMOND: "♦",
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
}
_SUIT_LABEL_FOR = {suit: label for label, suit in SUIT_LABELS.items()}

# Deck building order for each pack.
ALL_SUITS = (Suit.HEART, Suit.SPADE, Suit.DIAMOND, Suit.CLUB)


def successor(value: CardValue) -> CardValue:
    # KING wraps to ACE, so K-A-2 is a legal run.
    if value == CardValue.KING:
        return CardValue.ACE
    return CardValue(value + 1)


def color_of(suit: Suit) -> CardColor:
    if suit in (Suit.CLUB, Suit.SPADE):
        return CardColor.BLACK
    return CardColor.RED


def value_for(label: str) -> CardValue:
    if len(label) != 1 or label not in VALUE_LABELS:
        raise ValueError(f"unknown card value label {label!r}")
    return CardValue(VALUE_LABELS.index(label) + 1)


def suit_for(label: str) -> Suit:
    try:
        return SUIT_LABELS[label]
    except KeyError:
        raise ValueError(f"unknown suit label {label!r}") from None


@dataclass(frozen=True)
class Card:
    """One physical card. Equality includes the pack the card came from."""

    value: CardValue
    suit: Suit
    origin_deck: OriginDeck = OriginDeck.DECK_ONE

    @property
    def color(self) -> CardColor:
        return color_of(self.suit)

    def same_face(self, other: "Card") -> bool:
        return self.value == other.value and self.suit == other.suit

    def label(self) -> str:
        return VALUE_LABELS[self.value - 1] + _SUIT_LABEL_FOR[self.suit]

    def pretty(self) -> str:
        value_label = "10" if self.value == CardValue.TEN else VALUE_LABELS[self.value - 1]
        return value_label + SUIT_SYMBOLS[self.suit]

    @classmethod
    def from_label(cls, label: str, origin_deck: OriginDeck = OriginDeck.DECK_ONE) -> "Card":
        if len(label) != 2:
            raise ValueError(f"card label must be two characters, got {label!r}")
        return cls(value_for(label[0]), suit_for(label[1]), origin_deck)


@dataclass
class HandCard:
    card: Card
    state: HandCardState = HandCardState.NORMAL

    def clone(self) -> "HandCard":
        return HandCard(self.card, self.state)


@dataclass
class BoardCard:
    card: Card
    state: BoardCardState = BoardCardState.FIRMLY_ON_BOARD

    def age(self) -> None:
        if self.state == BoardCardState.FRESHLY_PLAYED:
            self.state = BoardCardState.FRESHLY_PLAYED_BY_LAST_PLAYER
        elif self.state == BoardCardState.FRESHLY_PLAYED_BY_LAST_PLAYER:
            self.state = BoardCardState.FIRMLY_ON_BOARD

    def clone(self) -> "BoardCard":
        return BoardCard(self.card, self.state)


def iter_double_deck() -> Iterable[Card]:
    for origin_deck in OriginDeck:
        for suit in ALL_SUITS:
            for value in CardValue:
                yield Card(value, suit, origin_deck)


def cards_from_shorthand(shorthand: str, origin_deck: OriginDeck = OriginDeck.DECK_ONE) -> List[Card]:
    return [Card.from_label(label.strip(), origin_deck) for label in shorthand.split(",")]
