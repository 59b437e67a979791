from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .cards import Card, iter_double_deck
from .rules import InvariantViolation

logger = logging.getLogger(__name__)


@dataclass
class Deck:
    """Two full packs. The top of the deck is the end of ``cards``."""

    cards: List[Card]

    @classmethod
    def build(cls, rng: Optional[random.Random] = None, shuffled: bool = True) -> "Deck":
        cards = list(iter_double_deck())
        if shuffled:
            (rng or random.Random()).shuffle(cards)
        return cls(cards)

    def size(self) -> int:
        return len(self.cards)

    def label(self) -> str:
        return " ".join(card.label() for card in self.cards)

    def take_from_top(self, count: int) -> List[Card]:
        if count > len(self.cards):
            logger.debug("deck has %d cards, %d requested", len(self.cards), count)
            count = len(self.cards)
        if count <= 0:
            return []
        top_cards = self.cards[-count:]
        del self.cards[-count:]
        return top_cards

    def pull_card_from_deck(self, card: Card) -> None:
        try:
            self.cards.remove(card)
        except ValueError:
            raise InvariantViolation(f"card {card.label()} is not in the deck") from None

    def copy(self) -> "Deck":
        return Deck(list(self.cards))
