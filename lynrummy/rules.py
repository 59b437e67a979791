from dataclasses import dataclass
from typing import List, Tuple

from .cards import Card, cards_from_shorthand

CARDS_PER_PACK = 52
NUM_PACKS = 2

DEFAULT_LAYOUT: Tuple[str, ...] = (
    "KS,AS,2S,3S | AC,AD,AH",
    "7S,7D,7C | 2C,3D,4C,5H,6S",
    "TD,JD,QD,KD",
)


class InvariantViolation(AssertionError):
    """Raised when a caller breaks an engine contract (not a game-rule outcome)."""


@dataclass(frozen=True)
class Ruleset:
    num_players: int = 2
    initial_hand_size: int = 15
    stuck_draw_count: int = 3
    emptied_hand_draw_count: int = 5
    empty_hand_bonus: int = 1000
    victory_bonus: int = 500
    cards_played_multiplier: int = 100
    initial_layout: Tuple[str, ...] = DEFAULT_LAYOUT
    trailing_empty_shelves: int = 4
    player_names: Tuple[str, ...] = ()

    def deck_size(self) -> int:
        return CARDS_PER_PACK * NUM_PACKS

    def layout_cards(self) -> List[Card]:
        """Cards of the initial layout, all taken from the first pack."""
        return [
            card
            for shelf in self.initial_layout
            for stack in shelf.split(" | ")
            if stack.strip()
            for card in cards_from_shorthand(stack)
        ]

    def layout_card_count(self) -> int:
        return len(self.layout_cards())

    def name_for(self, player_index: int) -> str:
        if player_index < len(self.player_names):
            return self.player_names[player_index]
        return f"Player {player_index + 1}"

    def validate(self) -> None:
        if self.num_players < 2:
            raise ValueError("at least two players are required")
        if self.initial_hand_size < 0:
            raise ValueError("initial hand size cannot be negative")
        layout_cards = self.layout_cards()
        if len(set(layout_cards)) != len(layout_cards):
            raise ValueError("initial layout uses the same card more than once")
        needed = self.num_players * self.initial_hand_size + len(layout_cards)
        if needed > self.deck_size():
            raise ValueError(f"deal needs {needed} cards but the deck holds {self.deck_size()}")
