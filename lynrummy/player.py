from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .board import Board
from .cards import Card, HandCard, HandCardState
from .rules import InvariantViolation, Ruleset
from .scoring import turn_score


@dataclass
class Hand:
    hand_cards: List[HandCard] = field(default_factory=list)

    def add_cards(self, cards: Iterable[Card], state: HandCardState = HandCardState.NORMAL) -> None:
        self.hand_cards.extend(HandCard(card, state) for card in cards)

    def find(self, card: Card) -> HandCard:
        for hand_card in self.hand_cards:
            if hand_card.card == card:
                return hand_card
        raise InvariantViolation(f"card {card.label()} is not in the hand")

    def remove_card_from_hand(self, card: Card) -> HandCard:
        hand_card = self.find(card)
        self.hand_cards.remove(hand_card)
        return hand_card

    def get_cards(self) -> List[Card]:
        return [hand_card.card for hand_card in self.hand_cards]

    def size(self) -> int:
        return len(self.hand_cards)

    def is_empty(self) -> bool:
        return not self.hand_cards

    def reset_state(self) -> None:
        for hand_card in self.hand_cards:
            hand_card.state = HandCardState.NORMAL

    def clone(self) -> "Hand":
        return Hand([hand_card.clone() for hand_card in self.hand_cards])


@dataclass
class PlayerTurn:
    starting_board_score: int
    cards_played_during_turn: int = 0
    empty_hand_bonus: int = 0
    victory_bonus: int = 0

    def score(self, board: Board, multiplier: int = 100) -> int:
        return turn_score(
            board.score() - self.starting_board_score,
            self.cards_played_during_turn,
            self.empty_hand_bonus,
            self.victory_bonus,
            multiplier,
        )


@dataclass
class Player:
    name: str
    hand: Hand = field(default_factory=Hand)
    total_score: int = 0
    turn: Optional[PlayerTurn] = None

    def start_turn(self, board: Board) -> PlayerTurn:
        self.turn = PlayerTurn(starting_board_score=board.score())
        return self.turn

    def active_turn(self) -> PlayerTurn:
        if self.turn is None:
            raise InvariantViolation(f"{self.name} has no active turn")
        return self.turn

    def get_turn_score(self, board: Board, ruleset: Ruleset) -> int:
        return self.active_turn().score(board, ruleset.cards_played_multiplier)

    def release_card(self, card: Card, ruleset: Ruleset) -> HandCard:
        """Take a card out of the hand because it was played to the board."""
        turn = self.active_turn()
        hand_card = self.hand.remove_card_from_hand(card)
        turn.cards_played_during_turn += 1
        if self.hand.is_empty():
            turn.empty_hand_bonus = ruleset.empty_hand_bonus
        return hand_card

    def end_turn(self, board: Board, ruleset: Ruleset) -> int:
        score = self.get_turn_score(board, ruleset)
        self.total_score += score
        self.hand.reset_state()
        self.turn = None
        return score
