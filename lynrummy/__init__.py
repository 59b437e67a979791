"""LynRummy rule and turn-state engine package."""

from .board import Board, BoardLocation, Shelf, SplitResult, StackLocation, initial_board
from .cards import BoardCard, Card, CardValue, HandCard, OriginDeck, Suit
from .engine import CompleteTurnResult, complete_turn, undo_mistakes
from .journal import apply_move, replay_event_log
from .move import Move, MoveKind
from .rules import InvariantViolation, Ruleset
from .stack import CardStack, CardStackType, classify, merge_stacks
from .state import GameEvent, GameSession, Snapshot, new_game

__all__ = [
    "Board",
    "BoardCard",
    "BoardLocation",
    "Card",
    "CardStack",
    "CardStackType",
    "CardValue",
    "CompleteTurnResult",
    "GameEvent",
    "GameSession",
    "HandCard",
    "InvariantViolation",
    "Move",
    "MoveKind",
    "OriginDeck",
    "Ruleset",
    "Shelf",
    "Snapshot",
    "SplitResult",
    "StackLocation",
    "Suit",
    "apply_move",
    "classify",
    "complete_turn",
    "initial_board",
    "merge_stacks",
    "new_game",
    "replay_event_log",
    "undo_mistakes",
]
