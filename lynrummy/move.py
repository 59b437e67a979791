from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import BoardLocation, StackLocation
from .cards import Card


class MoveKind(str, Enum):
    EXTEND_STACK = "EXTEND_STACK"
    PLACE_CARD = "PLACE_CARD"
    SPLIT_STACK = "SPLIT_STACK"
    MERGE_STACKS = "MERGE_STACKS"
    MOVE_STACK = "MOVE_STACK"
    COMPLETE_TURN = "COMPLETE_TURN"
    UNDO = "UNDO"


@dataclass(frozen=True)
class Move:
    kind: MoveKind
    card: Optional[Card] = None
    source: Optional[StackLocation] = None
    target: Optional[StackLocation] = None
    board_location: Optional[BoardLocation] = None
    shelf_index: int = 0

    @staticmethod
    def extend(card: Card, target: StackLocation) -> "Move":
        return Move(MoveKind.EXTEND_STACK, card=card, target=target)

    @staticmethod
    def place(card: Card, shelf_index: int = 0) -> "Move":
        return Move(MoveKind.PLACE_CARD, card=card, shelf_index=shelf_index)

    @staticmethod
    def split(board_location: BoardLocation) -> "Move":
        return Move(MoveKind.SPLIT_STACK, board_location=board_location)

    @staticmethod
    def merge(source: StackLocation, target: StackLocation) -> "Move":
        return Move(MoveKind.MERGE_STACKS, source=source, target=target)

    @staticmethod
    def move_stack(source: StackLocation, shelf_index: int) -> "Move":
        return Move(MoveKind.MOVE_STACK, source=source, shelf_index=shelf_index)

    @staticmethod
    def complete_turn() -> "Move":
        return Move(MoveKind.COMPLETE_TURN)

    @staticmethod
    def undo() -> "Move":
        return Move(MoveKind.UNDO)
