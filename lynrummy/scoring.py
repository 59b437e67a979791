from __future__ import annotations

from typing import Dict, Iterable

from .stack import CardStack, CardStackType

TYPE_VALUES: Dict[CardStackType, int] = {
    CardStackType.PURE_RUN: 90,
    CardStackType.SET: 60,
    CardStackType.RED_BLACK_RUN: 50,
    CardStackType.INCOMPLETE: 0,
    CardStackType.BOGUS: 0,
    CardStackType.DUP: 0,
}


def stack_score(stack: CardStack) -> int:
    return (stack.size() - 2) * TYPE_VALUES[stack.stack_type]


def score_for_stacks(stacks: Iterable[CardStack]) -> int:
    return sum(stack_score(stack) for stack in stacks)


def cards_played_score(cards_played: int, multiplier: int = 100) -> int:
    return multiplier * cards_played * cards_played


def turn_score(
    board_delta: int,
    cards_played: int,
    empty_hand_bonus: int = 0,
    victory_bonus: int = 0,
    multiplier: int = 100,
) -> int:
    return board_delta + cards_played_score(cards_played, multiplier) + empty_hand_bonus + victory_bonus
