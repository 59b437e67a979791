from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations, permutations
from typing import Iterable, List, Sequence, Tuple

from .board import StackLocation
from .cards import Card, HandCard
from .move import Move
from .stack import COMPLETE_TYPES, CardStack, CardStackType, classify
from .state import GameSession


@dataclass(frozen=True)
class HandStackCandidate:
    cards: Tuple[Card, ...]
    stack_type: CardStackType


def hand_stack_candidates(cards: Sequence[Card], size: int = 3) -> List[HandStackCandidate]:
    """Complete stacks that can be built from hand cards alone, one per face combination."""
    candidates: List[HandStackCandidate] = []
    seen = set()
    for combo in combinations(cards, size):
        face_key = tuple(sorted(card.label() for card in combo))
        if face_key in seen:
            continue
        for ordered in permutations(combo):
            stack_type = classify(ordered)
            if stack_type in COMPLETE_TYPES:
                seen.add(face_key)
                candidates.append(HandStackCandidate(tuple(ordered), stack_type))
                break
    return candidates


def _extension_moves(session: GameSession) -> Iterable[Move]:
    board = session.board
    for card in session.active_player().hand.get_cards():
        probe = CardStack.from_hand_card(HandCard(card))
        for location in board.mergeable_locations_for(probe):
            if board.get_stack_for(location).is_complete():
                yield Move.extend(card, location)


def _merge_moves(session: GameSession) -> Iterable[Move]:
    board = session.board
    locations = board.get_stack_locations()
    for source in locations:
        source_stack = board.get_stack_for(source)
        if not source_stack.is_complete():
            continue
        for target in locations:
            if target == source:
                continue
            target_stack = board.get_stack_for(target)
            if target_stack.is_complete() and source_stack.is_mergeable_with(target_stack):
                yield Move.merge(source, target)


def plan_hand_stack(session: GameSession, candidate: HandStackCandidate, shelf_index: int = 0) -> List[Move]:
    """Moves that lay ``candidate`` down as a new stack at the end of a shelf."""
    shelf = session.board.shelves[shelf_index]
    location = StackLocation(shelf_index, len(shelf.card_stacks))
    first, *rest = candidate.cards
    return [Move.place(first, shelf_index)] + [Move.extend(card, location) for card in rest]


def generate_candidate_moves(session: GameSession, k: int = 50) -> List[Move]:
    """Single moves that keep a clean board clean, best first, ending with COMPLETE_TURN."""
    candidates: List[Move] = []
    seen = set()

    def add_move(move: Move) -> None:
        if len(candidates) >= k or move in seen:
            return
        seen.add(move)
        candidates.append(move)

    if session.board.is_clean():
        for move in _extension_moves(session):
            add_move(move)
        for move in _merge_moves(session):
            add_move(move)
        add_move(Move.complete_turn())
    return candidates[:k]
