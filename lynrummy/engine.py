from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .board import BoardLocation, SplitResult, StackLocation
from .cards import Card, HandCardState
from .player import Player
from .rules import InvariantViolation
from .stack import CardStack
from .state import GameSession

logger = logging.getLogger(__name__)


class CompleteTurnResult(str, Enum):
    FAILURE = "FAILURE"
    SUCCESS_BUT_NEEDS_CARDS = "SUCCESS_BUT_NEEDS_CARDS"
    SUCCESS_AS_VICTOR = "SUCCESS_AS_VICTOR"
    SUCCESS_WITH_HAND_EMPTIED = "SUCCESS_WITH_HAND_EMPTIED"
    SUCCESS = "SUCCESS"


def get_turn_score(session: GameSession) -> int:
    return session.active_player().get_turn_score(session.board, session.ruleset)


def _draw_cards(session: GameSession, player: Player, count: int) -> None:
    if count <= 0:
        return
    cards = session.deck.take_from_top(count)
    player.hand.add_cards(cards, HandCardState.FRESHLY_DRAWN)
    logger.debug("%s draws %d cards (%d left in deck)", player.name, len(cards), session.deck.size())


def advance_turn_to_next_player(session: GameSession) -> None:
    session.current_player_index = (session.current_player_index + 1) % len(session.players)
    session.turn_number += 1


def complete_turn(session: GameSession) -> CompleteTurnResult:
    """Try to end the active player's turn.

    A dirty board is the only failure and changes nothing. Every success
    scores the turn, deals any replacement cards, ages the board and hands
    control to the next player with a fresh snapshot.
    """
    ruleset = session.ruleset
    board = session.board
    player = session.active_player()
    turn = player.active_turn()

    if not board.is_clean():
        logger.info("%s tried to end the turn on a dirty board", player.name)
        return CompleteTurnResult.FAILURE

    if turn.cards_played_during_turn == 0:
        result = CompleteTurnResult.SUCCESS_BUT_NEEDS_CARDS
        draw_count = ruleset.stuck_draw_count
    elif player.hand.is_empty():
        if session.has_victor_already:
            result = CompleteTurnResult.SUCCESS_WITH_HAND_EMPTIED
        else:
            session.has_victor_already = True
            turn.victory_bonus = ruleset.victory_bonus
            result = CompleteTurnResult.SUCCESS_AS_VICTOR
        draw_count = ruleset.emptied_hand_draw_count
    else:
        result = CompleteTurnResult.SUCCESS
        draw_count = 0

    session.last_turn_score = player.end_turn(board, ruleset)
    _draw_cards(session, player, draw_count)
    logger.info(
        "%s: %s, scored %d (total %d)",
        player.name,
        result.value,
        session.last_turn_score,
        player.total_score,
    )

    board.age_cards()
    advance_turn_to_next_player(session)
    session.active_player().start_turn(board)
    session.update_snapshot()
    return result


def undo_mistakes(session: GameSession) -> None:
    snapshot = session.snapshot
    if snapshot is None:
        raise InvariantViolation("no snapshot to roll back to")
    player = session.active_player()
    turn = player.active_turn()

    session.board = snapshot.board
    player.hand = snapshot.hand
    turn.cards_played_during_turn = snapshot.cards_played_during_turn
    if not player.hand.is_empty():
        turn.empty_hand_bonus = 0

    # Re-capture so later moves cannot reach into the restored objects.
    session.update_snapshot()
    logger.info("%s rolled back to the last clean board", player.name)


rollback_moves_to_last_clean_state = undo_mistakes


def merge_hand_card_to_board_stack(
    session: GameSession, card: Card, stack_location: StackLocation
) -> Optional[int]:
    player = session.active_player()
    hand_card = player.hand.find(card)
    stack_size = session.board.extend_stack_with_card(stack_location, hand_card)
    if stack_size is None:
        logger.debug("%s does not fit the stack at %s", card.label(), stack_location)
        return None
    player.release_card(card, session.ruleset)
    session.maybe_update_snapshot()
    return stack_size


def move_card_from_hand_to_board(session: GameSession, card: Card, shelf_index: int = 0) -> None:
    player = session.active_player()
    hand_card = player.release_card(card, session.ruleset)
    session.board.add_singleton_card(hand_card, shelf_index)
    session.maybe_update_snapshot()


def split_stack(session: GameSession, board_location: BoardLocation) -> SplitResult:
    result = session.board.split_stack(board_location)
    if result == SplitResult.SUCCESS:
        session.maybe_update_snapshot()
    return result


def drop_stack_on_stack(
    session: GameSession, source: StackLocation, target: StackLocation
) -> Optional[CardStack]:
    merged_stack = session.board.merge_card_stacks(source, target)
    if merged_stack is None:
        logger.debug("stacks at %s and %s do not merge", source, target)
        return None
    session.maybe_update_snapshot()
    return merged_stack


def move_stack_to_end_of_shelf(session: GameSession, source: StackLocation, shelf_index: int) -> bool:
    board = session.board
    if source.shelf_index == shelf_index and board.is_last_stack(source):
        return False
    board.move_card_stack_to_end_of_shelf(source, shelf_index)
    session.maybe_update_snapshot()
    return True
