from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

from . import engine
from .board import BoardLocation, SplitResult, StackLocation
from .cards import Card, OriginDeck
from .move import Move, MoveKind
from .rules import Ruleset
from .state import GameEvent, GameSession, new_game

logger = logging.getLogger(__name__)


def _card_payload(card: Card) -> List[Any]:
    return [card.label(), int(card.origin_deck)]


def _card_from_payload(data: Sequence[Any]) -> Card:
    label, origin_deck = data
    return Card.from_label(label, OriginDeck(origin_deck))


def _move_payload(move: Move) -> dict:
    payload: dict = {}
    if move.card is not None:
        payload["card"] = _card_payload(move.card)
    if move.source is not None:
        payload["source"] = [move.source.shelf_index, move.source.stack_index]
    if move.target is not None:
        payload["target"] = [move.target.shelf_index, move.target.stack_index]
    if move.board_location is not None:
        loc = move.board_location
        payload["board_location"] = [loc.shelf_index, loc.stack_index, loc.card_index]
    if move.kind in (MoveKind.PLACE_CARD, MoveKind.MOVE_STACK):
        payload["shelf_index"] = move.shelf_index
    return payload


def move_from_event(event: GameEvent) -> Move:
    payload = event.payload
    card = _card_from_payload(payload["card"]) if "card" in payload else None
    source = StackLocation(*payload["source"]) if "source" in payload else None
    target = StackLocation(*payload["target"]) if "target" in payload else None
    board_location = BoardLocation(*payload["board_location"]) if "board_location" in payload else None
    return Move(
        kind=MoveKind(event.move_kind),
        card=card,
        source=source,
        target=target,
        board_location=board_location,
        shelf_index=payload.get("shelf_index", 0),
    )


def _did_something(move: Move, outcome: Any) -> bool:
    if move.kind in (MoveKind.EXTEND_STACK, MoveKind.MERGE_STACKS):
        return outcome is not None
    if move.kind == MoveKind.SPLIT_STACK:
        return outcome == SplitResult.SUCCESS
    if move.kind == MoveKind.MOVE_STACK:
        return bool(outcome)
    if move.kind == MoveKind.COMPLETE_TURN:
        return outcome != engine.CompleteTurnResult.FAILURE
    return True


def _require(value: Optional[Any], move: Move, name: str) -> Any:
    if value is None:
        raise ValueError(f"{move.kind.value} move is missing {name}")
    return value


def apply_move(session: GameSession, move: Move) -> Any:
    """Run one move against the session and journal it if it changed anything.

    Returns whatever the underlying engine action returns, so callers can
    tell expected failures (None, False, DID_NOTHING, FAILURE) apart.
    """
    player_index = session.current_player_index

    if move.kind == MoveKind.EXTEND_STACK:
        outcome = engine.merge_hand_card_to_board_stack(
            session, _require(move.card, move, "card"), _require(move.target, move, "target")
        )
    elif move.kind == MoveKind.PLACE_CARD:
        outcome = engine.move_card_from_hand_to_board(session, _require(move.card, move, "card"), move.shelf_index)
    elif move.kind == MoveKind.SPLIT_STACK:
        outcome = engine.split_stack(session, _require(move.board_location, move, "board_location"))
    elif move.kind == MoveKind.MERGE_STACKS:
        outcome = engine.drop_stack_on_stack(
            session, _require(move.source, move, "source"), _require(move.target, move, "target")
        )
    elif move.kind == MoveKind.MOVE_STACK:
        outcome = engine.move_stack_to_end_of_shelf(session, _require(move.source, move, "source"), move.shelf_index)
    elif move.kind == MoveKind.COMPLETE_TURN:
        outcome = engine.complete_turn(session)
    elif move.kind == MoveKind.UNDO:
        outcome = engine.undo_mistakes(session)
    else:
        raise ValueError(f"Unknown move kind {move.kind}")

    if _did_something(move, outcome):
        session.event_log.append(GameEvent(player=player_index, move_kind=move.kind.value, payload=_move_payload(move)))
    else:
        logger.debug("move %s did nothing", move.kind.value)
    return outcome


def replay_event_log(
    ruleset: Ruleset,
    rng_seed: Optional[int],
    events: Iterable[GameEvent],
    player_names: Optional[Sequence[str]] = None,
) -> GameSession:
    session = new_game(ruleset=ruleset, rng_seed=rng_seed, player_names=player_names)
    for event in events:
        if event.player != session.current_player_index:
            raise ValueError(f"event for player {event.player} but player {session.current_player_index} is active")
        apply_move(session, move_from_event(event))
    return session
