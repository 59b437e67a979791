import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lynrummy.board import BoardLocation, StackLocation
from lynrummy.cards import BoardCardState, Card, HandCardState, OriginDeck
from lynrummy.cli import play_greedy_turn
from lynrummy.engine import CompleteTurnResult
from lynrummy.journal import apply_move, move_from_event, replay_event_log
from lynrummy.move import Move, MoveKind
from lynrummy.state import GameEvent, new_game


def test_only_moves_that_change_something_are_journaled():
    session = new_game(rng_seed=17)

    assert apply_move(session, Move.merge(StackLocation(1, 0), StackLocation(2, 0))) is None
    assert apply_move(session, Move.move_stack(StackLocation(1, 1), 1)) is False
    assert session.event_log == []

    apply_move(session, Move.split(BoardLocation(1, 0, 0)))
    apply_move(session, Move.merge(StackLocation(1, 0), StackLocation(1, 1)))
    assert [event.move_kind for event in session.event_log] == ["SPLIT_STACK", "MERGE_STACKS"]
    assert all(event.player == 0 for event in session.event_log)


def test_failed_completion_is_not_journaled():
    session = new_game(rng_seed=18)
    apply_move(session, Move.split(BoardLocation(1, 0, 0)))

    assert apply_move(session, Move.complete_turn()) == CompleteTurnResult.FAILURE
    assert [event.move_kind for event in session.event_log] == ["SPLIT_STACK"]


def test_event_payload_rebuilds_the_move():
    session = new_game(rng_seed=19)
    card = session.active_player().hand.get_cards()[0]
    apply_move(session, Move.place(card, shelf_index=4))

    event = session.event_log[-1]
    assert event.payload == {"card": [card.label(), int(card.origin_deck)], "shelf_index": 4}
    assert move_from_event(event) == Move.place(card, shelf_index=4)


def test_move_missing_its_card_is_rejected():
    session = new_game(rng_seed=20)
    with pytest.raises(ValueError):
        apply_move(session, Move(MoveKind.EXTEND_STACK, target=StackLocation(1, 0)))


def test_replay_reproduces_a_played_game():
    session = new_game(rng_seed=21)
    for _ in range(6):
        play_greedy_turn(session)

    replayed = replay_event_log(session.ruleset, session.rng_seed, session.event_log)

    assert replayed.state_key() == session.state_key()
    assert replayed.stable_hash() == session.stable_hash()
    assert [player.total_score for player in replayed.players] == [player.total_score for player in session.players]


def test_replay_rejects_event_for_inactive_player():
    card = Card.from_label("3S", OriginDeck.DECK_TWO)
    events = [GameEvent(player=1, move_kind="PLACE_CARD", payload={"card": [card.label(), 2], "shelf_index": 0})]
    session = new_game(rng_seed=22)
    with pytest.raises(ValueError):
        replay_event_log(session.ruleset, 22, events)


def test_state_key_tells_packs_card_states_and_turn_counters_apart():
    base = new_game(rng_seed=23)

    other_pack = new_game(rng_seed=23)
    hand_card = other_pack.active_player().hand.hand_cards[0]
    flipped = OriginDeck.DECK_TWO if hand_card.card.origin_deck == OriginDeck.DECK_ONE else OriginDeck.DECK_ONE
    hand_card.card = Card(hand_card.card.value, hand_card.card.suit, flipped)

    freshly_drawn = new_game(rng_seed=23)
    freshly_drawn.active_player().hand.hand_cards[0].state = HandCardState.FRESHLY_DRAWN

    freshly_played = new_game(rng_seed=23)
    freshly_played.board.get_cards()[0].state = BoardCardState.FRESHLY_PLAYED

    counted = new_game(rng_seed=23)
    counted.active_player().active_turn().cards_played_during_turn = 1

    sessions = [base, other_pack, freshly_drawn, freshly_played, counted]
    assert len({session.state_key() for session in sessions}) == len(sessions)
    assert base.state_key() == new_game(rng_seed=23).state_key()
