from __future__ import annotations

import hashlib
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .board import Board, initial_board
from .cards import Card
from .deck import Deck
from .player import Hand, Player
from .rules import InvariantViolation, Ruleset

logger = logging.getLogger(__name__)


def _card_key(card: Card) -> Tuple[str, int]:
    return card.label(), int(card.origin_deck)


def _player_key(player: Player) -> Tuple:
    hand_key = tuple(
        sorted((_card_key(hand_card.card), hand_card.state.value) for hand_card in player.hand.hand_cards)
    )
    turn = player.turn
    turn_key = None
    if turn is not None:
        turn_key = (
            turn.starting_board_score,
            turn.cards_played_during_turn,
            turn.empty_hand_bonus,
            turn.victory_bonus,
        )
    return player.total_score, hand_key, turn_key


@dataclass
class GameEvent:
    player: int
    move_kind: str
    payload: dict


@dataclass
class Snapshot:
    """The last clean board for the active player, with their hand and play count."""

    board: Board
    hand: Hand
    cards_played_during_turn: int

    @classmethod
    def capture(cls, board: Board, player: Player) -> "Snapshot":
        return cls(
            board=board.clone(),
            hand=player.hand.clone(),
            cards_played_during_turn=player.active_turn().cards_played_during_turn,
        )


@dataclass
class GameSession:
    ruleset: Ruleset
    players: List[Player]
    deck: Deck
    board: Board
    current_player_index: int = 0
    has_victor_already: bool = False
    snapshot: Optional[Snapshot] = None
    turn_number: int = 0
    last_turn_score: int = 0
    rng_seed: Optional[int] = None
    event_log: List[GameEvent] = field(default_factory=list)

    def active_player(self) -> Player:
        return self.players[self.current_player_index]

    def update_snapshot(self) -> None:
        if not self.board.is_clean():
            raise InvariantViolation("snapshots may only be taken of a clean board")
        self.snapshot = Snapshot.capture(self.board, self.active_player())

    def maybe_update_snapshot(self) -> bool:
        if not self.board.is_clean():
            return False
        self.update_snapshot()
        return True

    def state_key(self) -> Tuple:
        board_key = tuple(
            tuple(
                tuple((_card_key(board_card.card), board_card.state.value) for board_card in card_stack.board_cards)
                for card_stack in shelf.card_stacks
            )
            for shelf in self.board.shelves
        )
        return (
            self.current_player_index,
            self.turn_number,
            self.has_victor_already,
            tuple(_card_key(card) for card in self.deck.cards),
            board_key,
            tuple(_player_key(player) for player in self.players),
        )

    def stable_hash(self) -> str:
        return hashlib.sha256(repr(self.state_key()).encode("utf-8")).hexdigest()


def _player_names(ruleset: Ruleset, names: Optional[Sequence[str]]) -> List[str]:
    if names is not None:
        if len(names) != ruleset.num_players:
            raise ValueError(f"expected {ruleset.num_players} player names, got {len(names)}")
        return list(names)
    return [ruleset.name_for(idx) for idx in range(ruleset.num_players)]


def new_game(
    ruleset: Ruleset | None = None,
    rng_seed: Optional[int] = None,
    player_names: Optional[Sequence[str]] = None,
) -> GameSession:
    ruleset = ruleset or Ruleset()
    ruleset.validate()
    rng = random.Random(rng_seed)

    deck = Deck.build(rng)
    board = initial_board(ruleset)
    if not board.is_clean():
        raise ValueError("initial layout must only contain complete stacks")
    for board_card in board.get_cards():
        deck.pull_card_from_deck(board_card.card)

    players = [Player(name) for name in _player_names(ruleset, player_names)]
    for player in players:
        player.hand.add_cards(deck.take_from_top(ruleset.initial_hand_size))

    session = GameSession(
        ruleset=ruleset,
        players=players,
        deck=deck,
        board=board,
        rng_seed=rng_seed,
    )
    session.active_player().start_turn(board)
    session.update_snapshot()
    logger.info("new game: %d players, %d cards left in deck", len(players), deck.size())
    return session
