from __future__ import annotations

import argparse
import logging
from typing import Optional

from .candidates import generate_candidate_moves, hand_stack_candidates, plan_hand_stack
from .engine import CompleteTurnResult
from .journal import apply_move
from .move import Move, MoveKind
from .rules import Ruleset
from .stack import get_examples
from .state import GameSession, new_game

logger = logging.getLogger(__name__)

MAX_MOVES_PER_TURN = 200
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _next_board_move(session: GameSession) -> Optional[Move]:
    for move in generate_candidate_moves(session):
        if move.kind != MoveKind.COMPLETE_TURN:
            return move
    return None


def play_greedy_turn(session: GameSession) -> CompleteTurnResult:
    """Extend and merge while possible, lay down stacks from the hand, then end the turn."""
    for _ in range(MAX_MOVES_PER_TURN):
        move = _next_board_move(session)
        if move is not None:
            apply_move(session, move)
            continue
        hand_stacks = hand_stack_candidates(session.active_player().hand.get_cards())
        if not hand_stacks:
            break
        for planned in plan_hand_stack(session, hand_stacks[0]):
            apply_move(session, planned)

    result = apply_move(session, Move.complete_turn())
    if result == CompleteTurnResult.FAILURE:
        logger.warning("%s left a dirty board, rolling back", session.active_player().name)
        apply_move(session, Move.undo())
        result = apply_move(session, Move.complete_turn())
    return result


def run_game(seed: Optional[int] = None, num_players: int = 2, turns: int = 20) -> GameSession:
    session = new_game(ruleset=Ruleset(num_players=num_players), rng_seed=seed)
    for _ in range(turns):
        play_greedy_turn(session)
    return session


def print_examples() -> None:
    good, bad = get_examples()
    for heading, examples in (("Good piles", good), ("Bad piles", bad)):
        print(heading)
        for example in examples:
            print(f"  {example.comment:<35} {example.stack()}  [{example.stack().stack_type.value}]")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a LynRummy self-play simulation.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible deck order.")
    parser.add_argument("--players", type=int, default=2, help="Number of players.")
    parser.add_argument("--turns", type=int, default=20, help="Number of turns to simulate.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level.",
    )
    parser.add_argument("--examples", action="store_true", help="Print the example stacks and exit.")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.examples:
        print_examples()
        return

    session = run_game(seed=args.seed, num_players=args.players, turns=args.turns)
    print(f"Game stopped after {session.turn_number} turns")
    for player in session.players:
        print(f"{player.name}: {player.total_score} points, {player.hand.size()} cards in hand")
    print(f"Cards left in deck: {session.deck.size()}")
    print("Board:")
    print(session.board.label())


if __name__ == "__main__":
    main()
