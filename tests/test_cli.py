import pathlib
import sys
from collections import Counter

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lynrummy import cli


def _all_cards(session):
    cards = list(session.deck.cards)
    for player in session.players:
        cards.extend(player.hand.get_cards())
    cards.extend(board_card.card for board_card in session.board.get_cards())
    return cards


def test_self_play_keeps_every_card_accounted_for():
    session = cli.run_game(seed=3, turns=6)

    cards = _all_cards(session)
    assert len(cards) == 104
    assert max(Counter(cards).values()) == 1
    assert session.board.is_clean()
    assert session.turn_number == 6


def test_self_play_is_deterministic_for_a_seed():
    first = cli.run_game(seed=4, num_players=3, turns=5)
    second = cli.run_game(seed=4, num_players=3, turns=5)
    assert first.stable_hash() == second.stable_hash()
    assert len(first.players) == 3


def test_main_prints_summary(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["lynrummy", "--seed", "2", "--turns", "2"])
    cli.main()
    out = capsys.readouterr().out
    assert "Game stopped after 2 turns" in out
    assert "Player 1:" in out
    assert "Board:" in out


def test_main_prints_examples(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["lynrummy", "--examples"])
    cli.main()
    out = capsys.readouterr().out
    assert "Good piles" in out
    assert "Bad piles" in out
    assert "[pure run]" in out


def test_log_level_is_case_insensitive_and_checked(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["lynrummy", "--examples", "--log-level", "debug"])
    cli.main()
    assert "Good piles" in capsys.readouterr().out

    monkeypatch.setattr(sys, "argv", ["lynrummy", "--log-level", "LOUD"])
    with pytest.raises(SystemExit):
        cli.main()
    assert "invalid choice" in capsys.readouterr().err
