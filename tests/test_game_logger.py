"""
Testing the JSON-line game logger and its health statistics.
"""

import json
from types import SimpleNamespace

import pytest

from wordgame.models.game import GuessResult, LetterStatus, Outcome
from wordgame.utils.game_logger import GameLogger, summarize_response


@pytest.fixture
def logger(tmp_path):
    game_logger = GameLogger(str(tmp_path), "INFO", name="wordgame_test_logger")
    yield game_logger
    for handler in list(game_logger.logger.handlers):
        game_logger.logger.removeHandler(handler)
        handler.close()


def read_entries(game_logger):
    game_logger.file_handler.flush()
    with game_logger.log_file.open(encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def socket_request(sid="abc123"):
    return SimpleNamespace(remote_addr="10.0.0.7", sid=sid)


def finished_result(outcome):
    return GuessResult(
        row=5, guess="APPLE", statuses=[LetterStatus.ABSENT] * 5,
        key_status_changes={}, outcome=outcome, render_events=[],
        outcome_delay_ms=1000, answer="CRANE"
    )


def test_user_action_is_one_json_line(logger):
    logger.log_user_action(socket_request(), "enter_letter", "g1", letter="C")

    entry, = read_entries(logger)
    assert entry["event_type"] == "USER_ACTION"
    assert entry["action"] == "enter_letter"
    assert entry["level"] == "INFO"
    assert entry["user"] == {"user_ip": "10.0.0.7", "session_id": "abc123"}
    assert entry["details"]["game_id"] == "g1"
    assert entry["details"]["letter"] == "C"
    assert entry["details"]["route"] is None


def test_rejected_response_is_a_warning(logger):
    logger.log_server_response(
        socket_request(), "submit_guess", False,
        {"success": False, "error_code": "invalid_word"}, "g1"
    )

    entry, = read_entries(logger)
    assert entry["event_type"] == "SERVER_RESPONSE"
    assert entry["level"] == "WARNING"
    assert entry["details"]["success"] is False


def test_response_summary_hides_answer():
    summary = summarize_response({
        "success": True,
        "state": {"current_row": 6, "game_over": True, "answer": "CRANE", "guesses": ["CRANE"]},
        "result": {"guess": "CRANE", "answer": "CRANE", "outcome": "win"}
    })

    assert "CRANE" not in json.dumps(summary["state"])
    assert summary["state"]["answer_revealed"] is True
    assert "answer" not in summary["result"]


def test_guess_outcome_events(logger):
    logger.log_guess_outcome("g1", finished_result(Outcome.LOSE), "10.0.0.7")
    logger.log_guess_outcome("g1", finished_result(Outcome.CONTINUE), "10.0.0.7")

    entry, = read_entries(logger)
    assert entry["action"] == "game_lost"
    assert entry["details"]["rows_used"] == 6
    assert entry["details"]["final_guess"] == "APPLE"


def test_error_keeps_traceback(logger):
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        logger.log_error(None, e, "submit_guess", "g1")

    entry, = read_entries(logger)
    assert entry["level"] == "ERROR"
    assert entry["details"]["error_type"] == "RuntimeError"
    assert "boom" in entry["traceback"]


def test_log_stats_counts_event_types(logger):
    logger.log_user_action(None, "new_game")
    logger.log_server_response(None, "new_game", True, {"success": True})
    logger.log_game_event("g1", "game_started", "10.0.0.7")
    logger.logger.info("plain message")

    stats = logger.get_log_stats()
    assert stats["total_entries"] == 4
    assert stats["user_action"] == 1
    assert stats["server_response"] == 1
    assert stats["game_event"] == 1
    assert stats["error"] == 0


def test_log_stats_follow_rollover(logger):
    logger.log_user_action(None, "new_game")
    logger.file_handler.doRollover()
    logger.log_game_event("g1", "game_started", "10.0.0.7")

    stats = logger.get_log_stats()
    assert stats["log_file"] == str(logger.log_file)
    assert "read_error" not in stats
    assert stats["total_entries"] == 1
    assert stats["game_event"] == 1
    assert len(list(logger.log_dir.glob("wordgame.log.*"))) == 1
