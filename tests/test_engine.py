"""
Testing the guess engine: scoring, key statuses and the turn state machine.
"""

import copy
from collections import Counter
from itertools import product

import pytest

from wordgame.models.errors import InvalidLetter, InvalidWord, PreconditionViolation, RowFull
from wordgame.models.game import LetterStatus, Outcome
from wordgame.services import engine
from tests.conftest import WORDS

C = LetterStatus.CORRECT
P = LetterStatus.PRESENT
A = LetterStatus.ABSENT


def type_word(session, word):
    for letter in word:
        engine.enter_letter(session, letter)


def play(session, dictionary, word):
    type_word(session, word)
    return engine.submit_guess(session, dictionary)


# --- scoring ---------------------------------------------------------------

def test_score_exact_match_is_all_correct():
    assert engine.score_guess("CRANE", "CRANE") == [C] * 5


def test_score_no_common_letters():
    assert engine.score_guess("HELLO", "TRAIN") == [A, A, A, A, A]


def test_score_allow_loyal():
    # No position lines up; both L's in the guess find an unconsumed L
    assert engine.score_guess("LOYAL", "ALLOW") == [P, P, A, P, P]


def test_score_speed_erase():
    # Secret has two E's, so both E's of the guess score
    assert engine.score_guess("ERASE", "SPEED") == [P, A, A, P, P]


def test_score_exact_match_consumes_before_misplaced():
    # The final E is an exact hit; the earlier E's have nothing left to match
    assert engine.score_guess("EERIE", "CRANE") == [A, A, P, A, C]


def test_score_repeated_guess_letter_single_secret_letter():
    # One L in the secret: the exact hit takes it, the other L scores absent
    assert engine.score_guess("HELLO", "WORLD") == [A, A, A, C, P]


def test_score_is_case_insensitive():
    assert engine.score_guess("crane", "CRANE") == [C] * 5


@pytest.mark.parametrize("secret,guess", list(product(WORDS, WORDS)))
def test_score_credits_each_letter_at_most_as_often_as_secret(secret, guess):
    statuses = engine.score_guess(guess, secret)
    credited = Counter(
        letter for letter, status in zip(guess.upper(), statuses) if status is not A
    )
    secret_counts = Counter(secret.upper())
    guess_counts = Counter(guess.upper())

    for letter, count in guess_counts.items():
        assert credited[letter] == min(count, secret_counts[letter])

    if guess == secret:
        assert statuses == [C] * 5


# --- key status ------------------------------------------------------------

def test_upgrade_key_status_reports_changes(make_session):
    session = make_session()
    changes = engine.upgrade_key_status(session.key_status, "EERIE", [A, A, P, A, C])

    assert changes == {"E": C, "R": P, "I": A}
    assert session.key_status["E"] is C


def test_upgrade_key_status_never_downgrades(make_session):
    session = make_session()
    engine.upgrade_key_status(session.key_status, "CRANE", [C, P, A, A, A])
    changes = engine.upgrade_key_status(session.key_status, "TRACE", [A, A, A, A, A])

    assert session.key_status["C"] is C
    assert session.key_status["R"] is P
    assert session.key_status["A"] is A
    assert changes == {"T": A}


def test_key_status_monotonic_over_a_game(make_session, dictionary):
    session = make_session("SPEED")
    previous = dict(session.key_status)

    for word in ["ERASE", "GEESE", "SWEET", "SPEED"]:
        play(session, dictionary, word)
        for letter, status in session.key_status.items():
            assert status.rank >= previous[letter].rank
        previous = dict(session.key_status)


def test_render_events_are_ordered_with_delays():
    events = engine.render_events("CRANE", [C, P, A, A, C])

    assert [event.position for event in events] == [0, 1, 2, 3, 4]
    assert [event.delay_ms for event in events] == [250, 350, 450, 550, 650]
    assert events[1].letter == "R"
    assert events[1].status is P


# --- letter entry ----------------------------------------------------------

def test_enter_letter_advances_cursor(make_session):
    session = make_session()
    engine.enter_letter(session, "c")

    assert session.current_tile == 1
    assert session.board[0][0].letter == "C"


def test_enter_letter_row_full(make_session):
    session = make_session()
    type_word(session, "CRANE")

    with pytest.raises(RowFull):
        engine.enter_letter(session, "S")
    assert session.current_tile == 5


@pytest.mark.parametrize("bad", ["", "AB", "1", "é", "\u0131", "\u017f", None])
def test_enter_letter_rejects_non_letters(make_session, bad):
    session = make_session()
    with pytest.raises(InvalidLetter):
        engine.enter_letter(session, bad)


def test_delete_letter(make_session):
    session = make_session()
    type_word(session, "CR")

    assert engine.delete_letter(session) is True
    assert session.current_tile == 1
    assert session.board[0][1].letter is None
    assert session.board[0][0].letter == "C"


def test_delete_letter_at_row_start_is_noop(make_session):
    session = make_session()
    assert engine.delete_letter(session) is False
    assert session.current_tile == 0


def test_fill_row_replaces_typed_letters(make_session):
    session = make_session()
    type_word(session, "XY")
    engine.fill_row(session, "train")

    assert session.current_tile == 5
    assert "".join(cell.letter for cell in session.board[0]) == "TRAIN"


def test_fill_row_too_long_leaves_row_alone(make_session):
    session = make_session()
    type_word(session, "AB")

    with pytest.raises(RowFull):
        engine.fill_row(session, "TRAINS")
    assert session.current_tile == 2


@pytest.mark.parametrize("word", ["crıne", "ſpeed", "cr4ne"])
def test_fill_row_rejects_non_ascii_letters(make_session, word):
    # Dotless i and long s upper-case to I and S; neither is A-Z
    session = make_session()
    type_word(session, "AB")

    with pytest.raises(InvalidLetter):
        engine.fill_row(session, word)
    assert session.current_tile == 2
    assert "".join(cell.letter or "" for cell in session.board[0]) == "AB"


def test_broken_cursor_fails_loudly(make_session):
    session = make_session()
    session.current_row = 6

    with pytest.raises(AssertionError):
        engine.enter_letter(session, "A")


# --- submission ------------------------------------------------------------

def test_submit_requires_full_row(make_session, dictionary):
    session = make_session()
    type_word(session, "CRAN")

    with pytest.raises(PreconditionViolation):
        engine.submit_guess(session, dictionary)


def test_invalid_word_changes_nothing(make_session, dictionary):
    session = make_session()
    play(session, dictionary, "TRAIN")
    type_word(session, "ZZZZZ")
    before = copy.deepcopy(session)

    with pytest.raises(InvalidWord):
        engine.submit_guess(session, dictionary)

    assert session == before
    assert session.current_row == 1
    assert session.current_tile == 5


def test_continue_advances_row(make_session, dictionary):
    session = make_session("CRANE")
    result = play(session, dictionary, "TRACE")

    assert result.outcome is Outcome.CONTINUE
    assert result.row == 0
    assert result.answer is None
    assert (session.current_row, session.current_tile) == (1, 0)
    assert [cell.status for cell in session.board[0]] == result.statuses
    assert session.guesses == ["TRACE"]


def test_win(make_session, dictionary):
    session = make_session("CRANE")
    play(session, dictionary, "TRAIN")
    result = play(session, dictionary, "crane")

    assert result.outcome is Outcome.WIN
    assert result.statuses == [C] * 5
    assert result.answer == "CRANE"
    assert session.game_over
    assert session.won
    assert session.status_message == "You Win!"


def test_lose_after_six_misses(make_session, dictionary):
    session = make_session("CRANE")
    misses = ["ALLOW", "LOYAL", "SPEED", "ERASE", "ABOUT", "APPLE"]

    outcomes = [play(session, dictionary, word).outcome for word in misses]

    assert outcomes == [Outcome.CONTINUE] * 5 + [Outcome.LOSE]
    assert session.game_over
    assert session.outcome is Outcome.LOSE
    assert session.answer == "CRANE"
    assert session.status_message == "Game Over! Word was CRANE"


def test_win_on_last_row(make_session, dictionary):
    session = make_session("CRANE")
    for word in ["ALLOW", "LOYAL", "SPEED", "ERASE", "ABOUT"]:
        play(session, dictionary, word)

    assert play(session, dictionary, "CRANE").outcome is Outcome.WIN


def test_no_input_after_game_over(make_session, dictionary):
    session = make_session("CRANE")
    play(session, dictionary, "CRANE")

    with pytest.raises(PreconditionViolation):
        engine.enter_letter(session, "A")
    with pytest.raises(PreconditionViolation):
        engine.delete_letter(session)
    with pytest.raises(PreconditionViolation):
        engine.submit_guess(session, dictionary)


def test_answer_hidden_while_playing(make_session, dictionary):
    session = make_session("CRANE")
    play(session, dictionary, "TRAIN")
    assert session.answer is None
