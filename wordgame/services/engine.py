"""
Guess Engine

Letter entry, guess scoring and the turn state machine. All functions work on
a GameSession passed in by the caller and compute their result synchronously.
"""

from typing import Dict, List, Optional

from ..config.game_settings import (
    ALPHABET, MAX_ROWS, WORD_LENGTH,
    TILE_REVEAL_STAGGER_MS, TILE_FLIP_MS, OUTCOME_DELAY_MS
)
from ..models.errors import InvalidLetter, InvalidWord, PreconditionViolation, RowFull
from ..models.game import GameSession, GuessResult, LetterStatus, Outcome, RenderEvent
from .word_service import Dictionary

_LETTERS = frozenset(ALPHABET)


def _is_letter(letter) -> bool:
    # str.upper maps some non-ASCII letters onto A-Z ("\u0131" -> "I")
    return isinstance(letter, str) and len(letter) == 1 and letter.isascii() and letter.upper() in _LETTERS


def _check_cursor(session: GameSession) -> None:
    assert 0 <= session.current_row < MAX_ROWS, f"row out of range: {session.current_row}"
    assert 0 <= session.current_tile <= WORD_LENGTH, f"tile out of range: {session.current_tile}"


def _require_active(session: GameSession) -> None:
    if session.game_over:
        raise PreconditionViolation("Game is already over")


def enter_letter(session: GameSession, letter: str) -> None:
    """Write a letter at the cursor and advance it."""
    if not _is_letter(letter):
        raise InvalidLetter(letter)
    _require_active(session)
    _check_cursor(session)

    if session.current_tile >= WORD_LENGTH:
        raise RowFull()

    session.active_row[session.current_tile].letter = letter.upper()
    session.current_tile += 1


def delete_letter(session: GameSession) -> bool:
    """Clear the last letter of the active row. Returns False at the start of a row."""
    _require_active(session)
    _check_cursor(session)

    if session.current_tile == 0:
        return False

    session.current_tile -= 1
    session.active_row[session.current_tile].letter = None
    return True


def fill_row(session: GameSession, word: str) -> None:
    """Replace the active row's letters with ``word``."""
    _require_active(session)
    _check_cursor(session)

    if not isinstance(word, str):
        raise InvalidLetter(word)
    word = word.strip()
    if len(word) > WORD_LENGTH:
        raise RowFull(f"Guess must be at most {WORD_LENGTH} letters")
    for letter in word:
        if not _is_letter(letter):
            raise InvalidLetter(letter)

    for cell in session.active_row:
        cell.letter = None
    session.current_tile = 0
    for letter in word:
        enter_letter(session, letter)


def score_guess(guess: str, secret: str) -> List[LetterStatus]:
    """
    Score a guess against the secret word.

    Exact matches are marked first and consume their secret letter; the
    remaining positions then take the first unconsumed occurrence, left to
    right. A letter repeated in the guess is therefore never credited more
    often than it occurs in the secret.
    """
    guess = guess.upper()
    remaining: List[Optional[str]] = list(secret.upper())
    statuses: List[Optional[LetterStatus]] = [None] * len(guess)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == remaining[i]:
            statuses[i] = LetterStatus.CORRECT
            remaining[i] = None

    # Second pass: misplaced letters and misses
    for i, letter in enumerate(guess):
        if statuses[i] is not None:
            continue
        if letter in remaining:
            statuses[i] = LetterStatus.PRESENT
            remaining[remaining.index(letter)] = None
        else:
            statuses[i] = LetterStatus.ABSENT

    return statuses  # type: ignore[return-value]


def upgrade_key_status(key_status: Dict[str, LetterStatus],
                       guess: str,
                       statuses: List[LetterStatus]) -> Dict[str, LetterStatus]:
    """
    Raise keyboard statuses from one scored guess; never lowers one.

    Returns:
        Letters whose status changed, mapped to their new status
    """
    before = dict(key_status)

    for letter, new_status in zip(guess, statuses):
        current = key_status.get(letter, LetterStatus.UNUSED)
        if new_status.rank > current.rank:
            key_status[letter] = new_status

    return {
        letter: status for letter, status in key_status.items()
        if before.get(letter) is not status
    }


def render_events(guess: str, statuses: List[LetterStatus]) -> List[RenderEvent]:
    """Per-tile reveal hints, in position order."""
    return [
        RenderEvent(
            position=i,
            letter=letter,
            status=status,
            delay_ms=i * TILE_REVEAL_STAGGER_MS + TILE_FLIP_MS
        )
        for i, (letter, status) in enumerate(zip(guess, statuses))
    ]


def submit_guess(session: GameSession, dictionary: Dictionary) -> GuessResult:
    """
    Validate, score and apply the active row.

    Raises:
        PreconditionViolation: game over or row not full
        InvalidWord: guess not in dictionary; session untouched
    """
    _require_active(session)
    _check_cursor(session)

    if session.current_tile != WORD_LENGTH:
        raise PreconditionViolation("Row is not complete")

    guess = "".join(cell.letter for cell in session.active_row)
    if guess not in dictionary:
        raise InvalidWord(guess)

    row = session.current_row
    statuses = score_guess(guess, session.secret_word)

    for cell, status in zip(session.active_row, statuses):
        cell.status = status
    changes = upgrade_key_status(session.key_status, guess, statuses)
    session.guesses.append(guess)

    if guess == session.secret_word.upper():
        outcome = Outcome.WIN
    elif row == MAX_ROWS - 1:
        outcome = Outcome.LOSE
    else:
        outcome = Outcome.CONTINUE

    if outcome is Outcome.CONTINUE:
        session.current_row += 1
        session.current_tile = 0
    else:
        session.game_over = True
        session.outcome = outcome

    return GuessResult(
        row=row,
        guess=guess,
        statuses=statuses,
        key_status_changes=changes,
        outcome=outcome,
        render_events=render_events(guess, statuses),
        outcome_delay_ms=OUTCOME_DELAY_MS,
        answer=session.answer
    )
