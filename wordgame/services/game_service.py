"""
Game Service

Owns the in-memory game sessions and routes player input to the engine.
"""

import random
import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..models.errors import GameNotFound, InvalidWord, PreconditionViolation, WordGameError
from ..models.game import GameSession, GameState, GuessResult, Outcome
from . import engine
from .word_service import Chooser, Dictionary, load_dictionary, pick_secret_word

ENTER_KEYS = frozenset({"ENTER"})
BACK_KEYS = frozenset({"BACK", "BACKSPACE"})


@dataclass
class KeyPressResult:
    """What a single key press did."""
    action: str  # "enter_letter", "delete_letter", "submit" or "ignored"
    accepted: bool
    outcome: Optional[Outcome] = None
    result: Optional[GuessResult] = None
    state: Optional[GameState] = None  # snapshot taken with the key press

    def to_dict(self) -> Dict:
        return {
            "action": self.action,
            "accepted": self.accepted,
            "outcome": self.outcome.value if self.outcome else None,
            "result": self.result.to_dict() if self.result else None
        }


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Secret word selection and storage
    - Letter entry, guess validation and evaluation via the engine
    - State snapshots that never expose an unfinished game's answer
    """

    def __init__(self, dictionary: Dictionary, chooser: Chooser = random.choice):
        self.dictionary = dictionary
        self.chooser = chooser
        self.games: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def _new_session(self) -> GameSession:
        return GameSession(secret_word=pick_secret_word(self.dictionary, self.chooser))

    def _get_session(self, game_id: str) -> GameSession:
        session = self.games.get(game_id)
        if session is None:
            raise GameNotFound(game_id)
        return session

    def create_new_game(self) -> str:
        """
        Creates a new game session with a randomly selected word.

        Returns:
            str: Unique game ID for this session
        """
        game_id = str(uuid.uuid4())
        session = self._new_session()
        with self._lock:
            self.games[game_id] = session
        return game_id

    def restart_game(self, game_id: str) -> GameState:
        """Discard a session's progress and draw a new secret word."""
        with self._lock:
            self._get_session(game_id)
            self.games[game_id] = self._new_session()
            return GameState.from_session(game_id, self.games[game_id])

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a session.

        Returns:
            GameState object or None if game not found
        """
        with self._lock:
            session = self.games.get(game_id)
            if session is None:
                return None
            return GameState.from_session(game_id, session)

    def enter_letter(self, game_id: str, letter: str) -> GameState:
        with self._lock:
            session = self._get_session(game_id)
            engine.enter_letter(session, letter)
            return GameState.from_session(game_id, session)

    def delete_letter(self, game_id: str) -> GameState:
        with self._lock:
            session = self._get_session(game_id)
            engine.delete_letter(session)
            return GameState.from_session(game_id, session)

    def submit_guess(self, game_id: str, guess: Optional[str] = None) -> GuessResult:
        """
        Scores the active row, optionally filling it with ``guess`` first.

        Raises:
            GameNotFound, PreconditionViolation, InvalidLetter, InvalidWord
        """
        return self.submit_guess_with_state(game_id, guess)[0]

    def submit_guess_with_state(self, game_id: str,
                                guess: Optional[str] = None) -> Tuple[GuessResult, GameState]:
        """Like submit_guess, also returning the state the guess left behind."""
        with self._lock:
            session = self._get_session(game_id)
            if guess is None:
                result = engine.submit_guess(session, self.dictionary)
                return result, GameState.from_session(game_id, session)

            typed = [cell.letter for cell in session.active_row]
            tile = session.current_tile
            engine.fill_row(session, guess)
            try:
                result = engine.submit_guess(session, self.dictionary)
            except WordGameError:
                # Rejected whole-word guesses leave the row as the player had it
                for cell, letter in zip(session.active_row, typed):
                    cell.letter = letter
                session.current_tile = tile
                raise
            return result, GameState.from_session(game_id, session)

    def handle_key(self, game_id: str, key: str) -> KeyPressResult:
        """
        Applies one keyboard key the way the on-screen keyboard does.

        Keys that have no effect in the current state (anything after the
        game ends, ENTER on a partial row, letters on a full row, unknown
        keys) are reported as not accepted instead of raising. The returned
        result carries the state as it stood right after this key.
        """
        key = (key or "").strip().upper()

        with self._lock:
            session = self._get_session(game_id)
            key_result = self._apply_key(session, key)
            key_result.state = GameState.from_session(game_id, session)
            return key_result

    def _apply_key(self, session: GameSession, key: str) -> KeyPressResult:
        if session.game_over:
            return KeyPressResult("ignored", False)

        if key in ENTER_KEYS:
            if session.current_tile != len(session.active_row):
                return KeyPressResult("submit", False)
            try:
                result = engine.submit_guess(session, self.dictionary)
            except InvalidWord:
                return KeyPressResult("submit", False, Outcome.INVALID_WORD)
            return KeyPressResult("submit", True, result.outcome, result)

        if key in BACK_KEYS:
            return KeyPressResult("delete_letter", engine.delete_letter(session))

        if len(key) == 1 and key.isascii() and key.isalpha():
            try:
                engine.enter_letter(session, key)
            except PreconditionViolation:
                return KeyPressResult("enter_letter", False)
            return KeyPressResult("enter_letter", True)

        return KeyPressResult("ignored", False)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            if game_id in self.games:
                del self.games[game_id]
                return True
            return False


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(dictionary: Optional[Dictionary] = None,
                            chooser: Optional[Chooser] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    if dictionary is None:
        dictionary = load_dictionary()
    _game_service = GameService(dictionary, chooser or random.choice)
    return _game_service
