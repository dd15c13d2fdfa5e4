"""
Game Errors

Exception hierarchy shared by the engine, the session service and the
HTTP/WebSocket layers. Every error carries a stable ``error_code`` that is
sent to clients.
"""

from typing import List, Optional


class WordGameError(Exception):
    """Base class for all game errors."""
    error_code = "game_error"


class EmptyDictionary(WordGameError, ValueError):
    """No usable words; no session can start."""
    error_code = "empty_dictionary"

    def __init__(self, message: str = "Dictionary contains no five-letter words"):
        super().__init__(message)


class MalformedWord(WordGameError, ValueError):
    """One or more dictionary entries are not exactly five letters."""
    error_code = "malformed_word"

    def __init__(self, words: List[str]):
        self.words = list(words)
        preview = ", ".join(repr(word) for word in self.words[:10])
        if len(self.words) > 10:
            preview += f" (+{len(self.words) - 10} more)"
        super().__init__(f"Malformed dictionary entries: {preview}")


class InvalidWord(WordGameError):
    """Guess is not in the dictionary. Game state is left untouched."""
    error_code = "invalid_word"

    def __init__(self, guess: str):
        self.guess = guess
        super().__init__("Word not in list")


class InvalidLetter(WordGameError, ValueError):
    """Input is not a single A-Z letter."""
    error_code = "invalid_letter"

    def __init__(self, letter):
        self.letter = letter
        super().__init__(f"Invalid letter: {letter!r}")


class PreconditionViolation(WordGameError):
    """Operation not allowed in the current session state."""
    error_code = "precondition_violation"


class RowFull(PreconditionViolation):
    """Active row already holds five letters."""
    error_code = "row_full"

    def __init__(self, message: str = "Row is full"):
        super().__init__(message)


class GameNotFound(WordGameError, KeyError):
    """No session with the given id."""
    error_code = "game_not_found"

    def __init__(self, game_id: Optional[str]):
        self.game_id = game_id
        super().__init__(f"Game not found: {game_id}")

    def __str__(self):
        return self.args[0]
