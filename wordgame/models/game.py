"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..config.game_settings import ALPHABET, MAX_ROWS, WORD_LENGTH


class LetterStatus(Enum):
    """Per-letter evaluation status, ordered by rank."""
    UNUSED = "unused"
    ABSENT = "absent"
    PRESENT = "present"
    CORRECT = "correct"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {
    LetterStatus.UNUSED: 0,
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


class Outcome(Enum):
    """Result of a guess submission."""
    WIN = "win"
    LOSE = "lose"
    CONTINUE = "continue"
    INVALID_WORD = "invalid_word"


@dataclass
class Cell:
    """One board tile."""
    letter: Optional[str] = None
    status: Optional[LetterStatus] = None

    def to_dict(self) -> Dict:
        return {
            "letter": self.letter,
            "status": self.status.value if self.status else None
        }


def new_board() -> List[List[Cell]]:
    return [[Cell() for _ in range(WORD_LENGTH)] for _ in range(MAX_ROWS)]


def new_key_status() -> Dict[str, LetterStatus]:
    return {letter: LetterStatus.UNUSED for letter in ALPHABET}


@dataclass
class GameSession:
    """
    All mutable state of one game.

    Owned by the caller and passed explicitly to the engine functions,
    which mutate it in place.
    """
    secret_word: str
    board: List[List[Cell]] = field(default_factory=new_board)
    current_row: int = 0
    current_tile: int = 0
    key_status: Dict[str, LetterStatus] = field(default_factory=new_key_status)
    game_over: bool = False
    outcome: Optional[Outcome] = None  # WIN or LOSE once the game is over
    guesses: List[str] = field(default_factory=list)

    @property
    def active_row(self) -> List[Cell]:
        return self.board[self.current_row]

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WIN

    @property
    def answer(self) -> Optional[str]:
        """Secret word, only revealed once the game is over."""
        return self.secret_word if self.game_over else None

    @property
    def status_message(self) -> Optional[str]:
        if self.outcome is Outcome.WIN:
            return "You Win!"
        if self.outcome is Outcome.LOSE:
            return f"Game Over! Word was {self.secret_word}"
        return None


@dataclass
class RenderEvent:
    """Tile reveal instruction for the presentation layer."""
    position: int
    letter: str
    status: LetterStatus
    delay_ms: int

    def to_dict(self) -> Dict:
        return {
            "position": self.position,
            "letter": self.letter,
            "status": self.status.value,
            "delay_ms": self.delay_ms
        }


@dataclass
class GuessResult:
    """Everything a scored guess produced."""
    row: int
    guess: str
    statuses: List[LetterStatus]
    key_status_changes: Dict[str, LetterStatus]
    outcome: Outcome
    render_events: List[RenderEvent]
    outcome_delay_ms: int
    answer: Optional[str] = None  # Only set on WIN/LOSE

    def to_dict(self) -> Dict:
        return {
            "row": self.row,
            "guess": self.guess,
            "statuses": [status.value for status in self.statuses],
            "key_status_changes": {
                letter: status.value for letter, status in self.key_status_changes.items()
            },
            "outcome": self.outcome.value,
            "render_events": [event.to_dict() for event in self.render_events],
            "outcome_delay_ms": self.outcome_delay_ms,
            "answer": self.answer
        }


@dataclass
class GameState:
    """JSON-ready snapshot of a session, never exposing the answer mid-game."""
    game_id: str
    current_row: int
    current_tile: int
    max_rows: int
    word_length: int
    game_over: bool
    won: bool
    outcome: Optional[str]
    board: List[List[Dict]]
    key_status: Dict[str, str]
    guesses: List[str]
    answer: Optional[str] = None  # Only included when game is over
    message: Optional[str] = None

    @classmethod
    def from_session(cls, game_id: str, session: GameSession) -> "GameState":
        return cls(
            game_id=game_id,
            current_row=session.current_row,
            current_tile=session.current_tile,
            max_rows=MAX_ROWS,
            word_length=WORD_LENGTH,
            game_over=session.game_over,
            won=session.won,
            outcome=session.outcome.value if session.outcome else None,
            board=[[cell.to_dict() for cell in row] for row in session.board],
            key_status={letter: status.value for letter, status in session.key_status.items()},
            guesses=session.guesses.copy(),
            answer=session.answer,
            message=session.status_message
        )
