"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    LetterStatus, Outcome, Cell, GameSession, RenderEvent, GuessResult, GameState
)
from .errors import (
    WordGameError, EmptyDictionary, MalformedWord, InvalidWord, InvalidLetter,
    PreconditionViolation, RowFull, GameNotFound
)

__all__ = [
    'LetterStatus', 'Outcome', 'Cell', 'GameSession', 'RenderEvent', 'GuessResult', 'GameState',
    'WordGameError', 'EmptyDictionary', 'MalformedWord', 'InvalidWord', 'InvalidLetter',
    'PreconditionViolation', 'RowFull', 'GameNotFound'
]
