"""
Services Package

Contains all business logic and service classes.
"""

from .word_service import Dictionary, load_dictionary, pick_secret_word
from .game_service import GameService, KeyPressResult, get_game_service, initialize_game_service

__all__ = [
    'Dictionary', 'load_dictionary', 'pick_secret_word',
    'GameService', 'KeyPressResult', 'get_game_service', 'initialize_game_service'
]
