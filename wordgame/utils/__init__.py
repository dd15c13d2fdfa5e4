"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .helpers import get_user_identity, error_payload
from .game_logger import game_logger
from .decorators import websocket_game_event

__all__ = ['get_user_identity', 'error_payload', 'game_logger', 'websocket_game_event']
