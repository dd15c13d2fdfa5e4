"""
WebSocket Decorators

Shared preamble and error handling for Socket.IO game events.
"""

from functools import wraps
from flask import request
from flask_socketio import emit

from ..models.errors import WordGameError
from .game_logger import game_logger
from .helpers import error_payload


def websocket_game_event(action, require_game_id=True):
    """
    Decorator for Socket.IO handlers that act on a game.

    Resolves the game service and the ``game_id`` from the payload and
    passes both as keyword arguments. Game errors are sent back to the
    sender as an ``error`` event; anything else is logged and reported.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(data=None, **kwargs):
            from ..services.game_service import get_game_service

            data = data if isinstance(data, dict) else {}
            game_service = get_game_service()
            if not game_service:
                emit('error', {'success': False, 'error': 'Game service unavailable'})
                return

            game_id = data.get('game_id')
            if require_game_id and not game_id:
                emit('error', {'success': False, 'error': 'Game ID is required'})
                return

            game_logger.log_user_action(request, action, game_id, via='websocket')

            try:
                return f(data, game_service=game_service, game_id=game_id, **kwargs)
            except WordGameError as e:
                error_response = error_payload(e)
                game_logger.log_server_response(
                    request, action, False, error_response, game_id,
                    error_code=error_response['error_code']
                )
                emit('error', error_response)
            except Exception as e:
                game_logger.log_error(request, e, action, game_id)
                emit('error', {'success': False, 'error': str(e)})

        return decorated_function
    return decorator
