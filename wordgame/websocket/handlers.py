"""
WebSocket Event Handlers

Real-time game play over Socket.IO. Every client watching a game joins the
room ``game_<game_id>`` and receives state updates and tile reveal events.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit, join_room, leave_room
from ..models.errors import InvalidWord
from ..models.game import Outcome
from ..utils.decorators import websocket_game_event
from ..utils.game_logger import game_logger


def game_room(game_id):
    return f"game_{game_id}"


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def broadcast_game_state(game_service, game_id, state=None):
        if state is None:
            state = game_service.get_game_state(game_id)
        if state is None:
            return
        socketio.emit('game_state', {
            'success': True,
            'state': asdict(state)
        }, room=game_room(game_id))

    def send_guess_result(game_service, game_id, result, state):
        socketio.emit('guess_result', {
            'success': True,
            'game_id': game_id,
            'result': result.to_dict()
        }, room=game_room(game_id))
        game_logger.log_guess_outcome(game_id, result, request.remote_addr)
        broadcast_game_state(game_service, game_id, state)

    def send_invalid_word(game_service, game_id, state=None):
        if state is None:
            state = game_service.get_game_state(game_id)
        emit('invalid_word', {
            'success': False,
            'error': 'Word not in list',
            'error_code': 'invalid_word',
            'outcome': Outcome.INVALID_WORD.value,
            'state': asdict(state) if state else None
        })

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.logger.debug(f"WebSocket connected: {request.sid}")

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Handle WebSocket disconnection. Sessions outlive the socket."""
        game_logger.logger.debug(f"WebSocket disconnected: {request.sid}")

    @socketio.on('new_game')
    @websocket_game_event('new_game', require_game_id=False)
    def handle_new_game(data, game_service=None, game_id=None):
        """Start a game and join its room."""
        game_id = game_service.create_new_game()
        join_room(game_room(game_id))
        game_logger.log_game_event(game_id, 'game_started', request.remote_addr, via='websocket')

        emit('game_state', {
            'success': True,
            'game_id': game_id,
            'state': asdict(game_service.get_game_state(game_id))
        })

    @socketio.on('watch_game')
    @websocket_game_event('watch_game')
    def handle_watch_game(data, game_service=None, game_id=None):
        """Join an existing game's room."""
        state = game_service.get_game_state(game_id)
        if state is None:
            emit('error', {'success': False, 'error': 'Game not found', 'error_code': 'game_not_found'})
            return

        join_room(game_room(game_id))
        emit('game_state', {
            'success': True,
            'state': asdict(state)
        })

    @socketio.on('leave_game')
    @websocket_game_event('leave_game')
    def handle_leave_game(data, game_service=None, game_id=None):
        """Stop receiving updates for a game."""
        leave_room(game_room(game_id))

    @socketio.on('enter_letter')
    @websocket_game_event('enter_letter')
    def handle_enter_letter(data, game_service=None, game_id=None):
        state = game_service.enter_letter(game_id, data.get('letter'))
        broadcast_game_state(game_service, game_id, state)

    @socketio.on('delete_letter')
    @websocket_game_event('delete_letter')
    def handle_delete_letter(data, game_service=None, game_id=None):
        state = game_service.delete_letter(game_id)
        broadcast_game_state(game_service, game_id, state)

    @socketio.on('key_press')
    @websocket_game_event('key_press')
    def handle_key_press(data, game_service=None, game_id=None):
        """Apply one key from the on-screen or physical keyboard."""
        key_result = game_service.handle_key(game_id, str(data.get('key') or ''))

        emit('key_result', {'success': True, 'game_id': game_id, **key_result.to_dict()})

        if key_result.outcome is Outcome.INVALID_WORD:
            send_invalid_word(game_service, game_id, key_result.state)
        elif key_result.result is not None:
            send_guess_result(game_service, game_id, key_result.result, key_result.state)
        elif key_result.accepted:
            broadcast_game_state(game_service, game_id, key_result.state)

    @socketio.on('submit_guess')
    @websocket_game_event('submit_guess')
    def handle_submit_guess(data, game_service=None, game_id=None):
        """Score the active row, or a whole word when one is given."""
        try:
            result, state = game_service.submit_guess_with_state(game_id, data.get('guess'))
        except InvalidWord:
            send_invalid_word(game_service, game_id)
            return

        send_guess_result(game_service, game_id, result, state)

    @socketio.on('restart_game')
    @websocket_game_event('restart_game')
    def handle_restart_game(data, game_service=None, game_id=None):
        state = game_service.restart_game(game_id)
        game_logger.log_game_event(game_id, 'game_restarted', request.remote_addr, via='websocket')
        broadcast_game_state(game_service, game_id, state)
