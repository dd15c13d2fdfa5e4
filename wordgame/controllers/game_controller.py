"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..models.errors import GameNotFound, InvalidWord, WordGameError
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import error_payload

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _game_error_response(action, error, game_id=None):
    """Map a WordGameError to a 4xx response, logging it."""
    status_code = 404 if isinstance(error, GameNotFound) else 400
    error_response = error_payload(error)

    if isinstance(error, InvalidWord):
        # Row stays editable; send the unchanged state back with the rejection
        state = get_game_service().get_game_state(game_id)
        error_response['outcome'] = 'invalid_word'
        error_response['state'] = asdict(state) if state else None

    game_logger.log_server_response(
        request, action, False, error_response, game_id,
        error_code=error_response['error_code']
    )
    return jsonify(error_response), status_code


def _internal_error_response(action, error, game_id=None):
    game_logger.log_error(request, error, action, game_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 500


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'new_game')

        game_id = game_service.create_new_game()
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=state.word_length, max_rows=state.max_rows
        )
        game_logger.log_game_event(game_id, 'game_started', request.remote_addr)

        return jsonify(response_data)

    except WordGameError as e:
        return _game_error_response('new_game', e)
    except Exception as e:
        return _internal_error_response('new_game', e)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get current game state."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _game_error_response('get_state', GameNotFound(game_id), game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            current_row=state.current_row, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        return _internal_error_response('get_state', e, game_id)


@game_bp.route('/game/<game_id>/letter', methods=['POST'])
def enter_letter(game_id):
    """Type one letter into the active row."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        letter = data.get('letter')

        game_logger.log_user_action(request, 'enter_letter', game_id, letter=letter)

        state = game_service.enter_letter(game_id, letter)
        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'enter_letter', True, response_data, game_id)
        return jsonify(response_data)

    except WordGameError as e:
        return _game_error_response('enter_letter', e, game_id)
    except Exception as e:
        return _internal_error_response('enter_letter', e, game_id)


@game_bp.route('/game/<game_id>/letter', methods=['DELETE'])
def delete_letter(game_id):
    """Remove the last letter of the active row."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_letter', game_id)

        state = game_service.delete_letter(game_id)
        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'delete_letter', True, response_data, game_id)
        return jsonify(response_data)

    except WordGameError as e:
        return _game_error_response('delete_letter', e, game_id)
    except Exception as e:
        return _internal_error_response('delete_letter', e, game_id)


@game_bp.route('/game/<game_id>/key', methods=['POST'])
def press_key(game_id):
    """Apply a keyboard key (A-Z, ENTER, BACK)."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        key = str(data.get('key') or '')

        game_logger.log_user_action(request, 'press_key', game_id, key=key)

        key_result = game_service.handle_key(game_id, key)

        response_data = {
            'success': True,
            **key_result.to_dict(),
            'state': asdict(key_result.state)
        }

        game_logger.log_server_response(
            request, 'press_key', True, response_data, game_id,
            accepted=key_result.accepted
        )
        if key_result.result is not None:
            game_logger.log_guess_outcome(game_id, key_result.result, request.remote_addr)

        return jsonify(response_data)

    except WordGameError as e:
        return _game_error_response('press_key', e, game_id)
    except Exception as e:
        return _internal_error_response('press_key', e, game_id)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
def make_guess(game_id):
    """Submit the active row, or a whole word when one is given."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        guess = data.get('guess')

        game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

        result, state = game_service.submit_guess_with_state(game_id, guess)

        response_data = {
            'success': True,
            'result': result.to_dict(),
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=result.guess, row=result.row, outcome=result.outcome.value
        )
        game_logger.log_guess_outcome(game_id, result, request.remote_addr)

        return jsonify(response_data)

    except WordGameError as e:
        return _game_error_response('submit_guess', e, game_id)
    except Exception as e:
        return _internal_error_response('submit_guess', e, game_id)


@game_bp.route('/game/<game_id>/restart', methods=['POST'])
def restart_game(game_id):
    """Start over with a fresh board and a new word."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'restart_game', game_id)

        state = game_service.restart_game(game_id)
        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'restart_game', True, response_data, game_id)
        game_logger.log_game_event(game_id, 'game_restarted', request.remote_addr)

        return jsonify(response_data)

    except WordGameError as e:
        return _game_error_response('restart_game', e, game_id)
    except Exception as e:
        return _internal_error_response('restart_game', e, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
            return jsonify(response_data)
        return jsonify(response_data), 404

    except Exception as e:
        return _internal_error_response('delete_game', e, game_id)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy' if game_service else 'degraded',
            'active_games': len(game_service.games) if game_service else 0,
            'dictionary_size': len(game_service.dictionary) if game_service else 0,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
