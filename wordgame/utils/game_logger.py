"""
Game Logger Module

One JSON object per line for every player action, server response, game
event and unexpected error. The file lives at ``LOG_DIR/wordgame.log`` and is
rolled over at midnight, keeping the previous days as ``wordgame.log.<date>``.
Warnings and errors are echoed to the console.
"""

import json
import logging
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from ..config.app_config import Config
from .helpers import get_user_identity

LOG_FILE_NAME = 'wordgame.log'
EVENT_TYPES = ('USER_ACTION', 'SERVER_RESPONSE', 'GAME_EVENT', 'ERROR')


class JsonLineFormatter(logging.Formatter):
    """Formats a record's ``entry`` dict (or its plain message) as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry = getattr(record, 'entry', None) or {
            'event_type': 'MESSAGE',
            'message': record.getMessage()
        }
        line = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            **entry
        }
        if record.exc_info:
            line['traceback'] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


class GameLogger:
    """
    Structured logging for the game server.

    Usage:
        game_logger.log_user_action(request, 'submit_guess', game_id, guess='crane')
        game_logger.log_guess_outcome(game_id, result, request.remote_addr)
    """

    def __init__(self,
                 log_dir: str = "logs",
                 level: str = "INFO",
                 name: str = "wordgame",
                 backup_count: int = 14):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, level, logging.INFO)

        self.file_handler = TimedRotatingFileHandler(
            self.log_dir / LOG_FILE_NAME,
            when='midnight',
            backupCount=backup_count,
            encoding='utf-8'
        )
        self.file_handler.setFormatter(JsonLineFormatter())
        self.logger = self._setup_logger(name)

    def _setup_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(self.level)

        # Re-creating the logger (tests, reloads) must not stack handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        logger.addHandler(self.file_handler)
        logger.addHandler(console_handler)
        return logger

    @property
    def log_file(self) -> Path:
        """The file being written right now; unchanged across rollovers."""
        return Path(self.file_handler.baseFilename)

    def _write(self, level: int, event_type: str, action: str,
               user: Dict[str, Any], exc_info=None, **details):
        entry = {
            'event_type': event_type,
            'action': action,
            'user': user,
            'details': details
        }
        self.logger.log(level, '%s %s', event_type, action,
                        extra={'entry': entry}, exc_info=exc_info)

    def log_user_action(self, request, action: str, game_id: Optional[str] = None, **kwargs):
        """Record an incoming request or Socket.IO event before it is handled."""
        route = None
        if getattr(request, 'endpoint', None):
            route = f"{request.method} {request.path}"

        self._write(logging.INFO, 'USER_ACTION', action, get_user_identity(request),
                    game_id=game_id, route=route, **kwargs)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            game_id: Optional[str] = None,
                            **kwargs):
        """
        Record what was sent back. Rejected input (bad letters, unknown words,
        missing games) is logged at WARNING, everything else at INFO.
        """
        self._write(logging.INFO if success else logging.WARNING,
                    'SERVER_RESPONSE', action, get_user_identity(request),
                    game_id=game_id, success=success,
                    response=summarize_response(response_data), **kwargs)

    def log_game_event(self, game_id: Optional[str], event: str, user_ip: Optional[str], **kwargs):
        """Lifecycle events: game_started, game_restarted, game_won, game_lost, game_deleted."""
        user = {'user_ip': user_ip or 'unknown', 'session_id': None}
        self._write(logging.INFO, 'GAME_EVENT', event, user, game_id=game_id, **kwargs)

    def log_guess_outcome(self, game_id: str, result, user_ip: Optional[str]):
        """Emit game_won or game_lost for a guess that ended the game."""
        events = {'win': ('game_won', 'winning_guess'), 'lose': ('game_lost', 'final_guess')}
        if result.outcome.value not in events:
            return

        event, guess_field = events[result.outcome.value]
        self.log_game_event(
            game_id, event, user_ip,
            rows_used=result.row + 1, target_word=result.answer,
            **{guess_field: result.guess}
        )

    def log_error(self, request, error: Exception, action: str, game_id: Optional[str] = None):
        """Record an unexpected exception with its traceback."""
        self._write(logging.ERROR, 'ERROR', action, get_user_identity(request),
                    exc_info=error, game_id=game_id,
                    error_type=type(error).__name__, error_message=str(error))

    def get_log_stats(self) -> Dict[str, Any]:
        """Entry counts per event type in the live log file, for the health check."""
        log_file = self.log_file
        stats: Dict[str, Any] = {
            'log_file': str(log_file),
            'file_size_mb': 0.0,
            'total_entries': 0,
            **{event_type.lower(): 0 for event_type in EVENT_TYPES}
        }

        self.file_handler.flush()
        if not log_file.exists():
            return stats

        try:
            stats['file_size_mb'] = round(log_file.stat().st_size / (1024 * 1024), 2)
            with log_file.open('r', encoding='utf-8') as f:
                for line in f:
                    if not line.strip():
                        continue
                    stats['total_entries'] += 1
                    try:
                        event_type = json.loads(line).get('event_type', '')
                    except ValueError:
                        continue
                    key = event_type.lower()
                    if key in stats:
                        stats[key] += 1
        except OSError as e:
            return {'log_file': str(log_file), 'read_error': f'Failed to read log: {e}'}

        return stats


def summarize_response(data: Any) -> Dict[str, Any]:
    """Cut a response body down to what is useful in a log line; never the answer."""
    if not isinstance(data, dict):
        return {'data_type': type(data).__name__}

    summary = dict(data)

    state = summary.get('state')
    if isinstance(state, dict):
        summary['state'] = {
            'current_row': state.get('current_row'),
            'current_tile': state.get('current_tile'),
            'game_over': state.get('game_over'),
            'won': state.get('won'),
            'guesses_count': len(state.get('guesses', [])),
            'answer_revealed': state.get('answer') is not None
        }

    result = summary.get('result')
    if isinstance(result, dict):
        summary['result'] = {
            'row': result.get('row'),
            'guess': result.get('guess'),
            'statuses': result.get('statuses'),
            'outcome': result.get('outcome')
        }

    return summary


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
