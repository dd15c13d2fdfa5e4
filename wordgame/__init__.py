"""
Word Game Server Application Package

Serves a six-row, five-letter word-guessing game over HTTP and Socket.IO.
The scoring and turn logic live in ``services.engine``; controllers and
WebSocket handlers only translate requests into service calls.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        (app, socketio) with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app, origins=config_class.CORS_ORIGINS)
    socketio = SocketIO(
        app, cors_allowed_origins=config_class.CORS_ORIGINS,
        logger=False, engineio_logger=False
    )

    # Register blueprints
    from .controllers.game_controller import game_bp

    app.register_blueprint(game_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
