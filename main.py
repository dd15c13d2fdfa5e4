"""
Word Game Server - Main Entry Point

Loads the dictionary, initializes the game service and starts the
Flask-SocketIO application.
"""

from wordgame import create_app
from wordgame.config import get_config, get_word_statistics
from wordgame.models.errors import EmptyDictionary, MalformedWord
from wordgame.services.game_service import initialize_game_service
from wordgame.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        game_service = initialize_game_service()

        stats = get_word_statistics(game_service.dictionary)
        print(f"✓ Game service initialized with {stats['total_words']} words")

        config_class = get_config()

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Word Game Server Starting")

        print(f"\nStarting Word Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except (EmptyDictionary, MalformedWord) as e:
        print(f"✗ Failed to load dictionary: {e}")
        game_logger.logger.error(f"Failed to load dictionary: {e}")
        raise
    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Word Game Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
