from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def get_game_state(flask_app=None):
    """Return the session manager bound to the given (or current) app."""
    return (flask_app or current_app).extensions['fruitbox']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One in-memory session per app, seeded once
    from fruitbox.services.games import GameState
    flask_app.extensions['fruitbox'] = GameState.from_config(flask_app.config)

    # Import and register blueprints here
    from fruitbox.main import main
    flask_app.register_blueprint(main)

    from fruitbox.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Register Socket.IO event handlers
    from fruitbox.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('preview-grid')
    @click.option('--seed', type=int, default=None, help='Seed to draw with (defaults to RNG_SEED).')
    def preview_grid_command(seed):
        """Prints the first board a session with the given seed would deal."""
        from fruitbox.models import grid_to_list
        cfg = flask_app.config
        preview = GameState(
            seed=cfg.get('RNG_SEED', 0) if seed is None else seed,
            height=cfg.get('GRID_HEIGHT', 10),
            width=cfg.get('GRID_WIDTH', 17),
            fruit_types=cfg.get('FRUIT_TYPES', 5),
        )
        for row in grid_to_list(preview.init_round()):
            click.echo(' '.join(str(v) for v in row))

    flask_app.cli.add_command(preview_grid_command)

    return flask_app
