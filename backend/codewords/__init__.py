from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

from codewords.gateway import SessionGateway  # noqa: E402

session_gateway = SessionGateway()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Session storage and the single-writer gateway in front of it
    from codewords.store import SessionRepository, build_store
    repository = SessionRepository(
        build_store(flask_app),
        ttl=int(flask_app.config.get('SESSION_TTL_SEC', 60 * 60 * 24)),
        prefix=flask_app.config.get('SESSION_KEY_PREFIX', 'game:'),
    )
    session_gateway.init_app(flask_app, repository, emitter=socketio)

    from codewords.main import main
    flask_app.register_blueprint(main)

    from codewords.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from codewords.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the session tables."""
        import codewords.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
        click.echo('Database has been reset!')

    @click.command('purge-expired')
    def purge_expired_command():
        """Deletes session records whose time-to-live has passed."""
        store = repository.store
        if not hasattr(store, 'purge_expired'):
            click.echo('Store backend keeps no expired records.')
            return
        count = store.purge_expired()
        flask_app.logger.info(f"[purge] removed={count}")
        click.echo(f'Removed {count} expired session(s).')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(purge_expired_command)

    return flask_app
