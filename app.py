"""
Canoe Rental Manager
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import csrf

# Import database functions
from database import close_db, init_db, is_initialized, run_all_migrations

# Import domain errors
from utils.errors import ConfigurationError, ReservationNotFoundError, ValidationError
from utils.api_response import api_error
from utils.messages import get_message


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.rentals import rentals_bp
    from blueprints.api.routes import api_bp

    # Register blueprints
    app.register_blueprint(rentals_bp, url_prefix='/rentals')
    app.register_blueprint(api_bp, url_prefix='/api')

    # Set default route
    @app.route('/')
    def index():
        """Redirect to today's live board."""
        from flask import redirect, url_for
        return redirect(url_for('rentals.rentals_api.list_reservations'))


def _rollback():
    db = g.get('db')
    if db:
        db.rollback()


def register_error_handlers(app):
    """Register error handlers. Every error is answered as JSON."""

    @app.errorhandler(ValidationError)
    def validation_error(error):
        """Rejected input (includes illegal status transitions)."""
        _rollback()
        return api_error(str(error), 400)

    @app.errorhandler(ReservationNotFoundError)
    def reservation_not_found(error):
        """Unknown reservation id."""
        return api_error(get_message('reservation_not_found'), 404,
                         reservation_id=error.reservation_id)

    @app.errorhandler(ConfigurationError)
    def configuration_error(error):
        """Settings row missing."""
        app.logger.error('Configuration error: %s', error)
        return api_error(str(error), 500)

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(get_message('not_found'), 404)

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        _rollback()
        return api_error(get_message('internal_error'), 500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('migrate')
    def migrate_command():
        """Run pending database migrations."""
        with app.app_context():
            if not is_initialized():
                click.echo('Database not initialized. Run "flask init-db" first.', err=True)
                return
            result = run_all_migrations()
        click.echo(f"Applied: {result['applied']}, skipped: {result['skipped']}, "
                   f"failed: {result['failed']}")

    @app.cli.command('export-backup')
    @click.option('--output', '-o', default=None,
                  help='Target file (defaults to BACKUP_FOLDER/canoe_backup_<timestamp>.json)')
    def export_backup_command(output):
        """Write a JSON backup of reservations, settings and client names."""
        from models.backup import create_backup
        from utils.datetime_helpers import get_local_now
        from utils.helpers import backup_filename

        with app.app_context():
            moment = get_local_now()
            content = create_backup(moment)

        if output is None:
            folder = app.config['BACKUP_FOLDER']
            os.makedirs(folder, exist_ok=True)
            output = os.path.join(folder, backup_filename(moment))

        with open(output, 'w', encoding='utf-8') as f:
            f.write(content)
        click.echo(f'Backup written to {output}')

    @app.cli.command('import-backup')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    @click.confirmation_option(prompt='This replaces all reservations. Continue?')
    def import_backup_command(path):
        """Replace all reservations and client names with a JSON backup."""
        from models.backup import import_data

        with open(path, encoding='utf-8') as f:
            payload = f.read()

        with app.app_context():
            result = import_data(payload)

        if result['success']:
            click.echo(result['message'])
        else:
            click.echo(f"Error: {result['message']}", err=True)
            raise SystemExit(1)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        log_dir = app.config.get('LOG_DIR', 'logs')
        os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(os.path.join(log_dir, 'canoe_rentals.log'))
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        # Model modules log through their own module loggers
        logging.getLogger('models').addHandler(file_handler)
        logging.getLogger('models').setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Canoe Rental Manager startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
