import os
import sqlite3
import click
from flask import Flask, request, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate, upgrade
from flask_cors import CORS
from sqlalchemy import event
from sqlalchemy.engine import Engine
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()


@event.listens_for(Engine, 'connect')
def _set_sqlite_pragmas(dbapi_connection, connection_record):
    """Put SQLite databases in write-ahead-log mode."""
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA journal_mode=WAL')
    cursor.close()


def create_app(config=None):
    app = Flask(__name__)

    is_production = os.getenv('FLASK_ENV') == 'production'

    # Database configuration: a single local SQLite file unless overridden
    database_url = os.getenv('DATABASE_URL')
    if not database_url:
        os.makedirs(app.instance_path, exist_ok=True)
        database_url = 'sqlite:///' + os.path.join(app.instance_path, 'bp.db')

    app.config['SQLALCHEMY_DATABASE_URI'] = database_url
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        'pool_pre_ping': True,
    }
    app.config['AUDIT_LOG_FILE'] = os.getenv('AUDIT_LOG_FILE', 'logs/audit.log')

    # Request size limit (1 MB)
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024

    if config:
        app.config.update(config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=os.path.join(os.path.dirname(app.root_path), 'migrations'))

    # CORS: restrict origins
    allowed_origins = os.getenv('ALLOWED_ORIGINS', '')
    if allowed_origins:
        origins_list = [o.strip() for o in allowed_origins.split(',') if o.strip()]
    elif is_production:
        raise RuntimeError(
            'ALLOWED_ORIGINS environment variable is required in production'
        )
    else:
        # Development: allow localhost variants
        origins_list = [
            'http://localhost:*',
            'http://127.0.0.1:*',
        ]

    CORS(app, resources={
        r"/api/*": {"origins": origins_list},
    })

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        response.headers['Referrer-Policy'] = 'no-referrer'
        return response

    # Validate Content-Type on POST requests
    @app.before_request
    def validate_content_type():
        if request.method == 'POST' and request.path != '/health':
            content_type = request.content_type or ''
            if 'application/json' not in content_type:
                return jsonify({'error': 'Content-Type must be application/json'}), 415

    from bp_tracker.utils.audit_logger import setup_audit_logging
    setup_audit_logging(app)

    from bp_tracker.models import BloodPressureReading  # noqa: F401
    from bp_tracker.store import ReadingStore

    # One store per app; routes look it up instead of using a global handle
    app.extensions['reading_store'] = ReadingStore(db.session)

    from bp_tracker.errors import register_error_handlers
    register_error_handlers(app)

    from bp_tracker.routes.api import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/health')
    def health():
        return {'status': 'healthy'}, 200

    @app.cli.command('init-db')
    def init_db():
        """Create or upgrade the bp_records schema (same as flask db upgrade)."""
        upgrade()
        print(f'Database ready at {app.config["SQLALCHEMY_DATABASE_URI"]}')

    @app.cli.command('log-reading')
    @click.argument('text')
    @click.argument('notes', required=False)
    def log_reading(text, notes):
        """Record a reading from shorthand, e.g. flask log-reading "120/80/72"."""
        from bp_tracker.utils.parser import parse_bp_input
        from bp_tracker.utils.classifier import classify_bp
        from bp_tracker.utils.audit_logger import audit_log

        result = parse_bp_input(text)
        if not result.success:
            raise click.ClickException(', '.join(result.messages))

        parsed = result.data
        reading = app.extensions['reading_store'].create(
            parsed.systolic, parsed.diastolic, parsed.heart_rate, notes=notes
        )
        audit_log('CREATE', 'reading', resource_id=str(reading.id), details={'source': 'cli'})
        category = classify_bp(reading.systolic, reading.diastolic)
        heart_rate = reading.heart_rate if reading.has_heart_rate else 'N/A'
        print(f'BP Recorded: {reading.systolic}/{reading.diastolic}/{heart_rate} {category.label}')
        print(f'   ID: {reading.id} | Time: {reading.to_dict()["recorded_at"]}')

    return app
