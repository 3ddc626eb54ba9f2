from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
import logging
import os

db = SQLAlchemy()

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    from config import config
    app.config.from_object(config.get(config_name, config['default']))

    from app.logging_config import configure_logging
    configure_logging(app)

    # Initialize extensions
    from extensions import limiter
    db.init_app(app)
    limiter.init_app(app)
    CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

    # Request hooks: request id first so later hooks can log with it
    from app.middleware import init_request_id, init_sanitizer, init_security_headers
    init_request_id(app)
    init_sanitizer(app)
    init_security_headers(app)

    from app.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from app.routes.announcements import announcements_bp
    app.register_blueprint(announcements_bp, url_prefix='/api/announcements')

    from app.cli import register_commands
    register_commands(app)

    with app.app_context():
        from app import models  # noqa: F401  (register tables)
        db.create_all()

    # Health check endpoint
    @app.route('/health')
    def health():
        return {'status': 'healthy', 'service': 'courseware-backend'}, 200

    logger.info('Application created with %s config', config_name)
    return app
