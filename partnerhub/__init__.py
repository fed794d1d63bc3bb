from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from werkzeug.middleware.proxy_fix import ProxyFix
from .config import Config
import logging
from logging.handlers import RotatingFileHandler
import os

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Configure ProxyFix for handling proxy headers
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)

    @app.teardown_appcontext
    def shutdown_session(exception=None):
        db.session.remove()

    with app.app_context():
        # Import models so they are registered on the metadata
        from .models import commission, commission_settings, agent, review, bureau

        from .api.v1 import bp as api_v1_bp
        app.register_blueprint(api_v1_bp)

        register_error_handlers(app)

        # Add CLI commands
        @app.cli.command('init-commission-settings')
        def init_commission_settings():
            """Seed the default commission rate table and split settings."""
            from .models.commission_settings import CommissionSettings

            print('Initializing commission settings...')
            settings = CommissionSettings.initialize_default_settings()
            for key, value in sorted(settings.items()):
                print(f'- {key}: {value}')
            print('Commission settings initialization complete')

        # Set up logging
        if not app.debug and not app.testing:
            log_dir = app.config.get('LOG_DIR', 'logs')
            if not os.path.exists(log_dir):
                os.mkdir(log_dir)
            file_handler = RotatingFileHandler(os.path.join(log_dir, 'partnerhub.log'),
                                             maxBytes=10240, backupCount=10)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s '
                '[in %(pathname)s:%(lineno)d]'
            ))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)
            logging.getLogger('partnerhub').addHandler(file_handler)

            app.logger.setLevel(logging.INFO)
            app.logger.info('Application startup')

        return app

def register_error_handlers(app):
    """Map engine and store errors onto JSON responses"""
    from .errors import NotFoundError, StoreError

    @app.errorhandler(StoreError)
    def handle_store_error(error):
        app.logger.error(f"Store error: {error}")
        return jsonify({'error': 'The operation could not be completed, please try again later'}), 500

    @app.errorhandler(NotFoundError)
    def handle_missing_record(error):
        return jsonify({'error': str(error)}), 404

    @app.errorhandler(ValueError)
    def handle_value_error(error):
        return jsonify({'error': str(error)}), 400

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'Not found'}), 404
