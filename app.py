import os
import click
from flask import Flask, jsonify
from config import config
from models import db
from routes import register_blueprints

def create_app(config_name=None):
    """Application factory function

    Args:
        config_name (str): Configuration name to use (development, production, testing)

    Returns:
        Flask: Configured Flask application

    Raises:
        RuntimeError: if the store is not configured or not reachable
    """
    app = Flask(__name__)

    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'default')

    # Load configuration
    app.config.from_object(config[config_name])

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        raise RuntimeError("DATABASE_URL is not set; refusing to start without a store")

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Add security headers
    register_security_headers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Initialize services
    initialize_services(app)

    # The store answered in initialize_extensions, so the tick can start now
    if app.config.get('ENABLE_REMINDER_SCHEDULER'):
        from services import reminder_scheduler
        reminder_scheduler.start()

    return app

def initialize_extensions(app):
    """Initialize Flask extensions and confirm the store is reachable"""
    db.init_app(app)

    with app.app_context():
        try:
            db.create_all()
            from services import reminder_store
            reminder_store.ping()
            app.logger.info("Database tables created/verified")
        except Exception as e:
            app.logger.error(f"Store unavailable: {e}")
            raise RuntimeError(f"Store unavailable: {e}") from e

def initialize_services(app):
    """Initialize application services from config"""
    from services import (
        line_service, link_registry, gemini_service,
        reminder_service, reminder_scheduler
    )

    line_service.init_app(app)
    gemini_service.init_app(app)
    link_registry.configure(app.config.get('LINK_CODE_TTL_SECONDS', 300))
    reminder_service.tz_name = app.config.get('REMINDER_TIMEZONE', 'Asia/Tokyo')
    reminder_scheduler.init_app(app, reminder_service)

    if not app.config.get('LINE_CHANNEL_SECRET'):
        app.logger.warning("WARNING: LINE_CHANNEL_SECRET not configured. Webhook calls will be rejected.")

    app.logger.info("Services initialized successfully")

def register_error_handlers(app):
    """Register JSON error handlers for the application"""

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f'Internal server error: {error}')

        # Rollback database session to avoid issues
        db.session.rollback()

        if app.debug:
            return jsonify({'error': str(error)}), 500
        return jsonify({'error': 'Internal server error'}), 500

def register_security_headers(app):
    """Register security headers for all responses"""

    @app.after_request
    def security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

def register_cli_commands(app):
    """Register CLI commands for the application"""

    @app.cli.command('init-db')
    def init_db():
        """Initialize the database"""
        db.create_all()
        print("Database initialized!")

    @app.cli.command('run-tick')
    def run_tick():
        """Run one reminder check now"""
        from services import reminder_scheduler

        result = reminder_scheduler.trigger_now()
        if result is None:
            click.echo("Reminder tick did not complete, see the log.")
            return

        for key, value in result.to_dict().items():
            click.echo(f"{key}: {value}")

# Application factory setup
app = None

def get_app():
    """Get or create the Flask application instance"""
    global app
    if app is None:
        app = create_app()
    return app

# For direct execution or WSGI
if __name__ == "__main__":
    app = get_app()

    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ['true', '1', 'yes']
    port = int(os.environ.get('PORT', 3000))
    host = os.environ.get('HOST', '0.0.0.0')

    print(f"🚀 Starting SUZI server...")
    print(f"📍 Server: http://{host}:{port}")
    print(f"⚙️  Environment: {os.environ.get('FLASK_CONFIG', 'development')}")

    # The reloader would start a second scheduler thread
    app.run(
        host=host,
        port=port,
        debug=debug_mode,
        use_reloader=False,
        threaded=True
    )
