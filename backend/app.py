# app.py
from flask import Flask, jsonify, render_template, redirect, url_for, Blueprint
from flask_migrate import upgrade
from sqlalchemy import text
from werkzeug.exceptions import HTTPException
import os
from dotenv import load_dotenv
import importlib
from datetime import datetime

from extensions import db, migrate

# Load environment variables
load_dotenv()

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'migrations')


def get_database_uri():
    """Get database URI with PostgreSQL support"""
    db_url = os.environ.get("DATABASE_URL")

    if db_url:
        if db_url.startswith("postgres://"):
            db_url = db_url.replace("postgres://", "postgresql://", 1)
        return db_url

    return "sqlite:///school_dashboard.db"


def register_blueprints(app):
    """Register all list-page blueprints"""
    app.logger.info("[INIT] Registering blueprints")

    blueprints_to_register = [
        ('classes', 'classes_bp'),
        ('subjects', 'subjects_bp'),
        ('teachers', 'teachers_bp'),
        ('students', 'students_bp'),
    ]

    for module_name, bp_name in blueprints_to_register:
        module = importlib.import_module(f'routes.{module_name}')
        blueprint = getattr(module, bp_name)

        if not isinstance(blueprint, Blueprint):
            raise TypeError(f"routes.{module_name}.{bp_name} is not a Blueprint")

        app.register_blueprint(blueprint)
        app.logger.info(f"[INIT] Registered '{blueprint.name}' at {blueprint.url_prefix}")

    app.logger.info(f"[INIT] {len(app.blueprints)}/{len(blueprints_to_register)} blueprints registered")


def setup_database(app):
    """Setup database tables and handle migrations"""
    with app.app_context():
        # Import all models to ensure they're registered
        import models  # noqa: F401

        is_postgres = app.config['SQLALCHEMY_DATABASE_URI'].startswith('postgresql')

        if is_postgres:
            app.logger.info("[DB] Using PostgreSQL, running migrations")
            try:
                upgrade(directory=MIGRATIONS_DIR)
            except Exception as e:
                app.logger.warning(f"[DB] Migration error, falling back to create_all: {e}")
                db.create_all()
        else:
            app.logger.info("[DB] Using SQLite, creating tables")
            db.create_all()


def register_error_handlers(app):
    """Render HTTP errors as dashboard pages"""

    @app.errorhandler(HTTPException)
    def http_error(error):
        return render_template(
            'errors/error.html',
            code=error.code,
            title=error.name,
            message=error.description,
        ), error.code

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Internal Server Error: {getattr(error, 'original_exception', error)}")
        db.session.rollback()
        return render_template(
            'errors/error.html',
            code=500,
            title='Internal Server Error',
            message='An unexpected error occurred on the server.',
        ), 500


def create_app(config_overrides=None):
    """Create and configure the Flask application"""
    app = Flask(__name__)

    # ============ CONFIGURATION ============
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'school-dashboard-dev-key')
    app.config['SQLALCHEMY_DATABASE_URI'] = get_database_uri()
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['ITEMS_PER_PAGE'] = int(os.environ.get('ITEMS_PER_PAGE', 10))
    app.config['DASHBOARD_ROLE'] = os.environ.get('DASHBOARD_ROLE', 'admin')
    app.config['JWT_SECRET_KEY'] = os.environ.get('JWT_SECRET_KEY')
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Debug mode based on environment
    app.config['DEBUG'] = os.environ.get('FLASK_ENV') == 'development'

    if config_overrides:
        app.config.update(config_overrides)

    if not app.config['JWT_SECRET_KEY']:
        app.config['JWT_SECRET_KEY'] = app.config['SECRET_KEY']

    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('postgresql'):
        app.config.setdefault('SQLALCHEMY_ENGINE_OPTIONS', {
            'pool_recycle': 300,
            'pool_pre_ping': True,
        })

    app.logger.setLevel(app.config['LOG_LEVEL'])

    # ============ INITIALIZE EXTENSIONS ============
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)

    # ============ SETUP DATABASE ============
    setup_database(app)

    # ============ REGISTER BLUEPRINTS ============
    register_blueprints(app)

    # ============ TEMPLATE CONTEXT ============
    from utils.roles import get_current_role
    from utils.pagination import page_url

    app.add_template_global(page_url)

    @app.context_processor
    def inject_dashboard_context():
        return {'role': get_current_role()}

    # ============ BASIC ROUTES ============
    @app.route('/')
    def home():
        return redirect(url_for('classes.list_classes'))

    @app.route('/health')
    def health():
        """Health check endpoint"""
        try:
            db.session.execute(text('SELECT 1'))
            db_status = 'connected'
        except Exception as e:
            app.logger.error(f"Health check database error: {e}")
            db.session.rollback()
            db_status = f'error: {str(e)}'

        return jsonify({
            'status': 'healthy' if db_status == 'connected' else 'degraded',
            'timestamp': datetime.utcnow().isoformat(),
            'database': db_status,
            'service': 'School Dashboard',
            'registered_blueprints': list(app.blueprints.keys())
        })

    # ============ ERROR HANDLERS ============
    register_error_handlers(app)

    # ============ FAVICON HANDLER ============
    @app.route('/favicon.ico')
    def favicon():
        return '', 204

    return app


# ============ MAIN ENTRY POINT ============
if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    application = create_app()
    application.logger.info(f"[START] School Dashboard on http://localhost:{port}")
    application.run(port=port, debug=application.config['DEBUG'])
