import logging
from flask import Flask, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from config import Config
from .extensions import db, login_manager, mail, migrate, cors, celery
from .errors import DocFlowError
from .models import User
from .celery_utils import init_celery

logger = logging.getLogger(__name__)


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def register_error_handlers(app):
    @app.errorhandler(DocFlowError)
    def handle_docflow_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e):
        db.session.rollback()
        logger.error("Database error on %s %s: %s", request.method, request.path, e)
        return jsonify({'error': f'Database error: {e}'}), 500

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({'error': 'Route not found'}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return jsonify({'error': e.description}), e.code
        db.session.rollback()
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({'error': 'Internal server error'}), 500


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    # Initialize Extensions
    db.init_app(app)
    mail.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)

    origins = [o.strip() for o in app.config.get('CORS_ORIGIN', '').split(',') if o.strip()]
    cors.init_app(app, resources={r"/*": {"origins": origins or "*"}}, supports_credentials=True)

    # Initialize Celery
    init_celery(app, celery)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Authentication required'}), 401

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.path)

    register_error_handlers(app)

    # Register Blueprints
    from .blueprints.main import main_bp
    from .blueprints.auth import auth_bp
    from .blueprints.documents import documents_bp
    from .blueprints.directory import directory_bp
    from .blueprints.users import users_bp
    from .blueprints.stats import stats_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(documents_bp, url_prefix='/api')
    app.register_blueprint(directory_bp, url_prefix='/api')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(stats_bp, url_prefix='/api/stats')

    # Create DB Tables
    with app.app_context():
        db.create_all()

    return app
