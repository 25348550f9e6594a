from flask import Blueprint, jsonify
from sqlalchemy import text
from app.extensions import db

main_bp = Blueprint('main', __name__)

API_INDEX = {
    'login': '/api/login',
    'logout': '/api/logout',
    'users': '/api/users',
    'documents': '/api/documents',
    'forward': '/api/forward',
    'releases': '/api/documents/releases',
    'responses': '/api/documents/responses',
    'departments': '/api/departments',
    'divisions': '/api/divisions',
    'stats': '/api/stats',
    'monthly_stats': '/api/stats/monthly',
}


@main_bp.route('/')
def index():
    return jsonify({
        'message': 'Document Request API',
        'version': '1.0.0',
        'endpoints': {'health': '/health', 'api': API_INDEX},
    })


@main_bp.route('/api')
def api_index():
    return jsonify({'message': 'Document Request API', 'version': '1.0.0', 'endpoints': API_INDEX})


@main_bp.route('/health')
def health():
    db.session.execute(text('SELECT 1'))
    return jsonify({'status': 'ok', 'message': 'API is running'})
