from flask import Blueprint, jsonify, request
from app.services import stats_service

stats_bp = Blueprint('stats', __name__)


@stats_bp.route('', methods=['GET'])
def dashboard_stats():
    return jsonify(stats_service.get_dashboard_stats(
        user_id=request.args.get('userId', type=int),
        role=request.args.get('role'),
        department=request.args.get('department'),
    ))


@stats_bp.route('/monthly', methods=['GET'])
def monthly_stats():
    return jsonify(stats_service.get_monthly_totals(
        year=request.args.get('year', type=int),
        user_id=request.args.get('userId', type=int),
        role=request.args.get('role'),
        department=request.args.get('department'),
    ))
