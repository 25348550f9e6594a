from flask import Blueprint, jsonify, request
from app.forms import DepartmentForm, DivisionForm, load_form
from app.services.directory_service import DirectoryService

directory_bp = Blueprint('directory', __name__)


# --- DEPARTMENTS ---
@directory_bp.route('/departments', methods=['GET'])
def list_departments():
    return jsonify(DirectoryService.list_departments())


@directory_bp.route('/departments', methods=['POST'])
def create_department():
    form = load_form(DepartmentForm)
    return jsonify(DirectoryService.create_department(form.Department.data)), 201


# --- DIVISIONS ---
@directory_bp.route('/divisions', methods=['GET'])
def list_divisions():
    return jsonify(DirectoryService.list_divisions(request.args.get('department')))


@directory_bp.route('/divisions', methods=['POST'])
def create_division():
    form = load_form(DivisionForm)
    return jsonify(DirectoryService.create_division(form.Division.data, form.Department.data)), 201
