from flask import Blueprint, jsonify
from flask_login import login_user, logout_user
from app.forms import LoginForm, load_form
from app.services.user_service import UserService

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['GET'])
def login_help():
    return jsonify({'message': 'Use POST /api/login with JSON body { username, password }'})


@auth_bp.route('/login', methods=['POST'])
def login():
    form = load_form(LoginForm)
    user = UserService.authenticate(form.username.data.strip(), form.password.data)
    login_user(user)
    return jsonify(UserService.login_payload(user))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'success': True})
