from flask import Blueprint, jsonify, request
from app.forms import UserCreateForm, UserUpdateForm, load_form, was_sent
from app.services.user_service import UserService

users_bp = Blueprint('users', __name__)


@users_bp.route('', methods=['GET'])
def list_users():
    users = UserService.list_users(role=request.args.get('role'), department=request.args.get('department'))
    return jsonify([u.to_dict() for u in users])


@users_bp.route('', methods=['POST'])
def create_user():
    form = load_form(UserCreateForm)
    user = UserService.create_user({
        'id_number': form.ID_Number.data,
        'full_name': form.Full_Name.data,
        'gender': form.Gender.data,
        'email': form.Email.data.strip().lower(),
        'department': form.Department.data,
        'division': form.Division.data,
        'role': form.User_Role.data,
        'username': form.User_Name.data.strip(),
        'password': form.Password.data,
        'active': form.Status.data if was_sent(form.Status) else True,
        'pre_assigned_role': form.pre_assigned_role.data,
    })
    return jsonify(user.to_dict()), 201


@users_bp.route('/<int:user_id>', methods=['PUT'])
def update_user(user_id):
    form = load_form(UserUpdateForm)
    fields = {
        'full_name': form.Full_Name,
        'gender': form.Gender,
        'email': form.Email,
        'department': form.Department,
        'division': form.Division,
        'role': form.User_Role,
        'password': form.Password,
        'active': form.Status,
        'pre_assigned_role': form.pre_assigned_role,
    }
    # Only keys the client actually sent are applied
    data = {key: field.data for key, field in fields.items() if was_sent(field)}
    return jsonify(UserService.update_user(user_id, data).to_dict())


@users_bp.route('/<int:user_id>', methods=['DELETE'])
def delete_user(user_id):
    UserService.delete_user(user_id)
    return jsonify({'success': True})
