import logging
from app.extensions import db
from app.models import User, Department
from app.constants import Role, UserStatus
from app.errors import AuthError, ConflictError, NotFoundError, PersistenceError, ValidationError
from app.services.directory_service import DirectoryService, normalize_role

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def authenticate(username, password):
        """
        Verifies credentials against an active account and returns the user.
        Inactive accounts are treated exactly like unknown usernames.
        """
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = User.query.filter_by(username=username, status=UserStatus.ACTIVE).first()
        if not user:
            raise AuthError("Invalid credentials")

        if not user.password_hash:
            logger.error("User found but password is missing in database: %s", user.username)
            raise PersistenceError("User account error: password not set in database")

        if not user.check_password(password):
            raise AuthError("Invalid credentials")

        return user

    @staticmethod
    def login_payload(user):
        """Normalized user record returned to the client after login."""
        data = user.to_dict()
        data['User_Role'] = normalize_role(user.role) or Role.EMPLOYEE
        data['Default_Route'] = DirectoryService.default_route(user)
        return data

    @staticmethod
    def list_users(role=None, department=None):
        query = User.query
        if role:
            query = query.filter(User.role == role)
        if department:
            query = query.join(Department, User.department_id == Department.id).filter(Department.name == department)
        return query.order_by(User.full_name).all()

    @staticmethod
    def _resolve_affiliation(department_name, division_name):
        dept = DirectoryService.get_department(department_name)
        if not dept:
            raise ValidationError(f"Department not found: {department_name}")
        division = DirectoryService.find_division(division_name, dept)
        if not division:
            raise ValidationError(f"Division not found in department: {division_name}")
        return dept, division

    @staticmethod
    def create_user(data):
        """
        Creates a new user.
        Expects data dictionary with: id_number, full_name, gender, email,
        department, division, role, username, password, active, pre_assigned_role.
        """
        if User.query.filter_by(username=data['username']).first():
            raise ConflictError("Username already exists")

        dept, division = UserService._resolve_affiliation(data['department'], data['division'])

        user = User(
            id_number=data['id_number'],
            full_name=data['full_name'],
            gender=data['gender'],
            email=data['email'],
            username=data['username'],
            role=data['role'],
            department_id=dept.id,
            division_id=division.id,
            status=UserStatus.ACTIVE if data.get('active', True) else UserStatus.INACTIVE,
            pre_assigned_role=data.get('pre_assigned_role') or None,
        )
        user.set_password(data['password'])
        db.session.add(user)
        db.session.commit()
        logger.info("Created user %s (%s) in %s", user.username, user.role, dept.name)
        return user

    @staticmethod
    def update_user(user_id, data):
        """Applies only the keys present in ``data``."""
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")

        if 'department' in data or 'division' in data:
            dept, division = UserService._resolve_affiliation(
                data.get('department') or user.department_name,
                data.get('division') or user.division_name,
            )
            user.department_id = dept.id
            user.division_id = division.id

        if data.get('full_name'):
            user.full_name = data['full_name']
        if data.get('gender'):
            user.gender = data['gender']
        if data.get('email'):
            user.email = data['email']
        if data.get('role'):
            user.role = data['role']
        if data.get('password'):
            user.set_password(data['password'])
        if 'active' in data:
            user.status = UserStatus.ACTIVE if data['active'] else UserStatus.INACTIVE
        if 'pre_assigned_role' in data:
            user.pre_assigned_role = data['pre_assigned_role'] or None

        db.session.commit()
        return user

    @staticmethod
    def delete_user(user_id):
        """Deletes a user, protecting superadmins and document owners."""
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.role == Role.SUPER_ADMIN:
            raise ConflictError("Cannot delete a SuperAdmin.")
        if user.documents.count():
            raise ConflictError("User still owns documents.")

        db.session.delete(user)
        db.session.commit()
        logger.info("Deleted user %s", user_id)
        return True
