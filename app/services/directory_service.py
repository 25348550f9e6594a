import logging
from app.extensions import db
from app.models import Department, Division, User
from app.constants import Role, ROLE_ALIASES, SubRole, UserStatus
from app.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def normalize_role(role):
    """Canonical casing for a stored or requested role ('oic' -> 'OfficerInCharge')."""
    if not role:
        return None
    return ROLE_ALIASES.get(str(role).strip().lower(), role)


class DirectoryService:

    # --- DEPARTMENTS ---
    @staticmethod
    def list_departments():
        return [d.name for d in Department.query.order_by(Department.name).all() if d.name]

    @staticmethod
    def get_department(ref):
        """Looks a department up by name, or by id when ``ref`` is numeric."""
        if ref is None:
            return None
        ref = str(ref).strip()
        if ref.isdigit():
            return db.session.get(Department, int(ref))
        return Department.query.filter_by(name=ref).first()

    @staticmethod
    def department_exists(name):
        return bool(name) and Department.query.filter_by(name=name).first() is not None

    @staticmethod
    def create_department(name):
        name = (name or '').strip()
        if not name:
            raise ValidationError("Missing or invalid Department")
        if Department.query.filter_by(name=name).first():
            raise ConflictError("Department already exists")

        dept = Department(name=name)
        db.session.add(dept)
        db.session.commit()
        logger.info("Created department %s", name)
        return {'Department_Id': dept.id, 'Department': dept.name}

    # --- DIVISIONS ---
    @staticmethod
    def list_divisions(department=None):
        query = Division.query
        if department:
            dept = DirectoryService.get_department(department)
            if not dept:
                logger.warning("No divisions found for department: %s", department)
                return []
            query = query.filter_by(department_id=dept.id)
        return [d.name for d in query.order_by(Division.name).all() if d.name]

    @staticmethod
    def find_division(name, department):
        return Division.query.filter_by(name=name, department_id=department.id).first()

    @staticmethod
    def create_division(name, department):
        name = (name or '').strip()
        if not name:
            raise ValidationError("Missing or invalid Division")

        dept = DirectoryService.get_department(department)
        if not dept:
            raise ValidationError("Department not found")
        if DirectoryService.find_division(name, dept):
            raise ConflictError("Division already exists in department")

        division = Division(name=name, department_id=dept.id)
        db.session.add(division)
        db.session.commit()
        logger.info("Created division %s under %s", name, dept.name)
        return {'Division_Id': division.id, 'Division': division.name}

    # --- USERS ---
    @staticmethod
    def resolve_user(user_id):
        user = db.session.get(User, user_id) if user_id is not None else None
        if not user:
            raise NotFoundError("User not found")
        return {
            'department': user.department_name,
            'division': user.division_name,
            'role': user.role,
            'status': user.status,
        }

    @staticmethod
    def admins_of(department):
        """Active Admin accounts of a department (notification recipients)."""
        return (User.query.join(Department, User.department_id == Department.id)
                .filter(Department.name == department,
                        User.role == Role.ADMIN,
                        User.status == UserStatus.ACTIVE)
                .all())

    @staticmethod
    def default_route(user_or_role):
        """Landing page for a user (or bare role string) after login."""
        if isinstance(user_or_role, str):
            role, sub_role = user_or_role, None
        else:
            role, sub_role = user_or_role.role, user_or_role.pre_assigned_role

        sub_role = (sub_role or '').strip().lower()
        role = (normalize_role(role) or '').lower()

        if sub_role == SubRole.RECORDER.lower():
            return '/records'
        if sub_role == SubRole.RELEASER.lower() or role == Role.RELEASER.lower():
            return '/releases'
        if role == Role.SUPER_ADMIN.lower():
            return '/super-admin'
        if role in [r.lower() for r in Role.HEADS]:
            return '/head'
        return '/dashboard'
