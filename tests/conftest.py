import base64
import pytest
from app import create_app
from app.extensions import db
from app.models import Department, Division, User
from app.constants import Role, UserStatus
from config import TestConfig

PDF_BYTES = b'%PDF-1.4 leave request'
PDF_B64 = base64.b64encode(PDF_BYTES).decode('ascii')


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def directory(app):
    """Three departments, each with one division. Returns {department: division}."""
    layout = {
        'Human Resources': 'Recruitment',
        'Finance': 'Accounting',
        'Records Office': 'Incoming',
    }
    for dept_name, division_name in layout.items():
        dept = Department(name=dept_name)
        dept.divisions.append(Division(name=division_name))
        db.session.add(dept)
    db.session.commit()
    return layout


@pytest.fixture
def make_user(directory):
    def _make_user(username, role=Role.EMPLOYEE, department='Finance', password='secret123',
                   status=UserStatus.ACTIVE, pre_assigned_role=None, full_name=None):
        dept = Department.query.filter_by(name=department).first()
        division = Division.query.filter_by(department_id=dept.id).first()
        user = User(
            id_number=f'ID-{username}',
            full_name=full_name or username.replace('_', ' ').title(),
            gender='F',
            email=f'{username}@example.com',
            username=username,
            role=role,
            department_id=dept.id,
            division_id=division.id,
            status=status,
            pre_assigned_role=pre_assigned_role,
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def employee(make_user):
    return make_user('jane_doe', full_name='Jane Doe')


@pytest.fixture
def hr_admin(make_user):
    return make_user('hr_admin', role=Role.ADMIN, department='Human Resources', full_name='HR Admin')


@pytest.fixture
def new_document(client, employee):
    """Posts a document and returns the JSON body."""
    def _new_document(target='Human Resources', doc_type='Leave Request', priority='High', **extra):
        payload = {
            'Type': doc_type,
            'Priority': priority,
            'User_Id': employee.id,
            'Document': PDF_B64,
            'description': 'Annual leave',
            'target_department': target,
        }
        payload.update(extra)
        resp = client.post('/api/documents', json=payload)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()
    return _new_document
