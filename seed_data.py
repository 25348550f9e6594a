from app import create_app
from app.extensions import db
from app.models import User, Department, Division
from app.constants import Role, SubRole, UserStatus

app = create_app()

# Department -> divisions
DIRECTORY = {
    'Records Office': ['Incoming', 'Archives'],
    'Human Resources': ['Recruitment', 'Payroll'],
    'Finance': ['Accounting', 'Budget'],
    'Information Technology': ['Infrastructure', 'Applications'],
}

# (username, full name, role, department, division, sub-role)
ACCOUNTS = [
    ('superadmin', 'System Superadmin', Role.SUPER_ADMIN, 'Information Technology', 'Applications', None),
    ('hr_admin', 'HR Admin', Role.ADMIN, 'Human Resources', 'Recruitment', None),
    ('finance_admin', 'Finance Admin', Role.ADMIN, 'Finance', 'Accounting', None),
    ('hr_head', 'HR Department Head', Role.DEPARTMENT_HEAD, 'Human Resources', 'Recruitment', None),
    ('recorder', 'Records Clerk', Role.EMPLOYEE, 'Records Office', 'Incoming', SubRole.RECORDER),
    ('releaser', 'Records Releaser', Role.RELEASER, 'Records Office', 'Archives', SubRole.RELEASER),
    ('employee', 'Sample Employee', Role.EMPLOYEE, 'Finance', 'Budget', None),
]

with app.app_context():
    print("WARNING: Re-creating database to ensure schema updates...")
    db.drop_all()
    db.create_all()

    print("🏢 Creating Departments & Divisions...")
    departments = {}
    for dept_name, division_names in DIRECTORY.items():
        dept = Department(name=dept_name)
        for division_name in division_names:
            dept.divisions.append(Division(name=division_name))
        db.session.add(dept)
        departments[dept_name] = dept
    db.session.flush()

    print("👤 Creating Users...")
    for username, full_name, role, dept_name, division_name, sub_role in ACCOUNTS:
        dept = departments[dept_name]
        division = next(d for d in dept.divisions if d.name == division_name)
        u = User(
            id_number=f"EMP-{username.upper()}",
            full_name=full_name,
            email=f"{username}@docflow.local",
            username=username,
            role=role,
            department_id=dept.id,
            division_id=division.id,
            status=UserStatus.ACTIVE,
            pre_assigned_role=sub_role,
        )
        u.set_password(f"{username}123")
        db.session.add(u)

    db.session.commit()
    print("🚀 Database Seeded Successfully.")
